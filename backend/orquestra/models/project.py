from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..db import Base


class Project(Base):
    """
    Top-level unit of work: owns tasks, tags, documents, chat and members.

    None of the child foreign keys cascade in the database, so deleting a
    project goes through ProjectService.delete_project, which removes the
    dependent rows leaves-first.
    """
    __tablename__ = "projects"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    members = relationship(
        "ProjectMember",
        back_populates="project",
        order_by="[ProjectMember.joined_at, ProjectMember.id]",
    )
    tasks = relationship("Task", back_populates="project")
    documents = relationship("Document", back_populates="project")
