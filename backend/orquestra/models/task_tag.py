from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..db import Base


class TaskTag(Base):
    """Tag definition owned by a project."""
    __tablename__ = "task_tags"
    
    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    color = Column(String(20), nullable=True)
    
    task_links = relationship("TaskToTag", back_populates="tag")

    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_task_tags_project_name"),
    )


class TaskToTag(Base):
    """Junction row attaching a tag to a task."""
    __tablename__ = "task_to_tags"

    task_id = Column(Integer, ForeignKey("tasks.id"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("task_tags.id"), primary_key=True)

    task = relationship("Task", back_populates="tag_links")
    tag = relationship("TaskTag", back_populates="task_links")
