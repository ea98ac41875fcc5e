from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from ..enums import ProjectRole
from ..permissions import get_creator


def _empty_to_none(value):
    # An empty description means "no description", not a too-short one.
    # Whitespace is content and goes through the length check.
    if value == "":
        return None
    return value


class ProjectBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=150)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)

    @field_validator("description", mode="before")
    @classmethod
    def empty_description_is_none(cls, value):
        return _empty_to_none(value)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(ProjectBase):
    """Same rules as create. A description left out of the payload is kept."""
    pass


class MemberUser(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class ProjectMember(BaseModel):
    id: int
    project_id: int
    user_id: int
    role: str
    joined_at: datetime
    user: MemberUser

    model_config = {"from_attributes": True}


class MemberAddRequest(BaseModel):
    user_id: int = Field(..., gt=0, validation_alias=AliasChoices("user_id", "userId"))
    role: ProjectRole


class Project(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    members: List[ProjectMember] = []
    creator: Optional[ProjectMember] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_orm_project(cls, project) -> "Project":
        """Build the response and attach the derived creator."""
        response = cls.model_validate(project)
        creator = get_creator(project.members)
        if creator is not None:
            response.creator = ProjectMember.model_validate(creator)
        return response


class ProjectPermissions(BaseModel):
    project_id: int
    role: Optional[str] = None
    is_creator: bool
    can_delete: bool
    permissions: dict[str, bool]
