from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Path, Query, Response, status

from .. import models, schemas
from ..dependencies import (
    get_current_user,
    require_admin,
    require_project_member,
    get_membership_service,
    get_project_service,
    get_member_service,
)
from ..services.membership_service import MembershipService
from ..services.project_service import ProjectService
from ..services.member_service import MemberService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    responses={404: {"model": schemas.ErrorResponse, "description": "Not found"}},
)


@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project: schemas.ProjectCreate,
    current_user: models.User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Create a project; the caller becomes its project manager"""
    created = projects.create_project(project, current_user.id)
    return schemas.Project.from_orm_project(created)


@router.get("", response_model=List[schemas.Project])
def list_projects(
    user_id: Optional[int] = Query(None, alias="userId"),
    current_user: models.User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """List projects, optionally only those `userId` is a member of"""
    return [schemas.Project.from_orm_project(p) for p in projects.list_projects(user_id=user_id)]


@router.get("/{projectId}", response_model=schemas.Project)
def get_project(
    project_id: int = Path(..., alias="projectId"),
    current_user: models.User = Depends(require_project_member),
    projects: ProjectService = Depends(get_project_service),
):
    """Project with its members and derived creator"""
    return schemas.Project.from_orm_project(projects.get_project_or_404(project_id))


@router.put("/{projectId}", response_model=schemas.Project)
def update_project(
    data: schemas.ProjectUpdate,
    project_id: int = Path(..., alias="projectId"),
    current_user: models.User = Depends(require_project_member),
    projects: ProjectService = Depends(get_project_service),
):
    updated = projects.update_project(project_id, data)
    return schemas.Project.from_orm_project(updated)


@router.delete("/{projectId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int = Path(..., alias="projectId"),
    current_user: models.User = Depends(get_current_user),
    membership: MembershipService = Depends(get_membership_service),
    projects: ProjectService = Depends(get_project_service),
):
    """Delete the project and everything in it. Creator or global admin only."""
    decision = membership.can_delete_project(project_id, current_user.id, current_user.role)
    if not decision.allowed:
        logger.info(f"User {current_user.id} denied delete of project {project_id}: {decision.reason}")
    decision.raise_for_denial()

    projects.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{projectId}/force", status_code=status.HTTP_204_NO_CONTENT)
def force_delete_project(
    project_id: int = Path(..., alias="projectId"),
    admin: models.User = Depends(require_admin),
    projects: ProjectService = Depends(get_project_service),
):
    """Delete any project regardless of membership. Global admin only."""
    logger.warning(f"Admin {admin.id} force-deleting project {project_id}")
    projects.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{projectId}/members", response_model=List[schemas.ProjectMember])
def list_members(
    project_id: int = Path(..., alias="projectId"),
    current_user: models.User = Depends(require_project_member),
    members: MemberService = Depends(get_member_service),
):
    return members.list_members(project_id)


@router.post("/{projectId}/members", response_model=schemas.ProjectMember, status_code=status.HTTP_201_CREATED)
def add_member(
    data: schemas.MemberAddRequest,
    project_id: int = Path(..., alias="projectId"),
    current_user: models.User = Depends(require_project_member),
    members: MemberService = Depends(get_member_service),
):
    """Add a member, or change the role of an existing one"""
    return members.add_member(project_id, data.user_id, data.role)


@router.delete("/{projectId}/members/{userId}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    project_id: int = Path(..., alias="projectId"),
    user_id: int = Path(..., alias="userId"),
    current_user: models.User = Depends(require_project_member),
    members: MemberService = Depends(get_member_service),
):
    members.remove_member(project_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{projectId}/permissions", response_model=schemas.ProjectPermissions)
def get_permissions(
    project_id: int = Path(..., alias="projectId"),
    current_user: models.User = Depends(require_project_member),
    membership: MembershipService = Depends(get_membership_service),
):
    """What the caller may do in this project"""
    return membership.get_member_permissions(project_id, current_user)
