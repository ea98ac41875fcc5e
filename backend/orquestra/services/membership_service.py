from dataclasses import dataclass
from typing import Optional
import logging

from sqlalchemy.orm import Session

from .. import models
from ..enums import UserRole
from ..exceptions import NotFoundError, PermissionDeniedError
from ..permissions import get_creator, get_role_permissions
from ..schemas import ProjectPermissions

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found"
NOT_A_MEMBER = "Access denied: user is not a member of this project"
CANNOT_VERIFY = "Cannot verify permissions: project has no project manager"
NOT_CREATOR = "Only the project creator may delete it"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an authorization check. Denials carry a reason and status."""
    allowed: bool
    reason: Optional[str] = None
    status_code: int = 200

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str, status_code: int = 403) -> "AccessDecision":
        return cls(allowed=False, reason=reason, status_code=status_code)

    def raise_for_denial(self) -> None:
        if self.allowed:
            return
        if self.status_code == 404:
            raise NotFoundError(self.reason)
        raise PermissionDeniedError(self.reason)


class MembershipService:
    """Answers who may act on a project. Read-only."""

    def __init__(self, db: Session):
        self.db = db

    def is_project_member(self, project_id, user_id) -> bool:
        """
        Check whether any membership row links the user to the project.

        Ids that cannot be read as integers give False instead of an error.
        """
        try:
            project_id = int(project_id)
            user_id = int(user_id)
        except (TypeError, ValueError):
            logger.warning(f"Membership check with non-numeric ids project={project_id!r} user={user_id!r}")
            return False

        member = self.db.query(models.ProjectMember.id).filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id
        ).first()
        return member is not None

    def project_exists(self, project_id: int) -> bool:
        return self.db.query(models.Project.id).filter(models.Project.id == project_id).first() is not None

    def get_membership(self, project_id: int, user_id: int) -> Optional[models.ProjectMember]:
        return self.db.query(models.ProjectMember).filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id
        ).first()

    def can_delete_project(self, project_id: int, user_id: int, user_role: Optional[str]) -> AccessDecision:
        """
        Decide whether the user may delete the project.

        Checked in order: global admin, project exists, caller is a member,
        project has a derived creator, caller is that creator.
        """
        if user_role == UserRole.ADMIN.value:
            return AccessDecision.allow()

        project = self.db.get(models.Project, project_id)
        if project is None:
            return AccessDecision.deny(PROJECT_NOT_FOUND, status_code=404)

        if not self.is_project_member(project_id, user_id):
            return AccessDecision.deny(NOT_A_MEMBER)

        creator = get_creator(project.members)
        if creator is None:
            logger.warning(f"Project {project_id} has no project_manager member; delete denied for user {user_id}")
            return AccessDecision.deny(CANNOT_VERIFY)

        if creator.user_id == user_id:
            return AccessDecision.allow()

        return AccessDecision.deny(NOT_CREATOR)

    def get_member_permissions(self, project_id: int, user: models.User) -> ProjectPermissions:
        """Project-level permissions of the user, by project role (admin row for global admins)."""
        project = self.db.get(models.Project, project_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND)

        membership = self.get_membership(project_id, user.id)
        role = membership.role if membership else None
        creator = get_creator(project.members)

        return ProjectPermissions(
            project_id=project_id,
            role=role,
            is_creator=creator is not None and creator.user_id == user.id,
            can_delete=self.can_delete_project(project_id, user.id, user.role).allowed,
            permissions=get_role_permissions(UserRole.ADMIN.value if user.is_admin else role),
        )
