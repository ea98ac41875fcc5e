from typing import List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..exceptions import NotFoundError
from .membership_service import PROJECT_NOT_FOUND

logger = logging.getLogger(__name__)


class MemberService:
    """
    Add, remove and list project members.

    ``notifier`` is any object with
    ``notify_project_addition(user_id, project_id, project_name)``. It is
    called after a new membership is committed; whatever it raises is logged
    and dropped so the add itself still succeeds.
    """

    def __init__(self, db: Session, notifier=None):
        self.db = db
        self.notifier = notifier

    def list_members(self, project_id: int) -> List[models.ProjectMember]:
        return self.db.query(models.ProjectMember).options(
            joinedload(models.ProjectMember.user)
        ).filter(
            models.ProjectMember.project_id == project_id
        ).order_by(models.ProjectMember.joined_at, models.ProjectMember.id).all()

    def add_member(self, project_id: int, user_id: int, role) -> models.ProjectMember:
        """
        Add the user to the project, or change their role if already a member.

        Re-adding with the same role returns the existing row untouched.
        """
        role = getattr(role, "value", role)

        project = self.db.get(models.Project, project_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND)
        if self.db.get(models.User, user_id) is None:
            raise NotFoundError("User not found")

        existing = self.db.query(models.ProjectMember).filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id
        ).first()

        if existing is not None:
            if existing.role == role:
                return existing
            previous_role = existing.role
            existing.role = role
            self._commit(f"Failed to change role of user {user_id} in project {project_id}")
            self.db.refresh(existing)
            logger.info(f"User {user_id} role in project {project_id} changed {previous_role} -> {role}")
            return existing

        member = models.ProjectMember(project_id=project_id, user_id=user_id, role=role)
        self.db.add(member)
        self._commit(f"Failed to add user {user_id} to project {project_id}")
        self.db.refresh(member)
        logger.info(f"User {user_id} added to project {project_id} as {role}")

        self._notify_addition(user_id, project)
        return member

    def remove_member(self, project_id: int, user_id: int) -> None:
        """Delete the membership; a membership that does not exist is an error."""
        deleted = self.db.query(models.ProjectMember).filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id
        ).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundError("Member not found")

        self._commit(f"Failed to remove user {user_id} from project {project_id}")
        logger.info(f"User {user_id} removed from project {project_id}")

    def _commit(self, failure_message: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(failure_message)
            raise

    def _notify_addition(self, user_id: int, project: models.Project) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify_project_addition(user_id, project.id, project.name)
        except Exception:
            logger.exception(
                f"Project addition notification failed for user {user_id} on project {project.id}"
            )
