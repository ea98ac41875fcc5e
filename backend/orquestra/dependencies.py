from fastapi import Depends, Path
from sqlalchemy.orm import Session

# Re-export database dependency
from .db import get_db

# Re-export authentication dependencies
from .auth import get_current_user, require_admin

from . import models
from .exceptions import NotFoundError, PermissionDeniedError
from .services.membership_service import MembershipService, NOT_A_MEMBER, PROJECT_NOT_FOUND
from .services.project_service import ProjectService
from .services.member_service import MemberService
from .tasks.notification_tasks import CeleryNotificationDispatcher


def get_notification_dispatcher() -> CeleryNotificationDispatcher:
    return CeleryNotificationDispatcher()


def get_membership_service(db: Session = Depends(get_db)) -> MembershipService:
    return MembershipService(db)


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


def get_member_service(
    db: Session = Depends(get_db),
    notifier=Depends(get_notification_dispatcher),
) -> MemberService:
    return MemberService(db, notifier=notifier)


def require_project_member(
    project_id: str = Path(..., alias="projectId"),
    current_user: models.User = Depends(get_current_user),
    membership: MembershipService = Depends(get_membership_service),
) -> models.User:
    """
    Gate for routes under /projects/{projectId}.

    The path id is taken as text so that a non-numeric id reaches the
    membership check and is refused there like any non-member. A numeric id
    with no project behind it is a 404.
    """
    if membership.is_project_member(project_id, current_user.id):
        return current_user
    try:
        numeric_id = int(project_id)
    except ValueError:
        raise PermissionDeniedError(NOT_A_MEMBER)
    if not membership.project_exists(numeric_id):
        raise NotFoundError(PROJECT_NOT_FOUND)
    raise PermissionDeniedError(NOT_A_MEMBER)
