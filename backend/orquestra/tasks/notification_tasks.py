import logging

from orquestra.core.celery import celery_app
from orquestra.db import SessionLocal
from orquestra.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


@celery_app.task(bind=True)
def send_project_addition_notification(self, user_id: int, project_id: int, project_name: str) -> dict:
    """
    Persist the "you were added to project X" notification

    Args:
        user_id: User who was added
        project_id: Project the user joined
        project_name: Name shown in the notification text

    Returns:
        Dictionary with the created notification id
    """
    db = SessionLocal()
    try:
        notification = NotificationService(db).notify_project_addition(user_id, project_id, project_name)
        return {"notification_id": notification.id, "user_id": user_id, "project_id": project_id}
    except Exception as exc:
        db.rollback()
        logger.error(f"Task {self.request.id}: notification for user {user_id} failed: {exc}")
        raise
    finally:
        db.close()


def dispatch_project_addition_notification(user_id: int, project_id: int, project_name: str) -> str:
    """
    Queue the project addition notification on the Celery worker

    Returns:
        Task ID for tracking
    """
    task = send_project_addition_notification.delay(user_id, project_id, project_name)
    logger.info(f"Dispatched notification task {task.id} for user {user_id} on project {project_id}")
    return task.id


class CeleryNotificationDispatcher:
    """Notifier handed to MemberService; queues work and returns immediately."""

    def notify_project_addition(self, user_id: int, project_id: int, project_name: str) -> str:
        return dispatch_project_addition_notification(user_id, project_id, project_name)
