import logging
from sqlalchemy.orm import Session

from .. import models

logger = logging.getLogger(__name__)

PROJECT_ADDITION_TEMPLATE = 'You were added to project "{project_name}"'


class NotificationService:
    """Persists in-app notifications for users."""

    def __init__(self, db: Session):
        self.db = db

    def create_notification(self, user_id: int, content: str) -> models.Notification:
        notification = models.Notification(user_id=user_id, content=content, is_read=False)
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def notify_project_addition(self, user_id: int, project_id: int, project_name: str) -> models.Notification:
        """Tell the user they were added to a project."""
        notification = self.create_notification(
            user_id,
            PROJECT_ADDITION_TEMPLATE.format(project_name=project_name)
        )
        logger.info(f"Notified user {user_id} of addition to project {project_id}")
        return notification
