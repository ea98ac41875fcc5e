from datetime import datetime, timezone
from typing import Dict, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from .. import models
from ..enums import ProjectRole
from ..exceptions import NotFoundError
from ..schemas import ProjectCreate, ProjectUpdate
from .membership_service import PROJECT_NOT_FOUND

logger = logging.getLogger(__name__)

# Deletion order of ProjectService.delete_project, leaves first
CASCADE_TABLES = (
    "task_comments",
    "task_history",
    "task_to_tags",
    "task_assignees",
    "tasks",
    "task_tags",
    "document_versions",
    "documents",
    "chat_messages",
    "project_members",
    "projects",
)


class ProjectService:
    """Create, read, update and delete projects."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Project).options(
            selectinload(models.Project.members).joinedload(models.ProjectMember.user)
        )

    def create_project(self, data: ProjectCreate, creator_id: int) -> models.Project:
        """
        Insert the project and make the creator its project manager.

        Both rows are written in the same transaction.
        """
        project = models.Project(name=data.name, description=data.description)
        project.members.append(
            models.ProjectMember(user_id=creator_id, role=ProjectRole.PROJECT_MANAGER.value)
        )

        try:
            self.db.add(project)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to create project {data.name!r} for user {creator_id}")
            raise

        logger.info(f"Created project {project.id} with creator {creator_id}")
        return self.get_project_or_404(project.id)

    def get_project(self, project_id: int) -> Optional[models.Project]:
        return self._query().filter(models.Project.id == project_id).first()

    def get_project_or_404(self, project_id: int) -> models.Project:
        project = self.get_project(project_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND)
        return project

    def list_projects(self, user_id: Optional[int] = None) -> List[models.Project]:
        """All projects, or only those the given user is a member of."""
        query = self._query()
        if user_id is not None:
            query = query.filter(
                models.Project.members.any(models.ProjectMember.user_id == user_id)
            )
        return query.order_by(models.Project.id).all()

    def update_project(self, project_id: int, data: ProjectUpdate) -> models.Project:
        project = self.get_project_or_404(project_id)

        project.name = data.name
        if "description" in data.model_fields_set:
            project.description = data.description
        project.updated_at = datetime.now(timezone.utc)

        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Failed to update project {project_id}")
            raise

        self.db.refresh(project)
        return project

    def delete_project(self, project_id: int) -> Dict[str, int]:
        """
        Delete a project together with every row that references it.

        Foreign keys do not cascade, so rows go leaves-first:
        task children, tasks, tags, document versions, documents,
        chat messages, memberships, then the project. All steps run in one
        transaction; a failure rolls everything back. Missing dependents are
        skipped. Raises NotFoundError when the project row itself is gone.

        Returns the number of rows removed per table.
        """
        db = self.db
        removed: Dict[str, int] = dict.fromkeys(CASCADE_TABLES, 0)

        def count(table: str, rows: int) -> None:
            removed[table] += rows

        try:
            task_ids = [
                row.id for row in db.query(models.Task.id).filter(models.Task.project_id == project_id).all()
            ]
            for task_id in task_ids:
                count("task_comments", db.query(models.TaskComment).filter(
                    models.TaskComment.task_id == task_id
                ).delete(synchronize_session=False))
                count("task_history", db.query(models.TaskHistory).filter(
                    models.TaskHistory.task_id == task_id
                ).delete(synchronize_session=False))
                count("task_to_tags", db.query(models.TaskToTag).filter(
                    models.TaskToTag.task_id == task_id
                ).delete(synchronize_session=False))
                count("task_assignees", db.query(models.TaskAssignee).filter(
                    models.TaskAssignee.task_id == task_id
                ).delete(synchronize_session=False))

            count("tasks", db.query(models.Task).filter(
                models.Task.project_id == project_id
            ).delete(synchronize_session=False))

            # Tag definitions can go once no task links to them
            count("task_tags", db.query(models.TaskTag).filter(
                models.TaskTag.project_id == project_id
            ).delete(synchronize_session=False))

            document_ids = [
                row.id for row in db.query(models.Document.id).filter(models.Document.project_id == project_id).all()
            ]
            for document_id in document_ids:
                count("document_versions", db.query(models.DocumentVersion).filter(
                    models.DocumentVersion.document_id == document_id
                ).delete(synchronize_session=False))
            count("documents", db.query(models.Document).filter(
                models.Document.project_id == project_id
            ).delete(synchronize_session=False))

            count("chat_messages", db.query(models.ChatMessage).filter(
                models.ChatMessage.project_id == project_id
            ).delete(synchronize_session=False))

            count("project_members", db.query(models.ProjectMember).filter(
                models.ProjectMember.project_id == project_id
            ).delete(synchronize_session=False))

            deleted = db.query(models.Project).filter(
                models.Project.id == project_id
            ).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError(PROJECT_NOT_FOUND)
            count("projects", deleted)

            db.commit()
        except NotFoundError:
            db.rollback()
            raise
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Cascading delete of project {project_id} failed; rolled back")
            raise

        logger.info(f"Deleted project {project_id}: {removed}")
        return removed
