# Import and re-export all models so `from orquestra import models` sees every
# table and Base.metadata is complete for create_all and Alembic.

# Import Base from db module
from ..db import Base

# Import all models from their individual files
from .user import User
from .project import Project
from .project_member import ProjectMember
from .task import Task, TaskAssignee
from .task_comment import TaskComment
from .task_history import TaskHistory
from .task_tag import TaskTag, TaskToTag
from .document import Document, DocumentVersion
from .chat_message import ChatMessage
from .notification import Notification

# Ensure all models are available at package level
__all__ = [
    "Base",
    "User",
    "Project",
    "ProjectMember",
    "Task",
    "TaskAssignee",
    "TaskComment",
    "TaskHistory",
    "TaskTag",
    "TaskToTag",
    "Document",
    "DocumentVersion",
    "ChatMessage",
    "Notification",
]
