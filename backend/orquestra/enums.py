from enum import Enum

class UserRole(str, Enum):
    ADMIN = "admin"
    PROJECT_MANAGER = "project_manager"
    TEAM_LEADER = "team_leader"
    TUTOR = "tutor"
    SUPERVISOR = "supervisor"
    DEVELOPER = "developer"

class ProjectRole(str, Enum):
    """Roles a user may be given inside a single project."""
    PROJECT_MANAGER = "project_manager"
    TEAM_LEADER = "team_leader"
    TUTOR = "tutor"
    SUPERVISOR = "supervisor"
    DEVELOPER = "developer"

class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"

class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
