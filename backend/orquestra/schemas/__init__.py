# Auth schemas
from .auth import (
    SignupRequest,
    LoginRequest,
    UserResponse,
    SignupResponse,
    LoginResponse
)

# Project schemas
from .project import (
    ProjectBase,
    ProjectCreate,
    ProjectUpdate,
    MemberUser,
    ProjectMember,
    MemberAddRequest,
    Project,
    ProjectPermissions
)

# Error body
from .error import ErrorResponse

# Make all schemas available at package level
__all__ = [
    # Auth
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "SignupResponse",
    "LoginResponse",
    # Project
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "MemberUser",
    "ProjectMember",
    "MemberAddRequest",
    "Project",
    "ProjectPermissions",
    # Errors
    "ErrorResponse",
]
