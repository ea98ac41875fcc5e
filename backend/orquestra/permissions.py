"""
Project-level permission matrix and creator derivation.

Roles are ordered developer < supervisor < tutor < team_leader <
project_manager < admin. Only the project actions are listed here; task,
document and chat permissions belong to their own services.
"""

from typing import Dict, Iterable, Optional

from .enums import ProjectRole, UserRole

PROJECT_PERMISSIONS = (
    "projects:view",
    "projects:create",
    "projects:edit",
    "projects:delete",
    "projects:add_members",
    "projects:remove_members",
)

ROLE_PERMISSIONS: Dict[str, Dict[str, bool]] = {
    UserRole.DEVELOPER.value: {
        "projects:view": True,
        "projects:create": False,
        "projects:edit": False,
        "projects:delete": False,
        "projects:add_members": False,
        "projects:remove_members": False,
    },
    UserRole.SUPERVISOR.value: {
        "projects:view": True,
        "projects:create": False,
        "projects:edit": False,
        "projects:delete": False,
        "projects:add_members": False,
        "projects:remove_members": False,
    },
    UserRole.TUTOR.value: {
        "projects:view": True,
        "projects:create": False,
        "projects:edit": False,
        "projects:delete": False,
        "projects:add_members": False,
        "projects:remove_members": False,
    },
    UserRole.TEAM_LEADER.value: {
        "projects:view": True,
        "projects:create": True,
        "projects:edit": True,
        "projects:delete": False,
        "projects:add_members": True,
        "projects:remove_members": False,
    },
    UserRole.PROJECT_MANAGER.value: {
        "projects:view": True,
        "projects:create": True,
        "projects:edit": True,
        "projects:delete": True,
        "projects:add_members": True,
        "projects:remove_members": True,
    },
    UserRole.ADMIN.value: {
        "projects:view": True,
        "projects:create": True,
        "projects:edit": True,
        "projects:delete": True,
        "projects:add_members": True,
        "projects:remove_members": True,
    },
}


def has_permission(role: Optional[str], permission: str) -> bool:
    """Unknown roles and unknown permissions are denied."""
    if not role or not permission:
        return False
    return ROLE_PERMISSIONS.get(role, {}).get(permission) is True


def get_role_permissions(role: Optional[str]) -> Dict[str, bool]:
    return {permission: has_permission(role, permission) for permission in PROJECT_PERMISSIONS}


def get_creator(members: Iterable) -> Optional[object]:
    """
    Return the project's derived creator.

    The creator is the ``project_manager`` member with the earliest
    ``joined_at``; equal timestamps fall back to the lowest membership id, so
    the result does not depend on the order of ``members``. Returns None when
    no member holds the ``project_manager`` role.
    """
    managers = [m for m in members if m.role == ProjectRole.PROJECT_MANAGER.value]
    if not managers:
        return None
    return min(managers, key=lambda m: (m.joined_at, m.id))
