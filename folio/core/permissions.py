"""Role-based access control (RBAC) for the application."""

from enum import Enum

from fastapi import HTTPException, status


class Role(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    USER = "user"


# Permission definitions
class Permission(str, Enum):
    """Available permissions in the system."""

    # Own portfolio permissions
    PORTFOLIO_CREATE = "portfolio:create"
    PORTFOLIO_READ = "portfolio:read"
    PORTFOLIO_UPDATE = "portfolio:update"
    PORTFOLIO_DELETE = "portfolio:delete"

    # Permissions over other users' portfolios
    PORTFOLIO_READ_ANY = "portfolio:read_any"
    PORTFOLIO_UPDATE_ANY = "portfolio:update_any"
    PORTFOLIO_DELETE_ANY = "portfolio:delete_any"

    # Editor tooling
    STYLE_COMPOSE = "style:compose"
    FONT_LOAD = "font:load"


# Role-permission mapping
ROLE_PERMISSIONS: dict[Role, set[Permission]] = {
    Role.ADMIN: set(Permission),
    Role.USER: {
        Permission.PORTFOLIO_CREATE,
        Permission.PORTFOLIO_READ,
        Permission.PORTFOLIO_UPDATE,
        Permission.PORTFOLIO_DELETE,
        Permission.STYLE_COMPOSE,
        Permission.FONT_LOAD,
    },
}


def has_permission(role: Role, permission: Permission) -> bool:
    """Check if a role has a specific permission."""
    return permission in ROLE_PERMISSIONS.get(role, set())


def ensure_permission(role: Role | str, permission: Permission) -> None:
    """Raise 403 unless the role grants the permission."""
    try:
        role = Role(role)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User role '{role}' is not authorized to access this route",
        )

    if not has_permission(role, permission):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Permission denied: {permission.value} required",
        )
