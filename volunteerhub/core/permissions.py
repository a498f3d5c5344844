# File: volunteerhub/core/permissions.py
from volunteerhub.core.exceptions import NotEventOwner, RoleNotAllowed
from volunteerhub.core.principal import Principal
from volunteerhub.models.user import UserRole


def require_role(principal: Principal, *roles: UserRole) -> None:
    """Raise RoleNotAllowed unless the principal has one of the given roles"""
    if principal.role not in roles:
        allowed = ", ".join(role.value for role in roles)
        raise RoleNotAllowed(f"This operation requires one of the roles: {allowed}")


def can_manage_event(principal: Principal, event) -> bool:
    """Event owners and admins can manage an event"""
    return principal.is_admin or event.created_by == principal.user_id


def require_event_manager(principal: Principal, event) -> None:
    if not can_manage_event(principal, event):
        raise NotEventOwner()
