from camping.core.rbac.models import Role


def can_change_status(role: Role) -> bool:
    return role == Role.ADMIN


def can_manage_users(role: Role) -> bool:
    return role == Role.ADMIN
