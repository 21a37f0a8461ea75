from __future__ import annotations

import logging
from typing import Iterable

from camping.core.auth.security import hash_password, verify_password
from camping.core.rbac.models import Department, Role, User
from camping.core.rbac.policy import can_manage_users
from camping.core.rbac.schemas import UserCreate
from camping.core.results import ErrorCode, Result

logger = logging.getLogger(__name__)


def _key(email: str) -> str:
    return email.strip().lower()


class UserRegistry:
    """
    Known users keyed by e-mail (case-insensitive).

    One address is the protected super admin: it is always ADMIN and no
    operation can change its role. `version` is bumped on every applied
    mutation so the caller knows when to write the registry back.
    """

    def __init__(self, super_admin_email: str, users: Iterable[User] = (), bcrypt_rounds: int | None = None):
        self.super_admin_email = _key(super_admin_email)
        self.bcrypt_rounds = bcrypt_rounds
        self.version = 0
        self._users: list[User] = []
        self.load(users)

    def load(self, users: Iterable[User]) -> None:
        self._users = [u.model_copy(update={"email": _key(u.email)}) for u in users]

    def list(self) -> list[User]:
        return list(self._users)

    def get(self, email: str) -> User | None:
        key = _key(email)
        for user in self._users:
            if user.email == key:
                return user
        return None

    def is_protected(self, email: str) -> bool:
        return _key(email) == self.super_admin_email

    def register(self, data: UserCreate) -> Result[User]:
        if not data.name.strip() or not data.email.strip() or not data.password:
            return Result.fail(ErrorCode.INVALID_INPUT, "Nombre, email y contraseña son obligatorios")
        if self.get(data.email):
            return Result.fail(ErrorCode.DUPLICATE_EMAIL, "El email ya está registrado")

        role = Role.ADMIN if self.is_protected(data.email) else data.role
        user = User(
            name=data.name.strip(),
            email=_key(data.email),
            password=hash_password(data.password, self.bcrypt_rounds),
            department=data.department,
            role=role,
        )
        self._users.append(user)
        self.version += 1
        return Result.success(user)

    def create_user(self, actor_role: Role, data: UserCreate) -> Result[User]:
        if not can_manage_users(actor_role):
            logger.info("User creation denied for role %s", actor_role.value)
            return Result.fail(ErrorCode.UNAUTHORIZED, "Solo un administrador puede crear usuarios")
        return self.register(data)

    def authenticate(self, email: str, password: str) -> User | None:
        user = self.get(email)
        if not user or not verify_password(password, user.password):
            return None
        return user

    def set_role(self, actor_role: Role, target_email: str, new_role: Role) -> Result[User]:
        if not can_manage_users(actor_role):
            logger.info("Role change on %s denied for role %s", target_email, actor_role.value)
            return Result.fail(ErrorCode.UNAUTHORIZED, "Solo un administrador puede cambiar roles")
        if self.is_protected(target_email):
            logger.info("Role change on protected account %s ignored", target_email)
            return Result.fail(ErrorCode.UNAUTHORIZED, "La cuenta de super administrador no se puede modificar")

        user = self.get(target_email)
        if not user:
            return Result.fail(ErrorCode.NOT_FOUND, "Usuario no encontrado")
        if user.role == new_role:
            return Result.success(user, changed=False)

        user.role = new_role
        self.version += 1
        return Result.success(user)

    def ensure_super_admin(self, name: str, password: str) -> bool:
        """Seed the protected account, or restore its ADMIN role. True if anything changed."""
        user = self.get(self.super_admin_email)
        if user is None:
            self._users.append(User(
                name=name,
                email=self.super_admin_email,
                password=hash_password(password, self.bcrypt_rounds),
                department=Department.DIRECCION,
                role=Role.ADMIN,
            ))
        elif user.role != Role.ADMIN:
            user.role = Role.ADMIN
        else:
            return False
        self.version += 1
        logger.info("Super admin %s seeded", self.super_admin_email)
        return True
