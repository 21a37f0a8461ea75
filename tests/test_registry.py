from camping.core.rbac.models import Department, Role
from camping.core.rbac.policy import can_change_status, can_manage_users
from camping.core.rbac.schemas import UserCreate
from camping.core.results import ErrorCode


def _new(name: str, email: str, password: str = "clave123", role: Role = Role.USER) -> UserCreate:
    return UserCreate(name=name, email=email, password=password, department=Department.LIMPIEZA, role=role)


def test_policy_is_admin_only():
    assert can_change_status(Role.ADMIN)
    assert can_manage_users(Role.ADMIN)
    assert not can_change_status(Role.USER)
    assert not can_manage_users(Role.USER)


def test_register_stores_lowercased_email_and_hash(registry):
    result = registry.register(_new("Luis", "Luis@PlayaBrava.com"))
    assert result.ok
    user = result.value
    assert user.email == "luis@playabrava.com"
    assert user.password != "clave123"
    assert registry.version == 1


def test_register_duplicate_email_differing_in_case(registry):
    assert registry.register(_new("Luis", "luis@playabrava.com")).ok
    assert registry.register(_new("Eva", "eva@playabrava.com")).ok

    result = registry.register(_new("Otro Luis", "LUIS@playabrava.com"))
    assert result.error == ErrorCode.DUPLICATE_EMAIL
    assert len(registry.list()) == 2


def test_register_requires_name_and_password(registry):
    result = registry.register(_new("   ", "x@playabrava.com"))
    assert result.error == ErrorCode.INVALID_INPUT
    assert registry.list() == []


def test_authenticate(registry):
    registry.register(_new("Luis", "luis@playabrava.com", password="Clave!1"))

    assert registry.authenticate("LUIS@playabrava.com", "Clave!1").name == "Luis"
    assert registry.authenticate("luis@playabrava.com", "clave!1") is None
    assert registry.authenticate("luis@playabrava.com", "Clave!1 ") is None
    assert registry.authenticate("nadie@playabrava.com", "Clave!1") is None


def test_authenticate_never_matches_other_password(registry):
    registry.register(_new("A", "a@playabrava.com", password="uno"))
    registry.register(_new("B", "b@playabrava.com", password="dos"))
    for email in ("a@playabrava.com", "b@playabrava.com"):
        for password in ("uno", "dos", "", "UNO"):
            user = registry.authenticate(email, password)
            if user is not None:
                assert (email, password) in {("a@playabrava.com", "uno"), ("b@playabrava.com", "dos")}


def test_set_role_by_admin(registry):
    registry.register(_new("Luis", "luis@playabrava.com"))
    result = registry.set_role(Role.ADMIN, "Luis@playabrava.com", Role.ADMIN)
    assert result.ok and result.changed
    assert registry.get("luis@playabrava.com").role == Role.ADMIN


def test_set_role_denied_for_user_role(registry):
    registry.register(_new("Luis", "luis@playabrava.com"))
    version = registry.version
    result = registry.set_role(Role.USER, "luis@playabrava.com", Role.ADMIN)
    assert result.error == ErrorCode.UNAUTHORIZED
    assert registry.get("luis@playabrava.com").role == Role.USER
    assert registry.version == version


def test_set_role_never_touches_super_admin(registry):
    registry.ensure_super_admin("Dirección", "changeme123!")
    result = registry.set_role(Role.ADMIN, "info@playabrava.com", Role.USER)
    assert not result.ok
    assert registry.get("INFO@playabrava.com").role == Role.ADMIN


def test_set_role_unknown_user(registry):
    assert registry.set_role(Role.ADMIN, "nadie@playabrava.com", Role.ADMIN).error == ErrorCode.NOT_FOUND


def test_set_role_same_role_is_noop(registry):
    registry.register(_new("Luis", "luis@playabrava.com"))
    version = registry.version
    result = registry.set_role(Role.ADMIN, "luis@playabrava.com", Role.USER)
    assert result.ok and not result.changed
    assert registry.version == version


def test_registering_super_admin_address_always_gives_admin(registry):
    result = registry.register(_new("Jefe", "Info@PlayaBrava.com", role=Role.USER))
    assert result.value.role == Role.ADMIN


def test_create_user_requires_admin(registry):
    assert registry.create_user(Role.USER, _new("Luis", "luis@playabrava.com")).error == ErrorCode.UNAUTHORIZED
    assert registry.create_user(Role.ADMIN, _new("Luis", "luis@playabrava.com")).ok


def test_ensure_super_admin_seeds_once_and_restores_role(registry):
    assert registry.ensure_super_admin("Dirección", "changeme123!")
    assert not registry.ensure_super_admin("Dirección", "changeme123!")

    registry.get("info@playabrava.com").role = Role.USER
    assert registry.ensure_super_admin("Dirección", "changeme123!")
    assert registry.get("info@playabrava.com").role == Role.ADMIN
    assert registry.authenticate("info@playabrava.com", "changeme123!") is not None
