"""
Translation between stored shapes and domain records.

Everything read from a storage medium goes through here, so the core never
sees a malformed enum value or a naive datetime. Unmapped enum strings fall
back to a fixed default:

    status      -> Pendiente
    priority    -> Media
    category    -> Parcelas
    department  -> Recepción
    role        -> USER

Records that cannot be mapped at all (no id, no e-mail, not an object) are
skipped by `map_records` and logged, so one bad entry never empties a load.
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

from camping.core.incidents.models import (
    AIAnalysis, Category, Comment, Incident, Priority, Status, StatusHistoryEntry,
)
from camping.core.rbac.models import Department, Role, User
from camping.db.models import IncidenciaRow, UsuarioRow

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
R = TypeVar("R")


def parse_enum(enum_cls: type[E], raw: Any, default: E) -> E:
    """Accepts an enum member, its value or its name, ignoring case and outer blanks."""
    if isinstance(raw, enum_cls):
        return raw
    if raw is None:
        return default
    text = str(raw).strip().casefold()
    for member in enum_cls:
        if text in (str(member.value).casefold(), member.name.casefold()):
            return member
    logger.warning("Unmapped %s value %r, using %s", enum_cls.__name__, raw, default.value)
    return default


def parse_datetime(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        value = raw
    elif raw:
        value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    else:
        value = datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def comment_from_record(data: dict) -> Comment:
    return Comment(
        id=str(data.get("id", "")),
        author=data.get("author") or "",
        text=data.get("text") or "",
        timestamp=parse_datetime(data.get("timestamp")),
        is_ai_generated=bool(data.get("is_ai_generated", False)),
    )


def history_from_record(data: dict) -> StatusHistoryEntry:
    return StatusHistoryEntry(
        id=str(data.get("id", "")),
        previous_status=parse_enum(Status, data.get("previous_status"), Status.PENDIENTE),
        new_status=parse_enum(Status, data.get("new_status"), Status.PENDIENTE),
        changed_by=data.get("changed_by") or "",
        timestamp=parse_datetime(data.get("timestamp")),
    )


def incident_from_record(data: dict) -> Incident:
    department = data.get("reporter_department")
    analysis = data.get("ai_analysis")
    created_at = parse_datetime(data.get("created_at"))
    return Incident(
        id=str(data["id"]),
        title=data.get("title") or "",
        description=data.get("description") or "",
        location=data.get("location") or "",
        priority=parse_enum(Priority, data.get("priority"), Priority.MEDIA),
        status=parse_enum(Status, data.get("status"), Status.PENDIENTE),
        category=parse_enum(Category, data.get("category"), Category.PARCELAS),
        created_at=created_at,
        updated_at=parse_datetime(data.get("updated_at") or created_at),
        reporter=data.get("reporter") or "",
        reporter_department=parse_enum(Department, department, Department.RECEPCION) if department else None,
        comments=[comment_from_record(c) for c in data.get("comments") or []],
        status_history=[history_from_record(h) for h in data.get("status_history") or []],
        ai_analysis=AIAnalysis.model_validate(analysis) if analysis else None,
    )


def user_from_record(data: dict) -> User:
    return User(
        name=data.get("name") or "",
        email=str(data["email"]).strip().lower(),
        password=data.get("password") or "",
        department=parse_enum(Department, data.get("department"), Department.RECEPCION),
        role=parse_enum(Role, data.get("role"), Role.USER),
    )


def incident_to_row(incident: Incident, position: int) -> IncidenciaRow:
    return IncidenciaRow(
        id=incident.id,
        titulo=incident.title,
        descripcion=incident.description,
        ubicacion=incident.location,
        prioridad=incident.priority.value,
        estado=incident.status.value,
        categoria=incident.category.value,
        reportado_por=incident.reporter,
        departamento=incident.reporter_department.value if incident.reporter_department else None,
        comentarios=[c.model_dump(mode="json") for c in incident.comments],
        historial_estados=[h.model_dump(mode="json") for h in incident.status_history],
        analisis_ia=incident.ai_analysis.model_dump(mode="json") if incident.ai_analysis else None,
        created_at=incident.created_at,
        updated_at=incident.updated_at,
        posicion=position,
    )


def incident_from_row(row: IncidenciaRow) -> Incident:
    return incident_from_record({
        "id": row.id,
        "title": row.titulo,
        "description": row.descripcion,
        "location": row.ubicacion,
        "priority": row.prioridad,
        "status": row.estado,
        "category": row.categoria,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
        "reporter": row.reportado_por,
        "reporter_department": row.departamento,
        "comments": row.comentarios,
        "status_history": row.historial_estados,
        "ai_analysis": row.analisis_ia,
    })


def user_to_row(user: User) -> UsuarioRow:
    return UsuarioRow(
        email=user.email,
        nombre=user.name,
        password=user.password,
        departamento=user.department.value,
        rol=user.role.value,
    )


def user_from_row(row: UsuarioRow) -> User:
    return user_from_record({
        "name": row.nombre,
        "email": row.email,
        "password": row.password,
        "department": row.departamento,
        "role": row.rol,
    })


def map_records(records: Iterable[Any], mapper: Callable[[Any], R], kind: str) -> list[R]:
    mapped = []
    for record in records:
        try:
            mapped.append(mapper(record))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Skipping unreadable stored %s: %r", kind, e)
    return mapped
