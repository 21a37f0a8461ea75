from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable

from camping.core.incidents.models import Comment, Incident, Status, StatusHistoryEntry
from camping.core.incidents.schemas import IncidentCreate
from camping.core.rbac.models import Department, User
from camping.core.rbac.policy import can_change_status
from camping.core.results import ErrorCode, Result
from camping.db.base import utcnow

logger = logging.getLogger(__name__)

ALL = "ALL"
DEFAULT_TITLE = "Nueva Incidencia"


class IncidentStore:
    """
    In-memory incident collection, newest first.

    The store is the only writer of comments and status history. Every
    applied mutation bumps `version`; rejected or no-op calls leave both
    the snapshot and the version untouched.
    """

    def __init__(self, incidents: Iterable[Incident] = (), clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self.version = 0
        self._incidents: list[Incident] = []
        self.load(incidents)

    def load(self, incidents: Iterable[Incident]) -> None:
        self._incidents = list(incidents)

    def list(self) -> list[Incident]:
        return list(self._incidents)

    def get(self, incident_id: str) -> Result[Incident]:
        for incident in self._incidents:
            if incident.id == incident_id:
                return Result.success(incident, changed=False)
        return Result.fail(ErrorCode.NOT_FOUND, f"Incidencia {incident_id} no encontrada")

    def _next_id(self, now: datetime) -> str:
        prefix = f"INC-{now.year}-"
        taken = {i.id for i in self._incidents}
        seq = sum(1 for i in self._incidents if i.id.startswith(prefix)) + 1
        while f"{prefix}{seq:03d}" in taken:
            seq += 1
        return f"{prefix}{seq:03d}"

    def _touch(self, incident: Incident, now: datetime) -> None:
        incident.updated_at = max(now, incident.updated_at)
        self.version += 1

    def create(
        self,
        data: IncidentCreate,
        reporter: str,
        reporter_department: Department | None = None,
    ) -> Result[Incident]:
        if not data.description.strip() or not data.location.strip():
            return Result.fail(ErrorCode.INVALID_INPUT, "Descripción y ubicación son obligatorias")

        now = self._clock()
        incident = Incident(
            id=self._next_id(now),
            title=data.title.strip() or DEFAULT_TITLE,
            description=data.description.strip(),
            location=data.location.strip(),
            priority=data.priority,
            status=Status.PENDIENTE,
            category=data.category,
            created_at=now,
            updated_at=now,
            reporter=reporter,
            reporter_department=reporter_department,
            ai_analysis=data.ai_analysis,
        )
        self._incidents.insert(0, incident)
        self.version += 1
        return Result.success(incident)

    def change_status(self, incident_id: str, new_status: Status, actor: User) -> Result[Incident]:
        found = self.get(incident_id)
        if not found.ok:
            return found
        incident = found.value

        if not can_change_status(actor.role):
            logger.info("Status change on %s denied for %s", incident_id, actor.email)
            return Result.fail(ErrorCode.UNAUTHORIZED, "Solo un administrador puede cambiar el estado")
        if incident.status == new_status:
            return Result.success(incident, changed=False)

        now = self._clock()
        incident.status_history.append(StatusHistoryEntry(
            id=uuid.uuid4().hex,
            previous_status=incident.status,
            new_status=new_status,
            changed_by=actor.name,
            timestamp=now,
        ))
        incident.status = new_status
        self._touch(incident, now)
        return Result.success(incident)

    def add_comment(
        self,
        incident_id: str,
        text: str,
        author: str,
        is_ai_generated: bool = False,
    ) -> Result[Comment]:
        found = self.get(incident_id)
        if not found.ok:
            return Result.fail(found.error, found.message)
        if not text.strip():
            return Result.fail(ErrorCode.INVALID_INPUT, "El comentario no puede estar vacío")

        incident = found.value
        now = self._clock()
        comment = Comment(
            id=uuid.uuid4().hex,
            author=author,
            text=text,
            timestamp=now,
            is_ai_generated=is_ai_generated,
        )
        incident.comments.append(comment)
        self._touch(incident, now)
        return Result.success(comment)

    def filter(self, status_filter: Status | str = ALL, search_text: str = "") -> list[Incident]:
        query = search_text.lower()
        return [
            i for i in self._incidents
            if (status_filter == ALL or i.status == status_filter)
            and (
                not query
                or query in i.title.lower()
                or query in i.description.lower()
                or query in i.location.lower()
            )
        ]
