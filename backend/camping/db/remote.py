from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine

from camping.core.incidents.models import Incident
from camping.core.rbac.models import User
from camping.db.adapter import PersistenceAdapter
from camping.db.mapping import (
    incident_from_row, incident_to_row, map_records, user_from_record, user_from_row, user_to_row,
)
from camping.db.models import IncidenciaRow, SesionRow, UsuarioRow
from camping.db.session import get_session, make_sessionmaker

SESSION_KEY = "actual"


class RemoteAdapter(PersistenceAdapter):
    """
    Row store backed by SQLAlchemy. Each save rewrites the whole table
    inside one transaction; there is a single writer, so the last save wins.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.sessionmaker = make_sessionmaker(engine)

    async def load_incidents(self) -> list[Incident]:
        async with get_session(self.sessionmaker) as db:
            result = await db.execute(select(IncidenciaRow).order_by(IncidenciaRow.posicion.asc()))
            return map_records(result.scalars().all(), incident_from_row, "incident")

    async def save_incidents(self, incidents: Sequence[Incident]) -> None:
        async with get_session(self.sessionmaker) as db:
            await db.execute(delete(IncidenciaRow))
            db.add_all([incident_to_row(i, pos) for pos, i in enumerate(incidents)])

    async def load_user(self) -> User | None:
        async with get_session(self.sessionmaker) as db:
            row = await db.get(SesionRow, SESSION_KEY)
            if not row or not row.usuario:
                return None
            users = map_records([row.usuario], user_from_record, "session user")
            return users[0] if users else None

    async def save_user(self, user: User | None) -> None:
        async with get_session(self.sessionmaker) as db:
            row = await db.get(SesionRow, SESSION_KEY)
            payload = user.model_dump(mode="json", exclude={"password"}) if user else None
            if row:
                row.usuario = payload
            else:
                db.add(SesionRow(clave=SESSION_KEY, usuario=payload))

    async def load_user_registry(self) -> list[User]:
        async with get_session(self.sessionmaker) as db:
            result = await db.execute(select(UsuarioRow).order_by(UsuarioRow.created_at.asc()))
            return map_records(result.scalars().all(), user_from_row, "user")

    async def save_user_registry(self, users: Sequence[User]) -> None:
        async with get_session(self.sessionmaker) as db:
            existing = {row.email: row for row in (await db.execute(select(UsuarioRow))).scalars().all()}
            for user in users:
                row = existing.pop(user.email, None)
                if row is None:
                    db.add(user_to_row(user))
                    continue
                row.nombre = user.name
                row.password = user.password
                row.departamento = user.department.value
                row.rol = user.role.value
            for row in existing.values():
                await db.delete(row)

    async def close(self) -> None:
        await self.engine.dispose()
