from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from camping.db.base import Base, TimestampMixin


class UsuarioRow(Base, TimestampMixin):
    __tablename__ = "usuarios"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    departamento: Mapped[str] = mapped_column(String(100), nullable=False)
    rol: Mapped[str] = mapped_column(String(20), nullable=False, default="USER")


class IncidenciaRow(Base):
    """
    Remote incident row. Enum columns hold the display strings
    ("En Proceso", "Crítica", ...); comments and status history are
    stored inline as JSON arrays.
    """
    __tablename__ = "incidencias"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    titulo: Mapped[str] = mapped_column(String(500), nullable=False)
    descripcion: Mapped[str] = mapped_column(Text, nullable=False)
    ubicacion: Mapped[str] = mapped_column(String(255), nullable=False)
    prioridad: Mapped[str | None] = mapped_column(String(50), nullable=True)
    estado: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    categoria: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reportado_por: Mapped[str] = mapped_column(String(255), nullable=False)
    departamento: Mapped[str | None] = mapped_column(String(100), nullable=True)
    comentarios: Mapped[list | None] = mapped_column(JSON, nullable=True)
    historial_estados: Mapped[list | None] = mapped_column(JSON, nullable=True)
    analisis_ia: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # list order is newest first; position keeps it stable across reloads
    posicion: Mapped[int] = mapped_column(nullable=False, default=0)


class SesionRow(Base, TimestampMixin):
    __tablename__ = "sesion"

    clave: Mapped[str] = mapped_column(String(50), primary_key=True)
    usuario: Mapped[dict | None] = mapped_column(JSON, nullable=True)
