"""Initial schema: usuarios, incidencias, sesion

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 00:00:00
"""
from typing import Sequence, Union
import sqlalchemy as sa
from alembic import op

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("nombre", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("departamento", sa.String(100), nullable=False),
        sa.Column("rol", sa.String(20), nullable=False, server_default="USER"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("email"),
    )

    op.create_table(
        "incidencias",
        sa.Column("id", sa.String(50), nullable=False),
        sa.Column("titulo", sa.String(500), nullable=False),
        sa.Column("descripcion", sa.Text, nullable=False),
        sa.Column("ubicacion", sa.String(255), nullable=False),
        sa.Column("prioridad", sa.String(50), nullable=True),
        sa.Column("estado", sa.String(50), nullable=True),
        sa.Column("categoria", sa.String(50), nullable=True),
        sa.Column("reportado_por", sa.String(255), nullable=False),
        sa.Column("departamento", sa.String(100), nullable=True),
        sa.Column("comentarios", sa.JSON, nullable=True),
        sa.Column("historial_estados", sa.JSON, nullable=True),
        sa.Column("analisis_ia", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("posicion", sa.Integer, nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_incidencias_estado", "incidencias", ["estado"])

    op.create_table(
        "sesion",
        sa.Column("clave", sa.String(50), nullable=False),
        sa.Column("usuario", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.PrimaryKeyConstraint("clave"),
    )


def downgrade() -> None:
    op.drop_table("sesion")
    op.drop_index("ix_incidencias_estado", table_name="incidencias")
    op.drop_table("incidencias")
    op.drop_table("usuarios")
