from datetime import datetime, timedelta

from camping.core.incidents.models import Category, Comment, Incident, Priority, Status
from camping.db.base import utcnow


def demo_incidents(now: datetime | None = None) -> list[Incident]:
    """Sample incidents shown on a fresh dashboard, newest first."""
    now = now or utcnow()
    return [
        Incident(
            id=f"INC-{now.year}-003",
            title="Rama caída obstaculizando paso",
            description="Ha caído una rama grande de pino en el camino principal hacia la zona de Glamping.",
            location="Camino Glamping sector B",
            priority=Priority.BAJA,
            status=Status.PENDIENTE,
            category=Category.PARCELAS,
            created_at=now - timedelta(minutes=30),
            updated_at=now,
            reporter="Jardinería",
        ),
        Incident(
            id=f"INC-{now.year}-001",
            title="Fallo eléctrico en Bungalow",
            description=(
                "El cliente reporta que saltan los plomos al encender el aire acondicionado. "
                "Huele a quemado levemente."
            ),
            location="Bungalow Deluxe 42",
            priority=Priority.ALTA,
            status=Status.PENDIENTE,
            category=Category.BUNGALOWS,
            created_at=now - timedelta(hours=2),
            updated_at=now,
            reporter="Recepción",
            comments=[
                Comment(
                    id="c1",
                    author="Jefe Mtto",
                    text="Enviando a electricista de guardia.",
                    timestamp=now - timedelta(hours=1),
                ),
            ],
        ),
        Incident(
            id=f"INC-{now.year}-002",
            title="Grifo goteando zona común",
            description="En los baños de la piscina infantil, el tercer grifo no cierra del todo y pierde mucha agua.",
            location="Baños Piscina Infantil",
            priority=Priority.MEDIA,
            status=Status.EN_PROCESO,
            category=Category.SANITARIOS,
            created_at=now - timedelta(days=1),
            updated_at=now,
            reporter="Limpieza",
        ),
    ]
