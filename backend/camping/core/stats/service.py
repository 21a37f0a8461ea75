import csv
import io
from datetime import date, datetime, timezone, tzinfo
from typing import Sequence

from camping.core.incidents.models import Category, Incident, Priority, Status
from camping.core.stats.schemas import CategoryCount, DashboardCounts, PriorityCount, StatusCount

CSV_HEADERS = [
    "ID",
    "Título",
    "Descripción",
    "Ubicación",
    "Categoría",
    "Prioridad",
    "Estado",
    "Reportado Por",
    "Fecha Creación",
    "Fecha Actualización",
]

HIGH_PRIORITIES = {Priority.ALTA, Priority.CRITICA}


def counts(incidents: Sequence[Incident]) -> DashboardCounts:
    return DashboardCounts(
        pending_count=sum(1 for i in incidents if i.status == Status.PENDIENTE),
        high_priority_count=sum(1 for i in incidents if i.priority in HIGH_PRIORITIES),
        resolved_count=sum(1 for i in incidents if i.status == Status.FINALIZADA),
    )


def by_category(incidents: Sequence[Incident]) -> list[CategoryCount]:
    total = len(incidents)
    rows = []
    for category in Category:
        count = sum(1 for i in incidents if i.category == category)
        rows.append(CategoryCount(
            category=category,
            count=count,
            percentage=(count / total) * 100 if total else 0.0,
        ))
    # sorted() is stable, so ties keep enum order
    return sorted(rows, key=lambda r: r.count, reverse=True)


def by_priority(incidents: Sequence[Incident]) -> list[PriorityCount]:
    return [
        PriorityCount(priority=p, count=sum(1 for i in incidents if i.priority == p))
        for p in Priority
    ]


def by_status(incidents: Sequence[Incident]) -> list[StatusCount]:
    return [
        StatusCount(status=s, count=sum(1 for i in incidents if i.status == s))
        for s in Status
    ]


def _format_dt(value: datetime, tz: tzinfo) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz).strftime("%d/%m/%Y %H:%M:%S")


def export_csv(incidents: Sequence[Incident], tz: tzinfo = timezone.utc) -> str:
    """
    Render the report as CSV text.

    The header row is written bare; every data field is quoted with inner
    quotes doubled. No I/O happens here.
    """
    output = io.StringIO()
    header = csv.writer(output, lineterminator="\n")
    header.writerow(CSV_HEADERS)
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for i in incidents:
        writer.writerow([
            i.id,
            i.title,
            i.description,
            i.location,
            i.category.value,
            i.priority.value,
            i.status.value,
            i.reporter,
            _format_dt(i.created_at, tz),
            _format_dt(i.updated_at, tz),
        ])
    return output.getvalue()


def export_filename(day: date) -> str:
    return f"reporte_camping_{day.isoformat()}.csv"
