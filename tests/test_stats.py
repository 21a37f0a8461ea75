import csv
import io
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from camping.core.incidents.models import Category, Incident, Priority, Status
from camping.core.stats.service import (
    CSV_HEADERS, by_category, by_priority, by_status, counts, export_csv, export_filename,
)

T0 = datetime(2026, 7, 1, 10, 30, 5, tzinfo=timezone.utc)


def _incident(id, priority=Priority.MEDIA, status=Status.PENDIENTE, category=Category.PARCELAS, **kw) -> Incident:
    data = dict(
        id=id, title="t", description="d", location="l", priority=priority, status=status,
        category=category, created_at=T0, updated_at=T0, reporter="Ana",
    )
    data.update(kw)
    return Incident(**data)


SAMPLE = [
    _incident("INC-1", Priority.ALTA, Status.PENDIENTE, Category.BUNGALOWS),
    _incident("INC-2", Priority.CRITICA, Status.FINALIZADA, Category.SANITARIOS),
    _incident("INC-3", Priority.BAJA, Status.EN_PROCESO, Category.SANITARIOS),
    _incident("INC-4", Priority.MEDIA, Status.PENDIENTE, Category.SANITARIOS),
]


def test_counts():
    c = counts(SAMPLE)
    assert c.pending_count == 2
    assert c.high_priority_count == 2
    assert c.resolved_count == 1


def test_by_category_sorted_with_percentages():
    rows = by_category(SAMPLE)
    assert len(rows) == len(Category)
    assert rows[0].category == Category.SANITARIOS
    assert rows[0].count == 3
    assert rows[0].percentage == 75.0
    assert rows[1].category == Category.BUNGALOWS
    assert rows[1].percentage == 25.0
    # ties keep enum order
    assert [r.category for r in rows[2:]] == [
        Category.PARCELAS, Category.GLAMPING, Category.RESTAURANT, Category.COCINA, Category.TTOO,
    ]


def test_by_category_empty_has_zero_percentages():
    rows = by_category([])
    assert all(r.count == 0 and r.percentage == 0 for r in rows)


def test_by_priority_in_enum_order():
    rows = by_priority(SAMPLE)
    assert [r.priority for r in rows] == list(Priority)
    assert [r.count for r in rows] == [1, 1, 1, 1]


def test_by_status_in_enum_order():
    assert [(r.status, r.count) for r in by_status(SAMPLE)] == [
        (Status.PENDIENTE, 2), (Status.EN_PROCESO, 1), (Status.FINALIZADA, 1),
    ]


def test_export_csv_header_and_rows():
    text = export_csv(SAMPLE)
    lines = text.splitlines()
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(lines) == 1 + len(SAMPLE)
    assert lines[1] == (
        '"INC-1","t","d","l","Bungalows","Alta","Pendiente","Ana",'
        '"01/07/2026 10:30:05","01/07/2026 10:30:05"'
    )


def test_export_csv_quotes_are_doubled():
    incident = _incident("INC-9", title='Cartel "Salida" caído', description="uno, dos\ntres", location='"A"')
    text = export_csv([incident])
    assert '"Cartel ""Salida"" caído"' in text
    row = list(csv.reader(io.StringIO(text)))[1]
    assert row[1] == 'Cartel "Salida" caído'
    assert row[2] == "uno, dos\ntres"
    assert row[3] == '"A"'


def test_export_csv_uses_timezone():
    text = export_csv(SAMPLE[:1], ZoneInfo("Europe/Madrid"))
    assert "01/07/2026 12:30:05" in text


def test_export_csv_is_idempotent():
    assert export_csv(SAMPLE) == export_csv(SAMPLE)


def test_export_csv_empty_is_header_only():
    assert export_csv([]) == ",".join(CSV_HEADERS) + "\n"


def test_export_filename():
    assert export_filename(date(2026, 10, 17)) == "reporte_camping_2026-10-17.csv"
