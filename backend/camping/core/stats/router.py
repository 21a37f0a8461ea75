from fastapi import APIRouter, Depends
from fastapi.responses import Response

from camping.core.stats import service
from camping.core.stats.schemas import StatsRead
from camping.db.base import utcnow
from camping.dependencies import CurrentUser, get_current_user, get_state
from camping.state import AppState

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsRead)
async def get_stats(state: AppState = Depends(get_state), _: CurrentUser = Depends(get_current_user)):
    incidents = state.incidents.list()
    return StatsRead(
        total=len(incidents),
        counts=service.counts(incidents),
        by_category=service.by_category(incidents),
        by_priority=service.by_priority(incidents),
        by_status=service.by_status(incidents),
    )


@router.get("/export")
async def export_report(state: AppState = Depends(get_state), _: CurrentUser = Depends(get_current_user)):
    content = service.export_csv(state.incidents.list(), state.export_tz)
    filename = service.export_filename(utcnow().date())
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
