from typing import Literal

from fastapi import APIRouter, Depends

from camping.core.incidents.models import Incident, Status
from camping.core.incidents.schemas import (
    CommentCreate, CommentMutationRead, IncidentCreate, IncidentMutationRead,
    SolutionRead, StatusChange,
)
from camping.core.incidents.service import ALL
from camping.dependencies import CurrentUser, get_current_user, get_state, unwrap
from camping.state import AppState

router = APIRouter(tags=["incidents"])

AI_PLAN_PREFIX = "**Plan Sugerido por IA:**\n\n"


@router.get("/incidents", response_model=list[Incident])
async def list_incidents(
    status: Status | Literal["ALL"] | None = None,
    q: str = "",
    state: AppState = Depends(get_state),
    _: CurrentUser = Depends(get_current_user),
):
    return state.incidents.filter(status or ALL, q)


@router.post("/incidents", response_model=IncidentMutationRead, status_code=201)
async def create_incident(
    data: IncidentCreate,
    state: AppState = Depends(get_state),
    current: CurrentUser = Depends(get_current_user),
):
    incident = unwrap(state.incidents.create(data, current.user.name, current.user.department))
    warning = await state.save_incidents()
    return IncidentMutationRead(incident=incident, warning=warning)


@router.get("/incidents/{incident_id}", response_model=Incident)
async def get_incident(
    incident_id: str,
    state: AppState = Depends(get_state),
    _: CurrentUser = Depends(get_current_user),
):
    return unwrap(state.incidents.get(incident_id))


@router.post("/incidents/{incident_id}/status", response_model=IncidentMutationRead)
async def change_status(
    incident_id: str,
    body: StatusChange,
    state: AppState = Depends(get_state),
    current: CurrentUser = Depends(get_current_user),
):
    result = state.incidents.change_status(incident_id, body.status, current.user)
    incident = unwrap(result)
    warning = await state.save_incidents() if result.changed else None
    return IncidentMutationRead(incident=incident, changed=result.changed, warning=warning)


@router.post("/incidents/{incident_id}/comments", response_model=CommentMutationRead, status_code=201)
async def add_comment(
    incident_id: str,
    body: CommentCreate,
    state: AppState = Depends(get_state),
    current: CurrentUser = Depends(get_current_user),
):
    comment = unwrap(state.incidents.add_comment(incident_id, body.text, current.user.name))
    warning = await state.save_incidents()
    return CommentMutationRead(comment=comment, warning=warning)


@router.post("/incidents/{incident_id}/ai-solution", response_model=SolutionRead)
async def suggest_solution(
    incident_id: str,
    state: AppState = Depends(get_state),
    _: CurrentUser = Depends(get_current_user),
):
    incident = unwrap(state.incidents.get(incident_id))
    solution = await state.ai.suggest_solution(incident.title, incident.description, incident.category.value)
    return SolutionRead(incident_id=incident_id, solution=solution)


@router.post("/incidents/{incident_id}/ai-solution/apply", response_model=CommentMutationRead, status_code=201)
async def apply_solution(
    incident_id: str,
    body: CommentCreate,
    state: AppState = Depends(get_state),
    current: CurrentUser = Depends(get_current_user),
):
    text = AI_PLAN_PREFIX + body.text if body.text.strip() else ""
    comment = unwrap(state.incidents.add_comment(incident_id, text, current.user.name, is_ai_generated=True))
    warning = await state.save_incidents()
    return CommentMutationRead(comment=comment, warning=warning)
