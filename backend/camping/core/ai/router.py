from fastapi import APIRouter, Depends

from camping.core.ai.schemas import AIAnalysisResult, AnalyzeRequest
from camping.dependencies import CurrentUser, get_current_user, get_state
from camping.state import AppState

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/analyze", response_model=AIAnalysisResult)
async def analyze(body: AnalyzeRequest, state: AppState = Depends(get_state), _: CurrentUser = Depends(get_current_user)):
    return await state.ai.analyze(body.description, body.location)
