from fastapi import APIRouter, Depends

from camping.core.auth import service as auth_service
from camping.core.auth.schemas import LoginRequest, TokenResponse
from camping.core.rbac.schemas import UserRead
from camping.dependencies import CurrentUser, get_current_user, get_state
from camping.state import AppState

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, state: AppState = Depends(get_state)):
    provider = auth_service.get_auth_provider()
    result = await provider.login(state, body.email, body.password)
    return TokenResponse(access_token=result.access_token, user=UserRead.model_validate(result.user))


@router.post("/logout", status_code=204)
async def logout(state: AppState = Depends(get_state), current: CurrentUser = Depends(get_current_user)):
    await auth_service.logout(state, current.user)


@router.get("/me", response_model=UserRead)
async def me(current: CurrentUser = Depends(get_current_user)):
    return current.user
