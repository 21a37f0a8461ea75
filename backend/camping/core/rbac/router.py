from fastapi import APIRouter, Depends, HTTPException

from camping.core.rbac.policy import can_manage_users
from camping.core.rbac.schemas import RoleUpdate, UserCreate, UserMutationRead, UserRead
from camping.dependencies import CurrentUser, get_current_user, get_state, unwrap
from camping.state import AppState

router = APIRouter(tags=["users & roles"])


@router.get("/users", response_model=list[UserRead])
async def list_users(state: AppState = Depends(get_state), current: CurrentUser = Depends(get_current_user)):
    if not can_manage_users(current.user.role):
        raise HTTPException(403, "Solo un administrador puede ver los usuarios")
    return state.registry.list()


@router.post("/users", response_model=UserMutationRead, status_code=201)
async def create_user(data: UserCreate, state: AppState = Depends(get_state), current: CurrentUser = Depends(get_current_user)):
    user = unwrap(state.registry.create_user(current.user.role, data))
    warning = await state.save_registry()
    return UserMutationRead(user=UserRead.model_validate(user), warning=warning)


@router.patch("/users/{email}/role", response_model=UserMutationRead)
async def update_role(email: str, body: RoleUpdate, state: AppState = Depends(get_state), current: CurrentUser = Depends(get_current_user)):
    result = state.registry.set_role(current.user.role, email, body.role)
    user = unwrap(result)
    warning = await state.save_registry() if result.changed else None
    return UserMutationRead(user=UserRead.model_validate(user), warning=warning)
