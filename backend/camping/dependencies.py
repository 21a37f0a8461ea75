from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from camping.core.auth.security import decode_access_token
from camping.core.rbac.models import User
from camping.core.results import ErrorCode, Result
from camping.state import AppState

bearer = HTTPBearer(auto_error=False)

ERROR_STATUS = {
    ErrorCode.DUPLICATE_EMAIL: 409,
    ErrorCode.INVALID_INPUT: 422,
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.EXTERNAL_SERVICE_FAILURE: 502,
}


@dataclass
class CurrentUser:
    user: User


def get_state(request: Request) -> AppState:
    return request.app.state.camping


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
    state: AppState = Depends(get_state),
) -> CurrentUser:
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = state.registry.get(payload["sub"])
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return CurrentUser(user=user)


def unwrap(result: Result):
    if not result.ok:
        raise HTTPException(ERROR_STATUS[result.error], result.message)
    return result.value
