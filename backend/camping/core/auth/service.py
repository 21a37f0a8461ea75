import logging

from fastapi import HTTPException, status

from camping.core.auth.security import create_access_token
from camping.core.rbac.models import User
from camping.state import AppState

logger = logging.getLogger(__name__)


class AuthResult:
    def __init__(self, access_token: str, user: User):
        self.access_token = access_token
        self.user = user


class LocalAuthProvider:
    async def login(self, state: AppState, email: str, password: str) -> AuthResult:
        user = state.registry.authenticate(email, password)
        if not user:
            # same answer for unknown e-mail and wrong password
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

        await state.set_current_user(user)
        logger.info("User %s logged in", user.email)
        return AuthResult(access_token=create_access_token(user.email), user=user)


_provider = LocalAuthProvider()


def get_auth_provider() -> LocalAuthProvider:
    return _provider


async def logout(state: AppState, user: User) -> None:
    if state.current_user and state.current_user.email == user.email:
        await state.set_current_user(None)
    logger.info("User %s logged out", user.email)
