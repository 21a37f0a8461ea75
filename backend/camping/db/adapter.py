from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from camping.core.incidents.models import Incident
from camping.core.rbac.models import User


class PersistenceAdapter(ABC):
    """
    Durable home of the session state. Implementations store whole
    snapshots: every save replaces what was stored before.
    """

    @abstractmethod
    async def load_incidents(self) -> list[Incident]: ...

    @abstractmethod
    async def save_incidents(self, incidents: Sequence[Incident]) -> None: ...

    @abstractmethod
    async def load_user(self) -> User | None: ...

    @abstractmethod
    async def save_user(self, user: User | None) -> None: ...

    @abstractmethod
    async def load_user_registry(self) -> list[User]: ...

    @abstractmethod
    async def save_user_registry(self, users: Sequence[User]) -> None: ...

    async def close(self) -> None:
        pass


class MemoryAdapter(PersistenceAdapter):
    """Process-local storage, used for demo data and tests."""

    def __init__(self, incidents: Iterable[Incident] = (), users: Iterable[User] = ()):
        self._incidents = [i.model_copy(deep=True) for i in incidents]
        self._users = [u.model_copy(deep=True) for u in users]
        self._user: User | None = None

    async def load_incidents(self) -> list[Incident]:
        return [i.model_copy(deep=True) for i in self._incidents]

    async def save_incidents(self, incidents: Sequence[Incident]) -> None:
        self._incidents = [i.model_copy(deep=True) for i in incidents]

    async def load_user(self) -> User | None:
        return self._user.model_copy() if self._user else None

    async def save_user(self, user: User | None) -> None:
        self._user = user.model_copy() if user else None

    async def load_user_registry(self) -> list[User]:
        return [u.model_copy() for u in self._users]

    async def save_user_registry(self, users: Sequence[User]) -> None:
        self._users = [u.model_copy() for u in users]
