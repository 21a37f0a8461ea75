import logging
from typing import Awaitable, Callable, TypeVar
from zoneinfo import ZoneInfo

from camping.core.ai.service import AISuggestionService
from camping.core.incidents.service import IncidentStore
from camping.core.rbac.models import User
from camping.core.rbac.service import UserRegistry
from camping.db.adapter import MemoryAdapter, PersistenceAdapter
from camping.db.local import LocalStorageAdapter
from camping.db.remote import RemoteAdapter
from camping.db.seed import demo_incidents
from camping.db.session import create_tables, make_engine
from camping.settings import Settings

logger = logging.getLogger(__name__)

PERSISTENCE_WARNING = "Los cambios se aplicaron pero no se pudieron guardar. Se reintentará en el próximo cambio."
LOAD_WARNING = "No se pudieron cargar los datos guardados. Se ha iniciado con datos vacíos."

T = TypeVar("T")


class AppState:
    """
    The whole session: registry, incidents, logged-in user and the adapter
    that stores them. Routes mutate the registry and store through their
    own operations and then call the matching `save_*`.
    """

    def __init__(
        self,
        settings: Settings,
        adapter: PersistenceAdapter,
        ai: AISuggestionService | None = None,
    ):
        self.settings = settings
        self.adapter = adapter
        self.ai = ai or AISuggestionService(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
        self.registry = UserRegistry(settings.SUPER_ADMIN_EMAIL, bcrypt_rounds=settings.BCRYPT_ROUNDS)
        self.incidents = IncidentStore()
        self.current_user: User | None = None
        self.load_warning: str | None = None
        self.export_tz = ZoneInfo(settings.EXPORT_TIMEZONE)

    async def _load(self, what: str, loader: Callable[[], Awaitable[T]], empty: T) -> T:
        try:
            return await loader()
        except Exception:
            logger.warning("Could not load %s, starting empty", what, exc_info=True)
            self.load_warning = LOAD_WARNING
            return empty

    async def load(self) -> None:
        """Unreachable storage never blocks startup; see `load_warning`."""
        self.load_warning = None
        self.registry.load(await self._load("user registry", self.adapter.load_user_registry, []))
        self.incidents.load(await self._load("incidents", self.adapter.load_incidents, []))
        session = await self._load("session user", self.adapter.load_user, None)
        # the snapshot carries no password hash; prefer the registry entry
        self.current_user = session and (self.registry.get(session.email) or session)

        seeded = self.registry.ensure_super_admin(self.settings.SUPER_ADMIN_NAME, self.settings.SUPER_ADMIN_PASSWORD)
        # never write over a registry we failed to read
        if seeded and not self.load_warning:
            await self.save_registry()
        logger.info(
            "Loaded %d users and %d incidents", len(self.registry.list()), len(self.incidents.list()),
        )

    async def save_incidents(self) -> str | None:
        """Best effort: the in-memory change stands even if the write fails."""
        try:
            await self.adapter.save_incidents(self.incidents.list())
        except Exception:
            logger.warning("Could not persist incidents (version %d)", self.incidents.version, exc_info=True)
            return PERSISTENCE_WARNING
        return None

    async def save_registry(self) -> str | None:
        try:
            await self.adapter.save_user_registry(self.registry.list())
        except Exception:
            logger.warning("Could not persist user registry (version %d)", self.registry.version, exc_info=True)
            return PERSISTENCE_WARNING
        return None

    async def set_current_user(self, user: User | None) -> str | None:
        self.current_user = user
        try:
            await self.adapter.save_user(user)
        except Exception:
            logger.warning("Could not persist session user", exc_info=True)
            return PERSISTENCE_WARNING
        return None

    async def close(self) -> None:
        await self.adapter.close()


async def build_adapter(settings: Settings) -> PersistenceAdapter:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "local":
        return LocalStorageAdapter(settings.LOCAL_STORAGE_PATH)
    if backend == "remote":
        engine = make_engine(settings.DATABASE_URL, echo=settings.APP_DEBUG)
        if settings.DATABASE_URL.startswith("sqlite"):
            await create_tables(engine)
        return RemoteAdapter(engine)
    if backend != "memory":
        raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'")
    return MemoryAdapter(incidents=demo_incidents() if settings.SEED_DEMO_DATA else ())
