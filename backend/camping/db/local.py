import json
import logging
from pathlib import Path
from typing import Any, Sequence

from camping.core.incidents.models import Incident
from camping.core.rbac.models import User
from camping.db.adapter import PersistenceAdapter
from camping.db.mapping import incident_from_record, map_records, user_from_record

logger = logging.getLogger(__name__)

INCIDENTS_KEY = "camping_incidents"
USER_KEY = "camping_user"
REGISTRY_KEY = "camping_users"


class UnreadableStorage(Exception):
    pass


class LocalStorageAdapter(PersistenceAdapter):
    """
    Key-value store in a single JSON file, one key per snapshot.

    Writes go to a sibling temp file first and are then renamed over the
    original, so a crash mid-write leaves the previous snapshot readable.
    A file that cannot be decoded is moved aside to `<name>.corrupt` before
    the first write replaces it.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".corrupt")

    def _decode(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as e:
            raise UnreadableStorage(str(e)) from e
        if not isinstance(data, dict):
            raise UnreadableStorage(f"expected an object, got {type(data).__name__}")
        return data

    def _read(self) -> dict[str, Any]:
        try:
            return self._decode()
        except UnreadableStorage as e:
            logger.warning("Local storage %s is unreadable (%s), starting empty", self.path, e)
            return {}

    def _write(self, key: str, value: Any) -> None:
        try:
            data = self._decode()
        except UnreadableStorage:
            logger.warning("Moving unreadable local storage %s to %s", self.path, self.corrupt_path)
            self.path.replace(self.corrupt_path)
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    async def load_incidents(self) -> list[Incident]:
        return map_records(self._read().get(INCIDENTS_KEY) or [], incident_from_record, "incident")

    async def save_incidents(self, incidents: Sequence[Incident]) -> None:
        self._write(INCIDENTS_KEY, [i.model_dump(mode="json") for i in incidents])

    async def load_user(self) -> User | None:
        record = self._read().get(USER_KEY)
        if not record:
            return None
        users = map_records([record], user_from_record, "session user")
        return users[0] if users else None

    async def save_user(self, user: User | None) -> None:
        self._write(USER_KEY, user.model_dump(mode="json", exclude={"password"}) if user else None)

    async def load_user_registry(self) -> list[User]:
        return map_records(self._read().get(REGISTRY_KEY) or [], user_from_record, "user")

    async def save_user_registry(self, users: Sequence[User]) -> None:
        self._write(REGISTRY_KEY, [u.model_dump(mode="json") for u in users])
