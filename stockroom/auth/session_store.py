"""Persisted session state: the signed-in user and the theme preference.

The dashboard stores these under fixed keys. The store is injected into the
auth service so tests can use :class:`MemorySessionStore` while the running
app persists to a JSON file with one section per browser session.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from ..core.logging import get_logger

logger = get_logger(__name__)

# Serialises read-modify-write cycles on session files within this process
_FILE_LOCK = threading.Lock()


class SessionStore(Protocol):
    def load(self, key: str) -> Optional[Any]: ...

    def save(self, key: str, value: Any) -> None: ...

    def clear(self, key: str) -> None: ...


class MemorySessionStore:
    """Keeps values in a dict for the life of the object."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def load(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def save(self, key: str, value: Any) -> None:
        self._data[key] = value

    def clear(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileSessionStore:
    """Keeps one browser session's values in a shared JSON file on disk.

    The file maps a per-browser ``namespace`` to that browser's values, so
    sessions served by the same process never see each other's keys. The
    file is re-read on every call.
    """

    def __init__(self, path, namespace: str = "default"):
        self.path = Path(path)
        self.namespace = namespace

    def _read_all(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _section(self, data: Dict[str, Any]) -> Dict[str, Any]:
        section = data.get(self.namespace)
        return section if isinstance(section, dict) else {}

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def load(self, key: str) -> Optional[Any]:
        with _FILE_LOCK:
            return self._section(self._read_all()).get(key)

    def save(self, key: str, value: Any) -> None:
        with _FILE_LOCK:
            data = self._read_all()
            section = self._section(data)
            section[key] = value
            data[self.namespace] = section
            self._write_all(data)

    def clear(self, key: str) -> None:
        with _FILE_LOCK:
            data = self._read_all()
            section = self._section(data)
            if key in section:
                del section[key]
                data[self.namespace] = section
                self._write_all(data)
