"""Thin authentication shim over the mock user list."""

from typing import Any, Dict, Optional

from ..core.constants import DEFAULT_ROLE, SESSION_KEY_CURRENT_USER
from ..core.errors import ErrorKind, Result
from ..core.logging import get_logger
from ..db.database_utils import InventoryStore, simulate_latency
from ..models import User
from .session_store import SessionStore

logger = get_logger(__name__)

_USER_KEYS = ("id", "name", "email", "role")


class AuthService:
    """Login, registration and logout backed by an injected session store.

    Passwords are compared here and never returned or persisted.
    """

    def __init__(self, store: InventoryStore, session: SessionStore):
        self.store = store
        self.session = session
        self.user: Optional[Dict[str, Any]] = None

    def check_auth(self) -> Optional[Dict[str, Any]]:
        """Restore the signed-in user from the session store, if valid."""
        stored = self.session.load(SESSION_KEY_CURRENT_USER)
        if isinstance(stored, dict) and all(k in stored for k in _USER_KEYS):
            self.user = {k: stored[k] for k in _USER_KEYS}
        else:
            if stored is not None:
                logger.warning("Discarding malformed stored user record.")
            self.user = None
        return self.user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _find_by_email(self, email: str) -> Optional[User]:
        wanted = (email or "").strip().lower()
        for user in self.store.users.values():
            if user.email.lower() == wanted:
                return user
        return None

    def login(self, email: str, password: str) -> Result:
        simulate_latency(self.store)
        user = self._find_by_email(email)
        if user is None or user.password != password:
            logger.warning("Failed login attempt for %s", email)
            return Result.fail(ErrorKind.AUTH_FAILED, "Invalid email or password")
        self.user = user.public_dict()
        self.session.save(SESSION_KEY_CURRENT_USER, self.user)
        return Result.success(self.user, f"Welcome back, {user.name}.")

    def register(self, name: str, email: str, password: str) -> Result:
        """Create a VIEWER account and sign it in."""
        simulate_latency(self.store)
        with self.store.lock:
            if self._find_by_email(email) is not None:
                return Result.fail(ErrorKind.DUPLICATE_USER, "User already exists")
            missing = [
                label
                for label, value in (("name", name), ("email", email), ("password", password))
                if not value or not str(value).strip()
            ]
            if missing:
                return Result.fail(
                    ErrorKind.REQUIRED,
                    f"Missing or empty required fields: {', '.join(missing)}",
                    {m: f"{m.capitalize()} is required" for m in missing},
                )
            user = User(
                id=str(len(self.store.users) + 1),
                name=name.strip(),
                email=email.strip(),
                role=DEFAULT_ROLE,
                password=password,
            )
            self.store.users[user.id] = user
        self.user = user.public_dict()
        self.session.save(SESSION_KEY_CURRENT_USER, self.user)
        return Result.success(self.user, f"Account created for {user.name}.")

    def logout(self) -> None:
        self.user = None
        self.session.clear(SESSION_KEY_CURRENT_USER)
