# vehicle_tracker/client/session_store.py
"""
Client-side session state: the current user and access token, persisted to a
JSON document so a restarted client picks up where it left off.

The document may hold other keys; only ``vehicle-tracker-auth`` belongs to the
store. Logging out removes that key, which is what other store instances
watching the same file react to (see ``auth_sync.AuthSync``).
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from vehicle_tracker.config.logging_config import get_logger

logger = get_logger(__name__)

STORAGE_KEY = "vehicle-tracker-auth"
DEFAULT_STORAGE_PATH = Path.home() / ".vehicle-tracker" / "storage.json"


class ClientSessionStore:
    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path else DEFAULT_STORAGE_PATH
        self._lock = threading.RLock()
        self._listeners: list[Callable[["ClientSessionStore"], None]] = []

        self.user: Optional[Dict[str, Any]] = None
        self.access_token: Optional[str] = None
        self.is_authenticated: bool = False

        self.reload()

    # -------------------------
    # State
    # -------------------------

    def snapshot(self) -> Optional[Dict[str, Any]]:
        """Persistable form of the in-memory state, None when logged out."""
        with self._lock:
            if not (self.user or self.access_token or self.is_authenticated):
                return None
            return {
                "user": self.user,
                "accessToken": self.access_token,
                "isAuthenticated": self.is_authenticated,
            }

    def set_auth(self, user: Dict[str, Any], access_token: str) -> None:
        with self._lock:
            self.user = user
            self.access_token = access_token
            self.is_authenticated = True
            self._persist()
        self._notify()

    def set_access_token(self, access_token: str) -> None:
        with self._lock:
            self.access_token = access_token
            self._persist()
        self._notify()

    def set_user(self, user: Dict[str, Any]) -> None:
        with self._lock:
            self.user = user
            self._persist()
        self._notify()

    def logout(self) -> None:
        with self._lock:
            self.user = None
            self.access_token = None
            self.is_authenticated = False
            self._persist()
        logger.info("client_session_cleared")
        self._notify()

    def reload(self) -> None:
        """Replace the in-memory state with whatever is persisted right now."""
        with self._lock:
            state = self.read_persisted() or {}
            self.user = state.get("user")
            self.access_token = state.get("accessToken")
            self.is_authenticated = bool(state.get("isAuthenticated"))
        self._notify()

    def subscribe(self, listener: Callable[["ClientSessionStore"], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------------------------
    # Persistence
    # -------------------------

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("client_storage_unreadable", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def read_persisted(self) -> Optional[Dict[str, Any]]:
        state = self._read_document().get(STORAGE_KEY)
        return state if isinstance(state, dict) else None

    def _persist(self) -> None:
        document = self._read_document()
        state = self.snapshot()
        if state is None:
            document.pop(STORAGE_KEY, None)
        else:
            document[STORAGE_KEY] = state
        self._atomic_write(document)

    def _atomic_write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=self.path.parent, delete=False, encoding="utf-8"
        ) as tf:
            json.dump(data, tf, indent=2, ensure_ascii=False)
            temp_path = Path(tf.name)

        try:
            shutil.move(str(temp_path), str(self.path))
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise
