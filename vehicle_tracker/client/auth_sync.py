# vehicle_tracker/client/auth_sync.py
from __future__ import annotations

import threading

from vehicle_tracker.client.session_store import ClientSessionStore
from vehicle_tracker.config.logging_config import get_logger

logger = get_logger(__name__)


class AuthSync:
    """Keeps several store instances sharing one storage file consistent.

    When the persisted session no longer matches what this store holds (another
    instance logged out, or the file was deleted) the store is fully reloaded
    from disk rather than reconciled field by field.
    """

    def __init__(self, store: ClientSessionStore, *, interval: float = 1.0) -> None:
        self.store = store
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def check(self) -> bool:
        """Poll once. Returns True when a reload happened."""
        persisted = self.store.read_persisted()
        if persisted == self.store.snapshot():
            return False

        logger.info("client_storage_changed", cleared=persisted is None)
        self.store.reload()
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.check()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="auth-sync", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None
