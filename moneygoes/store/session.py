"""The owning holder of the single in-memory document."""

import logging
import threading
from collections.abc import Callable
from datetime import date
from typing import Any

from moneygoes.domain.models import AppDocument, DocumentDefaults
from moneygoes.store.document import load_or_default, save
from moneygoes.store.storage import Storage

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_SECONDS = 30.0


class Session:
    """Holds the document for a session and serializes writes to it.

    Every mutation and every save, including the autosave timer's, runs
    under one lock so a save never sees a half-applied change.
    """

    def __init__(self, storage: Storage, document: AppDocument) -> None:
        self.storage = storage
        self._document = document
        self._lock = threading.RLock()
        self._timer: threading.Timer | None = None
        self._autosave_interval: float | None = None
        self.last_save_ok: bool | None = None

    @classmethod
    def open(
        cls,
        storage: Storage,
        defaults: DocumentDefaults | None = None,
        today: date | None = None,
    ) -> "Session":
        """Load the stored document (or defaults) into a new session."""
        return cls(storage, load_or_default(storage, today=today, defaults=defaults))

    @property
    def document(self) -> AppDocument:
        with self._lock:
            return self._document

    def apply(self, operation: Callable[..., AppDocument], *args: Any, **kwargs: Any) -> AppDocument:
        """Run a store operation against the document and persist the result.

        Args:
            operation: Store function taking the document as first argument.
            *args: Remaining positional arguments for operation.
            **kwargs: Keyword arguments for operation.

        Returns:
            The updated document.
        """
        with self._lock:
            updated = operation(self._document, *args, **kwargs)
            self._document = updated
            self.last_save_ok = save(self.storage, updated)
            if not self.last_save_ok:
                logger.warning("Change applied but could not be saved")
            return updated

    def replace_document(self, document: AppDocument) -> bool:
        """Swap in a whole new document (e.g. after an import) and save it."""
        with self._lock:
            self._document = document
            self.last_save_ok = save(self.storage, document)
            return self.last_save_ok

    def save(self) -> bool:
        """Persist the current document."""
        with self._lock:
            self.last_save_ok = save(self.storage, self._document)
            return self.last_save_ok

    def start_autosave(self, interval: float = DEFAULT_AUTOSAVE_SECONDS) -> None:
        """Save the document every interval seconds until stopped."""
        if interval <= 0:
            raise ValueError("Autosave interval must be positive")
        with self._lock:
            self._autosave_interval = interval
            self._schedule()

    def stop_autosave(self) -> None:
        """Cancel the autosave timer if one is running."""
        with self._lock:
            self._autosave_interval = None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def autosaving(self) -> bool:
        return self._autosave_interval is not None

    def _schedule(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        assert self._autosave_interval is not None
        self._timer = threading.Timer(self._autosave_interval, self._autosave_tick)
        self._timer.daemon = True
        self._timer.start()

    def _autosave_tick(self) -> None:
        with self._lock:
            if self._autosave_interval is None:
                return
            self.last_save_ok = save(self.storage, self._document)
            logger.debug("Autosave %s", "succeeded" if self.last_save_ok else "failed")
            self._schedule()

    def close(self) -> None:
        """Stop autosaving and write the document one last time."""
        self.stop_autosave()
        self.save()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
