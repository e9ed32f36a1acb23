"""Storage collaborators holding the serialized document."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_data_dir() -> Path:
    """Get the default data directory (XDG compliant)."""
    return get_xdg_data_home() / "moneygoes"


class Storage(Protocol):
    """Key/value byte storage for the application document."""

    def get(self, key: str) -> bytes | None:
        """Return stored bytes for key, or None if absent."""
        ...

    def set(self, key: str, data: bytes) -> bool:
        """Store bytes under key, returning False on failure."""
        ...


class MemoryStorage:
    """In-process storage, used by tests and dry runs."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._items: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._items.get(key)

    def set(self, key: str, data: bytes) -> bool:
        self._items[key] = data
        return True


class FileStorage:
    """Stores each key as <directory>/<key>.json.

    Writes go to a temporary file that replaces the target, so a failed
    write never leaves a truncated document behind.
    """

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory if directory is not None else get_data_dir()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def set(self, key: str, data: bytes) -> bool:
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
            tmp_name = None
            return True
        except OSError as e:
            logger.error("Could not write %s: %s", path, e)
            return False
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
