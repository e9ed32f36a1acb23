"""Tests for moneygoes.store.storage."""

from pathlib import Path

import pytest

from moneygoes.store.storage import FileStorage, MemoryStorage, get_data_dir


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_get_missing(self) -> None:
        """Should return None for unknown keys."""
        assert MemoryStorage().get("nothing") is None

    def test_set_then_get(self) -> None:
        """Should return what was stored."""
        storage = MemoryStorage()
        assert storage.set("k", b"v") is True
        assert storage.get("k") == b"v"


class TestFileStorage:
    """Tests for FileStorage."""

    def test_get_missing(self, tmp_path: Path) -> None:
        """Should return None when the file doesn't exist."""
        assert FileStorage(tmp_path).get("doc") is None

    def test_set_creates_directory_and_file(self, tmp_path: Path) -> None:
        """Should create the data directory on first write."""
        storage = FileStorage(tmp_path / "nested" / "data")

        assert storage.set("doc", b'{"a": 1}') is True
        assert storage.path_for("doc").read_bytes() == b'{"a": 1}'
        assert storage.get("doc") == b'{"a": 1}'
        assert storage.exists("doc")

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        """Should replace the file atomically."""
        storage = FileStorage(tmp_path)
        storage.set("doc", b"one")
        storage.set("doc", b"two")

        assert storage.get("doc") == b"two"
        assert [p.name for p in tmp_path.iterdir()] == ["doc.json"]

    def test_write_failure_returns_false(self, tmp_path: Path) -> None:
        """Should report failure when the directory can't be created."""
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        assert FileStorage(blocker / "data").set("doc", b"x") is False


class TestDataDir:
    """Tests for get_data_dir."""

    def test_uses_xdg_data_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should honour XDG_DATA_HOME."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert get_data_dir() == tmp_path / "moneygoes"

    def test_falls_back_to_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to ~/.local/share."""
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_data_dir() == tmp_path / ".local" / "share" / "moneygoes"
