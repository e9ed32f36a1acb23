"""Tests for moneygoes.config."""

import stat
from decimal import Decimal
from pathlib import Path

import pytest

from moneygoes.config import (
    Settings,
    create_default_config,
    get_config_path,
    load_config,
    load_settings,
    set_value,
    settings_from_config,
)


class TestConfigPath:
    """Tests for get_config_path."""

    def test_uses_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should live under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "moneygoes" / "config.toml"


class TestDefaultConfig:
    """Tests for creating the default config."""

    def test_created_with_owner_only_permissions(self, tmp_path: Path) -> None:
        """Should write the file readable by the owner only."""
        path = tmp_path / "moneygoes" / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_config(path) == {"currency": "JMD", "monthly_income": 160000, "autosave_seconds": 30}

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should fall back to built-in settings."""
        assert load_settings(tmp_path / "absent.toml") == Settings()


class TestSettingsFromConfig:
    """Tests for settings_from_config."""

    def test_reads_values(self, tmp_path: Path) -> None:
        """Should convert raw values to typed settings."""
        settings = settings_from_config(
            {"currency": "usd", "monthly_income": 4200.5, "autosave_seconds": 10, "data_dir": str(tmp_path)}
        )

        assert settings.currency == "USD"
        assert settings.monthly_income == Decimal("4200.5")
        assert settings.autosave_seconds == 10.0
        assert settings.resolved_data_dir() == tmp_path

    def test_document_defaults(self) -> None:
        """Should carry currency and income into new documents."""
        defaults = settings_from_config({"currency": "EUR", "monthly_income": 3000}).document_defaults()
        assert defaults.currency == "EUR"
        assert defaults.monthly_income == Decimal("3000")

    @pytest.mark.parametrize(
        "config",
        [
            {"currency": ""},
            {"currency": 5},
            {"monthly_income": -1},
            {"monthly_income": "lots"},
            {"autosave_seconds": 0},
            {"autosave_seconds": True},
            {"data_dir": 3},
        ],
    )
    def test_rejects_invalid_values(self, config: dict[str, object]) -> None:
        """Should raise ValueError for bad values."""
        with pytest.raises(ValueError):
            settings_from_config(config)


class TestSetValue:
    """Tests for set_value."""

    def test_creates_file_from_defaults(self, tmp_path: Path) -> None:
        """Should start from the default config when none exists."""
        path = tmp_path / "config.toml"
        set_value("currency", "GBP", path)

        settings = load_settings(path)
        assert settings.currency == "GBP"
        assert settings.monthly_income == Decimal("160000")

    def test_invalid_value_is_not_saved(self, tmp_path: Path) -> None:
        """Should leave the file untouched when validation fails."""
        path = tmp_path / "config.toml"
        create_default_config(path)

        with pytest.raises(ValueError):
            set_value("autosave_seconds", -5, path)

        assert load_config(path)["autosave_seconds"] == 30
