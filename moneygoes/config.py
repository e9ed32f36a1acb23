"""Configuration file management for moneygoes."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from moneygoes.domain.formatting import parse_money
from moneygoes.domain.models import (
    DEFAULT_CURRENCY,
    DEFAULT_MONTHLY_INCOME,
    CurrencyCode,
    DocumentDefaults,
    Money,
)
from moneygoes.store.session import DEFAULT_AUTOSAVE_SECONDS
from moneygoes.store.storage import get_data_dir


@dataclass(frozen=True)
class Settings:
    """Typed view of the config file."""

    currency: CurrencyCode = DEFAULT_CURRENCY
    monthly_income: Money = DEFAULT_MONTHLY_INCOME
    autosave_seconds: float = DEFAULT_AUTOSAVE_SECONDS
    data_dir: Path | None = None

    def document_defaults(self) -> DocumentDefaults:
        return DocumentDefaults(currency=self.currency, monthly_income=self.monthly_income)

    def resolved_data_dir(self) -> Path:
        return self.data_dir if self.data_dir is not None else get_data_dir()


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "moneygoes" / "config.toml"


def default_config() -> dict[str, Any]:
    """Config written by 'moneygoes init'."""
    return {
        "currency": str(DEFAULT_CURRENCY),
        "monthly_income": int(DEFAULT_MONTHLY_INCOME),
        "autosave_seconds": int(DEFAULT_AUTOSAVE_SECONDS),
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file isn't valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Build Settings from a config dictionary.

    Raises:
        ValueError: If a value has the wrong type or range.
    """
    currency = config.get("currency", DEFAULT_CURRENCY)
    if not isinstance(currency, str) or not currency.strip():
        raise ValueError(f"Invalid currency: {currency!r}")

    income = parse_money(config.get("monthly_income", DEFAULT_MONTHLY_INCOME))
    if income is None or income < 0:
        raise ValueError(f"Invalid monthly_income: {config.get('monthly_income')!r}")

    autosave = config.get("autosave_seconds", DEFAULT_AUTOSAVE_SECONDS)
    if isinstance(autosave, bool) or not isinstance(autosave, (int, float)) or autosave <= 0:
        raise ValueError(f"Invalid autosave_seconds: {autosave!r}")

    data_dir = config.get("data_dir")
    if data_dir is not None and not isinstance(data_dir, str):
        raise ValueError(f"Invalid data_dir: {data_dir!r}")

    return Settings(
        currency=CurrencyCode(currency.strip().upper()),
        monthly_income=income,
        autosave_seconds=float(autosave),
        data_dir=Path(data_dir).expanduser() if data_dir else None,
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when no config file exists.

    Raises:
        ValueError: If the config file holds invalid values.
        tomllib.TOMLDecodeError: If the file isn't valid TOML.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return settings_from_config(config)


def set_value(key: str, value: Any, config_path: Path | None = None) -> None:
    """Update one config key, creating the file if needed.

    Raises:
        ValueError: If the resulting config would be invalid.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = default_config()

    config[key] = value
    settings_from_config(config)
    save_config(config, config_path)
