"""Configuration loading for Trade Journal.

Configuration lives in ``~/.config/tradejournal/config.toml``. Set
``TRADEJOURNAL_HOME`` to use a different directory.
"""

import os
from pathlib import Path
from typing import Optional

import toml

DEFAULT_CURRENCY = "PKR"

CONFIG_TEMPLATE = {
    "openai": {
        "api_key": "your-openai-api-key",
        "model": "gpt-5.2",
    },
    "storage": {
        "db_path": "",
    },
    "display": {
        "currency": DEFAULT_CURRENCY,
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    override = os.environ.get("TRADEJOURNAL_HOME")
    if override:
        return Path(override)
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_config() -> Optional[dict]:
    """Load configuration.

    Returns:
        Parsed config, or None if the file is missing or unreadable.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return None

    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError):
        return None


def init_config() -> Path:
    """Write the config template if no config exists.

    Returns:
        Path of the config file.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if not config_path.exists():
        with open(config_path, "w") as f:
            toml.dump(CONFIG_TEMPLATE, f)

    return config_path


def get_db_path(config: Optional[dict] = None) -> Path:
    """Get the database path, honoring ``[storage] db_path``."""
    configured = (config or {}).get("storage", {}).get("db_path", "")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "journal.db"


def get_currency(config: Optional[dict] = None) -> str:
    """Currency label used in output."""
    return (config or {}).get("display", {}).get("currency", DEFAULT_CURRENCY)


def get_openai_key(config: Optional[dict] = None) -> Optional[str]:
    """OpenAI key from config, ignoring the template placeholder."""
    key = (config or {}).get("openai", {}).get("api_key", "")
    if key and key != CONFIG_TEMPLATE["openai"]["api_key"]:
        return key
    return None


def apply_openai_env(config: Optional[dict] = None) -> None:
    """Export configured OpenAI settings unless the environment sets them."""
    key = get_openai_key(config)
    if key:
        os.environ.setdefault("OPENAI_API_KEY", key)

    model = (config or {}).get("openai", {}).get("model", "")
    if model:
        os.environ.setdefault("OPENAI_MODEL", model)
