"""Configuration management for Treemarks.

Stores configuration in ~/.treemarks/config.toml. Bookmarks themselves are
never written to disk.
"""

from pathlib import Path
from typing import Optional, Dict, Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for older Python

from .colors import DEFAULT_COLOR, normalize_color
from .log import DEFAULT_QUIET, LogConfig

DEFAULT_DEBOUNCE_MS = 200


def get_config_dir() -> Path:
    """Get the Treemarks configuration directory."""
    config_dir = Path.home() / ".treemarks"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.toml"


def load_config() -> Dict[str, Any]:
    """Load configuration from the config file."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


def save_config(config: Dict[str, Any]) -> Optional[str]:
    """Save configuration to the config file.

    Returns:
        Error message or None if successful.
    """
    config_file = get_config_file()

    lines = []
    # Top-level keys must come before any table header
    for key, value in config.items():
        if not isinstance(value, dict):
            lines.append(f"{key} = {_format_value(value)}")
    for section, values in config.items():
        if isinstance(values, dict):
            lines.append(f"[{section}]")
            for key, value in values.items():
                lines.append(f"{key} = {_format_value(value)}")
            lines.append("")

    try:
        with open(config_file, "w", encoding="utf-8") as f:
            f.write("\n".join(lines))
    except OSError as e:
        return f"Error saving config: {e}"
    return None


def get_ui_config() -> Dict[str, Any]:
    """Get UI configuration settings."""
    return load_config().get("ui", {})


def set_ui_config(settings: Dict[str, Any]) -> Optional[str]:
    """Set UI configuration settings."""
    config = load_config()
    config["ui"] = settings
    return save_config(config)


def get_search_debounce_ms() -> int:
    """Quiet period before a search pass runs, in milliseconds."""
    value = load_config().get("search", {}).get("debounce_ms", DEFAULT_DEBOUNCE_MS)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_DEBOUNCE_MS
    return value


def get_default_color() -> str:
    """Colour given to new bookmarks by the edit form."""
    value = load_config().get("editor", {}).get("default_color", DEFAULT_COLOR)
    try:
        return normalize_color(value)
    except (TypeError, ValueError):
        return DEFAULT_COLOR


def get_log_config() -> LogConfig:
    return LogConfig.from_section(load_config().get("logging", {}))


def create_default_config() -> None:
    """Create a default configuration file if it doesn't exist."""
    config_file = get_config_file()
    if config_file.exists():
        return

    default_config = {
        "ui": {
            "dark_mode": False,
        },
        "search": {
            "debounce_ms": DEFAULT_DEBOUNCE_MS,
        },
        "editor": {
            "default_color": DEFAULT_COLOR,
        },
        "logging": {
            "level": "INFO",
            "no_color": False,
            "quiet": list(DEFAULT_QUIET),
        },
    }
    save_config(default_config)
