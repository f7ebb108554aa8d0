"""Configuration loading and management for srclink."""

from pathlib import Path
from typing import Any

from .core.exceptions import ConfigValidationError
from .core.models.config import HostDeclaration
from .core.settings import find_config_file, load_settings

VALID_LOG_LEVELS = {"debug", "info", "warning", "error"}

# Config keys that can be set via `srclink config`
CONFIGURABLE_KEYS = {
    "sourcelink.providers": {
        "type": list,
        "default": ["github", "gitlab", "bitbucket", "azure_repos", "gitee"],
        "description": "Providers consulted for each source root, in order (comma-separated)",
    },
    "sourcelink.remote": {
        "type": str,
        "default": "origin",
        "description": "Git remote whose URL is recorded for the repository",
    },
    "sourcelink.output": {
        "type": str,
        "default": "sourcelink.json",
        "description": "File written by `srclink generate`",
    },
    "sourcelink.warn_on_missing_source_control": {
        "type": bool,
        "default": True,
        "description": "Warn when no repository URL or commit can be determined",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": True,
        "description": "Output debug logs to a rotating log file",
    },
    "logging.path": {
        "type": str,
        "default": "~/.srclink/srclink.log",
        "description": "Log file used when logging.file is enabled",
    },
}

_SCALAR_SECTIONS = ("sourcelink", "logging")


def _get_default_config() -> dict:
    """Get default config from Pydantic models."""
    from .core.models.config import SrclinkConfig

    return SrclinkConfig().to_dict()


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'sourcelink.remote'."""
    parts = key.split(".")
    for part in parts:
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def _set_nested(d: dict, key: str, value):
    """Set a nested key like 'sourcelink.remote'."""
    parts = key.split(".")
    for part in parts[:-1]:
        if part not in d:
            d[part] = {}
        d = d[part]
    d[parts[-1]] = value


def _format_toml_value(val: Any) -> str:
    if isinstance(val, bool):
        return str(val).lower()
    if isinstance(val, str):
        escaped = val.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(val, list):
        return "[" + ", ".join(_format_toml_value(v) for v in val) + "]"
    return str(val)


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def get_srclink_dir(start_dir: str | None = None) -> Path:
    """
    Get the .srclink directory path, creating it if needed.

    Returns:
        Path to .srclink directory in start_dir or cwd.
    """
    base = Path(start_dir) if start_dir else Path.cwd()
    srclink_dir = base / ".srclink"
    srclink_dir.mkdir(exist_ok=True)
    return srclink_dir


def get_config_path_for_write(start_dir: str | None = None) -> Path:
    """
    Get the path where config should be written.

    Prefers existing .srclink/config.toml, otherwise creates one in start_dir or cwd.
    """
    existing = find_config_file(start_dir)
    if existing and existing.name == "config.toml":
        return existing

    return get_srclink_dir(start_dir) / "config.toml"


def save_config(config: dict, config_path: Path):
    """
    Save configuration to a .srclink/config.toml file.

    Only non-default scalar values are saved; declared hosts are always saved.
    """
    # Build TOML by hand (no TOML writer dependency)
    lines = []

    defaults = _get_default_config()

    for section in _SCALAR_SECTIONS:
        section_lines = []
        for key, val in config.get(section, {}).items():
            default_val = defaults.get(section, {}).get(key)
            if val != default_val and val is not None:
                section_lines.append(f"{key} = {_format_toml_value(val)}")

        if section_lines:
            lines.append(f"[{section}]")
            lines.extend(section_lines)
            lines.append("")

    # [[hosts.<provider>]] - declared hosts as arrays of tables
    for provider_name, hosts in config.get("hosts", {}).items():
        for host in hosts:
            lines.append(f"[[hosts.{provider_name}]]")
            for key, val in host.items():
                if val is not None:
                    lines.append(f"{key} = {_format_toml_value(val)}")
            lines.append("")

    config_path.write_text("\n".join(lines))


def config_get(key: str, start_dir: str | None = None):
    """Get a config value."""
    config = load_config(start_dir=start_dir)
    return _get_nested(config, key)


def config_set(key: str, value: str, start_dir: str | None = None):
    """Set a config value and save to .srclink/config.toml.

    Raises:
        ConfigValidationError: If the key is unknown or the value is invalid
    """
    if key not in CONFIGURABLE_KEYS:
        raise ConfigValidationError(
            f"Unknown config key: {key}. Valid keys: {', '.join(CONFIGURABLE_KEYS.keys())}",
            key=key,
        )

    key_info = CONFIGURABLE_KEYS[key]
    typed_value: Any

    if key_info["type"] is bool:  # type: ignore[index]
        if value.lower() in ("true", "1", "yes", "on"):
            typed_value = True
        elif value.lower() in ("false", "0", "no", "off"):
            typed_value = False
        else:
            raise ConfigValidationError(f"Invalid boolean value: {value}", key=key, value=value)
    elif key_info["type"] is list:  # type: ignore[index]
        if value.strip() == "":
            typed_value = []
        else:
            typed_value = [v.strip() for v in value.split(",")]
    elif key == "logging.level":
        if value.lower() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"Invalid log level: {value}. Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}",
                key=key,
                value=value,
            )
        typed_value = value.lower()
    else:
        typed_value = value

    config = load_config(start_dir=start_dir)
    _set_nested(config, key, typed_value)

    config_path = get_config_path_for_write(start_dir)
    save_config(config, config_path)

    return config_path, typed_value


def config_list():
    """List all configurable keys with descriptions."""
    return CONFIGURABLE_KEYS


def config_add_host(provider: str, host: HostDeclaration, start_dir: str | None = None) -> Path:
    """
    Declare a repository host for a provider in .srclink/config.toml.

    Declaring an authority that the provider already has replaces the
    earlier declaration.

    Returns:
        Path of the config file written
    """
    from .core.container import normalize_provider_name

    config = load_config(start_dir=start_dir)
    hosts = config.setdefault("hosts", {}).setdefault(normalize_provider_name(provider), [])
    hosts[:] = [h for h in hosts if h.get("authority", "").lower() != host.authority.lower()]
    hosts.append(host.model_dump(exclude_none=True))

    config_path = get_config_path_for_write(start_dir)
    save_config(config, config_path)
    return config_path
