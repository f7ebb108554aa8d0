"""
Pydantic Settings for srclink configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .models.config import HostDeclaration, LoggingConfig, SourceLinkConfig


def _get_logger():
    from ..services.logging import get_logger

    return get_logger()


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .srclink/config.toml by walking up from start_dir (or cwd).

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / ".srclink" / "config.toml"
        if config_path.exists():
            return config_path

        # Also check for pyproject.toml with [tool.srclink] section
        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "tool" in data and "srclink" in data["tool"]:
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                _get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                _get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            # Handle pyproject.toml vs .srclink/config.toml
            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("srclink", {})

            self._data = data
            self._data["_config_file"] = str(path)

        except tomllib.TOMLDecodeError as e:
            _get_logger().warning("Failed to parse config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to parse config file: {e}"
        except OSError as e:
            _get_logger().warning("Failed to read config file %s: %s", path, e)
            self._data["_config_error"] = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        field_value = data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class SrclinkSettings(BaseSettings):
    """Srclink configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (SRCLINK_<section>__<field>)
    3. TOML config file (.srclink/config.toml or pyproject.toml [tool.srclink])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "SRCLINK_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    logging: LoggingConfig = LoggingConfig()
    sourcelink: SourceLinkConfig = SourceLinkConfig()
    hosts: dict[str, list[HostDeclaration]] = Field(default_factory=dict)

    # Internal fields (not from config)
    _config_file: str | None = None
    _config_error: str | None = None

    @field_validator("hosts", mode="before")
    @classmethod
    def normalize_hosts(cls, v: Any) -> Any:
        """Normalize host declarations.

        Provider names are lowercased with dashes turned into underscores. A
        single ``[hosts.<provider>]`` table or a bare authority string stands for
        a one-element list.
        """
        if not isinstance(v, dict):
            return v

        normalized: dict[str, list[Any]] = {}
        for name, hosts in v.items():
            if isinstance(hosts, (str, dict)):
                hosts = [hosts]
            normalized[str(name).lower().replace("-", "_")] = [
                {"authority": host} if isinstance(host, str) else host for host in hosts
            ]
        return normalized

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        config_path/start_dir cannot be passed through here, so they are
        read from module-level variables set by load_settings().
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        return self._config_file

    @property
    def config_error(self) -> str | None:
        return self._config_error

    def hosts_for(self, provider_name: str) -> list[HostDeclaration]:
        """Hosts declared in configuration for one provider."""
        return list(self.hosts.get(provider_name.lower().replace("-", "_"), []))

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to the nested dict format used by config files."""
        result: dict[str, Any] = {
            "logging": self.logging.model_dump(),
            "sourcelink": self.sourcelink.model_dump(),
            "hosts": {
                name: [host.model_dump(exclude_none=True) for host in hosts]
                for name, hosts in self.hosts.items()
            },
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(config_path: Path | None = None, start_dir: str | None = None) -> SrclinkSettings:
    """Load srclink settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        SrclinkSettings instance with all sources merged
    """
    global _current_config_path, _current_start_dir

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        settings = SrclinkSettings()

        # Copy internal fields from TOML source
        toml_data = TomlConfigSource(SrclinkSettings, config_path, start_dir)()
        if "_config_file" in toml_data:
            settings._config_file = toml_data["_config_file"]
        if "_config_error" in toml_data:
            settings._config_error = toml_data["_config_error"]

        return settings
    finally:
        _current_config_path = None
        _current_start_dir = None
