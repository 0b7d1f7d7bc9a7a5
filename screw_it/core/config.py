"""Typed configuration loading.

Configuration is optional: a project may put a ``.screw-it.toml`` next to
its ``package.json`` to override the defaults below.

    commit_message = "chore: release v{version}"
    tag_prefix = "v"
    verbose = false

    [commands]
    git = "git"
    npm = "npm"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from .result import Err, Ok, Result

Table = dict[str, object]

__all__ = [
    "CONFIG_FILE_NAME",
    "CommandsConfig",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = ".screw-it.toml"

DEFAULT_COMMIT_MESSAGE = "chore: release v{version}"
DEFAULT_TAG_PREFIX = "v"


def _as_table(obj: object) -> Table | None:
    """Return ``obj`` if it is a TOML table (a dict with string keys)."""
    if isinstance(obj, dict) and all(isinstance(k, str) for k in obj):
        return cast(Table, obj)
    return None


def _text(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string value, or None when missing, blank or not a string."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class CommandsConfig:
    """Executables used for the external tools."""

    git: str = "git"
    npm: str = "npm"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Release settings.

    Attributes:
        commit_message: Template for the release commit, ``{version}`` is replaced.
        tag_prefix: Prefix of the release tag (``v`` gives ``v1.2.3``).
        verbose: Echo every external command before it runs.
        commands: Executables for git and npm.
    """

    commit_message: str = DEFAULT_COMMIT_MESSAGE
    tag_prefix: str = DEFAULT_TAG_PREFIX
    verbose: bool = False
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    def commit_message_for(self, version: str) -> str:
        return self.commit_message.replace("{version}", version)

    def tag_for(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a ReleaseConfig from parsed TOML.

        Raises:
            ValueError: If the commit message template has no ``{version}``.
        """
        commands = _as_table(data.get("commands")) or {}

        commit_message = _text(data, "commit_message") or DEFAULT_COMMIT_MESSAGE
        if "{version}" not in commit_message:
            raise ValueError("commit_message must contain {version}")

        # An empty prefix is allowed, so only fall back when the key is absent.
        tag_prefix = data.get("tag_prefix", DEFAULT_TAG_PREFIX)
        if not isinstance(tag_prefix, str):
            raise ValueError("tag_prefix must be a string")

        return cls(
            commit_message=commit_message,
            tag_prefix=tag_prefix.strip(),
            verbose=data.get("verbose") is True,
            commands=CommandsConfig(
                git=_text(commands, "git") or "git",
                npm=_text(commands, "npm") or "npm",
            ),
        )


def _parse_toml(path: Path) -> Result[Table, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = _as_table(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the ``.screw-it.toml`` file

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(directory: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``.screw-it.toml`` from ``directory``, or defaults if there is none.

    A file that exists but cannot be parsed is still an error.
    """
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
