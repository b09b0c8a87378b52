"""Runtime settings and JSON configuration profiles."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_SMOKE_TEST_QUERY = "select current_database(), current_user, version()"


class ConfigLoadError(ValueError):
    """Configuration profile is missing or cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load configuration file {str(path)!r}: {reason}")
        self.path = path


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Database connection settings from a profile."""

    host: str
    port: int
    name: str
    user: str
    password: str = ""
    search_path: str = ""


@dataclass(frozen=True, slots=True)
class ConfigFile:
    """Parsed ``config/<profile>.json`` file."""

    database: DatabaseConfig
    migration_scripts_dir: str

    def validate(self) -> None:
        """Raise configuration error if required profile values are empty."""

        database = self.database
        for key, value in (
            ("host", database.host),
            ("name", database.name),
            ("user", database.user),
            ("searchPath", database.search_path),
        ):
            if not value:
                raise ValueError(f"config.database.{key} must not be empty.")
        if database.port == 0:
            raise ValueError("config.database.port must be non-zero.")
        if not self.migration_scripts_dir:
            raise ValueError("config.migrationScriptsDir must not be empty.")


@dataclass(slots=True)
class Settings:
    """Process-level settings for running psql and cue."""

    project_root: Path = Path(".")
    psql_executable: str = "psql"
    cue_executable: str = "cue"
    smoke_test_query: str = DEFAULT_SMOKE_TEST_QUERY
    stop_on_error: bool = False

    @classmethod
    def from_env(cls, project_root: Path | None = None) -> Settings:
        """Load settings from environment with defaults for running from the project root."""

        return cls(
            project_root=project_root or Path(os.getenv("PGRATE_PROJECT_ROOT", ".")),
            psql_executable=os.getenv("PGRATE_PSQL_EXECUTABLE", "psql"),
            cue_executable=os.getenv("PGRATE_CUE_EXECUTABLE", "cue"),
            smoke_test_query=os.getenv("PGRATE_SMOKE_QUERY", DEFAULT_SMOKE_TEST_QUERY),
            stop_on_error=_env_bool("PGRATE_STOP_ON_ERROR", default=False),
        )

    def profile_config_path(self, profile: str) -> Path:
        return profile_config_path(profile, self.project_root)


def profile_config_path(profile: str, root: Path = Path(".")) -> Path:
    """Return the JSON profile path, relative to the project root."""

    if not profile or "/" in profile or "\\" in profile:
        raise ValueError(f"Invalid profile name: {profile!r}")
    return root / "config" / f"{profile}.json"


def load_config_file(path: Path) -> ConfigFile:
    """Read a JSON profile of the form ``{"config": {"database": {...}, ...}}``."""

    try:
        raw = json.loads(path.read_text("utf-8"))
    except FileNotFoundError as error:
        raise ConfigLoadError(path, "file not found") from error
    except OSError as error:
        raise ConfigLoadError(path, error.strerror or str(error)) from error
    except json.JSONDecodeError as error:
        raise ConfigLoadError(path, f"invalid JSON ({error})") from error
    except UnicodeDecodeError as error:
        raise ConfigLoadError(path, f"invalid UTF-8 ({error})") from error

    config = _require(raw, "config", dict, path)
    database = _require(config, "database", dict, path, prefix="config")
    return ConfigFile(
        database=DatabaseConfig(
            host=_require(database, "host", str, path, prefix="config.database"),
            port=_require(database, "port", int, path, prefix="config.database"),
            name=_require(database, "name", str, path, prefix="config.database"),
            user=_require(database, "user", str, path, prefix="config.database"),
            password=_optional(database, "password", str, path, prefix="config.database"),
            search_path=_optional(database, "searchPath", str, path, prefix="config.database"),
        ),
        migration_scripts_dir=_require(config, "migrationScriptsDir", str, path, prefix="config"),
    )


def _require(
    payload: Any,
    key: str,
    expected: type,
    path: Path,
    *,
    prefix: str = "",
) -> Any:
    dotted = f"{prefix}.{key}" if prefix else key
    if not isinstance(payload, dict) or key not in payload:
        raise ConfigLoadError(path, f"missing field {dotted!r}")
    return _check_type(payload[key], expected, dotted, path)


def _optional(
    payload: dict[str, Any],
    key: str,
    expected: type,
    path: Path,
    *,
    prefix: str = "",
) -> Any:
    if key not in payload or payload[key] is None:
        return expected()
    return _check_type(payload[key], expected, f"{prefix}.{key}", path)


def _check_type(value: Any, expected: type, dotted: str, path: Path) -> Any:
    # bool is an int subclass; a JSON true is not a port number.
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ConfigLoadError(
            path,
            f"field {dotted!r} must be {expected.__name__}, got {type(value).__name__}",
        )
    return value


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
