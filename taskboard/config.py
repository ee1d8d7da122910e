"""Configuration management for the taskboard service."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import yaml

from .database import resolve_database_path

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def _env_flag(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_origins(value: object) -> Tuple[str, ...]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        raise ValueError("cors_origins must be a comma-separated string or a list of strings")
    origins = tuple(item.strip() for item in items if item.strip())
    return origins or ("*",)


def _parse_port(value: object) -> int:
    try:
        port = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid port: {value!r}") from exc
    if not 1 <= port <= 65535:
        raise ValueError(f"Port must be between 1 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    database_path: Path = field(default_factory=lambda: resolve_database_path(None))
    cors_origins: Tuple[str, ...] = ("*",)
    atomic_registration: bool = False

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "Settings":
        """Create :class:`Settings` from raw dictionary data."""

        unknown = set(data.keys()) - {"host", "port", "database_path", "cors_origins", "atomic_registration"}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        raw_db_path = data.get("database_path")
        if raw_db_path:
            expanded = Path(str(raw_db_path)).expanduser()
            if not expanded.is_absolute() and base_path is not None:
                expanded = base_path / expanded
            database_path = expanded.resolve(strict=False)
        else:
            database_path = resolve_database_path(None)

        atomic = data.get("atomic_registration", False)
        if isinstance(atomic, str):
            atomic = _env_flag(atomic)

        return Settings(
            host=str(data.get("host") or DEFAULT_HOST),
            port=_parse_port(data.get("port", DEFAULT_PORT)),
            database_path=database_path,
            cors_origins=_parse_origins(data.get("cors_origins", "*")),
            atomic_registration=bool(atomic),
        )


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "taskboard.yaml").resolve(strict=False)
    return candidate


def _load_yaml(config_path: Path) -> Dict[str, object]:
    if not config_path.is_file():
        return {}
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Configuration file {config_path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")
    return {str(key): value for key, value in raw.items()}


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from the YAML file, then apply environment overrides."""

    env = os.environ if environ is None else environ
    path = config_path or resolve_config_path(env.get("TASKBOARD_CONFIG"))
    data = _load_yaml(path)

    overrides: List[Tuple[str, str]] = [
        ("host", "TASKBOARD_HOST"),
        ("port", "PORT"),
        ("cors_origins", "TASKBOARD_CORS_ORIGINS"),
    ]
    for key, variable in overrides:
        value = env.get(variable)
        if value:
            data[key] = value

    # Relative paths from the environment are taken from the working directory.
    db_override = env.get("TASKBOARD_DB_PATH")
    if db_override:
        data["database_path"] = str(resolve_database_path(db_override))

    flag = env.get("TASKBOARD_ATOMIC_REGISTRATION")
    if flag is not None:
        data["atomic_registration"] = _env_flag(flag)

    return Settings.from_dict(data, base_path=path.parent)


__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "Settings", "load_settings", "resolve_config_path"]
