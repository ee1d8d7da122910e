from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.config import DEFAULT_PORT, Settings, load_settings, resolve_config_path


def test_defaults_without_file_or_environment(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.yaml", environ={})

    assert settings.port == DEFAULT_PORT == 3000
    assert settings.host == "0.0.0.0"
    assert settings.cors_origins == ("*",)
    assert settings.atomic_registration is False
    assert settings.database_path.name == "taskboard.sqlite3"


def test_yaml_values_are_loaded(tmp_path: Path) -> None:
    config = tmp_path / "taskboard.yaml"
    config.write_text(
        "host: 127.0.0.1\n"
        "port: 8080\n"
        "database_path: db/users.sqlite3\n"
        "cors_origins:\n"
        "  - http://localhost:5173\n"
        "atomic_registration: true\n",
        encoding="utf-8",
    )

    settings = load_settings(config, environ={})

    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.database_path == (tmp_path / "db" / "users.sqlite3").resolve()
    assert settings.cors_origins == ("http://localhost:5173",)
    assert settings.atomic_registration is True


def test_environment_overrides_file(tmp_path: Path) -> None:
    config = tmp_path / "taskboard.yaml"
    config.write_text("port: 8080\natomic_registration: true\n", encoding="utf-8")

    settings = load_settings(
        config,
        environ={
            "PORT": "4000",
            "TASKBOARD_DB_PATH": str(tmp_path / "env.sqlite3"),
            "TASKBOARD_CORS_ORIGINS": "https://a.example, https://b.example",
            "TASKBOARD_ATOMIC_REGISTRATION": "off",
        },
    )

    assert settings.port == 4000
    assert settings.database_path == (tmp_path / "env.sqlite3").resolve()
    assert settings.cors_origins == ("https://a.example", "https://b.example")
    assert settings.atomic_registration is False


def test_config_path_from_environment(tmp_path: Path) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("port: 5000\n", encoding="utf-8")

    settings = load_settings(environ={"TASKBOARD_CONFIG": str(config)})
    assert settings.port == 5000


@pytest.mark.parametrize("port", ["0", "70000", "http"])
def test_invalid_port_is_rejected(tmp_path: Path, port: str) -> None:
    with pytest.raises(ValueError):
        load_settings(tmp_path / "missing.yaml", environ={"PORT": port})


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown configuration keys"):
        Settings.from_dict({"prot": 3000})


def test_malformed_yaml_is_rejected(tmp_path: Path) -> None:
    config = tmp_path / "taskboard.yaml"
    config.write_text("port: [unterminated\n", encoding="utf-8")
    with pytest.raises(ValueError, match="not valid YAML"):
        load_settings(config, environ={})


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    config = tmp_path / "taskboard.yaml"
    config.write_text("- port\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_settings(config, environ={})


def test_resolve_config_path_default() -> None:
    path = resolve_config_path(None)
    assert path.name == "taskboard.yaml"
    assert path.parent.name == "config"


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("on", True), ("no", False), ("off", False)])
def test_string_atomic_registration_in_yaml(tmp_path: Path, raw: str, expected: bool) -> None:
    config = tmp_path / "taskboard.yaml"
    config.write_text(f'atomic_registration: "{raw}"\n', encoding="utf-8")

    settings = load_settings(config, environ={})

    assert settings.atomic_registration is expected
