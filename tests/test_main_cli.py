from unittest import mock

from main import _list_remote_users, _parse_args


def test_default_command_invokes_serve() -> None:
    args = _parse_args([])
    assert args.command == "serve"
    assert args.port is None


def test_default_command_accepts_options_without_subcommand() -> None:
    args = _parse_args(["--host", "127.0.0.1", "--port", "8080"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 8080


def test_admin_subcommand_still_available() -> None:
    args = _parse_args(["admin", "--service-url", "http://localhost:3000"])
    assert args.command == "admin"
    assert args.service_url == "http://localhost:3000"


def test_remote_listing_prints_users(capsys) -> None:
    response = mock.Mock(status_code=200)
    response.json.return_value = [{"id": 1, "name": "Ana", "email": "ana@x.com"}]

    with mock.patch("main.httpx.get", return_value=response) as get:
        _list_remote_users("http://localhost:3000/")

    get.assert_called_once_with("http://localhost:3000/api/users", timeout=10.0)
    assert "#1 Ana <ana@x.com>" in capsys.readouterr().out


def test_remote_listing_requires_url(capsys) -> None:
    _list_remote_users(None)
    assert "No service URL configured" in capsys.readouterr().out
