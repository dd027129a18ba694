import json

import pytest

from tls_sig.cli import main
from tls_sig.token import decode_token


def test_usersig_from_env(monkeypatch, capsys) -> None:
    monkeypatch.setenv("TLS_SIG_SDKAPPID", "1400000000")
    monkeypatch.setenv("TLS_SIG_SECRET_KEY", "testsecret")

    assert main(["usersig", "test_user", "--expire", "600"]) == 0

    token = capsys.readouterr().out.strip()
    payload = json.loads(decode_token(token))
    assert payload["TLS.identifier"] == "test_user"
    assert payload["TLS.expire"] == 600


def test_privmapkey_with_room_name(capsys) -> None:
    argv = [
        "--sdk-app-id", "1400000000",
        "--secret-key", "testsecret",
        "privmapkey", "test_user",
        "--expire", "600",
        "--room-name", "room-abc",
        "--privilege-map", "42",
    ]
    assert main(argv) == 0

    payload = json.loads(decode_token(capsys.readouterr().out.strip()))
    assert "TLS.userbuf" in payload


def test_decode_command(capsys) -> None:
    assert main(["--sdk-app-id", "1", "--secret-key", "s", "usersig", "bob"]) == 0
    token = capsys.readouterr().out.strip()

    assert main(["decode", token]) == 0
    assert json.loads(capsys.readouterr().out)["TLS.identifier"] == "bob"


def test_missing_config_reports_error(monkeypatch, capsys) -> None:
    monkeypatch.delenv("TLS_SIG_SDKAPPID", raising=False)
    monkeypatch.delenv("TLS_SIG_SECRET_KEY", raising=False)

    assert main(["usersig", "bob"]) == 2
    assert "TLS_SIG_SDKAPPID" in capsys.readouterr().err


def test_partial_credentials_rejected(monkeypatch, capsys) -> None:
    monkeypatch.setenv("TLS_SIG_SDKAPPID", "1400000000")
    monkeypatch.setenv("TLS_SIG_SECRET_KEY", "testsecret")

    with pytest.raises(SystemExit) as excinfo:
        main(["--sdk-app-id", "1", "usersig", "bob"])

    assert excinfo.value.code == 2
    assert "--secret-key" in capsys.readouterr().err
