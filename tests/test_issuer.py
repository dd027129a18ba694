import base64
import json
import threading

import pytest

from tls_sig import DEFAULT_EXPIRE, ConfigurationError, EncodingError, Privilege, TLSSigIssuer
from tls_sig.config import IssuerConfig
from tls_sig.token import NamedRoom, NumericRoom, decode_token, decode_user_buf

SDK_APP_ID = 1400000000
SECRET = "testsecret"
NOW = 1_700_000_000


def frozen_issuer() -> TLSSigIssuer:
    return TLSSigIssuer(SDK_APP_ID, SECRET, clock=lambda: NOW)


def test_user_sig_known_vector() -> None:
    """Pins the signature and the decoded body, not the token string.

    Compressed bytes depend on the zlib build in use, so the token itself is
    checked through its decoded text.
    """
    token = frozen_issuer().issue_user_sig("test_user", 86400)

    assert decode_token(token) == (
        '{"TLS.ver":"2.0","TLS.identifier":"test_user","TLS.sdkappid":1400000000,'
        '"TLS.expire":86400,"TLS.time":1700000000,'
        '"TLS.sig":"OwQOZiihYoLjPsCctYDQANffkiSQA9pmeO7hqB20pPg="}'
    )


def test_user_sig_is_deterministic_under_frozen_clock() -> None:
    issuer = frozen_issuer()
    assert issuer.issue_user_sig("test_user", 86400) == issuer.issue_user_sig("test_user", 86400)


def test_user_sig_default_expire() -> None:
    payload = json.loads(decode_token(frozen_issuer().issue_user_sig("test_user")))
    assert payload["TLS.expire"] == DEFAULT_EXPIRE == 15552000


def test_user_sig_has_no_userbuf() -> None:
    payload = json.loads(decode_token(frozen_issuer().issue_user_sig("test_user", 86400)))
    assert "TLS.userbuf" not in payload


def test_private_map_key_known_vector() -> None:
    token = frozen_issuer().issue_private_map_key("test_user", 86400, 1234, Privilege.ALL)
    payload = json.loads(decode_token(token))

    assert payload["TLS.userbuf"] == "AAAJdGVzdF91c2VyU3JOAAAABNJlVUKAAAAA/wAAAAA="
    assert payload["TLS.sig"] == "AqwilCdoEayqpKqDfHITxSr15489tPC4OKheqcd/qYM="


def test_private_map_key_by_room_name_known_vector() -> None:
    privileges = Privilege.JOIN_ROOM | Privilege.RECV_AUDIO | Privilege.RECV_VIDEO
    token = frozen_issuer().issue_private_map_key_by_room_name("test_user", 86400, "room-abc", privileges)
    payload = json.loads(decode_token(token))

    assert payload["TLS.userbuf"] == "AQAJdGVzdF91c2VyU3JOAAAAAABlVUKAAAAAKgAAAAAACHJvb20tYWJj"
    assert payload["TLS.sig"] == "6evgE7YyR2E0kwtrROJExGfzBwgdgK7XBxyBIyPPPMQ="


def test_single_clock_read_per_issue() -> None:
    ticks = iter(range(NOW, NOW + 100))
    issuer = TLSSigIssuer(SDK_APP_ID, SECRET, clock=lambda: next(ticks))

    issued = issuer.issue("test_user", 600, room=NumericRoom(9))

    user_buf = decode_user_buf(issued.user_buf)
    assert issued.issued_at == NOW
    assert user_buf.expire_at == issued.expires_at == NOW + 600
    assert json.loads(issued.payload)["TLS.time"] == NOW


def test_issue_returns_consistent_record() -> None:
    issued = frozen_issuer().issue("test_user", 60, room=NamedRoom("r1"), privilege_map=3, account_type=2)

    assert decode_token(issued.token) == issued.payload
    assert base64.b64encode(issued.user_buf).decode() == json.loads(issued.payload)["TLS.userbuf"]
    assert decode_user_buf(issued.user_buf).account_type == 2


def test_from_config_matches_direct_construction() -> None:
    config = IssuerConfig(sdk_app_id=SDK_APP_ID, secret_key=SECRET.encode())
    issuer = TLSSigIssuer.from_config(config, clock=lambda: NOW)
    assert issuer.issue_user_sig("test_user", 86400) == frozen_issuer().issue_user_sig("test_user", 86400)


def test_empty_secret_rejected_at_construction() -> None:
    with pytest.raises(ConfigurationError):
        TLSSigIssuer(SDK_APP_ID, "")


def test_overlong_identifier_rejected() -> None:
    with pytest.raises(EncodingError):
        frozen_issuer().issue_private_map_key("x" * 70000, 86400, 1, 255)


def test_privilege_map_overflow_rejected() -> None:
    with pytest.raises(EncodingError):
        frozen_issuer().issue_private_map_key("test_user", 86400, 1, 1 << 32)


def test_non_integer_expire_rejected() -> None:
    with pytest.raises(EncodingError):
        frozen_issuer().issue_user_sig("test_user", "86400")  # type: ignore[arg-type]


def test_concurrent_issuance_is_consistent() -> None:
    issuer = frozen_issuer()
    expected = issuer.issue_private_map_key("test_user", 86400, 1234, 255)
    results: list[str] = []

    def worker() -> None:
        for _ in range(20):
            results.append(issuer.issue_private_map_key("test_user", 86400, 1234, 255))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert set(results) == {expected}


@pytest.mark.parametrize("privilege_map", [2.9, "255", None])
def test_non_integer_privilege_map_rejected(privilege_map) -> None:
    with pytest.raises(EncodingError):
        frozen_issuer().issue("test_user", 10, room=NumericRoom(1), privilege_map=privilege_map)


def test_empty_room_name_rejected() -> None:
    with pytest.raises(EncodingError):
        frozen_issuer().issue_private_map_key_by_room_name("test_user", 86400, "", 255)
