"""Local verification of issued tokens.

Recomputes the canonical signature the same way the remote platform does,
which makes it useful for self-checks and tests. It is not a replacement for
the platform's own access control.
"""

from __future__ import annotations

import hmac
import json
from typing import Any, Dict, Optional

from ..config import IssuerConfig
from ..errors import TokenDecodeError
from ..utils.time import unix_now
from .encoding import decode_token
from .issuer import Clock
from .payload import TOKEN_VERSION
from .signing import CanonicalSigner
from .types import VerificationResult


def _int_field(payload: Dict[str, Any], key: str) -> int:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer")
    return value


class TokenVerifier:
    """Verify tokens issued for one application."""

    def __init__(self, config: IssuerConfig, *, clock: Optional[Clock] = None) -> None:
        self.config = config
        self._clock = clock or unix_now
        self._signer = CanonicalSigner(config.sdk_app_id, config.key)

    def verify(self, token: str, *, identifier: Optional[str] = None) -> VerificationResult:
        try:
            payload_raw = decode_token(token)
        except TokenDecodeError:
            return VerificationResult(False, "token_decode_failed")

        try:
            payload: Dict[str, Any] = json.loads(payload_raw)
            if not isinstance(payload, dict):
                raise ValueError("payload is not an object")
            token_identifier = str(payload["TLS.identifier"])
            issued_at = _int_field(payload, "TLS.time")
            expire = _int_field(payload, "TLS.expire")
            sdk_app_id = _int_field(payload, "TLS.sdkappid")
            sig = str(payload["TLS.sig"])
        except (ValueError, KeyError, TypeError):
            return VerificationResult(False, "invalid_payload_json")

        if payload.get("TLS.ver") != TOKEN_VERSION:
            return VerificationResult(False, "unsupported_version", payload=payload)

        if sdk_app_id != self.config.sdk_app_id:
            return VerificationResult(False, "sdkappid_mismatch", payload=payload)

        if identifier is not None and token_identifier != identifier:
            return VerificationResult(False, "identifier_mismatch", payload=payload)

        user_buf_b64 = payload.get("TLS.userbuf")
        expected = self._signer.sign(token_identifier, issued_at, expire, user_buf_b64).signature
        if not hmac.compare_digest(expected.encode("ascii"), sig.encode("utf-8")):
            return VerificationResult(False, "invalid_signature", payload=payload)

        if issued_at + expire < self._clock():
            return VerificationResult(False, "token_expired", payload=payload)

        return VerificationResult(True, "ok", payload=payload)
