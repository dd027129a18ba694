"""Canonical signing string and its HMAC-SHA256 signature."""

from __future__ import annotations

import base64
import hmac
from hashlib import sha256
from typing import Optional

from .types import SigningMaterial


def canonical_string(
    identifier: str,
    sdk_app_id: int,
    issued_at: int,
    expire: int,
    user_buf_b64: Optional[str] = None,
) -> str:
    """Return the exact text the remote side recomputes to check a signature.

    Every line ends with a newline, including the optional userbuf line.
    """
    content = (
        f"TLS.identifier:{identifier}\n"
        f"TLS.sdkappid:{sdk_app_id}\n"
        f"TLS.time:{issued_at}\n"
        f"TLS.expire:{expire}\n"
    )
    if user_buf_b64 is not None:
        content += f"TLS.userbuf:{user_buf_b64}\n"
    return content


class CanonicalSigner:
    """Sign canonical strings for one application with its shared secret."""

    def __init__(self, sdk_app_id: int, key: bytes) -> None:
        self.sdk_app_id = sdk_app_id
        self._key = key

    def sign(
        self,
        identifier: str,
        issued_at: int,
        expire: int,
        user_buf_b64: Optional[str] = None,
    ) -> SigningMaterial:
        canonical = canonical_string(identifier, self.sdk_app_id, issued_at, expire, user_buf_b64)
        digest = hmac.new(self._key, canonical.encode("utf-8"), sha256).digest()
        return SigningMaterial(canonical=canonical, signature=base64.b64encode(digest).decode("ascii"))
