"""Literal JSON text of the token body.

Built from a fixed template so field order and punctuation never depend on a
serializer's choices.
"""

from __future__ import annotations

from typing import Optional

TOKEN_VERSION = "2.0"

_ESCAPES = {'"': '\\"', "\\": "\\\\", "\b": "\\b", "\f": "\\f", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _quote(value: str) -> str:
    out = []
    for ch in value:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch < " ":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def assemble_payload(
    identifier: str,
    sdk_app_id: int,
    expire: int,
    issued_at: int,
    signature: str,
    user_buf_b64: Optional[str] = None,
) -> str:
    parts = [
        f'"TLS.ver":{_quote(TOKEN_VERSION)}',
        f'"TLS.identifier":{_quote(identifier)}',
        f'"TLS.sdkappid":{sdk_app_id}',
        f'"TLS.expire":{expire}',
        f'"TLS.time":{issued_at}',
        f'"TLS.sig":{_quote(signature)}',
    ]
    if user_buf_b64 is not None:
        parts.append(f'"TLS.userbuf":{_quote(user_buf_b64)}')
    return "{" + ",".join(parts) + "}"
