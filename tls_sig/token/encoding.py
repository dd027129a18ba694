"""Compression and URL-safe text encoding of token payloads."""

from __future__ import annotations

import base64
import binascii
import zlib

from ..errors import TokenDecodeError

# Standard base64 with "+", "/" and "=" swapped for URL-safe stand-ins.
_TO_TOKEN = str.maketrans({"+": "*", "/": "-", "=": "_"})
_FROM_TOKEN = str.maketrans({"*": "+", "-": "/", "_": "="})


def compress(data: bytes) -> bytes:
    """DEFLATE at the default level, zlib-framed (header and Adler-32 trailer)."""
    return zlib.compress(data, zlib.Z_DEFAULT_COMPRESSION)


def finalize(compressed: bytes) -> str:
    return base64.b64encode(compressed).decode("ascii").translate(_TO_TOKEN)


def unfinalize(token: str) -> bytes:
    try:
        return base64.b64decode(token.translate(_FROM_TOKEN).encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise TokenDecodeError(f"Token is not valid base64: {exc}") from exc


def decompress(data: bytes) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as exc:
        raise TokenDecodeError(f"Token body is not zlib data: {exc}") from exc


def encode_token(payload: str) -> str:
    """Compress and encode payload text into a token string."""
    return finalize(compress(payload.encode("utf-8")))


def decode_token(token: str) -> str:
    """Return the payload text carried by ``token``."""
    raw = decompress(unfinalize(token))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TokenDecodeError("Token payload is not UTF-8 text.") from exc
