"""Issuer configuration and environment loading."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_EXPIRE = 180 * 86400

ENV_SDKAPPID = "TLS_SIG_SDKAPPID"
ENV_SECRET_KEY = "TLS_SIG_SECRET_KEY"
ENV_DEFAULT_EXPIRE = "TLS_SIG_DEFAULT_EXPIRE"
ENV_DEBUG = "TLS_SIG_DEBUG"

_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class IssuerConfig:
    """Static issuer identity: the application id and its shared secret.

    Built once per process and never mutated. ``secret_key`` may be given as
    text (encoded as UTF-8) or as raw bytes.
    """

    sdk_app_id: int
    secret_key: str | bytes
    default_expire: int = DEFAULT_EXPIRE

    def __post_init__(self) -> None:
        if isinstance(self.sdk_app_id, bool) or not isinstance(self.sdk_app_id, int):
            raise ConfigurationError("sdk_app_id must be an integer.")
        if not 0 <= self.sdk_app_id <= _UINT32_MAX:
            raise ConfigurationError(f"sdk_app_id={self.sdk_app_id} is outside the 32-bit range.")
        if not isinstance(self.secret_key, (str, bytes)) or not self.secret_key:
            raise ConfigurationError("secret_key must be a non-empty string.")
        if isinstance(self.default_expire, bool) or not isinstance(self.default_expire, int) or self.default_expire <= 0:
            raise ConfigurationError("default_expire must be a positive number of seconds.")

    @property
    def key(self) -> bytes:
        """Secret as bytes, ready for use as an HMAC key."""
        if isinstance(self.secret_key, bytes):
            return self.secret_key
        return self.secret_key.encode("utf-8")

    def __repr__(self) -> str:
        return f"IssuerConfig(sdk_app_id={self.sdk_app_id}, secret_key='***', default_expire={self.default_expire})"

    @classmethod
    def from_env(cls) -> "IssuerConfig":
        """Build a config from ``TLS_SIG_*`` environment variables."""
        sdk_app_id = _get_env_int(ENV_SDKAPPID, None)
        if sdk_app_id is None:
            raise ConfigurationError(f"Missing required environment variable {ENV_SDKAPPID}.")
        secret_key = os.getenv(ENV_SECRET_KEY, "")
        if not secret_key.strip():
            raise ConfigurationError(f"Missing required environment variable {ENV_SECRET_KEY}.")
        return cls(
            sdk_app_id=sdk_app_id,
            secret_key=secret_key,
            default_expire=_get_env_int(ENV_DEFAULT_EXPIRE, DEFAULT_EXPIRE),
        )


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(key: str, default: int | None) -> int | None:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer value.") from None


def setup_logging() -> bool:
    """Configure root logging for command-line use; returns whether debug is on."""
    debug_enabled = is_truthy(os.getenv(ENV_DEBUG))
    logging.basicConfig(
        level=logging.DEBUG if debug_enabled else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return debug_enabled
