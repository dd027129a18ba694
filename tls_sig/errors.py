"""Exception types raised while issuing or decoding tokens."""

from __future__ import annotations


class TLSSigError(ValueError):
    """Base class for all issuer errors."""


class ConfigurationError(TLSSigError):
    """Issuer configuration is missing or invalid."""


class EncodingError(TLSSigError):
    """A value does not fit the fixed-width field it is written into."""


class TokenDecodeError(TLSSigError):
    """A token string cannot be reversed into its payload text."""
