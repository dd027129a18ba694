"""TLS signature issuer.

Issues UserSig and PrivateMapKey tokens for a realtime-communication
platform that authenticates identities with a shared application secret.
"""

from .config import DEFAULT_EXPIRE, IssuerConfig
from .errors import ConfigurationError, EncodingError, TLSSigError, TokenDecodeError
from .privilege import Privilege
from .token import NamedRoom, NumericRoom, TLSSigIssuer, TokenVerifier

__all__ = [
    "DEFAULT_EXPIRE",
    "IssuerConfig",
    "TLSSigIssuer",
    "TokenVerifier",
    "Privilege",
    "NumericRoom",
    "NamedRoom",
    "TLSSigError",
    "ConfigurationError",
    "EncodingError",
    "TokenDecodeError",
]
