"""Token issuance pipeline and local verification."""

from .encoding import decode_token, encode_token
from .issuer import TLSSigIssuer
from .types import IssuedToken, NamedRoom, NumericRoom, RoomRef, UserBuf, VerificationResult
from .userbuf import decode_user_buf, encode_user_buf
from .verifier import TokenVerifier

__all__ = [
    "TLSSigIssuer",
    "TokenVerifier",
    "IssuedToken",
    "VerificationResult",
    "NumericRoom",
    "NamedRoom",
    "RoomRef",
    "UserBuf",
    "encode_user_buf",
    "decode_user_buf",
    "encode_token",
    "decode_token",
]
