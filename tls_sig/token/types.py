"""Token pipeline datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class NumericRoom:
    """Room addressed by its 32-bit numeric id."""

    room_id: int


@dataclass(frozen=True)
class NamedRoom:
    """Room addressed by a free-form string id."""

    name: str


RoomRef = Union[NumericRoom, NamedRoom]


@dataclass(frozen=True)
class UserBuf:
    """Decoded permission buffer."""

    account: str
    sdk_app_id: int
    room: RoomRef
    expire_at: int
    privilege_map: int
    account_type: int


@dataclass(frozen=True)
class SigningMaterial:
    canonical: str
    signature: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    identifier: str
    issued_at: int
    expire: int
    signature: str
    payload: str
    user_buf: Optional[bytes] = None

    @property
    def expires_at(self) -> int:
        return self.issued_at + self.expire


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: str
    payload: Dict[str, Any] | None = None
