"""UserSig and PrivateMapKey issuance."""

from __future__ import annotations

import base64
import logging
from typing import Callable, Optional

from ..config import DEFAULT_EXPIRE, IssuerConfig
from ..errors import EncodingError
from ..privilege import Privilege
from ..utils.time import unix_now
from .encoding import encode_token
from .payload import assemble_payload
from .signing import CanonicalSigner
from .types import IssuedToken, NamedRoom, NumericRoom, RoomRef
from .userbuf import encode_user_buf

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


class TLSSigIssuer:
    """Issue signed tokens for one application.

    Holds only the immutable ``IssuerConfig``; each call builds its own
    buffers, so one instance can be shared across threads.
    """

    def __init__(
        self,
        sdk_app_id: int,
        secret_key: str | bytes,
        *,
        default_expire: int = DEFAULT_EXPIRE,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = IssuerConfig(sdk_app_id=sdk_app_id, secret_key=secret_key, default_expire=default_expire)
        self._clock = clock or unix_now
        self._signer = CanonicalSigner(self.config.sdk_app_id, self.config.key)

    @classmethod
    def from_config(cls, config: IssuerConfig, *, clock: Optional[Clock] = None) -> "TLSSigIssuer":
        return cls(config.sdk_app_id, config.secret_key, default_expire=config.default_expire, clock=clock)

    @classmethod
    def from_env(cls, *, clock: Optional[Clock] = None) -> "TLSSigIssuer":
        return cls.from_config(IssuerConfig.from_env(), clock=clock)

    def issue_user_sig(self, identifier: str, expire: Optional[int] = None) -> str:
        """Issue a UserSig: proves ``identifier`` may use the platform at all."""
        return self.issue(identifier, expire).token

    def issue_private_map_key(
        self,
        identifier: str,
        expire: int,
        room_id: int,
        privilege_map: int = Privilege.ALL,
    ) -> str:
        """Issue a PrivateMapKey restricting ``identifier`` inside a numeric room."""
        return self.issue(identifier, expire, room=NumericRoom(room_id), privilege_map=privilege_map).token

    def issue_private_map_key_by_room_name(
        self,
        identifier: str,
        expire: int,
        room_name: str,
        privilege_map: int = Privilege.ALL,
    ) -> str:
        """Issue a PrivateMapKey restricting ``identifier`` inside a named room.

        An empty ``room_name`` raises ``EncodingError`` instead of falling back
        to the numeric-room layout with room id 0.
        """
        return self.issue(identifier, expire, room=NamedRoom(room_name), privilege_map=privilege_map).token

    def issue(
        self,
        identifier: str,
        expire: Optional[int] = None,
        *,
        room: Optional[RoomRef] = None,
        privilege_map: int = Privilege.ALL,
        account_type: int = 0,
    ) -> IssuedToken:
        """Run the full pipeline; a permission buffer is embedded iff ``room`` is given."""
        if expire is None:
            expire = self.config.default_expire
        if isinstance(expire, bool) or not isinstance(expire, int):
            raise EncodingError("expire must be an integer number of seconds.")

        issued_at = self._clock()

        user_buf: Optional[bytes] = None
        user_buf_b64: Optional[str] = None
        if room is not None:
            user_buf = encode_user_buf(
                identifier,
                self.config.sdk_app_id,
                room,
                issued_at + expire,
                privilege_map,
                account_type,
            )
            user_buf_b64 = base64.b64encode(user_buf).decode("ascii")

        material = self._signer.sign(identifier, issued_at, expire, user_buf_b64)
        payload = assemble_payload(
            identifier,
            self.config.sdk_app_id,
            expire,
            issued_at,
            material.signature,
            user_buf_b64,
        )
        token = encode_token(payload)

        logger.debug(
            "Issued token identifier=%s sdkappid=%s expire=%s userbuf=%s",
            identifier,
            self.config.sdk_app_id,
            expire,
            user_buf is not None,
        )
        return IssuedToken(
            token=token,
            identifier=identifier,
            issued_at=issued_at,
            expire=expire,
            signature=material.signature,
            payload=payload,
            user_buf=user_buf,
        )
