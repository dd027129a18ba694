"""Permission buffer ("userbuf") encoding.

Layout, all integers big-endian::

    u8   room kind (1 = named room, 0 = numeric room)
    u16  account length
    ...  account (UTF-8)
    u32  sdkappid
    u32  numeric room id (0 for named rooms)
    u32  absolute expiry (unix seconds)
    u32  privilege map
    u32  account type
    u16  room name length        (named rooms only)
    ...  room name (UTF-8)       (named rooms only)

Length fields hold the character count of the text, not its encoded size.
The two only agree for ASCII input; a warning is logged when they differ.
"""

from __future__ import annotations

import logging

from ..errors import EncodingError
from ..utils.binary import BinaryReader, BinaryWriter
from .types import NamedRoom, NumericRoom, RoomRef, UserBuf

logger = logging.getLogger(__name__)

ROOM_KIND_NUMERIC = 0
ROOM_KIND_NAMED = 1


def _write_text(writer: BinaryWriter, value: str, field: str) -> None:
    encoded = value.encode("utf-8")
    if len(encoded) != len(value):
        logger.warning(
            "%s has %d characters but %d UTF-8 bytes; length field records the character count.",
            field,
            len(value),
            len(encoded),
        )
    writer.write_uint16(len(value), field=f"{field} length")
    writer.write_bytes(encoded)


def encode_user_buf(
    account: str,
    sdk_app_id: int,
    room: RoomRef,
    expire_at: int,
    privilege_map: int,
    account_type: int = 0,
) -> bytes:
    """Serialize an identity and its room permissions.

    ``expire_at`` is absolute (issuance time plus the expiry window), so the
    caller decides which clock reading it derives from.
    """
    if isinstance(room, NamedRoom):
        if not room.name:
            raise EncodingError("Named room requires a non-empty room name.")
        room_kind, room_id = ROOM_KIND_NAMED, 0
    elif isinstance(room, NumericRoom):
        room_kind, room_id = ROOM_KIND_NUMERIC, room.room_id
    else:
        raise EncodingError(f"Unsupported room reference {room!r}.")

    writer = BinaryWriter()
    writer.write_uint8(room_kind, field="room kind")
    _write_text(writer, account, "account")
    writer.write_uint32(sdk_app_id, field="sdkappid")
    writer.write_uint32(room_id, field="room_id")
    writer.write_uint32(expire_at, field="expire_at")
    writer.write_uint32(privilege_map, field="privilege_map")
    writer.write_uint32(account_type, field="account_type")
    if isinstance(room, NamedRoom):
        _write_text(writer, room.name, "room name")
    return writer.getvalue()


def _read_text(reader: BinaryReader, field: str) -> str:
    size = reader.read_uint16()
    raw = reader.read_bytes(size)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise EncodingError(f"{field} is not valid UTF-8.") from None


def decode_user_buf(data: bytes) -> UserBuf:
    """Parse a permission buffer produced by ``encode_user_buf``.

    Length fields are read as byte counts, which matches the encoder for
    ASCII accounts and room names.
    """
    reader = BinaryReader(data)
    room_kind = reader.read_uint8()
    if room_kind not in (ROOM_KIND_NUMERIC, ROOM_KIND_NAMED):
        raise EncodingError(f"Unknown room kind {room_kind}.")
    account = _read_text(reader, "account")
    sdk_app_id = reader.read_uint32()
    room_id = reader.read_uint32()
    expire_at = reader.read_uint32()
    privilege_map = reader.read_uint32()
    account_type = reader.read_uint32()

    room: RoomRef
    if room_kind == ROOM_KIND_NAMED:
        room = NamedRoom(_read_text(reader, "room name"))
    else:
        room = NumericRoom(room_id)
    if reader.remaining:
        raise EncodingError(f"{reader.remaining} trailing bytes after permission buffer.")

    return UserBuf(
        account=account,
        sdk_app_id=sdk_app_id,
        room=room,
        expire_at=expire_at,
        privilege_map=privilege_map,
        account_type=account_type,
    )
