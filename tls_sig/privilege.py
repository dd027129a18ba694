"""Room privilege bitmap carried in PrivateMapKey permission buffers."""

from __future__ import annotations

from enum import IntFlag


class Privilege(IntFlag):
    """One bit per room capability; combine with ``|``."""

    NONE = 0
    CREATE_ROOM = 1
    JOIN_ROOM = 2
    SEND_AUDIO = 4
    RECV_AUDIO = 8
    SEND_VIDEO = 16
    RECV_VIDEO = 32
    SEND_SUB_VIDEO = 64  # screen share
    RECV_SUB_VIDEO = 128  # screen share
    ALL = 255


def describe(privilege_map: int) -> list[str]:
    """Return the capability names enabled in ``privilege_map``."""
    return [
        member.name.lower()
        for member in Privilege
        if member not in (Privilege.NONE, Privilege.ALL) and privilege_map & member
    ]
