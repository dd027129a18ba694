"""Big-endian binary writer/reader for fixed-width wire layouts."""

from __future__ import annotations

import struct

from ..errors import EncodingError

_UINT8 = struct.Struct(">B")
_UINT16 = struct.Struct(">H")
_UINT32 = struct.Struct(">I")


class BinaryWriter:
    """Append-only buffer; every write lands after the previous one."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def _pack(self, fmt: struct.Struct, value: int, field: str) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingError(f"{field} must be an integer, got {type(value).__name__}.")
        try:
            self._buf.extend(fmt.pack(value))
        except struct.error:
            max_value = (1 << (fmt.size * 8)) - 1
            raise EncodingError(f"{field}={value} does not fit in [0, {max_value}].") from None

    def write_uint8(self, value: int, field: str = "uint8") -> "BinaryWriter":
        self._pack(_UINT8, value, field)
        return self

    def write_uint16(self, value: int, field: str = "uint16") -> "BinaryWriter":
        self._pack(_UINT16, value, field)
        return self

    def write_uint32(self, value: int, field: str = "uint32") -> "BinaryWriter":
        self._pack(_UINT32, value, field)
        return self

    def write_bytes(self, data: bytes) -> "BinaryWriter":
        self._buf.extend(data)
        return self

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class BinaryReader:
    """Sequential reader matching ``BinaryWriter``'s layout."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise EncodingError(
                f"Buffer truncated: need {size} bytes at offset {self._offset}, have {len(self._data) - self._offset}."
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def read_uint8(self) -> int:
        return _UINT8.unpack(self._take(1))[0]

    def read_uint16(self) -> int:
        return _UINT16.unpack(self._take(2))[0]

    def read_uint32(self) -> int:
        return _UINT32.unpack(self._take(4))[0]

    def read_bytes(self, size: int) -> bytes:
        return self._take(size)

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset
