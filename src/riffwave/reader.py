"""
Little-endian primitive reads over a seekable binary stream.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from .errors import TruncatedStreamError
from .fourcc import FourCC

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class ChunkReader:
    """Reads fixed-width fields from `source`, advancing its cursor."""

    def __init__(self, source: BinaryIO) -> None:
        self.source = source

    def tell(self) -> int:
        return self.source.tell()

    def read_exact(self, size: int) -> bytes:
        if size == 0:
            return b""
        offset = self.source.tell()
        data = self.source.read(size)
        if data is None or len(data) < size:
            raise TruncatedStreamError(
                expected=size,
                received=len(data or b""),
                offset=offset,
            )
        return data

    def read_u16(self) -> int:
        return _U16.unpack(self.read_exact(2))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self.read_exact(4))[0]

    def read_u128(self) -> int:
        return int.from_bytes(self.read_exact(16), "little")

    def read_fourcc(self) -> FourCC:
        return FourCC.from_bytes(self.read_exact(4))

    def peek_fourcc(self) -> FourCC:
        """Read the next tag and put the cursor back where it was."""
        position = self.source.tell()
        try:
            return self.read_fourcc()
        finally:
            self.source.seek(position, io.SEEK_SET)

    def is_known_fourcc(self) -> bool:
        return self.peek_fourcc().is_known
