"""
Four-character chunk identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChunkKind(str, Enum):
    RIFF = "RIFF"
    WAVE = "WAVE"
    FMT = "fmt "
    DATA = "data"
    FACT = "fact"
    OTHER = "other"


_KNOWN_TAGS: dict[bytes, ChunkKind] = {
    b"RIFF": ChunkKind.RIFF,
    b"WAVE": ChunkKind.WAVE,
    b"fmt ": ChunkKind.FMT,
    b"data": ChunkKind.DATA,
    b"Data": ChunkKind.DATA,
    b"fact": ChunkKind.FACT,
}


@dataclass(frozen=True)
class FourCC:
    """A decoded chunk tag.

    Tags compare by kind; unrecognized tags additionally compare by their
    text. The raw bytes are kept so headers can be reproduced exactly.
    """

    kind: ChunkKind
    label: str | None = None
    raw: bytes = field(default=b"", compare=False)

    @classmethod
    def from_bytes(cls, data: bytes) -> "FourCC":
        if len(data) != 4:
            raise ValueError(f"FourCC must be exactly 4 bytes, got {len(data)}")
        data = bytes(data)
        kind = _KNOWN_TAGS.get(data)
        if kind is None:
            # latin-1 maps every byte, so odd tags survive untouched
            return cls(ChunkKind.OTHER, data.decode("latin-1"), data)
        return cls(kind, None, data)

    @property
    def is_known(self) -> bool:
        return self.kind is not ChunkKind.OTHER

    @property
    def text(self) -> str:
        if self.label is not None:
            return self.label
        return self.raw.decode("latin-1") if self.raw else self.kind.value

    def to_bytes(self) -> bytes:
        return self.raw if self.raw else self.text.encode("latin-1")

    def __str__(self) -> str:
        return self.text


RIFF = FourCC(ChunkKind.RIFF, raw=b"RIFF")
WAVE = FourCC(ChunkKind.WAVE, raw=b"WAVE")
FMT = FourCC(ChunkKind.FMT, raw=b"fmt ")
DATA = FourCC(ChunkKind.DATA, raw=b"data")
FACT = FourCC(ChunkKind.FACT, raw=b"fact")
