"""
Decoded chunk records for RIFF/WAVE streams.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import IntEnum

from .fourcc import FourCC

EXTENDED_INFO_MIN_SIZE = 22


class AudioFormat(IntEnum):
    UNCOMPRESSED_PCM = 1
    IEEE_FLOAT = 3
    G711_ALAW = 6
    G711_ULAW = 7
    EXTENSIBLE = 0xFFFE


_FORMAT_NAMES = {
    AudioFormat.UNCOMPRESSED_PCM: "UncompressedPCM",
    AudioFormat.IEEE_FLOAT: "IeeeFloatingPoint",
    AudioFormat.G711_ALAW: "G711ALaw",
    AudioFormat.G711_ULAW: "G711ULaw",
    AudioFormat.EXTENSIBLE: "ExtendedWave",
}


def classify_format(code: int) -> AudioFormat | int:
    """Map a WAVE format tag onto `AudioFormat`, passing unknown codes through."""
    try:
        return AudioFormat(code)
    except ValueError:
        return code


def format_name(value: AudioFormat | int) -> str:
    if isinstance(value, AudioFormat):
        return _FORMAT_NAMES[value]
    return f"Other({value})"


@dataclass(frozen=True)
class RiffChunk:
    id: FourCC
    file_size: int
    file_type: FourCC


@dataclass(frozen=True)
class ExtendedInfo:
    bits_per_coded_sample: int
    channel_mask: int
    sub_format: int
    remaining_data: bytes = b""

    @property
    def sub_format_guid(self) -> uuid.UUID:
        # stored as a little-endian u128, which is the GUID's byte order on disk
        return uuid.UUID(bytes_le=self.sub_format.to_bytes(16, "little"))


@dataclass(frozen=True)
class FmtChunk:
    id: FourCC
    data_size: int
    format: AudioFormat | int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    extra_info_size: int = 0
    extended_info: ExtendedInfo | None = None

    @property
    def format_code(self) -> int:
        return int(self.format)


@dataclass(frozen=True)
class FactChunk:
    id: FourCC
    data_size: int
    sample_length: int
    remaining_data: bytes = b""


@dataclass(frozen=True)
class OtherChunk:
    id: FourCC
    data_size: int
    data: bytes


@dataclass(frozen=True)
class DataChunk:
    id: FourCC
    data_size: int
    pad_byte: int
