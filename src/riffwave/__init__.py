"""
riffwave package initialization.

`RiffWaveReader` decodes a RIFF/WAVE stream; the CLI entry point is exposed
via `riffwave.cli:main`.
"""

__version__ = "0.1.0"

from .decoder import RiffWaveReader
from .errors import (
    InvalidExtendedInfoError,
    InvalidFactChunkError,
    InvalidFmtChunkError,
    NotRiffError,
    NotWaveError,
    RiffWaveError,
    TruncatedStreamError,
)
from .fourcc import ChunkKind, FourCC
from .models import (
    AudioFormat,
    DataChunk,
    ExtendedInfo,
    FactChunk,
    FmtChunk,
    OtherChunk,
    RiffChunk,
)
from .report import document_summary, format_report

__all__ = [
    "AudioFormat",
    "ChunkKind",
    "DataChunk",
    "ExtendedInfo",
    "FactChunk",
    "FmtChunk",
    "FourCC",
    "InvalidExtendedInfoError",
    "InvalidFactChunkError",
    "InvalidFmtChunkError",
    "NotRiffError",
    "NotWaveError",
    "OtherChunk",
    "RiffChunk",
    "RiffWaveError",
    "RiffWaveReader",
    "TruncatedStreamError",
    "document_summary",
    "format_report",
]
