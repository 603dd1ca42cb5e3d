"""
Custom exception hierarchy for riffwave.
"""

from __future__ import annotations

from dataclasses import dataclass


class RiffWaveError(Exception):
    """Base class for riffwave exceptions."""


class NotRiffError(RiffWaveError):
    """Raised when the stream does not start with a RIFF tag."""

    def __init__(self) -> None:
        super().__init__("Not a riff file")


class NotWaveError(RiffWaveError):
    """Raised when the RIFF container type is not WAVE."""

    def __init__(self) -> None:
        super().__init__("Not a wave format file")


class InvalidFmtChunkError(RiffWaveError):
    """Raised when the chunk after the RIFF header is not `fmt `."""

    def __init__(self) -> None:
        super().__init__("Invalid fmt chunk")


class InvalidExtendedInfoError(RiffWaveError):
    """Raised when the declared extended format size is below 22 bytes."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Invalid Extended Info, less than 22 bytes (declared {size})")


class InvalidFactChunkError(RiffWaveError):
    """Raised when a fact chunk declares fewer bytes than its sample length field."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"Invalid fact chunk, less than 4 bytes (declared {size})")


@dataclass
class TruncatedStreamError(RiffWaveError):
    expected: int
    received: int
    offset: int | None = None

    def __str__(self) -> str:
        where = f" at offset {self.offset}" if self.offset is not None else ""
        return (
            f"IO error reading file: expected {self.expected} bytes{where}, "
            f"got {self.received}"
        )
