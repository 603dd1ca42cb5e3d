"""
RIFF/WAVE chunk decoding.

A stream is decoded in a fixed order: the RIFF header, the mandatory `fmt `
chunk, an optional `fact` chunk, any number of unrecognized chunks, and
finally the `data` chunk header. The audio payload itself is left in the
source and read on demand through `RiffWaveReader.iter_data` or
`RiffWaveReader.data`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator

from .errors import (
    InvalidExtendedInfoError,
    InvalidFactChunkError,
    InvalidFmtChunkError,
    NotRiffError,
    NotWaveError,
)
from .fourcc import ChunkKind
from .logging_utils import EventLogger
from .models import (
    EXTENDED_INFO_MIN_SIZE,
    DataChunk,
    ExtendedInfo,
    FactChunk,
    FmtChunk,
    OtherChunk,
    RiffChunk,
    classify_format,
)
from .reader import ChunkReader
from .report import format_report

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 64 * 1024
DEFAULT_BUFFER_SIZE = 8192
FACT_SAMPLE_LENGTH_SIZE = 4


def read_riff_chunk(reader: ChunkReader) -> RiffChunk:
    chunk_id = reader.read_fourcc()
    if chunk_id.kind is not ChunkKind.RIFF:
        raise NotRiffError()

    file_size = reader.read_u32()
    file_type = reader.read_fourcc()
    if file_type.kind is not ChunkKind.WAVE:
        raise NotWaveError()

    return RiffChunk(id=chunk_id, file_size=file_size, file_type=file_type)


def read_fmt_chunk(reader: ChunkReader) -> FmtChunk:
    chunk_id = reader.read_fourcc()
    if chunk_id.kind is not ChunkKind.FMT:
        raise InvalidFmtChunkError()

    data_size = reader.read_u32()
    audio_format = classify_format(reader.read_u16())
    num_channels = reader.read_u16()
    sample_rate = reader.read_u32()
    byte_rate = reader.read_u32()
    block_align = reader.read_u16()
    bits_per_sample = reader.read_u16()

    # A recognizable tag right after the base fields means there is no
    # cbSize field at all.
    if reader.is_known_fourcc():
        extra_info_size = 0
        extended_info = None
    else:
        extra_info_size = reader.read_u16()
        extended_info = read_extended_info(reader, extra_info_size)

    return FmtChunk(
        id=chunk_id,
        data_size=data_size,
        format=audio_format,
        num_channels=num_channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        extra_info_size=extra_info_size,
        extended_info=extended_info,
    )


def read_extended_info(reader: ChunkReader, size: int) -> ExtendedInfo | None:
    if size == 0:
        return None
    if size < EXTENDED_INFO_MIN_SIZE:
        raise InvalidExtendedInfoError(size)

    bits_per_coded_sample = reader.read_u16()
    channel_mask = reader.read_u32()
    sub_format = reader.read_u128()
    remaining_data = reader.read_exact(size - EXTENDED_INFO_MIN_SIZE)

    return ExtendedInfo(
        bits_per_coded_sample=bits_per_coded_sample,
        channel_mask=channel_mask,
        sub_format=sub_format,
        remaining_data=remaining_data,
    )


def read_fact_chunk(reader: ChunkReader) -> FactChunk | None:
    if reader.peek_fourcc().kind is not ChunkKind.FACT:
        return None

    chunk_id = reader.read_fourcc()
    data_size = reader.read_u32()
    if data_size < FACT_SAMPLE_LENGTH_SIZE:
        raise InvalidFactChunkError(data_size)

    sample_length = reader.read_u32()
    remaining_data = reader.read_exact(data_size - FACT_SAMPLE_LENGTH_SIZE)

    return FactChunk(
        id=chunk_id,
        data_size=data_size,
        sample_length=sample_length,
        remaining_data=remaining_data,
    )


def read_other_chunks(reader: ChunkReader) -> list[OtherChunk]:
    """Collect every chunk up to (not including) the `data` tag."""
    chunks: list[OtherChunk] = []
    while reader.peek_fourcc().kind is not ChunkKind.DATA:
        chunk_id = reader.read_fourcc()
        data_size = reader.read_u32()
        data = reader.read_exact(data_size)
        chunks.append(OtherChunk(id=chunk_id, data_size=data_size, data=data))
    return chunks


def read_data_chunk(reader: ChunkReader) -> DataChunk:
    chunk_id = reader.read_fourcc()
    data_size = reader.read_u32()
    return DataChunk(id=chunk_id, data_size=data_size, pad_byte=data_size % 2)


class RiffWaveReader:
    """A decoded RIFF/WAVE stream.

    Construction decodes every header up to and including the `data` chunk
    header; any failure raises and no reader is produced. The reader then owns
    the source cursor, which only the payload accessors advance.
    """

    def __init__(
        self,
        source: BinaryIO,
        *,
        event_logger: EventLogger | None = None,
    ) -> None:
        self._source: BinaryIO | None = source
        self._owns_source = False
        self._events = event_logger

        reader = ChunkReader(source)

        self.riff_chunk = read_riff_chunk(reader)
        self._emit(
            "chunk_decoded",
            chunk=self.riff_chunk.id.text,
            file_size=self.riff_chunk.file_size,
        )

        self.fmt_chunk = read_fmt_chunk(reader)
        self._emit(
            "chunk_decoded",
            chunk=self.fmt_chunk.id.text,
            data_size=self.fmt_chunk.data_size,
            format=self.fmt_chunk.format_code,
            extended=self.fmt_chunk.extended_info is not None,
        )

        self.fact_chunk = read_fact_chunk(reader)
        if self.fact_chunk is not None:
            self._emit(
                "chunk_decoded",
                chunk=self.fact_chunk.id.text,
                data_size=self.fact_chunk.data_size,
                sample_length=self.fact_chunk.sample_length,
            )

        self.other_chunks = tuple(read_other_chunks(reader))
        for chunk in self.other_chunks:
            self._emit(
                "chunk_decoded",
                chunk=chunk.id.text,
                data_size=chunk.data_size,
                data=chunk.data,
            )

        self.data_chunk = read_data_chunk(reader)
        self._emit(
            "chunk_decoded",
            chunk=self.data_chunk.id.text,
            data_size=self.data_chunk.data_size,
            pad_byte=self.data_chunk.pad_byte,
        )
        logger.debug(
            "Decoded WAVE headers (other_chunks=%d, payload_offset=%d)",
            len(self.other_chunks),
            reader.tell(),
        )

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        event_logger: EventLogger | None = None,
    ) -> "RiffWaveReader":
        """Open `path` and decode it; the returned reader closes the file."""
        fh = Path(path).open("rb", buffering=buffer_size)
        try:
            instance = cls(fh, event_logger=event_logger)
        except BaseException:
            fh.close()
            raise
        instance._owns_source = True
        return instance

    # ------------------------------------------------------------------ #
    # Payload access

    def iter_data(
        self,
        block_size: int = DEFAULT_BLOCK_SIZE,
        *,
        clamp: bool = False,
    ) -> Iterator[bytes]:
        """Yield the remaining source bytes in blocks of at most `block_size`.

        By default everything up to the end of the source is yielded, whatever
        the declared `data_size`. With `clamp=True` reading stops after
        `data_size` bytes. The cursor is shared, so the sequence can only be
        consumed once.
        """
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        source = self._require_source()
        remaining = self.data_chunk.data_size if clamp else None
        return self._read_blocks(source, block_size, remaining)

    def data(
        self,
        block_size: int = DEFAULT_BLOCK_SIZE,
        *,
        clamp: bool = False,
    ) -> Iterator[int]:
        """Yield the remaining payload one byte value at a time."""
        for block in self.iter_data(block_size, clamp=clamp):
            yield from block

    @staticmethod
    def _read_blocks(
        source: BinaryIO, block_size: int, remaining: int | None
    ) -> Iterator[bytes]:
        while remaining is None or remaining > 0:
            want = block_size if remaining is None else min(block_size, remaining)
            block = source.read(want)
            if not block:
                return
            if remaining is not None:
                remaining -= len(block)
            yield block

    # ------------------------------------------------------------------ #
    # Source ownership

    def detach(self) -> BinaryIO:
        """Hand the underlying source back; the reader can no longer read payload."""
        source = self._require_source()
        self._source = None
        self._owns_source = False
        return source

    def close(self) -> None:
        if self._source is None:
            return
        if self._owns_source:
            self._source.close()
        self._source = None

    def __enter__(self) -> "RiffWaveReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __str__(self) -> str:
        return format_report(self)

    def _require_source(self) -> BinaryIO:
        if self._source is None:
            raise ValueError("RiffWaveReader source has been closed or detached.")
        return self._source

    def _emit(self, event_type: str, **fields) -> None:
        if self._events is None:
            return
        self._events.log(event_type, level="debug", **fields)
