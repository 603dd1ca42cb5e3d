from __future__ import annotations

import struct

import pytest

PCM_SUBFORMAT_LE = bytes.fromhex("0100000000001000800000aa00389b71")


def riff_header(file_size: int = 36, file_type: bytes = b"WAVE", tag: bytes = b"RIFF") -> bytes:
    return tag + struct.pack("<I", file_size) + file_type


def fmt_chunk(
    *,
    format_code: int = 1,
    channels: int = 1,
    sample_rate: int = 16_000,
    bits: int = 16,
    extra: bytes = b"",
    tag: bytes = b"fmt ",
) -> bytes:
    block_align = channels * bits // 8
    body = struct.pack(
        "<HHIIHH", format_code, channels, sample_rate, sample_rate * block_align, block_align, bits
    )
    body += extra
    return tag + struct.pack("<I", len(body)) + body


def extensible_extra(
    *,
    bits_per_coded_sample: int = 16,
    channel_mask: int = 0b11,
    sub_format: bytes = PCM_SUBFORMAT_LE,
    trailing: bytes = b"",
) -> bytes:
    body = struct.pack("<HI", bits_per_coded_sample, channel_mask) + sub_format + trailing
    return struct.pack("<H", len(body)) + body


def fmt_with_empty_extension(**kwargs) -> bytes:
    """A `fmt ` chunk whose extra-info size field is present and zero."""
    return fmt_chunk(extra=struct.pack("<H", 0), **kwargs)


def chunk(tag: bytes, payload: bytes, size: int | None = None) -> bytes:
    declared = len(payload) if size is None else size
    return tag + struct.pack("<I", declared) + payload


def data_header(size: int, tag: bytes = b"data") -> bytes:
    return tag + struct.pack("<I", size)


def build_wave(
    *middle: bytes,
    fmt: bytes | None = None,
    payload: bytes = b"",
    data_size: int | None = None,
    data_tag: bytes = b"data",
) -> bytes:
    fmt = fmt if fmt is not None else fmt_chunk()
    declared = len(payload) if data_size is None else data_size
    body = b"WAVE" + fmt + b"".join(middle) + data_header(declared, data_tag) + payload
    return b"RIFF" + struct.pack("<I", len(body)) + body


class WaveBytes:
    """Builders for hand-assembled WAVE streams."""

    riff_header = staticmethod(riff_header)
    fmt_chunk = staticmethod(fmt_chunk)
    fmt_with_empty_extension = staticmethod(fmt_with_empty_extension)
    extensible_extra = staticmethod(extensible_extra)
    chunk = staticmethod(chunk)
    data_header = staticmethod(data_header)
    build = staticmethod(build_wave)


@pytest.fixture
def wave_bytes():
    return WaveBytes


@pytest.fixture
def minimal_wave() -> bytes:
    return build_wave()


@pytest.fixture
def wave_file(tmp_path):
    def _write(content: bytes, name: str = "input.wav"):
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _write
