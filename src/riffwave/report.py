"""
Human-readable and JSON-ready summaries of a decoded WAVE stream.

Both helpers only read the public chunk records of the reader.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .models import format_name

if TYPE_CHECKING:
    from .decoder import RiffWaveReader


def _hex_list(data: bytes) -> str:
    return "[" + ", ".join(f"{byte:x}" for byte in data) + "]"


def _quoted_list(items: list[str]) -> str:
    return "[" + ", ".join(f'"{item}"' for item in items) + "]"


def format_report(reader: "RiffWaveReader") -> str:
    riff = reader.riff_chunk
    fmt = reader.fmt_chunk

    lines = [
        "------ Header ------",
        f"Size:            {riff.file_size}",
        f"Format:          {format_name(fmt.format)}",
        f"Channels:        {fmt.num_channels}",
        f"Sample Rate:     {fmt.sample_rate}",
        f"Byte Rate:       {fmt.byte_rate}",
        f"Block Align:     {fmt.block_align}",
        f"Bits per Raw:    {fmt.bits_per_sample}",
        f"Extra Info:      {fmt.extra_info_size}",
    ]

    extended = fmt.extended_info
    if extended is not None:
        lines += [
            "----- Extended -----",
            f"Bits per Coded:  {extended.bits_per_coded_sample}",
            f"Channel Mask:    {extended.channel_mask:#018b}",
            f"Sub Format:      {extended.sub_format:x}",
            f"Remaining Data:  {_hex_list(extended.remaining_data)}",
        ]

    fact = reader.fact_chunk
    if fact is not None:
        lines += [
            "------- Fact -------",
            f"Fact Length:     {fact.data_size}",
            f"Sample Length:   {fact.sample_length}",
            f"Remaining Data:  {_hex_list(fact.remaining_data)}",
        ]

    if reader.other_chunks:
        chunk_ids = [chunk.id.text for chunk in reader.other_chunks]
        lines += [
            "--- Other Chunks ---",
            f"Chunk Ids:       {_quoted_list(chunk_ids)}",
        ]

    lines += [
        "------- Data -------",
        f"Data Length:     {reader.data_chunk.data_size}",
        f"Padding Byte:    {reader.data_chunk.pad_byte}",
    ]
    return "\n".join(lines)


def document_summary(reader: "RiffWaveReader") -> dict[str, Any]:
    fmt = reader.fmt_chunk
    extended = fmt.extended_info
    fact = reader.fact_chunk

    summary: dict[str, Any] = {
        "riff": {"file_size": reader.riff_chunk.file_size},
        "fmt": {
            "data_size": fmt.data_size,
            "format": format_name(fmt.format),
            "format_code": fmt.format_code,
            "num_channels": fmt.num_channels,
            "sample_rate": fmt.sample_rate,
            "byte_rate": fmt.byte_rate,
            "block_align": fmt.block_align,
            "bits_per_sample": fmt.bits_per_sample,
            "extra_info_size": fmt.extra_info_size,
            "extended_info": None,
        },
        "fact": None,
        "other_chunks": [
            {"id": chunk.id.text, "data_size": chunk.data_size}
            for chunk in reader.other_chunks
        ],
        "data": {
            "data_size": reader.data_chunk.data_size,
            "pad_byte": reader.data_chunk.pad_byte,
        },
    }
    if extended is not None:
        summary["fmt"]["extended_info"] = {
            "bits_per_coded_sample": extended.bits_per_coded_sample,
            "channel_mask": extended.channel_mask,
            "sub_format": str(extended.sub_format_guid),
            "remaining_data": extended.remaining_data.hex(),
        }
    if fact is not None:
        summary["fact"] = {
            "data_size": fact.data_size,
            "sample_length": fact.sample_length,
            "remaining_data": fact.remaining_data.hex(),
        }
    return summary
