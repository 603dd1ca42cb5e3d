from __future__ import annotations

import json
import struct

import pytest

from riffwave import cli


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in ("RIFFWAVE_BLOCK_SIZE", "RIFFWAVE_CLAMP_PAYLOAD", "RIFFWAVE_LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)


def test_cli_requires_command(capsys):
    exit_code = cli.main([])
    assert exit_code == 2
    assert "usage" in capsys.readouterr().out


def test_print_outputs_report(wave_file, wave_bytes, capsys):
    content = wave_bytes.build(
        wave_bytes.chunk(b"LIST", b"INFO"),
        fmt=wave_bytes.fmt_with_empty_extension(),
        payload=b"\x00" * 3,
    )
    path = wave_file(content)

    exit_code = cli.main(["print", str(path)])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert output.startswith("------ Header ------\n")
    assert 'Chunk Ids:       ["LIST"]' in output
    assert "Padding Byte:    1" in output


def test_print_json(wave_file, minimal_wave, capsys):
    path = wave_file(minimal_wave)

    exit_code = cli.main(["print", "--json", str(path)])

    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["fmt"]["format"] == "UncompressedPCM"
    assert summary["other_chunks"] == []


def test_raw_counts_bytes_to_end_of_file(wave_file, wave_bytes, capsys):
    path = wave_file(wave_bytes.build(payload=b"\x01" * 10, data_size=6))

    exit_code = cli.main(["raw", "--block-size", "3", str(path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "10"


def test_raw_clamp_flag(wave_file, wave_bytes, capsys):
    path = wave_file(wave_bytes.build(payload=b"\x01" * 10, data_size=6))

    exit_code = cli.main(["raw", "--clamp", str(path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "6"


def test_raw_clamp_from_environment(wave_file, wave_bytes, capsys, monkeypatch):
    monkeypatch.setenv("RIFFWAVE_CLAMP_PAYLOAD", "true")
    path = wave_file(wave_bytes.build(payload=b"\x01" * 10, data_size=6))

    exit_code = cli.main(["raw", str(path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "6"


def test_decode_failure_reports_on_stderr(wave_file, capsys):
    path = wave_file(b"RIFX" + struct.pack("<I", 4) + b"WAVE")

    exit_code = cli.main(["print", str(path)])

    assert exit_code == 3
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "riffwave: Not a riff file" in captured.err


def test_truncated_file_is_a_decode_failure(wave_file, wave_bytes, capsys):
    path = wave_file(wave_bytes.riff_header() + wave_bytes.fmt_chunk()[:10])

    exit_code = cli.main(["raw", str(path)])

    assert exit_code == 3
    assert "IO error" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    exit_code = cli.main(["print", str(tmp_path / "absent.wav")])

    assert exit_code == 2
    assert "cannot read" in capsys.readouterr().err


def test_invalid_configuration(wave_file, minimal_wave, capsys):
    path = wave_file(minimal_wave)

    exit_code = cli.main(["raw", "--block-size", "0", str(path)])

    assert exit_code == 2
    assert "block_size must be positive" in capsys.readouterr().err


def test_string_block_size_in_config_file(wave_file, wave_bytes, tmp_path, capsys):
    (tmp_path / "riffwave.toml").write_text('block_size = "4"\n', encoding="utf-8")
    path = wave_file(wave_bytes.build(payload=b"\x01" * 10))

    exit_code = cli.main(["raw", str(path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "10"


def test_string_boolean_in_config_file(wave_file, minimal_wave, tmp_path, capsys):
    (tmp_path / "riffwave.toml").write_text('clamp_payload = "false"\n', encoding="utf-8")
    path = wave_file(minimal_wave)

    exit_code = cli.main(["raw", str(path)])

    assert exit_code == 2
    assert "clamp_payload must be true or false" in capsys.readouterr().err
