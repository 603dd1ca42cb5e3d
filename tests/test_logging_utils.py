from __future__ import annotations

import io
import json
import logging

from riffwave.fourcc import ChunkKind
from riffwave.logging_utils import EventLogger, LogFormat, create_event_logger


def _make_logger(name: str):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    logger.handlers = [handler]
    return logger, handler, stream


def test_json_logging_format():
    logger, handler, stream = _make_logger("riffwave.json")
    event_logger = create_event_logger(logger, LogFormat.JSON)
    event_logger.log("chunk_decoded", chunk="LIST", data_size=8, data=b"\x00" * 8)
    handler.flush()
    payload = json.loads(stream.getvalue())
    assert payload["event"] == "chunk_decoded"
    assert payload["fields"]["data_size"] == 8
    assert payload["fields"]["data"] == "<8 bytes>"
    logger.handlers.clear()


def test_human_format_contains_event_type():
    logger, handler, stream = _make_logger("riffwave.human")
    event_logger = create_event_logger(logger, LogFormat.HUMAN)
    event_logger.log("chunk_decoded", kind=ChunkKind.FACT, pad_byte=1)
    handler.flush()
    message = stream.getvalue()
    assert "[chunk_decoded]" in message
    assert "kind=FACT" in message
    assert "pad_byte=1" in message
    logger.handlers.clear()


def test_unknown_format_falls_back_to_human():
    logger, _, _ = _make_logger("riffwave.fallback")
    event_logger = create_event_logger(logger, "yaml")
    assert isinstance(event_logger, EventLogger)
    assert event_logger.log_format is LogFormat.HUMAN
    logger.handlers.clear()


def test_level_selects_logger_method():
    logger, handler, stream = _make_logger("riffwave.level")
    logger.setLevel(logging.INFO)
    event_logger = create_event_logger(logger, LogFormat.HUMAN)
    event_logger.log("hidden", level="debug")
    event_logger.log("shown", level="warning")
    handler.flush()
    output = stream.getvalue()
    assert "[hidden]" not in output
    assert "[shown]" in output
    logger.handlers.clear()
