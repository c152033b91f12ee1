"""Tests for the JSONL logging sink."""

import json
import logging

import pytest

from sitegraph.logging_setup import JsonlHandler
from sitegraph.logging_setup import init_json_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_records_written_as_json_lines(tmp_path, restore_root_logger):
    path = tmp_path / "nested" / "log.jsonl"
    init_json_logging(path, "debug")

    logging.getLogger("sitegraph.test").debug("hello %s", "world", extra={"site": "demo"})

    (record,) = [json.loads(line) for line in path.read_text().splitlines()]
    assert record["lvl"] == "DEBUG"
    assert record["logger"] == "sitegraph.test"
    assert record["message"] == "hello world"
    assert record["site"] == "demo"
    assert record["schema"]["name"] == "sitegraph.log"


def test_dict_messages_are_merged(tmp_path, restore_root_logger):
    path = tmp_path / "log.jsonl"
    init_json_logging(path, "INFO")

    logging.getLogger("sitegraph.test").info({"event": "site:loaded", "items": 3})

    record = json.loads(path.read_text())
    assert record["event"] == "site:loaded"
    assert record["items"] == 3


def test_reinit_replaces_handler(tmp_path, restore_root_logger):
    init_json_logging(tmp_path / "a.jsonl", "INFO")
    init_json_logging(tmp_path / "b.jsonl", "INFO")

    handlers = [h for h in restore_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "b.jsonl"


def test_exception_is_recorded(tmp_path, restore_root_logger):
    path = tmp_path / "log.jsonl"
    init_json_logging(path, "INFO")

    try:
        raise ValueError("bad snippet")
    except ValueError:
        logging.getLogger("sitegraph.test").exception("Load failed")

    record = json.loads(path.read_text())
    assert record["message"] == "Load failed"
    assert "ValueError: bad snippet" in record["exc"]


def test_earlier_handler_is_closed(tmp_path, restore_root_logger):
    first = init_json_logging(tmp_path / "a.jsonl", "INFO")
    logging.getLogger("sitegraph.test").info("to a")

    init_json_logging(tmp_path / "b.jsonl", "INFO")
    logging.getLogger("sitegraph.test").info("to b")

    assert first.stream is None
    assert [json.loads(line)["message"] for line in (tmp_path / "a.jsonl").read_text().splitlines()] == ["to a"]
    assert json.loads((tmp_path / "b.jsonl").read_text())["message"] == "to b"
