import json
import logging

from rich.logging import RichHandler

from meetpoint.utils.log import SERVE_LOG, JSONFormatter, get_logger, set_level


def test_json_formatter_fields():
    record = logging.LogRecord("meetpoint.x", logging.WARNING, __file__, 1, "hello %s", ("there",), None)
    out = json.loads(JSONFormatter().format(record))
    assert set(out) == {"timestamp", "level", "logger", "message"}
    assert out["level"] == "WARNING"
    assert out["logger"] == "meetpoint.x"
    assert out["message"] == "hello there"


def test_console_only_outside_serve(monkeypatch):
    monkeypatch.setattr("sys.argv", ["meetpoint", "recommend"])
    logger = get_logger("meetpoint.tests.console_only")
    assert [type(h) for h in logger.handlers] == [RichHandler]


def test_serve_appends_json_lines(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.argv", ["meetpoint", "serve"])
    monkeypatch.chdir(tmp_path)
    logger = get_logger("meetpoint.tests.serve_file")
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    try:
        logger.info("listening on %d", 8000)
        file_handlers[0].flush()
        line = (tmp_path / SERVE_LOG).read_text(encoding="utf-8").strip()
        assert json.loads(line)["message"] == "listening on 8000"
    finally:
        for h in file_handlers:
            logger.removeHandler(h)
            h.close()


def test_set_level_reaches_handlers(monkeypatch):
    monkeypatch.setattr("sys.argv", ["meetpoint"])
    logger = get_logger("meetpoint.tests.levels")
    try:
        set_level("DEBUG")
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
    finally:
        set_level("INFO")
