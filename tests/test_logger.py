# File: tests/test_logger.py
import io
import logging

from woodpecker.logger import configure, init_logging


def test_configure_stream_and_file(tmp_path):
    stream = io.StringIO()
    log_file = tmp_path / "woodpecker.log"
    lg = configure(level="DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s", stream=stream)
    try:
        lg.debug("page %d merged", 3)
        for handler in lg.handlers:
            handler.flush()
        assert stream.getvalue() == "DEBUG page 3 merged\n"
        assert log_file.read_text(encoding="utf-8") == "DEBUG page 3 merged\n"
        assert lg.propagate is False
    finally:
        init_logging(level="WARNING")


def test_init_logging_replaces_handlers():
    lg = init_logging(level="INFO")
    init_logging(level="ERROR")
    assert len(lg.handlers) == 1
    assert lg.level == logging.ERROR
    init_logging(level="WARNING")
