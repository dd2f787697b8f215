import logging
from pathlib import Path

from swift_driver.logging.log import init_logging


def test_init_logging_writes_run_file(tmp_path: Path):
    logger, run_id, log_path = init_logging(base_dir=tmp_path, name="swift-log-test")
    try:
        logger.debug("debug line")
        assert log_path.parent == tmp_path
        assert run_id in log_path.name
        for h in logger.handlers:
            h.flush()
        text = log_path.read_text()
        assert f"run_id={run_id}" in text
        assert "debug line" in text
        assert logger.propagate is False
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)


def test_init_logging_console_level(tmp_path: Path):
    logger, _, _ = init_logging(base_dir=tmp_path, name="swift-log-test-2", verbose=True)
    try:
        console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
        assert console[0].level == logging.DEBUG
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
