"""Tests for logging_config.py - rich logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from solution_graph.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        "kwargs, level",
        [({}, logging.WARNING), ({"verbose": True}, logging.DEBUG), ({"quiet": True}, logging.ERROR)],
    )
    def test_levels(self, kwargs, level):
        logger = setup_logging(**kwargs)
        assert logger.name == "solution_graph"
        assert logger.level == level

    def test_rich_handler_writes_to_stderr(self):
        setup_logging()
        handlers = [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert handlers[0].console.stderr is True

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "resolve.log"
        logger = setup_logging(log_file=str(log_file))
        logger.warning("Project file 'x.csproj' does not exist")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "does not exist" in log_file.read_text()
        for handler in logging.getLogger().handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
