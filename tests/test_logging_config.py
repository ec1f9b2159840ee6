"""Tests for logging setup, contextual fields and formatters.

Run:
    pytest tests/test_logging_config.py -v
"""

import json
import logging
import logging.handlers

import pytest

from src.utils import logging_config
from src.utils.logging_config import (
    ContextFormatter,
    get_logger,
    log_context,
    pop_context,
    push_context,
    setup_logging,
)


def _record(msg: str = "Built tree", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("src.arc_length.builder", level, __file__, 1, msg, None, None)


@pytest.fixture(autouse=True)
def _clean(restore_logging):
    pop_context()
    yield


class TestSetup:
    def test_idempotent(self) -> None:
        first = setup_logging("INFO")
        second = setup_logging("DEBUG")
        root = logging.getLogger()
        assert len(second) == 1
        assert second[0] in root.handlers
        assert first[0] not in root.handlers
        assert root.level == logging.DEBUG

    def test_file_handler(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "report.log"
        setup_logging("INFO", str(log_file), to_stderr=False, json=True)
        get_logger("src.test").info("hello %s", "file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["msg"] == "hello file"
        assert entry["lvl"] == "INFO"

    def test_rotating_file_handler(self, tmp_path) -> None:
        handlers = setup_logging(
            "INFO", str(tmp_path / "r.log"), to_stderr=False,
            rotate={"max_bytes": 1000, "backup_count": 1},
        )
        assert isinstance(handlers[0], logging.handlers.RotatingFileHandler)

    def test_initial_context(self) -> None:
        setup_logging("INFO", to_stderr=False, context={"app": "report"})
        assert logging_config._context_var.get() == {"app": "report"}

    def test_set_level(self) -> None:
        setup_logging("INFO", to_stderr=False)
        logging_config.set_level("warning")
        assert logging.getLogger().level == logging.WARNING


class TestContext:
    def test_push_and_pop(self) -> None:
        push_context(curve="s_bend", strategy="adaptive")
        assert logging_config._context_var.get() == {"curve": "s_bend", "strategy": "adaptive"}
        pop_context(["strategy"])
        assert logging_config._context_var.get() == {"curve": "s_bend"}
        pop_context()
        assert logging_config._context_var.get() == {}

    def test_log_context_restores(self) -> None:
        push_context(app="report")
        with log_context(curve="ruler"):
            assert logging_config._context_var.get() == {"app": "report", "curve": "ruler"}
        assert logging_config._context_var.get() == {"app": "report"}

    def test_log_context_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with log_context(curve="ruler"):
                raise RuntimeError("boom")
        assert logging_config._context_var.get() == {}


class TestFormatter:
    def test_human(self) -> None:
        formatter = ContextFormatter("human", use_color=False)
        with log_context(curve="quarter_arc"):
            line = formatter.format(_record())
        assert "| INFO     |" in line
        assert "curve=quarter_arc" in line
        assert line.endswith("Built tree")

    def test_human_without_context(self) -> None:
        line = ContextFormatter("human", use_color=False).format(_record())
        assert "=" not in line

    def test_json(self) -> None:
        formatter = ContextFormatter("json")
        with log_context(curve="s_bend"):
            entry = json.loads(formatter.format(_record("length=%s" % 1.5)))
        assert entry["curve"] == "s_bend"
        assert entry["msg"] == "length=1.5"
        assert entry["name"] == "src.arc_length.builder"
        assert entry["t"].endswith("+00:00")

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError, match="Unknown format mode"):
            ContextFormatter("xml")
