from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from headerlint.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    logger = logging.getLogger("headerlint")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


def test_default_level_logs_info_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()

    get_logger("runner").info("Fixed %d problem(s)", 2)
    get_logger("runner").debug("hidden")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "[headerlint] INFO Fixed 2 problem(s)\n"


def test_verbose_names_the_component(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)

    get_logger("fixer").debug("Deferring edits")
    get_logger().debug("top level")

    assert capsys.readouterr().err.splitlines() == [
        "[headerlint] DEBUG fixer: Deferring edits",
        "[headerlint] DEBUG main: top level",
    ]


def test_quiet_keeps_warnings_only(capsys: pytest.CaptureFixture[str]) -> None:
    logger = configure_logging(quiet=True)

    get_logger("licensing").info("Regenerated")
    get_logger("licensing").warning("Careful")

    assert logger.level == logging.WARNING
    assert capsys.readouterr().err == "[headerlint] WARNING Careful\n"


def test_log_file_receives_debug_records(tmp_path: Path) -> None:
    log_file = tmp_path / "headerlint.log"
    configure_logging(log_file=log_file)

    get_logger("runner").debug("Running rule")
    for handler in logging.getLogger("headerlint").handlers:
        handler.flush()

    assert "DEBUG headerlint.runner: Running rule" in log_file.read_text(encoding="utf-8")


def test_reconfiguring_does_not_duplicate_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
