from __future__ import annotations

import logging
from pathlib import Path

import pytest

from droidacq.infrastructure.logging.enhanced_logging import EnhancedLogger


@pytest.fixture
def bare_root_logger():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers.clear()
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_repeated_runs_leave_no_handlers_behind(bare_root_logger: logging.Logger, tmp_path: Path) -> None:
    for run in range(3):
        logger = EnhancedLogger()
        logger.setup_logging(str(tmp_path / f"case-{run}"))
        assert len(bare_root_logger.handlers) == 2

        logger.cleanup()

        assert bare_root_logger.handlers == []


def test_cleanup_restores_existing_handlers_and_level(bare_root_logger: logging.Logger, tmp_path: Path) -> None:
    existing = logging.NullHandler()
    bare_root_logger.addHandler(existing)
    bare_root_logger.setLevel(logging.ERROR)
    logger = EnhancedLogger()

    logger.setup_logging(str(tmp_path), verbose=True)
    assert existing not in bare_root_logger.handlers
    assert bare_root_logger.level == logging.DEBUG

    logger.cleanup()

    assert bare_root_logger.handlers == [existing]
    assert bare_root_logger.level == logging.ERROR
    assert (tmp_path / "command.log").exists()


def test_cleanup_without_setup_is_harmless(bare_root_logger: logging.Logger) -> None:
    existing = logging.NullHandler()
    bare_root_logger.addHandler(existing)

    EnhancedLogger().cleanup()

    assert bare_root_logger.handlers == [existing]
