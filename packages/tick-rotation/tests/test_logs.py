"""Tests for tick_rotation.logs - logger configuration."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tick_rotation.catalog import HEATED_SPLIT_SHOT
from tick_rotation.clock import ManualClock
from tick_rotation.config import RotationSettings
from tick_rotation.logs import configure_logging
from tick_rotation.rotation import Rotation
from tick_rotation.sim import SimulatedHost


@pytest.fixture(autouse=True)
def _restore_loggers():
    saved = {
        name: (logging.getLogger(name).handlers[:], logging.getLogger(name).level)
        for name in ("", "tick_rotation")
    }
    yield
    for name, (handlers, level) in saved.items():
        target = logging.getLogger(name)
        for handler in target.handlers:
            if handler not in handlers:
                handler.close()
        target.handlers[:] = handlers
        target.setLevel(level)


def _flush(target: logging.Logger) -> None:
    for handler in target.handlers:
        handler.flush()


def test_sets_level_and_replaces_handlers() -> None:
    configure_logging("DEBUG")
    root = configure_logging("WARNING")
    assert root is logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1


def test_package_logger_leaves_root_alone() -> None:
    root_handlers = logging.getLogger().handlers[:]
    target = configure_logging("DEBUG", logger_name="tick_rotation")
    assert target.name == "tick_rotation"
    assert target.level == logging.DEBUG
    assert logging.getLogger().handlers == root_handlers


def test_logfile_receives_rotation_messages(tmp_path: Path) -> None:
    logfile = tmp_path / "nested" / "rotation.log"
    target = configure_logging("INFO", logfile=logfile, logger_name="tick_rotation")

    host = SimulatedHost(ManualClock(), recasts={})
    rotation = Rotation(host, use_opener=False)
    rotation.start()
    rotation.tick()
    _flush(target)

    text = logfile.read_text(encoding="utf-8")
    assert "Rotation started" in text
    assert "Used Air Anchor (Heat: 0)" in text
    assert "tick_rotation.actions" in text


def _idle_tick(level: str, logfile: Path) -> str:
    target = configure_logging(level, logfile=logfile, logger_name="tick_rotation")
    host = SimulatedHost(
        ManualClock(), settings=RotationSettings.all_disabled(), recasts={}
    )
    host.block(HEATED_SPLIT_SHOT)
    rotation = Rotation(host, use_opener=False)
    rotation.start()
    assert rotation.tick() == ()
    _flush(target)
    return logfile.read_text(encoding="utf-8")


def test_idle_tick_logged_at_debug(tmp_path: Path) -> None:
    assert "Nothing executed at 0.00" in _idle_tick("DEBUG", tmp_path / "debug.log")


def test_idle_tick_filtered_at_info(tmp_path: Path) -> None:
    assert "Nothing executed" not in _idle_tick("INFO", tmp_path / "info.log")


def test_json_lines(tmp_path: Path) -> None:
    logfile = tmp_path / "rotation.jsonl"
    target = configure_logging(
        logging.INFO, json=True, logfile=logfile, logger_name="tick_rotation"
    )
    logging.getLogger("tick_rotation.test").info("hello")
    _flush(target)

    record = json.loads(logfile.read_text(encoding="utf-8").splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["logger"] == "tick_rotation.test"
    assert record["msg"] == "hello"
