# tests/test_logging.py
import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

import seqhash.utils.logging as log_mod


@pytest.fixture(autouse=True)
def _reset_logging_state(monkeypatch):
    """
    Keep tests isolated while being compatible with pytest's own log capture handler.
    Module globals are reset; root handlers are kept and idempotency is checked by counts.
    """
    monkeypatch.setattr(log_mod, "_CONFIGURED", False, raising=True)
    monkeypatch.setattr(log_mod, "_CURRENT_LOG_FILE", None, raising=True)
    yield


def _count_file_handlers(root: logging.Logger) -> int:
    return sum(1 for h in root.handlers if isinstance(h, logging.FileHandler))


def test_configure_logging_idempotent_does_not_duplicate_handlers():
    root = logging.getLogger()

    before = len(root.handlers)
    log_mod.configure_logging(level="INFO", log_file=None)
    after_first = len(root.handlers)
    assert after_first >= before

    log_mod.configure_logging(level="INFO", log_file=None)
    assert len(root.handlers) == after_first


def test_configure_logging_adds_file_handler_once(tmp_path: Path):
    root = logging.getLogger()
    log_file = tmp_path / "logs" / "seqhash.log"

    before_files = _count_file_handlers(root)
    log_mod.configure_logging(level="INFO", log_file=str(log_file))
    after_files = _count_file_handlers(root)
    after_total = len(root.handlers)

    assert after_files == before_files + 1
    assert log_file.parent.exists()

    log_mod.configure_logging(level="INFO", log_file=str(log_file))
    assert _count_file_handlers(root) == after_files
    assert len(root.handlers) == after_total

    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == log_file.resolve():
            root.removeHandler(h)
            h.close()


def test_get_logger_lazy_configures():
    assert log_mod._CONFIGURED is False

    lg = log_mod.get_logger("seqhash.x")
    assert isinstance(lg, logging.Logger)
    assert log_mod._CONFIGURED is True

    root = logging.getLogger()
    n = len(root.handlers)
    assert log_mod.get_logger("seqhash.x") is lg
    assert len(root.handlers) == n


def test_get_logger_run_id_filter_attached_idempotent():
    lg = log_mod.get_logger("seqhash.mod", run_id="r1")
    assert any(isinstance(f, log_mod.RunIdFilter) and f.run_id == "r1" for f in lg.filters)

    log_mod.get_logger("seqhash.mod", run_id="r1")
    assert sum(isinstance(f, log_mod.RunIdFilter) and f.run_id == "r1" for f in lg.filters) == 1


def test_run_id_filter_injects_attribute():
    rec = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", (), None)
    assert log_mod.RunIdFilter("abc").filter(rec) is True
    assert rec.run_id == "abc"


def test_configure_logging_from_params_uses_logging_block(monkeypatch):
    seen = {}
    monkeypatch.setattr(log_mod, "configure_logging", lambda level, log_file: seen.update(level=level, log_file=log_file))

    params = SimpleNamespace(logging=SimpleNamespace(level="DEBUG", log_file="x.log"))
    log_mod.configure_logging_from_params(params)
    assert seen == {"level": "DEBUG", "log_file": "x.log"}

    log_mod.configure_logging_from_params(params, level="ERROR", log_file="")
    assert seen == {"level": "ERROR", "log_file": ""}

    log_mod.configure_logging_from_params(SimpleNamespace())
    assert seen == {"level": "INFO", "log_file": None}


def test_configure_logging_invalid_level_raises():
    with pytest.raises(ValueError):
        log_mod.configure_logging(level="NOT_A_LEVEL", log_file=None)
