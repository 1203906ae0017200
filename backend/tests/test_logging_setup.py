import logging

import pytest

from openbill.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "api.log"
    root = setup_logging(level="debug", log_file=str(log_file))
    assert root.level == logging.DEBUG
    logging.getLogger("openbill.test").info("hello ledger")
    for h in root.handlers:
        h.flush()
    assert "hello ledger" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_setup_logging_falls_back_to_info(monkeypatch, restore_root_logger):
    monkeypatch.delenv("LOG_FILE", raising=False)
    root = setup_logging(level="nonsense")
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
