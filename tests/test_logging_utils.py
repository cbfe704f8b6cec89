from __future__ import annotations

import logging
from pathlib import Path

from dmg2pkg.logging_utils import configure_logging


def test_file_handler_and_idempotence(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "dmg2pkg.log"
    root = logging.getLogger()
    before = len(root.handlers)

    assert configure_logging(log_path=str(log_path), also_console=False) == str(log_path)
    assert configure_logging(level=logging.DEBUG, log_path="elsewhere.log") == str(log_path)
    assert len(root.handlers) == before + 1
    assert root.level == logging.DEBUG

    logging.getLogger("dmg2pkg.test").info("hello from test")
    for h in root.handlers:
        h.flush()
    assert "hello from test" in log_path.read_text(encoding="utf-8")
