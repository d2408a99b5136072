from __future__ import annotations

import logging
import logging.handlers

from core.config import Settings
from core.logging import setup_logging


def test_production_logs_to_configured_dir(tmp_path, monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    previous_level = root.level

    try:
        setup_logging(environment="production", log_dir=tmp_path / "logs")
        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]

        assert len(file_handlers) == 1
        assert (tmp_path / "logs" / "timetable.log").exists()
        assert root.level == logging.INFO
    finally:
        for h in root.handlers:
            h.close()
        root.setLevel(previous_level)


def test_development_logs_to_console_only(tmp_path, monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    previous_level = root.level

    try:
        setup_logging(environment="development", log_dir=tmp_path / "logs")

        assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
        assert not (tmp_path / "logs").exists()
    finally:
        for h in root.handlers:
            h.close()
        root.setLevel(previous_level)


def test_log_and_export_dirs_come_from_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "exports"))

    settings = Settings()

    assert settings.log_dir == tmp_path / "logs"
    assert settings.export_dir == tmp_path / "exports"
