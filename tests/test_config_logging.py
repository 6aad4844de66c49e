import logging
from pathlib import Path

from colorama import Style

from inventory.audit_logs import logs_frame
from inventory.config import Settings
from inventory.logging_conf import ColoredFormatter, setup_logging


def test_settings_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CARBON_INVENTORY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CARBON_INVENTORY_YEAR", "2025")
    monkeypatch.setenv("CARBON_INVENTORY_LOG_FILE", "")

    settings = Settings()
    assert settings.data_path("x.csv") == Path(tmp_path) / "x.csv"
    assert settings.inventory_year == 2025
    assert settings.log_file is None


def test_colored_formatter_leaves_record_untouched():
    record = logging.makeLogRecord(
        {"name": "inventory", "levelno": logging.WARNING, "levelname": "WARNING", "msg": "careful"}
    )
    colored = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert colored.endswith(f"WARNING{Style.RESET_ALL} careful")
    assert record.levelname == "WARNING"

    plain = ColoredFormatter("%(levelname)s %(message)s", use_color=False).format(record)
    assert plain == "WARNING careful"


def test_setup_logging_replaces_handlers(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        log_file = tmp_path / "inventory.log"
        setup_logging(file_path=str(log_file))
        setup_logging(file_path=str(log_file))
        assert len(root.handlers) == 2

        logging.getLogger("inventory.test").info("hello file")
        for handler in root.handlers:
            handler.flush()
        assert "inventory.test - INFO - hello file" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved


def test_logs_frame_columns():
    frame = logs_frame([])
    assert list(frame.columns) == ["Timestamp", "Page", "Action", "From", "To", "Reason", "Actor"]
    assert frame.empty


def test_database_engine_uses_configured_sqlite_url():
    from inventory import database

    assert database.engine.url.drivername == "sqlite"
    assert str(database.engine.url) == database.SQLALCHEMY_DATABASE_URL
    assert database.connect_args == {"check_same_thread": False}
