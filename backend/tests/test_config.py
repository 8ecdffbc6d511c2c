import logging
from datetime import date

from app import config


def test_date_config_reads_env(monkeypatch):
    monkeypatch.setenv("WOTD_TEST_EPOCH", "2024-03-01")

    assert config._get_date_config("wotd.test_epoch", date(2024, 1, 1), "WOTD_TEST_EPOCH") == date(2024, 3, 1)


def test_invalid_date_config_logs_warning_and_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("WOTD_TEST_EPOCH", "not-a-date")

    with caplog.at_level(logging.WARNING, logger="app.config"):
        value = config._get_date_config("wotd.test_epoch", date(2024, 1, 1), "WOTD_TEST_EPOCH")

    assert value == date(2024, 1, 1)
    assert "Invalid date for wotd.test_epoch" in caplog.text


def test_unreadable_user_config_logs_warning(monkeypatch, tmp_path, caplog):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "user.json").write_text("{not json", encoding="utf-8")
    monkeypatch.setattr(config, "BASE_DIR", tmp_path)

    with caplog.at_level(logging.WARNING, logger="app.config"):
        assert config._load_user_config() == {}

    assert "Failed to load user config" in caplog.text
