"""Tests for monitor configuration."""

from pathlib import Path

from wl_transit.data.config import MonitorConfig, get_monitor_config


def test_defaults():
    config = MonitorConfig()

    assert config.monitor_url == "https://www.wienerlinien.at/ogd_realtime/monitor"
    assert config.min_poll_interval_seconds == 15.0
    assert config.traffic_info_categories == [
        "stoerunglang",
        "stoerungkurz",
        "aufzugsinfo",
        "fahrtreppeninfo",
        "information",
    ]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WL_MONITOR_URL", "https://example.com/monitor")
    monkeypatch.setenv("WL_POLL_INTERVAL", "30")
    monkeypatch.setenv("WL_DATA_PATH", "/tmp/wl-data.json")

    config = MonitorConfig()

    assert config.monitor_url == "https://example.com/monitor"
    assert config.poll_interval_seconds == 30.0
    assert config.data_path == Path("/tmp/wl-data.json")


def test_default_categories_are_not_shared():
    first = MonitorConfig()
    first.traffic_info_categories.append("extra")

    assert "extra" not in MonitorConfig().traffic_info_categories


def test_get_monitor_config_is_cached():
    get_monitor_config.cache_clear()
    try:
        assert get_monitor_config() is get_monitor_config()
    finally:
        get_monitor_config.cache_clear()
