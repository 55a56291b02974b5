from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Traffic info categories requested on every monitor call
DEFAULT_TRAFFIC_INFO_CATEGORIES = [
    "stoerunglang",
    "stoerungkurz",
    "aufzugsinfo",
    "fahrtreppeninfo",
    "information",
]


class MonitorConfig(BaseSettings):
    """Configuration for the realtime monitor API and the static snapshot.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    monitor_url: str = Field(
        default="https://www.wienerlinien.at/ogd_realtime/monitor", alias="WL_MONITOR_URL"
    )
    poll_interval_seconds: float = Field(default=15.0, alias="WL_POLL_INTERVAL")
    # advisory only: shorter periods are logged, not rejected
    min_poll_interval_seconds: float = 15.0
    request_timeout_seconds: float = Field(default=30.0, alias="WL_REQUEST_TIMEOUT")
    traffic_info_categories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRAFFIC_INFO_CATEGORIES)
    )

    # static snapshot produced by the CSV export
    data_path: Path = Field(default=Path("data/wl-data.json"), alias="WL_DATA_PATH")


@lru_cache
def get_monitor_config() -> MonitorConfig:
    """Get monitor configuration (cached singleton).

    Returns:
        MonitorConfig with values from .env file or environment variables.
    """
    return MonitorConfig()
