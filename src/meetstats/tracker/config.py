from pathlib import Path

from pydantic_settings import BaseSettings

MEET_URL_PATTERN = r"^https://meet\.google\.com/.*"


class TrackerConfig(BaseSettings):
    """Tracker configuration loaded from environment variables."""

    api_url: str = "http://127.0.0.1:3000"  # Base URL of the MeetStats backend
    check_interval: float = 60.0  # Seconds between two samples
    url_pattern: str = MEET_URL_PATTERN
    devtools_url: str = "http://127.0.0.1:9222"  # Browser started with --remote-debugging-port=9222
    data_dir: Path = Path.home() / ".meetstats"  # Holds user.json and session.json
    request_timeout: float = 10.0
    debug: bool = False

    model_config = {
        "env_file": [".env"],
        "env_prefix": "MEETSTATS_TRACKER_",
        "extra": "ignore",
    }

    @property
    def identity_path(self) -> Path:
        return self.data_dir / "user.json"

    @property
    def state_path(self) -> Path:
        return self.data_dir / "session.json"
