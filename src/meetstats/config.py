from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Backend configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/meetstats
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    cors_origins: list[str] = []
    cors_origin_regex: str | None = r"^chrome-extension://.*$"  # Browser extensions calling the API directly
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "MEETSTATS_",
        "extra": "ignore",
    }
