"""Runtime settings loaded from environment variables via pydantic-settings."""

from __future__ import annotations

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedcrawl.errors import LoadParseError

ENV_SOURCE = "FEEDCRAWL_* environment"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FEEDCRAWL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: str = "config.toml"
    log_dir: str = "./data/logs"
    # Overrides for the document's [settings] table, unset means "use the file"
    update_interval: str | None = None
    max_concurrent_crawlers: int | None = None

    def crawl_overrides(self) -> dict[str, object]:
        """Return the [settings] keys to replace in the loaded document."""
        overrides: dict[str, object] = {}
        if self.update_interval is not None:
            overrides["update_interval"] = self.update_interval
        if self.max_concurrent_crawlers is not None:
            overrides["max_concurrent_crawlers"] = self.max_concurrent_crawlers
        return overrides


def load_settings() -> Settings:
    """Read FEEDCRAWL_* variables and .env, failing as a config load error."""
    try:
        return Settings()
    except ValidationError as exc:
        raise LoadParseError(ENV_SOURCE, str(exc)) from exc
