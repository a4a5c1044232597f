"""Crawl configuration model and TOML/YAML loading with env var overrides."""

from __future__ import annotations

import tomllib
from collections.abc import Iterator
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any, ClassVar

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from feedcrawl.errors import InvalidIntervalFormat, LoadIoError, LoadParseError
from feedcrawl.intervals import parse_interval
from feedcrawl.settings import Settings, load_settings

YAML_SUFFIXES = (".yaml", ".yml")


class FeedSource(BaseModel):
    """Fields and interval resolution shared by every source kind."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[str] = ""

    name: str
    url: str
    update_interval: str | None = None

    def effective_interval(
        self, global_interval: str, log: structlog.stdlib.BoundLogger | None = None
    ) -> timedelta:
        """Own override if it parses, otherwise the global interval.

        A malformed global interval is raised, never defaulted: validate the
        config before resolving intervals.
        """
        if self.update_interval is not None:
            try:
                return parse_interval(self.update_interval)
            except InvalidIntervalFormat as exc:
                (log or structlog.get_logger()).warning(
                    "source.interval_fallback",
                    source=self.name,
                    kind=self.kind,
                    value=self.update_interval,
                    reason=exc.reason.value,
                    fallback=global_interval,
                )

        try:
            return parse_interval(global_interval)
        except InvalidIntervalFormat as exc:
            raise exc.for_field("settings.update_interval") from exc


class RssSource(FeedSource):
    kind: ClassVar[str] = "rss"


class HtmlSource(FeedSource):
    kind: ClassVar[str] = "html"

    selector: str


class Sources(BaseModel):
    model_config = ConfigDict(frozen=True)

    rss: tuple[RssSource, ...] = ()
    html: tuple[HtmlSource, ...] = ()


class CrawlSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    update_interval: str
    # Range of an unsigned byte; concurrency policy belongs to the scheduler
    max_concurrent_crawlers: Annotated[int, Field(ge=0, le=255, strict=True)]


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    sources: Sources
    settings: CrawlSettings

    def iter_sources(self) -> Iterator[FeedSource]:
        """RSS sources then HTML sources, each in document order."""
        yield from self.sources.rss
        yield from self.sources.html

    def effective_interval(
        self, source: FeedSource, log: structlog.stdlib.BoundLogger | None = None
    ) -> timedelta:
        return source.effective_interval(self.settings.update_interval, log=log)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise LoadIoError(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise LoadIoError(path, exc.strerror or str(exc)) from exc


def _parse_document(path: Path, text: str) -> dict[str, Any]:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise LoadParseError(path, str(exc)) from exc
        if data is None:
            data = {}
    else:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise LoadParseError(path, str(exc)) from exc

    if not isinstance(data, dict):
        raise LoadParseError(path, f"document root must be a table, got {type(data).__name__}")
    return data


def _apply_overrides(data: dict[str, Any], overrides: dict[str, object]) -> dict[str, Any]:
    if not overrides:
        return data
    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        # Leave it for the schema check to reject
        return data
    return {**data, "settings": {**settings, **overrides}}


def load_config(config_path: str | Path, settings: Settings | None = None) -> Config:
    """Read and deserialize a config document. All or nothing.

    TOML unless the file ends in .yaml/.yml. FEEDCRAWL_UPDATE_INTERVAL and
    FEEDCRAWL_MAX_CONCURRENT_CRAWLERS replace the document's [settings]
    values before the schema is checked.
    """
    path = Path(config_path)
    if settings is None:
        settings = load_settings()

    text = _read_text(path)
    data = _apply_overrides(_parse_document(path, text), settings.crawl_overrides())

    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise LoadParseError(path, str(exc)) from exc
