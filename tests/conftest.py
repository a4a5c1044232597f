"""Shared fixtures: isolated environment and config document writers."""

from __future__ import annotations

import os
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from feedcrawl.config import Config, CrawlSettings, HtmlSource, RssSource, Sources

VALID_TOML = """\
[settings]
update_interval = "10m"
max_concurrent_crawlers = 4

[[sources.rss]]
name = "Blog"
url = "https://blog.test/feed"

[[sources.rss]]
name = "Fast Feed"
url = "https://example.com/feed.xml"
update_interval = "30s"

[[sources.html]]
name = "News"
url = "https://news.test/"
selector = "article h2 a"
update_interval = "1h"
"""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test from an empty directory with no FEEDCRAWL_* variables."""
    for key in list(os.environ):
        if key.startswith("FEEDCRAWL_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_config(tmp_path) -> Callable[..., Path]:
    """Write a config document and return its path."""

    def _write(content: str, name: str = "config.toml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Build a Config directly, bypassing the loader."""

    def _make(
        rss: list[RssSource] | None = None,
        html: list[HtmlSource] | None = None,
        update_interval: str = "10m",
        max_concurrent_crawlers: int = 4,
    ) -> Config:
        return Config(
            sources=Sources(rss=tuple(rss or ()), html=tuple(html or ())),
            settings=CrawlSettings(update_interval=update_interval, max_concurrent_crawlers=max_concurrent_crawlers),
        )

    return _make


@pytest.fixture
def valid_config_path(write_config) -> Path:
    """Two RSS sources and one HTML source, global interval 10m."""
    return write_config(VALID_TOML)
