"""Semantic checks on a loaded Config. Stops at the first failure."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from pydantic import AnyUrl, TypeAdapter, ValidationError

from feedcrawl.config import Config, FeedSource
from feedcrawl.errors import EmptySelector, InvalidIntervalFormat, InvalidUrl
from feedcrawl.intervals import parse_interval

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def is_absolute_url(url: str) -> bool:
    """True if url parses on its own, without a base URL."""
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError:
        return False
    return True


def _check_url(source: FeedSource) -> None:
    if not is_absolute_url(source.url):
        raise InvalidUrl(source.kind, source.name, source.url)


def _check_overrides(kind: str, sources: Sequence[FeedSource]) -> None:
    for index, source in enumerate(sources):
        if source.update_interval is None:
            continue
        try:
            parse_interval(source.update_interval)
        except InvalidIntervalFormat as exc:
            raise exc.for_field(f"sources.{kind}[{index}].update_interval", source.name) from exc


def validate_config(config: Config, log: structlog.stdlib.BoundLogger | None = None) -> None:
    """Raise the first ValidationFailure found in config, in document order.

    URLs and selectors of every source are checked before any interval, then
    the global interval, then RSS overrides, then HTML overrides.
    """
    log = log or structlog.get_logger()

    for feed in config.sources.rss:
        _check_url(feed)

    for site in config.sources.html:
        _check_url(site)
        if not site.selector:
            raise EmptySelector(site.name)

    try:
        parse_interval(config.settings.update_interval)
    except InvalidIntervalFormat as exc:
        raise exc.for_field("settings.update_interval") from exc

    _check_overrides("rss", config.sources.rss)
    _check_overrides("html", config.sources.html)

    log.debug(
        "config.validated",
        rss_sources=len(config.sources.rss),
        html_sources=len(config.sources.html),
        update_interval=config.settings.update_interval,
    )
