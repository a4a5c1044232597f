"""Feed crawler configuration: typed model, loader and validator."""

from feedcrawl.config import Config, CrawlSettings, FeedSource, HtmlSource, RssSource, Sources, load_config
from feedcrawl.errors import (
    ConfigError,
    EmptySelector,
    IntervalErrorReason,
    InvalidIntervalFormat,
    InvalidUrl,
    LoadError,
    LoadIoError,
    LoadParseError,
    ValidationFailure,
)
from feedcrawl.intervals import parse_interval
from feedcrawl.validation import validate_config

__all__ = [
    "Config",
    "ConfigError",
    "CrawlSettings",
    "EmptySelector",
    "FeedSource",
    "HtmlSource",
    "IntervalErrorReason",
    "InvalidIntervalFormat",
    "InvalidUrl",
    "LoadError",
    "LoadIoError",
    "LoadParseError",
    "RssSource",
    "Sources",
    "ValidationFailure",
    "load_config",
    "parse_interval",
    "validate_config",
]
