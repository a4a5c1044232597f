"""Click CLI with commands: check, intervals, show."""

from __future__ import annotations

import json
from typing import NoReturn

import click
import structlog

from feedcrawl.config import Config, load_config
from feedcrawl.errors import ConfigError, LoadError
from feedcrawl.logging import setup_logging
from feedcrawl.settings import ENV_SOURCE, Settings, load_settings
from feedcrawl.validation import validate_config


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config file (TOML, or YAML by suffix).")
@click.option("--log-dir", default=None, help="Directory for JSON log files (empty string disables the file log).")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_dir: str | None) -> None:
    """Feedcrawl: check feed source configuration."""
    ctx.ensure_object(dict)
    try:
        settings = load_settings()
    except LoadError as exc:
        default_log_dir = Settings.model_fields["log_dir"].default
        _fail(setup_logging(default_log_dir if log_dir is None else log_dir), ENV_SOURCE, exc)

    ctx.obj["settings"] = settings
    ctx.obj["config_path"] = config_path or settings.config_path
    ctx.obj["log"] = setup_logging(settings.log_dir if log_dir is None else log_dir)


def _fail(log: structlog.stdlib.BoundLogger, path: str, exc: ConfigError) -> NoReturn:
    log.error("config.invalid", path=path, error_type=type(exc).__name__, error=str(exc))
    raise SystemExit(1) from exc


def _load_validated(ctx: click.Context) -> Config:
    """Load then validate; any ConfigError is fatal to the command."""
    log = ctx.obj["log"]
    path = ctx.obj["config_path"]
    try:
        cfg = load_config(path, ctx.obj["settings"])
        validate_config(cfg, log)
    except ConfigError as exc:
        _fail(log, path, exc)

    log.info("config.loaded", path=path, rss_sources=len(cfg.sources.rss), html_sources=len(cfg.sources.html))
    return cfg


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Load and validate the config, exit 1 if anything is wrong."""
    _load_validated(ctx)
    click.echo("Configuration OK.")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print a JSON list instead of text.")
@click.pass_context
def intervals(ctx: click.Context, as_json: bool) -> None:
    """Show the effective poll interval of every source."""
    cfg = _load_validated(ctx)
    log = ctx.obj["log"]

    rows = [
        {
            "kind": source.kind,
            "name": source.name,
            "url": source.url,
            "interval_seconds": int(cfg.effective_interval(source, log).total_seconds()),
        }
        for source in cfg.iter_sources()
    ]

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        click.echo("No sources configured.")
        return
    for row in rows:
        click.echo(f"[{row['kind']}] {row['name']}: {row['interval_seconds']}s ({row['url']})")


@cli.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the validated config as JSON."""
    cfg = _load_validated(ctx)
    click.echo(cfg.model_dump_json(indent=2))
