"""Command line interface for panchangam using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import json
import logging

import typer
import yaml
from pydantic import BaseModel, ValidationError

from ._typer import check_choice, parse_now
from .config import Settings, load_settings
from .core.timeconv import TimeConverter
from .document import CATEGORIES, EmptyDocumentError, PanchangamDocument, load_document
from .ingest import SourceUnavailableError, open_source
from .present import PanchangamView, PresentationSink, build_view, error_view, render_text
from .utils.logging import configure_logging

app = typer.Typer(help="Current and next Tithi, Nakshatra, Yogam and Karanam from a panchangam file")
logger = logging.getLogger(__name__)


def _override_keys(settings: Settings, key: str) -> List[str]:
    """Split ``section.field`` and check that it names a setting.

    Section labels are addressed one level deeper, as
    ``layout.sections.<category>``.
    """

    keys = key.split(".")
    if len(keys) == 2:
        section = getattr(settings, keys[0], None)
        if isinstance(section, BaseModel) and keys[1] in type(section).model_fields:
            return keys
    elif len(keys) == 3 and keys[:2] == ["layout", "sections"] and keys[2] in CATEGORIES:
        return keys
    raise typer.BadParameter(f"unknown configuration key: {key}")


def _with_overrides(settings: Settings, overrides: List[str]) -> Settings:
    # Values stay strings; the field validators coerce offsets, numbers and
    # comma-separated header lists.
    data = settings.model_dump()
    for override in overrides:
        if "=" not in override:
            raise typer.BadParameter("overrides must be of the form --set section.key=value")
        key, raw_value = override.split("=", 1)
        keys = _override_keys(settings, key)
        target = data
        for part in keys[:-1]:
            target = target[part]
        target[keys[-1]] = raw_value
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid configuration override: {exc}") from exc


class ConsoleSink:
    """Presentation sink writing to standard output."""

    def __init__(self, settings: Settings, as_json: bool = False) -> None:
        self.settings = settings
        self.as_json = as_json

    def render(self, view: PanchangamView) -> None:
        if self.as_json:
            typer.echo(json.dumps(view.as_dict(), ensure_ascii=False, indent=2))
        else:
            typer.echo(render_text(view, self.settings))


def _load(cfg: Settings, source: Optional[str]) -> PanchangamDocument:
    src = open_source(source, cfg)
    try:
        return load_document(src, settings=cfg)
    except (SourceUnavailableError, EmptyDocumentError) as exc:
        logger.debug("load failed", exc_info=exc)
        typer.secho(f"Error loading panchangam data: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. source.location=/data/panchangam.txt",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages."),
) -> None:
    """Initialise the Typer context with validated settings."""

    if config is not None and not config.exists():
        raise typer.BadParameter(f"configuration file not found: {config}")

    try:
        settings = load_settings(config) if config else Settings()
    except (FileNotFoundError, TypeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"failed to load configuration: {exc}") from exc
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid configuration: {exc}") from exc

    if set_overrides:
        settings = _with_overrides(settings, set_overrides)

    configure_logging(settings, verbose=verbose)
    ctx.obj = settings


@app.command()
def show(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(None, "--source", "-s", help="File path or URL of the panchangam text."),
    now: Optional[str] = typer.Option(None, "--now", help="Evaluate at YYYY/MM/DD HH:MM[:SS] (target timezone)."),
    as_json: bool = typer.Option(False, "--json", help="Emit the view as JSON."),
) -> None:
    """Show the current and next interval of every category.

    ``now`` is sampled once, so all four categories are resolved against the
    same instant.
    """

    cfg: Settings = ctx.obj
    conv = TimeConverter.from_settings(cfg)
    instant = parse_now(now, conv)
    sink: PresentationSink = ConsoleSink(cfg, as_json=as_json)

    src = open_source(source, cfg)
    try:
        document = load_document(src, instant, settings=cfg, converter=conv)
    except (SourceUnavailableError, EmptyDocumentError) as exc:
        logger.debug("load failed", exc_info=exc)
        sink.render(error_view())
        raise typer.Exit(code=1) from exc

    sink.render(build_view(document, instant, settings=cfg, converter=conv))


@app.command()
def intervals(
    ctx: typer.Context,
    category: str = typer.Argument(..., help=f"One of: {', '.join(CATEGORIES)}"),
    source: Optional[str] = typer.Option(None, "--source", "-s"),
) -> None:
    """List the intervals of one category in the target timezone."""

    cfg: Settings = ctx.obj
    key = check_choice(category, CATEGORIES, "CATEGORY")
    conv = TimeConverter.from_settings(cfg)
    document = _load(cfg, source)
    index = document.categories()[key]
    if not index:
        typer.echo(f"No {key} intervals found")
        return
    width = max(len(iv.name) for iv in index)
    for iv in index:
        typer.echo(f"{iv.name.ljust(width)}  {conv.format(iv.start)} -> {conv.format(iv.end)}")


@app.command()
def check(
    ctx: typer.Context,
    source: Optional[str] = typer.Option(None, "--source", "-s"),
) -> None:
    """Report unordered, overlapping or inverted intervals."""

    cfg: Settings = ctx.obj
    document = _load(cfg, source)
    found = 0
    for name, index in document.categories().items():
        for problem in index.anomalies():
            typer.echo(f"{name}: {problem}")
            found += 1
    if found:
        raise typer.Exit(code=1)
    typer.echo("All intervals are ordered and non-overlapping")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
