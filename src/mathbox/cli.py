"""CLI for mathbox."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from mathbox import __version__
from mathbox.errors import ConfigError
from mathbox.layout.boxes import describe_box
from mathbox.layout.context import StyleContext
from mathbox.layout.metrics import MathMetrics
from mathbox.log import get_logger, setup_logging
from mathbox.parser import parse, tokenize
from mathbox.render.svg import render_markup_svg, render_surd_svg
from mathbox.surd import (
    DEFAULT_TUNING,
    SurdGenerator,
    SurdTuning,
    describe_control_nodes,
    get_control_nodes,
)
from mathbox.text import TexEngine
from mathbox.themes import THEMES

logger = get_logger(__name__)

_FONT_SIZE = click.FloatRange(min=0, min_open=True)


def _load_json(path: Path) -> dict:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise click.BadParameter(f"{path}: expected a JSON object")
    return data


def _load_metrics(path: Path | None) -> MathMetrics | None:
    if path is None:
        return None
    try:
        return MathMetrics.from_dict(_load_json(path))
    except ConfigError as e:
        raise click.BadParameter(f"{path}: {e}", param_hint="--metrics") from e


def _load_tuning(path: Path | None) -> SurdTuning:
    if path is None:
        return DEFAULT_TUNING
    try:
        return SurdTuning.from_dict(_load_json(path))
    except ConfigError as e:
        raise click.BadParameter(f"{path}: {e}", param_hint="--tuning") from e


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log layout details to stderr")
def cli(verbose: bool) -> None:
    """mathbox: Typeset math markup to SVG and inspect the radical glyph."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)


@cli.command()
@click.argument("expr")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Prints to stdout when omitted")
@click.option("--font-size", type=_FONT_SIZE, default=None,
              help="Font size in px (default: theme font size)")
@click.option("--mode", type=click.Choice(["math", "text"]), default="math",
              help="math: whole input is markup; text: only $...$ segments are")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--debug", is_flag=True, help="Outline every box")
@click.option("--metrics", "metrics_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="JSON file of metric overrides")
@click.option("--select", type=int, multiple=True,
              help="Highlight the placeholder with this index (repeatable)")
def render(
    expr: str,
    output: Path | None,
    font_size: float | None,
    mode: str,
    theme: str,
    debug: bool,
    metrics_file: Path | None,
    select: tuple[int, ...],
) -> None:
    """Render a math expression to SVG."""
    engine = TexEngine(metrics=_load_metrics(metrics_file))
    svg = render_markup_svg(
        expr,
        THEMES[theme],
        font_size=font_size,
        mode=mode,
        debug=debug,
        engine=engine,
        selected=select,
    )
    if output is None:
        click.echo(svg)
        return
    output.write_text(svg)
    logger.debug("Wrote %d bytes", len(svg))
    click.echo(f"Rendered {expr!r} -> {output}")


@cli.command()
@click.argument("expr")
@click.option("--font-size", type=_FONT_SIZE, default=20.0,
              help="Font size in px (default: 20)")
@click.option("--metrics", "metrics_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="JSON file of metric overrides")
def inspect(expr: str, font_size: float, metrics_file: Path | None) -> None:
    """Show the tokens, parse tree and box tree of an expression."""
    tokens = tokenize(expr)
    nodes = parse(tokens)
    engine = TexEngine(metrics=_load_metrics(metrics_file))
    box = engine.math.build(nodes, StyleContext(font_size=font_size))

    click.echo(f"Tokens ({len(tokens)}):")
    click.echo("  " + " ".join(f"{t.kind.value}:{t.value}" for t in tokens))
    click.echo(f"Nodes ({len(nodes)}):")
    for node in nodes:
        click.echo(f"  {node!r}")
    click.echo(f"Boxes (width={box.width:.2f}, height={box.height:.2f}):")
    for line in describe_box(box, indent=1):
        click.echo(line)


@cli.command()
@click.argument("width", type=float)
@click.argument("height", type=float)
@click.option("--tuning", "tuning_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="JSON file of tuning parameter overrides")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write the outline as SVG to this path")
@click.option("--nodes", is_flag=True, help="List control nodes (and draw them)")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme for --output (default: light)")
def surd(
    width: float,
    height: float,
    tuning_file: Path | None,
    output: Path | None,
    nodes: bool,
    theme: str,
) -> None:
    """Generate a radical outline for content of WIDTH x HEIGHT design units."""
    tuning = _load_tuning(tuning_file)
    result = SurdGenerator().generate_path(width, height, tuning=tuning)
    m = result.metrics
    v = result.vinculum

    click.echo(f"Advance width: {m.advance_width:.3f}")
    click.echo(f"Ascent: {m.ascent:.3f}  Descent: {m.descent:.3f}")
    click.echo(f"Bounds: x [{m.min_x:.3f}, {m.max_x:.3f}]  "
               f"y [{m.min_y:.3f}, {m.max_y:.3f}]")
    click.echo(f"Slant width: {m.slant_width:.3f}  Hook min x: {m.hook_min_x:.3f}")
    click.echo(f"Vinculum: x={v.x:.3f} y={v.y:.3f} "
               f"w={v.width:.3f} h={v.height:.3f}")
    if nodes:
        click.echo("Control nodes:")
        for line in describe_control_nodes(get_control_nodes(result.raw_points)):
            click.echo(f"  {line}")

    if output is not None:
        output.write_text(render_surd_svg(result, THEMES[theme], show_nodes=nodes))
        click.echo(f"Wrote outline -> {output}")


@cli.command()
def tuning() -> None:
    """Print the default radical tuning as JSON."""
    click.echo(json.dumps(DEFAULT_TUNING.to_dict(), indent=2))
