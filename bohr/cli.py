"""Command-line interface for Bohr.

This module defines the CLI commands using Click framework.
It provides commands for rendering diagrams and for inspecting the element dataset.

Commands:
- render: Render an element to SVG (or an HTML page).
- info: Show an element's electron configuration.
- list: List every supported element.
- positions: Print electron coordinates at a point in time as JSON.
- frames: Stream electron coordinates frame by frame as JSON lines.
- pick: Choose an element interactively and render it.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import click
import questionary

from . import __version__
from .diagram import Diagram, RenderOptions
from .elements import ElementDataError, UnknownElement
from .export import ExportError, build_renderer, export_diagram, load_config
from .timeline import FrameTicker


@click.group()
@click.version_option(version=__version__, prog_name="bohr")
def cli():
    """Bohr diagram generator."""


@cli.command()
@click.argument("element")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (defaults to output_dir from bohr.yaml)",
)
@click.option("--html", is_flag=True, help="Write an HTML page instead of bare SVG")
@click.option("--seed", type=int, required=False, help="Seed for orbit speed and direction")
@click.option("--selector", required=False, help="Container selector (overrides bohr.yaml)")
def render(
    element: str,
    output: Path | None,
    html: bool,
    seed: int | None,
    selector: str | None,
):
    """Render ELEMENT (atomic number or symbol) to a file."""
    project_root = Path.cwd()
    config = _load_config(project_root, seed=seed, selector=selector)
    try:
        result = export_diagram(project_root, element, output=output, html=html, config=config)
    except ExportError as exc:
        click.echo(click.style("Render failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {exc.target_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    except (UnknownElement, ElementDataError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    record = result.element
    click.echo(
        f"Rendered {record.name} ({record.symbol}) with "
        f"{len(result.diagram.timelines)} orbits into {result.output_path}"
    )


@cli.command()
@click.argument("element")
def info(element: str):
    """Show the electron configuration of ELEMENT."""
    renderer = _build_renderer(Path.cwd(), _load_config(Path.cwd()))
    try:
        record = renderer.table.resolve(element)
    except UnknownElement as exc:
        raise click.ClickException(str(exc)) from exc
    shells = ", ".join(str(count) for count in record.electron_configuration)
    click.echo(f"{record.atomic_number:>3}  {record.symbol:<2}  {record.name}")
    click.echo(f"     shells: {shells}")


@cli.command(name="list")
def list_elements():
    """List every supported element."""
    renderer = _build_renderer(Path.cwd(), _load_config(Path.cwd()))
    for record in renderer.table.values():
        shells = "-".join(str(count) for count in record.electron_configuration)
        click.echo(f"{record.atomic_number:>3}  {record.symbol:<2}  {record.name:<14} {shells}")


@cli.command()
@click.argument("element")
@click.option("--at", "at", type=float, default=0.0, show_default=True, help="Seconds after first paint")
@click.option("--seed", type=int, required=False, help="Seed for orbit speed and direction")
def positions(element: str, at: float, seed: int | None):
    """Print electron coordinates of ELEMENT as JSON."""
    if at < 0:
        raise click.BadParameter("must be >= 0", param_hint="--at")
    ticker = FrameTicker()
    diagram = _render_with_ticker(element, ticker, seed)
    if at > 0:
        ticker.tick(at)
    click.echo(json.dumps(_snapshot(diagram, ticker.elapsed), indent=2))


@cli.command()
@click.argument("element")
@click.option("--fps", type=float, default=30.0, show_default=True, help="Frames per second")
@click.option("--count", type=int, default=30, show_default=True, help="Number of frames")
@click.option("--seed", type=int, required=False, help="Seed for orbit speed and direction")
def frames(element: str, fps: float, count: int, seed: int | None):
    """Stream electron coordinates of ELEMENT as JSON lines, one per frame."""
    if fps <= 0 or count < 0:
        raise click.BadParameter("fps must be > 0 and count >= 0")
    ticker = FrameTicker()
    diagram = _render_with_ticker(element, ticker, seed)

    def emit(current: FrameTicker) -> None:
        click.echo(json.dumps(_snapshot(diagram, current.elapsed)))

    asyncio.run(ticker.run(fps=fps, frames=count, on_frame=emit))


@cli.command()
@click.option("--html", is_flag=True, help="Write an HTML page instead of bare SVG")
def pick(html: bool):
    """Choose an element interactively and render it."""
    project_root = Path.cwd()
    config = _load_config(project_root)
    renderer = _build_renderer(project_root, config)
    choices = [
        questionary.Choice(f"{r.atomic_number:>3} {r.symbol:<2} {r.name}", value=r.atomic_number)
        for r in renderer.table.values()
    ]
    number = questionary.select(
        "Select element:",
        choices=choices,
        style=_questionary_style(),
    ).ask()

    if number is None:
        raise click.Abort()

    try:
        result = export_diagram(project_root, number, html=html, config=config)
    except ExportError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"Rendered {result.element.name} into {result.output_path}")


def _load_config(
    project_root: Path, seed: int | None = None, selector: str | None = None
) -> dict[str, Any]:
    """Load bohr.yaml and apply command-line overrides."""
    config = load_config(project_root)
    if seed is not None:
        config["seed"] = seed
    if selector:
        config["container"] = selector
    return config


def _build_renderer(project_root: Path, config: dict[str, Any], ticker: FrameTicker | None = None):
    try:
        return build_renderer(project_root, config, ticker=ticker)
    except (ElementDataError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _render_with_ticker(element: str, ticker: FrameTicker, seed: int | None) -> Diagram:
    project_root = Path.cwd()
    config = _load_config(project_root, seed=seed)
    renderer = _build_renderer(project_root, config, ticker=ticker)
    try:
        record = renderer.table.resolve(element)
        return renderer.render(
            RenderOptions(
                element_periodic_number=record.atomic_number,
                container_selector=str(config.get("container") or "#atom"),
            )
        )
    except (UnknownElement, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _snapshot(diagram: Diagram, elapsed: float) -> dict[str, Any]:
    """Return a JSON-ready description of the diagram's electrons."""
    record = diagram.record
    return {
        "element": record.symbol if record else None,
        "time": round(elapsed, 6),
        "orbits": [
            {
                "index": timeline.orbit_index,
                "duration": round(timeline.duration, 6),
                "reversed": timeline.reversed,
                "stagger": round(timeline.stagger, 6),
                "electrons": [[round(x, 3), round(y, 3)] for x, y in timeline.positions()],
            }
            for timeline in diagram.timelines
        ],
    }


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
