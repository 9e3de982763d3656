"""Diagram export for Bohr.

This module loads project configuration, renders a diagram onto an SVG
surface and writes it to disk as a standalone SVG file or an HTML page.

Key functions:
- load_config: Loads configuration from bohr.yaml.
- build_renderer: Creates a Renderer from configuration.
- export_diagram: Renders one element and writes the output file.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .diagram import Diagram, Renderer, RenderOptions, Theme, fit_layout
from .elements import ElementRecord, PeriodicTable, default_table, load_periodic_table
from .geometry import Layout
from .surface import SvgSurface
from .templates import PageRenderer
from .timeline import AnimationScheduler, FrameTicker
from .utils import ensure_parent_dir, slugify


class ExportError(Exception):
    """Error while writing a diagram, with file context.

    Attributes:
        target_path: Path of the file being written.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        target_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.target_path = target_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{target_path}: {message}")


DEFAULT_CONFIG: dict[str, Any] = {
    "output_dir": "output",
    "container": "#atom",
    "seed": None,
    "orbit_spacing": 30,
    "nucleus_radius": 15,
    "electron_radius": 4,
    "min_duration": 6,
    "max_duration": 15,
    "elements_file": None,
    "title": None,
    "show_symbol": True,
    "template_dir": None,
}


@dataclass
class ExportResult:
    """Result of an export operation.

    Attributes:
        element: Element that was drawn.
        output_path: File that was written.
        diagram: The drawn diagram.
        surface: Surface holding the SVG document.
    """

    element: ElementRecord
    output_path: Path
    diagram: Diagram
    surface: SvgSurface


def load_config(project_root: Path) -> dict[str, Any]:
    """Load configuration from bohr.yaml.

    Args:
        project_root: Directory containing bohr.yaml.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / "bohr.yaml"
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update(loaded)
            else:
                print(f"Ignoring {config_path}: expected a mapping at the top level.")
    return config


def load_table(project_root: Path, config: dict[str, Any]) -> PeriodicTable:
    """Return the element dataset named in the config, or the shipped one."""
    elements_file = config.get("elements_file")
    if not elements_file:
        return default_table()
    path = Path(elements_file)
    if not path.is_absolute():
        path = project_root / path
    return load_periodic_table(path)


def layout_from_config(config: dict[str, Any]) -> Layout:
    return Layout(
        orbit_spacing=float(config["orbit_spacing"]),
        nucleus_radius=float(config["nucleus_radius"]),
        electron_radius=float(config["electron_radius"]),
    )


def build_renderer(
    project_root: Path,
    config: dict[str, Any],
    surface: SvgSurface | None = None,
    ticker: FrameTicker | None = None,
) -> Renderer:
    """Create a Renderer from configuration.

    Args:
        project_root: Directory relative paths in the config resolve against.
        config: Configuration dictionary (see DEFAULT_CONFIG).
        surface: Surface to draw on; sized from the layout when omitted.
        ticker: Optional frame ticker that drives the timelines.

    Returns:
        Configured Renderer.
    """
    table = load_table(project_root, config)
    layout = fit_layout(layout_from_config(config), table)
    seed = config.get("seed")
    scheduler = AnimationScheduler(
        random.Random(seed),
        min_duration=float(config["min_duration"]),
        max_duration=float(config["max_duration"]),
    )
    if surface is None:
        surface = SvgSurface(layout.size, layout.size, title=config.get("title"))
    return Renderer(
        surface,
        table=table,
        layout=layout,
        theme=Theme(show_symbol=bool(config.get("show_symbol", True))),
        scheduler=scheduler,
        ticker=ticker,
    )


def export_diagram(
    project_root: Path,
    element: int | str,
    output: Path | None = None,
    html: bool = False,
    config: dict[str, Any] | None = None,
) -> ExportResult:
    """Render an element and write it to disk.

    Args:
        project_root: Project directory (config and relative paths).
        element: Atomic number or chemical symbol.
        output: Output file; defaults to ``<output_dir>/<name>.svg`` (or ``.html``).
        html: Write an HTML page around the SVG instead of a bare SVG file.
        config: Configuration; loaded from bohr.yaml when omitted.

    Returns:
        ExportResult describing what was written.

    Raises:
        UnknownElement: If the element is not in the dataset.
        ExportError: If the output could not be rendered or written.
    """
    config = config if config is not None else load_config(project_root)
    renderer = build_renderer(project_root, config)
    record = renderer.table.resolve(element)
    diagram = renderer.render(
        RenderOptions(
            element_periodic_number=record.atomic_number,
            container_selector=str(config.get("container") or "#atom"),
        )
    )
    surface = renderer.surface

    if output is None:
        suffix = ".html" if html else ".svg"
        output = project_root / config.get("output_dir", "output") / (
            f"{record.atomic_number:03d}-{slugify(record.name or record.symbol)}{suffix}"
        )

    try:
        if html:
            template_dir = config.get("template_dir")
            pages = PageRenderer(
                project_root / template_dir if template_dir else None
            )
            content = pages.render_page(
                surface.to_markup(), record, title=config.get("title")
            )
        else:
            content = surface.to_svg()
    except Exception as exc:
        raise ExportError(output, _format_error_message(exc), exc) from exc

    try:
        ensure_parent_dir(output)
        output.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError(output, f"Could not write file: {exc}", exc) from exc
    return ExportResult(element=record, output_path=output, diagram=diagram, surface=surface)


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TemplateSyntaxError":
        return f"Template syntax error on line {getattr(exc, 'lineno', '?')}: {error_msg}"

    return f"{error_type}: {error_msg}"
