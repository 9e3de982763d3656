"""Diagram assembly for Bohr.

This module ties the element lookup, geometry and timelines together and
draws the result on a DrawingSurface.

A Diagram owns everything drawn in its container: the nucleus, the orbit
paths, the electrons and the orbit timelines. Re-rendering a container tears
the previous Diagram down completely (timelines killed, container cleared)
before anything new is attached.

Key classes:
- RenderOptions: Element number and target container.
- Theme: Colors and CSS classes for the drawn shapes.
- Diagram: Owned drawing of one element in one container.
- Renderer: Keeps the current Diagram of each container.

Key functions:
- render: One-shot entry point that draws a diagram and returns it.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from .elements import ElementRecord, PeriodicTable, default_table
from .geometry import Layout, OrbitGeometry, build_orbits, nucleus
from .protocols import DrawingSurface
from .timeline import AnimationScheduler, FrameTicker, Timeline
from .utils import format_number, normalize_selector


@dataclass(frozen=True)
class RenderOptions:
    """Options for rendering one diagram.

    Attributes:
        element_periodic_number: Atomic number of the element to draw.
        container_selector: Selector of the container to draw into.
    """

    element_periodic_number: int
    container_selector: str

    def __post_init__(self):
        if not self.container_selector:
            raise ValueError("container_selector is required")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> RenderOptions:
        """Build options from a mapping with snake_case or camelCase keys."""
        number = options.get("element_periodic_number", options.get("elementPeriodicNumber"))
        selector = options.get("container_selector", options.get("containerSelector"))
        if number is None:
            raise ValueError("element_periodic_number is required")
        return cls(element_periodic_number=number, container_selector=selector or "")


@dataclass(frozen=True)
class Theme:
    """Presentation attributes for diagram shapes."""

    nucleus_fill: str = "#e4572e"
    orbit_stroke: str = "#9aa5b1"
    orbit_width: float = 1.0
    electron_fill: str = "#2e86de"
    label_fill: str = "#ffffff"
    show_symbol: bool = True


class Diagram:
    """Drawing of a single element inside one container.

    Attributes:
        surface: Surface the diagram is drawn on.
        selector: Container selector.
        layout: Drawing constants.
        theme: Presentation attributes.
        record: Element currently drawn, or None before draw / after teardown.
        orbits: Geometry of every rendered orbit.
        timelines: One timeline per rendered orbit.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        selector: str,
        layout: Layout | None = None,
        theme: Theme | None = None,
    ):
        self.surface = surface
        self.selector = selector
        self.container_id = normalize_selector(selector)
        self.layout = layout or Layout()
        self.theme = theme or Theme()
        self.record: ElementRecord | None = None
        self.orbits: list[OrbitGeometry] = []
        self.timelines: list[Timeline] = []
        self.shapes: list[Any] = []
        self.electron_shapes: dict[int, list[Any]] = {}
        self._container: Any = None

    @property
    def is_live(self) -> bool:
        return self.record is not None

    def draw(self, record: ElementRecord, scheduler: AnimationScheduler) -> Diagram:
        """Draw an element into the container, replacing whatever was there.

        Args:
            record: Element to draw.
            scheduler: Builds the orbit timelines.

        Returns:
            This diagram.
        """
        if self.is_live:
            self.teardown()
        container = self.surface.container(self.selector)
        self.surface.clear(container)
        self._container = container

        self._draw_nucleus(record)
        self.orbits = build_orbits(record.electron_configuration, self.layout)
        paths = {orbit.index: self._draw_orbit(orbit) for orbit in self.orbits}
        self.timelines = scheduler.schedule_all(self.orbits)
        for timeline in self.timelines:
            self._draw_electrons(timeline, paths[timeline.orbit_index])
        self.record = record
        return self

    def teardown(self) -> None:
        """Kill every timeline and remove every shape from the container."""
        for timeline in self.timelines:
            timeline.kill()
        if self._container is not None:
            self.surface.clear(self._container)
        self.timelines = []
        self.orbits = []
        self.shapes = []
        self.electron_shapes = {}
        self.record = None

    def positions(self) -> dict[int, list[tuple[float, float]]]:
        """Return current electron positions keyed by orbit index."""
        return {t.orbit_index: t.positions() for t in self.timelines}

    def _attach(self, shape: Any) -> Any:
        self.surface.attach(self._container, shape)
        self.shapes.append(shape)
        return shape

    def _draw_nucleus(self, record: ElementRecord) -> None:
        circle = nucleus(self.layout)
        attrs = {**circle.attrs(), "class": "nucleus", "fill": self.theme.nucleus_fill}
        self._attach(self.surface.create_shape("circle", attrs))
        if self.theme.show_symbol:
            label = self.surface.create_shape(
                "text",
                {
                    "x": format_number(circle.cx),
                    "y": format_number(circle.cy),
                    "class": "symbol",
                    "fill": self.theme.label_fill,
                    "text-anchor": "middle",
                    "dominant-baseline": "central",
                    "font-size": format_number(circle.r),
                },
            )
            self.surface.set_text(label, record.symbol)
            self._attach(label)

    def _draw_orbit(self, orbit: OrbitGeometry) -> Any:
        shape = self.surface.create_shape(
            "path",
            {
                "id": f"{self.container_id}-orbit-{orbit.index}",
                "class": "orbit",
                "fill": "none",
                "stroke": self.theme.orbit_stroke,
                "stroke-width": format_number(self.theme.orbit_width),
            },
        )
        self.surface.set_path(shape, orbit.path.to_path_data())
        return self._attach(shape)

    def _draw_electrons(self, timeline: Timeline, path_shape: Any) -> None:
        shapes = []
        for position, electron in enumerate(timeline.electrons):
            attrs = {
                **electron.attrs(),
                "class": "electron",
                "fill": self.theme.electron_fill,
            }
            shape = self._attach(self.surface.create_shape("circle", attrs))
            self.surface.bind_motion(
                shape,
                path_shape,
                duration=timeline.duration,
                begin=timeline.begin_offset(position),
                reverse=timeline.reversed,
            )
            shapes.append(shape)
        self.electron_shapes[timeline.orbit_index] = shapes


def fit_layout(layout: Layout, table: PeriodicTable) -> Layout:
    """Grow a layout so every element in the table fits on its canvas.

    The center depends on the orbit count, so sizing once for the whole
    table keeps the nucleus in the same place for every element.
    """
    longest = max((record.orbit_count for record in table.values()), default=0)
    if longest > layout.orbits:
        return replace(layout, orbits=longest)
    return layout


class Renderer:
    """Keeps the current Diagram of each container on one surface.

    Rendering into a container that already holds a diagram tears the old
    one down first. The element is looked up before anything is touched,
    so an unknown element leaves the existing diagram in place.

    Attributes:
        surface: Surface to draw on.
        table: Element dataset.
        layout: Drawing constants.
        theme: Presentation attributes.
        scheduler: Timeline builder.
        ticker: Optional frame ticker that drives the timelines.
        diagrams: Current diagram keyed by container id.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        *,
        table: PeriodicTable | None = None,
        layout: Layout | None = None,
        theme: Theme | None = None,
        rng: random.Random | None = None,
        scheduler: AnimationScheduler | None = None,
        ticker: FrameTicker | None = None,
    ):
        self.surface = surface
        self.table = table if table is not None else default_table()
        self.layout = fit_layout(layout or Layout(), self.table)
        self.theme = theme or Theme()
        self.scheduler = scheduler or AnimationScheduler(rng)
        self.ticker = ticker
        self.diagrams: dict[str, Diagram] = {}

    def render(self, options: RenderOptions) -> Diagram:
        """Draw the requested element into the requested container.

        Raises:
            UnknownElement: If the atomic number is not in the dataset.
        """
        record = self.table.lookup(options.element_periodic_number)
        key = normalize_selector(options.container_selector)
        self.teardown(key)
        diagram = Diagram(self.surface, options.container_selector, self.layout, self.theme)
        diagram.draw(record, self.scheduler)
        self.diagrams[key] = diagram
        if self.ticker is not None:
            self.ticker.add(diagram.timelines)
        return diagram

    def teardown(self, selector: str) -> None:
        """Tear down the diagram in a container, if there is one."""
        diagram = self.diagrams.pop(normalize_selector(selector), None)
        if diagram is not None:
            diagram.teardown()
        if self.ticker is not None:
            self.ticker.prune()

    def teardown_all(self) -> None:
        for key in list(self.diagrams):
            self.teardown(key)


def render(
    options: RenderOptions | Mapping[str, Any],
    surface: DrawingSurface | None = None,
    *,
    rng: random.Random | None = None,
    table: PeriodicTable | None = None,
    layout: Layout | None = None,
    theme: Theme | None = None,
    ticker: FrameTicker | None = None,
) -> Diagram:
    """Render a diagram in one call.

    Args:
        options: RenderOptions, or a mapping with the same keys.
        surface: Surface to draw on; a new SvgSurface sized for the layout
            is created when omitted.
        rng: Random source for orbit speed and direction.
        table: Element dataset; defaults to the shipped periodic table.
        layout: Drawing constants.
        theme: Presentation attributes.
        ticker: Optional frame ticker to drive the timelines.

    Returns:
        The drawn Diagram. Its ``surface`` attribute holds the surface used.

    Raises:
        UnknownElement: If the atomic number is not in the dataset.
    """
    if not isinstance(options, RenderOptions):
        options = RenderOptions.from_mapping(options)
    table = table if table is not None else default_table()
    layout = fit_layout(layout or Layout(), table)
    # Fail before creating or touching any surface
    record = table.lookup(options.element_periodic_number)
    if surface is None:
        from .surface import SvgSurface

        surface = SvgSurface(layout.size, layout.size, title=record.name or record.symbol)
    renderer = Renderer(
        surface, table=table, layout=layout, theme=theme, rng=rng, ticker=ticker
    )
    return renderer.render(options)
