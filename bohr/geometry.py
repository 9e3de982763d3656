"""Geometry for Bohr diagrams.

This module computes the shapes of a diagram: the nucleus, one circular
orbit path per electron shell, and the electron placeholders that later ride
along those paths.

All sizes come from a Layout, which is constant across elements. Larger atoms
add more orbits outward; they never stretch the existing ones.

Key classes:
- Layout: Center point, radii and orbit spacing.
- Circle: A circle shape (nucleus or electron).
- OrbitPath: A closed circular path made of two half-arcs.
- OrbitGeometry: The path and electrons of one rendered orbit.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from .utils import format_number

# Default drawing constants
ORBIT_SPACING = 30.0
NUCLEUS_RADIUS = 15.0
ELECTRON_RADIUS = 4.0
CANVAS_MARGIN = 20.0
DEFAULT_ORBITS = 7

ORIGIN = (0.0, 0.0)


@dataclass(frozen=True)
class Layout:
    """Drawing constants shared by every diagram.

    Attributes:
        orbit_spacing: Distance between consecutive orbits (and from the
            center to the first orbit).
        nucleus_radius: Radius of the nucleus circle.
        electron_radius: Radius of each electron circle.
        margin: Blank space between the outermost orbit and the canvas edge.
        orbits: Number of orbits the canvas is sized for.
    """

    orbit_spacing: float = ORBIT_SPACING
    nucleus_radius: float = NUCLEUS_RADIUS
    electron_radius: float = ELECTRON_RADIUS
    margin: float = CANVAS_MARGIN
    orbits: int = DEFAULT_ORBITS

    def __post_init__(self):
        if self.orbit_spacing <= 0:
            raise ValueError("orbit_spacing must be > 0")
        if self.nucleus_radius <= 0 or self.electron_radius <= 0:
            raise ValueError("radii must be > 0")
        if self.orbits < 1:
            raise ValueError("orbits must be >= 1")

    @property
    def size(self) -> float:
        """Side length of the square canvas."""
        return canvas_size(self, self.orbits)

    @property
    def center(self) -> tuple[float, float]:
        half = self.size / 2
        return (half, half)


def canvas_size(layout: Layout, orbit_count: int) -> float:
    """Return the side of a square canvas that fits ``orbit_count`` orbits.

    Args:
        layout: Drawing constants.
        orbit_count: Number of orbits to fit.

    Returns:
        Canvas side length, including margin and electron overhang.
    """
    outer = max(orbit_count, 1) * layout.orbit_spacing + layout.electron_radius
    return 2 * (outer + layout.margin)


def orbit_radius(index: int, spacing: float = ORBIT_SPACING) -> float:
    """Return the radius of the orbit with the given 1-based index."""
    if index < 1:
        raise ValueError(f"Orbit index must be >= 1, got {index}")
    return index * spacing


@dataclass(frozen=True)
class Circle:
    """A circle shape.

    Electron placeholders start at the origin and only move once attached
    to an orbit timeline.
    """

    cx: float
    cy: float
    r: float
    role: str = "electron"

    def attrs(self) -> dict[str, str]:
        return {
            "cx": format_number(self.cx),
            "cy": format_number(self.cy),
            "r": format_number(self.r),
        }


@dataclass(frozen=True)
class OrbitPath:
    """Closed circular path for one orbit.

    The circle is drawn as two half-arcs, top pole to bottom pole and back,
    so a traversal parameter runs from 0 to 1 over the full circle with both
    ends at the top pole. Traversal is clockwise on screen.

    Attributes:
        index: 1-based orbit index.
        center: Shared center point.
        radius: Orbit radius (index * spacing).
    """

    index: int
    center: tuple[float, float]
    radius: float

    @property
    def start(self) -> tuple[float, float]:
        cx, cy = self.center
        return (cx, cy - self.radius)

    @property
    def midpoint(self) -> tuple[float, float]:
        cx, cy = self.center
        return (cx, cy + self.radius)

    @property
    def length(self) -> float:
        return 2 * math.pi * self.radius

    def to_path_data(self) -> str:
        """Return SVG path data for the two half-arcs."""
        r = format_number(self.radius)
        top = _point(self.start)
        bottom = _point(self.midpoint)
        return f"M {top} A {r},{r} 0 1,1 {bottom} A {r},{r} 0 1,1 {top}"

    def point_at(self, t: float) -> tuple[float, float]:
        """Return the point at traversal fraction ``t`` (wraps modulo 1)."""
        angle = -math.pi / 2 + 2 * math.pi * (t % 1.0)
        cx, cy = self.center
        return (cx + self.radius * math.cos(angle), cy + self.radius * math.sin(angle))


@dataclass
class OrbitGeometry:
    """The path and electron placeholders of one rendered orbit."""

    path: OrbitPath
    electrons: list[Circle] = field(default_factory=list)

    @property
    def index(self) -> int:
        return self.path.index


def _point(point: tuple[float, float]) -> str:
    return f"{format_number(point[0])},{format_number(point[1])}"


def nucleus(layout: Layout) -> Circle:
    """Return the nucleus circle; identical for every element."""
    cx, cy = layout.center
    return Circle(cx=cx, cy=cy, r=layout.nucleus_radius, role="nucleus")


def orbit_path(index: int, layout: Layout) -> OrbitPath:
    """Return the orbit path for a 1-based orbit index."""
    return OrbitPath(
        index=index,
        center=layout.center,
        radius=orbit_radius(index, layout.orbit_spacing),
    )


def electron_placeholders(count: int, layout: Layout) -> list[Circle]:
    """Return ``count`` electron circles parked at the origin."""
    return [
        Circle(cx=ORIGIN[0], cy=ORIGIN[1], r=layout.electron_radius)
        for _ in range(count)
    ]


def build_orbits(configuration: Sequence[int], layout: Layout) -> list[OrbitGeometry]:
    """Build geometry for every populated orbit of a configuration.

    Orbits with zero electrons are skipped but keep their index, so outer
    orbits stay at ``index * spacing``.

    Args:
        configuration: Electrons per orbit, innermost first.
        layout: Drawing constants.

    Returns:
        One OrbitGeometry per orbit with at least one electron.
    """
    orbits: list[OrbitGeometry] = []
    for index, count in enumerate(configuration, start=1):
        if count <= 0:
            continue
        orbits.append(
            OrbitGeometry(
                path=orbit_path(index, layout),
                electrons=electron_placeholders(count, layout),
            )
        )
    return orbits
