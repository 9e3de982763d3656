"""Protocol definitions for Bohr.

This module defines the drawing surface interface used by the diagram code.
Geometry and timelines are computed without knowing what they are drawn on;
the surface turns them into concrete shapes.

These protocols enable:
- Testing diagram logic without a real rendering environment
- Swapping the SVG output for another backend without touching diagram code
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DrawingSurface(Protocol):
    """Protocol for a retained-mode drawing surface.

    Shapes are opaque handles returned by ``create_shape``. A shape is
    invisible until it is attached to a container.
    """

    @abstractmethod
    def container(self, selector: str) -> Any:
        """Return the container identified by a selector.

        Args:
            selector: Container selector, e.g. ``#atom``.

        Returns:
            Opaque container handle.
        """
        ...

    @abstractmethod
    def create_shape(self, kind: str, attrs: Mapping[str, str] | None = None) -> Any:
        """Create a detached shape.

        Args:
            kind: Shape kind ('circle', 'path', 'text', 'g').
            attrs: Initial presentation attributes.

        Returns:
            Opaque shape handle.
        """
        ...

    @abstractmethod
    def set_path(self, shape: Any, data: str) -> None:
        """Set the path data of a path shape.

        Args:
            shape: Shape returned by ``create_shape('path')``.
            data: Path data string.
        """
        ...

    @abstractmethod
    def attach(self, container: Any, shape: Any) -> None:
        """Append a shape to a container (or to another group shape)."""
        ...

    @abstractmethod
    def clear(self, container: Any) -> None:
        """Remove every shape from a container."""
        ...

    @abstractmethod
    def bind_motion(
        self,
        shape: Any,
        path_shape: Any,
        *,
        duration: float,
        begin: float,
        reverse: bool = False,
    ) -> None:
        """Make a shape travel along a path forever.

        Args:
            shape: Shape to move.
            path_shape: Path shape to follow.
            duration: Seconds per loop.
            begin: Start time in seconds; negative values start part-way in.
            reverse: Travel the path end to start.
        """
        ...

    @abstractmethod
    def set_text(self, shape: Any, text: str) -> None:
        """Set the text content of a text shape."""
        ...
