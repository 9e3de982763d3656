"""Bohr diagram generator.

This package renders animated Bohr-model diagrams of atoms as SVG.
An element is looked up by atomic number, its shells are laid out as
concentric orbits around a fixed nucleus, and each orbit gets its own
looping timeline that carries the electrons around the orbit path.

The main entry point is the CLI module, which provides commands for rendering
diagrams to SVG or HTML and for inspecting the element dataset. Library users
call ``bohr.diagram.render`` directly.

Architecture:
- elements: element dataset and lookup
- geometry: nucleus, orbit and electron shapes
- timeline: per-orbit animation timelines and the frame ticker
- protocols / surface: drawing surface abstraction and its SVG implementation
- diagram: the owned Diagram object and the render entry point
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
