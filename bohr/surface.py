"""SVG drawing surface for Bohr.

This module implements the DrawingSurface protocol as an in-memory SVG
document. Shapes are plain nodes; motion bindings become ``<animateMotion>``
children that reference the orbit path through ``<mpath>``. The document is
serialized with ``SvgSurface.to_svg()``.

Key classes:
- SvgNode: One element in the SVG tree.
- SvgSurface: DrawingSurface implementation backed by SvgNode trees.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from markupsafe import Markup, escape

from .utils import format_number, normalize_selector

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

SHAPE_KINDS = ("circle", "path", "text", "g")


@dataclass(eq=False)
class SvgNode:
    """An SVG element.

    Attributes:
        tag: Element name.
        attrs: Attribute mapping, serialized in insertion order.
        children: Child nodes.
        text: Optional text content.
        parent: Node this one is attached to, if any.
    """

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[SvgNode] = field(default_factory=list)
    text: str | None = None
    parent: SvgNode | None = field(default=None, repr=False)

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    def iter(self) -> Iterator[SvgNode]:
        """Iterate over this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, tag: str) -> list[SvgNode]:
        return [node for node in self.iter() if node.tag == tag]

    def render(self, indent: int = 0) -> str:
        """Serialize this node and its children to SVG markup."""
        pad = "  " * indent
        attrs = "".join(f' {name}="{escape(value)}"' for name, value in self.attrs.items())
        if not self.children and self.text is None:
            return f"{pad}<{self.tag}{attrs}/>"
        if not self.children:
            return f"{pad}<{self.tag}{attrs}>{escape(self.text)}</{self.tag}>"
        inner = "\n".join(child.render(indent + 1) for child in self.children)
        return f"{pad}<{self.tag}{attrs}>\n{inner}\n{pad}</{self.tag}>"


class SvgSurface:
    """In-memory SVG document implementing the DrawingSurface protocol.

    Containers are ``<g>`` groups addressed by id selectors; a container is
    created on first use.

    Attributes:
        width: Document width in user units.
        height: Document height in user units.
        root: Root ``<svg>`` node.
    """

    def __init__(self, width: float, height: float, title: str | None = None):
        self.width = width
        self.height = height
        size_w = format_number(width)
        size_h = format_number(height)
        self.root = SvgNode(
            "svg",
            {
                "xmlns": SVG_NS,
                "xmlns:xlink": XLINK_NS,
                "width": size_w,
                "height": size_h,
                "viewBox": f"0 0 {size_w} {size_h}",
            },
        )
        if title:
            self._append(self.root, SvgNode("title", text=title))
        self._containers: dict[str, SvgNode] = {}
        self._counter = 0

    def container(self, selector: str) -> SvgNode:
        key = normalize_selector(selector)
        node = self._containers.get(key)
        if node is None:
            node = SvgNode("g", {"id": key, "class": "bohr-diagram"})
            self._append(self.root, node)
            self._containers[key] = node
        return node

    def create_shape(self, kind: str, attrs: Mapping[str, str] | None = None) -> SvgNode:
        if kind not in SHAPE_KINDS:
            raise ValueError(f"Unsupported shape kind: {kind!r}")
        return SvgNode(kind, dict(attrs or {}))

    def set_path(self, shape: SvgNode, data: str) -> None:
        if shape.tag != "path":
            raise ValueError(f"Cannot set path data on <{shape.tag}>")
        shape.attrs["d"] = data

    def attach(self, container: SvgNode, shape: SvgNode) -> None:
        if shape.parent is not None:
            shape.parent.children.remove(shape)
        self._append(container, shape)

    def clear(self, container: SvgNode) -> None:
        for child in container.children:
            child.parent = None
        container.children.clear()

    def bind_motion(
        self,
        shape: SvgNode,
        path_shape: SvgNode,
        *,
        duration: float,
        begin: float,
        reverse: bool = False,
    ) -> None:
        path_id = path_shape.id or self._assign_id(path_shape, "orbit")
        attrs = {
            "dur": f"{format_number(duration)}s",
            "begin": f"{format_number(begin)}s",
            "repeatCount": "indefinite",
        }
        if reverse:
            attrs.update({"keyPoints": "1;0", "keyTimes": "0;1", "calcMode": "linear"})
        motion = SvgNode("animateMotion", attrs)
        self._append(motion, SvgNode("mpath", {"xlink:href": f"#{path_id}"}))
        self._append(shape, motion)

    def set_text(self, shape: SvgNode, text: str) -> None:
        shape.text = text

    def new_id(self, prefix: str) -> str:
        """Return an id not used by any container or node in the document."""
        while True:
            self._counter += 1
            candidate = f"bohr-{prefix}-{self._counter}"
            if candidate not in self._containers and self.find(candidate) is None:
                return candidate

    def find(self, element_id: str) -> SvgNode | None:
        for node in self.root.iter():
            if node.id == element_id:
                return node
        return None

    def to_svg(self) -> str:
        """Serialize the whole document."""
        return self.root.render() + "\n"

    def to_markup(self) -> Markup:
        """Return the document as Markup for embedding in HTML templates."""
        return Markup(self.root.render())

    def _assign_id(self, node: SvgNode, prefix: str) -> str:
        node.attrs["id"] = self.new_id(prefix)
        return node.attrs["id"]

    @staticmethod
    def _append(parent: SvgNode, child: SvgNode) -> None:
        child.parent = parent
        parent.children.append(child)
