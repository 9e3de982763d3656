"""Template rendering for Bohr.

This module uses Jinja2 to wrap a rendered SVG diagram in a standalone HTML
page that can be opened directly or linked from a blog post.

Key class:
- PageRenderer: Loads page templates and renders a diagram page.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup

from .elements import ElementRecord

# Path to the templates shipped with the package
_TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_TEMPLATE = "page.html.jinja"


class PageRenderer:
    """Renders HTML pages around diagrams.

    A project may override the bundled page by providing a template with
    the same name in its own template directory, which is searched first.

    Attributes:
        env: Jinja2 environment.
        template_name: Name of the page template.
    """

    def __init__(
        self,
        template_dir: Path | None = None,
        template_name: str = DEFAULT_TEMPLATE,
    ):
        """Initialize the page renderer.

        Args:
            template_dir: Optional directory searched before the bundled templates.
            template_name: Page template to render.
        """
        search_path = [_TEMPLATES_DIR]
        if template_dir is not None:
            search_path.insert(0, template_dir)
        self.template_name = template_name
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            enable_async=False,
        )

    def render_page(
        self,
        svg: Markup | str,
        element: ElementRecord,
        title: str | None = None,
        **context: Any,
    ) -> str:
        """Render a page embedding an SVG diagram.

        Args:
            svg: Serialized SVG. Plain strings are trusted and wrapped in Markup.
            element: Element shown in the diagram.
            title: Page title; defaults to the element name.
            **context: Extra template variables.

        Returns:
            Rendered HTML string.
        """
        context.setdefault("background", "#f5f7fa")
        try:
            template = self.env.get_template(self.template_name)
        except TemplateNotFound:
            print(f"Template not found ({self.template_name}); using bundled page.")
            template = self.env.get_template(DEFAULT_TEMPLATE)
        return template.render(
            svg=Markup(svg),
            element=element,
            title=title or f"{element.name} Bohr model",
            **context,
        )
