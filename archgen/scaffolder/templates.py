"""Jinja2 template rendering for generated Dart sources.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``archgen/scaffolder/templates/`` directory and renders planned artifacts
into file text.  Rendering is side-effect free; writing is the merge
writer's job.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from archgen.scaffolder.models import Artifact
from archgen.scaffolder.records import dart_string


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for planned artifacts.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined template variables raise instead of
    rendering as empty text, so a planner/template mismatch fails loudly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Register custom filters
        self.env.filters["dart_string"] = dart_string

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"core/network/dio_client.dart.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_artifact(self, artifact: Artifact) -> str:
        """Render the text of a planned artifact."""
        return self.render(artifact.template, artifact.context)

    # -- Plan rendering ----------------------------------------------------

    def render_all(self, artifacts: list[Artifact]) -> list[Artifact]:
        """Return copies of *artifacts* with ``content`` filled in, same order."""
        return [
            artifact.model_copy(update={"content": self.render_artifact(artifact)})
            for artifact in artifacts
        ]
