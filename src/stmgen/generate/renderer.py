"""
Jinja2 renderer for planned artifacts.

Each ArtifactKind has one template under stmgen/templates; the
descriptor's fields are the template context.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from stmgen.chips.errors import StmgenError

from .planner import ArtifactDescriptor, ArtifactKind

logger = logging.getLogger(__name__)

TEMPLATE_NAMES: Dict[ArtifactKind, str] = {
    ArtifactKind.BUILD_CONFIG: "build_config.toml.j2",
    ArtifactKind.RUNNER_CONFIG: "runner_config.toml.j2",
    ArtifactKind.RTT_FORWARD_CONFIG: "rtt_forward_config.toml.j2",
    ArtifactKind.DEBUG_ADAPTER_CONFIG: "debug_adapter_config.cfg.j2",
}


class TemplateRenderError(StmgenError):
    """Exception raised when an artifact template fails to render."""

    is_user_error = False


@dataclass
class RenderedFile:
    """A rendered artifact ready to be written."""

    path: str
    content: str


class ProjectRenderer:
    """
    Renders ArtifactDescriptors into file contents.

    Usage:
        renderer = ProjectRenderer()
        files = renderer.render(plan.artifacts)
    """

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or Environment(
            loader=PackageLoader("stmgen", "templates"),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render_artifact(self, artifact: ArtifactDescriptor) -> RenderedFile:
        """
        Render a single artifact.

        Raises:
            TemplateRenderError: If the template is missing or references a
                field the descriptor does not carry
        """
        template_name = TEMPLATE_NAMES[artifact.kind]
        try:
            template = self.env.get_template(template_name)
            content = template.render(**artifact.fields)
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render {artifact.path} from {template_name}: {e}"
            ) from e
        return RenderedFile(path=artifact.path, content=content)

    def render(self, artifacts: List[ArtifactDescriptor]) -> List[RenderedFile]:
        """Render all artifacts, in order. Nothing is written."""
        files = [self.render_artifact(artifact) for artifact in artifacts]
        logger.debug(f"Rendered {len(files)} files")
        return files
