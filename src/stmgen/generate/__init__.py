"""
Artifact generation for stmgen.

This module provides:
- Generation options (RTT forwarding, debug adapter config)
- The conditional artifact planner
- Template rendering and project writing
"""

from .options import GenerationOptionSet, OptionError, RttAddress
from .pipeline import GenerationPlan, GenerationRequest, generate_plan
from .planner import (
    ArtifactDescriptor,
    ArtifactKind,
    IncompatibleAdapterConfigError,
    PlanError,
    plan,
)
from .renderer import ProjectRenderer, RenderedFile, TemplateRenderError
from .writer import ProjectWriteError, write_project

__all__ = [
    "ArtifactDescriptor",
    "ArtifactKind",
    "GenerationOptionSet",
    "GenerationPlan",
    "GenerationRequest",
    "IncompatibleAdapterConfigError",
    "OptionError",
    "PlanError",
    "ProjectRenderer",
    "ProjectWriteError",
    "RenderedFile",
    "RttAddress",
    "TemplateRenderError",
    "generate_plan",
    "plan",
    "write_project",
]
