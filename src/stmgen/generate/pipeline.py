"""
Top-level generation entry point.

Runs resolution and planning for one set of answers. Every error
propagates to the caller before any artifact exists.
"""

from dataclasses import dataclass
from typing import List, Optional

from stmgen.chips.resolver import TargetProfile, resolve

from .options import GenerationOptionSet
from .planner import ArtifactDescriptor, plan


@dataclass
class GenerationRequest:
    """Raw answers for one generation run."""

    chip_identifier: str
    rtt_enabled: bool = False
    rtt_address: Optional[str] = None
    debug_config_enabled: bool = False
    adapter_config_choice: Optional[str] = None
    project_name: Optional[str] = None
    adapter_interface: Optional[str] = None


@dataclass
class GenerationPlan:
    """Result of a generation run: the resolved target and its artifacts."""

    profile: TargetProfile
    options: GenerationOptionSet
    artifacts: List[ArtifactDescriptor]


def generate_plan(request: GenerationRequest) -> GenerationPlan:
    """
    Resolve the chip and plan all artifacts for a request.

    Args:
        request: Raw answers

    Returns:
        GenerationPlan with the profile, options and ordered artifacts

    Raises:
        ResolutionError: If the chip identifier cannot be resolved
        OptionError: If the options are malformed
        PlanError: If the options are incompatible with the resolved chip
    """
    profile = resolve(request.chip_identifier)
    options = GenerationOptionSet.from_answers(
        rtt_enabled=request.rtt_enabled,
        rtt_address=request.rtt_address,
        debug_config_enabled=request.debug_config_enabled,
        adapter_config_choice=request.adapter_config_choice,
        project_name=request.project_name,
        adapter_interface=request.adapter_interface,
    )
    artifacts = plan(profile, options)
    return GenerationPlan(profile=profile, options=options, artifacts=artifacts)
