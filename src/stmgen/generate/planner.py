"""
Conditional artifact planner.

Computes which configuration files a new project gets and what goes in
them. The planner performs no I/O; the renderer and writer turn its
descriptors into files.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from stmgen.chips.errors import NoTableEntryError, StmgenError
from stmgen.chips.resolver import TargetProfile
from stmgen.chips.series_table import ChipSeries, DebuggerFamily, get_series_spec

from .options import GenerationOptionSet

logger = logging.getLogger(__name__)

RTT_CHANNEL = "0"

# Cargo appends the ELF path to the runner argv; sh exposes it as $0
OPENOCD_PROGRAM = "-c \"program {$0} verify reset exit\""


class ArtifactKind(Enum):
    """Kinds of generated artifacts, in emission order."""

    BUILD_CONFIG = "build_config"
    RUNNER_CONFIG = "runner_config"
    RTT_FORWARD_CONFIG = "rtt_forward_config"
    DEBUG_ADAPTER_CONFIG = "debug_adapter_config"


ARTIFACT_PATHS = {
    ArtifactKind.BUILD_CONFIG: ".cargo/config.toml",
    ArtifactKind.RUNNER_CONFIG: "Cargo.toml",
    ArtifactKind.RTT_FORWARD_CONFIG: "rtt.toml",
    ArtifactKind.DEBUG_ADAPTER_CONFIG: "openocd.cfg",
}


@dataclass
class ArtifactDescriptor:
    """One planned output file and the values to render into it."""

    path: str
    kind: ArtifactKind
    fields: Dict[str, Any] = field(default_factory=dict)


class PlanError(StmgenError):
    """Exception raised when the options cannot be planned for a target."""

    pass


class IncompatibleAdapterConfigError(PlanError):
    """Raised when the chosen adapter config does not fit the resolved series."""

    def __init__(self, series: ChipSeries, choice: str, supported=()):
        self.series = series
        self.choice = choice
        self.supported = sorted(supported)
        if self.supported:
            hint = f"Supported: {', '.join(self.supported)}"
        else:
            hint = "This series has no OpenOCD target scripts; use probe-rs instead"
        super().__init__(
            f"Adapter config {choice!r} is not compatible with STM32{series.value}. {hint}"
        )


def _debugger_invocation(profile: TargetProfile, options: GenerationOptionSet, target_script: str) -> str:
    if profile.debugger_family == DebuggerFamily.PROBE_RS:
        return f"probe-rs run --chip {profile.probe_rs_chip}"
    return f"openocd -f interface/{options.adapter_interface} -f target/{target_script}"


def _runner_command(profile: TargetProfile, invocation: str) -> List[str]:
    """Cargo runner argv for .cargo/config.toml, derived from the debugger invocation."""
    if profile.debugger_family == DebuggerFamily.PROBE_RS:
        return invocation.split()
    return ["sh", "-c", f"{invocation} {OPENOCD_PROGRAM}"]


def plan(profile: TargetProfile, options: GenerationOptionSet) -> List[ArtifactDescriptor]:
    """
    Plan the artifacts for a resolved target.

    BUILD_CONFIG and RUNNER_CONFIG are always emitted, followed by
    RTT_FORWARD_CONFIG and DEBUG_ADAPTER_CONFIG when the matching option is
    set. Identical inputs always produce an identical list.

    Args:
        profile: Resolved target profile
        options: Generation options

    Returns:
        Ordered list of ArtifactDescriptor

    Raises:
        IncompatibleAdapterConfigError: If options.debug_config is not an
            adapter config supported by the resolved series
        NoTableEntryError: If the profile's series has no table row
    """
    spec = get_series_spec(profile.series)
    if spec is None:
        raise NoTableEntryError(profile.series)

    # Validate before building anything so a failure emits nothing
    if options.debug_config is not None:
        if options.debug_config not in spec.supported_adapter_configs:
            raise IncompatibleAdapterConfigError(
                profile.series, options.debug_config, spec.supported_adapter_configs
            )
        target_script = options.debug_config
    else:
        target_script = spec.default_adapter_config or ""
    invocation = _debugger_invocation(profile, options, target_script)

    artifacts = [
        ArtifactDescriptor(
            path=ARTIFACT_PATHS[ArtifactKind.BUILD_CONFIG],
            kind=ArtifactKind.BUILD_CONFIG,
            fields={
                "target": profile.target_triple,
                "runner": _runner_command(profile, invocation),
                "chip": profile.chip_name,
            },
        ),
        ArtifactDescriptor(
            path=ARTIFACT_PATHS[ArtifactKind.RUNNER_CONFIG],
            kind=ArtifactKind.RUNNER_CONFIG,
            fields={
                "crate_name": options.project_name,
                "chip_feature": profile.embassy_feature,
                "debugger": profile.debugger_family.value,
                "invocation": invocation,
            },
        ),
    ]

    if options.rtt_forward is not None:
        artifacts.append(
            ArtifactDescriptor(
                path=ARTIFACT_PATHS[ArtifactKind.RTT_FORWARD_CONFIG],
                kind=ArtifactKind.RTT_FORWARD_CONFIG,
                fields={
                    "address": str(options.rtt_forward),
                    "host": options.rtt_forward.host,
                    "port": str(options.rtt_forward.port),
                    "channel": RTT_CHANNEL,
                },
            )
        )

    if options.debug_config is not None:
        artifacts.append(
            ArtifactDescriptor(
                path=ARTIFACT_PATHS[ArtifactKind.DEBUG_ADAPTER_CONFIG],
                kind=ArtifactKind.DEBUG_ADAPTER_CONFIG,
                fields={
                    "adapter_config": options.debug_config,
                    "series": profile.series.value,
                    "interface": options.adapter_interface,
                    "target_script": f"target/{options.debug_config}",
                },
            )
        )

    logger.debug(
        f"Planned {len(artifacts)} artifacts for {profile.chip_name}: "
        + ", ".join(a.path for a in artifacts)
    )
    return artifacts
