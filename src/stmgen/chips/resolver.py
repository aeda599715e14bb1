"""
Target profile resolver.

Composes parser output with the series table into a TargetProfile.
Resolution is all-or-nothing: an identifier either resolves completely or
raises, and there is no fallback to a default target.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import NoTableEntryError
from .parser import ChipIdentifier, parse_chip
from .series_table import ChipSeries, DebuggerFamily, get_series_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetProfile:
    """
    Resolved build target for one chip.

    Created by resolve(). The constructor checks the triple and debugger
    family against the series table, so a hand-built profile cannot
    disagree with the table.

    Attributes:
        series: Resolved chip series
        target_triple: Rust compilation target (e.g. "thumbv7em-none-eabihf")
        debugger_family: probe-rs or OpenOCD-compatible tooling
        raw_identifier: Chip identifier exactly as supplied
        chip_name: Normalized chip name (e.g. "STM32G473RE")
        core: Cortex-M core name
        flash_kib: Flash size decoded from the part number, if known
    """

    series: ChipSeries
    target_triple: str
    debugger_family: DebuggerFamily
    raw_identifier: str
    chip_name: str
    core: str
    flash_kib: Optional[int] = None

    def __post_init__(self) -> None:
        spec = get_series_spec(self.series)
        if spec is None:
            raise NoTableEntryError(self.series)
        if (
            spec.target_triple != self.target_triple
            or spec.debugger_family != self.debugger_family
        ):
            raise ValueError(
                f"TargetProfile for {self.series.value} does not match the series table: "
                f"expected {spec.target_triple}/{spec.debugger_family.value}, "
                f"got {self.target_triple}/{self.debugger_family.value}"
            )

    @property
    def embassy_feature(self) -> str:
        """embassy-stm32 chip feature name (e.g. "stm32g473re")."""
        return self.chip_name.lower()

    @property
    def probe_rs_chip(self) -> str:
        """Chip name passed to probe-rs --chip."""
        return self.chip_name


def resolve(identifier: Union[ChipIdentifier, str]) -> TargetProfile:
    """
    Resolve a chip identifier into a TargetProfile.

    Args:
        identifier: ChipIdentifier or raw identifier string

    Returns:
        TargetProfile for the chip

    Raises:
        ParseError: If the identifier is empty or has no known prefix
        NoTableEntryError: If the parsed series is missing from the table
    """
    raw = identifier.raw if isinstance(identifier, ChipIdentifier) else identifier
    parsed = parse_chip(raw)

    spec = get_series_spec(parsed.series)
    if spec is None:
        logger.error(f"Series table has no row for {parsed.series.value}")
        raise NoTableEntryError(parsed.series)

    profile = TargetProfile(
        series=parsed.series,
        target_triple=spec.target_triple,
        debugger_family=spec.debugger_family,
        raw_identifier=raw,
        chip_name=parsed.identifier.normalized,
        core=spec.core,
        flash_kib=parsed.flash_kib,
    )
    logger.debug(
        f"Resolved {profile.chip_name}: series={profile.series.value}, "
        f"target={profile.target_triple}, debugger={profile.debugger_family.value}"
    )
    return profile
