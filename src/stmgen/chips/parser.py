"""
Chip identifier parser.

Normalizes a free-form chip model string (e.g. " stm32g473re ") and
decomposes it into series and part-number fields.

STM32 part numbers follow the pattern::

    STM32 G4 73 R E T 6
    |     |  |  | | |
    |     |  |  | | +-- package / temperature range (optional)
    |     |  |  | +---- flash size code
    |     |  |  +------ pin count code
    |     |  +--------- product line
    |     +------------ series
    +------------------ family
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import EmptyIdentifierError, InvalidSuffixError, UnrecognizedPrefixError
from .series_table import ChipSeries

logger = logging.getLogger(__name__)

FAMILY = "STM32"

SERIES_PREFIXES: Dict[str, ChipSeries] = {
    "STM32C0": ChipSeries.C0,
    "STM32F0": ChipSeries.F0,
    "STM32F1": ChipSeries.F1,
    "STM32F2": ChipSeries.F2,
    "STM32F3": ChipSeries.F3,
    "STM32F4": ChipSeries.F4,
    "STM32F7": ChipSeries.F7,
    "STM32G0": ChipSeries.G0,
    "STM32G4": ChipSeries.G4,
    "STM32H5": ChipSeries.H5,
    "STM32H7": ChipSeries.H7,
    "STM32L0": ChipSeries.L0,
    "STM32L1": ChipSeries.L1,
    "STM32L4": ChipSeries.L4,
    "STM32L5": ChipSeries.L5,
    "STM32U0": ChipSeries.U0,
    "STM32U5": ChipSeries.U5,
    "STM32WB": ChipSeries.WB,
    "STM32WBA": ChipSeries.WBA,
    "STM32WL": ChipSeries.WL,
}

# Longest first, so STM32WBA is tried before STM32WB
_PREFIX_ORDER: List[Tuple[str, ChipSeries]] = sorted(
    SERIES_PREFIXES.items(), key=lambda item: (-len(item[0]), item[0])
)

# Part number after the series prefix
_SUFFIX = re.compile(r"^[0-9A-Z]*$")

FLASH_SIZE_CODES: Dict[str, int] = {
    "4": 16,
    "6": 32,
    "8": 64,
    "B": 128,
    "Z": 192,
    "C": 256,
    "D": 384,
    "E": 512,
    "F": 768,
    "G": 1024,
    "H": 1536,
    "I": 2048,
}


@dataclass(frozen=True)
class ChipIdentifier:
    """Raw chip identifier and its normalized (trimmed, uppercase) form."""

    raw: str

    @property
    def normalized(self) -> str:
        return self.raw.strip().upper()


@dataclass(frozen=True)
class ParsedChip:
    """
    Structured fields extracted from a chip identifier.

    Attributes:
        identifier: The identifier that was parsed
        series: Matched chip series
        prefix: Matched series prefix (e.g. "STM32G4")
        suffix: Remainder after the prefix (e.g. "73RE")
    """

    identifier: ChipIdentifier
    series: ChipSeries
    prefix: str
    suffix: str

    @property
    def family(self) -> str:
        return FAMILY

    @property
    def line(self) -> Optional[str]:
        return self.suffix[:2] if len(self.suffix) >= 2 else None

    @property
    def pin_code(self) -> Optional[str]:
        return self.suffix[2] if len(self.suffix) >= 3 else None

    @property
    def flash_code(self) -> Optional[str]:
        return self.suffix[3] if len(self.suffix) >= 4 else None

    @property
    def package(self) -> Optional[str]:
        return self.suffix[4:] if len(self.suffix) > 4 else None

    @property
    def flash_kib(self) -> Optional[int]:
        """Flash size in KiB decoded from the flash code, if known."""
        if self.flash_code is None:
            return None
        return FLASH_SIZE_CODES.get(self.flash_code)


def parse_chip(raw: str) -> ParsedChip:
    """
    Parse a chip identifier string.

    Args:
        raw: Chip identifier as typed by the user (e.g. "stm32g473re")

    Returns:
        ParsedChip with the matched series and part-number fields

    Raises:
        EmptyIdentifierError: If the identifier is empty or whitespace-only
        UnrecognizedPrefixError: If no known series prefix matches
        InvalidSuffixError: If the part number has characters outside A-Z and 0-9
    """
    identifier = ChipIdentifier(raw)
    normalized = identifier.normalized

    if not normalized:
        raise EmptyIdentifierError(raw)

    for prefix, series in _PREFIX_ORDER:
        if normalized.startswith(prefix):
            suffix = normalized[len(prefix) :]
            if not _SUFFIX.match(suffix):
                raise InvalidSuffixError(raw)
            logger.debug(f"Matched prefix {prefix} for {normalized}")
            return ParsedChip(
                identifier=identifier,
                series=series,
                prefix=prefix,
                suffix=suffix,
            )

    raise UnrecognizedPrefixError(raw)
