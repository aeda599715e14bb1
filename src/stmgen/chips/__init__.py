"""
Chip identification and target resolution for stmgen.

This module provides:
- Chip identifier parsing
- The static series resolution table
- TargetProfile resolution
"""

from .errors import (
    EmptyIdentifierError,
    InvalidSuffixError,
    NoTableEntryError,
    ParseError,
    ResolutionError,
    StmgenError,
    UnrecognizedPrefixError,
)
from .parser import SERIES_PREFIXES, ChipIdentifier, ParsedChip, parse_chip
from .resolver import TargetProfile, resolve
from .series_table import (
    SERIES_TABLE,
    ChipSeries,
    DebuggerFamily,
    SeriesSpec,
    get_series_spec,
    supported_series,
)

__all__ = [
    "ChipIdentifier",
    "ChipSeries",
    "DebuggerFamily",
    "EmptyIdentifierError",
    "InvalidSuffixError",
    "NoTableEntryError",
    "ParseError",
    "ParsedChip",
    "ResolutionError",
    "SERIES_PREFIXES",
    "SERIES_TABLE",
    "SeriesSpec",
    "StmgenError",
    "TargetProfile",
    "UnrecognizedPrefixError",
    "get_series_spec",
    "parse_chip",
    "resolve",
    "supported_series",
]
