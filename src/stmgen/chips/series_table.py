"""
Series resolution table for supported STM32 families.

This module centralizes the per-series target metadata (compilation target
triple, debugger family, OpenOCD target scripts), making it easy to add a
new series: one row here plus one prefix in the parser.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, List, Optional


class ChipSeries(Enum):
    """Supported STM32 series."""

    C0 = "C0"
    F0 = "F0"
    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F7 = "F7"
    G0 = "G0"
    G4 = "G4"
    H5 = "H5"
    H7 = "H7"
    L0 = "L0"
    L1 = "L1"
    L4 = "L4"
    L5 = "L5"
    U0 = "U0"
    U5 = "U5"
    WB = "WB"
    WBA = "WBA"
    WL = "WL"


class DebuggerFamily(Enum):
    """Debugger tooling used to flash and run a series."""

    PROBE_RS = "probe-rs"
    OPENOCD_COMPATIBLE = "openocd"


# Rust target triples by Cortex-M core
THUMBV6M = "thumbv6m-none-eabi"  # Cortex-M0/M0+
THUMBV7M = "thumbv7m-none-eabi"  # Cortex-M3
THUMBV7EM = "thumbv7em-none-eabi"  # Cortex-M4 without FPU
THUMBV7EM_HF = "thumbv7em-none-eabihf"  # Cortex-M4F/M7F
THUMBV8M_MAIN_HF = "thumbv8m.main-none-eabihf"  # Cortex-M33F

FLASH_ORIGIN = 0x0800_0000
RAM_ORIGIN = 0x2000_0000


@dataclass(frozen=True)
class SeriesSpec:
    """Target metadata for one STM32 series."""

    series: ChipSeries
    core: str
    target_triple: str
    debugger_family: DebuggerFamily
    supported_adapter_configs: FrozenSet[str] = frozenset()
    default_adapter_config: Optional[str] = None
    flash_origin: int = FLASH_ORIGIN
    ram_origin: int = RAM_ORIGIN


def _openocd(
    series: ChipSeries, core: str, triple: str, *configs: str
) -> SeriesSpec:
    """Row for a series with OpenOCD target scripts; the first script is the default."""
    return SeriesSpec(
        series=series,
        core=core,
        target_triple=triple,
        debugger_family=DebuggerFamily.OPENOCD_COMPATIBLE,
        supported_adapter_configs=frozenset(configs),
        default_adapter_config=configs[0],
    )


def _probe_rs(series: ChipSeries, core: str, triple: str) -> SeriesSpec:
    """Row for a series only supported through probe-rs."""
    return SeriesSpec(
        series=series,
        core=core,
        target_triple=triple,
        debugger_family=DebuggerFamily.PROBE_RS,
    )


_ROWS = [
    _probe_rs(ChipSeries.C0, "cortex-m0+", THUMBV6M),
    _openocd(ChipSeries.F0, "cortex-m0", THUMBV6M, "stm32f0x.cfg"),
    _openocd(ChipSeries.F1, "cortex-m3", THUMBV7M, "stm32f1x.cfg"),
    _openocd(ChipSeries.F2, "cortex-m3", THUMBV7M, "stm32f2x.cfg"),
    _openocd(ChipSeries.F3, "cortex-m4f", THUMBV7EM_HF, "stm32f3x.cfg"),
    _openocd(ChipSeries.F4, "cortex-m4f", THUMBV7EM_HF, "stm32f4x.cfg"),
    _openocd(ChipSeries.F7, "cortex-m7f", THUMBV7EM_HF, "stm32f7x.cfg"),
    _openocd(ChipSeries.G0, "cortex-m0+", THUMBV6M, "stm32g0x.cfg"),
    _openocd(ChipSeries.G4, "cortex-m4f", THUMBV7EM_HF, "stm32g4x.cfg"),
    _probe_rs(ChipSeries.H5, "cortex-m33f", THUMBV8M_MAIN_HF),
    _openocd(
        ChipSeries.H7,
        "cortex-m7f",
        THUMBV7EM_HF,
        "stm32h7x.cfg",
        "stm32h7x_dual_bank.cfg",
        "stm32h7x_dual_core.cfg",
    ),
    _openocd(ChipSeries.L0, "cortex-m0+", THUMBV6M, "stm32l0.cfg", "stm32l0_dual_bank.cfg"),
    _openocd(ChipSeries.L1, "cortex-m3", THUMBV7M, "stm32l1.cfg", "stm32l1x_dual_bank.cfg"),
    _openocd(ChipSeries.L4, "cortex-m4f", THUMBV7EM_HF, "stm32l4x.cfg"),
    _openocd(ChipSeries.L5, "cortex-m33f", THUMBV8M_MAIN_HF, "stm32l5x.cfg"),
    _probe_rs(ChipSeries.U0, "cortex-m0+", THUMBV6M),
    _openocd(ChipSeries.U5, "cortex-m33f", THUMBV8M_MAIN_HF, "stm32u5x.cfg"),
    _openocd(ChipSeries.WB, "cortex-m4f", THUMBV7EM_HF, "stm32wbx.cfg"),
    _probe_rs(ChipSeries.WBA, "cortex-m33f", THUMBV8M_MAIN_HF),
    _openocd(ChipSeries.WL, "cortex-m4", THUMBV7EM, "stm32wlx.cfg"),
]

# Read-only view; never mutated after import
SERIES_TABLE = MappingProxyType({row.series: row for row in _ROWS})


def get_series_spec(series: ChipSeries) -> Optional[SeriesSpec]:
    """
    Get target metadata for a series.

    Args:
        series: Chip series to look up

    Returns:
        SeriesSpec if the series has a table row, None otherwise
    """
    return SERIES_TABLE.get(series)


def supported_series() -> List[SeriesSpec]:
    """Get all table rows in declaration order."""
    return list(SERIES_TABLE.values())
