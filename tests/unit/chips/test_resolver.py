"""
Unit tests for the target profile resolver.
"""

from unittest.mock import patch

import pytest

from stmgen.chips.errors import (
    EmptyIdentifierError,
    NoTableEntryError,
    UnrecognizedPrefixError,
)
from stmgen.chips.parser import ChipIdentifier
from stmgen.chips.resolver import TargetProfile, resolve
from stmgen.chips.series_table import ChipSeries, DebuggerFamily


class TestResolve:
    """Test suite for resolve()."""

    def test_resolve_g4(self):
        profile = resolve("stm32g473re")
        assert profile.series == ChipSeries.G4
        assert profile.target_triple == "thumbv7em-none-eabihf"
        assert profile.debugger_family == DebuggerFamily.OPENOCD_COMPATIBLE
        assert profile.raw_identifier == "stm32g473re"
        assert profile.chip_name == "STM32G473RE"
        assert profile.core == "cortex-m4f"
        assert profile.flash_kib == 512
        assert profile.embassy_feature == "stm32g473re"
        assert profile.probe_rs_chip == "STM32G473RE"

    def test_resolve_accepts_chip_identifier(self):
        assert resolve(ChipIdentifier("stm32f103c8")) == resolve("stm32f103c8")

    def test_resolve_probe_rs_series(self):
        profile = resolve("STM32H563ZI")
        assert profile.series == ChipSeries.H5
        assert profile.target_triple == "thumbv8m.main-none-eabihf"
        assert profile.debugger_family == DebuggerFamily.PROBE_RS

    def test_resolve_is_deterministic(self):
        assert resolve("stm32l476rg") == resolve("stm32l476rg")

    def test_normalized_inputs_resolve_to_same_target(self):
        a = resolve("stm32l476rg")
        b = resolve("  STM32L476RG ")
        assert a.chip_name == b.chip_name
        assert a.target_triple == b.target_triple
        assert a.raw_identifier != b.raw_identifier

    def test_empty_identifier(self):
        with pytest.raises(EmptyIdentifierError):
            resolve("")

    def test_unrecognized_prefix(self):
        with pytest.raises(UnrecognizedPrefixError) as exc_info:
            resolve("xyz9999")
        assert exc_info.value.raw == "xyz9999"

    def test_missing_table_entry_is_internal_error(self):
        with patch("stmgen.chips.resolver.get_series_spec", return_value=None):
            with pytest.raises(NoTableEntryError) as exc_info:
                resolve("stm32g473re")
        assert exc_info.value.series == ChipSeries.G4
        assert exc_info.value.is_user_error is False
        assert "series table" in str(exc_info.value)


class TestTargetProfile:
    """Test suite for TargetProfile consistency checks."""

    def test_inconsistent_triple_rejected(self):
        with pytest.raises(ValueError, match="does not match"):
            TargetProfile(
                series=ChipSeries.G4,
                target_triple="thumbv6m-none-eabi",
                debugger_family=DebuggerFamily.OPENOCD_COMPATIBLE,
                raw_identifier="stm32g473re",
                chip_name="STM32G473RE",
                core="cortex-m4f",
            )

    def test_inconsistent_debugger_rejected(self):
        with pytest.raises(ValueError, match="does not match"):
            TargetProfile(
                series=ChipSeries.G4,
                target_triple="thumbv7em-none-eabihf",
                debugger_family=DebuggerFamily.PROBE_RS,
                raw_identifier="stm32g473re",
                chip_name="STM32G473RE",
                core="cortex-m4f",
            )

    def test_profile_is_frozen(self):
        profile = resolve("stm32g473re")
        with pytest.raises(AttributeError):
            profile.target_triple = "thumbv6m-none-eabi"
