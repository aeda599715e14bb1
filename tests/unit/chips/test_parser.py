"""
Unit tests for the chip identifier parser.
"""

import pytest

from stmgen.chips.errors import (
    EmptyIdentifierError,
    InvalidSuffixError,
    ParseError,
    ResolutionError,
    UnrecognizedPrefixError,
)
from stmgen.chips.parser import SERIES_PREFIXES, ChipIdentifier, parse_chip
from stmgen.chips.series_table import ChipSeries


class TestChipIdentifier:
    """Test suite for ChipIdentifier normalization."""

    def test_normalized_trims_and_uppercases(self):
        identifier = ChipIdentifier("  stm32g473re\n")
        assert identifier.raw == "  stm32g473re\n"
        assert identifier.normalized == "STM32G473RE"


class TestParseChip:
    """Test suite for parse_chip."""

    def test_parse_g4(self):
        """Test parsing a typical G4 part number."""
        parsed = parse_chip("stm32g473re")
        assert parsed.series == ChipSeries.G4
        assert parsed.family == "STM32"
        assert parsed.prefix == "STM32G4"
        assert parsed.suffix == "73RE"
        assert parsed.line == "73"
        assert parsed.pin_code == "R"
        assert parsed.flash_code == "E"
        assert parsed.package is None
        assert parsed.flash_kib == 512

    def test_parse_with_package_suffix(self):
        parsed = parse_chip("STM32F407VGT6")
        assert parsed.series == ChipSeries.F4
        assert parsed.flash_code == "G"
        assert parsed.flash_kib == 1024
        assert parsed.package == "T6"

    def test_parse_mixed_case_and_whitespace(self):
        parsed = parse_chip("  Stm32H743zi ")
        assert parsed.series == ChipSeries.H7
        assert parsed.identifier.normalized == "STM32H743ZI"

    def test_parse_short_suffix(self):
        """Test that a bare series prefix parses with no part fields."""
        parsed = parse_chip("stm32f1")
        assert parsed.series == ChipSeries.F1
        assert parsed.suffix == ""
        assert parsed.line is None
        assert parsed.pin_code is None
        assert parsed.flash_code is None
        assert parsed.flash_kib is None

    def test_unknown_flash_code(self):
        parsed = parse_chip("stm32g431kx")
        assert parsed.flash_code == "X"
        assert parsed.flash_kib is None

    def test_longest_prefix_wins(self):
        """Test that STM32WBA is not swallowed by STM32WB."""
        assert parse_chip("stm32wba52cg").series == ChipSeries.WBA
        assert parse_chip("stm32wb55rg").series == ChipSeries.WB

    def test_wl_is_not_wb(self):
        assert parse_chip("stm32wle5jc").series == ChipSeries.WL

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_empty_identifier(self, raw):
        with pytest.raises(EmptyIdentifierError, match="empty"):
            parse_chip(raw)

    def test_unrecognized_prefix_keeps_raw(self):
        with pytest.raises(UnrecognizedPrefixError) as exc_info:
            parse_chip("xyz9999")
        assert exc_info.value.raw == "xyz9999"
        assert "xyz9999" in str(exc_info.value)

    def test_family_without_series_is_unrecognized(self):
        with pytest.raises(UnrecognizedPrefixError):
            parse_chip("stm32")

    def test_other_vendor_is_unrecognized(self):
        with pytest.raises(UnrecognizedPrefixError):
            parse_chip("nrf52840")

    @pytest.mark.parametrize(
        "raw", ['stm32g473re"x', "stm32g4 73re", "stm32g473re]", "stm32f407-ig", "stm32h7\\"]
    )
    def test_invalid_part_number_characters(self, raw):
        with pytest.raises(InvalidSuffixError) as exc_info:
            parse_chip(raw)
        assert isinstance(exc_info.value, ParseError)
        assert exc_info.value.raw == raw
        assert repr(raw) in str(exc_info.value)

    def test_parse_errors_are_resolution_errors(self):
        assert issubclass(EmptyIdentifierError, ParseError)
        assert issubclass(UnrecognizedPrefixError, ParseError)
        assert issubclass(ParseError, ResolutionError)
        assert EmptyIdentifierError().is_user_error
        assert UnrecognizedPrefixError("x").is_user_error

    def test_every_prefix_starts_with_family(self):
        for prefix in SERIES_PREFIXES:
            assert prefix.startswith("STM32")
