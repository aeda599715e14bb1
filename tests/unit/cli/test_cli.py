"""Tests for the stmgen CLI commands."""

import sys
from unittest.mock import patch

import pytest

from stmgen.chips.errors import NoTableEntryError
from stmgen.chips.series_table import ChipSeries
from stmgen.cli import main


def run_cli(monkeypatch, *args):
    """Run main() with the given arguments and return the exit code."""
    monkeypatch.setattr(sys, "argv", ["stmgen", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


class TestCLIChips:
    """Tests for 'stmgen chips'."""

    def test_lists_series(self, monkeypatch, capsys):
        assert run_cli(monkeypatch, "chips") == 0
        out = capsys.readouterr().out
        assert "STM32G4" in out
        assert "thumbv7em-none-eabihf" in out
        assert "probe-rs" in out


class TestCLIResolve:
    """Tests for 'stmgen resolve'."""

    def test_resolve_success(self, monkeypatch, capsys):
        assert run_cli(monkeypatch, "resolve", "stm32g473re") == 0
        out = capsys.readouterr().out
        assert "STM32G473RE" in out
        assert "thumbv7em-none-eabihf" in out
        assert "512 KiB" in out

    def test_resolve_unknown_chip(self, monkeypatch, capsys):
        assert run_cli(monkeypatch, "resolve", "xyz9999") == 1
        out = capsys.readouterr().out
        assert "Generation failed" in out
        assert "xyz9999" in out

    def test_resolve_internal_error(self, monkeypatch, capsys):
        with patch("stmgen.cli.resolve", side_effect=NoTableEntryError(ChipSeries.G4)):
            assert run_cli(monkeypatch, "resolve", "stm32g473re") == 3
        out = capsys.readouterr().out
        assert "Internal error" in out
        assert "not in your input" in out


class TestCLIPlan:
    """Tests for 'stmgen plan'."""

    def test_plan_full(self, monkeypatch, capsys):
        code = run_cli(
            monkeypatch,
            "plan",
            "stm32g473re",
            "--rtt",
            "127.0.0.1:1008",
            "--debug-config",
            "stm32g4x.cfg",
        )
        assert code == 0
        out = capsys.readouterr().out
        assert ".cargo/config.toml (build_config)" in out
        assert "rtt.toml (rtt_forward_config)" in out
        assert "address = 127.0.0.1:1008" in out
        assert "openocd.cfg (debug_adapter_config)" in out

    def test_plan_incompatible_adapter(self, monkeypatch, capsys):
        code = run_cli(monkeypatch, "plan", "stm32g473re", "--debug-config", "stm32f4x.cfg")
        assert code == 1
        out = capsys.readouterr().out
        assert "stm32f4x.cfg" in out
        assert "G4" in out

    def test_plan_without_chip(self, monkeypatch, capsys):
        assert run_cli(monkeypatch, "plan") == 1
        assert "No chip given" in capsys.readouterr().out

    def test_plan_from_answers_with_override(self, monkeypatch, capsys, tmp_path):
        answers = tmp_path / "answers.ini"
        answers.write_text("[project]\nchip = stm32f103c8\nname = old\n")
        code = run_cli(monkeypatch, "plan", "--answers", str(answers), "--name", "blinky")
        assert code == 0
        out = capsys.readouterr().out
        assert "STM32F103C8" in out
        assert "crate_name = blinky" in out


class TestCLIGenerate:
    """Tests for 'stmgen generate'."""

    def test_generate_writes_project(self, monkeypatch, capsys, tmp_path):
        out_dir = tmp_path / "blinky"
        code = run_cli(
            monkeypatch,
            "generate",
            "stm32g473re",
            "-o",
            str(out_dir),
            "--name",
            "blinky",
            "--debug-config",
            "stm32g4x.cfg",
        )
        assert code == 0
        assert (out_dir / ".cargo" / "config.toml").exists()
        assert (out_dir / "Cargo.toml").exists()
        assert (out_dir / "openocd.cfg").exists()
        assert not (out_dir / "rtt.toml").exists()
        assert "Generated 3 files" in capsys.readouterr().out

    def test_generate_failure_writes_nothing(self, monkeypatch, tmp_path):
        out_dir = tmp_path / "blinky"
        code = run_cli(
            monkeypatch,
            "generate",
            "stm32g473re",
            "-o",
            str(out_dir),
            "--debug-config",
            "stm32h7x.cfg",
        )
        assert code == 1
        assert not out_dir.exists()

    def test_generate_existing_files(self, monkeypatch, capsys, tmp_path):
        (tmp_path / "Cargo.toml").write_text("keep")
        code = run_cli(monkeypatch, "generate", "stm32f103c8", "-o", str(tmp_path))
        assert code == 1
        assert "already exists" in capsys.readouterr().out
        assert (tmp_path / "Cargo.toml").read_text() == "keep"

    def test_generate_output_is_file(self, monkeypatch, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("")
        assert run_cli(monkeypatch, "generate", "stm32f103c8", "-o", str(target)) == 2
