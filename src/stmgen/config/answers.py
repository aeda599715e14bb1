"""
Answers file parser.

This module reads pre-filled generation answers from an INI file so that
projects can be generated without interactive prompts.
"""

import configparser
from pathlib import Path
from typing import Optional

from stmgen.chips.errors import StmgenError
from stmgen.generate.pipeline import GenerationRequest


class AnswersFileError(StmgenError):
    """Exception raised for answers file errors."""

    pass


class AnswersFile:
    """
    Parser for generation answers files.

    Example answers.ini:
        [project]
        name = blinky
        chip = stm32g473re

        [rtt]
        enabled = true
        address = 127.0.0.1:1008

        [debug]
        enabled = true
        adapter_config = stm32g4x.cfg
        interface = stlink.cfg

    Usage:
        answers = AnswersFile(Path("answers.ini"))
        request = answers.to_request()
    """

    def __init__(self, ini_path: Path):
        """
        Initialize the parser with an answers file.

        Args:
            ini_path: Path to the answers file

        Raises:
            AnswersFileError: If the file doesn't exist or cannot be parsed
        """
        self.ini_path = ini_path

        if not ini_path.exists():
            raise AnswersFileError(f"Answers file not found: {ini_path}")

        self.config = configparser.ConfigParser(
            interpolation=configparser.ExtendedInterpolation()
        )

        try:
            self.config.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise AnswersFileError(f"Failed to parse {ini_path}: {e}") from e

    def get(self, section: str, key: str) -> Optional[str]:
        """Get a stripped value, or None if it is missing or blank."""
        try:
            value = self.config.get(section, key, fallback=None)
        except configparser.Error as e:
            raise AnswersFileError(f"Failed to read [{section}] {key}: {e}") from e
        if value is None:
            return None
        value = value.strip()
        return value or None

    def get_bool(self, section: str, key: str) -> bool:
        """Get a boolean flag, defaulting to False when missing."""
        try:
            return self.config.getboolean(section, key, fallback=False)
        except ValueError as e:
            raise AnswersFileError(
                f"Invalid boolean for [{section}] {key} in {self.ini_path}: {e}"
            ) from e

    def to_request(self) -> GenerationRequest:
        """
        Build a GenerationRequest from the file.

        Raises:
            AnswersFileError: If [project] chip is missing
        """
        chip = self.get("project", "chip")
        if chip is None:
            raise AnswersFileError(f"{self.ini_path} is missing [project] chip")

        return GenerationRequest(
            chip_identifier=chip,
            rtt_enabled=self.get_bool("rtt", "enabled"),
            rtt_address=self.get("rtt", "address"),
            debug_config_enabled=self.get_bool("debug", "enabled"),
            adapter_config_choice=self.get("debug", "adapter_config"),
            project_name=self.get("project", "name"),
            adapter_interface=self.get("debug", "interface"),
        )
