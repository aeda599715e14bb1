"""CLI utility functions for stmgen.

This module provides common utilities used across CLI commands including:
- Logging setup
- Error handling and formatting
- Profile and plan formatting
- Output path validation
"""

import logging
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from stmgen.chips import StmgenError, TargetProfile
from stmgen.config import AnswersFile
from stmgen.generate import ArtifactDescriptor, GenerationRequest

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Exit codes
EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_BAD_PATH = 2
EXIT_INTERNAL_ERROR = 3
EXIT_INTERRUPTED = 130


_console_handler: Optional[logging.Handler] = None


def setup_logging(verbose: bool = False) -> None:
    """Setup logging for the CLI."""
    global _console_handler

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Replace the handler from a previous main() call in the same process
    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_console_handler)


class RequestBuilder:
    """Builds a GenerationRequest from CLI flags and an optional answers file."""

    @staticmethod
    def build(
        chip: Optional[str] = None,
        answers_path: Optional[Path] = None,
        name: Optional[str] = None,
        rtt_address: Optional[str] = None,
        debug_config: Optional[str] = None,
        interface: Optional[str] = None,
    ) -> GenerationRequest:
        """Merge CLI flags over answers-file values.

        Args:
            chip: Chip identifier from the command line
            answers_path: Optional answers INI file
            name: Project name override
            rtt_address: RTT forwarding address; enables RTT forwarding
            debug_config: OpenOCD target script; enables openocd.cfg
            interface: OpenOCD interface script override

        Returns:
            GenerationRequest

        Raises:
            AnswersFileError: If the answers file is invalid
            ValueError: If no chip identifier was given at all
        """
        if answers_path is not None:
            request = AnswersFile(answers_path).to_request()
        elif chip is None:
            raise ValueError("No chip given (pass CHIP or --answers)")
        else:
            request = GenerationRequest(chip_identifier=chip)

        if chip is not None:
            request.chip_identifier = chip
        if name is not None:
            request.project_name = name
        if rtt_address is not None:
            request.rtt_enabled = True
            request.rtt_address = rtt_address
        if debug_config is not None:
            request.debug_config_enabled = True
            request.adapter_config_choice = debug_config
        if interface is not None:
            request.adapter_interface = interface

        return request


class PlanFormatter:
    """Formats resolved profiles and planned artifacts for display."""

    @staticmethod
    def format_profile(profile: TargetProfile) -> str:
        lines = [
            f"Chip:     {profile.chip_name}",
            f"Series:   STM32{profile.series.value}",
            f"Core:     {profile.core}",
            f"Target:   {profile.target_triple}",
            f"Debugger: {profile.debugger_family.value}",
        ]
        if profile.flash_kib is not None:
            lines.append(f"Flash:    {profile.flash_kib} KiB")
        return "\n".join(lines)

    @staticmethod
    def format_artifacts(artifacts: List[ArtifactDescriptor]) -> str:
        lines = []
        for artifact in artifacts:
            lines.append(f"{artifact.path} ({artifact.kind.value})")
            for key, value in artifact.fields.items():
                if isinstance(value, list):
                    value = shlex.join(value)
                lines.append(f"  {key} = {value}")
        return "\n".join(lines)


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Invalid chip", "Generation failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message."""
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_stmgen_error(error: StmgenError) -> None:
        """Handle an stmgen error, separating user errors from internal ones.

        Args:
            error: The error to report
        """
        if error.is_user_error:
            ErrorFormatter.print_error("Generation failed", str(error))
            sys.exit(EXIT_USER_ERROR)

        logging.getLogger(__name__).error(f"Internal error: {error}")
        ErrorFormatter.print_error("Internal error", str(error))
        print("This is a bug in stmgen, not in your input. Please report it.")
        sys.exit(EXIT_INTERNAL_ERROR)

    @staticmethod
    def handle_value_error(error: ValueError) -> None:
        """Handle ValueError raised for bad command-line usage."""
        ErrorFormatter.print_error("Invalid arguments", str(error))
        sys.exit(EXIT_USER_ERROR)

    @staticmethod
    def handle_permission_error(error: PermissionError) -> None:
        """Handle PermissionError with standard formatting."""
        ErrorFormatter.print_error("Error: Permission denied", str(error))
        sys.exit(EXIT_USER_ERROR)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Generation interrupted")
        sys.exit(EXIT_INTERRUPTED)

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(EXIT_USER_ERROR)


class PathValidator:
    """Validates output paths."""

    @staticmethod
    def validate_output_dir(output_dir: Path) -> None:
        """Validate that the output path is a directory or does not exist yet.

        Raises:
            SystemExit: If the path exists and isn't a directory
        """
        if output_dir.exists() and not output_dir.is_dir():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {output_dir}{ErrorFormatter.RESET}"
            )
            sys.exit(EXIT_BAD_PATH)
