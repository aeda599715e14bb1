"""
Command-line interface for stmgen.

This module provides the `stmgen` CLI tool for generating embassy STM32
firmware projects.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from stmgen import __version__
from stmgen.chips import StmgenError, resolve, supported_series
from stmgen.cli_utils import (
    EXIT_OK,
    ErrorFormatter,
    PathValidator,
    PlanFormatter,
    RequestBuilder,
    setup_logging,
)
from stmgen.generate import ProjectRenderer, generate_plan, write_project


@dataclass
class ResolveArgs:
    """Arguments for the resolve command."""

    chip: str
    verbose: bool = False


@dataclass
class PlanArgs:
    """Arguments for the plan command."""

    chip: Optional[str] = None
    answers: Optional[Path] = None
    name: Optional[str] = None
    rtt: Optional[str] = None
    debug_config: Optional[str] = None
    interface: Optional[str] = None
    verbose: bool = False


@dataclass
class GenerateArgs(PlanArgs):
    """Arguments for the generate command."""

    output_dir: Path = Path(".")
    force: bool = False


def chips_command() -> None:
    """List supported chip series.

    Examples:
        stmgen chips
    """
    print(f"{'Series':<10} {'Core':<12} {'Target':<28} Debugger")
    for spec in supported_series():
        print(
            f"{'STM32' + spec.series.value:<10} {spec.core:<12} "
            f"{spec.target_triple:<28} {spec.debugger_family.value}"
        )
    sys.exit(EXIT_OK)


def resolve_command(args: ResolveArgs) -> None:
    """Resolve a chip identifier and print its target profile.

    Examples:
        stmgen resolve stm32g473re
    """
    try:
        profile = resolve(args.chip)
        print(PlanFormatter.format_profile(profile))
        sys.exit(EXIT_OK)

    except StmgenError as e:
        ErrorFormatter.handle_stmgen_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def _build_request(args: PlanArgs):
    return RequestBuilder.build(
        chip=args.chip,
        answers_path=args.answers,
        name=args.name,
        rtt_address=args.rtt,
        debug_config=args.debug_config,
        interface=args.interface,
    )


def plan_command(args: PlanArgs) -> None:
    """Print the artifacts that would be generated.

    Examples:
        stmgen plan stm32g473re
        stmgen plan stm32g473re --rtt 127.0.0.1:1008 --debug-config stm32g4x.cfg
    """
    try:
        plan = generate_plan(_build_request(args))
        print(PlanFormatter.format_profile(plan.profile))
        print()
        print(PlanFormatter.format_artifacts(plan.artifacts))
        sys.exit(EXIT_OK)

    except StmgenError as e:
        ErrorFormatter.handle_stmgen_error(e)
    except ValueError as e:
        ErrorFormatter.handle_value_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def generate_command(args: GenerateArgs) -> None:
    """Generate project configuration files.

    Nothing is written unless resolution, planning and rendering all
    succeed.

    Examples:
        stmgen generate stm32g473re -o blinky
        stmgen generate --answers answers.ini -o blinky --force
    """
    print(f"stmgen v{__version__}")

    try:
        plan = generate_plan(_build_request(args))
        files = ProjectRenderer().render(plan.artifacts)
        written = write_project(args.output_dir, files, force=args.force)

        ErrorFormatter.print_success(
            f"Generated {len(written)} files for {plan.profile.chip_name}"
        )
        print()
        for path in written:
            print(f"  {path}")
        sys.exit(EXIT_OK)

    except StmgenError as e:
        ErrorFormatter.handle_stmgen_error(e)
    except ValueError as e:
        ErrorFormatter.handle_value_error(e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "chip",
        nargs="?",
        default=None,
        help="Chip model (e.g. stm32g473re)",
    )
    parser.add_argument(
        "-a",
        "--answers",
        type=Path,
        default=None,
        help="Answers INI file (command-line flags take precedence)",
    )
    parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="Project crate name (default: firmware)",
    )
    parser.add_argument(
        "--rtt",
        default=None,
        metavar="HOST:PORT",
        help="Enable RTT log forwarding to HOST:PORT",
    )
    parser.add_argument(
        "--debug-config",
        default=None,
        metavar="CFG",
        help="Emit openocd.cfg using this OpenOCD target script (e.g. stm32g4x.cfg)",
    )
    parser.add_argument(
        "--interface",
        default=None,
        help="OpenOCD interface script (default: stlink.cfg)",
    )


def main() -> None:
    """stmgen - embassy STM32 project generator."""
    parser = argparse.ArgumentParser(
        prog="stmgen",
        description="stmgen - embassy STM32 project generator",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"stmgen {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("chips", help="List supported chip series")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a chip model into its target profile",
    )
    resolve_parser.add_argument("chip", help="Chip model (e.g. stm32g473re)")

    plan_parser = subparsers.add_parser(
        "plan",
        help="Show the files that would be generated",
    )
    _add_option_arguments(plan_parser)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate project configuration files",
    )
    _add_option_arguments(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    generate_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files",
    )

    # Parse arguments
    parsed_args = parser.parse_args()

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(parsed_args.verbose)

    # Execute command
    if parsed_args.command == "chips":
        chips_command()
    elif parsed_args.command == "resolve":
        resolve_command(ResolveArgs(chip=parsed_args.chip, verbose=parsed_args.verbose))
    elif parsed_args.command == "plan":
        plan_args = PlanArgs(
            chip=parsed_args.chip,
            answers=parsed_args.answers,
            name=parsed_args.name,
            rtt=parsed_args.rtt,
            debug_config=parsed_args.debug_config,
            interface=parsed_args.interface,
            verbose=parsed_args.verbose,
        )
        plan_command(plan_args)
    elif parsed_args.command == "generate":
        PathValidator.validate_output_dir(parsed_args.output_dir)
        generate_args = GenerateArgs(
            chip=parsed_args.chip,
            answers=parsed_args.answers,
            name=parsed_args.name,
            rtt=parsed_args.rtt,
            debug_config=parsed_args.debug_config,
            interface=parsed_args.interface,
            verbose=parsed_args.verbose,
            output_dir=parsed_args.output_dir,
            force=parsed_args.force,
        )
        generate_command(generate_args)


if __name__ == "__main__":
    main()
