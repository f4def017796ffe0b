"""
jsinfer Command-Line Interface.

Runs type inference over JavaScript files and prints the results.

Usage:
    jsinfer identifiers input.js               # Top-level names and types
    jsinfer identifiers input.js --recursive   # Include names inside functions
    jsinfer identifiers input.js --json        # Machine-readable output
    jsinfer outline input.js                   # Node-kind tree
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from jsinfer import __version__, infer_tree
from jsinfer.engine import InferenceConfig, Program
from jsinfer.engine.query import IdentifierInfo
from jsinfer.frontend import ParseError, parse_source
from jsinfer.utils.errors import FatalInferenceError, InferenceError

EXIT_OK = 0
EXIT_INFERENCE_ERROR = 1
EXIT_BAD_INPUT = 2


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.YELLOW = ""
        cls.CYAN = ""
        cls.GRAY = ""
        cls.BOLD = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="jsinfer",
        description="jsinfer - heuristic type inference for JavaScript programs",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--max-type-depth",
        type=int,
        default=None,
        help="Never record descriptors nested deeper than this",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Identifiers command
    identifiers_parser = subparsers.add_parser(
        "identifiers",
        aliases=["ids"],
        help="List defined identifiers and their inferred types",
    )
    identifiers_parser.add_argument(
        "input",
        type=Path,
        help="Input JavaScript file",
    )
    identifiers_parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Nest identifiers defined inside functions under the function",
    )
    identifiers_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # Outline command
    outline_parser = subparsers.add_parser(
        "outline",
        help="Print the node-kind tree of a file",
    )
    outline_parser.add_argument(
        "input",
        type=Path,
        help="Input JavaScript file",
    )

    return parser


def _build_config(args: argparse.Namespace) -> InferenceConfig:
    config = InferenceConfig()
    if args.max_type_depth is not None:
        config = config.with_overrides(max_type_depth=args.max_type_depth)
    return config


def _load_program(args: argparse.Namespace) -> tuple[Optional[Program], int]:
    """
    Read, parse and infer the input file.

    Returns the program and EXIT_OK, or None and the exit code to use.
    """
    input_path: Path = args.input

    try:
        source = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"{Colors.RED}Error:{Colors.RESET} cannot read {input_path}: {e}", file=sys.stderr)
        return None, EXIT_BAD_INPUT

    try:
        raw = parse_source(source)
    except ParseError as e:
        print(f"{Colors.RED}Syntax error:{Colors.RESET} {input_path}: {e}", file=sys.stderr)
        return None, EXIT_BAD_INPUT

    try:
        config = _build_config(args)
    except ValueError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return None, EXIT_BAD_INPUT

    try:
        return infer_tree(raw, config), EXIT_OK
    except FatalInferenceError as e:
        print(f"{Colors.RED}Inference error:{Colors.RESET} {e}", file=sys.stderr)
        return None, EXIT_INFERENCE_ERROR


def _print_identifiers(identifiers: dict[str, IdentifierInfo], indent: int = 0) -> None:
    """Print an identifier map as an indented tree."""
    pad = "  " * indent
    for name, info in identifiers.items():
        print(f"{pad}{Colors.BOLD}{name}{Colors.RESET}: {Colors.CYAN}{info.data_type}{Colors.RESET}")
        if info.identifiers:
            _print_identifiers(info.identifiers, indent + 1)


def cmd_identifiers(args: argparse.Namespace) -> int:
    """Handle the identifiers command."""
    program, status = _load_program(args)
    if program is None:
        return status

    try:
        identifiers = program.identifiers(recursive=args.recursive)
    except InferenceError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return EXIT_INFERENCE_ERROR

    if args.json:
        output = {name: info.as_dict() for name, info in identifiers.items()}
        print(json.dumps(output, indent=2))
    else:
        _print_identifiers(identifiers)
    return EXIT_OK


def _print_outline(outline: list, indent: int = 0) -> None:
    pad = "  " * indent
    for entry in outline:
        print(f"{pad}{entry[0]}")
        if len(entry) > 1:
            _print_outline(entry[1], indent + 1)


def cmd_outline(args: argparse.Namespace) -> int:
    """Handle the outline command."""
    program, status = _load_program(args)
    if program is None:
        return status

    print(program.kind)
    _print_outline(program.outline(), 1)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    command_handlers = {
        "identifiers": cmd_identifiers,
        "ids": cmd_identifiers,
        "outline": cmd_outline,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_INFERENCE_ERROR


if __name__ == "__main__":
    sys.exit(main())
