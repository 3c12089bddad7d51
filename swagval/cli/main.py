"""
swagval CLI — Command-line interface for validations.
"""

import argparse
import sys
from pathlib import Path

from swagval import __version__
from swagval.core.context import ValidationRequest
from swagval.core.engine import create_engine
from swagval.core.errors import CannotValidateError, DocumentLoadError
from swagval.core.pointers import path_to_pointer
from swagval.core.settings import load_settings
from swagval.document.loader import load_document, load_document_from_string
from swagval.ir.enums import ItemsTraversal
from swagval.ir.schema import Diagnostic, ValidationResult
from swagval.ir.serialization import save, to_json

EXIT_VALID = 0
EXIT_FINDINGS = 1
EXIT_CANNOT_VALIDATE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swagval",
        description="Semantic validation for Swagger 2.0 documents",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"swagval {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    validate_parser = subparsers.add_parser("validate", help="Validate a document")
    validate_parser.add_argument(
        "input",
        type=str,
        help="Path to a JSON or YAML document (use - for stdin)",
    )
    validate_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Also write the JSON result to this file",
    )
    validate_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )
    validate_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Settings file (default: ./swagval.yaml when present)",
    )
    validate_parser.add_argument(
        "--items-traversal",
        choices=[mode.value for mode in ItemsTraversal],
        default=None,
        help="How array items are walked (default: container)",
    )
    validate_parser.add_argument(
        "--structure-schema",
        type=str,
        default=None,
        help="JSON Schema the document must satisfy before semantic checks",
    )
    validate_parser.add_argument(
        "--fail-on-warnings",
        action="store_true",
        help="Exit non-zero when only warnings are found",
    )

    # Logging configuration
    validate_parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or SWAGVAL_LOG_LEVEL env var)",
    )
    validate_parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (engine,references,schemas,paths,document,system). Default: all",
    )

    return parser


def main(argv: list[str] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_VALID

    if args.command == "validate":
        return run_validate(args)

    return EXIT_VALID


def format_diagnostic(diagnostic: Diagnostic) -> str:
    return f"{diagnostic.code.value}: {diagnostic.message} ({path_to_pointer(diagnostic.path)})"


def format_text(result: ValidationResult) -> str:
    lines = []

    if result.errors:
        lines.append("Errors")
        lines.append("------")
        lines.extend(f"  {format_diagnostic(d)}" for d in result.errors)

    if result.warnings:
        if lines:
            lines.append("")
        lines.append("Warnings")
        lines.append("--------")
        lines.extend(f"  {format_diagnostic(d)}" for d in result.warnings)

    if lines:
        lines.append("")
    lines.append(
        f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    )
    return "\n".join(lines)


def run_validate(args: argparse.Namespace) -> int:
    """Run validation command."""
    from swagval.core.logging import configure_logging

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        channels=channels,
        force=True,
    )

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CANNOT_VALIDATE

    if args.items_traversal:
        settings.items_traversal = ItemsTraversal(args.items_traversal)
    if args.structure_schema:
        settings.structure_schema = Path(args.structure_schema)
    if args.fail_on_warnings:
        settings.fail_on_warnings = True

    try:
        if args.input == "-":
            document = load_document_from_string(sys.stdin.read(), source="<stdin>")
        else:
            document = load_document(args.input)

        engine = create_engine(settings)
        result = engine.validate(ValidationRequest(document=document))
    except (DocumentLoadError, CannotValidateError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CANNOT_VALIDATE

    if args.output:
        save(result, args.output)

    if args.format == "json":
        print(to_json(result))
    else:
        print(format_text(result))

    if result.errors or (settings.fail_on_warnings and result.warnings):
        return EXIT_FINDINGS
    return EXIT_VALID


if __name__ == "__main__":
    sys.exit(main())
