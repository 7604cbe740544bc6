"""Command line interface for extracting and writing code blocks.

Usage:
    coder-artifacts extract response.md
    coder-artifacts write response.md --out ./generated
    cat response.md | coder-artifacts write - --dry-run
    coder-artifacts prompt
"""

import argparse
import logging
import sys
from pathlib import Path

from coder_artifacts.config import get_settings
from coder_artifacts.exceptions import CoderArtifactsError, InputReadError
from coder_artifacts.extractors.code_blocks import extract_code_blocks
from coder_artifacts.observability.logging import configure_logging
from coder_artifacts.observability.tracing import stage_span
from coder_artifacts.prompts import CODER_SYSTEM_PROMPT
from coder_artifacts.writer import FileWriter

logger = logging.getLogger(__name__)


def read_source(path: str) -> str:
    """
    Read markdown from a file, or stdin when path is '-', normalizing line endings.

    Raises:
        InputReadError: If the input is missing, unreadable or not UTF-8.
    """
    source = "<stdin>" if path == "-" else path
    try:
        if path == "-":
            text = sys.stdin.read()
        else:
            text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputReadError(source, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise InputReadError(source, e.strerror or str(e)) from e
    return text.replace("\r\n", "\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="coder-artifacts",
        description="Extract fenced code blocks from coder agent responses",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Print extracted blocks as JSON")
    extract.add_argument("input", nargs="?", default="-", help="Markdown file, or - for stdin")
    extract.add_argument("--indent", type=int, default=2, help="JSON indentation")

    write = subparsers.add_parser("write", help="Write completed, named blocks to disk")
    write.add_argument("input", nargs="?", default="-", help="Markdown file, or - for stdin")
    write.add_argument(
        "--out",
        type=str,
        default=settings.output_dir,
        help="Output directory",
    )
    write.add_argument(
        "--overwrite",
        action="store_true",
        default=settings.overwrite_files,
        help="Replace existing files",
    )
    write.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be written without writing",
    )

    subparsers.add_parser("prompt", help="Print the coder system prompt")

    return parser


def _run_extract(args: argparse.Namespace) -> int:
    source = read_source(args.input)
    with stage_span("extract", input_chars=len(source)):
        result = extract_code_blocks(source)
    print(result.model_dump_json(indent=args.indent))
    return 0


def _run_write(args: argparse.Namespace) -> int:
    source = read_source(args.input)
    with stage_span("extract", input_chars=len(source)):
        result = extract_code_blocks(source)

    writer = FileWriter(args.out, overwrite=args.overwrite, dry_run=args.dry_run)
    report = writer.write(result)

    verb = "would write" if report.dry_run else "wrote"
    for path in report.written:
        print(f"{verb} {path}")
    for skipped in report.skipped:
        name = skipped.filename or f"block #{skipped.index + 1}"
        print(f"skipped {name} ({skipped.reason})")

    if not report.written:
        print("No complete, named code blocks found")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the coder-artifacts command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    # Logs go to stderr so stdout stays machine-readable
    configure_logging(
        level=args.log_level,
        json_format=settings.log_json,
        service_name=settings.service_name,
        stream=sys.stderr,
    )

    try:
        if args.command == "extract":
            return _run_extract(args)
        if args.command == "write":
            return _run_write(args)
        print(CODER_SYSTEM_PROMPT)
        return 0
    except CoderArtifactsError as e:
        logger.error(e.message, extra={"detail": e.detail})
        print(f"Error: {e.detail}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("I/O error: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
