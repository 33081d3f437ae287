"""Command line interface for uischema.

Each command parses its own arguments and returns an exit code. JSON
results go to stdout; diagnostics go through the logger to stderr.

Usage:
    uischema validate page.json
    uischema expand "c[children:txt[text:Hi]|btn[text:OK;ariaLabel:Confirm]]"
    uischema patch tree.json patches.jsonl
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from uischema.a11y import validate_a11y
from uischema.config import EnvVar, get_environment
from uischema.core.log import get_logger, setup_logging
from uischema.patch import PatchError, PatchParseError, apply_patches, parse_jsonl_patches
from uischema.pipeline import generate_layout_skeleton, run_benchmark
from uischema.schema import export_json_schema
from uischema.shorthand import ShorthandSyntaxError, expand_shorthand
from uischema.validation import validate_document

logger = get_logger("uischema.cli")


def _print_json(data: Any) -> None:
    indent = get_environment(EnvVar.JSON_INDENT)
    print(json.dumps(data, indent=indent or None, ensure_ascii=False))


def _read_json(path: Path) -> Any:
    """Load a JSON file, logging and re-raising read or decode failures."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise


# =============================================================================
# Validate Command
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    try:
        data = _read_json(args.file)
    except (OSError, json.JSONDecodeError):
        return 1

    result = validate_document(data)
    if not result.success:
        logger.error("Schema validation failed:")
        for error in result.errors:
            logger.error(f"  - {error.format_path()}: {error.message}")
        return 1

    print("Schema validation passed")

    issues = validate_a11y(result.document)
    if not issues:
        print("Basic accessibility checks passed")
        return 0

    strict = get_environment(EnvVar.A11Y_STRICT, override=True if args.strict else None)
    log = logger.error if strict else logger.warning
    log(f"Accessibility issues found ({len(issues)}):")
    for issue in issues:
        log(f"  - {issue.path}: {issue.message}")
    return 1 if strict else 0


def handle_validate_command(argv: list[str]) -> int:
    """Handle validate command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="uischema validate",
        description="Validate a document file structurally and for accessibility",
    )
    parser.add_argument("file", type=Path, help="Path to a document JSON file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on accessibility issues (default: UISCHEMA_A11Y_STRICT)",
    )
    args = parser.parse_args(argv)
    return cmd_validate(args)


# =============================================================================
# Expand Command
# =============================================================================


def cmd_expand(args: argparse.Namespace) -> int:
    """Handle the expand command."""
    try:
        node = expand_shorthand(args.shorthand)
    except ShorthandSyntaxError as e:
        logger.error(f"Invalid shorthand: {e}")
        return 1

    if args.document:
        version = get_environment(EnvVar.SCHEMA_VERSION)
        _print_json({"schemaVersion": version, "root": node})
    else:
        _print_json(node)
    return 0


def handle_expand_command(argv: list[str]) -> int:
    """Handle expand command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="uischema expand",
        description="Expand compact shorthand into node JSON",
    )
    parser.add_argument("shorthand", help="Shorthand source, e.g. 'c[children:txt[text:Hi]]'")
    parser.add_argument(
        "--document",
        "-d",
        action="store_true",
        help="Wrap the node in a document envelope",
    )
    args = parser.parse_args(argv)
    return cmd_expand(args)


# =============================================================================
# Skeleton Command
# =============================================================================


def handle_skeleton_command(argv: list[str]) -> int:
    """Handle skeleton command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="uischema skeleton",
        description="Print the coarse layout a patch stream refines",
    )
    parser.add_argument("description", nargs="+", help="Free-text description of the UI")
    args = parser.parse_args(argv)

    _print_json(generate_layout_skeleton(" ".join(args.description)))
    return 0


# =============================================================================
# Patch Command
# =============================================================================


def cmd_patch(args: argparse.Namespace) -> int:
    """Handle the patch command."""
    try:
        tree = _read_json(args.tree)
    except (OSError, json.JSONDecodeError):
        return 1
    try:
        text = args.patches.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Cannot read {args.patches}: {e}")
        return 1

    try:
        patches = parse_jsonl_patches(text)
        result = apply_patches(tree, patches)
    except PatchParseError as e:
        logger.error(f"Line {e.line_number}: {e}")
        return 1
    except PatchError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Applied {len(patches)} patch(es)")
    _print_json(result)
    return 0


def handle_patch_command(argv: list[str]) -> int:
    """Handle patch command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="uischema patch",
        description="Apply a JSONL patch file to a tree",
    )
    parser.add_argument("tree", type=Path, help="Path to the starting tree JSON")
    parser.add_argument("patches", type=Path, help="Path to a JSONL patch file")
    args = parser.parse_args(argv)
    return cmd_patch(args)


# =============================================================================
# Schema Command
# =============================================================================


def handle_schema_command(argv: list[str]) -> int:
    """Handle schema command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="uischema schema",
        description="Print the document JSON Schema",
    )
    parser.parse_args(argv)

    _print_json(export_json_schema())
    return 0


# =============================================================================
# Benchmark Command
# =============================================================================


def handle_benchmark_command(argv: list[str]) -> int:
    """Handle benchmark command argument parsing."""
    parser = argparse.ArgumentParser(
        prog="uischema benchmark",
        description="Estimate token savings of shorthand over JSON",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args(argv)

    results = run_benchmark()
    if args.json:
        _print_json([result.to_dict() for result in results])
        return 0

    print("Token Benchmark (heuristic tokens ~= chars/4)")
    for result in results:
        print(
            f"{result.name}: shorthand={result.shorthand_tokens}, "
            f"expanded={result.expanded_tokens}, ratio={result.ratio}x"
        )
    return 0


# =============================================================================
# Main Entry Point
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: uischema {command} [args]")
    print("\nCommands:")
    print("  validate   Validate a document file")
    print("  expand     Expand shorthand into node JSON")
    print("  skeleton   Print the coarse layout skeleton")
    print("  patch      Apply a JSONL patch file to a tree")
    print("  schema     Print the document JSON Schema")
    print("  benchmark  Estimate shorthand token savings")
    print("\nExamples:")
    print("  uischema validate page.json")
    print("  uischema expand 'c[children:txt[text:Hi]|btn[text:OK;ariaLabel:Confirm]]'")
    print("  uischema patch tree.json patches.jsonl")


COMMANDS = {
    "validate": handle_validate_command,
    "expand": handle_expand_command,
    "skeleton": handle_skeleton_command,
    "patch": handle_patch_command,
    "schema": handle_schema_command,
    "benchmark": handle_benchmark_command,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        show_help()
        return 1

    command, rest_args = argv[0], argv[1:]
    if command in ("-h", "--help"):
        show_help()
        return 0

    if command in COMMANDS:
        setup_logging(get_environment(EnvVar.LOG_LEVEL))
        return COMMANDS[command](rest_args)

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


__all__ = ["COMMANDS", "main", "show_help"]
