"""Main CLI entry point for the strict-markup command-line tool.

Reads complete documents from files or stdin, hands them to the parser and
renders the resulting tree or error. Exit status is 0 only when every input
parsed.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from strict_markup_parser import __version__
from strict_markup_parser.api import MarkupParser
from strict_markup_parser.dom import format_tree, to_dict
from strict_markup_parser.shared.config import (
    PRESET_NAMES,
    ConfigError,
    ParserConfig,
)
from strict_markup_parser.shared.logging import configure_logging, get_logger
from strict_markup_parser.shared.result import ParseResult
from strict_markup_parser.tools.profiling import profile_markup

STDIN_PATH = "-"
STDIN_NAME = "<stdin>"


class MarkupProcessor:
    """Runs the parser over CLI inputs and turns results into records."""

    def __init__(self, config: ParserConfig):
        self.config = config
        self.parser = MarkupParser(config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def process(self, path: str) -> ParseResult:
        """Parse one input; ``-`` means stdin."""
        self.logger.debug("Processing input", extra={"input_path": path})
        if path == STDIN_PATH:
            result = self.parser.parse(sys.stdin.read())
            result.source = STDIN_NAME
            return result
        return self.parser.parse_file(Path(path))

    def to_record(self, result: ParseResult, include_tree: bool = True) -> Dict[str, Any]:
        """Convert a result into a JSON-ready dictionary."""
        record: Dict[str, Any] = {
            "source": result.source,
            "success": result.success,
            "processing_time_ms": result.processing_time_ms,
            "nodes_created": result.performance.nodes_created,
            "error": result.error.to_dict() if result.error else None,
            "diagnostics": [
                {
                    "severity": diag.severity.name,
                    "message": diag.message,
                    "component": diag.component,
                }
                for diag in result.diagnostics
            ],
        }
        if include_tree:
            record["tree"] = to_dict(result.node) if result.node is not None else None
        return record


def _failure_message(result: ParseResult) -> str:
    if result.error is not None:
        return str(result.error)
    messages = [diag.message for diag in result.diagnostics if diag.message]
    return "; ".join(messages) or "no result"


def build_config(args: argparse.Namespace) -> ParserConfig:
    """Build the parser configuration.

    The preset is the base, keys from the configuration file replace its
    values and command-line flags are applied last.
    """
    config = ParserConfig.preset(getattr(args, "preset", "default"))
    if getattr(args, "config", None):
        config = ParserConfig.from_file(args.config, base=config)

    overrides: Dict[str, Any] = {}
    if getattr(args, "max_depth", None) is not None:
        overrides["max_depth"] = args.max_depth
    if getattr(args, "collapse_whitespace", False):
        overrides["collapse_whitespace_text"] = True
    return config.override(**overrides) if overrides else config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="strict-markup",
        description="Fail-fast recursive-descent markup parser"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    config_parent = argparse.ArgumentParser(add_help=False)
    config_parent.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON), layered over --preset"
    )
    config_parent.add_argument(
        "--preset",
        choices=PRESET_NAMES,
        default="default",
        help="Parser configuration preset"
    )
    config_parent.add_argument(
        "--max-depth",
        type=int,
        help="Maximum element nesting depth"
    )
    config_parent.add_argument(
        "--collapse-whitespace",
        action="store_true",
        help="Drop whitespace-only text between child tags"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse", parents=[config_parent], help="Parse markup and print the tree"
    )
    parse_parser.add_argument(
        "paths",
        nargs="+",
        help="Markup files to parse ('-' reads stdin)"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "tree"],
        default="tree",
        help="Output format (default: tree)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", parents=[config_parent], help="Check that markup is well-formed"
    )
    validate_parser.add_argument(
        "paths",
        nargs="+",
        help="Markup files to validate ('-' reads stdin)"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Profile command
    profile_parser = subparsers.add_parser(
        "profile", parents=[config_parent], help="Measure parse time and memory"
    )
    profile_parser.add_argument(
        "path",
        help="Markup file to profile ('-' reads stdin)"
    )
    profile_parser.add_argument(
        "--iterations", "-n",
        type=int,
        default=10,
        help="Number of parses to run (default: 10)"
    )

    return parser


def format_results(
    results: List[ParseResult],
    processor: MarkupProcessor,
    format_type: str
) -> str:
    """Format parse results for output."""
    if format_type == "json":
        return json.dumps(
            [processor.to_record(result) for result in results],
            indent=2,
            ensure_ascii=False,
        )

    blocks = []
    for result in results:
        header = f"== {result.source}" if len(results) > 1 else None
        if result.success and result.node is not None:
            body = format_tree(result.node)
        else:
            body = f"error: {_failure_message(result)}"
        blocks.append(f"{header}\n{body}" if header else body)
    return "\n\n".join(blocks)


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle parse command."""
    processor = MarkupProcessor(config)
    results = [processor.process(path) for path in args.paths]

    formatted_output = format_results(results, processor, args.format)
    if args.output:
        try:
            args.output.write_text(formatted_output + "\n", encoding="utf-8")
        except OSError as e:
            logger = get_logger(__name__, config.correlation_id, "cli")
            logger.error("Cannot write output", extra={"output_path": str(args.output)})
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        if not args.quiet:
            print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    return 0 if all(result.success for result in results) else 1


def cmd_validate(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle validate command."""
    processor = MarkupProcessor(config)
    results = [processor.process(path) for path in args.paths]

    if args.format == "json":
        records = [processor.to_record(result, include_tree=False) for result in results]
        print(json.dumps(records, indent=2, ensure_ascii=False))
    else:
        valid_count = sum(1 for result in results if result.success)
        if not args.quiet:
            print(f"Validated {len(results)} inputs, {valid_count} well-formed")
            print("-" * 50)
        for result in results:
            if result.success:
                if not args.quiet:
                    print(f"✓ {result.source}")
            else:
                print(f"✗ {result.source}: {_failure_message(result)}")

    return 0 if all(result.success for result in results) else 1


def cmd_profile(args: argparse.Namespace, config: ParserConfig) -> int:
    """Handle profile command."""
    if args.iterations <= 0:
        print("--iterations must be > 0", file=sys.stderr)
        return 1

    if args.path == STDIN_PATH:
        text = sys.stdin.read()
    else:
        try:
            text = Path(args.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Cannot read {args.path}: {e}", file=sys.stderr)
            return 1

    report = profile_markup(text, args.iterations, config)
    summary = report.to_dict()
    summary["source"] = STDIN_NAME if args.path == STDIN_PATH else args.path
    summary["input_characters"] = len(text)
    summary["all_succeeded"] = all(
        session.metadata.get("success", False) for session in report.sessions
    )
    print(json.dumps(summary, indent=2))
    return 0 if summary["all_succeeded"] else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    # Set up logging verbosity
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)

    # Route to appropriate command handler
    try:
        if args.command == "parse":
            return cmd_parse(args, config)
        if args.command == "validate":
            return cmd_validate(args, config)
        if args.command == "profile":
            return cmd_profile(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
