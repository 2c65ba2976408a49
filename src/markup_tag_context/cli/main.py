"""Main CLI entry point for the markup-tag-context command-line tool.

Resolves the tag context at a cursor position of a markup file, and dumps the
token stream the resolver works on, which helps when a hint looks wrong.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from markup_tag_context import __version__
from markup_tag_context.api import ContextResolver
from markup_tag_context.shared.config import ConfigError, ContextConfig, MarkupDialect
from markup_tag_context.shared.logging import get_logger
from markup_tag_context.tokenization import MarkupDocument, Position

PRESETS = {
    "html": ContextConfig.html,
    "xml": ContextConfig.xml,
    "debugging": ContextConfig.debugging,
}


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.context_config = ContextConfig.html()
        self.output_format = "json"
        self.encoding = "utf-8"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognized keys: ``preset``, ``context`` (a ContextConfig dictionary),
        ``output_format`` and ``encoding``. A missing file yields defaults.
        """
        config = cls()
        if not config_path.exists():
            return config

        try:
            with config_path.open() as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
            return config

        preset = data.get("preset")
        if preset in PRESETS:
            config.context_config = PRESETS[preset]()
        if "context" in data:
            try:
                config.context_config = ContextConfig.from_dict(data["context"])
            except ConfigError as e:
                print(f"Warning: Invalid context configuration: {e}", file=sys.stderr)
        config.output_format = data.get("output_format", config.output_format)
        config.encoding = data.get("encoding", config.encoding)
        return config

    def with_dialect(self, dialect: Optional[str]) -> ContextConfig:
        """Context configuration with the command-line dialect applied."""
        if not dialect:
            return self.context_config
        return self.context_config.override(tokenizer__dialect=MarkupDialect(dialect))


def load_document(path: Path, config: CLIConfig, context_config: ContextConfig) -> MarkupDocument:
    """Read and tokenize a markup file; ``-`` reads standard input."""
    if str(path) == "-":
        text = sys.stdin.read()
    else:
        text = path.read_text(encoding=config.encoding, errors="replace")
    return MarkupDocument(text, context_config.tokenizer, context_config.correlation_id)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="markup-tag-context",
        description="Resolve the tag and attribute surrounding a cursor in HTML/XML"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Context command
    context_parser = subparsers.add_parser(
        "context", help="Resolve the tag context at a cursor position"
    )
    context_parser.add_argument("path", type=Path, help="Markup file, or - for stdin")
    context_parser.add_argument("--line", "-l", type=int, help="Zero-based cursor line")
    context_parser.add_argument("--column", "-c", type=int, help="Zero-based cursor column")
    context_parser.add_argument(
        "--offset", type=int, help="Cursor as a character offset into the file"
    )
    context_parser.add_argument(
        "--report",
        action="store_true",
        help="Include diagnostics and navigation metrics"
    )
    _add_common_options(context_parser)

    # Tokens command
    tokens_parser = subparsers.add_parser("tokens", help="Dump the token stream")
    tokens_parser.add_argument("path", type=Path, help="Markup file, or - for stdin")
    tokens_parser.add_argument("--line", "-l", type=int, help="Only dump this line")
    _add_common_options(tokens_parser)

    # Global options
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

    return parser


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dialect", "-d",
        choices=[dialect.value for dialect in MarkupDialect],
        help="Markup dialect (default: html)"
    )
    parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file path"
    )


def format_context(result: Dict[str, Any], format_type: str) -> str:
    """Format a resolved context for output."""
    if format_type == "json":
        return json.dumps(result, indent=2)

    context = result.get("context", result)
    attribute = context["attribute"]
    lines = [
        f"tag:       {context['tag_name'] or '-'}",
        f"attribute: {attribute['name'] or '-'}",
        f"value:     {attribute['value'] or '-'}",
    ]
    if "metrics" in result:
        metrics = result["metrics"]
        lines.append(
            f"hops:      {metrics['token_hops']} "
            f"({metrics['lines_crossed']} line changes, "
            f"{metrics['processing_time_ms']:.2f}ms)"
        )
        for diagnostic in result.get("diagnostics", []):
            lines.append(f"{diagnostic['severity']}: {diagnostic['message']}")
    return "\n".join(lines)


def format_tokens(lines: List[Dict[str, Any]], format_type: str) -> str:
    """Format dumped tokens for output."""
    if format_type == "json":
        return json.dumps(lines, indent=2)

    output = []
    for line in lines:
        output.append(f"line {line['line']}:")
        for token in line["tokens"]:
            output.append(
                f"  {token['start']:>4}-{token['end']:<4} "
                f"{token['category']:<10} {token['text']!r}"
            )
    return "\n".join(output)


def _load_cli_config(args: argparse.Namespace) -> CLIConfig:
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)
    if args.format:
        config.output_format = args.format
    return config


def cmd_context(args: argparse.Namespace) -> int:
    """Handle context command."""
    config = _load_cli_config(args)
    context_config = config.with_dialect(args.dialect)

    if args.offset is None and (args.line is None or args.column is None):
        print("Either --offset or both --line and --column are required", file=sys.stderr)
        return 1

    try:
        document = load_document(args.path, config, context_config)
    except OSError as e:
        print(f"Could not read {args.path}: {e}", file=sys.stderr)
        return 1

    try:
        if args.offset is not None:
            position = document.offset_to_position(args.offset)
        else:
            position = Position(args.line, args.column)
    except ValueError as e:
        print(f"Invalid cursor position: {e}", file=sys.stderr)
        return 1

    resolver = ContextResolver(context_config)
    if args.report:
        output: Dict[str, Any] = resolver.resolve_with_report(document, position).to_dict()
    else:
        output = resolver.resolve(document, position).to_dict()

    print(format_context(output, config.output_format))
    return 0


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle tokens command."""
    config = _load_cli_config(args)
    context_config = config.with_dialect(args.dialect)

    try:
        document = load_document(args.path, config, context_config)
    except OSError as e:
        print(f"Could not read {args.path}: {e}", file=sys.stderr)
        return 1

    if args.line is not None:
        if not 0 <= args.line < document.get_line_count():
            print(f"Line {args.line} out of range", file=sys.stderr)
            return 1
        line_numbers = [args.line]
    else:
        line_numbers = list(range(document.get_line_count()))

    dumped = [
        {
            "line": number,
            "tokens": [token.to_dict() for token in document.line_tokens(number)],
        }
        for number in line_numbers
    ]
    print(format_tokens(dumped, config.output_format))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    logger = get_logger(__name__, component="cli")
    logger.debug("Running command", extra={"command": args.command})

    # Route to appropriate command handler
    try:
        if args.command == "context":
            return cmd_context(args)
        if args.command == "tokens":
            return cmd_tokens(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
