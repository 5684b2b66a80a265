# pipecomp.cli - Command line interface
"""
CLI entry point for pipecomp.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from pipecomp.version import __version__
from pipecomp.config import Config, load_config
from pipecomp.completion import Document, PipelineCompletion, PipelineReflector
from pipecomp.parser import ParseError
from pipecomp.repl import Repl
from pipecomp.utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pipecomp",
        description="Pipeline Completion - context-aware suggestions for aggregation pipelines",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"pipecomp {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write a debug log to this file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Complete subcommand
    complete_parser = subparsers.add_parser(
        "complete",
        help="List suggestions for a cursor position",
    )
    _add_file_argument(complete_parser)
    _add_cursor_arguments(complete_parser)
    _add_output_argument(complete_parser)

    # Stages subcommand
    stages_parser = subparsers.add_parser(
        "stages",
        help="List recognized stages present in a pipeline",
    )
    _add_file_argument(stages_parser)
    _add_output_argument(stages_parser)

    # Context subcommand
    context_parser = subparsers.add_parser(
        "context",
        help="Show the cursor node, its ancestor path and context",
    )
    _add_file_argument(context_parser)
    _add_cursor_arguments(context_parser)

    return parser


def _add_file_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file",
        help="Pipeline file ('-' for stdin)",
    )


def _add_cursor_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-l", "--line",
        type=int,
        required=True,
        help="Cursor line (1-based)",
    )
    parser.add_argument(
        "-c", "--column",
        type=int,
        required=True,
        help="Cursor column (1-based)",
    )


def _add_output_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o", "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load config
    config = load_config(args.config)

    setup_logging(
        debug=args.debug or config.debug_parser,
        log_file=args.log_file or config.log_file,
        level=config.log_level,
    )

    engine = PipelineCompletion.from_config(config)

    if args.command == "complete":
        return run_complete(engine, args)
    if args.command == "stages":
        return run_stages(engine, args)
    if args.command == "context":
        return run_context(engine, args)

    # Interactive REPL mode
    return run_repl(engine, config)


def read_source(file: str) -> Optional[str]:
    """Read pipeline text from a path or stdin."""
    if file == "-":
        return sys.stdin.read()

    path = Path(file)
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return None
    return path.read_text(encoding="utf-8")


def run_complete(engine: PipelineCompletion, args) -> int:
    """Print suggestions for a cursor position."""
    source = read_source(args.file)
    if source is None:
        return 1

    document = Document(text=source, line=args.line, column=args.column)
    suggestions = engine.complete(document)

    if args.output == "json":
        print(json.dumps([s.to_dict() for s in suggestions], indent=2))
        return 0

    if not suggestions:
        print("No suggestions.")
        return 0

    for item in sorted(suggestions, key=lambda s: s.sort_key):
        print(item.format_text())
    print(f"\n({len(suggestions)} suggestion{'s' if len(suggestions) != 1 else ''})")
    return 0


def run_stages(engine: PipelineCompletion, args) -> int:
    """Print the recognized stages of a pipeline."""
    source = read_source(args.file)
    if source is None:
        return 1

    try:
        tree = engine.parser.parse(source)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    names = [str(name) for name in PipelineReflector(tree).stage_names_present()]

    if args.output == "json":
        print(json.dumps({"count": len(names), "stages": names}, indent=2))
    elif names:
        for name in names:
            print(name)
    else:
        print("No recognized stages.")
    return 0


def run_context(engine: PipelineCompletion, args) -> int:
    """Print how the cursor position was resolved."""
    source = read_source(args.file)
    if source is None:
        return 1

    document = Document(text=source, line=args.line, column=args.column)
    resolution = engine.resolve(document)
    print(json.dumps(resolution.to_dict(), indent=2, ensure_ascii=False))
    return 0 if resolution.error is None else 1


def run_repl(engine: PipelineCompletion, config: Config) -> int:
    """Run interactive REPL."""
    repl = Repl(engine=engine, history_file=config.history_file)
    repl.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
