"""CLI for pattern-optimizer.

Usage:
    pattern-optimizer analyze <file.js>
    pattern-optimizer analyze <file.py> --types performance --format json
    pattern-optimizer analyze src/*.ts --summary
    pattern-optimizer domains
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .analyzer import analyze
from .classifier import build_request, parse_domain_filter, parse_optimization_types
from .config import OUTPUT_FORMATS, Settings, load_settings
from .knowledge import DEFAULT_DOMAINS, load_domains
from .reporter import (
    generate_domains_report,
    generate_json_report,
    generate_markdown_report,
    generate_summary_report,
    generate_text_report,
    print_rich_report,
    print_rich_summary,
)
from .schemas import Domain
from .scoring import ScoreSampler
from .store import ResultStore

logger = logging.getLogger(__name__)


def configure_logging(level: str | int) -> None:
    """Send log records to stderr at the given level."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger().setLevel(level)


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    settings = load_settings()

    parser = argparse.ArgumentParser(
        prog="pattern-optimizer",
        description="Analyze source files for pattern-based optimization opportunities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Analyze a single file
    pattern-optimizer analyze fibonacci.js

    # Only look for security fixes, output as JSON
    pattern-optimizer analyze widget.ts --types security --format json > report.json

    # Deterministic placeholder scores
    pattern-optimizer analyze app.js --seed 42

    # Aggregate summary across files
    pattern-optimizer analyze src/*.js --summary
""",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze source files",
        description="Detect known code patterns, rewrite them and score the result",
    )
    analyze_parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Source file(s) to analyze",
    )
    analyze_parser.add_argument(
        "--types",
        "-t",
        default=",".join(t.value for t in settings.optimization_types),
        help="Comma separated optimization types (default: %(default)s)",
    )
    analyze_parser.add_argument(
        "--language",
        "-l",
        help="Source language (default: inferred from the file extension)",
    )
    analyze_parser.add_argument(
        "--domains",
        "-d",
        help="Comma separated knowledge domains to report (default: all)",
    )
    analyze_parser.add_argument(
        "--domains-file",
        type=Path,
        default=settings.domains_file,
        help="JSON file with knowledge domain definitions",
    )
    analyze_parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default=settings.output_format,
        help="Output format (default: %(default)s)",
    )
    analyze_parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Seed for placeholder scores",
    )
    analyze_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show the optimized code and debug logging",
    )
    analyze_parser.add_argument(
        "--summary",
        "-s",
        action="store_true",
        help="Show aggregate summary across all files",
    )

    # Domains command
    domains_parser = subparsers.add_parser(
        "domains",
        help="List knowledge domains",
        description="List the knowledge domains used to tag applied techniques",
    )
    domains_parser.add_argument(
        "--domains-file",
        type=Path,
        default=settings.domains_file,
        help="JSON file with knowledge domain definitions",
    )
    domains_parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    verbose = getattr(parsed, "verbose", False)
    configure_logging(logging.DEBUG if verbose else settings.log_level)

    if parsed.command == "analyze":
        return cmd_analyze(parsed, settings)
    if parsed.command == "domains":
        return cmd_domains(parsed)

    return 0


def _resolve_domains(domains_file: Path | None) -> list[Domain] | None:
    """Load domains from a file, or the built-in table. None on error."""
    if domains_file is None:
        return list(DEFAULT_DOMAINS)

    try:
        return load_domains(domains_file)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {domains_file}: {e}", file=sys.stderr)
    except (OSError, ValueError) as e:
        print(f"Error loading domains from {domains_file}: {e}", file=sys.stderr)
    return None


def cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Handle the analyze command.

    Args:
        args: Parsed arguments.
        settings: Environment settings.

    Returns:
        Exit code.
    """
    try:
        types = parse_optimization_types(args.types)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    domains = _resolve_domains(args.domains_file)
    if domains is None:
        return 1

    domain_filter = parse_domain_filter(args.domains)
    sampler = ScoreSampler(args.seed)
    store = ResultStore()

    for filepath in args.files:
        if not filepath.exists():
            print(f"Error: File not found: {filepath}", file=sys.stderr)
            return 1

        try:
            code = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {filepath}: {e}", file=sys.stderr)
            return 1

        request = build_request(
            code,
            filepath.name,
            language=args.language,
            optimization_types=types,
            applicable_domains=domain_filter,
        )
        result = analyze(request, domains=domains, sampler=sampler)
        store.save(result)
        logger.info("Analyzed %s: %d insight(s)", filepath, len(result.insights))

        # Output individual report (unless --summary)
        if not args.summary:
            if args.format == "json":
                print(generate_json_report(result))
            elif args.format == "text":
                print(generate_text_report(result, verbose=args.verbose))
            elif args.format == "markdown":
                print(generate_markdown_report(result, verbose=args.verbose))
            else:  # rich
                print_rich_report(result, verbose=args.verbose)

    if args.summary:
        stats = store.dashboard_stats(domains)
        if args.format == "json":
            print(json.dumps(stats.to_dict(), indent=2))
        elif args.format == "rich":
            print_rich_summary(stats)
        else:
            print(generate_summary_report(stats))

    return 0


def cmd_domains(args: argparse.Namespace) -> int:
    """Handle the domains command."""
    domains = _resolve_domains(args.domains_file)
    if domains is None:
        return 1

    if args.format == "json":
        print(json.dumps([d.to_dict() for d in domains], indent=2))
    else:
        print(generate_domains_report(domains))
    return 0


if __name__ == "__main__":
    sys.exit(main())
