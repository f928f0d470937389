#!/usr/bin/env python3
"""
ADR Checker CLI

A tool for cross-referencing Architecture Decision Record (ADR) citations in
source code comments against a directory of ADR documents.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from adr import __version__
from adr.config import DEFAULT_CONFIG_FILE, OUTPUT_FORMATS, create_default_config, load_config
from adr.model import DOCUMENT_ISSUE_TYPES, AdrScanResult
from exporters import render_report
from scanner.builder import scan_project


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="adr-checker",
        description="Track and validate Architecture Decision Records (ADRs) referenced from source code.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  adr-checker init                              # Write .adr-checker.json
  adr-checker scan                              # Scan with the default config
  adr-checker scan -a docs/decisions -s lib     # Custom directories
  adr-checker scan -f json -o report.json       # JSON report to file
  adr-checker validate-docs                     # Check ADR documents only
  adr-checker report report.json -f html -o report.html
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log errors",
    )

    # Options shared by scan and validate-docs
    scan_options = argparse.ArgumentParser(add_help=False)
    scan_options.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Path to configuration file (JSON or YAML)",
    )
    scan_options.add_argument(
        "-a", "--adr-dir",
        type=str,
        default=None,
        help="Path to ADR documents directory",
    )
    scan_options.add_argument(
        "-s", "--source-dir",
        type=str,
        default=None,
        help="Path to source code directory",
    )
    scan_options.add_argument(
        "-j", "--jobs",
        type=int,
        default=1,
        help="Number of files to process in parallel (default: 1)",
    )

    # Options shared by every command that writes a report
    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    output_options.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: from config, else text)",
    )
    output_options.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Text report reference listing: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser(
        "scan",
        parents=[scan_options, output_options],
        help="Scan project for ADR references and validate against ADR documents",
    )

    init_parser = subparsers.add_parser(
        "init",
        help="Write a default configuration file",
    )
    init_parser.add_argument(
        "-p", "--path",
        type=str,
        default=DEFAULT_CONFIG_FILE,
        help=f"Path of the configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing configuration file",
    )

    subparsers.add_parser(
        "validate-docs",
        parents=[scan_options, output_options],
        help="Validate ADR documents for missing metadata, broken links and outdated decisions",
    )

    report_parser = subparsers.add_parser(
        "report",
        parents=[output_options],
        help="Render a previously written JSON report in another format",
    )
    report_parser.add_argument(
        "input",
        help="JSON report produced by 'scan -f json'",
    )

    return parser, parser.parse_args(args)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging to stderr; stdout is reserved for reports."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def main(args=None):
    """Main entry point."""
    parser, parsed = parse_args(args)
    setup_logging(parsed.verbose, parsed.quiet)

    if parsed.command == "init":
        return _run_init(parsed)
    if parsed.command in ("scan", "validate-docs"):
        return _run_scan(parsed, documents_only=parsed.command == "validate-docs")
    if parsed.command == "report":
        return _run_report(parsed)

    parser.print_help(sys.stderr)
    return 1


def _run_init(parsed) -> int:
    try:
        config_path = create_default_config(parsed.path, force=parsed.force)
    except FileExistsError:
        print(f"Error: '{parsed.path}' already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error creating config file: {e}", file=sys.stderr)
        return 1

    print(f"Configuration file created at {config_path}", file=sys.stderr)
    return 0


def _run_scan(parsed, documents_only: bool) -> int:
    config = load_config(
        parsed.config,
        adr_dir=parsed.adr_dir,
        source_dir=parsed.source_dir,
        output_format=parsed.format,
    )

    try:
        result = scan_project(config, validate_documents=documents_only, workers=parsed.jobs)
    except Exception as e:
        print(f"Error scanning project: {e}", file=sys.stderr)
        return 1

    if documents_only:
        result = result.with_issues(i for i in result.issues if i.type in DOCUMENT_ISSUE_TYPES)

    output = render_report(result, config.output_format, base=Path.cwd(), style=parsed.ascii_style)
    if _write_output(output, parsed.output) != 0:
        return 1

    issue_count = len(result.issues)
    if issue_count > 0:
        scope = " in ADR documents" if documents_only else ""
        print(f"Found {issue_count} issues{scope}. See report for details.", file=sys.stderr)
        return 1

    print("No issues found!", file=sys.stderr)
    return 0


def _run_report(parsed) -> int:
    input_path = Path(parsed.input)
    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
        result = AdrScanResult.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        print(f"Error reading report '{input_path}': {e}", file=sys.stderr)
        return 1

    output = render_report(result, parsed.format or "text", base=Path.cwd(), style=parsed.ascii_style)
    return _write_output(output, parsed.output)


def _write_output(output: str, destination: Optional[str]) -> int:
    if destination:
        try:
            output_path = Path(destination)
            output_path.write_text(output, encoding="utf-8")
            print(f"Report written to: {output_path.resolve()}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
