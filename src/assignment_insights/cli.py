"""Command-line front end: analyze one workbook and print the result."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from pydantic import ValidationError

from assignment_insights.analyzer import AssignmentAnalyzer
from assignment_insights.config import AnalyzerConfig
from assignment_insights.errors import MissingRequiredColumn, ReadFailure, SourceUnavailable
from assignment_insights.models import AnalysisOutcome

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_SOURCE_FAILED = 2
EXIT_MISSING_COLUMN = 3


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assignment-insights",
        description=(
            "Find the action and due-date columns of a spreadsheet and report "
            "assigned and overdue percentages."
        ),
    )
    parser.add_argument("file", help="Path to an .xlsx, .xlsm or .xls workbook")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )
    parser.add_argument(
        "--today",
        type=_parse_date,
        default=None,
        help="Reference date for overdue checks (default: today in the configured timezone)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .json/.yaml config file",
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="IANA timezone for the reference date (default: Asia/Kolkata)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _load_config(args: argparse.Namespace) -> AnalyzerConfig:
    config = AnalyzerConfig.from_file(args.config) if args.config else AnalyzerConfig()
    if args.timezone:
        config = AnalyzerConfig(**{**config.model_dump(), "timezone": args.timezone})
    return config


def render_text(outcome: AnalysisOutcome) -> str:
    result = outcome.result
    lines = [
        outcome.summary,
        (
            f"Columns: action={result.columns_used.action.letter} "
            f"due_date={result.columns_used.due_date.letter}"
        ),
        f"Reference date: {result.today_iso} ({result.timezone})",
    ]
    lines.extend(f"Note: {note}" for note in result.notes)
    return "\n".join(lines)


def render_json(outcome: AnalysisOutcome) -> str:
    payload = {
        "result": outcome.result.model_dump(mode="json"),
        "summary": outcome.summary,
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
    except (OSError, ValueError, ImportError, ValidationError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    analyzer = AssignmentAnalyzer(config)
    try:
        outcome = analyzer.analyze_file(args.file, today=args.today)
    except (ReadFailure, SourceUnavailable) as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return EXIT_SOURCE_FAILED
    except MissingRequiredColumn as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return EXIT_MISSING_COLUMN

    print(render_json(outcome) if args.json else render_text(outcome))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
