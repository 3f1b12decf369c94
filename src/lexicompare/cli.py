"""CLI entry point: ``lexicompare compare`` and ``lexicompare clauses``."""

from __future__ import annotations

from lexicompare.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import json  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from lexicompare import __version__  # noqa: E402
from lexicompare.config import Settings  # noqa: E402
from lexicompare.constants import Severity  # noqa: E402
from lexicompare.engine.clauses import diff_clause_sets  # noqa: E402
from lexicompare.engine.value_objects import (  # noqa: E402
    Clause,
    ClauseComparison,
    ComparisonResult,
    SourceRef,
)
from lexicompare.errors import ComparisonError  # noqa: E402
from lexicompare.services.comparison_service import (  # noqa: E402
    ComparisonService,
)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"lexicompare {__version__}")
        return

    if args.command == "compare":
        _run_compare(args)
    elif args.command == "clauses":
        _run_clauses(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lexicompare",
        description=(
            "Word-level diff and conflict detection "
            "for legal source texts."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    compare = sub.add_parser(
        "compare",
        help="Compare two text files",
    )
    compare.add_argument("file_a", type=str, help="Original text file")
    compare.add_argument("file_b", type=str, help="Modified text file")
    compare.add_argument(
        "--conflicts",
        "-c",
        action="store_true",
        help="Also run sentence-level conflict detection",
    )
    compare.add_argument(
        "--min-severity",
        choices=[s.value for s in Severity],
        default=None,
        help="Drop conflicts below this severity",
    )
    compare.add_argument(
        "--format",
        "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )

    clauses = sub.add_parser(
        "clauses",
        help="Compare two contract versions given as clause JSON",
    )
    clauses.add_argument(
        "before", type=str, help="JSON list of clauses (old version)"
    )
    clauses.add_argument(
        "after", type=str, help="JSON list of clauses (new version)"
    )
    clauses.add_argument(
        "--format",
        "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )

    return parser


def _read_text(path_arg: str) -> str:
    path = Path(path_arg)
    if not path.is_file():
        print(f"Error: {path} does not exist", file=sys.stderr)
        sys.exit(1)
    return path.read_text(encoding="utf-8")


def _run_compare(args: argparse.Namespace) -> None:
    """Execute the compare command."""
    text_a = _read_text(args.file_a)
    text_b = _read_text(args.file_b)
    service = ComparisonService(settings=Settings())

    try:
        result = asyncio.run(
            service.compare_refs(
                SourceRef(type="file", id=0, text=text_a, citation=args.file_a),
                SourceRef(type="file", id=1, text=text_b, citation=args.file_b),
                matter_id=0,
                detect=args.conflicts,
                min_severity=(
                    Severity(args.min_severity) if args.min_severity else None
                ),
            )
        )
    except ComparisonError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(_format_comparison(result))


def _run_clauses(args: argparse.Namespace) -> None:
    """Execute the clauses command."""
    before = _load_clauses(args.before)
    after = _load_clauses(args.after)
    try:
        result = diff_clause_sets(
            before, after, context_radius=Settings().context_radius
        )
    except ComparisonError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(_format_clauses(result))


def _load_clauses(path_arg: str) -> list[Clause]:
    try:
        data = json.loads(_read_text(path_arg))
        return [Clause.from_dict(item) for item in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        print(
            f"Error: {path_arg} is not a JSON list of clauses ({exc})",
            file=sys.stderr,
        )
        sys.exit(1)


def _format_comparison(result: ComparisonResult) -> str:
    lines = [
        f"Similarity: {result.similarity_score}%",
        f"Differences: {result.total_differences}",
    ]
    for diff in result.differences:
        before = diff.before if diff.before is not None else ""
        after = diff.after if diff.after is not None else ""
        lines.append(
            f"  [{diff.severity.value}] {diff.kind.value} @{diff.position}:"
            f" {before!r} -> {after!r}"
        )
    if result.conflicts:
        lines.append(
            f"Conflicts: {len(result.conflicts)} "
            f"(critical={result.critical_conflicts}, "
            f"high={result.high_conflicts}, "
            f"medium={result.medium_conflicts}, "
            f"low={result.low_conflicts})"
        )
        for conflict in result.conflicts:
            lines.append(
                f"  [{conflict.severity.value}] {conflict.kind.value}"
                f" ({conflict.confidence}%): {conflict.source_a.text!r}"
                f" vs {conflict.source_b.text!r}"
            )
    return "\n".join(lines)


def _format_clauses(result: ClauseComparison) -> str:
    lines = [
        f"Similarity: {result.similarity_score}%",
        f"Changes: {result.total_changes} "
        f"(+{result.additions} -{result.deletions} ~{result.modifications})",
    ]
    for change in result.changes:
        lines.append(
            f"  [{change.risk_level.value}] {change.risk_reason}"
        )
    return "\n".join(lines)
