"""Tests for CLI argument parsing and command output."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lexicompare.cli import _build_parser, main


class TestArgParser:
    def test_version_flag(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["--version"])
        assert args.version is True

    def test_compare_defaults(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(["compare", "a.txt", "b.txt"])
        assert args.command == "compare"
        assert args.file_a == "a.txt"
        assert args.file_b == "b.txt"
        assert args.conflicts is False
        assert args.min_severity is None
        assert args.format == "text"

    def test_compare_with_options(self) -> None:
        parser = _build_parser()
        args = parser.parse_args(
            [
                "compare",
                "a.txt",
                "b.txt",
                "--conflicts",
                "--min-severity",
                "high",
                "--format",
                "json",
            ]
        )
        assert args.conflicts is True
        assert args.min_severity == "high"
        assert args.format == "json"

    def test_invalid_severity_rejected(self) -> None:
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(
                ["compare", "a", "b", "--min-severity", "urgent"]
            )

    def test_no_command_prints_help(self) -> None:
        parser = _build_parser()
        args = parser.parse_args([])
        assert args.command is None


class TestCommands:
    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--version"])
        assert capsys.readouterr().out.startswith("lexicompare ")

    def test_compare_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_text("The contract was signed on March 1.")
        b.write_text("The contract was not signed on March 1.")

        main(["compare", str(a), str(b), "--conflicts", "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert data["similarity_score"] == 90
        assert data["critical_conflicts"] == 1
        assert data["differences"][0]["kind"] == "addition"

    def test_compare_text_format(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_text("The cat sat")
        b.write_text("The dog sat")

        main(["compare", str(a), str(b)])

        out = capsys.readouterr().out
        assert "Similarity: 73%" in out
        assert "[medium] modification @4: 'cat' -> 'dog'" in out

    def test_compare_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["compare", str(tmp_path / "nope"), str(tmp_path / "x")])
        assert exc_info.value.code == 1

    def test_clauses(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        before = tmp_path / "before.json"
        after = tmp_path / "after.json"
        before.write_text(
            json.dumps(
                [
                    {
                        "id": "c1",
                        "section_name": "Indemnity",
                        "category": "indemnification",
                        "text": "Supplier shall indemnify Buyer.",
                    }
                ]
            )
        )
        after.write_text("[]")

        main(["clauses", str(before), str(after), "--format", "json"])

        data = json.loads(capsys.readouterr().out)
        assert data["deletions"] == 1
        assert data["changes"][0]["risk_level"] == "critical"

    def test_clauses_bad_json(self, tmp_path: Path) -> None:
        before = tmp_path / "before.json"
        before.write_text("{not json")
        with pytest.raises(SystemExit):
            main(["clauses", str(before), str(before)])

    def test_clauses_non_string_text(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        before = tmp_path / "before.json"
        after = tmp_path / "after.json"
        before.write_text(json.dumps([{"id": "c1", "text": "Pay in 30 days."}]))
        after.write_text(json.dumps([{"id": "c1", "text": 42}]))

        with pytest.raises(SystemExit) as exc_info:
            main(["clauses", str(before), str(after)])

        assert exc_info.value.code == 1
        assert "expected str, got int" in capsys.readouterr().err
