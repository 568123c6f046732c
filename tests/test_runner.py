"""Tests for the runner: checking source text and file trees."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from sortcheck.config import SortCheckConfig
from sortcheck.core.exceptions import SourceParseError, UsageError
from sortcheck.core.types import DiagnosticKind, Location
from sortcheck.runner import check_file, check_paths, check_source, iter_python_files

SORTED_MODULE = textwrap.dedent(
    """\
    from enum import Enum


    # @sorted
    class Error(Enum):
        Fmt = 1
        Io = 2
        Utf8 = 3


    # @sorted.check
    def describe(err):
        match err:  # @sorted
            case Error.Fmt:
                return "format"
            case Error.Io:
                return "io"
            case _:
                return "other"
    """
)

UNSORTED_MODULE = textwrap.dedent(
    """\
    from enum import Enum


    # @sorted
    class Error(Enum):
        Io = 1
        Fmt = 2


    # @sorted.check
    def describe(err):
        match err:  # @sorted
            case Error.Io:
                return "io"
            case Error.Fmt:
                return "format"
    """
)


class TestCheckSource:
    """Tests for check_source."""

    def test_sorted_module(self) -> None:
        """Sorted items pass and match markers are stripped."""
        report = check_source(SORTED_MODULE, "errors.py")

        assert report.ok
        assert report.checked == 2
        assert "match err:\n" in report.output
        assert "match err:  # @sorted" not in report.output
        assert "# @sorted\nclass Error(Enum):" in report.output
        assert "# @sorted.check\ndef describe" in report.output

    def test_unsorted_module(self) -> None:
        """Each failing item reports one diagnostic, in source order."""
        report = check_source(UNSORTED_MODULE, "errors.py")

        assert [d.message for d in report.diagnostics] == [
            "Fmt should sort before Io",
            "Error.Fmt should sort before Error.Io",
        ]
        assert report.diagnostics[0].location == Location(7, 4)
        assert report.diagnostics[1].location == Location(15, 19)

    def test_markers_stripped_on_failure(self) -> None:
        """The output is stripped even when the check fails."""
        report = check_source(UNSORTED_MODULE, "errors.py")

        assert "# @sorted\n" in report.output
        assert "match err:  # @sorted" not in report.output

    def test_rerun_on_output_succeeds(self) -> None:
        """Checking the stripped output finds no flagged match."""
        source = UNSORTED_MODULE.replace("# @sorted\nclass", "class")
        first = check_source(source, "errors.py")

        second = check_source(first.output, "errors.py")

        assert not first.ok
        assert second.ok
        assert second.output == first.output

    def test_markers_stripped_after_form_feed(self) -> None:
        """A form feed line above the function does not shift marker lines."""
        source = "import os\n\x0c\ndef f(x):  # @sorted.check\n    match x:  # @sorted\n        case A:\n            pass\n"

        report = check_source(source)

        assert report.ok
        assert "match x:  # @sorted" not in report.output
        assert "    match x:\n" in report.output

    def test_unsupported_pattern(self) -> None:
        """Unsupported arms are reported at the pattern."""
        source = textwrap.dedent(
            """\
            def f(x):  # @sorted.check
                match x:  # @sorted
                    case 0:
                        pass
                    case B:
                        pass
                    case A:
                        pass
            """
        )

        (diagnostic,) = check_source(source).diagnostics

        assert diagnostic.kind == DiagnosticKind.UNSUPPORTED_PATTERN
        assert diagnostic.message == "unsupported by @sorted"
        assert diagnostic.location == Location(3, 13)

    def test_wildcard_before_uppercase_fails(self) -> None:
        """Codepoint order places "_" after uppercase names."""
        source = textwrap.dedent(
            """\
            def f(x):  # @sorted.check
                match x:  # @sorted
                    case _:
                        pass
                    case Color.RED:
                        pass
            """
        )

        (diagnostic,) = check_source(source).diagnostics

        assert diagnostic.message == "Color.RED should sort before Color._"

    def test_inapplicable_item(self) -> None:
        """@sorted on a plain class reports the fixed message."""
        (diagnostic,) = check_source("# @sorted\nclass Config:\n    B = 1\n    A = 2\n").diagnostics

        assert diagnostic.kind == DiagnosticKind.INAPPLICABLE_CONSTRUCT
        assert diagnostic.message == "expected enum or match expression"

    def test_check_marker_on_class(self) -> None:
        """@sorted.check on a class reports a function is expected."""
        (diagnostic,) = check_source("class C:  # @sorted.check\n    pass\n").diagnostics

        assert diagnostic.message == "expected function definition"

    def test_enum_marker_args_are_usage_error(self) -> None:
        """Arguments abort the run."""
        with pytest.raises(UsageError):
            check_source("# @sorted(reverse)\nclass E(Enum):\n    A = 1\n")

    def test_check_marker_args_are_usage_error(self) -> None:
        """Arguments on @sorted.check abort too."""
        with pytest.raises(UsageError):
            check_source("def f(x):  # @sorted.check(x)\n    pass\n")

    def test_empty_parentheses_allowed(self) -> None:
        """An empty argument list is no argument."""
        assert check_source("# @sorted()\nclass E(Enum):\n    A = 1\n").ok

    @pytest.mark.parametrize(
        "source",
        [
            "# @sorted( )\nclass E(Enum):\n    A = 1\n",
            "def f(x):  # @sorted.check( )\n    match x:  # @sorted( )\n        case A:\n            pass\n",
        ],
    )
    def test_blank_parentheses_allowed(self, source: str) -> None:
        """Whitespace-only arguments are empty on every marker kind."""
        assert check_source(source).ok

    def test_parse_error_propagates(self) -> None:
        """Invalid source raises SourceParseError."""
        with pytest.raises(SourceParseError):
            check_source("def :\n")


class TestCheckFiles:
    """Tests for file discovery and per-file reports."""

    def test_iter_python_files_excludes(self, tmp_path: Path) -> None:
        """Default excludes skip virtualenvs and caches."""
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "a.py").write_text("")
        (tmp_path / ".venv" / "lib").mkdir(parents=True)
        (tmp_path / ".venv" / "lib" / "b.py").write_text("")
        (tmp_path / "notes.txt").write_text("")

        files = list(iter_python_files([tmp_path], SortCheckConfig()))

        assert files == [tmp_path / "pkg" / "a.py"]

    def test_iter_python_files_custom_glob(self, tmp_path: Path) -> None:
        """Relative path globs are matched too."""
        (tmp_path / "tests" / "fixtures").mkdir(parents=True)
        (tmp_path / "tests" / "fixtures" / "bad.py").write_text("")
        (tmp_path / "tests" / "test_ok.py").write_text("")

        config = SortCheckConfig(exclude=["tests/fixtures/*"])
        files = list(iter_python_files([tmp_path], config))

        assert files == [tmp_path / "tests" / "test_ok.py"]

    def test_explicit_file_always_checked(self, tmp_path: Path) -> None:
        """Named files bypass excludes."""
        target = tmp_path / "build" / "gen.py"
        target.parent.mkdir()
        target.write_text("")

        assert list(iter_python_files([target], SortCheckConfig())) == [target]

    def test_check_file_parse_error(self, tmp_path: Path) -> None:
        """Parse failures are captured on the report."""
        target = tmp_path / "broken.py"
        target.write_text("def :\n")

        report = check_file(target, SortCheckConfig())

        assert not report.ok
        assert report.error is not None
        assert "line 1" in report.error

    def test_check_file_unreadable(self, tmp_path: Path) -> None:
        """Undecodable files are captured on the report."""
        target = tmp_path / "latin.py"
        target.write_bytes(b"x = '\xff'\n")

        report = check_file(target, SortCheckConfig())

        assert report.error is not None
        assert report.error.startswith("Cannot read file")

    def test_check_paths(self, tmp_path: Path) -> None:
        """One report per file with diagnostics attached."""
        (tmp_path / "good.py").write_text(SORTED_MODULE)
        (tmp_path / "bad.py").write_text(UNSORTED_MODULE)

        reports = check_paths([tmp_path], SortCheckConfig())

        by_name = {r.path.name: r for r in reports}
        assert by_name["good.py"].ok
        assert by_name["good.py"].checked == 2
        assert len(by_name["bad.py"].diagnostics) == 2

    def test_check_paths_does_not_modify_files(self, tmp_path: Path) -> None:
        """Checking never rewrites sources."""
        target = tmp_path / "good.py"
        target.write_text(SORTED_MODULE)

        check_paths([target], SortCheckConfig())

        assert target.read_text() == SORTED_MODULE

    def test_report_to_dict(self, tmp_path: Path) -> None:
        """Reports serialize diagnostics for JSON output."""
        target = tmp_path / "bad.py"
        target.write_text(UNSORTED_MODULE)

        (report,) = check_paths([target], SortCheckConfig())
        data = report.to_dict()

        assert data["path"] == str(target)
        assert data["error"] is None
        assert data["diagnostics"][0] == {
            "kind": "ordering",
            "message": "Fmt should sort before Io",
            "line": 7,
            "column": 4,
            "case": "Fmt",
            "neighbor": "Io",
        }
