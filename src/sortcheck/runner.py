"""Run the checkers over source text and files.

Each marked item in a module is checked independently. ``@sorted`` items go
to the declaration checker, ``@sorted.check`` items to the match checker.
Match-statement markers of checked functions are removed from the output
source whether or not the check passed.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sortcheck.checkers import check_declaration, check_function
from sortcheck.config import SortCheckConfig
from sortcheck.core.exceptions import SourceParseError
from sortcheck.core.tree import FunctionDecl
from sortcheck.core.types import Diagnostic, serialize_diagnostic
from sortcheck.source import SORTED, MarkerComment, parse_module, strip_marker_comments

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SourceReport:
    """Result of checking one module's source.

    Attributes:
        diagnostics: One entry per failed marked item, in source order.
        output: Source with match-statement markers stripped.
        checked: Number of marked items that were checked.

    """

    diagnostics: list[Diagnostic]
    output: str
    checked: int

    @property
    def ok(self) -> bool:
        """True when no marked item failed."""
        return not self.diagnostics


@dataclass
class FileReport:
    """Result of checking one file.

    Attributes:
        path: The file checked.
        diagnostics: Diagnostics found in the file.
        checked: Number of marked items checked.
        error: Read or parse failure, if the file could not be checked.

    """

    path: Path
    diagnostics: list[Diagnostic] = field(default_factory=list)
    checked: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the file was checked and nothing failed."""
        return self.error is None and not self.diagnostics

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "path": str(self.path),
            "checked": self.checked,
            "error": self.error,
            "diagnostics": [serialize_diagnostic(d) for d in self.diagnostics],
        }


def check_source(source: str, filename: str = "<string>") -> SourceReport:
    """Check every marked item in a module.

    Args:
        source: Python source text.
        filename: Name used in error messages.

    Returns:
        SourceReport with diagnostics and the stripped source.

    Raises:
        SourceParseError: If the source does not parse.
        UsageError: If any marker carries arguments.

    """
    parsed = parse_module(source, filename)
    diagnostics: list[Diagnostic] = []
    stripped: list[MarkerComment] = []

    for target in parsed.targets:
        if target.marker.name == SORTED:
            result = check_declaration(target.item, target.marker.args)
        else:
            result = check_function(target.item, target.marker.args)
            if isinstance(target.item, FunctionDecl) and isinstance(result.tree, FunctionDecl):
                stripped.extend(parsed.stripped_markers(target.item, result.tree))

        if result.diagnostic is not None:
            logger.debug("%s:%s: %s", filename, result.diagnostic.location, result.diagnostic.message)
            diagnostics.append(result.diagnostic)

    return SourceReport(
        diagnostics=diagnostics,
        output=strip_marker_comments(source, stripped),
        checked=len(parsed.targets),
    )


def _is_excluded(path: Path, root: Path, patterns: list[str]) -> bool:
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    candidates = [relative.as_posix(), *relative.parts[:-1]]
    return any(fnmatch.fnmatch(c, p) for c in candidates for p in patterns)


def iter_python_files(paths: Iterable[Path], config: SortCheckConfig) -> Iterator[Path]:
    """Expand files and directories into the Python files to check.

    Explicitly named files are always yielded; directory contents are
    filtered through ``config.exclude``.

    Args:
        paths: Files or directories.
        config: Tool configuration.

    Yields:
        Python file paths in sorted order per directory.

    """
    for path in paths:
        if path.is_dir():
            for file_path in sorted(path.rglob("*.py")):
                if _is_excluded(file_path, path, config.exclude):
                    logger.debug("Excluded %s", file_path)
                    continue
                yield file_path
        else:
            yield path


def check_file(path: Path, config: SortCheckConfig) -> FileReport:
    """Check a single file, capturing read and parse failures.

    Raises:
        UsageError: If any marker carries arguments.

    """
    try:
        source = path.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return FileReport(path=path, error=f"Cannot read file: {e}")

    try:
        report = check_source(source, str(path))
    except SourceParseError as e:
        logger.warning("Cannot parse %s: %s", path, e)
        location = f" (line {e.line})" if e.line is not None else ""
        return FileReport(path=path, error=f"{e}{location}")

    return FileReport(path=path, diagnostics=report.diagnostics, checked=report.checked)


def check_paths(paths: Iterable[Path], config: SortCheckConfig) -> list[FileReport]:
    """Check every Python file under the given paths.

    Args:
        paths: Files or directories.
        config: Tool configuration.

    Returns:
        One FileReport per file.

    Raises:
        UsageError: If any marker carries arguments. The run is aborted.

    """
    reports = [check_file(path, config) for path in iter_python_files(paths, config)]

    failed = sum(1 for r in reports if not r.ok)
    if failed:
        logger.info("Checked %d files, %d with problems", len(reports), failed)
    else:
        logger.debug("Checked %d files, all sorted", len(reports))
    return reports
