"""Marker comment scanning.

Markers are pragma comments that opt a statement into checking:

    # @sorted
    class Color(Enum):
        ...

    def render(shape):  # @sorted.check
        match shape:  # @sorted
            ...

A marker belongs to a statement when it sits on the statement's header
line or on one of its decorator lines (trailing, or on its own line between
decorators), or in the run of comment-only lines directly above the
statement and its decorators. A blank line breaks the run.

Comments are found with ``tokenize`` so text inside string literals never
counts as a marker.
"""

from __future__ import annotations

import io
import logging
import re
import tokenize
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SORTED = "sorted"
SORTED_CHECK = "sorted.check"

# "# @sorted", "# @sorted.check", optionally followed by "(args)"
MARKER_PATTERN = re.compile(
    r"^#\s*@(?P<name>sorted(?:\.check)?)\s*(?:\((?P<args>[^)]*)\))?\s*$"
)


@dataclass(frozen=True, slots=True)
class MarkerComment:
    """A marker comment found in source.

    Attributes:
        name: "sorted" or "sorted.check".
        args: Text inside the parentheses with surrounding whitespace
            removed; None when there were none.
        line: 1-based line of the comment.
        column: 0-based character column where the comment starts.
        standalone: True when the comment is the only thing on its line.

    """

    name: str
    args: str | None
    line: int
    column: int
    standalone: bool

    @property
    def has_args(self) -> bool:
        """True when a non-empty argument list was written."""
        return bool(self.args)


@dataclass(frozen=True, slots=True)
class MarkerIndex:
    """All markers of a module plus the lines that hold only a comment.

    Attributes:
        markers: Markers in source order.
        comment_lines: Lines whose only token is a comment.

    """

    markers: tuple[MarkerComment, ...]
    comment_lines: frozenset[int]

    def attached(self, first_line: int, header_line: int) -> list[MarkerComment]:
        """Return the markers belonging to a statement.

        Args:
            first_line: First line of the statement, decorators included.
            header_line: Line of the statement keyword (``class``, ``def``,
                ``match``). Markers on any line from ``first_line`` through
                this one attach, standalone or trailing.

        Returns:
            Attached markers in source order.

        """
        lines = set(range(first_line, header_line + 1))
        line = first_line - 1
        while line in self.comment_lines:
            lines.add(line)
            line -= 1

        return [
            marker
            for marker in self.markers
            if marker.line in lines
        ]


def scan_markers(source: str) -> MarkerIndex:
    """Tokenize source and collect marker comments.

    Args:
        source: Python source text.

    Returns:
        MarkerIndex for the source.

    Raises:
        tokenize.TokenError: If the source cannot be tokenized.
        SyntaxError: If tokenizing hits an indentation error.

    """
    markers: list[MarkerComment] = []
    comment_lines: set[int] = set()

    for tok in tokenize.generate_tokens(io.StringIO(source).readline):
        if tok.type != tokenize.COMMENT:
            continue

        line, column = tok.start
        standalone = not tok.line[:column].strip()
        if standalone:
            comment_lines.add(line)

        match = MARKER_PATTERN.match(tok.string)
        if match is None:
            continue

        args = match.group("args")
        marker = MarkerComment(
            name=match.group("name"),
            args=args.strip() if args is not None else None,
            line=line,
            column=column,
            standalone=standalone,
        )
        logger.debug("Found marker @%s at line %d", marker.name, line)
        markers.append(marker)

    return MarkerIndex(markers=tuple(markers), comment_lines=frozenset(comment_lines))
