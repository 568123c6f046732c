"""Remove marker comments from source text.

A standalone marker line is dropped entirely. A trailing marker is cut
together with the whitespace before it. Removing markers that are already
gone is a no-op.
"""

from __future__ import annotations

import io
from collections.abc import Iterable

from sortcheck.source.markers import MARKER_PATTERN, MarkerComment


def _line_ending(line: str) -> str:
    return line[len(line.rstrip("\r\n")) :]


def strip_marker_comments(source: str, markers: Iterable[MarkerComment]) -> str:
    """Return ``source`` without the given marker comments.

    Args:
        source: Source text the markers were scanned from.
        markers: Markers to remove.

    Returns:
        Rewritten source text.

    """
    # Same line numbering as scan_markers; str.splitlines also breaks on "\x0c"
    lines = io.StringIO(source).readlines()
    drop: set[int] = set()

    for marker in markers:
        index = marker.line - 1
        if index >= len(lines):
            continue
        line = lines[index]
        comment = line[marker.column :].rstrip("\r\n")
        # Source changed since scanning; leave the line alone
        if not MARKER_PATTERN.match(comment):
            continue
        if marker.standalone:
            drop.add(index)
        else:
            lines[index] = line[: marker.column].rstrip() + _line_ending(line)

    return "".join(line for i, line in enumerate(lines) if i not in drop)
