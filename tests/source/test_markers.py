"""Tests for marker comment scanning."""

from __future__ import annotations

import textwrap

from sortcheck.source.markers import SORTED, SORTED_CHECK, scan_markers


class TestScanMarkers:
    """Tests for scan_markers."""

    def test_standalone_and_trailing(self) -> None:
        """Both marker placements are found with their columns."""
        source = textwrap.dedent(
            """\
            # @sorted
            class Color(Enum):
                RED = 1

            def f(x):  # @sorted.check
                pass
            """
        )

        index = scan_markers(source)

        assert [(m.name, m.line, m.standalone) for m in index.markers] == [
            (SORTED, 1, True),
            (SORTED_CHECK, 5, False),
        ]
        assert index.markers[1].column == 11

    def test_args_captured(self) -> None:
        """Parenthesized arguments are kept verbatim."""
        index = scan_markers("x = 1  # @sorted(reverse)\ny = 2  # @sorted()\n")

        first, second = index.markers
        assert first.args == "reverse"
        assert first.has_args
        assert second.args == ""
        assert not second.has_args

    def test_no_args(self) -> None:
        """Markers without parentheses have args None."""
        (marker,) = scan_markers("# @sorted\n").markers

        assert marker.args is None
        assert not marker.has_args

    def test_blank_args_normalized(self) -> None:
        """Whitespace inside the parentheses reads as an empty list."""
        (marker,) = scan_markers("x = 1  # @sorted(  )\n").markers

        assert marker.args == ""
        assert not marker.has_args

    def test_args_trimmed(self) -> None:
        """Surrounding whitespace is dropped from arguments."""
        (marker,) = scan_markers("x = 1  # @sorted( reverse )\n").markers

        assert marker.args == "reverse"

    def test_strings_ignored(self) -> None:
        """Marker text inside string literals is not a comment."""
        source = 'text = "# @sorted"\ndoc = """\n# @sorted\n"""\n'

        assert scan_markers(source).markers == ()

    def test_other_comments_not_markers(self) -> None:
        """Similar comments do not count."""
        source = "# sorted\n# @sorted_by name\n# @sortedcheck\n# @sorted please\n"

        index = scan_markers(source)

        assert index.markers == ()
        assert index.comment_lines == frozenset({1, 2, 3, 4})

    def test_flexible_spacing(self) -> None:
        """Whitespace around the marker is tolerated."""
        (marker,) = scan_markers("#@sorted   \n").markers

        assert marker.name == SORTED


class TestAttached:
    """Tests for MarkerIndex.attached."""

    def test_comment_block_above(self) -> None:
        """Markers in the comment run above a statement belong to it."""
        source = textwrap.dedent(
            """\
            # @sorted
            # Colors used by the renderer.
            class Color(Enum):
                RED = 1
            """
        )

        attached = scan_markers(source).attached(first_line=3, header_line=3)

        assert [m.line for m in attached] == [1]

    def test_blank_line_breaks_attachment(self) -> None:
        """A blank line separates a marker from the next statement."""
        source = "# @sorted\n\nclass Color(Enum):\n    RED = 1\n"

        assert scan_markers(source).attached(first_line=3, header_line=3) == []

    def test_trailing_on_header(self) -> None:
        """Trailing markers count only on the header line."""
        source = "class Color(Enum):  # @sorted\n    RED = 1  # @sorted\n"

        attached = scan_markers(source).attached(first_line=1, header_line=1)

        assert [m.line for m in attached] == [1]

    def test_above_decorators(self) -> None:
        """Markers above decorators attach via the first decorator line."""
        source = "# @sorted.check\n@cache\ndef f(x):\n    pass\n"

        attached = scan_markers(source).attached(first_line=2, header_line=3)

        assert [m.name for m in attached] == [SORTED_CHECK]

    def test_trailing_marker_of_previous_line_not_attached(self) -> None:
        """A trailing comment on the line above is not part of a comment run."""
        source = "x = 1  # @sorted\nclass Color(Enum):\n    RED = 1\n"

        assert scan_markers(source).attached(first_line=2, header_line=2) == []

    def test_decorator_lines(self) -> None:
        """Markers trailing a decorator or between decorators attach."""
        source = "@cache  # @sorted.check\n# @sorted\n@wraps(g)\ndef f(x):\n    pass\n"

        attached = scan_markers(source).attached(first_line=1, header_line=4)

        assert [(m.name, m.line) for m in attached] == [(SORTED_CHECK, 1), (SORTED, 2)]
