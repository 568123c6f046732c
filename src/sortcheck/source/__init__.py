"""Python source adapter: markers, abstract tree construction, rewriting.

Example usage:
    >>> from sortcheck.source import parse_module, strip_marker_comments
    >>> parsed = parse_module(source, "shapes.py")
    >>> for target in parsed.targets:
    ...     print(target.marker.name, target.item)

"""

from .markers import SORTED, SORTED_CHECK, MarkerComment, MarkerIndex, scan_markers
from .parser import ENUM_BASES, MarkedItem, ParsedModule, classify_pattern, parse_module
from .rewriter import strip_marker_comments

__all__ = [
    # markers
    "SORTED",
    "SORTED_CHECK",
    "MarkerComment",
    "MarkerIndex",
    "scan_markers",
    # parser
    "ENUM_BASES",
    "MarkedItem",
    "ParsedModule",
    "classify_pattern",
    "parse_module",
    # rewriter
    "strip_marker_comments",
]
