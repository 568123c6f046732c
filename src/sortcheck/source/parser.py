"""Build the abstract tree from Python source.

Only statements carrying a marker comment are converted. Marked statements
are looked for in the module body and, recursively, in class bodies. A
function marked ``@sorted.check`` is converted with its direct body
statements only; match statements nested deeper are not represented.
"""

from __future__ import annotations

import ast
import logging
import tokenize
from dataclasses import dataclass, field

from sortcheck.core.exceptions import SourceParseError, UsageError
from sortcheck.core.tree import (
    EnumDecl,
    FunctionDecl,
    IdentPattern,
    Item,
    MatchArm,
    MatchStmt,
    OtherItem,
    OtherStmt,
    PathPattern,
    Pattern,
    Statement,
    UnsupportedPattern,
    Variant,
    WildcardPattern,
)
from sortcheck.core.types import Location
from sortcheck.source.markers import SORTED, MarkerComment, MarkerIndex, scan_markers

logger = logging.getLogger(__name__)

# Base classes recognized as enum types (matched on the final dotted name)
ENUM_BASES: frozenset[str] = frozenset(
    {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag", "ReprEnum"}
)

_UNSUPPORTED_KINDS: dict[type[ast.pattern], str] = {
    ast.MatchSingleton: "singleton",
    ast.MatchSequence: "sequence",
    ast.MatchMapping: "mapping",
    ast.MatchOr: "or-pattern",
    ast.MatchStar: "star",
}


@dataclass(frozen=True, slots=True)
class MarkedItem:
    """A marked statement and the checker it asks for.

    Attributes:
        marker: The marker comment that selected the statement.
        item: The statement converted to the abstract tree.

    """

    marker: MarkerComment
    item: Item


@dataclass
class ParsedModule:
    """Abstract view of a module.

    Attributes:
        filename: Name used in diagnostics.
        targets: Marked items in source order.
        match_markers: Marker comments attached to each converted match
            statement, keyed by the statement's location.

    """

    filename: str
    targets: list[MarkedItem] = field(default_factory=list)
    match_markers: dict[Location, tuple[MarkerComment, ...]] = field(default_factory=dict)

    def stripped_markers(self, before: FunctionDecl, after: FunctionDecl) -> list[MarkerComment]:
        """List the marker comments removed between two versions of a function.

        Args:
            before: Function as parsed.
            after: Function returned by the match checker.

        Returns:
            Marker comments of match statements whose flag was cleared.

        """
        removed: list[MarkerComment] = []
        for old, new in zip(before.body, after.body, strict=True):
            if isinstance(old, MatchStmt) and isinstance(new, MatchStmt):
                if old.sorted and not new.sorted:
                    removed.extend(self.match_markers.get(old.location, ()))
        return removed


def _location(node: ast.AST) -> Location:
    return Location(node.lineno, node.col_offset)


def _dotted_name(node: ast.expr) -> tuple[str, ...] | None:
    """Split a Name/Attribute chain into identifiers, or None for other expressions."""
    if isinstance(node, ast.Name):
        return (node.id,)
    if isinstance(node, ast.Attribute):
        prefix = _dotted_name(node.value)
        if prefix is None:
            return None
        return (*prefix, node.attr)
    return None


def _last_segment_location(node: ast.expr) -> Location:
    """Locate the final identifier of a dotted name."""
    if (
        isinstance(node, ast.Attribute)
        and node.end_lineno is not None
        and node.end_col_offset is not None
    ):
        return Location(node.end_lineno, node.end_col_offset - len(node.attr))
    return _location(node)


def _source_text(source: str, node: ast.AST) -> str:
    return ast.get_source_segment(source, node) or ast.unparse(node)


def classify_pattern(case: ast.match_case, source: str = "") -> Pattern:
    """Classify one ``case`` clause into a pattern kind.

    Args:
        case: The match case node.
        source: Module source, used to capture the text of unsupported
            patterns.

    Returns:
        IdentPattern, PathPattern, WildcardPattern or UnsupportedPattern.

    """
    pattern = case.pattern
    location = _location(pattern)

    if case.guard is not None:
        text = f"{_source_text(source, pattern)} if {_source_text(source, case.guard)}"
        return UnsupportedPattern("guard", text, location)

    if isinstance(pattern, ast.MatchAs):
        if pattern.pattern is None and pattern.name is None:
            return WildcardPattern(location)
        if pattern.pattern is None and pattern.name is not None:
            return IdentPattern(pattern.name, location)
        return UnsupportedPattern("as-pattern", _source_text(source, pattern), location)

    if isinstance(pattern, ast.MatchValue):
        segments = _dotted_name(pattern.value)
        if segments is None:
            return UnsupportedPattern("literal", _source_text(source, pattern), location)
        return PathPattern(segments, location, _last_segment_location(pattern.value))

    if isinstance(pattern, ast.MatchClass):
        segments = _dotted_name(pattern.cls)
        if segments is None:
            return UnsupportedPattern("class", _source_text(source, pattern), location)
        return PathPattern(segments, location, _last_segment_location(pattern.cls))

    kind = _UNSUPPORTED_KINDS.get(type(pattern), type(pattern).__name__)
    return UnsupportedPattern(kind, _source_text(source, pattern), location)


def _is_enum_class(node: ast.ClassDef) -> bool:
    for base in node.bases:
        segments = _dotted_name(base)
        if segments and (segments[-1] in ENUM_BASES or segments[-1].endswith("Enum")):
            return True
    return False


def _is_member_name(name: str) -> bool:
    # _sunder_ and __dunder__ names are enum settings, not members
    return not (name.startswith("_") and name.endswith("_"))


def _enum_variants(node: ast.ClassDef) -> tuple[Variant, ...]:
    variants: list[Variant] = []
    for stmt in node.body:
        target: ast.expr | None = None
        if isinstance(stmt, ast.Assign) and len(stmt.targets) == 1:
            target = stmt.targets[0]
        elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
            target = stmt.target
        if isinstance(target, ast.Name) and _is_member_name(target.id):
            variants.append(Variant(target.id, _location(target)))
    return tuple(variants)


def _describe(node: ast.stmt) -> OtherItem:
    if isinstance(node, ast.ClassDef):
        return OtherItem("class", node.name, _location(node))
    if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
        return OtherItem("function", node.name, _location(node))
    return OtherItem(type(node).__name__.lower(), None, _location(node))


class _ModuleBuilder:
    """Walks a parsed module and collects marked items."""

    def __init__(self, source: str, filename: str, index: MarkerIndex) -> None:
        self._source = source
        self._index = index
        self.module = ParsedModule(filename=filename)

    def visit_body(self, body: list[ast.stmt]) -> None:
        for node in body:
            decorators = getattr(node, "decorator_list", [])
            first_line = min([d.lineno for d in decorators] + [node.lineno])
            for marker in self._index.attached(first_line, node.lineno):
                self.module.targets.append(MarkedItem(marker, self._convert(marker, node)))
            if isinstance(node, ast.ClassDef):
                self.visit_body(node.body)

    def _convert(self, marker: MarkerComment, node: ast.stmt) -> Item:
        if marker.name == SORTED:
            if isinstance(node, ast.ClassDef) and _is_enum_class(node):
                return EnumDecl(node.name, _enum_variants(node), _location(node))
            return _describe(node)

        if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
            return FunctionDecl(node.name, self._function_body(node), _location(node))
        return _describe(node)

    def _function_body(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> tuple[Statement, ...]:
        body: list[Statement] = []
        for stmt in node.body:
            if not isinstance(stmt, ast.Match):
                body.append(OtherStmt(_location(stmt)))
                continue

            markers = tuple(
                m for m in self._index.attached(stmt.lineno, stmt.lineno) if m.name == SORTED
            )
            for marker in markers:
                if marker.has_args:
                    raise UsageError(
                        f"@sorted on a match statement takes no arguments, got: {marker.args}",
                        args_text=marker.args,
                    )

            match_stmt = MatchStmt(
                arms=tuple(
                    MatchArm(classify_pattern(case, self._source), _location(case.pattern))
                    for case in stmt.cases
                ),
                location=_location(stmt),
                sorted=bool(markers),
            )
            if markers:
                self.module.match_markers[match_stmt.location] = markers
            body.append(match_stmt)
        return tuple(body)


def parse_module(source: str, filename: str = "<string>") -> ParsedModule:
    """Parse Python source into the abstract tree of its marked items.

    Args:
        source: Python source text.
        filename: Name used in error messages.

    Returns:
        ParsedModule with one MarkedItem per attached marker.

    Raises:
        SourceParseError: If the source does not tokenize or parse.
        UsageError: If a match-statement marker carries arguments.

    """
    try:
        tree = ast.parse(source, filename=filename)
        index = scan_markers(source)
    except SyntaxError as e:
        raise SourceParseError(f"Invalid Python syntax: {e.msg}", filename, e.lineno) from e
    except tokenize.TokenError as e:
        raise SourceParseError(f"Cannot tokenize source: {e.args[0]}", filename) from e

    builder = _ModuleBuilder(source, filename, index)
    builder.visit_body(tree.body)

    logger.debug(
        "Parsed %s: %d markers, %d marked items",
        filename,
        len(index.markers),
        len(builder.module.targets),
    )
    return builder.module
