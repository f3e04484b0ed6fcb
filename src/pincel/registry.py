"""Pattern registry for highlighting rules.

The registry holds every rule an engine matches against a line: plain
keywords, bounded regions (comments, strings) and bounded regions that
allow interpolated code inside them.

Thread Safety:
    PatternRegistry is immutable after creation. Safe to share between any
    number of Highlighter instances, which avoids recompiling the same
    language table once per open document.
    Use PatternRegistryBuilder for mutable construction.

Example:
    >>> registry = (
    ...     PatternRegistryBuilder()
    ...     .add_bounded("comment", "/*", "*/", escapable=False)
    ...     .add_keyword("keyword", r"\\bfn\\b")
    ...     .build()
    ... )
    >>> "comment" in registry
    True

Registration order matters: when two atoms start on the same column the
rule registered first wins, so register comment delimiters before
generic operator patterns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from pincel.errors import InvalidPatternError


class PatternRole(Enum):
    """What an atom of a pattern means to the tokenizer."""

    KEYWORD = auto()
    REGION_START = auto()
    REGION_END = auto()
    REGION_HYBRID = auto()  # start text == end text, toggles
    INTERPOLATION_START = auto()
    INTERPOLATION_END = auto()


@dataclass(frozen=True, slots=True)
class RegionDef:
    """Definition shared by the patterns of one bounded region.

    Attributes:
        id: Index of this region inside its registry.
        name: Tag name given to the region's tokens (e.g. "string").
        escapable: Escaped delimiters of this region are ignored.
        interpolating: The region has inner start/end markers.

    """

    id: int
    name: str
    escapable: bool
    interpolating: bool = False


@dataclass(frozen=True, slots=True)
class PatternDef:
    """A compiled matcher together with the role its matches play.

    Attributes:
        name: Tag name (keyword category or region name).
        matcher: Compiled regular expression.
        role: Role of every atom this pattern produces.
        region: Id of the owning RegionDef; None for keywords.
        order: Registration index, used to break ties between atoms
            that start on the same column.

    """

    name: str
    matcher: re.Pattern[str]
    role: PatternRole
    region: int | None
    order: int

    @property
    def pattern(self) -> str:
        """Source text of the matcher."""
        return self.matcher.pattern


class PatternRegistry:
    """Immutable registry of highlighting patterns.

    Use PatternRegistryBuilder to create instances.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_patterns", "_regions", "_names")

    def __init__(
        self,
        patterns: tuple[PatternDef, ...],
        regions: tuple[RegionDef, ...],
    ) -> None:
        self._patterns = patterns
        self._regions = regions
        self._names = frozenset(p.name for p in patterns)

    @property
    def patterns(self) -> tuple[PatternDef, ...]:
        """All patterns in registration order."""
        return self._patterns

    @property
    def regions(self) -> tuple[RegionDef, ...]:
        """All bounded regions, indexed by their id."""
        return self._regions

    @property
    def names(self) -> frozenset[str]:
        """Every tag name a run produced with this registry can carry."""
        return self._names

    def region(self, region_id: int) -> RegionDef:
        """Get the region definition for an id."""
        return self._regions[region_id]

    def is_escapable(self, region_id: int | None) -> bool:
        """Check whether escaped atoms of a region are ignored."""
        return region_id is not None and self._regions[region_id].escapable

    def builder(self) -> PatternRegistryBuilder:
        """Start a builder seeded with this registry's rules."""
        return PatternRegistryBuilder.from_registry(self)

    def __contains__(self, name: str) -> bool:
        """Support 'name in registry' syntax."""
        return name in self._names

    def __len__(self) -> int:
        """Number of registered patterns."""
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PatternRegistry(patterns={len(self._patterns)}, regions={len(self._regions)})"


class PatternRegistryBuilder:
    """Mutable builder for PatternRegistry.

    Every add_* method compiles its patterns immediately and raises
    InvalidPatternError without touching the builder when any of them is
    malformed, so a bad entry in a hand-written table can be reported and
    skipped.

    Example:
        >>> builder = PatternRegistryBuilder()
        >>> registry = (
        ...     builder.add_interpolating("string", '"', '"', "{", "}")
        ...     .add_keyword("digit", r"\\b\\d+\\b")
        ...     .build()
        ... )
    """

    __slots__ = ("_patterns", "_regions")

    def __init__(self) -> None:
        """Initialize empty builder."""
        self._patterns: list[PatternDef] = []
        self._regions: list[RegionDef] = []

    @classmethod
    def from_registry(cls, registry: PatternRegistry) -> PatternRegistryBuilder:
        """Create a builder holding the rules of an existing registry.

        Compiled matchers are reused, not recompiled.
        """
        builder = cls()
        builder._patterns.extend(registry.patterns)
        builder._regions.extend(registry.regions)
        return builder

    def add_keyword(self, name: str, pattern: str) -> PatternRegistryBuilder:
        """Register a single-line keyword pattern.

        If the pattern has capture groups, atoms cover the last group
        that took part in the match instead of the whole match, so
        ``r"([a-z_]\\w*)\\s*\\("`` highlights just a function name.

        Args:
            name: Tag name for matches (e.g. "keyword", "digit")
            pattern: Regular expression

        Returns:
            Self for chaining
        """
        matcher = _compile(name, pattern)
        self._append(name, matcher, PatternRole.KEYWORD, None)
        return self

    def add_bounded(
        self,
        name: str,
        start: str,
        end: str,
        escapable: bool = True,
        *,
        regex: bool = False,
    ) -> PatternRegistryBuilder:
        """Register a region that may span several lines.

        Args:
            name: Tag name for the region (e.g. "comment")
            start: Opening delimiter
            end: Closing delimiter; when equal to start the delimiter toggles
            escapable: Ignore delimiters preceded by an odd run of backslashes
            regex: Treat delimiters as regular expressions instead of literal text

        Returns:
            Self for chaining
        """
        compiled = _compile_delimiters(name, (start, end), regex)
        region = self._new_region(name, escapable, interpolating=False)
        self._append_delimiters(name, region, start == end, *compiled)
        return self

    def add_interpolating(
        self,
        name: str,
        start: str,
        end: str,
        inner_start: str,
        inner_end: str,
        escapable: bool = True,
        *,
        regex: bool = False,
    ) -> PatternRegistryBuilder:
        """Register a bounded region that allows interpolated code.

        Text between ``inner_start`` and ``inner_end`` is highlighted as
        ordinary code (keywords fire) rather than as part of the region.

        Args:
            name: Tag name for the region (e.g. "string")
            start: Opening delimiter
            end: Closing delimiter
            inner_start: Marker opening an interpolation (e.g. "{")
            inner_end: Marker closing an interpolation (e.g. "}")
            escapable: Ignore delimiters preceded by an odd run of backslashes
            regex: Treat delimiters as regular expressions

        Returns:
            Self for chaining
        """
        if inner_start == inner_end:
            raise InvalidPatternError(
                name, inner_start, "interpolation start and end markers must differ"
            )
        start_re, end_re, inner_start_re, inner_end_re = _compile_delimiters(
            name, (start, end, inner_start, inner_end), regex
        )
        region = self._new_region(name, escapable, interpolating=True)
        self._append_delimiters(name, region, start == end, start_re, end_re)
        self._append(name, inner_start_re, PatternRole.INTERPOLATION_START, region)
        self._append(name, inner_end_re, PatternRole.INTERPOLATION_END, region)
        return self

    def build(self) -> PatternRegistry:
        """Build immutable registry from registered rules."""
        return PatternRegistry(tuple(self._patterns), tuple(self._regions))

    def __len__(self) -> int:
        """Number of registered patterns."""
        return len(self._patterns)

    def _new_region(self, name: str, escapable: bool, *, interpolating: bool) -> int:
        region_id = len(self._regions)
        self._regions.append(RegionDef(region_id, name, escapable, interpolating))
        return region_id

    def _append_delimiters(
        self,
        name: str,
        region: int,
        hybrid: bool,
        start: re.Pattern[str],
        end: re.Pattern[str],
    ) -> None:
        if hybrid:
            self._append(name, start, PatternRole.REGION_HYBRID, region)
        else:
            self._append(name, start, PatternRole.REGION_START, region)
            self._append(name, end, PatternRole.REGION_END, region)

    def _append(
        self,
        name: str,
        matcher: re.Pattern[str],
        role: PatternRole,
        region: int | None,
    ) -> None:
        order = len(self._patterns)
        self._patterns.append(PatternDef(name, matcher, role, region, order))


def _compile(rule: str, pattern: str) -> re.Pattern[str]:
    if not pattern:
        raise InvalidPatternError(rule, pattern, "pattern is empty")
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(rule, pattern, str(exc)) from exc


def _compile_delimiters(
    rule: str, delimiters: tuple[str, ...], regex: bool
) -> list[re.Pattern[str]]:
    # Compile all before registering any, so a failure leaves no half-added region
    return [_compile(rule, text if regex or not text else re.escape(text)) for text in delimiters]
