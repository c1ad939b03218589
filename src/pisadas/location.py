"""Source positions carried by tree nodes.

Provides SourceLocation, the start/end span a parser records for a node.
Rendered as a ``data-sourcepos`` attribute when the renderer is asked to.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Span of a node in the Markdown source.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number
        col_offset: Starting column
        end_lineno: Ending line number
        end_col_offset: Ending column

    Examples:
            >>> loc = SourceLocation(1, 1, 1, 6)
            >>> loc.to_sourcepos()
            '1:1-1:6'

            >>> SourceLocation.from_pairs(((2, 1), (4, 3)))
            SourceLocation(lineno=2, col_offset=1, end_lineno=4, end_col_offset=3)

    """

    lineno: int
    col_offset: int
    end_lineno: int
    end_col_offset: int

    def __str__(self) -> str:
        return self.to_sourcepos()

    def to_sourcepos(self) -> str:
        """Format as ``startLine:startCol-endLine:endCol``."""
        return f"{self.lineno}:{self.col_offset}-{self.end_lineno}:{self.end_col_offset}"

    def to_pairs(self) -> tuple[tuple[int, int], tuple[int, int]]:
        """Return ``((lineno, col_offset), (end_lineno, end_col_offset))``."""
        return ((self.lineno, self.col_offset), (self.end_lineno, self.end_col_offset))

    @classmethod
    def from_pairs(cls, pairs: Sequence[Sequence[int]]) -> SourceLocation:
        """Build from a pair of ``(line, column)`` pairs.

        Raises:
            ValueError: If ``pairs`` is not two pairs of integers
        """
        try:
            (lineno, col_offset), (end_lineno, end_col_offset) = pairs
        except (TypeError, ValueError) as exc:
            msg = f"Expected ((line, col), (line, col)), got {pairs!r}"
            raise ValueError(msg) from exc
        values = (lineno, col_offset, end_lineno, end_col_offset)
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            msg = f"Source positions must be integers, got {pairs!r}"
            raise ValueError(msg)
        return cls(lineno, col_offset, end_lineno, end_col_offset)

    @classmethod
    def coerce(
        cls, value: SourceLocation | Sequence[Sequence[int]] | None
    ) -> SourceLocation | None:
        """Accept a SourceLocation, a pair of pairs, or None."""
        if value is None or isinstance(value, SourceLocation):
            return value
        return cls.from_pairs(value)
