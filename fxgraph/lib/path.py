from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Generic, Hashable, Iterator, Tuple, TypeVar

from fxgraph.lib.rates import RateSource

N = TypeVar("N", bound=Hashable)


class InvalidEdgeWeightError(ValueError):
    """Raised when a rate is unusable: NaN or infinite, or a zero reference rate."""


@dataclass(frozen=True)
class Segment(Generic[N]):
    """
    One traversed edge inside a :class:`Path`.

    Attributes:
        start (N): Node the segment leaves.
        end (N): Node the segment arrives at.
        rate (float): Multiplier applied when traversing the segment.

    Raises:
        InvalidEdgeWeightError: If ``rate`` is NaN or infinite.
    """

    start: N
    end: N
    rate: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.rate):
            raise InvalidEdgeWeightError(
                f"Segment {self.start!r}->{self.end!r} rate may not be NaN or "
                f"infinite (got {self.rate})."
            )

    def __str__(self) -> str:
        return f"[{self.start} -> {self.end} ({self.rate:.3f})]"


class Path(Generic[N]):
    """
    An immutable path between ``start`` and ``end``.

    Alongside its segments a path caches two running products:

    - ``rate``: product of every segment rate, seeded with
      ``1 / rate_to_reference_unit(start)`` so paths leaving different nodes
      are expressed on a common reference-unit basis.
    - ``cost``: ``rate`` rescaled by the reference factor of the most recently
      traversed edge. A cost above 1 means the path ends worth more than it
      started; ``cost - 1`` is the profit.

    New paths are obtained with :meth:`extend`; the receiver is never modified.

    Args:
        start: The node the path begins at.
        start_source: Rate source whose ``rate_to_reference_unit`` prices ``start``.

    Raises:
        InvalidEdgeWeightError: If the reference rate of ``start`` is zero,
            NaN or infinite.
    """

    def __init__(self, start: N, start_source: RateSource) -> None:
        reference = start_source.rate_to_reference_unit()
        if reference == 0 or not math.isfinite(reference):
            raise InvalidEdgeWeightError(
                f"Reference rate of {start!r} must be finite and non-zero "
                f"(got {reference})."
            )
        self._start = start
        self._start_source = start_source
        self._segments: Tuple[Segment[N], ...] = ()
        self._rate: float = 1 / reference
        self._cost: float = 1.0

    def extend(self, new_end: N, source: RateSource) -> Path[N]:
        """
        Return a new path equal to this one plus a trailing segment to ``new_end``.

        Args:
            new_end: Node the appended segment arrives at.
            source: Rate source of the traversed edge.

        Returns:
            A new Path; ``self`` is left unchanged.

        Raises:
            InvalidEdgeWeightError: If ``source.rate()`` is not finite.
        """
        edge_rate = source.rate()
        segment = Segment(self.end, new_end, edge_rate)

        extended: Path[N] = Path.__new__(Path)
        extended._start = self._start
        extended._start_source = self._start_source
        extended._segments = self._segments + (segment,)
        extended._rate = self._rate * edge_rate
        extended._cost = extended._rate * source.rate_to_reference_unit()
        return extended

    @property
    def rate(self) -> float:
        """Total product of the rates along this path."""
        return self._rate

    @property
    def cost(self) -> float:
        """Cumulative rate rescaled into reference-unit terms."""
        return self._cost

    @property
    def start(self) -> N:
        return self._start

    @property
    def end(self) -> N:
        """Last node of the path; ``start`` when the path has no segments."""
        if not self._segments:
            return self._start
        return self._segments[-1].end

    @property
    def segments(self) -> Tuple[Segment[N], ...]:
        return self._segments

    @cached_property
    def nodes_seq(self) -> Tuple[N, ...]:
        """
        Return the ordered node sequence: ``start`` followed by every segment end.
        """
        return (self._start,) + tuple(segment.end for segment in self._segments)

    def __iter__(self) -> Iterator[Segment[N]]:
        """Iterate over the segments in order; each call yields a fresh iterator."""
        return iter(self._segments)

    def __len__(self) -> int:
        """Return the number of segments."""
        return len(self._segments)

    def __eq__(self, other: Any) -> bool:
        """
        Two paths are equal iff their segment sequences are equal.

        When both paths are empty their starts must also match.
        """
        if self is other:
            return True
        if not isinstance(other, Path):
            return NotImplemented
        if not self._segments and not other._segments:
            return self._start == other._start
        return self._segments == other._segments

    def __hash__(self) -> int:
        # The first segment always starts at ``start``, so this agrees with __eq__.
        return hash((self._start, self._segments))

    def __str__(self) -> str:
        parts = [str(self._start)]
        for segment in self._segments:
            parts.append(f" =({segment.rate:.3f})=> {segment.end}")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Path({self}, cost={self._cost})"
