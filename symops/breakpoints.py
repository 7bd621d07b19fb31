"""
Piecewise linear time curves

A :class:`BreakpointCurve` maps an original time to a new time. It is defined by
two sequences of the same size, ``originalTimes`` and ``newTimes``. Segment ``k``
(``1 <= k < len(originalTimes)``) maps the range ``[originalTimes[k-1], originalTimes[k]]``
linearly to ``[newTimes[k-1], newTimes[k]]``
"""
from __future__ import annotations
import bisect
import itertools
import typing as _t

import numpy as np

from symops.common import F, asF, isRational, time_t
from symops._result import Result


if _t.TYPE_CHECKING:
    import bpf4


__all__ = (
    'BreakpointCurve',
    'BreakpointError',
    'checkBreakpoints',
    'asBreakpointCurve',
)


class BreakpointError(ValueError):
    """Raised when the breakpoints given to define a curve are invalid"""


def _aslist(times) -> list:
    if isinstance(times, np.ndarray):
        # tolist converts numpy scalars to python numbers
        return times.tolist()
    return list(times)


class BreakpointCurve:
    """
    A monotone piecewise linear curve, mapping original time to new time

    Use :func:`checkBreakpoints` or :func:`asBreakpointCurve` to create
    a curve from user input, these validate the given breakpoints

    Args:
        originalTimes: the x coords of the breakpoints, sorted
        newTimes: the y coords of the breakpoints, sorted

    Example
    ~~~~~~~

        >>> curve = asBreakpointCurve([0, 50, 100], [0, 100, 300])
        >>> curve.map(25), curve.map(75)
        (50.0, 200.0)
    """
    __slots__ = ('originalTimes', 'newTimes', '_factors')

    def __init__(self, originalTimes: list[time_t], newTimes: list[time_t]):
        self.originalTimes = originalTimes
        self.newTimes = newTimes
        self._factors: dict[bool, list] = {}

    def __repr__(self):
        return f"BreakpointCurve(originalTimes={self.originalTimes}, newTimes={self.newTimes})"

    def __len__(self) -> int:
        return len(self.originalTimes)

    def numSegments(self) -> int:
        return len(self.originalTimes) - 1

    def domain(self) -> tuple[time_t, time_t]:
        """The range of original times covered by this curve"""
        return self.originalTimes[0], self.originalTimes[-1]

    def isSorted(self) -> bool:
        """True if both original and new times are non-decreasing"""
        return (all(x0 <= x1 for x0, x1 in itertools.pairwise(self.originalTimes)) and
                all(y0 <= y1 for y0, y1 in itertools.pairwise(self.newTimes)))

    def sorted(self) -> BreakpointCurve:
        """
        A copy of this curve with both original and new times sorted

        Each array is sorted independently
        """
        return BreakpointCurve(sorted(self.originalTimes), sorted(self.newTimes))

    def factors(self, exact=False) -> list:
        """
        The slope of each segment

        The returned list has the same size as the curve, the factor of
        segment k is at index k. Index 0 holds a placeholder (0). A segment
        with no width (two equal original times) has a factor of 0

        Args:
            exact: if True, factors are calculated as rationals, otherwise
                they are floats

        Returns:
            the factor of each segment
        """
        if (factors := self._factors.get(exact)) is not None:
            return factors
        xs, ys = self.originalTimes, self.newTimes
        factors = [0]
        for k in range(1, len(xs)):
            dx = xs[k] - xs[k-1]
            if dx == 0:
                factors.append(0)
            elif exact:
                factors.append(asF(ys[k] - ys[k-1]) / asF(dx))
            else:
                factors.append(float(ys[k] - ys[k-1]) / float(dx))
        self._factors[exact] = factors
        return factors

    def factor(self, k: int, exact=False) -> float | F:
        """
        The slope of segment k

        Args:
            k: the segment index, 1 <= k < len(curve)
            exact: if True, calculate the factor as a rational

        Returns:
            ``(newTimes[k] - newTimes[k-1]) / (originalTimes[k] - originalTimes[k-1])``
        """
        if not 1 <= k < len(self.originalTimes):
            raise IndexError(f"Segment index out of range, expected 1 <= k < {len(self.originalTimes)}, got {k}")
        return self.factors(exact=exact)[k]

    def segmentIndex(self, t: time_t) -> int:
        """
        The segment used to map t

        This is the first segment k for which ``t <= originalTimes[k]``. Times
        outside the domain use the first or last segment
        """
        return bisect.bisect_left(self.originalTimes, t, lo=1, hi=len(self.originalTimes) - 1)

    def mapSegment(self, t: time_t, k: int, exact=False) -> float | F:
        """Map t using the segment k"""
        return self.newTimes[k-1] + self.factors(exact)[k] * (t - self.originalTimes[k-1])

    def map(self, t: time_t) -> float | F:
        """
        Evaluate this curve at t

        Times outside the domain are extrapolated from the first or last segment.
        If t is a rational the result is exact

        Args:
            t: the original time

        Returns:
            the new time corresponding to t
        """
        exact = isRational(t)
        return self.mapSegment(t, self.segmentIndex(t), exact=exact)

    def __call__(self, t: time_t) -> float | F:
        return self.map(t)

    def asbpf(self) -> bpf4.BpfInterface:
        """
        This curve as a linear bpf

        Useful for plotting or for evaluating many values at once via numpy.
        The original times must be strictly increasing
        """
        import bpf4
        return bpf4.core.Linear([float(x) for x in self.originalTimes],
                                [float(y) for y in self.newTimes])


def checkBreakpoints(originalTimes: _t.Sequence[time_t] | np.ndarray,
                     newTimes: _t.Sequence[time_t] | np.ndarray
                     ) -> Result[BreakpointCurve]:
    """
    Validate the breakpoints of a time curve

    Both sequences must have the same size and at least two elements. Sorting
    is not checked (see :meth:`BreakpointCurve.isSorted`)

    Args:
        originalTimes: the original times
        newTimes: the corresponding new times

    Returns:
        a Result holding the curve if the breakpoints are valid, or a failed
        Result with the reason otherwise
    """
    xs = _aslist(originalTimes)
    ys = _aslist(newTimes)
    if len(xs) != len(ys):
        return Result.Fail(f"originalTimes and newTimes should have the same size, "
                           f"got {len(xs)} and {len(ys)}", error=BreakpointError)
    if len(xs) < 2:
        return Result.Fail(f"originalTimes and newTimes should have at least 2 elements, "
                           f"got {len(xs)}", error=BreakpointError)
    return Result.Ok(BreakpointCurve(xs, ys))


def asBreakpointCurve(originalTimes: _t.Sequence[time_t] | np.ndarray,
                      newTimes: _t.Sequence[time_t] | np.ndarray
                      ) -> BreakpointCurve:
    """
    Create a BreakpointCurve, raising BreakpointError if the breakpoints are invalid

    Args:
        originalTimes: the original times
        newTimes: the corresponding new times

    Returns:
        the curve
    """
    return checkBreakpoints(originalTimes, newTimes).unwrap()
