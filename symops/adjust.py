"""
Time remapping of event sequences through a piecewise linear curve

The curve is given as two sequences, ``originalTimes`` and ``newTimes``
(see :class:`~symops.breakpoints.BreakpointCurve`). Typical uses are applying
a tempo curve to a performance or converting between time units.

Events whose start lies before the first original time, or whose end lies
after the last original time, are dropped.

Events with a duration are remapped by mapping both their start and their end
through the segment each falls in. A note starting before a breakpoint and ending
after it is thus stretched by each segment according to the part of the note
within it, instead of scaling the whole duration by the factor of the segment
where the note starts.

Numeric policy
~~~~~~~~~~~~~~

* integer times (ticks): factors are floats and the results are converted back
  to int according to ``config['adjustTime.intRounding']``
* rational times: exact
* float times: float
"""
from __future__ import annotations
import bisect
import copy
import math
import typing as _t

from symops.common import getLogger, isIntegral, isRational, time_t
from symops.config import config
from symops.events import Track, Score, hasDuration, eventEnd, checkTimeEvents
from symops.breakpoints import BreakpointCurve, asBreakpointCurve
from symops.ordering import sortByTime


__all__ = (
    'adjustTime',
    'adjustTimeSorted',
)


logger = getLogger('symops')

_T = _t.TypeVar('_T')


def _roundingFunc(rounding: str) -> _t.Callable[[_t.Any], int]:
    if rounding == 'round':
        return round
    elif rounding == 'trunc':
        return math.trunc
    raise ValueError(f"Unknown rounding mode '{rounding}', expected one of 'round', 'trunc'")


def _trimToDomain(events: _t.Sequence[_T], curve: BreakpointCurve) -> _t.Sequence[_T]:
    """
    Select the events within the domain of the curve

    events must be sorted by time
    """
    x0, x1 = curve.domain()
    n = len(events)
    begin = 0 if events[0].time >= x0 else bisect.bisect_left(events, x0, key=lambda ev: ev.time)
    # events are sorted by start, not by end: the window is bounded by start
    # time and events ending past the domain are filtered out afterwards
    if events[-1].time <= x1:
        end = n
    else:
        end = bisect.bisect_right(events, x1, lo=begin, key=lambda ev: ev.time)
    if end <= begin:
        return []
    window = events[begin:end]
    if any(eventEnd(ev) > x1 for ev in window):
        window = [ev for ev in window if eventEnd(ev) <= x1]
    if len(window) < n:
        logger.debug("adjustTime: %d of %d events outside of the curve domain %s",
                     n - len(window), n, (x0, x1))
    return window


def _adjustEvents(events: _t.Sequence[_T], curve: BreakpointCurve) -> list[_T]:
    # events and curve are assumed to be sorted
    if not events:
        return []
    checkTimeEvents(events)

    window = _trimToDomain(events, curve)
    if not window:
        return []

    first = window[0]
    hasdur = hasDuration(first)
    xs = curve.originalTimes
    ys = curve.newTimes
    last = len(xs) - 1
    factors = curve.factors(exact=isRational(first.time))
    cast = _roundingFunc(config['adjustTime.intRounding']) if isIntegral(first.time) else None

    newevents = [copy.copy(ev) for ev in window]

    if hasdur:
        # First pass: map the end of each event. The mapped end is stored
        # in the duration field until the start is also mapped. Events are
        # visited in order of their end time so that the pivot only moves forward
        newevents.sort(key=eventEnd)
        pivot = 1
        for ev in newevents:
            t = ev.time + ev.duration
            while pivot < last and t > xs[pivot]:
                pivot += 1
            newend = ys[pivot-1] + factors[pivot] * (t - xs[pivot-1])
            ev.duration = cast(newend) if cast else newend
        newevents.sort(key=lambda ev: (ev.time, ev.duration))

    pivot = 1
    for ev in newevents:
        t = ev.time
        while pivot < last and t > xs[pivot]:
            pivot += 1
        newtime = ys[pivot-1] + factors[pivot] * (t - xs[pivot-1])
        ev.time = cast(newtime) if cast else newtime
        if hasdur:
            ev.duration -= ev.time

    assert all(a.time <= b.time for a, b in zip(newevents, newevents[1:])), \
        f"Remapped events are not sorted: {newevents}"
    return newevents


def _adjustTrack(track: Track, curve: BreakpointCurve) -> Track:
    return Track(name=track.name,
                 program=track.program,
                 isDrum=track.isDrum,
                 notes=_adjustEvents(track.notes, curve),
                 controls=_adjustEvents(track.controls, curve),
                 pitchBends=_adjustEvents(track.pitchBends, curve),
                 pedals=_adjustEvents(track.pedals, curve))


def _adjustScore(score: Score, curve: BreakpointCurve) -> Score:
    return Score(ticksPerQuarter=score.ticksPerQuarter,
                 tracks=[_adjustTrack(track, curve) for track in score.tracks],
                 timeSignatures=_adjustEvents(score.timeSignatures, curve),
                 keySignatures=_adjustEvents(score.keySignatures, curve),
                 tempos=_adjustEvents(score.tempos, curve),
                 lyrics=_adjustEvents(score.lyrics, curve),
                 markers=_adjustEvents(score.markers, curve))


def _sortedCopy(events: _t.Sequence[_T]) -> list[_T]:
    out = list(events)
    sortByTime(out)
    return out


def _sortedTrack(track: Track) -> Track:
    return Track(name=track.name, program=track.program, isDrum=track.isDrum,
                 notes=_sortedCopy(track.notes),
                 controls=_sortedCopy(track.controls),
                 pitchBends=_sortedCopy(track.pitchBends),
                 pedals=_sortedCopy(track.pedals))


def adjustTimeSorted(events: _t.Sequence[_T],
                     originalTimes: _t.Sequence[time_t],
                     newTimes: _t.Sequence[time_t]
                     ) -> list[_T]:
    """
    Remap the time of events which are already sorted

    Like :func:`adjustTime` with ``sorted=True``, for a sequence of events.
    Events must be sorted by time and both originalTimes and newTimes
    must be sorted in ascending order

    Args:
        events: the events to remap
        originalTimes: the x coords of the time curve
        newTimes: the y coords of the time curve

    Returns:
        a list with the remapped events. Events are copies, the input
        is not modified

    Raises:
        BreakpointError: if originalTimes and newTimes differ in size or have
            less than two elements
    """
    curve = asBreakpointCurve(originalTimes, newTimes)
    return _adjustEvents(events, curve)


@_t.overload
def adjustTime(obj: Score, originalTimes: _t.Sequence[time_t], newTimes: _t.Sequence[time_t],
               sorted: bool | None = None) -> Score: ...


@_t.overload
def adjustTime(obj: Track, originalTimes: _t.Sequence[time_t], newTimes: _t.Sequence[time_t],
               sorted: bool | None = None) -> Track: ...


@_t.overload
def adjustTime(obj: _t.Sequence[_T], originalTimes: _t.Sequence[time_t], newTimes: _t.Sequence[time_t],
               sorted: bool | None = None) -> list[_T]: ...


def adjustTime(obj, originalTimes, newTimes, sorted=None):
    """
    Remap the time of events through a piecewise linear curve

    Each event time ``t`` within the segment ``k`` (the first k for which
    ``t <= originalTimes[k]``) is mapped to::

        newTimes[k-1] + factor[k] * (t - originalTimes[k-1])

    with ``factor[k] = (newTimes[k] - newTimes[k-1]) / (originalTimes[k] - originalTimes[k-1])``.
    For events with a duration the end is mapped in the same way and the new
    duration is the difference between the mapped end and the mapped start.

    Events starting before ``originalTimes[0]`` or ending after ``originalTimes[-1]``
    are not included in the result

    Args:
        obj: a list of events, a Track or a Score. The input is never modified
        originalTimes: the x coords of the time curve
        newTimes: the y coords of the time curve. Must have the same size as
            originalTimes, at least 2
        sorted: if True, assume that events, originalTimes and newTimes are sorted.
            Otherwise sorted copies are used. If None, use
            ``config['adjustTime.assumeSorted']``

    Returns:
        the remapped events, sorted by time, or a new Track/Score with
        all its events remapped. A Track or Score keeps its metadata
        (name, program, ticks per quarter, etc.)

    Raises:
        BreakpointError: if originalTimes and newTimes differ in size or have
            less than two elements

    Example
    ~~~~~~~

        >>> from symops import *
        >>> notes = [Note(time=40, duration=20)]
        >>> adjustTime(notes, [0, 50, 100], [0, 100, 300])
        [Note(time=80, duration=60, pitch=60, velocity=64)]
    """
    curve = asBreakpointCurve(originalTimes, newTimes)
    if not isinstance(obj, (Track, Score)):
        checkTimeEvents(obj)
    if sorted is None:
        sorted = config['adjustTime.assumeSorted']
    if not sorted:
        curve = curve.sorted()
        if isinstance(obj, Score):
            obj = Score(ticksPerQuarter=obj.ticksPerQuarter,
                        tracks=[_sortedTrack(track) for track in obj.tracks],
                        timeSignatures=_sortedCopy(obj.timeSignatures),
                        keySignatures=_sortedCopy(obj.keySignatures),
                        tempos=_sortedCopy(obj.tempos),
                        lyrics=_sortedCopy(obj.lyrics),
                        markers=_sortedCopy(obj.markers))
        elif isinstance(obj, Track):
            obj = _sortedTrack(obj)
        else:
            obj = _sortedCopy(obj)

    if isinstance(obj, Score):
        return _adjustScore(obj, curve)
    elif isinstance(obj, Track):
        return _adjustTrack(obj, curve)
    return _adjustEvents(obj, curve)
