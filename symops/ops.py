"""
Selection, clamping and extent of event sequences

Functions here never modify their input, with the exception of
:func:`clampDurationInplace`. Functions accepting a :class:`~symops.events.Track`
or a :class:`~symops.events.Score` return a new object
"""
from __future__ import annotations
import copy
import typing as _t

from symops.common import time_t
from symops.events import Track, Score, hasDuration, eventEnd, checkTimeEvents


__all__ = (
    'filterEvents',
    'clip',
    'clampDuration',
    'clampDurationInplace',
    'start',
    'end',
)


_T = _t.TypeVar('_T')


def filterEvents(events: _t.Sequence[_T], predicate: _t.Callable[[_T], bool]) -> list[_T]:
    """
    Select the events for which predicate is True

    Args:
        events: the events to filter
        predicate: a function ``(event) -> bool``

    Returns:
        a new list with the selected events, in their original order
    """
    if not events:
        return []
    return [ev for ev in events if predicate(ev)]


def _clipEvents(events: list, start: time_t, end: time_t, clipEnd: bool) -> list:
    checkTimeEvents(events)
    if clipEnd and events and hasDuration(events[0]):
        return filterEvents(events, lambda ev: ev.time >= start and ev.time + ev.duration <= end)
    return filterEvents(events, lambda ev: start <= ev.time < end)


def _clipTrack(track: Track, start: time_t, end: time_t, clipEnd: bool) -> Track:
    return Track(name=track.name,
                 program=track.program,
                 isDrum=track.isDrum,
                 notes=_clipEvents(track.notes, start, end, clipEnd),
                 controls=_clipEvents(track.controls, start, end, clipEnd),
                 pitchBends=_clipEvents(track.pitchBends, start, end, clipEnd),
                 pedals=_clipEvents(track.pedals, start, end, clipEnd))


def clip(obj: list[_T] | Track | Score, start: time_t, end: time_t, clipEnd=False
         ) -> list[_T] | Track | Score:
    """
    Select events within the time range [start, end)

    Args:
        obj: a list of events, a Track or a Score
        start: start time of the clip window
        end: end time of the clip window (exclusive)
        clipEnd: only relevant for events with a duration. If True, only
            events fully contained within the window are kept
            (``time >= start and time + duration <= end``). Otherwise
            events are selected by their start time only and their duration
            might extend past ``end``

    Returns:
        a new list, Track or Score with the selected events. Events are not
        copied, the returned list shares them with the original
    """
    if isinstance(obj, Track):
        return _clipTrack(obj, start, end, clipEnd)
    elif isinstance(obj, Score):
        return Score(ticksPerQuarter=obj.ticksPerQuarter,
                     tracks=[_clipTrack(track, start, end, clipEnd) for track in obj.tracks],
                     timeSignatures=_clipEvents(obj.timeSignatures, start, end, clipEnd),
                     keySignatures=_clipEvents(obj.keySignatures, start, end, clipEnd),
                     tempos=_clipEvents(obj.tempos, start, end, clipEnd),
                     lyrics=_clipEvents(obj.lyrics, start, end, clipEnd),
                     markers=_clipEvents(obj.markers, start, end, clipEnd))
    return _clipEvents(obj, start, end, clipEnd)


def clampDurationInplace(events: list[_T], mindur: time_t, maxdur: time_t) -> list[_T]:
    """
    Clamp the duration of each event between mindur and maxdur, in place

    Args:
        events: the events to modify. They must have a duration
        mindur: min. duration
        maxdur: max. duration

    Returns:
        events itself
    """
    checkTimeEvents(events, needsDuration=True)
    if mindur > maxdur:
        raise ValueError(f"mindur should be <= maxdur, got {mindur=}, {maxdur=}")
    for ev in events:
        if ev.duration < mindur:
            ev.duration = mindur
        elif ev.duration > maxdur:
            ev.duration = maxdur
    return events


def clampDuration(events: _t.Sequence[_T], mindur: time_t, maxdur: time_t) -> list[_T]:
    """
    Like :func:`clampDurationInplace` but returns a copy of the events
    """
    return clampDurationInplace([copy.copy(ev) for ev in events], mindur, maxdur)


def _start(events: _t.Sequence) -> time_t | None:
    return min(ev.time for ev in events) if events else None


def _end(events: _t.Sequence) -> time_t | None:
    return max(eventEnd(ev) for ev in events) if events else None


def _lists(obj: Track | Score) -> list[list]:
    if isinstance(obj, Track):
        return obj.eventLists()
    lists = obj.globalLists()
    for track in obj.tracks:
        lists.extend(track.eventLists())
    return lists


def start(obj: _t.Sequence | Track | Score) -> time_t:
    """
    The earliest time of the given events

    Args:
        obj: a list of events, a Track or a Score

    Returns:
        the min. time of all events, or 0 if there are no events
    """
    if isinstance(obj, (Track, Score)):
        starts = [t for events in _lists(obj) if (t := _start(events)) is not None]
        return min(starts) if starts else 0
    checkTimeEvents(obj)
    t = _start(obj)
    return 0 if t is None else t


def end(obj: _t.Sequence | Track | Score) -> time_t:
    """
    The latest end time of the given events

    For events with a duration the end time is ``time + duration``,
    otherwise it is the time of the event

    Args:
        obj: a list of events, a Track or a Score

    Returns:
        the max. end time of all events, or 0 if there are no events
    """
    if isinstance(obj, (Track, Score)):
        ends = [t for events in _lists(obj) if (t := _end(events)) is not None]
        return max(ends) if ends else 0
    checkTimeEvents(obj)
    t = _end(obj)
    return 0 if t is None else t
