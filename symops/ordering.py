"""
Ordering of events and tracks

Each kind of entity has a fixed sort key. The keys are complete enough
to make the order deterministic: two events with the same key are
indistinguishable as far as ordering is concerned

===========  =======================================
kind         key
===========  =======================================
Note         (time, duration, pitch, velocity)
Pedal        (time, duration)
other        (time,)
Track        (isDrum, program, name, noteCount)
===========  =======================================

All sort functions sort in place
"""
from __future__ import annotations
import functools
import typing as _t

from symops.events import Note, Pedal, Track, Score


__all__ = (
    'noteKey',
    'pedalKey',
    'timeKey',
    'trackKey',
    'eventKey',
    'sortByTime',
    'sortNotes',
    'sortPedals',
    'sortTracks',
    'sortEvents',
    'sortTrack',
    'sortScore',
    'sort',
)


_T = _t.TypeVar('_T')


def noteKey(note: Note) -> tuple:
    return (note.time, note.duration, note.pitch, note.velocity)


def pedalKey(pedal: Pedal) -> tuple:
    return (pedal.time, pedal.duration)


def timeKey(event) -> tuple:
    return (event.time,)


def trackKey(track: Track) -> tuple:
    return (track.isDrum, track.program, track.name, track.noteCount())


def eventKey(event) -> tuple:
    """
    The sort key of an event, according to its kind
    """
    if isinstance(event, Note):
        return noteKey(event)
    elif isinstance(event, Pedal):
        return pedalKey(event)
    return timeKey(event)


def _keyfuncFor(events: list) -> _t.Callable[[_t.Any], tuple]:
    # All events within a list are of the same kind
    first = events[0]
    if isinstance(first, Note):
        return noteKey
    elif isinstance(first, Pedal):
        return pedalKey
    return timeKey


def sortByTime(events: list, reverse=False) -> None:
    """
    Sort events by time, in place

    Only time is taken into account, use :func:`sortEvents` to
    sort by the complete key of each kind
    """
    events.sort(key=lambda ev: ev.time, reverse=reverse)


def sortNotes(notes: list[Note], reverse=False) -> None:
    notes.sort(key=noteKey, reverse=reverse)


def sortPedals(pedals: list[Pedal], reverse=False) -> None:
    pedals.sort(key=pedalKey, reverse=reverse)


def sortTracks(tracks: list[Track], reverse=False) -> None:
    tracks.sort(key=trackKey, reverse=reverse)


def sortEvents(events: list, reverse=False) -> None:
    """
    Sort events in place, using the key corresponding to their kind

    Args:
        events: the events to sort. All events should be of the same kind
        reverse: if True, sort in descending order
    """
    if not events:
        return
    events.sort(key=_keyfuncFor(events), reverse=reverse)


def sortTrack(track: Track, reverse=False) -> None:
    """Sort all events within track, in place"""
    for events in track.eventLists():
        sortEvents(events, reverse=reverse)


def sortScore(score: Score, reverse=False) -> None:
    """
    Sort a score in place

    The events of each track and the global events are sorted by their
    kind key, the tracks themselves are sorted by the track key
    """
    for track in score.tracks:
        sortTrack(track, reverse=reverse)
    sortTracks(score.tracks, reverse=reverse)
    for events in score.globalLists():
        sortEvents(events, reverse=reverse)


def sort(data: list[_T],
         cmp: _t.Callable[[_T, _T], int] | None = None,
         key: _t.Callable[[_T], _t.Any] | None = None,
         reverse=False
         ) -> None:
    """
    Sort data in place, using either a comparison function or a key

    Args:
        data: the list to sort
        cmp: a function of the form ``(a, b) -> int``, returning a negative
            number if a < b, 0 if a == b and a positive number if a > b
        key: a key function, as in ``list.sort``. Only one of cmp or key
            can be given. If neither is given the elements themselves are compared
        reverse: if True, sort in descending order

    Example
    ~~~~~~~

        >>> notes = [Note(0, 10, pitch=60), Note(0, 10, pitch=72)]
        >>> sort(notes, cmp=lambda a, b: b.pitch - a.pitch)
        >>> [n.pitch for n in notes]
        [72, 60]
    """
    if cmp is not None:
        if key is not None:
            raise ValueError("Only one of cmp or key can be given")
        key = functools.cmp_to_key(cmp)
    data.sort(key=key, reverse=reverse)
