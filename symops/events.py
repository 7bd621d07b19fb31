"""
Event records handled by symops

Every event exposes a ``time`` attribute. Notes and pedals also have a
``duration``. The unit of ``time`` and ``duration`` is shared by all events
within a sequence and can be an int (ticks), a float (seconds or quarters)
or a rational (:class:`~symops.common.F`).

Any object fulfilling the :class:`HasTime` (or :class:`HasDuration`) protocol
can be used with the operations in this package, the records defined here
are just the ones used by :class:`Track` and :class:`Score`
"""
from __future__ import annotations
from dataclasses import dataclass, field
import typing as _t

from symops.common import time_t


__all__ = (
    'HasTime',
    'HasDuration',
    'Note',
    'Pedal',
    'ControlChange',
    'PitchBend',
    'Tempo',
    'TimeSignature',
    'KeySignature',
    'TextMeta',
    'Track',
    'Score',
    'hasDuration',
    'eventEnd',
    'checkTimeEvents',
)


@_t.runtime_checkable
class HasTime(_t.Protocol):
    time: time_t


@_t.runtime_checkable
class HasDuration(HasTime, _t.Protocol):
    duration: time_t


@dataclass
class Note:
    time: time_t
    duration: time_t
    pitch: int = 60
    velocity: int = 64


@dataclass
class Pedal:
    time: time_t
    duration: time_t


@dataclass
class ControlChange:
    time: time_t
    number: int
    value: int


@dataclass
class PitchBend:
    time: time_t
    value: int
    "Pitch bend value, -8192 to 8191"


@dataclass
class Tempo:
    time: time_t
    qpm: float
    "Quarters per minute"


@dataclass
class TimeSignature:
    time: time_t
    numerator: int
    denominator: int


@dataclass
class KeySignature:
    time: time_t
    key: int
    "Number of sharps (positive) or flats (negative)"

    tonality: int = 0
    "0: major, 1: minor"


@dataclass
class TextMeta:
    """A text attached to a time, used for lyrics and markers"""
    time: time_t
    text: str


@dataclass
class Track:
    """
    A Track groups the notes and performance events of one instrument

    Attributes:
        name: the name of the track
        program: the midi program
        isDrum: True if this is a percussion track
        notes: the notes of this track
        controls: control changes
        pitchBends: pitch bend events
        pedals: sustain pedal events
    """
    name: str = ''
    program: int = 0
    isDrum: bool = False
    notes: list[Note] = field(default_factory=list)
    controls: list[ControlChange] = field(default_factory=list)
    pitchBends: list[PitchBend] = field(default_factory=list)
    pedals: list[Pedal] = field(default_factory=list)

    def noteCount(self) -> int:
        return len(self.notes)

    def empty(self) -> bool:
        return not (self.notes or self.controls or self.pitchBends or self.pedals)

    def eventLists(self) -> list[list]:
        """The sub-lists of this track, in a fixed order"""
        return [self.notes, self.controls, self.pitchBends, self.pedals]


@dataclass
class Score:
    """
    A Score holds a list of tracks and the events global to all tracks

    Attributes:
        ticksPerQuarter: resolution of the score, in ticks per quarter note
        tracks: the tracks of this score
        timeSignatures: time signature changes
        keySignatures: key signature changes
        tempos: tempo changes
        lyrics: lyrics
        markers: markers (rehearsal marks, section names, etc)
    """
    ticksPerQuarter: int = 480
    tracks: list[Track] = field(default_factory=list)
    timeSignatures: list[TimeSignature] = field(default_factory=list)
    keySignatures: list[KeySignature] = field(default_factory=list)
    tempos: list[Tempo] = field(default_factory=list)
    lyrics: list[TextMeta] = field(default_factory=list)
    markers: list[TextMeta] = field(default_factory=list)

    def noteCount(self) -> int:
        return sum(track.noteCount() for track in self.tracks)

    def empty(self) -> bool:
        return all(track.empty() for track in self.tracks) and not any(self.globalLists())

    def globalLists(self) -> list[list]:
        """The events not belonging to any track, in a fixed order"""
        return [self.timeSignatures, self.keySignatures, self.tempos, self.lyrics, self.markers]


def hasDuration(event: HasTime) -> bool:
    """True if event has a duration (a Note, a Pedal, etc.)"""
    return hasattr(event, 'duration')


def eventEnd(event: HasTime) -> time_t:
    """
    The end time of an event

    This is ``time + duration`` for events with a duration, ``time`` otherwise
    """
    dur = getattr(event, 'duration', None)
    return event.time if dur is None else event.time + dur


def checkTimeEvents(events: _t.Sequence, needsDuration=False) -> None:
    """
    Check that events can be processed as time events

    Only the first event is checked, all events within a sequence
    are assumed to be of the same kind

    Args:
        events: the events to check
        needsDuration: if True, events must also have a duration

    Raises:
        TypeError: if the events do not have the needed attributes
    """
    if not events:
        return
    first = events[0]
    if not hasattr(first, 'time'):
        raise TypeError(f"Expected events with a 'time' attribute, got {type(first).__name__}")
    if needsDuration and not hasattr(first, 'duration'):
        raise TypeError(f"Expected events with a 'duration' attribute, got {type(first).__name__}")
