import pytest

from symops import Note, Pedal, ControlChange, PitchBend, Tempo, TimeSignature, KeySignature, TextMeta, Track, Score
from symops.config import config


@pytest.fixture
def curve():
    # segment 1 has a factor of 2, segment 2 a factor of 4
    return [0, 50, 100], [0, 100, 300]


@pytest.fixture
def notes():
    return [Note(0, 10, pitch=60),
            Note(25, 10, pitch=62),
            Note(40, 20, pitch=64),
            Note(75, 25, pitch=67)]


@pytest.fixture
def track(notes):
    return Track(name='piano', program=1, isDrum=False,
                 notes=notes,
                 controls=[ControlChange(25, 7, 100), ControlChange(75, 7, 90)],
                 pitchBends=[PitchBend(30, 512)],
                 pedals=[Pedal(10, 80)])


@pytest.fixture
def score(track):
    return Score(ticksPerQuarter=96,
                 tracks=[track, Track(name='drums', isDrum=True, notes=[Note(50, 5, pitch=36)])],
                 timeSignatures=[TimeSignature(0, 4, 4)],
                 keySignatures=[KeySignature(0, -1)],
                 tempos=[Tempo(0, 120), Tempo(50, 60)],
                 lyrics=[TextMeta(25, 'la')],
                 markers=[TextMeta(75, 'B')])


@pytest.fixture
def restoreConfig():
    saved = dict(config)
    yield config
    config.update(saved)
