import copy

import numpy as np
import pytest

from symops import (Note, Pedal, ControlChange, Tempo, TextMeta, Track, Score, F,
                    adjustTime, adjustTimeSorted, BreakpointError)


def test_time_events_map_through_their_segment(curve):
    events = [ControlChange(25, 7, 100), ControlChange(75, 7, 90)]
    out = adjustTime(events, *curve)
    assert [ev.time for ev in out] == [50, 200]
    assert all(isinstance(ev.time, int) for ev in out)


def test_note_crossing_a_breakpoint(curve):
    out = adjustTime([Note(40, 20)], *curve)
    assert len(out) == 1
    assert out[0].time == 80
    assert out[0].duration == 60


def test_pedal_crossing_a_breakpoint(curve):
    out = adjustTime([Pedal(10, 80)], *curve)
    # end: 90 -> 100 + 4*40 = 260, start: 10 -> 20
    assert out == [Pedal(20, 240)]


def test_notes_ending_in_a_different_order(curve):
    notes = [Note(0, 90, pitch=60), Note(40, 20, pitch=62)]
    out = adjustTime(notes, *curve, sorted=True)
    assert [(n.time, n.duration, n.pitch) for n in out] == [(0, 260, 60), (80, 60, 62)]


def test_output_sorted_by_time(curve, notes):
    out = adjustTime(notes, *curve)
    times = [n.time for n in out]
    assert times == sorted(times)
    assert [n.pitch for n in out] == [60, 62, 64, 67]


def test_input_is_not_modified(curve, notes):
    original = copy.deepcopy(notes)
    out = adjustTime(notes, *curve)
    assert notes == original
    assert all(a is not b for a, b in zip(out, notes))


def test_identity_curve():
    notes = [Note(-5, 2), Note(0, 10), Note(30, 20), Note(90, 10), Note(95, 10)]
    out = adjustTime(notes, [0, 100], [0, 100])
    assert out == [Note(0, 10), Note(30, 20), Note(90, 10)]


def test_uniform_scale():
    notes = [Note(0.0, 1.5), Note(2.0, 0.5), Note(4.0, 4.0)]
    out = adjustTime(notes, [0.0, 8.0], [0.0, 24.0])
    assert [n.time for n in out] == pytest.approx([0., 6., 12.])
    assert [n.duration for n in out] == pytest.approx([4.5, 1.5, 12.])


def test_events_outside_domain_are_dropped():
    notes = [Note(5, 10), Note(10, 10), Note(20, 10), Note(90, 20)]
    out = adjustTime(notes, [10, 100], [10, 100])
    assert [(n.time, n.duration) for n in out] == [(10, 10), (20, 10)]


def test_long_event_ending_past_domain_is_dropped():
    # the long note starts first but ends after the domain
    notes = [Note(10, 95), Note(20, 10)]
    out = adjustTime(notes, [0, 100], [0, 200])
    assert out == [Note(40, 20)]


def test_short_event_after_long_events_is_kept():
    notes = [Note(0, 5), Note(10, 100), Note(20, 100), Note(30, 15), Note(40, 90)]
    out = adjustTime(notes, [0, 50], [0, 50], sorted=True)
    assert out == [Note(0, 5), Note(30, 15)]


def test_mixed_durations_with_events_starting_past_domain():
    notes = [Note(0, 5), Note(10, 100), Note(30, 15), Note(45, 20), Note(60, 1)]
    out = adjustTime(notes, [0, 50], [0, 100], sorted=True)
    assert out == [Note(0, 10), Note(60, 30)]


def test_event_at_domain_bounds_are_kept(curve):
    events = [Tempo(0, 120), Tempo(100, 60)]
    out = adjustTime(events, *curve)
    assert [ev.time for ev in out] == [0, 300]


def test_all_events_outside_domain(curve):
    assert adjustTime([Note(-10, 5), Note(120, 5)], *curve) == []


def test_empty_input(curve):
    assert adjustTime([], *curve) == []
    assert adjustTimeSorted([], *curve) == []


@pytest.mark.parametrize('xs, ys', [
    ([0, 50, 100], [0, 100]),
    ([0], [0]),
    ([], []),
])
def test_invalid_breakpoints(xs, ys):
    with pytest.raises(BreakpointError):
        adjustTime([Note(0, 1)], xs, ys)
    # also for empty input
    with pytest.raises(ValueError):
        adjustTimeSorted([], xs, ys)


def test_unsorted_input_is_sorted_first(curve):
    events = [TextMeta(75, 'b'), TextMeta(25, 'a')]
    out = adjustTime(events, [100, 0, 50], [300, 100, 0])
    assert [(ev.time, ev.text) for ev in out] == [(50, 'a'), (200, 'b')]
    # the input keeps its order
    assert [ev.text for ev in events] == ['b', 'a']


def test_assume_sorted_from_config(restoreConfig):
    restoreConfig['adjustTime.assumeSorted'] = True
    out = adjustTime([TextMeta(25, 'a'), TextMeta(75, 'b')], [0, 50, 100], [0, 100, 300])
    assert [ev.time for ev in out] == [50, 200]


def test_numpy_breakpoints():
    out = adjustTime([Note(40, 20)], np.array([0, 50, 100]), np.array([0, 100, 300]))
    assert out == [Note(80, 60)]


def test_rational_times_are_exact():
    notes = [Note(F(1), F(1)), Note(F(2), F(1, 2))]
    out = adjustTime(notes, [0, 3], [0, 1])
    assert [(n.time, n.duration) for n in out] == [(F(1, 3), F(1, 3)), (F(2, 3), F(1, 6))]


def test_float_times():
    out = adjustTime([Note(0.5, 0.25)], [0.0, 1.0, 2.0], [0.0, 0.5, 2.0])
    assert out[0].time == pytest.approx(0.25)
    assert out[0].duration == pytest.approx(0.125)


def test_int_rounding_modes(restoreConfig):
    notes = [Note(1, 1)]
    # 1 -> 0.667, 2 -> 1.333
    out = adjustTime(notes, [0, 3], [0, 2])
    assert (out[0].time, out[0].duration) == (1, 0)
    restoreConfig['adjustTime.intRounding'] = 'trunc'
    out = adjustTime(notes, [0, 3], [0, 2])
    assert (out[0].time, out[0].duration) == (0, 1)


def test_zero_width_segment():
    events = [TextMeta(0, 'a'), TextMeta(5, 'b')]
    out = adjustTime(events, [0, 0, 10], [0, 5, 15])
    assert [ev.time for ev in out] == [0, 10]


def test_adjust_track(curve, track):
    out = adjustTime(track, *curve)
    assert isinstance(out, Track)
    assert (out.name, out.program, out.isDrum) == ('piano', 1, False)
    assert [(n.time, n.duration) for n in out.notes] == [(0, 20), (50, 20), (80, 60), (200, 100)]
    assert [c.time for c in out.controls] == [50, 200]
    assert [b.time for b in out.pitchBends] == [60]
    assert out.pedals == [Pedal(20, 240)]
    # the original track is untouched
    assert track.notes[2] == Note(40, 20, pitch=64)


def test_adjust_score(curve, score):
    out = adjustTime(score, *curve)
    assert isinstance(out, Score)
    assert out.ticksPerQuarter == 96
    assert len(out.tracks) == 2
    assert out.tracks[1].name == 'drums' and out.tracks[1].isDrum
    assert [(n.time, n.duration) for n in out.tracks[1].notes] == [(100, 20)]
    assert [t.time for t in out.tempos] == [0, 100]
    assert [t.qpm for t in out.tempos] == [120, 60]
    assert [ts.time for ts in out.timeSignatures] == [0]
    assert [ks.time for ks in out.keySignatures] == [0]
    assert [(l.time, l.text) for l in out.lyrics] == [(50, 'la')]
    assert [(m.time, m.text) for m in out.markers] == [(200, 'B')]
    assert score.tempos[1].time == 50


def test_invalid_breakpoints_for_score(score):
    with pytest.raises(BreakpointError):
        adjustTime(score, [0, 100], [0])


def test_events_without_time():
    with pytest.raises(TypeError):
        adjustTime([object()], [0, 1], [0, 1])
