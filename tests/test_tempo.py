import pytest

from loom.tapestry.tempo import NoteValue, Tempo, TimeSignature


def test_beat_duration_at_120_bpm():
    assert Tempo(120.0).beat_duration_secs() == pytest.approx(0.5)


@pytest.mark.parametrize("bpm", [60.0, 90.0, 133.5, 200.0])
def test_beat_duration_times_bpm_is_a_minute(bpm):
    assert Tempo(bpm).beat_duration_secs() * bpm == pytest.approx(60.0)


def test_faster_tempo_has_shorter_beats():
    assert Tempo(140.0).beat_duration_secs() < Tempo(100.0).beat_duration_secs()


def test_beats_per_bar_is_numerator():
    assert TimeSignature(3, 4).beats_per_bar() == 3.0
    assert TimeSignature(7, 8).beats_per_bar() == 7.0


def test_standard_note_values():
    assert NoteValue.WHOLE.to_beats() == 4.0
    assert NoteValue.QUARTER.to_beats() == 1.0
    assert NoteValue.SIXTEENTH.to_beats() == 0.25


@pytest.mark.parametrize(
    "dotted, base",
    [
        (NoteValue.DOTTED_HALF, NoteValue.HALF),
        (NoteValue.DOTTED_QUARTER, NoteValue.QUARTER),
        (NoteValue.DOTTED_EIGHTH, NoteValue.EIGHTH),
        (NoteValue.DOTTED_SIXTEENTH, NoteValue.SIXTEENTH),
    ],
)
def test_dotted_values_are_one_and_a_half_times_base(dotted, base):
    assert dotted.to_beats() == pytest.approx(base.to_beats() * 1.5)


@pytest.mark.parametrize(
    "triplet, base",
    [
        (NoteValue.TRIPLET_HALF, NoteValue.HALF),
        (NoteValue.TRIPLET_QUARTER, NoteValue.QUARTER),
        (NoteValue.TRIPLET_EIGHTH, NoteValue.EIGHTH),
        (NoteValue.TRIPLET_SIXTEENTH, NoteValue.SIXTEENTH),
    ],
)
def test_three_triplets_fill_two_base_notes(triplet, base):
    assert triplet.to_beats() * 3 == pytest.approx(base.to_beats() * 2)


def test_from_beats_round_trip():
    assert NoteValue.from_beats(0.3).to_beats() == 0.3
    assert NoteValue.from_beats(1.0) == NoteValue.QUARTER