"""Unit tests for the note model."""

import pytest

from tuning.exceptions import UnsupportedNote
from tuning.note import Accidental, Note, PitchClass, lower_note, raise_note


class TestPitchClass:
    """Letter names and their semitone offsets."""

    def test_semitones(self):
        assert [p.semitone for p in PitchClass] == [0, 2, 4, 5, 7, 9, 11]

    def test_shifted_wraps_at_b(self):
        assert PitchClass.A.shifted(2) is PitchClass.C
        assert PitchClass.C.shifted(6) is PitchClass.B
        assert PitchClass.E.shifted(0) is PitchClass.E


class TestAccidental:
    def test_from_delta(self):
        assert Accidental.from_delta(-2) is Accidental.DOUBLE_FLAT
        assert Accidental.from_delta(1) is Accidental.SHARP

    def test_from_delta_out_of_range(self):
        with pytest.raises(ValueError):
            Accidental.from_delta(3)


class TestNote:
    """Spelled notes with octave."""

    def test_defaults(self):
        note = Note(PitchClass.G)
        assert note.accidental is Accidental.NATURAL
        assert note.octave == 0

    def test_same_pitch_name_ignores_octave(self):
        low = Note(PitchClass.F, Accidental.SHARP, -1)
        high = Note(PitchClass.F, Accidental.SHARP, 2)
        assert low.same_pitch_name(high)
        assert low != high

    def test_same_pitch_name_distinguishes_enharmonics(self):
        assert not Note(PitchClass.F, Accidental.SHARP).same_pitch_name(
            Note(PitchClass.G, Accidental.FLAT)
        )

    def test_names(self):
        assert Note(PitchClass.B, Accidental.DOUBLE_FLAT).name == "Bbb"
        assert str(Note(PitchClass.C, Accidental.SHARP, 1)) == "C#+1"
        assert str(Note(PitchClass.E)) == "E"

    def test_in_octave(self):
        note = Note(PitchClass.D, Accidental.FLAT).in_octave(-2)
        assert note == Note(PitchClass.D, Accidental.FLAT, -2)


class TestRaiseLower:
    """Half-step alteration keeps letter and octave."""

    def test_raise(self):
        note = Note(PitchClass.E, Accidental.FLAT, 3)
        assert raise_note(note) == Note(PitchClass.E, Accidental.NATURAL, 3)

    def test_lower(self):
        note = Note(PitchClass.F, Accidental.SHARP, -1)
        assert lower_note(note) == Note(PitchClass.F, Accidental.NATURAL, -1)

    def test_raise_past_double_sharp(self):
        with pytest.raises(UnsupportedNote):
            raise_note(Note(PitchClass.C, Accidental.DOUBLE_SHARP))

    def test_lower_past_double_flat(self):
        with pytest.raises(UnsupportedNote):
            lower_note(Note(PitchClass.C, Accidental.DOUBLE_FLAT))

    @pytest.mark.parametrize(
        "accidental",
        [Accidental.DOUBLE_FLAT, Accidental.FLAT, Accidental.NATURAL, Accidental.SHARP],
    )
    def test_lower_undoes_raise(self, accidental):
        note = Note(PitchClass.A, accidental)
        assert lower_note(raise_note(note)) == note
