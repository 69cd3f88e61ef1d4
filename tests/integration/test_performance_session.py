"""Integration test walking through a short performance.

Builds an intonation through the factory, plays MIDI notes, modulates with
degree instructions and a modulation sequence, then reverts.
"""

import pytest

from tuning.config import IntuneConfig
from tuning.exceptions import UnsupportedModulation
from tuning.factory import create_intonation
from tuning.key_table import Key, ScaleType
from tuning.note import Accidental, Note, PitchClass
from tuning.temperaments import PYTHAGOREAN_MIDDLE_C_HZ


def play(intonation, numbers):
    """Return the frequencies of a run of MIDI note numbers."""
    return [intonation.frequency(intonation.midi_note_number_to_note(n)) for n in numbers]


class TestPerformanceSession:
    @pytest.fixture
    def intonation(self):
        return create_intonation("diatonic", "C", IntuneConfig(env="test"))

    def test_scale_in_tonic_key(self, intonation):
        c = PYTHAGOREAN_MIDDLE_C_HZ
        frequencies = play(intonation, [60, 62, 64, 65, 67, 69, 71, 72])
        ratios = [1, 9 / 8, 5 / 4, 4 / 3, 3 / 2, 5 / 3, 15 / 8, 2]
        assert frequencies == pytest.approx([c * r for r in ratios])

    def test_bass_octaves(self, intonation):
        c = PYTHAGOREAN_MIDDLE_C_HZ
        assert play(intonation, [36, 48]) == pytest.approx([c / 4, c / 2])

    def test_modulation_walk(self, intonation):
        c = PYTHAGOREAN_MIDDLE_C_HZ

        # To the dominant: its A is a pure fifth above its D
        intonation.modulate_by_degree(5)
        d, a = play(intonation, [62, 69])
        assert a / d == pytest.approx(3 / 2)
        assert intonation.tonic_note() == Note(PitchClass.G)

        # Relative minor of the dominant, then its 4th
        intonation.apply_modulation_sequence("6m4")
        assert intonation.current_key == Key(Note(PitchClass.A), ScaleType.MINOR)
        assert intonation.tonic_hz == pytest.approx(c * 3 / 2 * 5 / 3 * 4 / 3 / 2)

        # The 2nd of a minor key has no modulation rule
        with pytest.raises(UnsupportedModulation):
            intonation.modulate_by_degree(2)

        # Forced tonic for a chromatic key
        intonation.modulate_to_note_with_frequency(Note(PitchClass.E, Accidental.FLAT), 310.0)
        assert play(intonation, [63]) == pytest.approx([310.0])
        assert play(intonation, [70]) == pytest.approx([465.0])

        intonation.revert()
        assert intonation.current_key == Key(Note(PitchClass.C), ScaleType.MAJOR)
        assert intonation.tonic_hz == pytest.approx(c)

    def test_subdominant_passage(self, intonation):
        c = PYTHAGOREAN_MIDDLE_C_HZ
        intonation.set_subdominant(True)
        assert play(intonation, [62, 70]) == pytest.approx([c * 10 / 9, c * 16 / 9])
        intonation.set_subdominant(False)
        assert play(intonation, [62, 70]) == pytest.approx([c * 9 / 8, c * 9 / 5])
