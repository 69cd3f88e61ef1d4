"""Unit tests for the Diatonic intonation."""

import pytest

from tuning.config import IntuneConfig
from tuning.diatonic import Diatonic
from tuning.exceptions import InvalidArgument, UnsupportedKey, UnsupportedNote
from tuning.interfaces import IIntonation, IModulatingIntonation, IModulator
from tuning.key_table import Key, ScaleType
from tuning.metrics import IntonationMetrics
from tuning.note import Accidental, Note, PitchClass

C_MAJOR = Key(Note(PitchClass.C), ScaleType.MAJOR)


class TestDiatonic:
    """C major at 260 Hz."""

    @pytest.fixture
    def config(self):
        return IntuneConfig(env="test", metrics_enabled=True)

    @pytest.fixture
    def intonation(self, config):
        return Diatonic(C_MAJOR, 260.0, config=config)

    def test_implements_interfaces(self, intonation):
        assert isinstance(intonation, IIntonation)
        assert isinstance(intonation, IModulator)
        assert isinstance(intonation, IModulatingIntonation)

    def test_frequencies(self, intonation):
        assert intonation.frequency(Note(PitchClass.C)) == 260.0
        assert intonation.frequency(Note(PitchClass.D)) == pytest.approx(292.5)
        assert intonation.frequency(Note(PitchClass.E, Accidental.FLAT)) == pytest.approx(312.0)
        assert intonation.frequency(Note(PitchClass.E)) == pytest.approx(325.0)

    def test_subdominant_second(self, intonation):
        intonation.set_subdominant(True)
        assert intonation.frequency(Note(PitchClass.D)) == pytest.approx(260.0 * 10 / 9)
        intonation.set_subdominant(False)
        assert intonation.frequency(Note(PitchClass.D)) == pytest.approx(292.5)

    def test_tonic_folded_at_construction(self, config):
        intonation = Diatonic(C_MAJOR, 130.0, config=config)
        assert intonation.tonic_hz == 260.0
        assert intonation.snapshot().tonic_hz == 260.0

    def test_midi_lookup(self, intonation):
        assert intonation.midi_note_number_to_note(61) == Note(PitchClass.D, Accidental.FLAT)

    def test_modulate_to_fifth_and_revert(self, intonation):
        intonation.modulate_by_degree(5)
        assert intonation.current_key == Key(Note(PitchClass.G), ScaleType.MAJOR)
        assert intonation.tonic_note() == Note(PitchClass.G)
        assert intonation.frequency(Note(PitchClass.G)) == pytest.approx(390.0)
        assert intonation.midi_note_number_to_note(66) == Note(PitchClass.F, Accidental.SHARP)

        intonation.revert()
        assert intonation.current_key == C_MAJOR
        assert intonation.tonic_hz == 260.0

    def test_modulate_interface(self, intonation):
        intonation.modulate(Note(PitchClass.F))
        assert intonation.tonic_hz == pytest.approx(260.0 * 4 / 3)
        intonation.modulate(Note(PitchClass.D), 300.0)
        assert intonation.snapshot().key == Key(Note(PitchClass.D), ScaleType.MAJOR)
        assert intonation.frequency(Note(PitchClass.D)) == 300.0

    def test_modulation_sequence(self, intonation):
        snapshot = intonation.apply_modulation_sequence("5")
        assert snapshot.key == Key(Note(PitchClass.G), ScaleType.MAJOR)

    def test_invalid_degree(self, intonation):
        with pytest.raises(InvalidArgument):
            intonation.modulate_by_degree(8, "")

    def test_unsupported_key(self, config):
        with pytest.raises(UnsupportedKey):
            Diatonic(Key(Note(PitchClass.C, Accidental.DOUBLE_SHARP), ScaleType.MAJOR), 260.0, config=config)

    def test_uses_configured_reference(self):
        config = IntuneConfig(env="test", concert_a_hz=400.0, octave_margin_hz=0.0)
        # Band is [240, 480)
        intonation = Diatonic(C_MAJOR, 500.0, config=config)
        assert intonation.tonic_hz == 250.0

    def test_metrics(self, config):
        metrics = IntonationMetrics()
        intonation = Diatonic(C_MAJOR, 260.0, config=config, metrics=metrics)
        intonation.frequency(Note(PitchClass.G))
        intonation.midi_note_number_to_note(64)
        with pytest.raises(UnsupportedNote):
            intonation.frequency(Note(PitchClass.A, Accidental.SHARP))

        summary = metrics.get_summary()
        assert summary["lookups"] == 2
        assert summary["unsupported_notes"] == 1
        assert summary["lookup_latency_ms"]["samples"] == 2

    def test_metrics_disabled(self):
        config = IntuneConfig(env="test", metrics_enabled=False)
        intonation = Diatonic(C_MAJOR, 260.0, config=config)
        assert intonation.metrics is None
        assert intonation.frequency(Note(PitchClass.G)) == pytest.approx(390.0)

    def test_suspect_modulations_from_config(self):
        config = IntuneConfig(env="test", allow_suspect_modulations=True)
        intonation = Diatonic(Key(Note(PitchClass.A), ScaleType.MINOR), 440.0, config=config)
        intonation.modulate_by_degree(2)
        assert intonation.current_key == Key(Note(PitchClass.B, Accidental.FLAT), ScaleType.MAJOR)
