"""Unit tests for the shared intonation state."""

import pytest

from tuning.exceptions import InvalidArgument, UnsupportedKey
from tuning.key_table import Key, ScaleType
from tuning.note import Accidental, Note, PitchClass
from tuning.state import IntonationState, StateSnapshot

C_MAJOR = Key(Note(PitchClass.C), ScaleType.MAJOR)
G_MAJOR = Key(Note(PitchClass.G), ScaleType.MAJOR)


class TestIntonationState:
    def test_initial_snapshot(self):
        state = IntonationState(C_MAJOR, 260.0)
        assert state.snapshot() == StateSnapshot(C_MAJOR, 260.0, False)
        assert state.original_key == C_MAJOR
        assert state.original_tonic_hz == 260.0

    def test_install_replaces_key_and_tonic(self):
        state = IntonationState(C_MAJOR, 260.0)
        snapshot = state.install(G_MAJOR, 390.0)
        assert snapshot == StateSnapshot(G_MAJOR, 390.0, False)
        assert state.current_key == G_MAJOR
        assert state.tonic_hz == 390.0

    def test_install_keeps_subdominant(self):
        state = IntonationState(C_MAJOR, 260.0, subdominant=True)
        assert state.install(G_MAJOR, 390.0).subdominant is True

    def test_failed_install_leaves_state(self):
        state = IntonationState(C_MAJOR, 260.0)
        bad_key = Key(Note(PitchClass.C, Accidental.DOUBLE_SHARP), ScaleType.MAJOR)
        with pytest.raises(UnsupportedKey):
            state.install(bad_key, 300.0)
        with pytest.raises(InvalidArgument):
            state.install(G_MAJOR, -1.0)
        assert state.snapshot() == StateSnapshot(C_MAJOR, 260.0, False)

    def test_revert(self):
        state = IntonationState(C_MAJOR, 260.0)
        state.install(G_MAJOR, 390.0)
        state.set_subdominant(True)
        snapshot = state.revert()
        assert (snapshot.key, snapshot.tonic_hz) == (C_MAJOR, 260.0)
        assert snapshot.subdominant is True

    def test_unsupported_key_at_construction(self):
        with pytest.raises(UnsupportedKey):
            IntonationState(Key(Note(PitchClass.C, Accidental.DOUBLE_SHARP), ScaleType.MAJOR), 260.0)

    @pytest.mark.parametrize("tonic_hz", [0.0, -260.0, float("nan")])
    def test_invalid_tonic_at_construction(self, tonic_hz):
        with pytest.raises(InvalidArgument):
            IntonationState(C_MAJOR, tonic_hz)

    def test_repr(self):
        assert "C major" in repr(IntonationState(C_MAJOR, 260.0))
