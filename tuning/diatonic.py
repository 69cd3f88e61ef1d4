"""Diatonic just intonation with modulation.

Diatonic ties together the shared state, the frequency resolver, the MIDI
note mapper and the modulation engine behind the intonation interfaces.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator

from tuning.config import IntuneConfig, get_config
from tuning.exceptions import UnsupportedNote
from tuning.interfaces.modulation import IModulatingIntonation
from tuning.key_table import Key, accidentals_for
from tuning.metrics import IntonationMetrics
from tuning.midi_mapper import MidiNoteMapper
from tuning.modulation import ModulationEngine, ModulationModifier
from tuning.note import Note
from tuning.resolver import FrequencyResolver
from tuning.state import IntonationState, StateSnapshot

logger = logging.getLogger(__name__)


class Diatonic(IModulatingIntonation):
    """Diatonic intonation in a current key that changes by modulation.

    Thread-safe: lookups read one consistent snapshot of the state and
    modulations hold the state lock across read-compute-install.
    """

    def __init__(
        self,
        key: Key,
        tonic_hz: float,
        config: IntuneConfig | None = None,
        metrics: IntonationMetrics | None = None,
    ):
        """Initialize diatonic intonation.

        Args:
            key: Nominal key of the performance
            tonic_hz: Frequency of the key's tonic; folded into the
                reference octave
            config: Configuration (global configuration if None)
            metrics: Metrics collector (created when metrics are enabled
                and none is given)

        Raises:
            UnsupportedKey: If the key is not supported
            InvalidArgument: If the tonic frequency is not positive
        """
        self.config = config or get_config()
        if metrics is None and self.config.metrics_enabled:
            metrics = IntonationMetrics()
        self.metrics = metrics

        accidentals_for(key)
        self.resolver = FrequencyResolver(
            reference_hz=self.config.middle_c_hz,
            margin_hz=self.config.octave_margin_hz,
        )
        self.state = IntonationState(key, self.resolver.fold(tonic_hz))
        self.mapper = MidiNoteMapper()
        self.engine = ModulationEngine(
            self.state,
            self.resolver,
            allow_suspect_modulations=self.config.allow_suspect_modulations,
            metrics=self.metrics,
        )

    def frequency(self, note: Note) -> float:
        """Return the frequency of a note in the current key.

        Raises:
            UnsupportedNote: If the note has no tuning in the current key
        """
        with self._timed_lookup():
            return self.resolver.frequency(note, self.state.snapshot())

    def midi_note_number_to_note(self, note_number: int) -> Note:
        """Return the note for a MIDI note number, spelled in the current key.

        Raises:
            UnsupportedNote: If the number is outside 0-127
        """
        with self._timed_lookup():
            return self.mapper.midi_note_number_to_note(note_number, self.state.snapshot())

    def modulate(self, note: Note, tonic_hz: float | None = None) -> None:
        if tonic_hz is None:
            self.modulate_to_note(note)
        else:
            self.modulate_to_note_with_frequency(note, tonic_hz)

    def modulate_to_note(self, note: Note) -> StateSnapshot:
        return self.engine.modulate_to_note(note)

    def modulate_to_note_with_frequency(self, note: Note, tonic_hz: float) -> StateSnapshot:
        return self.engine.modulate_to_note_with_frequency(note, tonic_hz)

    def modulate_by_degree(
        self, degree: int, modifier: "str | ModulationModifier | None" = None
    ) -> StateSnapshot:
        return self.engine.modulate_by_degree(degree, modifier)

    def apply_modulation_sequence(self, text: str) -> StateSnapshot:
        return self.engine.apply_modulation_sequence(text)

    def set_subdominant(self, subdominant: bool) -> None:
        self.engine.set_subdominant(subdominant)

    def tonic_note(self) -> Note:
        return self.state.current_key.tonic

    def revert(self) -> StateSnapshot:
        return self.engine.revert()

    def snapshot(self) -> StateSnapshot:
        """Return the current key, tonic frequency and subdominant flag."""
        return self.state.snapshot()

    @property
    def current_key(self) -> Key:
        return self.state.current_key

    @property
    def tonic_hz(self) -> float:
        return self.state.tonic_hz

    @contextmanager
    def _timed_lookup(self) -> Iterator[None]:
        if self.metrics is None:
            yield
            return

        start = time.perf_counter()
        try:
            yield
        except UnsupportedNote:
            self.metrics.record_unsupported_note()
            raise
        self.metrics.record_lookup((time.perf_counter() - start) * 1000.0)

    def __repr__(self) -> str:
        snap = self.state.snapshot()
        return f"Diatonic(key={snap.key}, tonic_hz={snap.tonic_hz:.3f})"
