"""Reference temperaments: Pythagorean and twelve-tone equal temperament.

Neither modulates. Pythagorean also supplies the starting tonic frequency
for diatonic intonations built by the factory.
"""

import logging
from typing import Mapping

from tuning.exceptions import UnsupportedNote
from tuning.interfaces.intonation import IIntonation
from tuning.midi_mapper import (
    MIDI_NOTES_PER_OCTAVE,
    check_note_number,
    fold_note_number,
    note_to_absolute_number,
)
from tuning.note import Accidental, Note, PitchClass
from tuning.octave import CONCERT_A_HZ, apply_octave, octave0

logger = logging.getLogger(__name__)

FIFTH = 3.0 / 2.0

# Pythagorean middle C: three fifths below the A an octave above concert A
PYTHAGOREAN_MIDDLE_C_HZ = 2.0 * CONCERT_A_HZ / (FIFTH * FIFTH * FIFTH)

# Letters in fifths order; F sits one fifth below C
_FIFTHS_ORDER = "FCGDAEB"

# Fifths above middle C (B double sharp) and below it (F double flat)
_FIFTHS_UP = 19
_FIFTHS_DOWN = 15

# Letter steps above the tonic for each chromatic step; the black-key
# steps (1, 3, 6, 8, 10) are spelled as lowered letters
_CHROMATIC_LETTER_STEPS = (0, 1, 1, 2, 2, 3, 4, 4, 5, 5, 6, 6)

# MIDI note number of concert A
MIDI_CONCERT_A = 69


def _pythagorean_table(
    concert_a_hz: float,
) -> dict[tuple[PitchClass, Accidental], float]:
    middle_c = 2.0 * concert_a_hz / (FIFTH * FIFTH * FIFTH)
    table = {}
    for k in range(-_FIFTHS_DOWN, _FIFTHS_UP + 1):
        letter = PitchClass[_FIFTHS_ORDER[(k + 1) % 7]]
        accidental = Accidental((k + 1) // 7)
        table[(letter, accidental)] = octave0(middle_c * FIFTH**k, middle_c, 0.0)
    return table


class Pythagorean(IIntonation):
    """Pythagorean intonation: every interval is a chain of pure fifths.

    Octave 0 runs from Pythagorean middle C up, so all 35 spellings with at
    most double accidentals are tuned by walking fifths from C.
    """

    def __init__(self, tonic: Note | None = None, concert_a_hz: float = CONCERT_A_HZ):
        """Initialize Pythagorean intonation.

        Args:
            tonic: Tonic ("final") of the mode, used to spell MIDI notes;
                C if None
            concert_a_hz: Frequency of A above middle C
        """
        self.tonic = (tonic or Note(PitchClass.C)).in_octave(0)
        self.pitch0: Mapping[tuple[PitchClass, Accidental], float] = _pythagorean_table(
            concert_a_hz
        )

    def frequency(self, note: Note) -> float:
        """Return the frequency of a note.

        Raises:
            UnsupportedNote: If the spelling is not in the table
        """
        try:
            base = self.pitch0[(note.pitch_class, note.accidental)]
        except KeyError:
            raise UnsupportedNote(f"No Pythagorean tuning for {note}") from None
        return apply_octave(base, note.octave)

    def midi_note_number_to_note(self, note_number: int) -> Note:
        """Spell a MIDI note number relative to the tonic.

        Raises:
            UnsupportedNote: If the number is outside 0-127 or the spelling
                would need more than a double accidental
        """
        check_note_number(note_number)
        folded, octave = fold_note_number(note_number)

        tonic_number = note_to_absolute_number(self.tonic)
        difference = (folded - tonic_number) % MIDI_NOTES_PER_OCTAVE
        letter = self.tonic.pitch_class.shifted(_CHROMATIC_LETTER_STEPS[difference])

        target = (tonic_number + difference) % MIDI_NOTES_PER_OCTAVE
        delta = (target - letter.semitone + 6) % MIDI_NOTES_PER_OCTAVE - 6
        try:
            accidental = Accidental.from_delta(delta)
        except ValueError:
            raise UnsupportedNote(
                f"MIDI note {note_number} needs more than a double accidental "
                f"relative to {self.tonic}"
            ) from None

        return Note(letter, accidental, octave)


# Fixed spelling of the twelve chromatic notes above C
_EQUAL_SPELLING = (
    Note(PitchClass.C),
    Note(PitchClass.C, Accidental.SHARP),
    Note(PitchClass.D),
    Note(PitchClass.E, Accidental.FLAT),
    Note(PitchClass.E),
    Note(PitchClass.F),
    Note(PitchClass.F, Accidental.SHARP),
    Note(PitchClass.G),
    Note(PitchClass.G, Accidental.SHARP),
    Note(PitchClass.A),
    Note(PitchClass.B, Accidental.FLAT),
    Note(PitchClass.B),
)


class EqualTemperament(IIntonation):
    """Twelve-tone equal temperament; enharmonic spellings share a pitch."""

    def __init__(self, concert_a_hz: float = CONCERT_A_HZ):
        self.concert_a_hz = concert_a_hz

    def frequency(self, note: Note) -> float:
        semitones = note_to_absolute_number(note) - MIDI_CONCERT_A
        return self.concert_a_hz * 2.0 ** (semitones / MIDI_NOTES_PER_OCTAVE)

    def midi_note_number_to_note(self, note_number: int) -> Note:
        """Spell a MIDI note number with the fixed chromatic spelling.

        Raises:
            UnsupportedNote: If the number is outside 0-127
        """
        check_note_number(note_number)
        folded, octave = fold_note_number(note_number)
        return _EQUAL_SPELLING[folded % MIDI_NOTES_PER_OCTAVE].in_octave(octave)
