"""Mapping between MIDI note numbers and notes spelled in the current key.

The spelling is the exact inverse of the resolver's classification: every
number maps to a (degree, variant) pair the resolver can tune.
"""

import logging

from tuning.exceptions import UnsupportedNote
from tuning.key_table import ScaleType, degree_note
from tuning.note import Note, lower_note, raise_note
from tuning.resolver import Variant
from tuning.state import StateSnapshot

logger = logging.getLogger(__name__)

# MIDI note number for middle C
MIDI_MIDDLE_C = 60

# Number of MIDI notes
MIDI_NOTE_LIMIT = 128

# Number of MIDI notes per octave
MIDI_NOTES_PER_OCTAVE = 12

# Semitones above the tonic -> (degree, variant in major, variant in minor)
CHROMATIC_DEGREES: dict[int, tuple[int, Variant, Variant]] = {
    0: (1, Variant.NORMAL, Variant.NORMAL),
    1: (2, Variant.LOWERED, Variant.LOWERED),
    2: (2, Variant.NORMAL, Variant.NORMAL),
    3: (3, Variant.LOWERED, Variant.NORMAL),
    4: (3, Variant.NORMAL, Variant.RAISED),
    5: (4, Variant.NORMAL, Variant.NORMAL),
    6: (5, Variant.LOWERED, Variant.LOWERED),
    7: (5, Variant.NORMAL, Variant.NORMAL),
    8: (6, Variant.LOWERED, Variant.NORMAL),
    9: (6, Variant.NORMAL, Variant.RAISED),
    10: (7, Variant.LOWERED, Variant.NORMAL),
    11: (7, Variant.NORMAL, Variant.RAISED),
}


def note_to_absolute_number(note: Note) -> int:
    """Return the MIDI note number of a note.

    The letter's semitone offset plus the accidental is placed in the octave
    given by ``note.octave`` (octave 0 spans MIDI 60-71), so B# in octave 0
    is 60 and C-flat in octave 0 is 71.
    """
    number = note.pitch_class.semitone + note.accidental.value
    lower_bound = MIDI_MIDDLE_C + note.octave * MIDI_NOTES_PER_OCTAVE
    while number < lower_bound:
        number += MIDI_NOTES_PER_OCTAVE
    while number >= lower_bound + MIDI_NOTES_PER_OCTAVE:
        number -= MIDI_NOTES_PER_OCTAVE
    return number


def fold_note_number(note_number: int) -> tuple[int, int]:
    """Fold a MIDI note number into the middle C octave.

    Returns:
        Tuple of (number in 60..71, octave offset)
    """
    octave = 0
    while note_number >= MIDI_MIDDLE_C + MIDI_NOTES_PER_OCTAVE:
        octave += 1
        note_number -= MIDI_NOTES_PER_OCTAVE
    while note_number < MIDI_MIDDLE_C:
        octave -= 1
        note_number += MIDI_NOTES_PER_OCTAVE
    return note_number, octave


def check_note_number(note_number: int) -> None:
    """Raise UnsupportedNote unless the number is a MIDI note (0-127)."""
    if not 0 <= note_number < MIDI_NOTE_LIMIT:
        raise UnsupportedNote(f"MIDI note number out of range: {note_number}")


class MidiNoteMapper:
    """Spells MIDI note numbers as notes of the current key."""

    def midi_note_number_to_note(
        self, note_number: int, snapshot: StateSnapshot
    ) -> Note:
        """Return the note for a MIDI note number in the snapshot's key.

        Args:
            note_number: MIDI note number (0-127)
            snapshot: Key (and tonic) read together

        Returns:
            Note spelled relative to the current key, in the octave of the
            MIDI number

        Raises:
            UnsupportedNote: If the number is outside 0-127
        """
        check_note_number(note_number)
        folded, octave = fold_note_number(note_number)

        key = snapshot.key
        offset = (folded - note_to_absolute_number(key.tonic)) % MIDI_NOTES_PER_OCTAVE
        degree, major_variant, minor_variant = CHROMATIC_DEGREES[offset]
        variant = major_variant if key.scale_type is ScaleType.MAJOR else minor_variant

        note = degree_note(key, degree)
        if variant is Variant.RAISED:
            note = raise_note(note)
        elif variant is Variant.LOWERED:
            note = lower_note(note)

        logger.debug(
            f"MIDI {note_number} -> {note.name} octave {octave} in {key}",
            extra={"degree": degree},
        )
        return note.in_octave(octave)
