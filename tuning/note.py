"""Note model: letter names, accidentals and half-step alteration."""

from dataclasses import dataclass, replace
from enum import Enum

from tuning.exceptions import UnsupportedNote

# Number of letter names (and of scale degrees)
DEGREES = 7


class PitchClass(Enum):
    """Note letter names in scale order, used mod 7 for degree arithmetic."""

    C = 0
    D = 1
    E = 2
    F = 3
    G = 4
    A = 5
    B = 6

    @property
    def semitone(self) -> int:
        """Semitones above C of the natural note."""
        return _SEMITONES[self]

    def shifted(self, steps: int) -> "PitchClass":
        """Return the letter ``steps`` positions further up, wrapping at B."""
        return PitchClass((self.value + steps) % DEGREES)


_SEMITONES = {
    PitchClass.C: 0,
    PitchClass.D: 2,
    PitchClass.E: 4,
    PitchClass.F: 5,
    PitchClass.G: 7,
    PitchClass.A: 9,
    PitchClass.B: 11,
}


class Accidental(Enum):
    """Accidentals ordered by their half-step offset."""

    DOUBLE_FLAT = -2
    FLAT = -1
    NATURAL = 0
    SHARP = 1
    DOUBLE_SHARP = 2

    @classmethod
    def from_delta(cls, delta: int) -> "Accidental":
        """Return the accidental for a half-step offset in -2..2.

        Raises:
            ValueError: If the offset needs more than a double accidental
        """
        try:
            return cls(delta)
        except ValueError:
            raise ValueError(f"Unsupported accidental offset: {delta}") from None

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Accidental.DOUBLE_FLAT: "bb",
    Accidental.FLAT: "b",
    Accidental.NATURAL: "",
    Accidental.SHARP: "#",
    Accidental.DOUBLE_SHARP: "##",
}


@dataclass(frozen=True)
class Note:
    """A spelled note.

    Attributes:
        pitch_class: Letter name
        accidental: Accidental applied to the letter
        octave: 0 for middle C up to the B above it, 1 for the octave
            above, -1 for the octave below, and so on
    """

    pitch_class: PitchClass
    accidental: Accidental = Accidental.NATURAL
    octave: int = 0

    def same_pitch_name(self, other: "Note") -> bool:
        """Compare letter and accidental only, ignoring octave."""
        return (
            self.pitch_class is other.pitch_class
            and self.accidental is other.accidental
        )

    def in_octave(self, octave: int) -> "Note":
        """Return this note moved to the given octave."""
        return replace(self, octave=octave)

    @property
    def name(self) -> str:
        """Spelled name without octave, e.g. ``"F#"`` or ``"Bbb"``."""
        return f"{self.pitch_class.name}{self.accidental.symbol}"

    def __str__(self) -> str:
        return f"{self.name}{self.octave:+d}" if self.octave else self.name


def raise_note(note: Note) -> Note:
    """Raise a note a half step, keeping letter and octave.

    Raises:
        UnsupportedNote: If the note already has a double sharp
    """
    if note.accidental is Accidental.DOUBLE_SHARP:
        raise UnsupportedNote(f"Cannot raise {note}")
    return replace(note, accidental=Accidental(note.accidental.value + 1))


def lower_note(note: Note) -> Note:
    """Lower a note a half step, keeping letter and octave.

    Raises:
        UnsupportedNote: If the note already has a double flat
    """
    if note.accidental is Accidental.DOUBLE_FLAT:
        raise UnsupportedNote(f"Cannot lower {note}")
    return replace(note, accidental=Accidental(note.accidental.value - 1))
