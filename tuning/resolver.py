"""Just-intonation frequency resolution.

Classifies a note by scale degree and variant (normal, raised, lowered)
relative to the current key, then applies the ratio for that degree to the
current tonic frequency.
"""

import logging
from enum import Enum
from fractions import Fraction

from tuning.exceptions import UnsupportedNote
from tuning.key_table import Key, ScaleType, accidentals_for
from tuning.note import DEGREES, Note
from tuning.octave import MIDDLE_C_HZ, OCTAVE_MARGIN_HZ, apply_octave, octave0
from tuning.state import StateSnapshot

logger = logging.getLogger(__name__)


class Variant(Enum):
    """A note's alteration relative to its degree's accidental in the key."""

    NORMAL = 0
    RAISED = 1
    LOWERED = -1


class ResolutionMode(Enum):
    """Why a frequency is wanted.

    The diminished 5th is tuned differently when played (25/18, a major 6th
    above the major 6th) and when it becomes the tonic of a new key (64/45).
    """

    PLAYING = "playing"
    MODULATION_TARGET = "modulation_target"


class SubdominantRatio:
    """Ratio pair selected by the subdominant tuning flag."""

    __slots__ = ("dominant", "subdominant")

    def __init__(self, dominant: Fraction, subdominant: Fraction):
        self.dominant = dominant
        self.subdominant = subdominant

    def select(self, subdominant: bool) -> Fraction:
        return self.subdominant if subdominant else self.dominant


UNISON = Fraction(1)
FOURTH = Fraction(4, 3)

DIMINISHED_FIFTH = {
    ResolutionMode.PLAYING: Fraction(25, 18),
    ResolutionMode.MODULATION_TARGET: Fraction(64, 45),
}

# Ratios shared by major and minor keys
_COMMON_RATIOS: dict[tuple[int, Variant], Fraction | SubdominantRatio] = {
    (1, Variant.NORMAL): UNISON,
    (1, Variant.RAISED): Fraction(27, 25),
    (2, Variant.NORMAL): SubdominantRatio(Fraction(9, 8), Fraction(10, 9)),
    (2, Variant.LOWERED): SubdominantRatio(Fraction(27, 25), Fraction(16, 15)),
    (5, Variant.NORMAL): Fraction(3, 2),
    (5, Variant.RAISED): Fraction(25, 16),
}

_MINOR_SEVENTH = SubdominantRatio(Fraction(9, 5), Fraction(16, 9))

_MODE_RATIOS: dict[ScaleType, dict[tuple[int, Variant], Fraction | SubdominantRatio]] = {
    ScaleType.MAJOR: {
        (3, Variant.NORMAL): Fraction(5, 4),
        (3, Variant.LOWERED): Fraction(6, 5),
        (6, Variant.NORMAL): Fraction(5, 3),
        (6, Variant.LOWERED): Fraction(8, 5),
        (7, Variant.NORMAL): Fraction(15, 8),
        (7, Variant.LOWERED): _MINOR_SEVENTH,
    },
    ScaleType.MINOR: {
        (3, Variant.NORMAL): Fraction(6, 5),
        (3, Variant.RAISED): Fraction(5, 4),
        (6, Variant.NORMAL): Fraction(8, 5),
        (6, Variant.RAISED): Fraction(5, 3),
        (7, Variant.NORMAL): _MINOR_SEVENTH,
        (7, Variant.RAISED): Fraction(15, 8),
    },
}


def scale_degree(note: Note, key: Key) -> int:
    """Return the degree (1..7) of a note in a key, ignoring accidentals."""
    steps = note.pitch_class.value - key.tonic.pitch_class.value
    return (steps + DEGREES) % DEGREES + 1


def classify(note: Note, key: Key) -> tuple[int, Variant]:
    """Return (degree, variant) of a note in a key.

    Raises:
        UnsupportedNote: If the accidental is more than a half step away
            from the degree's accidental in the key
        UnsupportedKey: If the key is not in the table
    """
    degree = scale_degree(note, key)
    expected = accidentals_for(key)[degree - 1]
    try:
        variant = Variant(note.accidental.value - expected.value)
    except ValueError:
        raise UnsupportedNote(
            f"Invalid degree {degree} of scale: {note} in key {key}"
        ) from None

    if variant is not Variant.NORMAL:
        logger.debug(
            f"Accidental of {note} doesn't match that of degree {degree} in {key}",
            extra={"note": str(note), "degree": degree},
        )
    return degree, variant


def degree_ratio(
    degree: int,
    variant: Variant,
    scale_type: ScaleType,
    subdominant: bool = False,
    mode: ResolutionMode = ResolutionMode.PLAYING,
) -> Fraction:
    """Return the ratio to the tonic for a classified degree.

    Raises:
        UnsupportedNote: If the variant has no tuning for that degree and mode
    """
    # Any accidental on the 4th is tuned as the plain 4th
    if degree == 4:
        return FOURTH
    if degree == 5 and variant is Variant.LOWERED:
        return DIMINISHED_FIFTH[mode]

    ratio = _COMMON_RATIOS.get((degree, variant))
    if ratio is None:
        ratio = _MODE_RATIOS[scale_type].get((degree, variant))
    if ratio is None:
        raise UnsupportedNote(
            f"No {variant.name.lower()} degree {degree} in {scale_type.value} keys"
        )
    if isinstance(ratio, SubdominantRatio):
        return ratio.select(subdominant)
    return ratio


class FrequencyResolver:
    """Computes the frequency of a note against a state snapshot."""

    def __init__(
        self,
        reference_hz: float = MIDDLE_C_HZ,
        margin_hz: float = OCTAVE_MARGIN_HZ,
    ):
        """Initialize frequency resolver.

        Args:
            reference_hz: Reference pitch of the folding octave
            margin_hz: Margin below the reference for the folding octave
        """
        self.reference_hz = reference_hz
        self.margin_hz = margin_hz

    def fold(self, frequency_hz: float) -> float:
        """Fold a frequency into this resolver's reference octave."""
        return octave0(frequency_hz, self.reference_hz, self.margin_hz)

    def frequency(
        self,
        note: Note,
        snapshot: StateSnapshot,
        mode: ResolutionMode = ResolutionMode.PLAYING,
    ) -> float:
        """Return the frequency of a note.

        Args:
            note: Note to tune
            snapshot: Key, tonic and subdominant flag read together
            mode: PLAYING, or MODULATION_TARGET when the note is about to
                become the tonic of a new key

        Returns:
            Frequency in Hz, in the octave given by ``note.octave``

        Raises:
            UnsupportedNote: If the note has no tuning in the current key
        """
        degree, variant = classify(note, snapshot.key)

        if degree == 1 and variant is Variant.NORMAL:
            frequency = snapshot.tonic_hz
        else:
            ratio = degree_ratio(
                degree,
                variant,
                snapshot.key.scale_type,
                snapshot.subdominant,
                mode,
            )
            frequency = self.fold(snapshot.tonic_hz * float(ratio))

        return apply_octave(frequency, note.octave)
