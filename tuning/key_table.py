"""Key definitions and the static table of per-degree accidentals.

Every key whose tonic carries at most a single accidental is supported,
in both modes. The table is built once at import and never mutated.
"""

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from tuning.exceptions import InvalidArgument, InvalidSyntax, UnsupportedKey
from tuning.note import DEGREES, Accidental, Note, PitchClass


class ScaleType(Enum):
    """Major and minor scale types."""

    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True)
class Key:
    """A musical key: tonic note (always in octave 0) and scale type."""

    tonic: Note
    scale_type: ScaleType

    def __post_init__(self) -> None:
        if self.tonic.octave != 0:
            object.__setattr__(self, "tonic", replace(self.tonic, octave=0))

    def __str__(self) -> str:
        return f"{self.tonic.name} {self.scale_type.value}"


_N = Accidental.NATURAL
_S = Accidental.SHARP
_X = Accidental.DOUBLE_SHARP
_F = Accidental.FLAT
_FF = Accidental.DOUBLE_FLAT

# (tonic letter, tonic accidental) -> accidentals of degrees 1..7
_MAJOR = {
    (PitchClass.C, _N): (_N, _N, _N, _N, _N, _N, _N),
    (PitchClass.G, _N): (_N, _N, _N, _N, _N, _N, _S),
    (PitchClass.D, _N): (_N, _N, _S, _N, _N, _N, _S),
    (PitchClass.A, _N): (_N, _N, _S, _N, _N, _S, _S),
    (PitchClass.E, _N): (_N, _S, _S, _N, _N, _S, _S),
    (PitchClass.B, _N): (_N, _S, _S, _N, _S, _S, _S),
    (PitchClass.F, _S): (_S, _S, _S, _N, _S, _S, _S),
    (PitchClass.C, _S): (_S, _S, _S, _S, _S, _S, _S),
    (PitchClass.G, _S): (_S, _S, _S, _S, _S, _S, _X),
    (PitchClass.D, _S): (_S, _S, _X, _S, _S, _S, _X),
    (PitchClass.A, _S): (_S, _S, _X, _S, _S, _X, _X),
    (PitchClass.E, _S): (_S, _X, _X, _S, _S, _X, _X),
    (PitchClass.B, _S): (_S, _X, _X, _S, _X, _X, _X),
    (PitchClass.F, _N): (_N, _N, _N, _F, _N, _N, _N),
    (PitchClass.B, _F): (_F, _N, _N, _F, _N, _N, _N),
    (PitchClass.E, _F): (_F, _N, _N, _F, _F, _N, _N),
    (PitchClass.A, _F): (_F, _F, _N, _F, _F, _N, _N),
    (PitchClass.D, _F): (_F, _F, _N, _F, _F, _F, _N),
    (PitchClass.G, _F): (_F, _F, _F, _F, _F, _F, _N),
    (PitchClass.C, _F): (_F, _F, _F, _F, _F, _F, _F),
    (PitchClass.F, _F): (_F, _F, _F, _FF, _F, _F, _F),
}

_MINOR = {
    (PitchClass.A, _N): (_N, _N, _N, _N, _N, _N, _N),
    (PitchClass.E, _N): (_N, _S, _N, _N, _N, _N, _N),
    (PitchClass.B, _N): (_N, _S, _N, _N, _S, _N, _N),
    (PitchClass.F, _S): (_S, _S, _N, _N, _S, _N, _N),
    (PitchClass.C, _S): (_S, _S, _N, _S, _S, _N, _N),
    (PitchClass.G, _S): (_S, _S, _N, _S, _S, _N, _S),
    (PitchClass.D, _S): (_S, _S, _S, _S, _S, _N, _S),
    (PitchClass.A, _S): (_S, _S, _S, _S, _S, _S, _S),
    (PitchClass.E, _S): (_S, _X, _S, _S, _S, _S, _S),
    (PitchClass.B, _S): (_S, _X, _S, _S, _X, _S, _S),
    (PitchClass.D, _N): (_N, _N, _N, _N, _N, _F, _N),
    (PitchClass.G, _N): (_N, _N, _F, _N, _N, _F, _N),
    (PitchClass.C, _N): (_N, _N, _F, _N, _N, _F, _F),
    (PitchClass.F, _N): (_N, _N, _F, _F, _N, _F, _F),
    (PitchClass.B, _F): (_F, _N, _F, _F, _N, _F, _F),
    (PitchClass.E, _F): (_F, _N, _F, _F, _F, _F, _F),
    (PitchClass.A, _F): (_F, _F, _F, _F, _F, _F, _F),
    (PitchClass.D, _F): (_F, _F, _F, _F, _F, _FF, _F),
    (PitchClass.G, _F): (_F, _F, _FF, _F, _F, _FF, _F),
    (PitchClass.C, _F): (_F, _F, _FF, _F, _F, _FF, _FF),
    (PitchClass.F, _F): (_F, _F, _FF, _FF, _F, _FF, _FF),
}


def _build_table() -> Mapping[Key, tuple[Accidental, ...]]:
    table: dict[Key, tuple[Accidental, ...]] = {}
    for scale_type, entries in ((ScaleType.MAJOR, _MAJOR), (ScaleType.MINOR, _MINOR)):
        for (letter, accidental), pattern in entries.items():
            table[Key(Note(letter, accidental), scale_type)] = pattern
    return MappingProxyType(table)


KEY_TABLE: Mapping[Key, tuple[Accidental, ...]] = _build_table()


def accidentals_for(key: Key) -> tuple[Accidental, ...]:
    """Return the accidentals of scale degrees 1..7 of a key.

    Raises:
        UnsupportedKey: If the key is not in the table
    """
    try:
        return KEY_TABLE[key]
    except KeyError:
        raise UnsupportedKey(f"Unsupported key: {key}") from None


def is_supported(key: Key) -> bool:
    return key in KEY_TABLE


def supported_keys() -> list[Key]:
    """Return every supported key, majors first."""
    return list(KEY_TABLE)


def degree_note(key: Key, degree: int) -> Note:
    """Return the in-key note (octave 0) at a scale degree.

    Args:
        key: Supported key
        degree: Scale degree 1..7

    Raises:
        InvalidArgument: If degree is outside 1..7
        UnsupportedKey: If the key is not in the table
    """
    if not 1 <= degree <= DEGREES:
        raise InvalidArgument(f"Invalid scale degree: {degree} (must be 1-7)")
    letter = key.tonic.pitch_class.shifted(degree - 1)
    return Note(letter, accidentals_for(key)[degree - 1])


def parse_key_name(name: str) -> Key:
    """Parse a key name of the form ``('A'..'G' | 'a'..'g') ['#' | '-']``.

    Uppercase letters denote major keys, lowercase minor keys; ``#`` is a
    sharp and ``-`` a flat.

    Raises:
        InvalidSyntax: If the name is malformed
        UnsupportedKey: If the parsed key is not in the table
    """
    if not name or len(name) > 2:
        raise InvalidSyntax(f"Invalid key name: {name!r}")

    letter = name[0]
    if letter.upper() not in PitchClass.__members__:
        raise InvalidSyntax(f"Invalid key name: {name!r}")

    accidental = Accidental.NATURAL
    if len(name) == 2:
        if name[1] == "#":
            accidental = Accidental.SHARP
        elif name[1] == "-":
            accidental = Accidental.FLAT
        else:
            raise InvalidSyntax(f"Invalid key name: {name!r}")

    scale_type = ScaleType.MAJOR if letter.isupper() else ScaleType.MINOR
    key = Key(Note(PitchClass[letter.upper()], accidental), scale_type)
    accidentals_for(key)
    return key
