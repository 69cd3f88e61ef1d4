"""Modulation: computing and installing a new key and tonic frequency.

ModulationEngine is the only writer of IntonationState. Each operation
holds the state lock from reading the snapshot until the new key is
installed, so concurrent readers never see a half-applied modulation.
"""

import logging
import re
from enum import Enum
from fractions import Fraction

from tuning.exceptions import InvalidArgument, InvalidSyntax, UnsupportedModulation
from tuning.key_table import Key, ScaleType, accidentals_for, degree_note
from tuning.metrics import IntonationMetrics
from tuning.note import DEGREES, Note, lower_note
from tuning.resolver import FrequencyResolver, ResolutionMode
from tuning.state import IntonationState, StateSnapshot

logger = logging.getLogger(__name__)


class ModulationModifier(Enum):
    """Forces the scale type of the key modulated to."""

    FORCE_MAJOR = "M"
    FORCE_MINOR = "m"

    @classmethod
    def parse(cls, token: "str | ModulationModifier | None") -> "ModulationModifier | None":
        """Parse a modifier token: ``""`` for none, ``"M"`` major, ``"m"`` minor.

        Raises:
            InvalidSyntax: If the token is anything else
        """
        if token is None or isinstance(token, ModulationModifier):
            return token
        if token == "":
            return None
        try:
            return cls(token)
        except ValueError:
            raise InvalidSyntax(f"Invalid modulation modifier {token!r}") from None


# degree -> {source scale type: (ratio to current tonic, default target type)}
DEGREE_MODULATIONS: dict[int, dict[ScaleType, tuple[Fraction, ScaleType]]] = {
    2: {
        ScaleType.MAJOR: (Fraction(10, 9), ScaleType.MINOR),
    },
    3: {
        ScaleType.MAJOR: (Fraction(5, 4), ScaleType.MINOR),
        ScaleType.MINOR: (Fraction(6, 5), ScaleType.MAJOR),
    },
    4: {
        ScaleType.MAJOR: (Fraction(4, 3), ScaleType.MAJOR),
        ScaleType.MINOR: (Fraction(4, 3), ScaleType.MINOR),
    },
    5: {
        ScaleType.MAJOR: (Fraction(3, 2), ScaleType.MAJOR),
        ScaleType.MINOR: (Fraction(3, 2), ScaleType.MAJOR),
    },
    6: {
        ScaleType.MAJOR: (Fraction(5, 3), ScaleType.MAJOR),
        ScaleType.MINOR: (Fraction(8, 5), ScaleType.MINOR),
    },
    7: {
        ScaleType.MAJOR: (Fraction(15, 8), ScaleType.MAJOR),
        ScaleType.MINOR: (Fraction(9, 5), ScaleType.MINOR),
    },
}

# Suspect rule for the 2nd of a minor key: the lowered 2nd as a major key.
# Believed wrong; only used when allow_suspect_modulations is set.
SUSPECT_MINOR_SECOND = Fraction(16, 15)

_SEQUENCE_ITEM = re.compile(r"([1-7])([^1-7]*)")


def parse_modulation_sequence(text: str) -> list[tuple[int, ModulationModifier | None]]:
    """Parse ``mod { mod }`` where ``mod`` is a degree 1-7 and an optional modifier.

    Example: ``"4m5"`` is a modulation to the minor 4th followed by one to
    the 5th (of the new key).

    Raises:
        InvalidSyntax: If the text is empty, does not start with a degree,
            or carries an invalid modifier
    """
    if not text or text[0] not in "1234567":
        raise InvalidSyntax(f"Invalid modulation {text!r}")

    steps = []
    for match in _SEQUENCE_ITEM.finditer(text):
        steps.append((int(match.group(1)), ModulationModifier.parse(match.group(2))))
    return steps


class ModulationEngine:
    """Computes and installs new (key, tonic frequency) pairs."""

    def __init__(
        self,
        state: IntonationState,
        resolver: FrequencyResolver,
        allow_suspect_modulations: bool = False,
        metrics: IntonationMetrics | None = None,
    ):
        """Initialize modulation engine.

        Args:
            state: Shared state this engine writes
            resolver: Resolver used for modulation targets and folding
            allow_suspect_modulations: Use the suspect rule for modulating
                to the 2nd of a minor key instead of rejecting it
            metrics: Optional metrics collector
        """
        self.state = state
        self.resolver = resolver
        self.allow_suspect_modulations = allow_suspect_modulations
        self.metrics = metrics

    def modulate_by_degree(
        self, degree: int, modifier: "str | ModulationModifier | None" = None
    ) -> StateSnapshot:
        """Modulate to a degree of the current key.

        Args:
            degree: Scale degree 1..7 of the current key
            modifier: None/"" for the default scale type, "M"/FORCE_MAJOR or
                "m"/FORCE_MINOR to force one

        Returns:
            Snapshot after the modulation

        Raises:
            InvalidArgument: If degree is outside 1..7
            InvalidSyntax: If the modifier token is invalid
            UnsupportedModulation: For the 2nd of a minor key (unless allowed)
            UnsupportedKey: If the target key is not supported (state unchanged)
        """
        if not isinstance(degree, int) or not 1 <= degree <= DEGREES:
            self._record_rejected()
            raise InvalidArgument(f"Invalid modulation degree: {degree}")
        parsed = ModulationModifier.parse(modifier)

        with self.state.lock:
            snapshot = self.state.snapshot()
            if degree == 1:
                logger.debug(f"Modulation to degree 1 of {snapshot.key}: no change")
                return snapshot

            try:
                new_key, ratio = self._degree_target(snapshot.key, degree, parsed)
                accidentals_for(new_key)
            except Exception:
                self._record_rejected()
                raise

            new_tonic = self.resolver.fold(snapshot.tonic_hz * float(ratio))
            logger.info(
                f"Modulating from {snapshot.key} to degree {degree}: {new_key}",
                extra={"degree": degree, "ratio": str(ratio)},
            )
            return self._install(new_key, new_tonic)

    def modulate_to_note(self, target: Note) -> StateSnapshot:
        """Modulate to a key whose tonic is the given note of the current key.

        The new tonic frequency is the target's frequency in the current key
        (diminished 5th tuned as a modulation target), folded into the
        reference octave. The new key is tagged major; the tag is bookkeeping.

        Raises:
            UnsupportedNote: If the target has no tuning in the current key
            UnsupportedKey: If the target key is not supported (state unchanged)
        """
        new_key = Key(target, ScaleType.MAJOR)
        with self.state.lock:
            snapshot = self.state.snapshot()
            try:
                accidentals_for(new_key)
                frequency = self.resolver.frequency(
                    target, snapshot, ResolutionMode.MODULATION_TARGET
                )
            except Exception:
                self._record_rejected()
                raise
            return self._install(new_key, self.resolver.fold(frequency))

    def modulate_to_note_with_frequency(self, target: Note, frequency_hz: float) -> StateSnapshot:
        """Modulate to a key with the tonic frequency forced to a given value.

        The frequency is installed verbatim, without folding.

        Raises:
            InvalidArgument: If the frequency is not positive
            UnsupportedKey: If the target key is not supported
        """
        try:
            return self._install(Key(target, ScaleType.MAJOR), frequency_hz)
        except Exception:
            self._record_rejected()
            raise

    def apply_modulation_sequence(self, text: str) -> StateSnapshot:
        """Apply a sequence of degree modulations such as ``"4m5"``.

        The whole sequence is applied under the state lock. If any step
        fails the state is restored to what it was before the sequence.

        Raises:
            InvalidSyntax: If the sequence is malformed (nothing applied)
        """
        steps = parse_modulation_sequence(text)
        with self.state.lock:
            before = self.state.snapshot()
            try:
                snapshot = before
                for degree, modifier in steps:
                    snapshot = self.modulate_by_degree(degree, modifier)
            except Exception:
                self.state.install(before.key, before.tonic_hz)
                logger.warning(f"Modulation sequence {text!r} failed, key restored to {before.key}")
                raise
            return snapshot

    def set_subdominant(self, subdominant: bool) -> None:
        """Begin or end tuning consistent with the subdominant."""
        self.state.set_subdominant(subdominant)

    def revert(self) -> StateSnapshot:
        """Return to the original key and tonic frequency."""
        snapshot = self.state.revert()
        if self.metrics is not None:
            self.metrics.record_modulation()
        return snapshot

    def _degree_target(
        self, key: Key, degree: int, modifier: ModulationModifier | None
    ) -> tuple[Key, Fraction]:
        rule = DEGREE_MODULATIONS[degree].get(key.scale_type)
        if rule is None:
            # Only the 2nd of a minor key lacks a rule
            if not self.allow_suspect_modulations:
                raise UnsupportedModulation(
                    f"Modulation to degree {degree} of {key} is not supported"
                )
            logger.warning(
                f"Suspect modulation to the lowered 2nd of {key}",
                extra={"degree": degree},
            )
            return Key(lower_note(degree_note(key, degree)), ScaleType.MAJOR), SUSPECT_MINOR_SECOND

        ratio, scale_type = rule
        if modifier is ModulationModifier.FORCE_MAJOR:
            scale_type = ScaleType.MAJOR
        elif modifier is ModulationModifier.FORCE_MINOR:
            scale_type = ScaleType.MINOR
        return Key(degree_note(key, degree), scale_type), ratio

    def _install(self, key: Key, tonic_hz: float) -> StateSnapshot:
        snapshot = self.state.install(key, tonic_hz)
        if self.metrics is not None:
            self.metrics.record_modulation()
        return snapshot

    def _record_rejected(self) -> None:
        if self.metrics is not None:
            self.metrics.record_rejected_modulation()
