"""Modulation interface definitions."""

from abc import abstractmethod
from typing import TYPE_CHECKING

from tuning.interfaces.intonation import IIntonation
from tuning.note import Note

if TYPE_CHECKING:
    from tuning.modulation import ModulationModifier


class IModulator(IIntonation):
    """Intonation that supports modulation to a new key."""

    @abstractmethod
    def modulate(self, note: Note, tonic_hz: float | None = None) -> None:
        """Modulate to a new key.

        Args:
            note: Tonic note of the new key
            tonic_hz: Frequency to force the tonic to, or None to derive it
                from the current key
        """
        pass

    @abstractmethod
    def set_subdominant(self, subdominant: bool) -> None:
        """Begin or end use of tunings consistent with the subdominant.

        Args:
            subdominant: Tune consistent with the subdominant if True,
                with the dominant if False
        """
        pass

    @abstractmethod
    def tonic_note(self) -> Note:
        """Return the tonic note of the current key."""
        pass

    @abstractmethod
    def revert(self) -> None:
        """Return to the original key and tonic frequency."""
        pass


class IModulatingIntonation(IModulator):
    """Modulator that also modulates by scale degree."""

    @abstractmethod
    def modulate_by_degree(
        self, degree: int, modifier: "str | ModulationModifier | None" = None
    ) -> None:
        """Modulate to a degree of the current scale.

        Args:
            degree: Degree of the current scale to modulate to (1-7)
            modifier: Modulation modifier forcing the new scale type

        Raises:
            InvalidArgument: If the degree is outside 1-7
            InvalidSyntax: If the modifier syntax is invalid
            UnsupportedNote: If an unsupported modulation is specified
        """
        pass
