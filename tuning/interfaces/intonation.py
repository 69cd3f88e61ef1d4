"""Intonation interface definitions."""

from abc import ABC, abstractmethod

from tuning.note import Note


class IIntonation(ABC):
    """Maps notes to frequencies and MIDI note numbers to notes."""

    @abstractmethod
    def frequency(self, note: Note) -> float:
        """Return the frequency of a note.

        Args:
            note: Note to tune

        Returns:
            Frequency in Hz

        Raises:
            UnsupportedNote: If the frequency cannot be computed (for
                instance, if the note has too many accidentals)
        """
        pass

    @abstractmethod
    def midi_note_number_to_note(self, note_number: int) -> Note:
        """Return the note corresponding to a MIDI note number.

        Args:
            note_number: MIDI note number (0-127)

        Returns:
            The corresponding note

        Raises:
            UnsupportedNote: If there is no such note
        """
        pass
