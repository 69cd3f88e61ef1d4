"""Interfaces for Intune intonation types.

Abstract Base Classes (ABCs) defining contracts for frequency lookup,
MIDI note spelling and modulation.
"""

from tuning.interfaces.intonation import IIntonation
from tuning.interfaces.modulation import IModulatingIntonation, IModulator

__all__ = [
    # Lookup
    "IIntonation",
    # Modulation
    "IModulator",
    "IModulatingIntonation",
]
