"""Intune - Diatonic just intonation for keyboard performance.

This module contains the key table, note model, frequency resolution,
MIDI note spelling, modulation and the shared intonation state, plus the
Pythagorean and equal temperament reference intonations.
"""

from tuning.config import IntuneConfig, get_config
from tuning.diatonic import Diatonic
from tuning.exceptions import (
    ConfigurationError,
    IntuneError,
    InvalidArgument,
    InvalidSyntax,
    UnsupportedKey,
    UnsupportedModulation,
    UnsupportedNote,
)
from tuning.factory import create_intonation
from tuning.key_table import Key, ScaleType, accidentals_for, parse_key_name, supported_keys
from tuning.metrics import IntonationMetrics
from tuning.modulation import ModulationEngine, ModulationModifier
from tuning.note import Accidental, Note, PitchClass, lower_note, raise_note
from tuning.octave import octave0
from tuning.resolver import FrequencyResolver, ResolutionMode
from tuning.state import IntonationState, StateSnapshot
from tuning.temperaments import EqualTemperament, Pythagorean

__version__ = "1.0.0"

__all__ = [
    # Intonations
    "Diatonic",
    "Pythagorean",
    "EqualTemperament",
    "create_intonation",
    # Data model
    "PitchClass",
    "Accidental",
    "Note",
    "raise_note",
    "lower_note",
    "ScaleType",
    "Key",
    "accidentals_for",
    "parse_key_name",
    "supported_keys",
    # Core components
    "octave0",
    "FrequencyResolver",
    "ResolutionMode",
    "IntonationState",
    "StateSnapshot",
    "ModulationEngine",
    "ModulationModifier",
    # Configuration
    "IntuneConfig",
    "get_config",
    # Metrics
    "IntonationMetrics",
    # Errors
    "IntuneError",
    "UnsupportedKey",
    "UnsupportedNote",
    "UnsupportedModulation",
    "InvalidArgument",
    "InvalidSyntax",
    "ConfigurationError",
]
