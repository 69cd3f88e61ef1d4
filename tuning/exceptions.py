"""Custom exceptions for the Intune tuning core."""


class IntuneError(Exception):
    """Base exception for all Intune errors."""

    pass


class UnsupportedKey(IntuneError):
    """Key is absent from the key table (construction or modulation target)."""

    pass


class UnsupportedNote(IntuneError):
    """Note cannot be tuned or spelled in the current key.

    Raised when an accidental matches no recognized variant of its degree,
    when a MIDI note number lies outside 0-127, or when raising/lowering
    would exceed a double accidental.
    """

    pass


class UnsupportedModulation(UnsupportedNote):
    """Modulation rule exists in name only (e.g. to the 2nd from a minor key)."""

    pass


class InvalidArgument(IntuneError, ValueError):
    """Argument outside its valid range (modulation degree, frequency)."""

    pass


class InvalidSyntax(IntuneError):
    """Unparsable modifier token, key name or modulation sequence."""

    pass


class ConfigurationError(IntuneError):
    """Error in tuning configuration or intonation selection."""

    pass
