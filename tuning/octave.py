"""Octave folding into the reference band."""

import math

from tuning.exceptions import InvalidArgument

# Frequency of A above middle C
CONCERT_A_HZ = 440.0

# Just middle C, a major sixth (5/3) below concert A
MIDDLE_C_HZ = CONCERT_A_HZ * 3.0 / 5.0

# Slack below middle C so tonics near it are not pushed an octave up
OCTAVE_MARGIN_HZ = 8.0


def octave_band(
    reference_hz: float = MIDDLE_C_HZ, margin_hz: float = OCTAVE_MARGIN_HZ
) -> tuple[float, float]:
    """Return the half-open band ``[lower, upper)`` that octave0() folds into."""
    lower = reference_hz - margin_hz
    return lower, 2.0 * lower


def octave0(
    frequency_hz: float,
    reference_hz: float = MIDDLE_C_HZ,
    margin_hz: float = OCTAVE_MARGIN_HZ,
) -> float:
    """Fold a frequency into the reference octave.

    Doubles while below ``reference - margin`` and halves while at or above
    twice that. Idempotent for values already in the band.

    Args:
        frequency_hz: Positive frequency to fold
        reference_hz: Reference pitch (middle C by default)
        margin_hz: Distance of the band's lower edge below the reference

    Returns:
        Frequency in ``[reference - margin, 2 * (reference - margin))``

    Raises:
        InvalidArgument: If the frequency is not a positive finite number
    """
    if not math.isfinite(frequency_hz) or frequency_hz <= 0.0:
        raise InvalidArgument(f"Cannot fold frequency {frequency_hz!r}")

    lower, upper = octave_band(reference_hz, margin_hz)
    if lower <= 0.0:
        raise InvalidArgument(
            f"Invalid octave band: reference={reference_hz}, margin={margin_hz}"
        )

    while frequency_hz < lower:
        frequency_hz *= 2.0
    while frequency_hz >= upper:
        frequency_hz /= 2.0
    return frequency_hz


def apply_octave(frequency_hz: float, octave: int) -> float:
    """Double per positive octave, halve per negative octave."""
    while octave > 0:
        frequency_hz *= 2.0
        octave -= 1
    while octave < 0:
        frequency_hz /= 2.0
        octave += 1
    return frequency_hz
