"""Build intonations from a name and a starting key name."""

import logging

from tuning.config import IntuneConfig, get_config
from tuning.diatonic import Diatonic
from tuning.exceptions import ConfigurationError, InvalidSyntax, UnsupportedKey
from tuning.interfaces.intonation import IIntonation
from tuning.key_table import parse_key_name
from tuning.temperaments import EqualTemperament, Pythagorean

logger = logging.getLogger(__name__)

DIATONIC = "diatonic"
PYTHAGOREAN = "pythagorean"
EQUAL_TEMPERAMENT = "equaltemperament"

INTONATION_NAMES = (DIATONIC, PYTHAGOREAN, EQUAL_TEMPERAMENT)


def resolve_intonation_name(name: str) -> str:
    """Return the full intonation name an abbreviation stands for.

    Any non-empty prefix matches, case-insensitively (``"d"``, ``"pyth"``,
    ``"Equal"``).

    Raises:
        ConfigurationError: If the name matches no intonation
    """
    prefix = name.strip().lower()
    if prefix:
        for full_name in INTONATION_NAMES:
            if full_name.startswith(prefix):
                return full_name
    raise ConfigurationError(
        f"Unknown intonation {name!r} (expected one of {', '.join(INTONATION_NAMES)})"
    )


def create_intonation(
    name: str | None = None,
    key_name: str | None = None,
    config: IntuneConfig | None = None,
) -> IIntonation:
    """Create an intonation.

    Args:
        name: Intonation name or prefix (configured default if None)
        key_name: Starting key, e.g. ``"E-"`` for E-flat major or ``"f#"``
            for F-sharp minor; the configured default key if None.
            Pythagorean uses only its tonic; equal temperament ignores it.
        config: Configuration (global configuration if None)

    Returns:
        The intonation

    Raises:
        ConfigurationError: If the intonation or key name is invalid
    """
    config = config or get_config()
    full_name = resolve_intonation_name(name or config.default_intonation)

    if full_name == EQUAL_TEMPERAMENT:
        logger.info("Created equal temperament intonation")
        return EqualTemperament(config.concert_a_hz)

    if full_name == PYTHAGOREAN and key_name is None:
        logger.info("Created Pythagorean intonation on C")
        return Pythagorean(concert_a_hz=config.concert_a_hz)

    try:
        key = parse_key_name(key_name or config.default_key)
    except (InvalidSyntax, UnsupportedKey) as e:
        raise ConfigurationError(f"Cannot build {full_name} intonation: {e}") from e

    if full_name == PYTHAGOREAN:
        logger.info(f"Created Pythagorean intonation on {key.tonic}")
        return Pythagorean(key.tonic, concert_a_hz=config.concert_a_hz)

    tonic_hz = Pythagorean(concert_a_hz=config.concert_a_hz).frequency(key.tonic)
    logger.info(
        f"Created diatonic intonation in {key}",
        extra={"key": str(key), "tonic_hz": tonic_hz},
    )
    return Diatonic(key, tonic_hz, config=config)
