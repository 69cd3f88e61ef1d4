"""Shared intonation state guarded by a single lock.

One instance is shared between the pitch-producing path (readers, possibly
a real-time thread) and the modulation-control path (the writer). The
(key, tonic, subdominant) triple is always read and replaced as one unit.
"""

import logging
import math
import threading
from dataclasses import dataclass

from tuning.exceptions import InvalidArgument
from tuning.key_table import Key, accidentals_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateSnapshot:
    """Consistent view of the state used for a single lookup or modulation."""

    key: Key
    tonic_hz: float
    subdominant: bool


class IntonationState:
    """Thread-safe record of current and original key/tonic.

    Uses a re-entrant lock so a writer can hold it across a
    read-compute-install sequence while calling snapshot() and install().
    """

    def __init__(self, key: Key, tonic_hz: float, subdominant: bool = False):
        """Initialize state.

        Args:
            key: Nominal key of the performance (also the revert target)
            tonic_hz: Frequency of the key's tonic (also the revert target)
            subdominant: Initial subdominant tuning flag

        Raises:
            UnsupportedKey: If the key is not in the key table
            InvalidArgument: If the tonic frequency is not positive
        """
        accidentals_for(key)
        _check_frequency(tonic_hz)

        self.original_key = key
        self.original_tonic_hz = tonic_hz
        self._key = key
        self._tonic_hz = tonic_hz
        self._subdominant = subdominant
        self.lock = threading.RLock()

        logger.info(
            f"IntonationState initialized in {key} at {tonic_hz:.3f}Hz",
            extra={"key": str(key), "tonic_hz": tonic_hz},
        )

    def snapshot(self) -> StateSnapshot:
        """Return (key, tonic, subdominant) read atomically.

        Thread-safe: Uses internal lock
        """
        with self.lock:
            return StateSnapshot(self._key, self._tonic_hz, self._subdominant)

    def install(self, key: Key, tonic_hz: float) -> StateSnapshot:
        """Replace current key and tonic frequency together.

        Args:
            key: New current key
            tonic_hz: New tonic frequency

        Returns:
            Snapshot of the state after the install

        Raises:
            UnsupportedKey: If the key is not in the key table (state unchanged)
            InvalidArgument: If the frequency is not positive (state unchanged)

        Thread-safe: Uses internal lock
        """
        accidentals_for(key)
        _check_frequency(tonic_hz)
        with self.lock:
            self._key = key
            self._tonic_hz = tonic_hz
            logger.info(
                f"Current key now {key}, tonic {tonic_hz:.3f}Hz, "
                f"ratio to original tonic {tonic_hz / self.original_tonic_hz:.6f}",
                extra={"key": str(key), "tonic_hz": tonic_hz},
            )
            return StateSnapshot(self._key, self._tonic_hz, self._subdominant)

    def set_subdominant(self, subdominant: bool) -> None:
        """Turn tunings consistent with the subdominant on or off.

        Thread-safe: Uses internal lock
        """
        with self.lock:
            self._subdominant = subdominant
            logger.debug(f"Subdominant tuning {'on' if subdominant else 'off'}")

    def revert(self) -> StateSnapshot:
        """Return to the construction-time key and tonic frequency.

        Thread-safe: Uses internal lock
        """
        with self.lock:
            return self.install(self.original_key, self.original_tonic_hz)

    @property
    def current_key(self) -> Key:
        with self.lock:
            return self._key

    @property
    def tonic_hz(self) -> float:
        with self.lock:
            return self._tonic_hz

    @property
    def subdominant(self) -> bool:
        with self.lock:
            return self._subdominant

    def __repr__(self) -> str:
        """String representation for debugging."""
        snap = self.snapshot()
        return (
            f"IntonationState(key={snap.key}, tonic_hz={snap.tonic_hz:.3f}, "
            f"subdominant={snap.subdominant})"
        )


def _check_frequency(tonic_hz: float) -> None:
    if not math.isfinite(tonic_hz) or tonic_hz <= 0.0:
        raise InvalidArgument(f"Tonic frequency must be positive, got {tonic_hz!r}")
