"""
Round-robin API key rotation.

One KeyRotator exists per provider for the life of the process and is
shared by every in-flight request. Keys come back in insertion order and
wrap around forever; there is no health tracking or cooldown, a key that
just failed is eligible again after one full cycle.
"""
import threading
from typing import Iterable, Tuple

from .errors import NoCredentialsError


class KeyRotator:
    """Thread-safe round-robin over a fixed, ordered set of API keys."""

    def __init__(self, keys: Iterable[str], name: str = "groq"):
        self.name = name
        self._keys: Tuple[str, ...] = tuple(keys)
        self._cursor = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        """
        Return the key under the cursor and advance it.

        The read-advance-return sequence happens under a lock so two
        concurrent callers never receive the key from the same slot.

        Raises:
            NoCredentialsError: If the key set is empty
        """
        return self.next_with_number()[1]

    def next_with_number(self) -> Tuple[int, str]:
        """Like next(), but also return the 1-based key number for logging."""
        if not self._keys:
            raise NoCredentialsError(f"No {self.name} API keys configured")
        with self._lock:
            index = self._cursor
            self._cursor = (self._cursor + 1) % len(self._keys)
            return index + 1, self._keys[index]

    def size(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        # Never include the keys themselves
        return f"KeyRotator(name={self.name!r}, size={len(self._keys)})"
