"""Portable pseudo-random number generator built on the RC4 keystream.

Suitable for general-purpose game randomness; not for cryptographic or
financial use and not thread-safe.
"""

from __future__ import annotations

import math
import sys
import time

_ULONG_BITS = 64
_UINT_BITS = 32
_LONG_MAX = (1 << (_ULONG_BITS - 1)) - 1
_INT_MAX = (1 << (_UINT_BITS - 1)) - 1
_ULONG_RANGE = float(1 << _ULONG_BITS)
_HALF_MAX = sys.float_info.max / 2
_NORMAL_LIMIT = math.log(_HALF_MAX) / _HALF_MAX


class Prng:
    """RC4-based generator of octets, integers and floats."""

    def __init__(self, seed: bytes | None = None) -> None:
        self._state = list(range(256))
        self._i = 0
        self._j = 0
        self._seeded = False
        self._time_seed = 0
        self._pending_normal: float | None = None
        if seed is not None:
            self.seed_bytes(seed)

    def seed_time(self) -> None:
        """Seed from the current time; later calls use the next second."""
        if self._time_seed == 0:
            self._time_seed = int(time.time())
        else:
            self._time_seed += 1
        self.seed_bytes(self._time_seed.to_bytes(8, sys.byteorder, signed=True))

    def seed_bytes(self, key: bytes) -> None:
        """Seed from a key; at most its first 256 octets are used."""
        key = bytes(key)
        if not key:
            raise ValueError("seed key must not be empty")
        state = list(range(256))
        j = 0
        for i in range(256):
            j = (j + state[i] + key[i % len(key)]) & 255
            state[i], state[j] = state[j], state[i]
        self._state = state
        self._i = 0
        self._j = 0
        self._seeded = True

    def next_octet(self) -> int:
        """Return a pseudo-random integer in [0, 255]."""
        if not self._seeded:
            self.seed_time()
        state = self._state
        self._i = (self._i + 1) & 255
        self._j = (self._j + state[self._i]) & 255
        state[self._i], state[self._j] = state[self._j], state[self._i]
        return state[(state[self._i] + state[self._j]) & 255]

    def next_bytes(self, size: int) -> bytes:
        """Return ``size`` pseudo-random bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        return bytes(self.next_octet() for _ in range(size))

    def _next_bits(self, bits: int) -> int:
        value = 0
        for _ in range(bits // 8):
            value = (value << 8) | self.next_octet()
        return value

    def next_ulong(self) -> int:
        """Return a pseudo-random integer in [0, 2**64 - 1]."""
        return self._next_bits(_ULONG_BITS)

    def next_long(self) -> int:
        """Return a pseudo-random integer in [0, 2**63 - 1]."""
        return self.next_ulong() & _LONG_MAX

    def next_uint(self) -> int:
        """Return a pseudo-random integer in [0, 2**32 - 1]."""
        return self._next_bits(_UINT_BITS)

    def next_int(self) -> int:
        """Return a pseudo-random integer in [0, 2**31 - 1]."""
        return self.next_uint() & _INT_MAX

    def next_double(self) -> float:
        """Return a uniformly distributed float in [0, 1)."""
        while True:
            value = self.next_ulong() / _ULONG_RANGE
            if 0.0 <= value < 1.0:
                return value

    def next_normal(self) -> float:
        """Return a float from the normal distribution with mean 0, deviation 1."""
        if self._pending_normal is not None:
            value, self._pending_normal = self._pending_normal, None
            return value
        while True:
            v1 = 2.0 * self.next_double() - 1.0
            v2 = 2.0 * self.next_double() - 1.0
            s = v1 * v1 + v2 * v2
            if _NORMAL_LIMIT < s < 1:
                break
        scale = math.sqrt(-2.0 * math.log(s) / s)
        self._pending_normal = v2 * scale
        return v1 * scale