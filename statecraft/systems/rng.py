"""Domain-separated deterministic RNG using xxhash.

Used to jitter seeded scenario values so that two runs with the same
seed start from identical state.

Formula: RNG_Value = Hash(WorldSeed, Domain, Key, Salt)
"""

from __future__ import annotations

import struct

import xxhash

from statecraft.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, salt) —
    no internal mutable state, therefore fully thread-safe.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: str, salt: int) -> int:
        payload = struct.pack("<qiq", self._seed, domain.value, salt) + key.encode("utf-8")
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: str, salt: int = 0) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, salt) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: str, salt: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, salt)
        return low + int(f * (high - low + 1))

    def uniform(self, domain: Domain, key: str, salt: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        return low + self.next_float(domain, key, salt) * (high - low)
