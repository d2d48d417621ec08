"""Small helpers shared across the engine: PRNG, timing, string and list utilities."""

from __future__ import annotations

import time
from typing import Callable, MutableSequence, TypeVar

T = TypeVar("T")

_MASK64 = (1 << 64) - 1
_MULTIPLIER = 2685821657736338717


class PRNG:
    """xorshift64star pseudo-random generator producing 64-bit numbers.

    The internal state is a single non-zero 64-bit integer and the period
    is 2**64 - 1.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        seed &= _MASK64
        if seed == 0:
            raise ValueError("PRNG seed must be non-zero")
        self._state = seed

    def rand64(self) -> int:
        """Return the next 64-bit pseudo-random number."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * _MULTIPLIER) & _MASK64

    def sparse_rand(self) -> int:
        """Return a 64-bit number with about 1/8 of its bits set."""
        return self.rand64() & self.rand64() & self.rand64()


def now() -> int:
    """Return a monotonic timestamp in milliseconds."""
    return time.monotonic_ns() // 1_000_000


def mul_hi64(a: int, b: int) -> int:
    """Return the high 64 bits of the 128-bit product of two 64-bit values."""
    for value in (a, b):
        if not 0 <= value <= _MASK64:
            raise ValueError(f"value out of 64-bit unsigned range: {value}")
    return (a * b) >> 64


def split(s: str, delimiter: str) -> list[str]:
    """Split ``s`` on every occurrence of ``delimiter``.

    An empty string gives an empty list; otherwise empty pieces are kept.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    if not s:
        return []
    return s.split(delimiter)


def move_to_front(items: MutableSequence[T], pred: Callable[[T], bool]) -> None:
    """Move the first element satisfying ``pred`` to the front, in place.

    The relative order of the other elements is preserved. Nothing happens
    if no element matches.
    """
    for index, item in enumerate(items):
        if pred(item):
            del items[index]
            items.insert(0, item)
            return