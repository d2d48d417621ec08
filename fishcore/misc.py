"""Engine identification, debug statistics and small string/file helpers."""

from __future__ import annotations

import math
import os
import re
import threading

ENGINE_NAME = "Fishcore"
VERSION = "17.1"
AUTHORS = "the Fishcore developers (see AUTHORS file)"

MAX_DEBUG_SLOTS = 32

_SIZE_T_MAX = (1 << 64) - 1
_C_WHITESPACE = frozenset(" \t\n\v\f\r")
_UNSIGNED_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def engine_version_info() -> str:
    """Return the engine name followed by its version."""
    return f"{ENGINE_NAME} {VERSION}"


def engine_info(to_uci: bool = False) -> str:
    """Return the engine name, version and authors.

    With ``to_uci`` the authors are given on an ``id author`` line.
    """
    return engine_version_info() + ("\nid author " if to_uci else " by ") + AUTHORS


def remove_whitespace(s: str) -> str:
    """Return ``s`` with every ASCII whitespace character removed."""
    return "".join(c for c in s if c not in _C_WHITESPACE)


def is_whitespace(s: str) -> bool:
    """Return True if ``s`` holds only ASCII whitespace (or nothing)."""
    return all(c in _C_WHITESPACE for c in s)


def str_to_size_t(s: str) -> int:
    """Parse a leading unsigned decimal number as a 64-bit size.

    Leading whitespace is skipped and trailing text ignored. A negative
    number wraps around modulo 2**64. Raises ValueError if no number is
    found and OverflowError if it does not fit in 64 bits.
    """
    match = _UNSIGNED_PREFIX.match(s)
    if match is None:
        raise ValueError(f"no number in {s!r}")
    sign, digits = match.groups()
    value = int(digits)
    if value > _SIZE_T_MAX:
        raise OverflowError(f"number out of range: {s!r}")
    if sign == "-":
        value = (-value) & _SIZE_T_MAX
    return value


def read_file_to_string(path: str | os.PathLike[str]) -> bytes | None:
    """Return the whole content of a file as bytes, or None if it cannot be read."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError:
        return None


def get_working_directory() -> str:
    """Return the current working directory, or an empty string on failure."""
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Return the directory part of ``argv0``, ending with a separator.

    A bare program name gives the working directory, and a leading ``./``
    is replaced by the working directory.
    """
    separator = "\\" if os.name == "nt" else "/"
    working_directory = get_working_directory()

    pos = max(argv0.rfind("\\"), argv0.rfind("/"))
    directory = "." + separator if pos < 0 else argv0[: pos + 1]

    if directory.startswith("." + separator):
        directory = working_directory + directory[1:]
    return directory


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


class DebugStats:
    """Run-time statistics collected in numbered slots for debugging."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        self._hit = [[0, 0] for _ in range(MAX_DEBUG_SLOTS)]
        self._mean = [[0, 0] for _ in range(MAX_DEBUG_SLOTS)]
        self._stdev = [[0, 0, 0] for _ in range(MAX_DEBUG_SLOTS)]
        self._correl = [[0] * 6 for _ in range(MAX_DEBUG_SLOTS)]
        self._extremes = [[0, _INT64_MIN, _INT64_MAX] for _ in range(MAX_DEBUG_SLOTS)]

    @staticmethod
    def _check_slot(slot: int) -> int:
        if not 0 <= slot < MAX_DEBUG_SLOTS:
            raise IndexError(f"debug slot out of range: {slot}")
        return slot

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        """Count one event in ``slot`` and whether ``cond`` held."""
        entry = self._hit[self._check_slot(slot)]
        with self._lock:
            entry[0] += 1
            if cond:
                entry[1] += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the running mean of ``slot``."""
        entry = self._mean[self._check_slot(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        """Add ``value`` to the standard deviation of ``slot``."""
        entry = self._stdev[self._check_slot(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] += value
            entry[2] += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        """Track the minimum and maximum of the values in ``slot``."""
        entry = self._extremes[self._check_slot(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] = max(entry[1], value)
            entry[2] = min(entry[2], value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        """Add a pair of values to the correlation of ``slot``."""
        entry = self._correl[self._check_slot(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] += value1
            entry[2] += value1 * value1
            entry[3] += value2
            entry[4] += value2 * value2
            entry[5] += value1 * value2

    def report(self) -> str:
        """Return one line per used slot and statistic, empty if nothing was recorded."""
        lines: list[str] = []
        with self._lock:
            for i, (n, hits) in enumerate(self._hit):
                if n:
                    lines.append(
                        f"Hit #{i}: Total {n} Hits {hits} Hit Rate (%) {100.0 * hits / n:g}"
                    )
            for i, (n, total) in enumerate(self._mean):
                if n:
                    lines.append(f"Mean #{i}: Total {n} Mean {total / n:g}")
            for i, (n, total, squares) in enumerate(self._stdev):
                if n:
                    r = _sqrt(squares / n - (total / n) ** 2)
                    lines.append(f"Stdev #{i}: Total {n} Stdev {r:g}")
            for i, (n, high, low) in enumerate(self._extremes):
                if n:
                    lines.append(f"Extremity #{i}: Total {n} Min {low} Max {high}")
            for i, (n, s1, q1, s2, q2, p) in enumerate(self._correl):
                if n:
                    e1, e2 = s1 / n, s2 / n
                    r = _ratio(
                        p / n - e1 * e2,
                        _sqrt(q1 / n - e1 * e1) * _sqrt(q2 / n - e2 * e2),
                    )
                    lines.append(f"Correl. #{i}: Total {n} Coefficient {r:g}")
        return "".join(line + "\n" for line in lines)

    def clear(self) -> None:
        """Forget everything recorded so far."""
        with self._lock:
            self._reset()