"""Small numeric helpers: clamping, safe trigonometry and tiny sorting networks."""

from __future__ import annotations

import math
from typing import Any, TypeVar

T = TypeVar("T")


def _max(a: T, b: T) -> T:
    # Keeps the first argument on ties and the second when comparison fails (NaN).
    return a if a >= b else b  # type: ignore[operator]


def _min(a: T, b: T) -> T:
    return a if a <= b else b  # type: ignore[operator]


def clamp(value: T, low: Any = 0, high: Any = 1) -> T:
    """Limit ``value`` to the closed range [low, high]."""
    return _min(high, _max(low, value))


def acos_safe(value: float) -> float:
    """Arc cosine that clamps its argument to [-1, 1] first."""
    return math.acos(clamp(value, -1.0, 1.0))


def asin_safe(value: float) -> float:
    """Arc sine that clamps its argument to [-1, 1] first."""
    return math.asin(clamp(value, -1.0, 1.0))


def sqrt_safe(value: float) -> float:
    """Square root that treats negative input (and NaN) as zero."""
    return math.sqrt(_max(value, 0.0))


def is_finite(value: float | int) -> bool:
    """True for every integer and for floats that are neither infinite nor NaN."""
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def sort2(v0: T, v1: T, ascending: bool = True) -> tuple[T, T]:
    """Return the two values in the requested order."""
    lo, hi = _min(v0, v1), _max(v0, v1)
    return (lo, hi) if ascending else (hi, lo)


def sort3(v0: T, v1: T, v2: T, ascending: bool = True) -> tuple[T, T, T]:
    """Return the three values in the requested order using a sorting network."""
    n01 = _min(v0, v1)
    x01 = _max(v0, v1)
    n2x01 = _min(v2, x01)
    r0 = _min(n2x01, n01)
    r1 = _max(n01, n2x01)
    r2 = _max(x01, v2)
    return (r0, r1, r2) if ascending else (r2, r1, r0)


def sort4(v0: T, v1: T, v2: T, v3: T, ascending: bool = True) -> tuple[T, T, T, T]:
    """Return the four values in the requested order using a sorting network."""
    n01 = _min(v0, v1)
    x01 = _max(v0, v1)
    n23 = _min(v2, v3)
    x23 = _max(v2, v3)
    x02 = _max(n23, n01)
    n13 = _min(x01, x23)
    r0 = _min(n01, n23)
    r1 = _min(x02, n13)
    r2 = _max(n13, x02)
    r3 = _max(x23, x01)
    return (r0, r1, r2, r3) if ascending else (r3, r2, r1, r0)