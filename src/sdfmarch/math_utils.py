from __future__ import annotations


def clamp_float(x: float, lo: float, hi: float) -> float:
    """Clamp a Python float to [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def lerp(a: float, b: float, t: float) -> float:
    return (1.0 - t) * a + t * b


def difference(a: float, b: float) -> float:
    """Hard CSG difference: inside ``a`` and outside ``b``."""
    return max(a, -b)


def smooth_min(a: float, b: float, k: float) -> float:
    """Polynomial smooth minimum with blend radius ``k``.

    Never exceeds ``min(a, b)`` for ``k > 0``. ``k == 0`` divides by zero.
    """
    h = clamp_float(0.5 + 0.5 * (a - b) / k, 0.0, 1.0)
    return lerp(a, b, h) - k * h * (1.0 - h)


def smooth_max(a: float, b: float, k: float) -> float:
    return smooth_min(a, b, -k)


def smooth_difference(a: float, b: float, k: float) -> float:
    return smooth_min(a, -b, -k)
