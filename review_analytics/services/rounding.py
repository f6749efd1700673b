import math


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round: halves go towards positive infinity."""

    return int(math.floor(value + 0.5))


def round_to(value: float, digits: int) -> float:
    factor = 10 ** digits
    return round_half_up(value * factor) / factor
