"""Integer tick arithmetic for prices.

Prices are int ticks in thousandths of a dollar: 0 = $0.000, 1000 = $1.000.
Inversion across complementary outcomes is exact: 1000 - ticks.
"""

MIN_TICKS = 0
MAX_TICKS = 1000
TICKS_PER_UNIT = 1000


def clamp_ticks(ticks: int) -> int:
    """Clamp into [0, 1000]. Out-of-range prices are recovered, never raised."""
    if ticks < MIN_TICKS:
        return MIN_TICKS
    if ticks > MAX_TICKS:
        return MAX_TICKS
    return ticks


def invert_ticks(ticks: int) -> int:
    """Price of the complementary outcome: 1000 - ticks, clamped."""
    return clamp_ticks(MAX_TICKS - ticks)


def is_valid_ticks(ticks: int) -> bool:
    return MIN_TICKS <= ticks <= MAX_TICKS


def ticks_to_price(ticks: int) -> float:
    """650 -> 0.65"""
    return ticks / TICKS_PER_UNIT


def ticks_to_cents_display(ticks: int) -> str:
    """Cents label used by depth ladders: 655 -> '65.5¢'."""
    return f"{ticks / 10:.1f}¢"
