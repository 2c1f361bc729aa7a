"""Half-up rounding for scores and money amounts."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float) -> int:
    """17.5 -> 18, 14.5 -> 15 (builtin ``round`` gives 14)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
