"""Small pure helpers shared by the rules and the verdict model."""

from decimal import ROUND_HALF_UP, Decimal

ABSENT_REGISTRATION_IDS: tuple[str, ...] = ("Unknown", "99-9999999")


def to_decimal(value: float | Decimal) -> Decimal:
    """Exact decimal form of a float as it prints, so 0.05 stays 0.05."""
    if isinstance(value, Decimal):
        return value
    return Decimal(repr(value))


def format_percent(ratio: float | Decimal) -> str:
    """Render ``ratio * 100`` as a whole number, rounding halves away from zero.

    Works for ratios of any magnitude; values too wide for ``quantize`` are
    rounded with ``to_integral_value`` and printed without an exponent.
    """
    value = (to_decimal(ratio) * 100).to_integral_value(rounding=ROUND_HALF_UP)
    return f"{value:f}"


def is_absent_registration_id(
    registration_id: str | None,
    absent_ids: tuple[str, ...] = ABSENT_REGISTRATION_IDS,
) -> bool:
    """True when a registration id is missing, blank, or a placeholder value."""
    if registration_id is None:
        return True
    cleaned = registration_id.strip()
    return not cleaned or cleaned in absent_ids
