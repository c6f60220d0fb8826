import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from models.presentation import PLACEHOLDER


@dataclass(frozen=True)
class NumberConvention:
    group: str
    decimal: str
    # Integer digits needed before grouping kicks in (es-ES only groups from 10 000)
    min_grouping: int = 4


CONVENTIONS = {
    "en": NumberConvention(group=",", decimal="."),
    "es": NumberConvention(group=".", decimal=",", min_grouping=5),
}


def max_fraction_digits(value: float) -> int:
    magnitude = abs(value)
    if magnitude >= 100:
        return 2
    if magnitude >= 1:
        return 4
    return 6


def format_rate(value, convention: NumberConvention | str = "en") -> str:
    """Render a rate with 2 to 2/4/6 decimals depending on its magnitude.

    Returns the placeholder for anything that is not a finite number.
    """
    if isinstance(convention, str):
        convention = CONVENTIONS.get(convention, CONVENTIONS["en"])
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return PLACEHOLDER
    try:
        value = float(value)
    except OverflowError:
        return PLACEHOLDER
    if not math.isfinite(value):
        return PLACEHOLDER

    digits = max_fraction_digits(value)
    with localcontext() as ctx:
        # Enough precision for any finite double
        ctx.prec = 400
        rounded = abs(Decimal(value)).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    integer, _, fraction = f"{rounded:f}".partition(".")
    fraction = fraction.rstrip("0").ljust(2, "0")

    if len(integer) >= convention.min_grouping:
        integer = f"{int(integer):,}".replace(",", convention.group)

    sign = "-" if value < 0 and rounded != 0 else ""
    return f"{sign}{integer}{convention.decimal}{fraction}"
