"""Money Arithmetic — cent-exact rounding and tolerant comparison for monetary values.

Invariants:
    - Every helper returns a Decimal quantized to 2 places (round half away from zero)
    - Floats enter through their shortest str() form: 25.005 stays 25.005, never 25.00499...
    - Comparisons treat amounts less than one cent apart as equal

Design Decisions:
    - Decimal over float: rounding happens at every arithmetic boundary, so residues
      never accumulate across add/subtract/multiply chains
    - Pure functions, no IO (ADR: functional core)
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from faktur.core.errors import ValidationError


CENT = Decimal("0.01")
MONEY_TOLERANCE = Decimal("0.01")
ZERO = Decimal("0.00")


def as_decimal(value: object, field: str = "amount") -> Decimal:
    """Coerce int/float/str/Decimal into a finite Decimal, or raise ValidationError."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field)
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number, got {value!r}", field)
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number", field)
    return result


def round_money(amount: object) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return as_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def money_equals(a: object, b: object) -> bool:
    return abs(round_money(a) - round_money(b)) < MONEY_TOLERANCE


def money_gte(a: object, b: object) -> bool:
    """a >= b, with amounts within one cent treated as equal."""
    rounded_a, rounded_b = round_money(a), round_money(b)
    return rounded_a >= rounded_b or abs(rounded_a - rounded_b) < MONEY_TOLERANCE


def money_lt(a: object, b: object) -> bool:
    """a < b by at least one cent."""
    rounded_a, rounded_b = round_money(a), round_money(b)
    return rounded_a < rounded_b and abs(rounded_a - rounded_b) >= MONEY_TOLERANCE


def money_add(a: object, b: object) -> Decimal:
    return round_money(as_decimal(a) + as_decimal(b))


def money_subtract(a: object, b: object) -> Decimal:
    return round_money(as_decimal(a) - as_decimal(b))


def money_multiply(a: object, b: object) -> Decimal:
    return round_money(as_decimal(a) * as_decimal(b))
