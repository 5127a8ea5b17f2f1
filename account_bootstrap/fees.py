"""
Worst-case fee of a V3 transaction from its resource bounds.

All currency arithmetic is done on ints in FRI (the smallest STRK unit);
Decimal is only used to express the result in STRK.
"""

from decimal import Context, Decimal
from fractions import Fraction
from typing import Union

from starknet_py.constants import FIELD_PRIME
from starknet_py.net.client_models import ResourceBoundsMapping

from account_bootstrap.errors import FeeOverflowError

STRK_DECIMALS = 18

MAX_AMOUNT_BOUND = 2**64  # u64
MAX_PRICE_BOUND = 2**128  # u128

RESOURCE_KINDS = ("l1_gas", "l1_data_gas", "l2_gas")

# Wide enough for any felt-sized fee
_STRK_CONTEXT = Context(prec=80)


def _checked(value: int, bound: int, label: str) -> int:
    if value < 0 or value >= bound:
        raise FeeOverflowError(f"{label} {value} does not fit in {bound.bit_length() - 1} bits")
    return value


def overall_fee(
    resource_bounds: ResourceBoundsMapping,
    tip: int = 0,
    multiplier: Union[int, float, str, Fraction] = 1,
) -> int:
    """Return the maximum fee in FRI the transaction can be charged.

    Sums max_amount * max_price_per_unit over every resource kind, scales the
    sum by ``multiplier`` (rounding up) and adds ``tip``.
    """
    # 1.5 -> 3/2, not its binary approximation
    factor = Fraction(str(multiplier)) if isinstance(multiplier, float) else Fraction(multiplier)
    if factor < 0:
        raise FeeOverflowError(f"fee multiplier must not be negative: {multiplier}")

    total = 0
    for kind in RESOURCE_KINDS:
        bounds = getattr(resource_bounds, kind)
        amount = _checked(bounds.max_amount, MAX_AMOUNT_BOUND, f"{kind}.max_amount")
        price = _checked(bounds.max_price_per_unit, MAX_PRICE_BOUND, f"{kind}.max_price_per_unit")
        total += amount * price

    scaled = total * factor
    fee = scaled.numerator // scaled.denominator
    if fee * scaled.denominator != scaled.numerator:
        fee += 1
    fee += _checked(tip, MAX_AMOUNT_BOUND, "tip")

    if fee >= FIELD_PRIME:
        raise FeeOverflowError(f"overall fee {fee} does not fit in a field element")
    return fee


def fri_to_strk(amount: int) -> Decimal:
    """Convert FRI to STRK without losing precision"""
    return _STRK_CONTEXT.divide(Decimal(amount), Decimal(10) ** STRK_DECIMALS)


def format_strk(amount: Decimal) -> str:
    """Render a STRK amount for display, e.g. ``0.000001``."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
