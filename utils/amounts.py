"""
NEAR amount conversion and formatting helpers.
"""
import re
from decimal import Decimal, ROUND_CEILING, ROUND_DOWN
from random import Random
from typing import Any, Union

from utils.exceptions import ValidationError

# 1 NEAR = 10^24 yoctoNEAR
NEAR_NOMINATION_EXP = 24

TWO_PLACES = Decimal('0.01')

# Largest draw bound that still quantizes to two places within Decimal's 28 digits
MAX_DRAW_AMOUNT = 10 ** 25

_AMOUNT_PATTERN = re.compile(r'^(\d*)(?:\.(\d*))?$')


def parse_near_amount(amount: Any) -> int:
    """
    Convert a decimal NEAR amount (e.g. "5.25") into yoctoNEAR.

    Thousands separators are ignored. Signs, exponents and more than
    24 fractional digits are rejected.

    Args:
        amount: Decimal textual amount

    Returns:
        Amount in yoctoNEAR

    Raises:
        ValidationError: If the amount can't be parsed
    """
    if not isinstance(amount, str):
        raise ValidationError(f'Invalid amount: {amount}', field='amount', value=amount)

    cleaned = amount.strip().replace(',', '')
    match = _AMOUNT_PATTERN.match(cleaned)
    if not cleaned or cleaned == '.' or not match:
        raise ValidationError(f'Invalid amount: {amount}', field='amount', value=amount)

    whole, fraction = match.group(1) or '0', match.group(2) or ''
    if len(fraction) > NEAR_NOMINATION_EXP:
        raise ValidationError(
            f'Invalid amount: {amount} (more than {NEAR_NOMINATION_EXP} decimals)',
            field='amount',
            value=amount
        )

    return int(whole + fraction.ljust(NEAR_NOMINATION_EXP, '0'))


def format_amount(value: Union[Decimal, float, int, str]) -> str:
    """Format a NEAR amount with exactly two decimal places."""
    return str(Decimal(str(value)).quantize(TWO_PLACES))


def draw_amount(rng: Random, min_amount: float, max_amount: float) -> str:
    """
    Draw an amount uniformly from [min_amount, max_amount).

    The draw is truncated to two decimals so the formatted value never
    reaches max_amount, and raised to the smallest two-decimal value not
    below min_amount. A degenerate range yields min_amount.

    Raises:
        ValidationError: If no two-decimal amount lies in the range
    """
    floor = Decimal(str(min_amount)).quantize(TWO_PLACES, rounding=ROUND_CEILING)
    ceiling = Decimal(str(max_amount))
    degenerate = min_amount == max_amount
    if floor > ceiling or (floor == ceiling and not degenerate):
        raise ValidationError(
            f'No two-decimal amount between {min_amount} and {max_amount}',
            field='minAmount',
            value=min_amount
        )

    raw = min_amount + rng.random() * (max_amount - min_amount)
    value = Decimal(repr(raw)).quantize(TWO_PLACES, rounding=ROUND_DOWN)
    if value >= ceiling and not degenerate:
        # float rounding can land the draw on max_amount itself
        value -= TWO_PLACES
    if value < floor:
        value = floor
    return str(value)
