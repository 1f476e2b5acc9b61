"""
Leading Digit Extraction

Purpose: Reduce one finite positive number to its first significant digit.

log10 only estimates the decade. The decade and the digit are then settled by
comparing the value against the boundaries d * 10^p, so a float whose decimal
form starts exactly on a digit (0.0003, 7e25) is never read one digit low.
"""

import math
from numbers import Integral

from benfordproof.core import InvalidDigitError, NonPositiveError, NotFiniteError


def _float_boundary(digit: int, power: int) -> float:
    """Correctly rounded float for digit * 10^power (inf above float range)."""
    return float(f"{digit}e{power}")


def _int_boundary(digit: int, power: int) -> int:
    """Exact integer digit * 10^power."""
    return digit * 10 ** power


def _decade(value, boundary) -> int:
    """Return p with boundary(1, p) <= value < boundary(1, p + 1)."""
    power = math.floor(math.log10(value))
    # log10 can land one off at power-of-ten boundaries
    while value < boundary(1, power):
        power -= 1
    while value >= boundary(1, power + 1):
        power += 1
    return power


def extract_leading_digit(value: float) -> int:
    """
    Return the leading significant digit of a finite positive number.

    Integers are compared exactly, so values beyond float range still work.

    Args:
        value: Number to inspect

    Returns:
        Digit in 1-9

    Raises:
        NotFiniteError: value is NaN or infinite (checked first)
        NonPositiveError: value is zero or negative
        InvalidDigitError: the value fell outside its own decade
    """
    if isinstance(value, Integral):
        boundary = _int_boundary
    else:
        if not math.isfinite(value):
            raise NotFiniteError(value)
        boundary = _float_boundary
    if value <= 0:
        raise NonPositiveError(value)

    power = _decade(value, boundary)
    digit = sum(1 for d in range(1, 10) if value >= boundary(d, power))

    if not 1 <= digit <= 9:
        raise InvalidDigitError(value, digit)
    return digit
