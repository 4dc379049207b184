"""Built-in binary operators.

Precedence, loosest to tightest::

    1  |
    2  &
    3  =  !=  >  <  >=  <=
    4  +  -
    5  *  /  %
    6  ^

Comparison and logical operators return 1.0 or 0.0.  Any non-zero value,
``nan`` included, counts as true.
"""

from __future__ import annotations

import numpy as np

from rpneval.functions.registry import register_binary


def _truth(flag: bool) -> float:
    return 1.0 if flag else 0.0


@register_binary("+", precedence=4)
def fn_add(a: float, b: float) -> float:
    return float(np.add(a, b))


@register_binary("-", precedence=4)
def fn_sub(a: float, b: float) -> float:
    """Subtract b from a.

    Args:
        a: Minuend (left operand).
        b: Subtrahend (right operand).

    Returns:
        Difference.
    """
    return float(np.subtract(a, b))


@register_binary("*", precedence=5)
def fn_mul(a: float, b: float) -> float:
    return float(np.multiply(a, b))


@register_binary("/", precedence=5)
def fn_div(a: float, b: float) -> float:
    """Divide a by b.

    Args:
        a: Numerator.
        b: Denominator.

    Returns:
        Quotient; ``x/0`` is ``±inf`` and ``0/0`` is ``nan``.
    """
    return float(np.divide(a, b))


@register_binary("%", precedence=5)
def fn_mod(a: float, b: float) -> float:
    """Remainder of a divided by b, as C ``fmod``.

    Args:
        a: Dividend.
        b: Divisor.

    Returns:
        Remainder with the sign of the dividend; ``nan`` when b is zero.
    """
    return float(np.fmod(a, b))


@register_binary("^", precedence=6)
def fn_pow(a: float, b: float) -> float:
    """Raise a to the power b.

    Args:
        a: Base.
        b: Exponent.

    Returns:
        ``a ** b``; ``inf`` on overflow, ``nan`` for a negative base with a
        fractional exponent.
    """
    return float(np.power(np.float64(a), np.float64(b)))


@register_binary("=", precedence=3)
def fn_equal(a: float, b: float) -> float:
    """Exact float equality, 1.0 or 0.0."""
    return _truth(a == b)


@register_binary("!=", precedence=3)
def fn_not_equal(a: float, b: float) -> float:
    return _truth(a != b)


@register_binary(">", precedence=3)
def fn_greater(a: float, b: float) -> float:
    return _truth(a > b)


@register_binary("<", precedence=3)
def fn_less(a: float, b: float) -> float:
    return _truth(a < b)


@register_binary(">=", precedence=3)
def fn_greater_equal(a: float, b: float) -> float:
    return _truth(a >= b)


@register_binary("<=", precedence=3)
def fn_less_equal(a: float, b: float) -> float:
    return _truth(a <= b)


@register_binary("&", precedence=2)
def fn_and(a: float, b: float) -> float:
    """Logical AND.

    Args:
        a: Left operand, true when non-zero.
        b: Right operand, true when non-zero.

    Returns:
        1.0 if both operands are true, else 0.0.
    """
    return _truth(bool(a) and bool(b))


@register_binary("|", precedence=1)
def fn_or(a: float, b: float) -> float:
    """Logical OR.

    Args:
        a: Left operand, true when non-zero.
        b: Right operand, true when non-zero.

    Returns:
        1.0 if either operand is true, else 0.0.
    """
    return _truth(bool(a) or bool(b))
