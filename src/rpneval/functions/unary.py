"""Built-in unary functions.

All take and return floats with IEEE-754 semantics: domain errors yield
``nan`` or ``inf`` rather than raising.  The evaluator runs them under
``numpy.errstate(all="ignore")``.
"""

from __future__ import annotations

import numpy as np

from rpneval.functions.registry import register_unary


@register_unary("_")
def fn_negate(a: float) -> float:
    """Negate a number.  ``-`` is always the binary subtraction operator.

    Args:
        a: Operand.

    Returns:
        ``-a``.
    """
    return float(np.negative(a))


@register_unary("sin")
def fn_sin(a: float) -> float:
    """Sine of an angle in radians."""
    return float(np.sin(a))


@register_unary("cos")
def fn_cos(a: float) -> float:
    """Cosine of an angle in radians."""
    return float(np.cos(a))


@register_unary("tan")
def fn_tan(a: float) -> float:
    """Tangent of an angle in radians."""
    return float(np.tan(a))


@register_unary("asin")
def fn_asin(a: float) -> float:
    """Inverse sine.

    Args:
        a: Value in ``[-1, 1]``.

    Returns:
        Angle in radians, or ``nan`` outside the domain.
    """
    return float(np.arcsin(a))


@register_unary("acos")
def fn_acos(a: float) -> float:
    """Inverse cosine.

    Args:
        a: Value in ``[-1, 1]``.

    Returns:
        Angle in radians, or ``nan`` outside the domain.
    """
    return float(np.arccos(a))


@register_unary("atan")
def fn_atan(a: float) -> float:
    """Inverse tangent, in radians."""
    return float(np.arctan(a))


@register_unary("cosec")
def fn_cosec(a: float) -> float:
    """Cosecant, the reciprocal of the sine.

    Args:
        a: Angle in radians.

    Returns:
        ``1 / sin(a)``; ``inf`` where the sine is exactly zero.
    """
    return float(np.divide(1.0, np.sin(a)))


@register_unary("sec")
def fn_sec(a: float) -> float:
    """Secant, the reciprocal of the cosine.

    Args:
        a: Angle in radians.

    Returns:
        ``1 / cos(a)``.
    """
    return float(np.divide(1.0, np.cos(a)))


@register_unary("cot")
def fn_cot(a: float) -> float:
    """Cotangent, the reciprocal of the tangent.

    Args:
        a: Angle in radians.

    Returns:
        ``1 / tan(a)``; ``inf`` at zero.
    """
    return float(np.divide(1.0, np.tan(a)))


@register_unary("log")
def fn_log(a: float) -> float:
    """Natural logarithm.

    Args:
        a: Operand.

    Returns:
        ``ln(a)``; ``-inf`` at zero and ``nan`` for negative input.
    """
    return float(np.log(a))


@register_unary("ln")
def fn_ln(a: float) -> float:
    """Natural logarithm, same as ``log``."""
    return float(np.log(a))


@register_unary("sqrt")
def fn_sqrt(a: float) -> float:
    """Square root.

    Args:
        a: Operand.

    Returns:
        The non-negative root, or ``nan`` for negative input.
    """
    return float(np.sqrt(a))


@register_unary("abs")
def fn_abs(a: float) -> float:
    return float(np.abs(a))


@register_unary("exp")
def fn_exp(a: float) -> float:
    """``e`` raised to *a*; ``inf`` on overflow."""
    return float(np.exp(a))


@register_unary("floor")
def fn_floor(a: float) -> float:
    """Largest integral value not greater than *a*, as a float."""
    return float(np.floor(a))


@register_unary("ceil")
def fn_ceil(a: float) -> float:
    """Smallest integral value not less than *a*, as a float."""
    return float(np.ceil(a))
