"""Stack-machine evaluator for RPN token sequences."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from rpneval.engine.errors import EvaluationError
from rpneval.engine.tokens import (
    BinaryFunctionToken,
    ConstantToken,
    NumberToken,
    Token,
    UnaryFunctionToken,
    VariableToken,
)
from rpneval.engine.variables import Variable, find_variable


def evaluate_rpn(rpn: Sequence[Token], variables: Iterable[Variable] | None = None) -> float:
    """Evaluate an RPN token sequence.

    Operands go on a call-local stack of floats; the tokens themselves are
    only read.  For a binary operator the first value popped is the right
    operand, so ``a b -`` computes ``a - b``.

    Arithmetic is IEEE-754: division by zero gives ``inf`` or ``nan``.

    Args:
        rpn: Output of ``to_rpn()``.
        variables: Bindings searched linearly by name.

    Returns:
        The single value left on the stack.

    Raises:
        EvaluationError: Undefined variable, or an operand count that does
            not work out to exactly one result.  Position is always 0.
    """
    bindings = tuple(variables) if variables is not None else ()
    stack: list[float] = []

    with np.errstate(all="ignore"):
        for token in rpn:
            if isinstance(token, NumberToken):
                stack.append(token.value)
            elif isinstance(token, ConstantToken):
                stack.append(token.constant.value)
            elif isinstance(token, VariableToken):
                variable = find_variable(bindings, token.name)
                if variable is None:
                    raise EvaluationError(f"Undefined variable {token.name!r}")
                stack.append(variable.value)
            elif isinstance(token, UnaryFunctionToken):
                if not stack:
                    raise EvaluationError(f"Not enough operands for {token.function.name!r}")
                stack.append(float(token.function(stack.pop())))
            elif isinstance(token, BinaryFunctionToken):
                if len(stack) < 2:
                    raise EvaluationError(f"Not enough operands for {token.function.name!r}")
                right = stack.pop()
                left = stack.pop()
                stack.append(float(token.function(left, right)))

    if not stack:
        raise EvaluationError("Not enough operands")
    if len(stack) > 1:
        raise EvaluationError(f"Too many operands ({len(stack)} values left)")
    return stack[0]
