"""Shunting-yard conversion from infix tokens to Reverse Polish Notation."""

from __future__ import annotations

from typing import Sequence

from rpneval.engine.errors import SyntacticError
from rpneval.engine.tokens import (
    BinaryFunctionToken,
    CloseBracketToken,
    ConstantToken,
    NumberToken,
    OpenBracketToken,
    Token,
    UnaryFunctionToken,
    VariableToken,
)


def to_rpn(tokens: Sequence[Token], allow_variables: bool = True) -> list[Token]:
    """Reorder lexical *tokens* into RPN, dropping brackets.

    Binary operators are left-associative: an operator pops every pending
    function whose precedence is greater than or equal to its own, so
    ``2^3^2`` is ``(2^3)^2``.  Unary functions are prefix operators and
    are pushed without popping.

    An unmatched ``(`` at the end of input is dropped silently; an
    unmatched ``)`` raises.

    Args:
        tokens: Error-free output of ``tokenize()``.
        allow_variables: Whether ``VariableToken`` operands are passed on.

    Returns:
        The RPN token sequence.

    Raises:
        SyntacticError: On a ``)`` without a matching ``(``.  The position
            is taken from the last token emitted so far (0 if none).
    """
    output: list[Token] = []
    stack: list[Token] = []

    for token in tokens:
        if isinstance(token, (NumberToken, ConstantToken)) or (
            allow_variables and isinstance(token, VariableToken)
        ):
            output.append(token)
        elif isinstance(token, OpenBracketToken):
            stack.append(token)
        elif isinstance(token, CloseBracketToken):
            while True:
                if not stack:
                    position = output[-1].position if output else 0
                    raise SyntacticError(
                        f"Missing open bracket for ')' at {token.position}", position
                    )
                top = stack.pop()
                if isinstance(top, OpenBracketToken):
                    break
                output.append(top)
        elif isinstance(token, UnaryFunctionToken):
            # Prefix operator: pushed without the >= pop that binary operators
            # do.  Popping here would emit a pending unary before its operand,
            # e.g. "1+_sin(0)" would become "1 _ 0 sin +".
            stack.append(token)
        elif isinstance(token, BinaryFunctionToken):
            while (
                stack
                and not isinstance(stack[-1], OpenBracketToken)
                and stack[-1].precedence >= token.precedence
            ):
                output.append(stack.pop())
            stack.append(token)

    while stack:
        top = stack.pop()
        if not isinstance(top, OpenBracketToken):
            output.append(top)
    return output
