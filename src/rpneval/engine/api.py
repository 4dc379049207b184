"""Public evaluate / compile operations.

Every operation runs tokenize -> convert -> evaluate (or a prefix of it)
to completion and fails fast: a later stage never runs once an earlier
one has failed.

Errors are raised as ``ExpressionError`` subclasses.  Callers that prefer
status returns pass an ``ErrorRecord`` as ``error=``: it is cleared at
the start of the call, filled in on failure, and the call returns 0.0
(``None`` for compile) instead of raising.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from rpneval.config import get_setting
from rpneval.engine.compiled import CompiledExpression
from rpneval.engine.converter import to_rpn
from rpneval.engine.errors import (
    ErrorKind,
    ErrorRecord,
    ExpressionError,
    LexicalError,
    ResourceError,
)
from rpneval.engine.evaluator import evaluate_rpn
from rpneval.engine.tokenizer import first_error, tokenize
from rpneval.engine.tokens import Token
from rpneval.engine.variables import Bindings, as_variables
from rpneval.logging import EventType, emit_error, emit_info, emit_warning

T = TypeVar("T")

# Expressions longer than this are cut in log context.
_LOG_EXPRESSION_LEN = 256


def evaluate(expression: str | None, error: ErrorRecord | None = None) -> float:
    """Evaluate an expression without variables.

    Unresolved identifiers are lexical errors.

    Example::

        >>> evaluate("2+3*4")
        14.0
    """
    return _guarded(
        expression,
        error,
        0.0,
        lambda: evaluate_rpn(_prepare(expression, support_variables=False)),
    )


def evaluate_with_variables(
    expression: str | None,
    variables: Bindings | None,
    error: ErrorRecord | None = None,
) -> float:
    """Evaluate an expression, resolving unknown identifiers as variables.

    Args:
        expression: The expression text.
        variables: A ``VariableList``, an iterable of ``Variable``, or a
            mapping of name to value.
        error: Optional record to receive a failure instead of raising.
    """
    return _guarded(
        expression,
        error,
        0.0,
        lambda: evaluate_rpn(
            _prepare(expression, support_variables=True), as_variables(variables)
        ),
    )


def compile_expression(
    expression: str | None, error: ErrorRecord | None = None
) -> CompiledExpression | None:
    """Tokenize and convert once; variables are always enabled."""

    def _compile() -> CompiledExpression:
        compiled = CompiledExpression(expression, _prepare(expression, support_variables=True))
        emit_info(
            EventType.expression_compiled,
            "Compiled expression",
            {
                "expression": expression[:_LOG_EXPRESSION_LEN],
                "token_count": len(compiled.rpn),
            },
        )
        return compiled

    return _guarded(expression, error, None, _compile)


def evaluate_compiled(
    compiled: CompiledExpression | None,
    variables: Bindings | None = None,
    error: ErrorRecord | None = None,
) -> float:
    """Run only the evaluator against a compiled expression's stored tokens.

    A handle cleared to ``None`` after release is treated like a released
    handle: ``ResourceError``.
    """

    def _run() -> float:
        if compiled is None:
            raise ResourceError("Compiled expression has been released")
        return compiled.evaluate(variables)

    source = compiled.source if compiled is not None else None
    return _guarded(source, error, 0.0, _run)


def release_compiled(compiled: CompiledExpression | None) -> None:
    """Release a compiled expression.  ``None`` and repeat calls are no-ops."""
    if compiled is None or compiled.released:
        return
    compiled.release()
    emit_info(
        EventType.compiled_released,
        "Released compiled expression",
        {"expression": compiled.source[:_LOG_EXPRESSION_LEN]},
    )


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _prepare(expression: str | None, support_variables: bool) -> list[Token]:
    """Tokenize and convert *expression* into RPN, raising on the first failure."""
    if expression is None:
        raise LexicalError("No input given")
    limit = int(get_setting("max_expression_length"))
    if len(expression) > limit:
        raise ResourceError(
            f"Expression too long ({len(expression)} > {limit} characters)", limit
        )

    tokens, had_error = tokenize(expression, support_variables)
    if not tokens:
        raise LexicalError("Empty or invalid input")
    if had_error:
        bad = first_error(tokens)
        raise LexicalError(bad.message, bad.position)
    return to_rpn(tokens, allow_variables=support_variables)


def _guarded(
    expression: str | None,
    error: ErrorRecord | None,
    fallback: Any,
    call: Callable[[], T],
) -> T:
    """Run *call*, routing failures to *error* or raising them."""
    if error is not None:
        error.clear()
    try:
        return call()
    except ExpressionError as exc:
        failure = exc
    except MemoryError as exc:
        failure = ResourceError("Failed memory allocation")
        failure.__cause__ = exc

    # Resource failures are logged at error level, the rest as warnings.
    emit = emit_error if failure.kind == ErrorKind.resource else emit_warning
    emit(
        EventType.expression_failed,
        failure.message,
        {
            "expression": (expression or "")[:_LOG_EXPRESSION_LEN],
            "kind": failure.kind.value,
            "position": failure.position,
        },
        error_code=f"{failure.kind.value}_error",
    )
    if error is None:
        raise failure
    error.capture(failure)
    return fallback
