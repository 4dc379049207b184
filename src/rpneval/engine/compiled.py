"""Compiled expressions: a cached RPN sequence for repeated evaluation."""

from __future__ import annotations

from typing import Sequence

from rpneval.engine.errors import ResourceError
from rpneval.engine.evaluator import evaluate_rpn
from rpneval.engine.tokens import Token, format_tokens
from rpneval.engine.variables import Bindings, as_variables


class CompiledExpression:
    """Owns the RPN form of one expression.

    Evaluation only reads the stored tokens, so one instance may be
    evaluated repeatedly, and concurrently, against different bindings.
    Once released, every further use raises ``ResourceError``.  Also works
    as a context manager that releases on exit.
    """

    def __init__(self, source: str, rpn: Sequence[Token]) -> None:
        self.source = source
        self._rpn: tuple[Token, ...] | None = tuple(rpn)

    @property
    def released(self) -> bool:
        return self._rpn is None

    @property
    def rpn(self) -> tuple[Token, ...]:
        """The stored RPN tokens."""
        if self._rpn is None:
            raise ResourceError("Compiled expression has been released")
        return self._rpn

    def evaluate(self, variables: Bindings | None = None) -> float:
        """Run only the evaluator against the stored tokens."""
        return evaluate_rpn(self.rpn, as_variables(variables))

    def to_postfix(self) -> str:
        """Space-separated RPN listing, e.g. ``a b +``."""
        return format_tokens(self.rpn)

    def release(self) -> None:
        """Drop the stored tokens.  Calling it again is a no-op."""
        self._rpn = None

    def __enter__(self) -> CompiledExpression:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else f"{len(self._rpn)} tokens"
        return f"CompiledExpression({self.source!r}, {state})"
