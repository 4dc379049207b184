"""Error types for expression tokenizing, conversion and evaluation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from rpneval.config import get_setting


class ErrorKind(str, Enum):
    none = "none"
    lexical = "lexical"
    syntactic = "syntactic"
    evaluation = "evaluation"
    resource = "resource"


class ExpressionError(Exception):
    """Base class for all expression errors.

    Attributes:
        kind: Which pipeline stage failed.
        position: Character offset the error refers to.
        message: Human-readable description.
    """

    kind: ErrorKind = ErrorKind.none

    def __init__(self, message: str, position: int = 0) -> None:
        self.message = message
        self.position = position
        super().__init__(f"{self.kind.value} error: {message} (at position {position})")


class LexicalError(ExpressionError):
    """Bad character, unknown or ambiguous identifier, malformed number."""

    kind = ErrorKind.lexical


class SyntacticError(ExpressionError):
    """Unbalanced brackets."""

    kind = ErrorKind.syntactic


class EvaluationError(ExpressionError):
    """Undefined variable or operand-count mismatch.

    Evaluation errors always report position 0.
    """

    kind = ErrorKind.evaluation


class ResourceError(ExpressionError):
    """Allocation failure, oversized input, or use of a released handle."""

    kind = ErrorKind.resource


ENGINE_ERRORS = (ExpressionError, MemoryError)


class ErrorRecord(BaseModel):
    """Reusable error slot for callers that prefer status returns to exceptions.

    Passed as ``error=`` to the API functions: it is cleared at the start of
    every call and filled in when the call fails.
    """

    model_config = ConfigDict(validate_assignment=True)

    kind: ErrorKind = ErrorKind.none
    position: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind == ErrorKind.none

    def clear(self) -> None:
        self.kind = ErrorKind.none
        self.position = 0
        self.message = ""

    def capture(self, exc: ExpressionError) -> None:
        """Copy *exc* into this record, bounding the message length."""
        limit = int(get_setting("error_message_max_len"))
        self.kind = exc.kind
        self.position = exc.position
        self.message = exc.message[:limit]
