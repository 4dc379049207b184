"""Lexical tokens shared by the tokenizer, converter and evaluator.

One class per token kind.  Every token records the character offset it
came from; only ``ErrorToken`` carries a message.  Tokens are never
mutated after construction, so an RPN sequence can be evaluated any
number of times, from any number of threads.
"""

from __future__ import annotations

from typing import Iterable

from rpneval.functions.registry import BinaryFunction, Constant, UnaryFunction


class Token:
    """Base class for all tokens."""

    __slots__ = ("position",)

    def __init__(self, position: int) -> None:
        self.position = position

    def text(self) -> str:
        """Short rendering used in token listings."""
        raise NotImplementedError

    def _key(self) -> tuple:
        return (self.position,)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other._key() == self._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text()!r}, position={self.position})"


class NumberToken(Token):
    __slots__ = ("value",)

    def __init__(self, position: int, value: float) -> None:
        super().__init__(position)
        self.value = value

    def text(self) -> str:
        return repr(self.value)

    def _key(self) -> tuple:
        return (self.position, self.value)


class VariableToken(Token):
    __slots__ = ("name",)

    def __init__(self, position: int, name: str) -> None:
        super().__init__(position)
        self.name = name

    def text(self) -> str:
        return self.name

    def _key(self) -> tuple:
        return (self.position, self.name)


class ConstantToken(Token):
    __slots__ = ("constant",)

    def __init__(self, position: int, constant: Constant) -> None:
        super().__init__(position)
        self.constant = constant

    def text(self) -> str:
        return self.constant.name

    def _key(self) -> tuple:
        return (self.position, self.constant.name)


class UnaryFunctionToken(Token):
    __slots__ = ("function",)

    def __init__(self, position: int, function: UnaryFunction) -> None:
        super().__init__(position)
        self.function = function

    @property
    def precedence(self) -> int:
        return self.function.precedence

    def text(self) -> str:
        return self.function.name

    def _key(self) -> tuple:
        return (self.position, self.function.name)


class BinaryFunctionToken(Token):
    __slots__ = ("function",)

    def __init__(self, position: int, function: BinaryFunction) -> None:
        super().__init__(position)
        self.function = function

    @property
    def precedence(self) -> int:
        return self.function.precedence

    def text(self) -> str:
        return self.function.name

    def _key(self) -> tuple:
        return (self.position, self.function.name)


class OpenBracketToken(Token):
    __slots__ = ()

    def text(self) -> str:
        return "("


class CloseBracketToken(Token):
    __slots__ = ()

    def text(self) -> str:
        return ")"


class ErrorToken(Token):
    __slots__ = ("message",)

    def __init__(self, position: int, message: str) -> None:
        super().__init__(position)
        self.message = message

    def text(self) -> str:
        return f"<error: {self.message}>"

    def _key(self) -> tuple:
        return (self.position, self.message)


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens as a space-separated listing, e.g. ``1.0 2.0 + 3.0 *``."""
    return " ".join(t.text() for t in tokens)
