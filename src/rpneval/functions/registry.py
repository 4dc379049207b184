"""Central registry for unary functions, binary operators and constants.

Built-ins register themselves at import time through the decorators below.
``get_default_symbols()`` freezes everything registered so far into a
``SymbolTable`` that the tokenizer and evaluator share read-only.
"""

from __future__ import annotations

import string
from typing import Callable, Iterable, NamedTuple, Union

# Precedence shared by every unary function, above all binary operators.
UNARY_PRECEDENCE = 7

_LETTERS = frozenset(string.ascii_letters)
_PUNCTUATION = frozenset(string.punctuation) - {"(", ")"}


class UnaryFunction(NamedTuple):
    name: str
    precedence: int
    fn: Callable[[float], float]

    def __call__(self, a: float) -> float:
        return self.fn(a)


class BinaryFunction(NamedTuple):
    name: str
    precedence: int
    fn: Callable[[float, float], float]

    def __call__(self, a: float, b: float) -> float:
        return self.fn(a, b)


class Constant(NamedTuple):
    name: str
    value: float


SymbolEntry = Union[UnaryFunction, BinaryFunction, Constant]


_UNARY_FUNCTIONS: dict[str, UnaryFunction] = {}
_BINARY_FUNCTIONS: dict[str, BinaryFunction] = {}
_CONSTANTS: dict[str, Constant] = {}

_default_symbols: SymbolTable | None = None


def register_unary(name: str, precedence: int = UNARY_PRECEDENCE) -> Callable:
    """Decorator that registers a unary function by name.

    Args:
        name: The identifier used in expressions.
        precedence: Binding strength in the shunting-yard converter.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: Callable) -> Callable:
        _register(_UNARY_FUNCTIONS, UnaryFunction(name, precedence, fn))
        return fn

    return decorator


def register_binary(name: str, precedence: int) -> Callable:
    """Decorator that registers a binary operator by name.

    Args:
        name: The identifier used in expressions.
        precedence: 1 (loosest) to 6 (tightest).

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: Callable) -> Callable:
        _register(_BINARY_FUNCTIONS, BinaryFunction(name, precedence, fn))
        return fn

    return decorator


def register_constant(name: str, value: float) -> Constant:
    """Register a named constant and return its entry."""
    entry = Constant(name, float(value))
    _register(_CONSTANTS, entry)
    return entry


def _register(table: dict, entry: SymbolEntry) -> None:
    if _default_symbols is not None:
        raise RuntimeError(
            f"Cannot register {entry.name!r}: default symbol table is already frozen"
        )
    validate_name(entry.name)
    if entry.name in table:
        raise ValueError(f"Duplicate symbol name: {entry.name!r}")
    table[entry.name] = entry


def validate_name(name: str) -> None:
    """Check that *name* is entirely letters or entirely punctuation.

    Raises:
        ValueError: If the name is empty, mixes character classes, or
            contains a bracket.
    """
    if not name:
        raise ValueError("Symbol name must not be empty")
    chars = set(name)
    if not (chars <= _LETTERS or chars <= _PUNCTUATION):
        raise ValueError(
            f"Symbol name {name!r} must be all ASCII letters or all punctuation "
            "(brackets are reserved)"
        )


class SymbolTable:
    """Immutable set of unary functions, binary operators and constants.

    Lookups are linear scans; the tables are small and the order of the
    returned matches follows unary, binary, constant.
    """

    def __init__(
        self,
        unary: Iterable[UnaryFunction] = (),
        binary: Iterable[BinaryFunction] = (),
        constants: Iterable[Constant] = (),
    ) -> None:
        self._unary = tuple(unary)
        self._binary = tuple(binary)
        self._constants = tuple(constants)
        for table in (self._unary, self._binary, self._constants):
            seen: set[str] = set()
            for entry in table:
                validate_name(entry.name)
                if entry.name in seen:
                    raise ValueError(f"Duplicate symbol name: {entry.name!r}")
                seen.add(entry.name)

    @property
    def unary(self) -> tuple[UnaryFunction, ...]:
        return self._unary

    @property
    def binary(self) -> tuple[BinaryFunction, ...]:
        return self._binary

    @property
    def constants(self) -> tuple[Constant, ...]:
        return self._constants

    def lookup(self, name: str) -> list[SymbolEntry]:
        """Return every entry, across all three tables, named exactly *name*."""
        matches: list[SymbolEntry] = []
        for table in (self._unary, self._binary, self._constants):
            for entry in table:
                if entry.name == name:
                    matches.append(entry)
        return matches

    def names(self) -> list[str]:
        """All registered names, sorted."""
        return sorted(
            e.name for table in (self._unary, self._binary, self._constants) for e in table
        )

    def __repr__(self) -> str:
        return (
            f"SymbolTable(unary={len(self._unary)}, binary={len(self._binary)}, "
            f"constants={len(self._constants)})"
        )


def get_default_symbols() -> SymbolTable:
    """Return the built-in symbol table, freezing the registry on first use."""
    global _default_symbols
    if _default_symbols is None:
        # Importing the built-in modules runs their registrations.
        from rpneval.functions import binary, constants, unary  # noqa: F401

        _default_symbols = SymbolTable(
            unary=_UNARY_FUNCTIONS.values(),
            binary=_BINARY_FUNCTIONS.values(),
            constants=_CONSTANTS.values(),
        )
    return _default_symbols
