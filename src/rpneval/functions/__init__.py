"""Symbol tables: unary functions, binary operators and named constants."""

from rpneval.functions import binary, constants, unary  # noqa: F401  (registration)
from rpneval.functions.registry import (
    UNARY_PRECEDENCE,
    BinaryFunction,
    Constant,
    SymbolEntry,
    SymbolTable,
    UnaryFunction,
    get_default_symbols,
    register_binary,
    register_constant,
    register_unary,
)

__all__ = [
    "UNARY_PRECEDENCE",
    "BinaryFunction",
    "Constant",
    "SymbolEntry",
    "SymbolTable",
    "UnaryFunction",
    "get_default_symbols",
    "register_binary",
    "register_constant",
    "register_unary",
]
