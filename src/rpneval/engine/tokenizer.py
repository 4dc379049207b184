"""Single-pass tokenizer with longest-prefix identifier resolution.

Per character position:

- ``(`` / ``)`` become bracket tokens.
- A digit or ``.`` starts a number literal: digits plus at most one ``.``.
- A letter or punctuation character starts an identifier: a maximal run
  of one character class, resolved against the symbol table by trying
  prefixes from longest to shortest.  When a shorter prefix matches, the
  scan resumes right after it, so ``sinx`` reads as ``sin`` then ``x``.
- Anything else is an unknown character.

Errors do not stop the scan; they are emitted as ``ErrorToken`` entries
and the caller surfaces the first one.
"""

from __future__ import annotations

import string

from rpneval.config import get_setting
from rpneval.engine.tokens import (
    BinaryFunctionToken,
    CloseBracketToken,
    ConstantToken,
    ErrorToken,
    NumberToken,
    OpenBracketToken,
    Token,
    UnaryFunctionToken,
    VariableToken,
)
from rpneval.functions.registry import (
    BinaryFunction,
    Constant,
    SymbolEntry,
    SymbolTable,
    UnaryFunction,
    get_default_symbols,
)

_WHITESPACE = frozenset(string.whitespace)
_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_PUNCTUATION = frozenset(string.punctuation) - {"(", ")"}


def tokenize(
    text: str,
    support_variables: bool,
    symbols: SymbolTable | None = None,
) -> tuple[list[Token], bool]:
    """Scan *text* into lexical tokens.

    Args:
        text: The raw expression.
        support_variables: When true, unresolved identifiers become
            ``VariableToken``; otherwise they are lexical errors.
        symbols: Symbol table to resolve identifiers against.  Defaults
            to the built-in table.

    Returns:
        ``(tokens, had_error)`` where *had_error* is true iff at least one
        ``ErrorToken`` was produced.
    """
    if symbols is None:
        symbols = get_default_symbols()

    tokens: list[Token] = []
    had_error = False
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _WHITESPACE:
            index += 1
            continue
        if char == "(":
            token: Token = OpenBracketToken(index)
            index += 1
        elif char == ")":
            token = CloseBracketToken(index)
            index += 1
        elif char in _DIGITS or char == ".":
            token, index = _scan_number(text, index)
        elif char in _LETTERS or char in _PUNCTUATION:
            token, index = _scan_identifier(text, index, support_variables, symbols)
        else:
            token = ErrorToken(index, f"Unknown character {char!r}")
            index += 1

        if isinstance(token, ErrorToken):
            had_error = True
        tokens.append(token)
    return tokens, had_error


def first_error(tokens: list[Token]) -> ErrorToken | None:
    """Return the earliest ``ErrorToken`` in *tokens*, if any."""
    for token in tokens:
        if isinstance(token, ErrorToken):
            return token
    return None


def _scan_number(text: str, start: int) -> tuple[Token, int]:
    """Consume a number literal starting at *start*.

    A second decimal point marks the literal as an error, but the scan
    still consumes the remaining digits and points of the literal.
    """
    end = start
    points = 0
    while end < len(text) and (text[end] in _DIGITS or text[end] == "."):
        if text[end] == ".":
            points += 1
        end += 1

    literal = text[start:end]
    if points > 1:
        second = text.index(".", text.index(".", start) + 1)
        return ErrorToken(start, f"Too many decimal points in number (second '.' at {second})"), end
    # A bare "." reads as zero.
    value = float(literal) if literal != "." else 0.0
    return NumberToken(start, value), end


def _scan_identifier(
    text: str,
    start: int,
    support_variables: bool,
    symbols: SymbolTable,
) -> tuple[Token, int]:
    """Consume an identifier run starting at *start* and resolve it."""
    char_class = _LETTERS if text[start] in _LETTERS else _PUNCTUATION
    end = start + 1
    while end < len(text) and text[end] in char_class:
        end += 1
    run = text[start:end]

    for size in range(len(run), 0, -1):
        prefix = run[:size]
        matches = symbols.lookup(prefix)
        if len(matches) == 1:
            return _symbol_token(matches[0], start), start + size
        if len(matches) > 1:
            return ErrorToken(start, f"Ambiguous identifier {prefix!r}"), end

    if support_variables:
        max_len = int(get_setting("var_name_max_len"))
        return VariableToken(start, run[:max_len]), end
    return ErrorToken(start, f"Unrecognised identifier {run!r}"), end


def _symbol_token(entry: SymbolEntry, position: int) -> Token:
    if isinstance(entry, UnaryFunction):
        return UnaryFunctionToken(position, entry)
    if isinstance(entry, BinaryFunction):
        return BinaryFunctionToken(position, entry)
    if isinstance(entry, Constant):
        return ConstantToken(position, entry)
    raise TypeError(f"Unknown symbol entry: {entry!r}")
