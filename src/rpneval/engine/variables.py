"""Variable bindings for expression evaluation.

A binding environment is an ordered list of ``Variable`` records.  Names
are truncated to ``var_name_max_len`` characters, never rejected, and
lookup is a linear scan by exact name where the first match wins.
Duplicates are allowed on insertion.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from rpneval.config import get_setting
from rpneval.engine.errors import EvaluationError


class Variable(BaseModel):
    """A named numeric value."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float

    @field_validator("name")
    @classmethod
    def _truncate_name(cls, name: str) -> str:
        return name[: int(get_setting("var_name_max_len"))]


class VariableList:
    """Ordered, growable list of variable bindings."""

    def __init__(self, variables: Iterable[Variable] = ()) -> None:
        self._items: list[Variable] = list(variables)

    def append(self, name: str, value: float) -> bool:
        """Add a binding.

        Returns:
            False only if memory for the new entry could not be allocated.
        """
        try:
            self._items.append(Variable(name=name, value=value))
        except MemoryError:
            return False
        return True

    def release(self) -> None:
        """Drop every binding.  The list stays usable afterwards."""
        self._items = []

    def get(self, name: str) -> Variable | None:
        return find_variable(self._items, name)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"{v.name}={v.value!r}" for v in self._items)
        return f"VariableList([{inner}])"


Bindings = Union[VariableList, Iterable[Variable], Mapping[str, float]]


def as_variables(bindings: Bindings | None) -> tuple[Variable, ...]:
    """Normalise any accepted bindings form into a tuple of ``Variable``.

    Raises:
        EvaluationError: If a mapping value is not a number.
    """
    if bindings is None:
        return ()
    if isinstance(bindings, Mapping):
        variables = []
        for name, value in bindings.items():
            try:
                variables.append(Variable(name=name, value=value))
            except ValidationError as exc:
                raise EvaluationError(f"Invalid binding for {name!r}") from exc
        return tuple(variables)
    return tuple(bindings)


def find_variable(variables: Iterable[Variable], name: str) -> Variable | None:
    """Linear search for the first binding named exactly *name*."""
    for variable in variables:
        if variable.name == name:
            return variable
    return None


def append_variable(variables: VariableList, name: str, value: float) -> bool:
    """Append ``name = value`` to *variables*; False on allocation failure."""
    return variables.append(name, value)


def release_variables(variables: VariableList) -> None:
    """Release every binding held by *variables*."""
    variables.release()
