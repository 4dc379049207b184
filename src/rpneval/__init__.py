"""rpneval -- embeddable arithmetic expression engine.

Parses expression text into Reverse Polish Notation and evaluates it to a
float, optionally against variable bindings::

    >>> import rpneval
    >>> rpneval.evaluate("2+3*4")
    14.0
    >>> rpneval.evaluate_with_variables("x+1", {"x": 5})
    6.0
"""

__version__ = "0.3.0"

from rpneval.config import configure, get_setting, load_config, reset_config
from rpneval.engine import (
    ENGINE_ERRORS,
    CompiledExpression,
    ErrorKind,
    ErrorRecord,
    EvaluationError,
    ExpressionError,
    LexicalError,
    ResourceError,
    SyntacticError,
    Variable,
    VariableList,
    append_variable,
    compile_expression,
    evaluate,
    evaluate_compiled,
    evaluate_with_variables,
    release_compiled,
    release_variables,
)

__all__ = [
    "ENGINE_ERRORS",
    "CompiledExpression",
    "ErrorKind",
    "ErrorRecord",
    "EvaluationError",
    "ExpressionError",
    "LexicalError",
    "ResourceError",
    "SyntacticError",
    "Variable",
    "VariableList",
    "__version__",
    "append_variable",
    "compile_expression",
    "configure",
    "evaluate",
    "evaluate_compiled",
    "evaluate_with_variables",
    "get_setting",
    "load_config",
    "release_compiled",
    "release_variables",
    "reset_config",
]
