"""Expression tokenizing, RPN conversion and evaluation.

Public API::

    from rpneval.engine import evaluate, evaluate_with_variables, compile_expression
"""

from rpneval.engine.api import (
    compile_expression,
    evaluate,
    evaluate_compiled,
    evaluate_with_variables,
    release_compiled,
)
from rpneval.engine.compiled import CompiledExpression
from rpneval.engine.converter import to_rpn
from rpneval.engine.errors import (
    ENGINE_ERRORS,
    ErrorKind,
    ErrorRecord,
    EvaluationError,
    ExpressionError,
    LexicalError,
    ResourceError,
    SyntacticError,
)
from rpneval.engine.evaluator import evaluate_rpn
from rpneval.engine.tokenizer import first_error, tokenize
from rpneval.engine.tokens import format_tokens
from rpneval.engine.variables import (
    Variable,
    VariableList,
    append_variable,
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
    "append_variable",
    "compile_expression",
    "evaluate",
    "evaluate_compiled",
    "evaluate_rpn",
    "evaluate_with_variables",
    "first_error",
    "format_tokens",
    "release_compiled",
    "release_variables",
    "to_rpn",
    "tokenize",
]
