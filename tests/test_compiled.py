"""Tests for compiled expressions: compile once, evaluate many times."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from rpneval import (
    CompiledExpression,
    ErrorKind,
    ErrorRecord,
    LexicalError,
    ResourceError,
    SyntacticError,
    VariableList,
    compile_expression,
    evaluate_compiled,
    release_compiled,
)


def _bindings(**values: float) -> VariableList:
    variables = VariableList()
    for name, value in values.items():
        variables.append(name, value)
    return variables


# ────────────────────────────────────────────────────────────────
# Compile
# ────────────────────────────────────────────────────────────────


class TestCompile:
    def test_compile_returns_handle(self) -> None:
        compiled = compile_expression("a+b")
        assert isinstance(compiled, CompiledExpression)
        assert compiled.source == "a+b"
        assert compiled.to_postfix() == "a b +"
        assert not compiled.released

    def test_variables_always_enabled(self) -> None:
        compiled = compile_expression("rate*2")
        assert compiled.to_postfix() == "rate 2.0 *"

    def test_lexical_error_raises(self) -> None:
        with pytest.raises(LexicalError) as exc_info:
            compile_expression("1+€")
        assert exc_info.value.position == 2

    def test_syntactic_error_raises(self) -> None:
        with pytest.raises(SyntacticError):
            compile_expression("a)")

    def test_failure_with_record_returns_none(self) -> None:
        record = ErrorRecord()
        assert compile_expression("(1+2))", record) is None
        assert record.kind == ErrorKind.syntactic

    def test_operand_errors_deferred_to_evaluation(self) -> None:
        record = ErrorRecord()
        compiled = compile_expression("1+", record)
        assert record.ok
        assert evaluate_compiled(compiled, None, record) == 0.0
        assert record.kind == ErrorKind.evaluation


# ────────────────────────────────────────────────────────────────
# Evaluate
# ────────────────────────────────────────────────────────────────


class TestEvaluateCompiled:
    def test_repeated_evaluation_is_idempotent(self) -> None:
        compiled = compile_expression("a+b")
        assert evaluate_compiled(compiled, _bindings(a=1, b=2)) == 3.0
        assert evaluate_compiled(compiled, _bindings(a=10, b=20)) == 30.0
        assert evaluate_compiled(compiled, _bindings(a=1, b=2)) == 3.0

    def test_non_numeric_mapping_value_recorded(self) -> None:
        compiled = compile_expression("x+1")
        record = ErrorRecord()
        assert evaluate_compiled(compiled, {"x": "abc"}, record) == 0.0
        assert record.kind == ErrorKind.evaluation
        assert record.message == "Invalid binding for 'x'"

    def test_mapping_bindings(self) -> None:
        compiled = compile_expression("x*x")
        assert evaluate_compiled(compiled, {"x": 3.0}) == 9.0

    def test_constant_expression_needs_no_bindings(self) -> None:
        compiled = compile_expression("2^10")
        assert evaluate_compiled(compiled) == 1024.0

    def test_undefined_variable(self) -> None:
        compiled = compile_expression("a+b")
        record = ErrorRecord()
        assert evaluate_compiled(compiled, _bindings(a=1), record) == 0.0
        assert record.message == "Undefined variable 'b'"

    def test_concurrent_evaluation(self) -> None:
        compiled = compile_expression("x*2+1")

        def _run(x: int) -> float:
            return evaluate_compiled(compiled, {"x": float(x)})

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(_run, range(200)))
        assert results == [x * 2.0 + 1.0 for x in range(200)]


# ────────────────────────────────────────────────────────────────
# Release
# ────────────────────────────────────────────────────────────────


class TestRelease:
    def test_cleared_handle_raises(self) -> None:
        with pytest.raises(ResourceError, match="has been released"):
            evaluate_compiled(None, {"a": 1.0})

    def test_cleared_handle_with_record(self) -> None:
        record = ErrorRecord()
        assert evaluate_compiled(None, None, record) == 0.0
        assert record.kind == ErrorKind.resource
        assert record.message == "Compiled expression has been released"

    def test_release_then_use_raises(self) -> None:
        compiled = compile_expression("a+b")
        release_compiled(compiled)
        assert compiled.released
        with pytest.raises(ResourceError, match="has been released"):
            evaluate_compiled(compiled, {"a": 1.0, "b": 2.0})

    def test_release_then_use_with_record(self) -> None:
        compiled = compile_expression("1")
        release_compiled(compiled)
        record = ErrorRecord()
        assert evaluate_compiled(compiled, None, record) == 0.0
        assert record.kind == ErrorKind.resource

    def test_release_is_idempotent(self) -> None:
        compiled = compile_expression("1")
        release_compiled(compiled)
        release_compiled(compiled)
        assert compiled.released

    def test_release_none_is_noop(self) -> None:
        release_compiled(None)

    def test_context_manager_releases(self) -> None:
        with compile_expression("a*2") as compiled:
            assert compiled.evaluate({"a": 4.0}) == 8.0
        assert compiled.released
        assert "released" in repr(compiled)
