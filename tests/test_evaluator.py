"""Tests for the RPN stack evaluator and the built-in operators it applies."""

from __future__ import annotations

import math

import pytest

from rpneval.engine.converter import to_rpn
from rpneval.engine.errors import EvaluationError
from rpneval.engine.evaluator import evaluate_rpn
from rpneval.engine.tokenizer import tokenize
from rpneval.engine.variables import Variable


def _rpn(text: str, variables: bool = True) -> list:
    tokens, had_error = tokenize(text, support_variables=variables)
    assert not had_error
    return to_rpn(tokens, allow_variables=variables)


def _eval(text: str, **bindings: float) -> float:
    variables = [Variable(name=k, value=v) for k, v in bindings.items()]
    return evaluate_rpn(_rpn(text), variables)


# ────────────────────────────────────────────────────────────────
# Arithmetic
# ────────────────────────────────────────────────────────────────


class TestArithmetic:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2+3*4", 14.0),
            ("10-4", 6.0),
            ("8/2", 4.0),
            ("7-2-1", 4.0),
            ("2^3^2", 64.0),
            ("5%3", 2.0),
            ("_5%3", -2.0),
            ("_3+1", -2.0),
            ("3-_1", 4.0),
            ("_2^2", 4.0),
            ("1+_sin(0)", 1.0),
        ],
    )
    def test_values(self, text: str, expected: float) -> None:
        assert _eval(text) == pytest.approx(expected)

    def test_right_operand_popped_first(self) -> None:
        assert _eval("a-b", a=10.0, b=3.0) == 7.0
        assert _eval("a/b", a=1.0, b=4.0) == 0.25

    def test_trig_and_logs(self) -> None:
        assert _eval("sin(0)") == 0.0
        assert _eval("cos(0)") == 1.0
        assert _eval("sec(0)") == 1.0
        assert _eval("log(e)") == pytest.approx(1.0)
        assert _eval("ln(1)") == 0.0
        assert _eval("exp(0)") == 1.0
        assert _eval("atan(1)*4") == pytest.approx(math.pi)

    def test_supplementary_functions(self) -> None:
        assert _eval("sqrt(16)") == 4.0
        assert _eval("abs(_2.5)") == 2.5
        assert _eval("floor(2.7)") == 2.0
        assert _eval("ceil(2.1)") == 3.0
        assert _eval("tau/pi") == pytest.approx(2.0)


class TestIeeeResults:
    def test_division_by_zero(self) -> None:
        assert _eval("1/0") == math.inf
        assert _eval("_1/0") == -math.inf
        assert math.isnan(_eval("0/0"))

    def test_domain_errors_are_nan(self) -> None:
        assert math.isnan(_eval("sqrt(_1)"))
        assert math.isnan(_eval("asin(2)"))
        assert _eval("log(0)") == -math.inf

    def test_cosec_of_zero(self) -> None:
        assert _eval("cosec(0)") == math.inf

    def test_overflow_is_inf(self) -> None:
        assert _eval("10^400") == math.inf


# ────────────────────────────────────────────────────────────────
# Comparison and logic
# ────────────────────────────────────────────────────────────────


class TestComparisons:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1+1=2", 1.0),
            ("1=2", 0.0),
            ("1!=2", 1.0),
            ("3>2", 1.0),
            ("3<2", 0.0),
            ("2>=2", 1.0),
            ("3<=2", 0.0),
            ("1&0", 0.0),
            ("1&2", 1.0),
            ("0|0", 0.0),
            ("0|3", 1.0),
            ("1<2&3<4", 1.0),
            ("0&1|1", 1.0),
        ],
    )
    def test_truth_values(self, text: str, expected: float) -> None:
        assert _eval(text) == expected

    def test_nan_is_truthy(self) -> None:
        assert _eval("(0/0)&1") == 1.0


# ────────────────────────────────────────────────────────────────
# Failures
# ────────────────────────────────────────────────────────────────


class TestFailures:
    @pytest.mark.parametrize("text", ["1+", "+", "sin", "*2"])
    def test_not_enough_operands_for_operator(self, text: str) -> None:
        with pytest.raises(EvaluationError, match="Not enough operands for") as exc_info:
            _eval(text)
        assert exc_info.value.position == 0

    def test_empty_rpn(self) -> None:
        with pytest.raises(EvaluationError, match="Not enough operands"):
            _eval("()")

    def test_too_many_operands(self) -> None:
        with pytest.raises(EvaluationError, match=r"Too many operands \(3 values left\)"):
            _eval("1 2 3")

    def test_undefined_variable(self) -> None:
        with pytest.raises(EvaluationError, match="Undefined variable 'x'") as exc_info:
            _eval("x+1")
        assert exc_info.value.position == 0

    def test_undefined_never_defaults_to_zero(self) -> None:
        with pytest.raises(EvaluationError):
            evaluate_rpn(_rpn("y"), [Variable(name="x", value=0.0)])


class TestBindings:
    def test_first_duplicate_wins(self) -> None:
        variables = [Variable(name="x", value=1.0), Variable(name="x", value=2.0)]
        assert evaluate_rpn(_rpn("x"), variables) == 1.0

    def test_lookup_is_exact(self) -> None:
        variables = [Variable(name="rate", value=1.0)]
        with pytest.raises(EvaluationError):
            evaluate_rpn(_rpn("rat"), variables)

    def test_tokens_unchanged_by_evaluation(self) -> None:
        rpn = _rpn("a*b+1")
        before = list(rpn)
        evaluate_rpn(rpn, [Variable(name="a", value=2.0), Variable(name="b", value=3.0)])
        evaluate_rpn(rpn, [Variable(name="a", value=5.0), Variable(name="b", value=5.0)])
        assert rpn == before

    def test_none_bindings(self) -> None:
        assert evaluate_rpn(_rpn("1+1"), None) == 2.0
