"""Unit tests for the SymPy-backed expression evaluator."""

import math

import pytest

from rootfindingAPP.core import expressions
from rootfindingAPP.core.expressions import (
    FAILURE_DOMAIN,
    FAILURE_OVERFLOW,
    FAILURE_PARSE,
    FAILURE_UNDEFINED,
    PRESETS,
    EvalFailure,
    ExpressionEvaluator,
    SympyEvaluator,
)
from rootfindingAPP.core.method_config import MethodConfig


class TestEvaluate:

    def test_polynomial(self, evaluator):
        assert evaluator.evaluate("x^2 - 4", 3.0) == pytest.approx(5.0)

    def test_implicit_multiplication(self, evaluator):
        assert evaluator.evaluate("2x + 1", 1.0) == pytest.approx(3.0)
        assert evaluator.evaluate("-0.9x^2 + 1.7x + 2.5", 3.0) == pytest.approx(-0.5)

    def test_functions_and_euler_number(self, evaluator):
        assert evaluator.evaluate("exp(x)", 0.0) == pytest.approx(1.0)
        assert evaluator.evaluate("cos(x) - x", 0.0) == pytest.approx(1.0)
        assert evaluator.evaluate("e^x", 1.0) == pytest.approx(math.e)

    def test_explicit_e_binding(self, evaluator):
        assert evaluator.evaluate("e*x", 2.0, e=3.0) == pytest.approx(6.0)

    def test_returns_plain_float(self, evaluator):
        value = evaluator.evaluate("5", 123.0)
        assert isinstance(value, float)
        assert value == 5.0

    def test_satisfies_protocol(self, evaluator):
        assert isinstance(evaluator, ExpressionEvaluator)


class TestEvaluateFailures:

    def test_syntax_error(self, evaluator):
        result = evaluator.evaluate("2*(x", 1.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_PARSE

    def test_empty_expression(self, evaluator):
        result = evaluator.evaluate("   ", 1.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_PARSE

    def test_undefined_variable(self, evaluator):
        result = evaluator.evaluate("x + y", 1.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_UNDEFINED
        assert "y" in result.message

    @pytest.mark.parametrize(
        "expression, x",
        [
            ("sqrt(x)", -1.0),
            ("log(x)", 0.0),
            ("1/x", 0.0),
        ],
    )
    def test_domain_errors(self, evaluator, expression, x):
        result = evaluator.evaluate(expression, x)
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_DOMAIN
        assert result.x == x

    def test_complex_result_is_rejected(self, evaluator):
        result = evaluator.evaluate("x^0.3", -2.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_DOMAIN

    def test_magnitude_ceiling(self, evaluator):
        result = evaluator.evaluate("exp(x)", 30.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_OVERFLOW
        assert result.is_divergent

    def test_float_overflow(self, evaluator):
        result = evaluator.evaluate("exp(x)", 1000.0)
        assert isinstance(result, EvalFailure)
        assert result.is_divergent

    def test_custom_ceiling(self):
        small = SympyEvaluator(ceiling=100.0)
        assert isinstance(small.evaluate("x^3", 5.0), EvalFailure)
        assert small.evaluate("x^2", 5.0) == pytest.approx(25.0)

    def test_uncompilable_expression(self, evaluator):
        result = evaluator.evaluate("Derivative(sin(x), x)", 1.0)
        assert isinstance(result, EvalFailure)

    def test_compile_error_is_reported(self, evaluator, monkeypatch):
        def broken_lambdify(*args, **kwargs):
            raise NotImplementedError("printer has no method")

        monkeypatch.setattr(expressions.sp, "lambdify", broken_lambdify)
        result = evaluator.evaluate("x^5 + 17*x", 1.0)

        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_PARSE
        assert "printer has no method" in result.message


class TestDifferentiate:

    def test_cubic(self, evaluator):
        derivative = evaluator.differentiate("x^3 - 2*x - 5")
        assert isinstance(derivative, str)
        assert evaluator.evaluate(derivative, 2.0) == pytest.approx(10.0)

    def test_transcendental(self, evaluator):
        derivative = evaluator.differentiate("cos(x) - x")
        assert evaluator.evaluate(derivative, 0.0) == pytest.approx(-1.0)

    def test_constant(self, evaluator):
        derivative = evaluator.differentiate("5")
        assert evaluator.evaluate(derivative, 1.0) == 0.0

    def test_invalid_expression(self, evaluator):
        result = evaluator.differentiate("2*(x")
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_PARSE

    def test_absolute_value_is_real(self, evaluator):
        derivative = evaluator.differentiate("abs(x) - 1")

        assert isinstance(derivative, str)
        assert "re(" not in derivative
        assert evaluator.evaluate(derivative, 3.0) == 1.0
        assert evaluator.evaluate(derivative, -2.0) == -1.0

    def test_unevaluated_derivative_is_failure(self, evaluator):
        result = evaluator.differentiate("f(x) + x")
        assert isinstance(result, EvalFailure)
        assert result.kind == FAILURE_PARSE


class TestPresets:

    def test_presets_produce_valid_configs(self):
        for preset in PRESETS.values():
            cfg = preset.to_config()
            assert isinstance(cfg, MethodConfig)
            cfg.validate()

    def test_preset_expressions_evaluate(self, evaluator):
        for preset in PRESETS.values():
            cfg = preset.to_config()
            x = cfg.initial_guess if cfg.initial_guess is not None else (cfg.bounds or cfg.seeds)[0]
            assert not isinstance(evaluator.evaluate(cfg.expression, x), EvalFailure)
