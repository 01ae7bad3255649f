"""Secant method."""

import math

import pytest

from rootfindingAPP.core.exceptions import ValidationError
from rootfindingAPP.core.method_base import FailureKind, RunStatus
from rootfindingAPP.core.method_config import Method, MethodConfig
from rootfindingAPP.core.secant import SecantMethod, SecantState

GOLDEN = (1 + math.sqrt(5)) / 2


class TestSecant:

    def test_converges_to_golden_ratio(self, controller, secant_config):
        state = controller.run_to_completion(secant_config)
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.CONVERGED
        assert outcome.root == pytest.approx(GOLDEN, abs=1e-6)

    def test_first_record(self, controller, secant_config):
        record = controller.advance(controller.prepare(secant_config)).records[0]

        assert record.x_prev == 0.8
        assert record.x_curr == 0.9
        assert record.f_prev == pytest.approx(-1.16)
        assert record.f_curr == pytest.approx(-1.09)
        assert record.slope == pytest.approx(0.7)
        assert record.x_next == pytest.approx(2.457142857)
        assert record.absolute_error == pytest.approx(1.557142857)
        assert record.relative_error == pytest.approx(100.0 * record.absolute_error / record.x_next)

    def test_window_shifts(self, controller, secant_config):
        records = controller.run_to_completion(secant_config).records

        for prev, nxt in zip(records, records[1:]):
            assert nxt.x_prev == prev.x_curr
            assert nxt.x_curr == prev.x_next
            assert nxt.f_curr == prev.f_next

    def test_errors_shrink_on_smooth_problem(self, controller, secant_config):
        errors = [rec.absolute_error for rec in controller.run_to_completion(secant_config).records]
        assert all(later < earlier for earlier, later in zip(errors, errors[1:]))

    def test_equal_function_values_rejected(self, controller):
        cfg = MethodConfig(method=Method.SECANT, expression="x^2", seeds=(-1.0, 1.0))
        with pytest.raises(ValidationError) as excinfo:
            controller.prepare(cfg)
        assert excinfo.value.field == "seeds"

    def test_seed_evaluation_failure_rejected(self, controller):
        cfg = MethodConfig(method=Method.SECANT, expression="log(x)", seeds=(-1.0, 1.0))
        with pytest.raises(ValidationError):
            controller.prepare(cfg)

    def test_flat_secant_is_degenerate(self, evaluator, secant_config):
        method = SecantMethod(secant_config, evaluator)
        result = method.step(SecantState(x_prev=0.0, x_curr=1.0, f_prev=2.0, f_curr=2.0), 3)

        assert result.terminal
        assert result.record is None
        assert result.failure is FailureKind.NUMERICAL_DEGENERACY
        assert "3" in result.message

    def test_step_outside_domain_fails(self, controller):
        # x_next = 2 - 1.3142 / 0.4142 < 0
        cfg = MethodConfig(method=Method.SECANT, expression="sqrt(x) - 0.1", seeds=(1.0, 2.0))
        state = controller.run_to_completion(cfg)

        assert state.status is RunStatus.FAILED
        assert state.failure is FailureKind.EVALUATION_FAILURE
        assert state.records == []
        assert controller.outcome(state).root is None
