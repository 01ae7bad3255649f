"""Fixed-point iteration."""

import math

import pytest

from rootfindingAPP.core.expressions import PRESETS
from rootfindingAPP.core.method_base import FailureKind, RunStatus
from rootfindingAPP.core.method_config import Method, MethodConfig


def _fixed_point(expression, x0, **kwargs):
    return MethodConfig(method=Method.FIXED_POINT, expression=expression, initial_guess=x0, **kwargs)


class TestFixedPoint:

    def test_contraction_converges(self, controller):
        state = controller.run_to_completion(_fixed_point("sqrt(2*x + 5)", 3.0, max_iterations=50))
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.CONVERGED
        assert outcome.root == pytest.approx(1 + math.sqrt(6), abs=1e-5)

    def test_record_chain(self, controller):
        records = controller.run_to_completion(_fixed_point("sqrt(2*x + 5)", 3.0, max_iterations=50)).records

        assert records[0].x == 3.0
        assert records[0].gx == pytest.approx(math.sqrt(11))
        for prev, nxt in zip(records, records[1:]):
            assert nxt.x == prev.gx
        for rec in records:
            assert rec.absolute_error == pytest.approx(abs(rec.gx - rec.x))

    def test_cube_root_preset(self, controller):
        state = controller.run_to_completion(PRESETS["fixed_point_cbrt"].to_config())

        assert state.status is RunStatus.CONVERGED
        assert controller.outcome(state).root == pytest.approx(1.5213797, abs=1e-4)

    def test_divergence_detected(self, controller, divergent_fixed_point_config):
        state = controller.run_to_completion(divergent_fixed_point_config)
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.FAILED
        assert outcome.failure is FailureKind.DIVERGENCE_DETECTED
        assert outcome.root is None
        assert [rec.gx for rec in state.records[:2]] == [47.5, 1125.625]
        assert len(state.records) == 3
        assert "4" in state.message

    def test_divergent_records_are_finite(self, controller, divergent_fixed_point_config):
        state = controller.run_to_completion(divergent_fixed_point_config)

        assert state.records
        for rec in state.records:
            values = [v for v in rec.to_dict().values() if isinstance(v, float)]
            assert values
            assert all(math.isfinite(v) for v in values)

    def test_float_overflow_is_divergence(self, controller):
        state = controller.run_to_completion(_fixed_point("exp(x)", 10.0))

        assert state.failure is FailureKind.DIVERGENCE_DETECTED
        assert len(state.records) == 1

    def test_domain_failure_is_not_divergence(self, controller):
        state = controller.run_to_completion(_fixed_point("sqrt(x)", -4.0))

        assert state.status is RunStatus.FAILED
        assert state.failure is FailureKind.EVALUATION_FAILURE
        assert state.records == []

    def test_max_iterations_keeps_best_estimate(self, controller):
        state = controller.run_to_completion(_fixed_point("cos(x)", 1.0, tolerance=1e-12, max_iterations=5))
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.MAX_ITERATIONS_REACHED
        assert outcome.iterations_used == 5
        assert outcome.root == state.records[-1].gx
