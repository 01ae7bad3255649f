"""Newton-Raphson method."""

import pytest

from rootfindingAPP.core.engine import StepController
from rootfindingAPP.core.expressions import FAILURE_PARSE, EvalFailure, SympyEvaluator
from rootfindingAPP.core.iteration_result import NewtonRecord
from rootfindingAPP.core.method_base import FailureKind, RunStatus
from rootfindingAPP.core.method_config import Method, MethodConfig


class NoDerivativeEvaluator(SympyEvaluator):
    """Evaluator that cannot differentiate anything."""

    def differentiate(self, expression, variable="x"):
        return EvalFailure(FAILURE_PARSE, "symbolic differentiation disabled")


def _newton(expression, x0, **kwargs):
    return MethodConfig(method=Method.NEWTON_RAPHSON, expression=expression, initial_guess=x0, **kwargs)


class TestNewtonRaphson:

    def test_cubic_converges_in_three_steps(self, controller, newton_config):
        state = controller.run_to_completion(newton_config)
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.CONVERGED
        assert outcome.iterations_used == 3
        assert outcome.root == pytest.approx(2.0945515, abs=1e-6)

        first = state.records[0]
        assert isinstance(first, NewtonRecord)
        assert first.x == 2.0
        assert first.fx == pytest.approx(-1.0)
        assert first.fpx == pytest.approx(10.0)
        assert first.x_next == pytest.approx(2.1)
        assert first.absolute_error == pytest.approx(0.1)

    def test_iterates_chain(self, controller, newton_config):
        records = controller.run_to_completion(newton_config).records
        for prev, nxt in zip(records, records[1:]):
            assert nxt.x == prev.x_next

    def test_explicit_derivative_matches_symbolic(self, controller, newton_config):
        explicit = _newton("x^3 - 2*x - 5", 2.0, derivative_expression="3*x^2 - 2", tolerance=1e-4)

        symbolic_records = controller.run_to_completion(newton_config).records
        explicit_records = controller.run_to_completion(explicit).records

        assert len(explicit_records) == len(symbolic_records)
        for ours, theirs in zip(explicit_records, symbolic_records):
            assert ours.x_next == pytest.approx(theirs.x_next)

    @pytest.mark.parametrize("preset_expr, x0, root", [
        ("x^2 - 4", 1.0, 2.0),
        ("cos(x) - x", 0.5, 0.7390851),
        ("exp(x) - 2*x - 1", 1.0, 1.2564312),
    ])
    def test_classic_examples(self, controller, preset_expr, x0, root):
        state = controller.run_to_completion(_newton(preset_expr, x0, tolerance=1e-4))
        assert state.status is RunStatus.CONVERGED
        assert controller.outcome(state).root == pytest.approx(root, abs=1e-5)

    def test_zero_derivative_after_first_step(self, controller):
        # x0 = 1: x1 = 1 - 2/2 = 0, where f'(0) = 0
        state = controller.run_to_completion(_newton("x^2 + 1", 1.0))

        assert state.status is RunStatus.FAILED
        assert state.failure is FailureKind.NUMERICAL_DEGENERACY
        assert len(state.records) == 1
        assert state.records[0].x_next == 0.0
        assert "2" in state.message

    def test_zero_derivative_at_start(self, controller):
        state = controller.run_to_completion(_newton("x^2 - 4", 0.0))

        assert state.status is RunStatus.FAILED
        assert state.failure is FailureKind.NUMERICAL_DEGENERACY
        assert state.records == []
        assert "derivative near zero" in state.message
        assert controller.outcome(state).root is None

    def test_evaluation_failure_mid_run(self, controller):
        # x1 = 3 - 3*log(3) < 0
        state = controller.run_to_completion(_newton("log(x)", 3.0))

        assert state.status is RunStatus.FAILED
        assert state.failure is FailureKind.EVALUATION_FAILURE
        assert len(state.records) == 1
        assert state.records[0].x_next < 0

    def test_derivative_unavailable(self, newton_config):
        controller = StepController(NoDerivativeEvaluator())
        state = controller.prepare(newton_config)

        assert state.status is RunStatus.FAILED
        assert state.failure is FailureKind.DERIVATIVE_UNAVAILABLE
        assert "derivative could not be computed" in state.message
        assert state.records == []

        controller.advance(state)
        assert state.records == []

    def test_explicit_derivative_bypasses_differentiation(self):
        controller = StepController(NoDerivativeEvaluator())
        cfg = _newton("x^2 - 4", 1.0, derivative_expression="2*x", tolerance=1e-4)

        state = controller.run_to_completion(cfg)
        assert state.status is RunStatus.CONVERGED

    def test_unparsable_expression(self, controller):
        state = controller.prepare(_newton("2*(x", 1.0))
        assert state.failure is FailureKind.DERIVATIVE_UNAVAILABLE

    def test_absolute_value_converges(self, controller):
        # f'(x) = sign(x) for real x: 3 -> 1, then a zero step
        state = controller.run_to_completion(_newton("abs(x) - 1", 3.0))
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.CONVERGED
        assert outcome.root == pytest.approx(1.0)
        assert [rec.fpx for rec in state.records] == [1.0, 1.0]
        assert len(state.records) == 2
