"""Bisection and regula falsi."""

import pytest

from rootfindingAPP.core.bracketing import BracketState, RegulaFalsiMethod
from rootfindingAPP.core.exceptions import ValidationError
from rootfindingAPP.core.iteration_result import BracketRecord
from rootfindingAPP.core.method_base import FailureKind, RunStatus
from rootfindingAPP.core.method_config import Method, MethodConfig

ROOT = 2.8601044


class TestBisection:

    def test_converges_to_bracketed_root(self, controller, bisection_config):
        state = controller.run_to_completion(bisection_config)
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.CONVERGED
        assert outcome.root == pytest.approx(ROOT, abs=1e-5)
        assert 1 <= outcome.iterations_used <= bisection_config.max_iterations

    def test_first_record(self, controller, bisection_config):
        state = controller.advance(controller.prepare(bisection_config))
        record = state.records[0]

        assert isinstance(record, BracketRecord)
        assert record.index == 1
        assert record.a == pytest.approx(2.8)
        assert record.b == pytest.approx(3.0)
        assert record.fa == pytest.approx(0.204)
        assert record.fb == pytest.approx(-0.5)
        assert record.c == pytest.approx(2.9)
        assert record.fc == pytest.approx(-0.139)
        assert record.chosen == "left"
        assert record.absolute_error == pytest.approx(0.139)

    def test_bracket_shrinks_and_keeps_sign_change(self, controller, bisection_config):
        records = controller.run_to_completion(bisection_config).records

        widths = [rec.width for rec in records]
        assert all(later <= earlier for earlier, later in zip(widths, widths[1:]))
        assert all(rec.fa * rec.fb < 0 for rec in records)
        assert [rec.index for rec in records] == list(range(1, len(records) + 1))

    def test_next_bracket_follows_chosen_side(self, controller, bisection_config):
        records = controller.run_to_completion(bisection_config).records

        for prev, nxt in zip(records, records[1:]):
            if prev.chosen == "left":
                assert (nxt.a, nxt.b) == (prev.a, prev.c)
            else:
                assert (nxt.a, nxt.b) == (prev.c, prev.b)

    def test_exact_root_at_midpoint(self, controller):
        cfg = MethodConfig(method=Method.BISECTION, expression="x - 1", bounds=(0.0, 2.0))
        state = controller.run_to_completion(cfg)

        assert state.status is RunStatus.CONVERGED
        assert len(state.records) == 1
        assert state.records[0].fc == 0.0
        assert state.records[0].chosen == "right"
        assert controller.outcome(state).root == 1.0

    def test_no_sign_change_is_rejected(self, controller):
        cfg = MethodConfig(method=Method.BISECTION, expression="x^2 + 1", bounds=(0.0, 2.0))
        with pytest.raises(ValidationError) as excinfo:
            controller.prepare(cfg)
        assert excinfo.value.field == "bounds"

    def test_root_on_endpoint_is_rejected(self, controller):
        cfg = MethodConfig(method=Method.BISECTION, expression="x", bounds=(0.0, 1.0))
        with pytest.raises(ValidationError):
            controller.prepare(cfg)

    def test_endpoint_evaluation_failure_is_rejected(self, controller):
        cfg = MethodConfig(method=Method.BISECTION, expression="log(x)", bounds=(0.0, 2.0))
        with pytest.raises(ValidationError):
            controller.prepare(cfg)

    def test_max_iterations(self, controller):
        cfg = MethodConfig(
            method=Method.BISECTION,
            expression="-0.9*x^2 + 1.7*x + 2.5",
            bounds=(2.8, 3.0),
            tolerance=1e-12,
            max_iterations=5,
        )
        state = controller.run_to_completion(cfg)
        outcome = controller.outcome(state)

        assert outcome.status is RunStatus.MAX_ITERATIONS_REACHED
        assert outcome.iterations_used == 5
        assert outcome.root == state.records[-1].c


class TestRegulaFalsi:

    @pytest.fixture
    def config(self):
        return MethodConfig(
            method=Method.REGULA_FALSI,
            expression="-0.9*x^2 + 1.7*x + 2.5",
            bounds=(2.8, 3.0),
            tolerance=1e-6,
            max_iterations=20,
        )

    def test_converges_faster_than_bisection(self, controller, config, bisection_config):
        falsi = controller.run_to_completion(config)
        bisection = controller.run_to_completion(bisection_config)

        assert falsi.status is RunStatus.CONVERGED
        assert controller.outcome(falsi).root == pytest.approx(ROOT, abs=1e-6)
        assert len(falsi.records) < len(bisection.records)

    def test_first_point_is_chord_intersection(self, controller, config):
        record = controller.advance(controller.prepare(config)).records[0]

        expected = (2.8 * -0.5 - 3.0 * 0.204) / (-0.5 - 0.204)
        assert record.c == pytest.approx(expected)
        assert 2.8 < record.c < 3.0

    def test_flat_chord_is_degenerate(self, evaluator, config):
        method = RegulaFalsiMethod(config, evaluator)
        result = method.step(BracketState(a=0.0, b=1.0, fa=1.0, fb=1.0), 1)

        assert result.terminal
        assert result.record is None
        assert result.terminal_reason is RunStatus.FAILED
        assert result.failure is FailureKind.NUMERICAL_DEGENERACY
