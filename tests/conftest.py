"""
Shared pytest fixtures for the root-finding engine tests.
"""

import pytest

from rootfindingAPP.core.engine import StepController
from rootfindingAPP.core.expressions import SympyEvaluator
from rootfindingAPP.core.method_config import Method, MethodConfig


@pytest.fixture
def evaluator():
    return SympyEvaluator()


@pytest.fixture
def controller(evaluator):
    return StepController(evaluator)


@pytest.fixture
def bisection_config():
    """
    f(x) = -0.9x^2 + 1.7x + 2.5 on [2.8, 3.0].

    f(2.8) = 0.204, f(3.0) = -0.5; the only root in the bracket is
    (1.7 + sqrt(11.89)) / 1.8 = 2.8601044...
    """
    return MethodConfig(
        method=Method.BISECTION,
        expression="-0.9*x^2 + 1.7*x + 2.5",
        bounds=(2.8, 3.0),
        tolerance=1e-6,
        max_iterations=20,
    )


@pytest.fixture
def newton_config():
    """x^3 - 2x - 5 = 0 from x0 = 2 (root 2.0945514815...)."""
    return MethodConfig(
        method=Method.NEWTON_RAPHSON,
        expression="x^3 - 2*x - 5",
        initial_guess=2.0,
        tolerance=1e-4,
        max_iterations=20,
    )


@pytest.fixture
def secant_config():
    """x^2 - x - 1 = 0 from x0 = 0.8, x1 = 0.9 (golden ratio)."""
    return MethodConfig(
        method=Method.SECANT,
        expression="x^2 - x - 1",
        seeds=(0.8, 0.9),
        tolerance=1e-6,
        max_iterations=20,
    )


@pytest.fixture
def divergent_fixed_point_config():
    """
    g(x) = (x^2 - 5) / 2 is the rearrangement of x = sqrt(2x + 5) with
    |g'(x)| = |x| > 1 near the root 1 + sqrt(6).

    From x0 = 10: 47.5, 1125.625, 633513.3..., then ~2.0e11 > 1e10.
    """
    return MethodConfig(
        method=Method.FIXED_POINT,
        expression="(x^2 - 5)/2",
        initial_guess=10.0,
        tolerance=1e-6,
        max_iterations=50,
    )


@pytest.fixture
def all_method_configs(bisection_config, newton_config, secant_config, divergent_fixed_point_config):
    return [
        bisection_config,
        MethodConfig(
            method=Method.REGULA_FALSI,
            expression="-0.9*x^2 + 1.7*x + 2.5",
            bounds=(2.8, 3.0),
            tolerance=1e-6,
            max_iterations=20,
        ),
        secant_config,
        newton_config,
        MethodConfig(
            method=Method.FIXED_POINT,
            expression="sqrt(2*x + 5)",
            initial_guess=3.0,
            tolerance=1e-6,
            max_iterations=50,
        ),
        divergent_fixed_point_config,
    ]
