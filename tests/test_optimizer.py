"""Tests for the bounded scalar optimizer."""

import math

import numpy as np
import pytest

from probmodels.errors import InvalidInputError, OptimizationError
from probmodels.mle import BoundedOptimizer, maximize_scalar, minimize_scalar_bounded


@pytest.mark.parametrize("method", ["brent", "golden"])
def test_maximize_concave_quadratic(method):
    result = BoundedOptimizer(method=method).optimize(
        lambda x: -(x - 2.0) ** 2, (0.0, 5.0), mode="maximize"
    )
    assert result["x"] == pytest.approx(2.0, abs=1e-6)
    assert result["fun"] == pytest.approx(0.0, abs=1e-10)
    assert result["converged"]
    assert result["method"] == method
    assert result["mode"] == "maximize"
    assert result["n_evals"] > 0


@pytest.mark.parametrize("method", ["brent", "golden"])
def test_minimize_convex_quadratic(method):
    result = BoundedOptimizer(method=method).optimize(
        lambda x: (x + 1.5) ** 2 + 3.0, (-4.0, 4.0), mode="minimize"
    )
    assert result["x"] == pytest.approx(-1.5, abs=1e-6)
    assert result["fun"] == pytest.approx(3.0)


def test_reported_value_keeps_caller_sign():
    result = maximize_scalar(lambda x: x * (1 - x), (0.0, 1.0))
    assert result["x"] == pytest.approx(0.5, abs=1e-6)
    assert result["fun"] == pytest.approx(0.25)


@pytest.mark.parametrize("method", ["brent", "golden"])
def test_optimum_on_boundary(method):
    result = BoundedOptimizer(method=method).optimize(
        lambda x: x, (0.0, 1.0), mode="maximize"
    )
    assert result["x"] == 1.0

    result = BoundedOptimizer(method=method).optimize(
        lambda x: x, (0.0, 1.0), mode="minimize"
    )
    assert result["x"] == 0.0


def test_brent_and_golden_agree():
    func = lambda x: math.sin(x)  # noqa: E731
    brent = minimize_scalar_bounded(func, (3.0, 6.0), method="brent")
    golden = minimize_scalar_bounded(func, (3.0, 6.0), method="golden")
    assert brent["x"] == pytest.approx(1.5 * math.pi, abs=1e-6)
    assert golden["x"] == pytest.approx(brent["x"], abs=1e-6)


def test_golden_iterations_are_bounded():
    optimizer = BoundedOptimizer(method="golden", xtol=1e-8, max_iter=500)
    result = optimizer.optimize(lambda x: (x - 3.0) ** 2, (0.0, 20.0), mode="minimize")
    # 20 * 0.618^n <= 1e-8  =>  n ~ 45
    assert result["n_iter"] < 60


def test_iteration_cap_reports_non_convergence():
    optimizer = BoundedOptimizer(method="golden", max_iter=3)
    result = optimizer.optimize(lambda x: (x - 2.0) ** 2, (0.0, 5.0), mode="minimize")
    assert not result["converged"]
    assert result["n_iter"] == 3


def test_strict_iteration_cap_raises():
    optimizer = BoundedOptimizer(method="golden", max_iter=3, strict=True)
    with pytest.raises(OptimizationError):
        optimizer.optimize(lambda x: (x - 2.0) ** 2, (0.0, 5.0), mode="minimize")


@pytest.mark.parametrize(
    "bounds",
    [(1.0, 1.0), (2.0, 1.0), (0.0, np.inf), (np.nan, 1.0), ("a", 1.0), (1.0,), None],
)
def test_malformed_interval_raises(bounds):
    with pytest.raises(InvalidInputError):
        BoundedOptimizer().optimize(lambda x: x, bounds)


def test_unknown_mode_raises():
    with pytest.raises(InvalidInputError):
        BoundedOptimizer().optimize(lambda x: x, (0.0, 1.0), mode="sideways")


@pytest.mark.parametrize(
    "kwargs", [{"method": "newton"}, {"xtol": 0.0}, {"xtol": -1e-3}, {"max_iter": 0}]
)
def test_invalid_optimizer_settings(kwargs):
    with pytest.raises(InvalidInputError):
        BoundedOptimizer(**kwargs)


@pytest.mark.parametrize("method", ["brent", "golden"])
def test_objective_returning_nan_raises(method):
    with pytest.raises(InvalidInputError):
        BoundedOptimizer(method=method).optimize(
            lambda x: np.nan if x > 0.5 else x, (0.0, 1.0)
        )


def test_objective_not_evaluable_raises():
    with pytest.raises(InvalidInputError):
        BoundedOptimizer().optimize(lambda x: math.log(x - 1.0), (0.0, 2.0))
