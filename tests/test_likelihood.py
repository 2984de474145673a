"""Tests for the binomial and Poisson likelihood evaluators."""

import numpy as np
import pytest
from scipy.special import comb

from probmodels.errors import InvalidInputError
from probmodels.mle import (
    COIN_TOSSES,
    COLONY_COUNTS,
    BinomialLikelihood,
    PoissonLikelihood,
    binomial_likelihood,
)


def test_binomial_counts_and_closed_form():
    evaluator = BinomialLikelihood(COIN_TOSSES)
    assert evaluator.n_trials == 15
    assert evaluator.n_successes == 6
    assert evaluator.closed_form_mle() == pytest.approx(0.4)


def test_binomial_likelihood_matches_formula():
    evaluator = BinomialLikelihood(COIN_TOSSES)
    expected = 0.4**6 * 0.6**9
    assert evaluator.likelihood(0.4) == pytest.approx(expected, rel=1e-12)
    assert evaluator.log_likelihood(0.4) == pytest.approx(
        6 * np.log(0.4) + 9 * np.log(0.6), rel=1e-12
    )


def test_aggregated_likelihood_adds_binomial_coefficient():
    evaluator = BinomialLikelihood(COIN_TOSSES)
    assert evaluator.aggregated_likelihood(0.4) == pytest.approx(
        comb(15, 6) * evaluator.likelihood(0.4), rel=1e-10
    )
    assert binomial_likelihood(6, 15, 0.4) == pytest.approx(
        evaluator.aggregated_likelihood(0.4)
    )


@pytest.mark.parametrize("theta", [0.05, 0.3, 0.4, 0.77, 0.99])
def test_log_likelihood_is_log_of_likelihood_binomial(theta):
    evaluator = BinomialLikelihood(COIN_TOSSES)
    likelihood = evaluator.likelihood(theta)
    assert likelihood >= 0
    assert np.log(likelihood) == pytest.approx(evaluator.log_likelihood(theta))
    assert evaluator.negative_log_likelihood(theta) == pytest.approx(
        -evaluator.log_likelihood(theta)
    )


@pytest.mark.parametrize("theta", [0.5, 2.0, 3.9, 10.0])
def test_log_likelihood_is_log_of_likelihood_poisson(theta):
    evaluator = PoissonLikelihood(COLONY_COUNTS)
    assert np.log(evaluator.likelihood(theta)) == pytest.approx(
        evaluator.log_likelihood(theta)
    )


def test_poisson_closed_form_is_sample_mean():
    evaluator = PoissonLikelihood(COLONY_COUNTS)
    assert evaluator.closed_form_mle() == pytest.approx(47 / 12)
    assert evaluator.bounds == (0.0, 20.0)


def test_boundary_values_are_degenerate_not_errors():
    evaluator = BinomialLikelihood([0, 1])
    assert evaluator.likelihood(0.0) == 0.0
    assert evaluator.log_likelihood(0.0) == -np.inf
    assert evaluator.log_likelihood(1.0) == -np.inf

    poisson = PoissonLikelihood([0, 0, 0])
    assert poisson.likelihood(0.0) == pytest.approx(1.0)


def test_observations_are_read_only_copies():
    tosses = list(COIN_TOSSES)
    evaluator = BinomialLikelihood(tosses)
    tosses[0] = 1
    assert evaluator.observations[0] == 0
    with pytest.raises(ValueError):
        evaluator.observations[0] = 1


@pytest.mark.parametrize("theta", [-0.1, 1.5, np.nan, np.inf, [0.2, 0.3]])
def test_parameter_outside_domain_raises(theta):
    evaluator = BinomialLikelihood(COIN_TOSSES)
    with pytest.raises(InvalidInputError):
        evaluator.likelihood(theta)
    with pytest.raises(InvalidInputError):
        evaluator.log_likelihood(theta)


def test_poisson_parameter_above_upper_raises():
    evaluator = PoissonLikelihood(COLONY_COUNTS, upper=10.0)
    with pytest.raises(InvalidInputError):
        evaluator.log_likelihood(10.5)


@pytest.mark.parametrize(
    "observations",
    [[], [0, 2], [0.5, 1], [[0, 1], [1, 0]], ["a", "b"], [0, np.nan]],
)
def test_invalid_binomial_observations(observations):
    with pytest.raises(InvalidInputError):
        BinomialLikelihood(observations)


@pytest.mark.parametrize("observations", [[], [1, -2, 3], [1.5], [np.inf]])
def test_invalid_poisson_observations(observations):
    with pytest.raises(InvalidInputError):
        PoissonLikelihood(observations)


@pytest.mark.parametrize("upper", [0.0, -1.0, np.inf])
def test_invalid_poisson_upper(upper):
    with pytest.raises(InvalidInputError):
        PoissonLikelihood(COLONY_COUNTS, upper=upper)


def test_invalid_input_error_is_value_error():
    with pytest.raises(ValueError):
        BinomialLikelihood([])


def test_curve_matches_pointwise_evaluation():
    evaluator = PoissonLikelihood(COLONY_COUNTS)
    thetas = np.linspace(1.0, 8.0, 5)
    curve = evaluator.curve(thetas, log=True)
    assert curve.shape == (5,)
    np.testing.assert_allclose(
        curve, [evaluator.log_likelihood(t) for t in thetas]
    )
    assert np.argmax(curve) == 2


@pytest.mark.parametrize("args", [(6, 0, 0.4), (16, 15, 0.4), (6, 15, 1.2)])
def test_binomial_likelihood_validation(args):
    with pytest.raises(InvalidInputError):
        binomial_likelihood(*args)
