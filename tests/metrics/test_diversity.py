# pyright: basic
from __future__ import annotations

import numpy as np
import pytest
from scipy.stats import entropy

from ecodiversity import config
from ecodiversity.errors import DegenerateWeightsError, DimensionMismatchError, LengthMismatchError
from ecodiversity.metrics import diversity
from ecodiversity.tools import mock


def test_power_mean():
    assert diversity.powermean is diversity.power_mean
    # uniform weights by default
    assert np.allclose(diversity.power_mean([1, 2, 4]), 7 / 3, atol=config.ATOL, rtol=config.RTOL)
    assert np.allclose(diversity.power_mean([1, 2, 4], 0), 2.0, atol=config.ATOL, rtol=config.RTOL)
    # scalar orders return floats
    assert isinstance(diversity.power_mean([1, 2, 4], 1), float)
    assert isinstance(diversity.power_mean([1, 2, 4], np.float64(1)), float)
    # sequences of orders return arrays
    means = diversity.power_mean([1, 2, 4], [-np.inf, 1, np.inf], weights=[0, 1, 1])
    assert isinstance(means, np.ndarray)
    assert np.allclose(means, [2.0, 3.0, 4.0], atol=config.ATOL, rtol=config.RTOL)
    means = diversity.power_mean(np.array([1, 2, 4]), (0, 1), weights=(1, 1, 1))
    assert means.shape == (2,)


def test_power_mean_extremes():
    # max and min among entries with non-zero weight
    np.random.seed(seed=0)
    for _ in range(10):
        vals = np.random.rand(20)
        wts = np.random.rand(20)
        wts[np.random.rand(20) < 0.3] = 0
        if not np.any(wts > 0):
            continue
        assert diversity.power_mean(vals, np.inf, wts) == np.max(vals[wts > 0])
        assert diversity.power_mean(vals, -np.inf, wts) == np.min(vals[wts > 0])


def test_power_mean_constant():
    np.random.seed(seed=0)
    for const in [0.01, 1.0, 3.3, 250.0]:
        vals = np.full(10, const)
        wts = np.random.rand(10)
        means = diversity.power_mean(vals, [-np.inf, -5, -1, 0, 0.5, 1, 2, 7, np.inf], wts)
        assert np.allclose(means, const, atol=config.ATOL, rtol=config.RTOL)


def test_power_mean_errors():
    with pytest.raises(LengthMismatchError):
        diversity.power_mean([1, 2, 3], 1, [1, 1])
    with pytest.raises(DegenerateWeightsError):
        diversity.power_mean([1, 2, 3], 1, [0, 0, 0])
    # negative and non finite weights
    with pytest.raises(ValueError):
        diversity.power_mean([1, 2, 3], 1, [1, -1, 1])
    with pytest.raises(ValueError):
        diversity.power_mean([1, 2, 3], 1, [1, np.nan, 1])
    # values must be one dimensional
    with pytest.raises(ValueError):
        diversity.power_mean([[1, 2], [3, 4]], 1)
    # malformed orders
    with pytest.raises(TypeError):
        diversity.power_mean([1, 2, 3], "1")  # type: ignore
    with pytest.raises(TypeError):
        diversity.power_mean([1, 2, 3], None)  # type: ignore
    with pytest.raises(ValueError):
        diversity.power_mean([1, 2, 3], [])
    with pytest.raises(ValueError):
        diversity.power_mean([1, 2, 3], [np.nan])
    with pytest.raises(ValueError):
        diversity.power_mean([1, 2, 3], [[1, 2]])


def test_hill_diversity():
    assert diversity.qD is diversity.hill_diversity
    # test hill diversity against scipy entropy
    for counts, probs in mock.mock_species_data():
        # hill q=1 is the exponential of entropy
        assert np.allclose(
            diversity.hill_diversity(probs, 1),
            np.exp(entropy(probs)),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        # orders either side of q=1 converge on the same value
        assert np.allclose(
            diversity.hill_diversity(probs, 0.99999999),
            np.exp(entropy(probs)),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        assert np.allclose(
            diversity.hill_diversity(probs, 1.00000001),
            np.exp(entropy(probs)),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        # q=0 is the number of classes
        assert np.allclose(diversity.hill_diversity(probs, 0), len(counts), atol=config.ATOL, rtol=config.RTOL)
        # q=2 is the inverse simpson concentration
        assert np.allclose(
            diversity.hill_diversity(probs, 2),
            1 / np.sum(probs**2),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        # q=inf is the inverse berger-parker dominance
        assert np.allclose(
            diversity.hill_diversity(probs, np.inf),
            1 / np.max(probs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        # diversity is non-increasing in q
        profile = diversity.hill_diversity(probs, np.linspace(0, 10, 21))
        assert np.all(np.diff(profile) <= config.ATOL)


def test_hill_diversity_absent_categories():
    # absent categories do not contribute
    assert np.allclose(
        diversity.hill_diversity([0.5, 0, 0.5, 0], [0, 1, 2, np.inf]),
        [2.0, 2.0, 2.0, 2.0],
        atol=config.ATOL,
        rtol=config.RTOL,
    )


def test_hill_diversity_shapes(mock_comms, qs):
    probs = np.array([0.5, 0.25, 0.25])
    assert isinstance(diversity.hill_diversity(probs, 1), float)
    assert diversity.hill_diversity(probs, qs).shape == (len(qs),)
    # columns are computed independently
    normalised = mock_comms.communities / mock_comms.communities.sum(axis=0)
    num_comms = normalised.shape[1]
    assert diversity.hill_diversity(normalised, 1).shape == (num_comms,)
    div = diversity.hill_diversity(normalised, qs)
    assert div.shape == (len(qs), num_comms)
    for col_idx in range(num_comms):
        assert np.allclose(
            div[:, col_idx],
            diversity.hill_diversity(normalised[:, col_idx], qs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
    assert np.allclose(div[1], np.exp(entropy(normalised)), atol=config.ATOL, rtol=config.RTOL)


def test_hill_diversity_errors():
    with pytest.raises(TypeError):
        diversity.hill_diversity("abc", 1)  # type: ignore
    with pytest.raises(TypeError):
        diversity.hill_diversity([0.5, 0.5], "1")  # type: ignore
    with pytest.raises(ValueError):
        diversity.hill_diversity([], 1)
    with pytest.raises(ValueError):
        diversity.hill_diversity([0.5, -0.5, 1.0], 1)
    with pytest.raises(ValueError):
        diversity.hill_diversity([0.5, np.nan], 1)
    with pytest.raises(ValueError):
        diversity.hill_diversity(np.ones((2, 2, 2)), 1)
    # no abundance at all
    with pytest.raises(DegenerateWeightsError):
        diversity.hill_diversity([0.0, 0.0], 1)


def test_similarity_diversity(mock_comms, qs):
    assert diversity.qDZ is diversity.similarity_diversity
    # identity similarity matches naive diversity
    for _counts, probs in mock.mock_species_data():
        identity = np.identity(len(probs))
        assert np.allclose(
            diversity.similarity_diversity(probs, qs, identity),
            diversity.hill_diversity(probs, qs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        # identity by default
        assert np.allclose(
            diversity.similarity_diversity(probs, qs),
            diversity.hill_diversity(probs, qs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
        # completely similar categories behave as a single category
        assert np.allclose(
            diversity.similarity_diversity(probs, qs, np.ones((len(probs), len(probs)))),
            1.0,
            atol=config.ATOL,
            rtol=config.RTOL,
        )
    # matrices are computed per column
    normalised = mock_comms.communities / mock_comms.communities.sum(axis=0)
    assert np.allclose(
        diversity.similarity_diversity(normalised, qs, np.identity(normalised.shape[0])),
        diversity.hill_diversity(normalised, qs),
        atol=config.ATOL,
        rtol=config.RTOL,
    )
    # similarity can only reduce diversity
    sim_matrix = mock.mock_similarity_matrix(normalised.shape[0])
    div_z = diversity.similarity_diversity(normalised, qs, sim_matrix)
    assert div_z.shape == (len(qs), normalised.shape[1])
    assert np.all(div_z <= diversity.hill_diversity(normalised, qs) + config.ATOL)
    assert np.all(div_z >= 1 - config.ATOL)


def test_similarity_diversity_errors():
    probs = [0.25, 0.25, 0.5]
    # non square
    with pytest.raises(DimensionMismatchError):
        diversity.similarity_diversity(probs, 1, np.ones((3, 2)))
    # mismatching number of categories
    with pytest.raises(DimensionMismatchError):
        diversity.similarity_diversity(probs, 1, np.identity(4))
    # wrong dimensionality
    with pytest.raises(DimensionMismatchError):
        diversity.similarity_diversity(probs, 1, np.ones(3))
    # out of range similarities
    with pytest.raises(ValueError):
        diversity.similarity_diversity(probs, 1, np.full((3, 3), 2.0))
