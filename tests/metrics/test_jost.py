# pyright: basic
from __future__ import annotations

import numpy as np

from ecodiversity import config
from ecodiversity.metrics import decomposition, diversity, jost


def test_jost_aliases():
    assert jost.jostalpha is jost.jost_alpha
    assert jost.jostbeta is jost.jost_beta


def test_jost_beta(mock_comms, qs):
    # at q=1 beta is the inverse of ecosystem representativeness
    assert np.allclose(
        jost.jost_beta(mock_comms.communities, 1),
        1 / decomposition.ecosystem_diversity("rhobar", mock_comms.communities, 1),
        atol=config.ATOL,
        rtol=config.RTOL,
    )
    # identical subcommunities are a single effective subcommunity
    assert np.allclose(
        jost.jost_beta(mock_comms.allthesame, qs),
        np.ones(len(qs)),
        atol=config.ATOL,
        rtol=config.RTOL,
    )
    # evenly sized distinct subcommunities are each a separate effective subcommunity
    num_comms = mock_comms.evendistinct.shape[1]
    assert np.allclose(
        jost.jost_beta(mock_comms.evendistinct, qs),
        np.full(len(qs), num_comms),
        atol=config.ATOL,
        rtol=config.RTOL,
    )


def test_jost_decomposition(mock_comms, qs):
    # alpha x beta = gamma
    for props in mock_comms:
        assert np.allclose(
            jost.jost_alpha(props, qs) * jost.jost_beta(props, qs),
            diversity.hill_diversity(props.sum(axis=1), qs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )


def test_jost_alpha(mock_comms, qs):
    # coincides with normalised ecosystem alpha for identical composition or equal weights
    for props in [mock_comms.allthesame, mock_comms.evendistinct, mock_comms.smoothed]:
        assert np.allclose(
            jost.jost_alpha(props, qs),
            decomposition.ecosystem_diversity("alphabar", props, qs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
    # closed form at q=2 with uneven subcommunity weights
    props = mock_comms.communities
    weights = props.sum(axis=0)
    normalised = props / weights
    expected = 1 / (np.sum(weights**2 * np.sum(normalised**2, axis=0)) / np.sum(weights**2))
    assert np.allclose(jost.jost_alpha(props, 2), expected, atol=config.ATOL, rtol=config.RTOL)
    # at q=0 the weights are uniform
    assert np.allclose(
        jost.jost_alpha(props, 0),
        np.mean((props > 0).sum(axis=0)),
        atol=config.ATOL,
        rtol=config.RTOL,
    )
    # at q=inf only the largest subcommunity remains
    largest = np.argmax(weights)
    assert np.allclose(
        jost.jost_alpha(props, np.inf),
        1 / np.max(normalised[:, largest]),
        atol=config.ATOL,
        rtol=config.RTOL,
    )


def test_jost_negative_orders(mock_comms):
    neg_qs = [-np.inf, -2, -0.5]
    for props in mock_comms:
        alpha = jost.jost_alpha(props, neg_qs)
        assert np.all(np.isfinite(alpha))
        assert np.allclose(
            alpha * jost.jost_beta(props, neg_qs),
            diversity.hill_diversity(props.sum(axis=1), neg_qs),
            atol=config.ATOL,
            rtol=config.RTOL,
        )
    # identical subcommunities remain a single effective subcommunity
    assert np.allclose(
        jost.jost_beta(mock_comms.allthesame, neg_qs),
        np.ones(len(neg_qs)),
        atol=config.ATOL,
        rtol=config.RTOL,
    )
    props = mock_comms.communities
    weights = props.sum(axis=0)
    normalised = props / weights
    # closed form at q=-2
    expected = (np.sum(weights**-2 * np.sum(normalised**-2, axis=0)) / np.sum(weights**-2)) ** (1 / 3)
    assert np.allclose(jost.jost_alpha(props, -2), expected, atol=config.ATOL, rtol=config.RTOL)
    # at q=-inf only the smallest subcommunity remains
    smallest = np.argmin(weights)
    assert np.allclose(
        jost.jost_alpha(props, -np.inf),
        1 / np.min(normalised[:, smallest]),
        atol=config.ATOL,
        rtol=config.RTOL,
    )


def test_jost_shapes(mock_comms, qs):
    assert isinstance(jost.jost_alpha(mock_comms.communities, 1), float)
    assert isinstance(jost.jost_beta(mock_comms.communities, 1), float)
    assert jost.jost_alpha(mock_comms.communities, qs).shape == (len(qs),)
    assert jost.jost_beta(mock_comms.communities, qs).shape == (len(qs),)
    # counts are normalised
    assert np.allclose(
        jost.jost_alpha(mock_comms.communities * 100, qs),
        jost.jost_alpha(mock_comms.communities, qs),
        atol=config.ATOL,
        rtol=config.RTOL,
    )
