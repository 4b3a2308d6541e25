r"""
Classic diversity indices expressed through partitioned diversity.

Each of the classic indices is a transformation of a diversity measure at a fixed order:

| index | formula | notes |
|-------|:-------:|-------|
| richness | $$D(q=0)$$ | The number of categories present, regardless of abundance. |
| shannon | $$log\ D(q=1)$$ | Shannon entropy. |
| simpson | $$D(q=2)^{-1}$$ | Simpson's index (concentration). |
| jaccard | $$A(q) / G(q) - 1$$ | Ratio of raw ecosystem alpha to ecosystem gamma, for two subcommunities only. |

The generalised forms accept the level (subcommunity or ecosystem), the diversity measure, and an optional similarity
matrix. The plain forms compute normalised alpha diversity for each subcommunity with naive similarity.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt

from ecodiversity import config, types
from ecodiversity.errors import DomainError
from ecodiversity.metrics import decomposition
from ecodiversity.metrics.diversity import cast_qs, unpack_orders

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def generalised_richness(
    level: str,
    measure: str,
    proportions: types.ProportionsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a generalised version of richness.

    Richness is diversity at q = 0 for any diversity measure.

    Parameters
    ----------
    level: str
        Either "subcommunity" or "ecosystem".
    measure: str
        The diversity measure, one of "alpha", "alphabar", "beta", "betabar", "rho", "rhobar", or "gamma".
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns), as proportions or counts.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix, by default the identity matrix.

    Returns
    -------
    richness: float | ndarray[float]
        Richness of the ecosystem, else of each subcommunity.

    """
    return decomposition.compute_diversity(level, measure, proportions, 0, similarity)


def richness(proportions: types.ProportionsType) -> npt.NDArray[np.float64]:
    """
    Compute the (species) richness of each subcommunity.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns), as proportions or counts.

    Returns
    -------
    richness: ndarray[float]
        The number of categories present in each subcommunity.

    """
    return generalised_richness("subcommunity", "alphabar", proportions)


def generalised_shannon(
    level: str,
    measure: str,
    proportions: types.ProportionsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a generalised version of Shannon entropy.

    Shannon entropy is the natural logarithm of diversity at q = 1 for any diversity measure. Parameters are as for
    [`generalised_richness`](#generalised-richness).

    """
    return np.log(decomposition.compute_diversity(level, measure, proportions, 1, similarity))


def shannon(proportions: types.ProportionsType) -> npt.NDArray[np.float64]:
    """Compute the Shannon entropy of each subcommunity, in nats."""
    return generalised_shannon("subcommunity", "alphabar", proportions)


def generalised_simpson(
    level: str,
    measure: str,
    proportions: types.ProportionsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a generalised version of Simpson's index.

    Simpson's index is the reciprocal of diversity (i.e. concentration) at q = 2 for any diversity measure.
    Parameters are as for [`generalised_richness`](#generalised-richness).

    """
    return decomposition.compute_diversity(level, measure, proportions, 2, similarity) ** -1


def simpson(proportions: types.ProportionsType) -> npt.NDArray[np.float64]:
    """Compute Simpson's index (the probability that two draws are of the same category) of each subcommunity."""
    return generalised_simpson("subcommunity", "alphabar", proportions)


def generalised_jaccard(
    proportions: types.ProportionsType,
    qs: types.QsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a generalised version of the Jaccard index.

    Evaluates raw ecosystem alpha divided by ecosystem gamma, minus one, for each order. This gives a measure of the
    overlap of two subcommunities, though beta and normalised beta have better properties.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by exactly two subcommunities (columns).
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix, by default the identity matrix.

    Returns
    -------
    jaccard: float | ndarray[float]
        A float for a single order, else a 1d array over the orders.

    """
    orders, scalar_q = cast_qs(qs)
    eco = decomposition.prepare_ecosystem(proportions, similarity)
    if len(eco.weights) != 2:
        raise DomainError("Can only calculate Jaccard index for 2 subcommunities.")
    if not config.QUIET_MODE:
        logger.info(f"Computing Jaccard index for {len(orders)} values of q.")
    alpha = decomposition.ecosystem_values("alpha", eco, orders)
    gamma = decomposition.ecosystem_values("gamma", eco, orders)
    return unpack_orders(alpha / gamma - 1, scalar_q)


def jaccard(proportions: types.ProportionsType) -> float:
    """
    Compute the Jaccard index (similarity coefficient) of two subcommunities.

    This is the number of categories shared by both subcommunities relative to the number present in either.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by exactly two subcommunities (columns).

    Returns
    -------
    float
        The Jaccard index.

    """
    return float(generalised_jaccard(proportions, 0))
