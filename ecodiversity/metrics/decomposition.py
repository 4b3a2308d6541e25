r"""
Partitioned diversity of an ecosystem divided into subcommunities.

An ecosystem is described by a matrix $P$ of categories (rows) by subcommunities (columns) which sums to one. The
subcommunity weights $w_{j}$ are the column sums, $\bar{P}_{j} = P_{j} / w_{j}$ are the normalised subcommunities, and
$p$ (the row sums) the ecosystem proportions. Given a similarity matrix $Z$, each subcommunity measure is a power
mean of order $1-q$ weighted by $\bar{P}_{j}$:

| measure | subcommunity value | notes |
|---------|:------------------:|-------|
| alpha | $$M_{1-q}\big(\bar{P}_{j}, 1 / (ZP)_{j}\big)$$ | Raw alpha: diversity of a subcommunity relative to the whole ecosystem. |
| alphabar | $$M_{1-q}\big(\bar{P}_{j}, 1 / (Z\bar{P})_{j}\big)$$ | Normalised alpha: diversity of the subcommunity in isolation. |
| rho | $$M_{1-q}\big(\bar{P}_{j}, Zp / (ZP)_{j}\big)$$ | Raw redundancy of the subcommunity. |
| rhobar | $$M_{1-q}\big(\bar{P}_{j}, Zp / (Z\bar{P})_{j}\big)$$ | Representativeness of the subcommunity. |
| beta | $$1 / \rho_{j}$$ | Raw distinctiveness. |
| betabar | $$1 / \bar{\rho}_{j}$$ | Normalised distinctiveness. |
| gamma | $$M_{1-q}\big(\bar{P}_{j}, 1 / Zp\big)$$ | Contribution of the subcommunity to ecosystem diversity. |

Ecosystem level values are power means of the subcommunity values weighted by $w$: of order $1-q$ for all measures
except beta and betabar, which use order $q-1$.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt

from ecodiversity import config, types
from ecodiversity.algos import diversity
from ecodiversity.metrics.diversity import cast_proportions, cast_qs, cast_similarity, unpack_orders

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


MEASURES: tuple[str, ...] = ("alpha", "alphabar", "beta", "betabar", "rho", "rhobar", "gamma")
LEVELS: tuple[str, ...] = ("subcommunity", "ecosystem")


class EcosystemArrays(NamedTuple):
    """Arrays describing an ecosystem, as required for computing partitioned diversity."""

    weights: npt.NDArray[np.float64]
    """Relative sizes of the subcommunities."""
    normalised: npt.NDArray[np.float64]
    """Proportions within each subcommunity (categories x subcommunities)."""
    ordinariness: npt.NDArray[np.float64]
    """Similarity weighted abundances ZP (categories x subcommunities)."""
    normalised_ordinariness: npt.NDArray[np.float64]
    """Similarity weighted normalised abundances Z P-bar (categories x subcommunities)."""
    ecosystem_ordinariness: npt.NDArray[np.float64]
    """Similarity weighted ecosystem abundances Zp (categories)."""


def check_measure(measure: str) -> None:
    """Check that a diversity measure is one of the supported measures."""
    if measure not in MEASURES:
        raise ValueError(f'Invalid diversity measure: {measure}. Must be one of {", ".join(MEASURES)}.')


def prepare_ecosystem(
    proportions: types.ProportionsType, similarity: Optional[types.SimilarityType] = None
) -> EcosystemArrays:
    """
    Prepare the arrays describing an ecosystem.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns). Abundances that do not sum to one are normalised
        to ecosystem proportions. A vector is treated as a single subcommunity.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix, by default the identity matrix.

    Returns
    -------
    EcosystemArrays
        The prepared ecosystem arrays.

    """
    props = cast_proportions(proportions)
    if props.ndim == 1:
        props = props.reshape(-1, 1)
    total = props.sum()
    if not total > 0:
        raise ValueError("Proportions must sum to a value greater than zero.")
    if not np.isclose(total, 1, rtol=0, atol=config.SUM_ATOL):
        logger.warning(f"Normalising abundances summing to {total:.6g} to ecosystem proportions.")
        props = props / total
    weights: npt.NDArray[np.float64] = props.sum(axis=0)
    empty = np.flatnonzero(weights <= 0)
    if len(empty):
        raise ValueError(f"Subcommunities at column indices {empty.tolist()} do not contain any abundance.")
    sim_matrix = cast_similarity(similarity, props.shape[0])
    normalised = props / weights
    return EcosystemArrays(
        weights=weights,
        normalised=normalised,
        ordinariness=sim_matrix @ props,
        normalised_ordinariness=sim_matrix @ normalised,
        ecosystem_ordinariness=sim_matrix @ props.sum(axis=1),
    )


def _measure_values(measure: str, eco: EcosystemArrays) -> npt.NDArray[np.float64]:
    """Values to be averaged over each subcommunity for a given measure."""
    if measure in ("alpha", "beta", "rho"):
        denominator = eco.ordinariness
    elif measure in ("alphabar", "betabar", "rhobar"):
        denominator = eco.normalised_ordinariness
    else:
        denominator = np.broadcast_to(eco.ecosystem_ordinariness[:, np.newaxis], eco.normalised.shape)
    if measure in ("beta", "betabar", "rho", "rhobar"):
        numerator = np.broadcast_to(eco.ecosystem_ordinariness[:, np.newaxis], eco.normalised.shape)
    else:
        numerator = np.ones_like(eco.normalised)
    # entries lacking similar abundance only occur where a category is absent - these carry zero weight
    values: npt.NDArray[np.float64] = np.full(eco.normalised.shape, np.inf)
    np.divide(numerator, denominator, out=values, where=denominator > 0)
    return values


def subcommunity_values(
    measure: str, eco: EcosystemArrays, orders: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """Compute a measure for each subcommunity of a prepared ecosystem, returned as orders x subcommunities."""
    values = _measure_values(measure, eco)
    sub_div = diversity.column_power_means(values, eco.normalised, 1 - orders)
    if measure in ("beta", "betabar"):
        with np.errstate(divide="ignore"):
            sub_div = 1 / sub_div
    return sub_div


def ecosystem_values(
    measure: str, eco: EcosystemArrays, orders: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    """Compute a measure for a prepared ecosystem as a whole, returned as a 1d array over the orders."""
    sub_div = subcommunity_values(measure, eco, orders)
    eco_div: npt.NDArray[np.float64] = np.full(len(orders), np.nan)
    for q_idx, q_val in enumerate(orders):
        order = q_val - 1 if measure in ("beta", "betabar") else 1 - q_val
        eco_div[q_idx] = diversity.power_mean(sub_div[q_idx], eco.weights, order)
    return eco_div


def subcommunity_diversity(
    measure: str,
    proportions: types.ProportionsType,
    qs: types.QsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a partitioned diversity measure for each subcommunity.

    Parameters
    ----------
    measure: str
        One of "alpha", "alphabar", "beta", "betabar", "rho", "rhobar", or "gamma".
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns).
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix, by default the identity matrix.

    Returns
    -------
    diversity: ndarray[float]
        A 1d array over the subcommunities for a single order, else a 2d array of orders x subcommunities.

    """
    check_measure(measure)
    orders, scalar_q = cast_qs(qs)
    eco = prepare_ecosystem(proportions, similarity)
    return unpack_orders(subcommunity_values(measure, eco, orders), scalar_q)


def ecosystem_diversity(
    measure: str,
    proportions: types.ProportionsType,
    qs: types.QsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a partitioned diversity measure for the ecosystem as a whole.

    Parameters are as for [`subcommunity_diversity`](#subcommunity-diversity).

    Returns
    -------
    diversity: float | ndarray[float]
        A float for a single order, else a 1d array over the orders.

    """
    check_measure(measure)
    orders, scalar_q = cast_qs(qs)
    eco = prepare_ecosystem(proportions, similarity)
    return unpack_orders(ecosystem_values(measure, eco, orders), scalar_q)


def compute_diversity(
    level: str,
    measure: str,
    proportions: types.ProportionsType,
    qs: types.QsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    """
    Compute a partitioned diversity measure at either the subcommunity or ecosystem level.

    Parameters
    ----------
    level: str
        Either "subcommunity" or "ecosystem".
    measure: str
        One of "alpha", "alphabar", "beta", "betabar", "rho", "rhobar", or "gamma".
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns).
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix, by default the identity matrix.

    Returns
    -------
    diversity: float | ndarray[float]
        Shaped as for [`subcommunity_diversity`](#subcommunity-diversity) or
        [`ecosystem_diversity`](#ecosystem-diversity).

    """
    if level not in LEVELS:
        raise ValueError(f'Invalid diversity level: {level}. Must be one of {", ".join(LEVELS)}.')
    if level == "subcommunity":
        return subcommunity_diversity(measure, proportions, qs, similarity)
    return ecosystem_diversity(measure, proportions, qs, similarity)
