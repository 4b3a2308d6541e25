r"""
Jost's multiplicative decomposition of diversity.

Jost (2007) partitions the gamma diversity of an ecosystem into independent within-subcommunity (alpha) and
among-subcommunity (beta) components such that $^{q}D_{\gamma} = {}^{q}D_{\alpha} \times {}^{q}D_{\beta}$. Alpha
diversity is the power mean of order $1-q$ of the Hill numbers of the normalised subcommunities, weighted by the
subcommunity weights raised to the power $q$:

$$^{q}D_{\alpha} = \Big(\frac{\sum_{j} w_{j}^{q} \sum_{i} \bar{P}_{ij}^{q}}{\sum_{j} w_{j}^{q}}\Big)^{1/(1-q)}$$

Beta diversity is gamma diversity divided by alpha diversity. At $q=1$ this is the reciprocal of the ecosystem
representativeness $\bar{R}$, and for subcommunities of identical composition it is one at every order.
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from ecodiversity import config, types
from ecodiversity.algos import diversity
from ecodiversity.metrics import decomposition
from ecodiversity.metrics.diversity import cast_qs, unpack_orders

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _jost_alpha_values(
    eco: decomposition.EcosystemArrays, orders: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    hill = 1 / diversity.column_power_means(eco.normalised, eco.normalised, orders - 1)
    alpha: npt.NDArray[np.float64] = np.full(len(orders), np.nan)
    for q_idx, q_val in enumerate(orders):
        # relative to the largest subcommunity for q >= 0 and the smallest for q < 0, so that (w / ref) ** q <= 1
        # and infinite orders retain only the largest or smallest subcommunities respectively
        ref_size = eco.weights.max() if q_val >= 0 else eco.weights.min()
        rel_sizes = np.where(
            np.isclose(eco.weights, ref_size, rtol=0, atol=config.SIZE_ATOL), 1.0, eco.weights / ref_size
        )
        alpha[q_idx] = diversity.power_mean(hill[q_idx], np.power(rel_sizes, q_val), 1 - q_val)
    return alpha


def jost_alpha(proportions: types.ProportionsType, qs: types.QsType) -> types.DiversityResult:
    """
    Compute Jost's alpha diversity.

    This is the naive diversity of the individual subcommunities, normalised to their sizes, and then averaged with a
    power mean of order 1 - q weighted by the subcommunity weights raised to the power q.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns), as proportions or counts.
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.

    Returns
    -------
    alpha: float | ndarray[float]
        A float for a single order, else a 1d array over the orders.

    Examples
    --------
    ```python
    import numpy as np
    from ecodiversity.metrics import jost
    from ecodiversity.tools import mock

    mock_comms = mock.mock_communities()
    jost.jost_alpha(mock_comms.allthesame, [0, 1, 2, np.inf])
    ```

    """
    orders, scalar_q = cast_qs(qs)
    eco = decomposition.prepare_ecosystem(proportions)
    if not config.QUIET_MODE:
        logger.info(f"Computing Jost's alpha diversity for {len(eco.weights)} subcommunities.")
    return unpack_orders(_jost_alpha_values(eco, orders), scalar_q)


def jost_beta(proportions: types.ProportionsType, qs: types.QsType) -> types.DiversityResult:
    """
    Compute Jost's beta diversity.

    This is the gamma diversity of the ecosystem divided by Jost's alpha diversity, and gives the effective number of
    distinct subcommunities.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns), as proportions or counts.
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.

    Returns
    -------
    beta: float | ndarray[float]
        A float for a single order, else a 1d array over the orders.

    """
    orders, scalar_q = cast_qs(qs)
    eco = decomposition.prepare_ecosystem(proportions)
    if not config.QUIET_MODE:
        logger.info(f"Computing Jost's beta diversity for {len(eco.weights)} subcommunities.")
    gamma = decomposition.ecosystem_values("gamma", eco, orders)
    return unpack_orders(gamma / _jost_alpha_values(eco, orders), scalar_q)


# conventional names
jostalpha = jost_alpha
jostbeta = jost_beta
