r"""
Power means and effective numbers of categories.

These functions wrap the underlying `numba` optimised power mean functions and are the building blocks for all of
the other diversity measures. Orders of diversity can be passed as a single number or as a list, tuple, or
`numpy.ndarray` of numbers: a single order returns a single value per subcommunity whereas a sequence of orders
returns one value per order.

| function | formula |
|----------|:-------:|
| power_mean | $$M_{r}(w, x) = \big(\sum_{i} w_{i} x_{i}^{r}\big)^{1/r}$$ |
| hill_diversity | $$^{q}D(p) = M_{q-1}(p, p)^{-1}$$ |
| similarity_diversity | $$^{q}D^{Z}(p) = M_{q-1}(p, Zp)^{-1}$$ |

The limiting cases are exact: $M_{0}$ is the weighted geometric mean, $M_{\infty}$ the maximum, and $M_{-\infty}$
the minimum. Hill diversity at $q=1$ is therefore the exponential of Shannon entropy, at $q=0$ the count of
categories, and at $q=\infty$ the reciprocal of the largest proportion.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import numpy.typing as npt

from ecodiversity import types
from ecodiversity.algos import common, diversity
from ecodiversity.errors import DimensionMismatchError, LengthMismatchError


def cast_qs(qs: types.QsType) -> tuple[npt.NDArray[np.float64], bool]:
    """
    Cast orders of diversity to a `float64` array.

    Returns
    -------
    orders: ndarray[float]
        A one dimensional array of orders.
    scalar_q: bool
        Whether a single order was provided, in which case the order dimension is dropped from outputs.

    """
    if isinstance(qs, (int, float, np.number)) and not isinstance(qs, bool):
        orders = np.array([qs], dtype=np.float64)
        scalar_q = True
    elif isinstance(qs, (list, tuple, np.ndarray)):
        orders = np.array(qs, dtype=np.float64)
        scalar_q = orders.ndim == 0
        if scalar_q:
            orders = orders.reshape(1)
        elif orders.ndim != 1:
            raise ValueError("Values of q must be provided as a number or a one dimensional sequence of numbers.")
    else:
        raise TypeError("Please provide a float, list, tuple, or numpy.ndarray of q values.")
    common.check_orders(orders)
    return orders, scalar_q


def cast_proportions(proportions: types.ProportionsType) -> npt.NDArray[np.float64]:
    """Cast a proportions vector or matrix (categories x subcommunities) to a contiguous `float64` array."""
    if not isinstance(proportions, (list, tuple, np.ndarray)):
        raise TypeError("Please provide proportions as a list, tuple, or numpy.ndarray.")
    props: npt.NDArray[np.float64] = np.ascontiguousarray(proportions, dtype=np.float64)
    if props.ndim not in (1, 2):
        raise ValueError(
            "Proportions must be a vector, or else a matrix of categories (rows) by subcommunities (columns)."
        )
    common.check_proportions(props)
    return props


def cast_similarity(similarity: types.SimilarityType, num_categories: int) -> npt.NDArray[np.float64]:
    """Cast a similarity matrix to `float64`, defaulting to the identity matrix for naive diversity."""
    if similarity is None:
        return np.identity(num_categories, dtype=np.float64)
    sim_matrix: npt.NDArray[np.float64] = np.ascontiguousarray(similarity, dtype=np.float64)
    if sim_matrix.ndim != 2:
        raise DimensionMismatchError("Similarity matrix must be an NxN pairwise matrix.")
    common.check_similarity_matrix(sim_matrix, num_categories)
    return sim_matrix


def unpack_orders(results: npt.NDArray[np.float64], scalar_q: bool) -> types.DiversityResult:
    """Drop the leading order dimension where a single order was requested."""
    if not scalar_q:
        return results
    if results.ndim == 1:
        return float(results[0])
    return results[0]


def power_mean(
    values: types.ProportionsType,
    order: types.QsType = 1,
    weights: types.WeightsType = None,
) -> types.DiversityResult:
    """
    Compute the weighted power mean of a series of values.

    Weights are normalised to sum to one. Values with zero weight are excluded from the computation.

    Parameters
    ----------
    values: ndarray[float]
        Values for which to compute the mean.
    order: float | ndarray[float]
        The order of the power mean, or a sequence of orders. `np.inf` returns the maximum and `-np.inf` the minimum
        of the values with non-zero weight. An order of zero returns the weighted geometric mean. Defaults to 1, i.e.
        the arithmetic mean.
    weights: ndarray[float]
        Optional weights of the respective values, by default equal weights.

    Returns
    -------
    mean: float | ndarray[float]
        The weighted power mean, or a 1d array of means for a sequence of orders.

    Examples
    --------
    ```python
    import numpy as np
    from ecodiversity.metrics import diversity

    diversity.power_mean([1, 2, 4], 0)  # 2.0
    diversity.power_mean([1, 2, 4], [-np.inf, 1, np.inf], weights=[0, 1, 1])  # [2.0, 3.0, 4.0]
    ```

    """
    vals: npt.NDArray[np.float64] = np.ascontiguousarray(values, dtype=np.float64)
    if vals.ndim != 1:
        raise ValueError("Power means are computed over a one dimensional array of values.")
    if weights is None:
        wts: npt.NDArray[np.float64] = np.ones_like(vals)
    else:
        wts = np.ascontiguousarray(weights, dtype=np.float64)
    if wts.ndim != 1 or len(wts) != len(vals):
        raise LengthMismatchError("Weight and value vectors must be the same length.")
    common.check_weights(wts)
    orders, scalar_q = cast_qs(order)
    means = diversity.power_means(vals, wts, orders)
    return unpack_orders(means, scalar_q)


def _inverse_power_means(
    values: npt.NDArray[np.float64], proportions: npt.NDArray[np.float64], orders: npt.NDArray[np.float64]
) -> npt.NDArray[np.float64]:
    # columns are independent subcommunities
    if proportions.ndim == 1:
        means = diversity.power_means(values, proportions, orders - 1)
    else:
        means = diversity.column_power_means(values, proportions, orders - 1)
    with np.errstate(divide="ignore"):
        return 1 / means


def hill_diversity(proportions: types.ProportionsType, qs: types.QsType) -> types.DiversityResult:
    r"""
    Compute Hill numbers (naive diversity) of order q.

    Hill numbers express diversity as the effective number of equally abundant categories. This is the reciprocal of
    the power mean of order $q-1$ of the proportions, weighted by the proportions themselves.

    Parameters
    ----------
    proportions: ndarray[float]
        Relative proportions of the categories in a population, else a matrix of categories (rows) by subcommunities
        (columns) in which case each column is computed independently.
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.

    Returns
    -------
    diversity: float | ndarray[float]
        For a proportions vector, a float for a single order or a 1d array over the orders. For a proportions matrix,
        a 1d array over the subcommunities for a single order, else a 2d array of orders x subcommunities.

    Examples
    --------
    ```python
    import numpy as np
    from ecodiversity.metrics import diversity

    diversity.hill_diversity([0.5, 0.25, 0.25], [0, 1, 2, np.inf])
    # [3.0, 2.828, 2.667, 2.0]
    ```

    """
    props = cast_proportions(proportions)
    orders, scalar_q = cast_qs(qs)
    div = _inverse_power_means(props, props, orders)
    return unpack_orders(div, scalar_q)


def similarity_diversity(
    proportions: types.ProportionsType,
    qs: types.QsType,
    similarity: Optional[types.SimilarityType] = None,
) -> types.DiversityResult:
    r"""
    Compute Leinster-Cobbold similarity-sensitive diversity of order q.

    Each category's abundance is replaced by the ordinary abundance of everything similar to it, i.e. $Zp$, before
    taking the reciprocal of the power mean of order $q-1$ weighted by the proportions. With the identity matrix
    (the default) this is exactly [`hill_diversity`](#hill-diversity).

    Parameters
    ----------
    proportions: ndarray[float]
        Relative proportions of the categories in a population, else a matrix of categories (rows) by subcommunities
        (columns) in which case each column is computed independently.
    qs: float | ndarray[float]
        A single order of diversity or a sequence of orders.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix with entries between 0 and 1, where N is the number of
        categories. Defaults to the identity matrix.

    Returns
    -------
    diversity: float | ndarray[float]
        Shaped as for [`hill_diversity`](#hill-diversity).

    """
    props = cast_proportions(proportions)
    sim_matrix = cast_similarity(similarity, props.shape[0])
    orders, scalar_q = cast_qs(qs)
    ordinariness: npt.NDArray[np.float64] = np.ascontiguousarray(sim_matrix @ props)
    div = _inverse_power_means(ordinariness, props, orders)
    return unpack_orders(div, scalar_q)


# conventional names
powermean = power_mean
qD = hill_diversity  # pylint: disable=invalid-name
qDZ = similarity_diversity  # pylint: disable=invalid-name
