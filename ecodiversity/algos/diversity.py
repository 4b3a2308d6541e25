from __future__ import annotations

import numpy as np
import numpy.typing as npt
from numba import njit  # type: ignore

from ecodiversity import config
from ecodiversity.errors import DegenerateWeightsError, LengthMismatchError


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def power_mean(
    values: npt.NDArray[np.float64],
    weights: npt.NDArray[np.float64],
    order: np.float64,
) -> np.float64:
    """
    Compute the weighted power mean of a given order.

    Weights are normalised to sum to one. Values with (approximately) zero weight are dropped entirely, which avoids
    the indeterminate forms of 0 * inf and 0 ** -n.

    Order of +inf = maximum
    Order of -inf = minimum
    Order of 0 = undefined by the general form - but the limit exists as the weighted geometric mean
    Orders near 0 = computed as exp(log1p(sum(w * expm1(r * log(v)))) / r) to avoid cancellation
    Order of 1 = arithmetic mean
    Order of -1 = harmonic mean

    """
    if len(values) != len(weights):
        raise LengthMismatchError("Mismatching number of values and respective weights.")
    wt_sum = 0.0
    for wt in weights:
        if not np.isfinite(wt) or wt < 0:
            raise DegenerateWeightsError("Weights must be finite and greater than or equal to zero.")
        wt_sum += wt
    if not wt_sum > 0:
        raise DegenerateWeightsError("Weights must sum to a value greater than zero.")
    present = 0
    agg = 0.0
    # infinite orders reduce to the extremes of the values
    if np.isinf(order):
        for val, wt in zip(values, weights):
            if wt / wt_sum <= config.WT_ATOL:
                continue
            if present == 0 or (order > 0 and val > agg) or (order < 0 and val < agg):
                agg = val
            present += 1
    # geometric mean in the limit
    elif abs(order) <= config.ORDER_ATOL:
        agg = 1.0
        for val, wt in zip(values, weights):
            prop = wt / wt_sum
            if prop <= config.WT_ATOL:
                continue
            agg *= np.power(val, prop)
            present += 1
    # otherwise the usual form, shifted by one so that orders near zero converge on the geometric mean
    else:
        shifted = 0.0
        for val, wt in zip(values, weights):
            prop = wt / wt_sum
            if prop <= config.WT_ATOL:
                continue
            shifted += prop * np.expm1(order * np.log(val))
            present += 1
        if shifted > -0.5:
            agg = np.exp(np.log1p(shifted) / order)
        # sums approaching -1 lose precision in the shifted form
        else:
            for val, wt in zip(values, weights):
                prop = wt / wt_sum
                if prop <= config.WT_ATOL:
                    continue
                agg += prop * np.power(val, order)
            agg = np.power(agg, 1.0 / order)
    if present == 0:
        raise DegenerateWeightsError("No values remain once values with zero weight are dropped.")
    return agg


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def power_means(
    values: npt.NDArray[np.float64],
    weights: npt.NDArray[np.float64],
    orders: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """Compute the weighted power mean for each of a series of orders."""
    means: npt.NDArray[np.float64] = np.full(len(orders), np.nan)
    for order_idx, order in enumerate(orders):
        means[order_idx] = power_mean(values, weights, order)
    return means


@njit(cache=True, fastmath=config.FASTMATH, nogil=True)
def column_power_means(
    values: npt.NDArray[np.float64],
    weights: npt.NDArray[np.float64],
    orders: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Compute weighted power means independently for each column.

    Each column of `values` is averaged using the corresponding column of `weights`. Returns an array of shape
    orders x columns.

    """
    if values.shape[0] != weights.shape[0] or values.shape[1] != weights.shape[1]:
        raise LengthMismatchError("Mismatching shapes for the values and respective weights.")
    means: npt.NDArray[np.float64] = np.full((len(orders), values.shape[1]), np.nan)
    for col_idx in range(values.shape[1]):
        means[:, col_idx] = power_means(values[:, col_idx], weights[:, col_idx], orders)
    return means
