# pylint: disable=duplicate-code

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from numba import njit  # type: ignore

from ecodiversity import config
from ecodiversity.errors import DimensionMismatchError


@njit(cache=True, fastmath=config.FASTMATH)
def check_proportions(prop_arr: npt.NDArray[np.float64]) -> None:
    """Check the integrity of proportion or abundance arrays."""
    if prop_arr.size == 0:
        raise ValueError("Zero length proportions array.")
    for val in prop_arr.ravel():
        if not np.isfinite(val):
            raise ValueError("Proportions must consist of finite values.")
        if val < 0:
            raise ValueError("Proportions must be greater than or equal to zero.")


@njit(cache=True, fastmath=config.FASTMATH)
def check_weights(weights: npt.NDArray[np.float64]) -> None:
    """Check the integrity of power mean weights."""
    for wt in weights:
        if not np.isfinite(wt):
            raise ValueError("Weights must consist of finite values.")
        if wt < 0:
            raise ValueError("Weights must be greater than or equal to zero.")


@njit(cache=True, fastmath=config.FASTMATH)
def check_orders(orders: npt.NDArray[np.float64]) -> None:
    """Check that orders are numeric. Infinite orders are permitted."""
    if len(orders) == 0:
        raise ValueError("No values of q provided.")
    for order in orders:
        if np.isnan(order):
            raise ValueError("Values of q must not be NaN.")


@njit(cache=True, fastmath=config.FASTMATH)
def check_similarity_matrix(sim_matrix: npt.NDArray[np.float64], num_categories: int) -> None:
    """
    Check the integrity of a pairwise similarity matrix.

    Expects a two dimensional array. The matrix must be square, must match the number of categories, and must
    contain similarities between 0 and 1.

    """
    if sim_matrix.shape[0] != sim_matrix.shape[1]:
        raise DimensionMismatchError("Similarity matrix must be an NxN pairwise matrix.")
    if sim_matrix.shape[0] != num_categories:
        raise DimensionMismatchError("Similarity matrix size does not match the number of categories.")
    for val in sim_matrix.ravel():
        if not np.isfinite(val) or val < 0 or val > 1:
            raise ValueError("Similarity matrix entries must be between 0 and 1.")
