"""
Conversion of labelled observations into abundance matrices.

Observations are typically recorded one individual (or sample) at a time, each labelled by category and by the site
or subcommunity at which it was observed. The diversity functions instead expect a matrix of abundances with
categories as rows and subcommunities as columns.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np
import numpy.typing as npt
from sklearn.preprocessing import LabelEncoder  # type: ignore

from ecodiversity import config
from ecodiversity.errors import LengthMismatchError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

LabelsType = Union[Sequence[str], Sequence[int], npt.NDArray[np.int_], npt.NDArray[np.str_]]


def abundance_matrix(
    category_labels: LabelsType,
    subcommunity_labels: Optional[LabelsType] = None,
    counts: Optional[Union[Sequence[float], npt.NDArray[np.float64]]] = None,
    normalise: bool = False,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.object_], npt.NDArray[np.object_]]:
    """
    Aggregate labelled observations into a categories x subcommunities abundance matrix.

    Parameters
    ----------
    category_labels: Sequence
        The category (e.g. species) label of each observation.
    subcommunity_labels: Sequence
        The subcommunity (e.g. site) label of each observation. If omitted, all observations are assigned to a single
        subcommunity.
    counts: Sequence[float]
        Optional abundances for each observation, by default each observation counts once.
    normalise: bool
        Whether to normalise the matrix to ecosystem proportions summing to one. Defaults to False.

    Returns
    -------
    abundances: ndarray[float]
        A matrix with a row per category and a column per subcommunity, both in sorted label order.
    categories: ndarray
        The category labels corresponding to the rows.
    subcommunities: ndarray
        The subcommunity labels corresponding to the columns.

    Examples
    --------
    ```python
    from ecodiversity.tools import abundance

    abundances, categories, sites = abundance.abundance_matrix(
        ["oak", "ash", "oak", "elm"],
        ["north", "north", "south", "south"],
    )
    # abundances = [[1, 0], [0, 1], [1, 1]]
    # categories = ["ash", "elm", "oak"]
    # sites = ["north", "south"]
    ```

    """
    if len(category_labels) == 0:
        raise ValueError("No observations provided.")
    if subcommunity_labels is None:
        subcommunity_labels = np.zeros(len(category_labels), dtype=np.int_)
    if len(subcommunity_labels) != len(category_labels):
        raise LengthMismatchError("Mismatching number of category labels and respective subcommunity labels.")
    if counts is None:
        obs_counts: npt.NDArray[np.float64] = np.ones(len(category_labels), dtype=np.float64)
    else:
        obs_counts = np.asarray(counts, dtype=np.float64)
        if len(obs_counts) != len(category_labels):
            raise LengthMismatchError("Mismatching number of category labels and respective counts.")
        if not np.all(np.isfinite(obs_counts)) or np.any(obs_counts < 0):
            raise ValueError("Counts must be finite numbers greater than or equal to zero.")
    cat_enc = LabelEncoder()
    cat_idxs: npt.NDArray[np.int_] = cat_enc.fit_transform(category_labels)  # type: ignore
    sub_enc = LabelEncoder()
    sub_idxs: npt.NDArray[np.int_] = sub_enc.fit_transform(subcommunity_labels)  # type: ignore
    abundances: npt.NDArray[np.float64] = np.zeros((len(cat_enc.classes_), len(sub_enc.classes_)), dtype=np.float64)
    # unbuffered so that repeated observations accumulate
    np.add.at(abundances, (cat_idxs, sub_idxs), obs_counts)
    if not config.QUIET_MODE:
        logger.info(
            f"Aggregated {len(category_labels)} observations into {abundances.shape[0]} categories "
            f"and {abundances.shape[1]} subcommunities."
        )
    if normalise:
        total = abundances.sum()
        if not total > 0:
            raise ValueError("Counts must sum to a value greater than zero in order to normalise.")
        abundances /= total
    return abundances, np.asarray(cat_enc.classes_, dtype=object), np.asarray(sub_enc.classes_, dtype=object)
