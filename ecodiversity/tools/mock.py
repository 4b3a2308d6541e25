"""
A collection of functions for the generation of mock data.

This module is intended for project development and writing code tests, but may otherwise be useful for demonstration
and utility purposes.
"""
from __future__ import annotations

from typing import Generator, NamedTuple

import numpy as np
import numpy.typing as npt


class MockCommunities(NamedTuple):
    """Proportion matrices (species x subcommunities) with known diversity relationships."""

    communities: npt.NDArray[np.float64]
    """Random abundances normalised so that the whole ecosystem sums to one."""
    allthesame: npt.NDArray[np.float64]
    """Subcommunities of random sizes sharing an identical composition."""
    distinct: npt.NDArray[np.float64]
    """Each species occurs in exactly one subcommunity, subcommunity sizes are uneven."""
    evendistinct: npt.NDArray[np.float64]
    """As for `distinct`, but with each subcommunity carrying equal weight."""
    smoothed: npt.NDArray[np.float64]
    """The random `communities`, with each subcommunity rescaled to carry equal weight."""


def mock_species_data(
    random_seed: int = 0,
) -> Generator[tuple[npt.NDArray[np.int_], npt.NDArray[np.float64]], None, None]:
    """
    Generate a series of randomly generated counts and corresponding probabilities.

    This function is used for testing diversity measures. The data is generated in varying lengths from randomly
    assigned integers between 1 and 10. Matching integers are then collapsed into species "classes" with probabilities
    computed accordingly.

    Parameters
    ----------
    random_seed: int
        An optional random seed, by default 0

    Yields
    ------
    counts: ndarray[int]
        The number of members for each species class.
    probs: ndarray[float]
        The probability of encountering the respective species classes.

    Examples
    --------
    ```python
    from ecodiversity.tools import mock

    for counts, probs in mock.mock_species_data():
        cs = [c for c in counts]
        print(f'c = {cs}')
        ps = [round(p, 3) for p in probs]
        print(f'p = {ps}')

    # c = [1]
    # p = [1.0]

    # c = [1, 1, 2, 2]
    # p = [0.167, 0.167, 0.333, 0.333]

    # etc.
    ```

    """
    np.random.seed(seed=random_seed)  # pylint: disable=no-member

    for n in range(1, 50, 5):
        data = np.random.randint(1, 10, n)  # pylint: disable=no-member
        unique: npt.NDArray[np.int_] = np.unique(data)
        counts: npt.NDArray[np.int_] = np.zeros_like(unique, dtype=np.int_)
        for idx, uniq in enumerate(unique):
            counts[idx] = (data == uniq).sum()
        probs = counts / len(data)

        yield counts, probs


def mock_communities(
    num_species: int = 100,
    num_communities: int = 8,
    random_seed: int = 0,
) -> MockCommunities:
    """
    Generate proportion matrices for testing partitioned and Jost diversity.

    Parameters
    ----------
    num_species: int
        The number of species (rows), by default 100.
    num_communities: int
        The number of subcommunities (columns), by default 8. Must not exceed `num_species`.
    random_seed: int
        An optional random seed, by default 0

    Returns
    -------
    MockCommunities
        The mock proportion matrices, each of which sums to one.

    Examples
    --------
    ```python
    import numpy as np
    from ecodiversity.metrics import jost
    from ecodiversity.tools import mock

    mock_comms = mock.mock_communities()
    print(jost.jost_beta(mock_comms.allthesame, [0, 1, 2, np.inf]))
    # [1. 1. 1. 1.]
    ```

    """
    if num_communities > num_species:
        raise ValueError("The number of subcommunities can't exceed the number of species.")
    np.random.seed(seed=random_seed)  # pylint: disable=no-member
    # random ecosystem
    communities: npt.NDArray[np.float64] = np.random.rand(num_species, num_communities)
    communities /= communities.sum()
    # identical composition, uneven sizes
    probs = communities.sum(axis=1)
    col_weights = np.random.rand(num_communities)
    col_weights /= col_weights.sum()
    allthesame = np.outer(probs, col_weights)
    # each species assigned to a single subcommunity, every subcommunity receives at least one species
    weights = np.random.rand(num_species)
    weights /= weights.sum()
    community_idxs = np.random.randint(0, num_communities, num_species)
    community_idxs[:num_communities] = np.arange(num_communities)
    distinct = np.zeros((num_species, num_communities), dtype=np.float64)
    distinct[np.arange(num_species), community_idxs] = weights
    evendistinct = distinct / (distinct.sum(axis=0) * num_communities)
    # even sizes, random composition
    smoothed = communities / communities.sum(axis=0) / num_communities

    return MockCommunities(
        communities=communities,
        allthesame=allthesame,
        distinct=distinct,
        evendistinct=evendistinct,
        smoothed=smoothed,
    )


def mock_similarity_matrix(num_species: int, random_seed: int = 0) -> npt.NDArray[np.float64]:
    """
    Generate a symmetric pairwise similarity matrix.

    Parameters
    ----------
    num_species: int
        The number of species, determining the NxN shape of the matrix.
    random_seed: int
        An optional random seed, by default 0

    Returns
    -------
    ndarray[float]
        A symmetric matrix with similarities between 0 and 1 and ones along the diagonal.

    """
    np.random.seed(seed=random_seed)  # pylint: disable=no-member
    sim_matrix: npt.NDArray[np.float64] = np.random.rand(num_species, num_species)
    sim_matrix = (sim_matrix + sim_matrix.T) / 2
    np.fill_diagonal(sim_matrix, 1)
    return sim_matrix
