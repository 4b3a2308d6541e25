"""
Convenience methods for plotting diversity profiles.

A diversity profile plots diversity against the order q, showing how the effective number of categories falls as
increasing emphasis is placed on the more abundant categories. Custom behaviour can be achieved by directly
manipulating the underlying [`matplotlib`](https://matplotlib.org) figures. This module is predominately used for
basic plots or visual verification of behaviour.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import numpy.typing as npt

from ecodiversity import types
from ecodiversity.metrics import decomposition


class ColourMap:  # pylint: disable=too-few-public-methods
    """Specifies global colour presets."""

    primary: str = "#0091ea"


COLOUR_MAP = ColourMap()


def _open_plots_reset():
    plt.close("all")


def plot_diversity_profile(
    proportions: types.ProportionsType,
    qs: Optional[types.QsType] = None,
    similarity: Optional[types.SimilarityType] = None,
    level: str = "subcommunity",
    measure: str = "alphabar",
    labels: Optional[Sequence[str]] = None,
    path: Optional[str] = None,
    ax: Optional[plt.Axes] = None,
    **kwargs: dict[str, Any],
) -> None:
    """
    Plot diversity against the order q.

    Parameters
    ----------
    proportions: ndarray[float]
        A matrix of categories (rows) by subcommunities (columns), as proportions or counts.
    qs: ndarray[float]
        The finite orders of q at which to compute diversity. Defaults to 101 evenly spaced values from 0 to 10.
    similarity: ndarray[float]
        An optional NxN pairwise similarity matrix, by default the identity matrix.
    level: str
        Either "subcommunity", plotting a profile per subcommunity, or "ecosystem". Defaults to "subcommunity".
    measure: str
        The diversity measure to plot. Defaults to "alphabar".
    labels: Sequence[str]
        Optional labels for the subcommunities, used for the legend.
    path: str
        An optional filepath: if provided, the image will be saved to the path instead of being displayed. Defaults to
        None.
    ax: plt.Axes
        An optional `matplotlib` `ax` to which to plot. If not provided, a figure and ax will be generated.
    kwargs
        `kwargs` which will be passed to the `matplotlib` figure parameters. If provided, these will override the
        default figure size or dpi parameters.

    Examples
    --------
    ```python
    from ecodiversity.tools import mock, plot

    mock_comms = mock.mock_communities(num_species=20, num_communities=3)
    plot.plot_diversity_profile(mock_comms.distinct, labels=["a", "b", "c"])
    ```

    """
    if qs is None:
        qs = np.linspace(0, 10, 101)
    q_arr: npt.NDArray[np.float64] = np.asarray(qs, dtype=np.float64).reshape(-1)
    if not np.all(np.isfinite(q_arr)):
        raise ValueError("Diversity profiles can only be plotted for finite values of q.")
    div = decomposition.compute_diversity(level, measure, proportions, q_arr, similarity)
    # orders x subcommunities
    div_arr: npt.NDArray[np.float64] = np.asarray(div).reshape(len(q_arr), -1)
    if labels is not None and len(labels) != div_arr.shape[1]:
        raise ValueError("The number of labels must match the number of plotted profiles.")
    # cleanup old plots
    if ax is None:
        _open_plots_reset()
        # create new plot
        _fig, target_ax = plt.subplots(1, 1, **kwargs)  # type: ignore
    else:
        target_ax = ax
    for col_idx in range(div_arr.shape[1]):
        label = labels[col_idx] if labels is not None else None
        colour = COLOUR_MAP.primary if div_arr.shape[1] == 1 else None
        target_ax.plot(q_arr, div_arr[:, col_idx], label=label, color=colour, linewidth=1.5)
    target_ax.set_xlabel("q")
    target_ax.set_ylabel(f"{level} {measure} diversity")
    target_ax.set_ylim(bottom=0)
    if labels is not None:
        target_ax.legend()
    if ax is None:
        if path is not None:
            plt.savefig(path, dpi=150)
        else:
            plt.show()
