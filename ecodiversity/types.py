from __future__ import annotations

from typing import Union

import numpy as np
import numpy.typing as npt

QsType = Union[  # pylint: disable=invalid-name
    int,
    float,
    Union[list[int], list[float]],
    Union[tuple[int], tuple[float]],
    Union[npt.NDArray[np.int_], npt.NDArray[np.float64]],
]
ProportionsType = Union[
    list[float], list[list[float]], tuple[float], npt.NDArray[Union[np.int_, np.float64]]
]
WeightsType = Union[list[float], tuple[float], npt.NDArray[Union[np.int_, np.float64]], None]
SimilarityType = Union[list[list[float]], npt.NDArray[np.float64], None]
DiversityResult = Union[float, npt.NDArray[np.float64]]
