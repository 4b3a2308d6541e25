# pyright: basic
from __future__ import annotations

import numpy as np
import pytest

from ecodiversity.tools import mock


@pytest.fixture
def mock_comms() -> mock.MockCommunities:
    """
    Prepare mock communities for testing.

    Returns
    -------
    MockCommunities
        Proportion matrices of 100 species by 8 subcommunities.

    """
    return mock.mock_communities()


@pytest.fixture
def qs() -> list[float]:
    """
    Orders of diversity for testing.

    Returns
    -------
    list[float]
        Integer orders from 0 to 6 together with infinity.

    """
    return [0, 1, 2, 3, 4, 5, 6, np.inf]
