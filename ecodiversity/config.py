from __future__ import annotations

import os

import numpy as np


def check_quiet() -> bool:
    """Check whether to enable quiet mode."""
    if "ECODIVERSITY_QUIET_MODE" in os.environ:
        if os.environ["ECODIVERSITY_QUIET_MODE"].lower() in ["true", "1"]:
            return True
    return False


QUIET_MODE = check_quiet()


# for all_close equality checks
ATOL: float = 1e-8
RTOL: float = 1e-6
# normalised weights at or below this are dropped from power means
WT_ATOL: float = float(np.finfo(np.float64).eps)
# orders within this distance of zero use the geometric mean
ORDER_ATOL: float = 1e-12
# proportions summing to within this of one are treated as already normalised
SUM_ATOL: float = 1e-9
# subcommunity weights within this of the largest weight are treated as equally large
SIZE_ATOL: float = 1e-9
# fastmath flags - infinite orders are valid inputs so ninf and nnan are excluded
FASTMATH: set[str] = {"nsz", "arcp", "contract"}
