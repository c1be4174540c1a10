"""
Common data types for the tidiers.

Contains the frozen intermediate structures passed from adapters to the
reshaping engine. Each is a pure data container, recomputed on every call.

References:
    Bates, D., Maechler, M., Bolker, B., & Walker, S. (2015).
    Fitting Linear Mixed-Effects Models Using lme4.
    Journal of Statistical Software, 67(1), 1-48.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
from numpy.typing import NDArray

from mixedtidy.core.capabilities import SCALE_SDCOR, SCALE_VARCOV


@dataclass(frozen=True)
class VarCorr:
    """Random-effect covariance structure of a fitted model.

    Attributes:
        matrices: Grouping factor name → covariance matrix of its random
            effect terms, labelled by term on both axes.
        sigma: Residual standard deviation, or None for families without
            a residual scale (binomial, poisson).
    """
    matrices: dict[str, pd.DataFrame]
    sigma: float | None = None


@dataclass(frozen=True)
class RanParsEntry:
    """One variance/covariance parameter of a grouping factor.

    Attributes:
        group: Grouping factor name, or 'Residual'.
        var1: First term, or None for the residual row.
        var2: Second term for cross (covariance) entries, else None.
        vcov: Variance (diagonal) or covariance (off-diagonal).
        sdcor: Standard deviation (diagonal) or correlation (off-diagonal).
    """
    group: str
    var1: str | None
    var2: str | None
    vcov: float
    sdcor: float | None

    def value(self, scale: str) -> float | None:
        if scale == SCALE_VARCOV:
            return self.vcov
        if scale == SCALE_SDCOR:
            return self.sdcor
        raise ValueError(f"Unknown scale: {scale!r}")


@dataclass(frozen=True)
class ConditionalModes:
    """Conditional modes (BLUPs) of one grouping factor.

    Attributes:
        group: Grouping factor name.
        modes: Levels × terms frame of conditional modes; the index holds
            the levels.
        cond_var: Conditional covariance per level, shape (levels, terms,
            terms), or None if the model does not provide it.
    """
    group: str
    modes: pd.DataFrame
    cond_var: NDArray | None = None

