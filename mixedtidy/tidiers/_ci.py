"""
Confidence interval composition for tidy tables.

Implements the two ways a tidy table gets conf.low / conf.high:
- Wald: estimate ± z_{(1+c)/2} · std.error, computed here
- external (profile likelihood, HPD): intervals produced by the model
  family's own routine, merged onto the table by term

When neither is available for an effect type the columns are still added,
filled with null, so all effect types in one table share a schema.
"""

from __future__ import annotations

import warnings

import numpy as np
import pandas as pd
from scipy import stats as sp_stats

from mixedtidy.core.capabilities import CI_WALD
from mixedtidy.core.exceptions import CIUnavailableWarning, ValidationError

CI_COLUMNS = ('conf.low', 'conf.high')


def wald_multiplier(conf_level: float) -> float:
    """Two-sided normal quantile z_{(1+c)/2}; 1.959964 for c = 0.95."""
    return float(sp_stats.norm.ppf((1.0 + conf_level) / 2.0))


def add_wald_ci(table: pd.DataFrame, conf_level: float) -> pd.DataFrame:
    """Add Wald intervals from the estimate and std.error columns.

    Rows with a null std.error get null bounds.
    """
    if 'std.error' not in table.columns:
        raise ValidationError(
            "Wald intervals need a 'std.error' column; "
            f"table has {list(table.columns)}"
        )
    mult = wald_multiplier(conf_level)
    est = table['estimate'].astype(float)
    se = table['std.error'].astype(float)
    out = table.copy()
    out['conf.low'] = est - mult * se
    out['conf.high'] = est + mult * se
    return out


def merge_intervals(table: pd.DataFrame, intervals: pd.DataFrame) -> pd.DataFrame:
    """Attach externally computed [low, high] pairs by matching term.

    Terms without an interval get null bounds. Row order and count of
    the table are unchanged.

    Raises:
        ValidationError: If intervals lack the needed columns or repeat a term.
    """
    needed = ['term', *CI_COLUMNS]
    missing = [c for c in needed if c not in intervals.columns]
    if missing:
        raise ValidationError(
            f"intervals: missing columns {missing}; got {list(intervals.columns)}"
        )
    dup = intervals['term'].duplicated()
    if dup.any():
        raise ValidationError(
            f"intervals: duplicate terms {intervals.loc[dup, 'term'].tolist()}"
        )
    bounds = intervals[needed].set_index('term')
    out = table.drop(columns=[c for c in CI_COLUMNS if c in table.columns])
    out['conf.low'] = out['term'].map(bounds['conf.low']).astype(float)
    out['conf.high'] = out['term'].map(bounds['conf.high']).astype(float)
    return out


def add_null_ci(table: pd.DataFrame) -> pd.DataFrame:
    """Add conf.low / conf.high filled with null."""
    out = table.copy()
    for col in CI_COLUMNS:
        out[col] = np.nan
    return out


def has_std_errors(table: pd.DataFrame) -> bool:
    """Whether Wald intervals can be derived from the table's std.error column.

    An all-null std.error column on a non-empty table does not count.
    """
    if 'std.error' not in table.columns:
        return False
    return table.empty or bool(table['std.error'].notna().any())


def compose_ci(
    table: pd.DataFrame,
    effect: str,
    method: str,
    conf_level: float,
    intervals: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """Attach conf.low / conf.high to one effect type's table.

    Wald intervals are derived from std.error when the table has usable
    values; otherwise externally computed intervals are merged by term. If
    neither is available the interval columns are null and a
    CIUnavailableWarning is emitted.

    Args:
        table: Tidy table for one effect type.
        effect: Effect type name, for the diagnostic.
        method: Interval method.
        conf_level: Confidence level in (0, 1).
        intervals: Frame with term, conf.low, conf.high from the model
            family's interval routine, or None.
    """
    if method == CI_WALD and has_std_errors(table):
        return add_wald_ci(table, conf_level)
    if intervals is not None:
        return merge_intervals(table, intervals)
    warnings.warn(
        f"{method} confidence intervals not implemented for {effect}; "
        f"conf.low and conf.high set to null",
        CIUnavailableWarning,
        stacklevel=2,
    )
    return add_null_ci(table)
