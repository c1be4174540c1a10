"""
Column-name canonicalization and ordering.

Model summary routines name their statistics differently ('Estimate',
'Coef.', 'Std. Error', 'Pr(>|z|)', ...). rename_cols maps every known
variant onto the canonical vocabulary; unknown names pass through
unchanged so new columns from upstream libraries are never dropped.
"""

from __future__ import annotations

from typing import TypeVar

import pandas as pd

from mixedtidy.core.capabilities import CANONICAL_COLUMNS

T = TypeVar('T', pd.DataFrame, dict)

# Native name → canonical name. Canonical names never appear as keys,
# which keeps rename_cols idempotent.
COLUMN_ALIASES: dict[str, str] = {
    # R: coef(summary(fit)), nlme
    'Estimate': 'estimate',
    'Value': 'estimate',
    'Std. Error': 'std.error',
    'Std.Error': 'std.error',
    'z value': 'statistic',
    't value': 'statistic',
    'z-value': 'statistic',
    't-value': 'statistic',
    'Pr(>|z|)': 'p.value',
    'Pr(>|t|)': 'p.value',
    'p-value': 'p.value',
    # statsmodels summary tables
    'Coef.': 'estimate',
    'coef': 'estimate',
    'Std.Err.': 'std.error',
    'std err': 'std.error',
    'z': 'statistic',
    't': 'statistic',
    'P>|z|': 'p.value',
    'P>|t|': 'p.value',
    # row labels moved into a column
    'index': 'term',
    'rowname': 'term',
}


def canonical_name(name: str) -> str:
    """Canonical name for a native column name; unknown names unchanged."""
    return COLUMN_ALIASES.get(name, name)


def rename_cols(table: T) -> T:
    """Rename the columns of a frame, or the keys of a mapping.

    Frames stay frames; any other mapping comes back as a dict. The
    input is not modified.
    """
    if isinstance(table, pd.DataFrame):
        return table.rename(columns=canonical_name)
    return {canonical_name(key): value for key, value in table.items()}


def reorder_cols(table: pd.DataFrame) -> pd.DataFrame:
    """Put canonical columns first, in canonical order, then the rest.

    Only columns present in the table are kept; none are added.
    """
    first = [c for c in CANONICAL_COLUMNS if c in table.columns]
    rest = [c for c in table.columns if c not in CANONICAL_COLUMNS]
    return table[first + rest]

