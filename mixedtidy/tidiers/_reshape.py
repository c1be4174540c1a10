"""
Reshape primitives and the random-effect value table.

melt turns wide rows into (key, value) pairs; pivot turns the pairs back
into wide columns grouped by an identity key tuple. ran_vals_table is
these two calls over the per-group estimate and std.error blocks:

    group  level  type       (Intercept)  Days        (wide, two blocks)
      ↓ melt
    group  level  type       term         value       (tall)
      ↓ pivot on (group, level, term) by type
    group  level  term       estimate     std.error   (wide)
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from mixedtidy.core.exceptions import (
    DimensionError,
    NotPositiveDefiniteError,
    ValidationError,
)
from mixedtidy.core.validation import check_array, check_ndim
from mixedtidy.tidiers._common import ConditionalModes

# Internal identity columns; dotted so they cannot clash with term names.
_GROUP = '.group'
_LEVEL = '.level'
_TYPE = '.type'
_VALUE = '.value'

VALUE_TYPES = ('estimate', 'std.error')


def melt(
    table: pd.DataFrame,
    id_cols: Sequence[str],
    key_col: str = 'key',
    value_col: str = 'value',
) -> pd.DataFrame:
    """Wide to tall: one row per (id..., key) with its value.

    Every non-id column becomes a key. Rows are ordered by key, then by
    original row order within each key.
    """
    return pd.melt(
        table,
        id_vars=list(id_cols),
        var_name=key_col,
        value_name=value_col,
    )


def pivot(
    table: pd.DataFrame,
    id_cols: Sequence[str],
    key_col: str = 'key',
    value_col: str = 'value',
    keys: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Tall to wide: one row per distinct id tuple, one column per key.

    Rows keep the order in which their id tuple first appears. A row
    missing some key gets null in that column; no row is dropped.

    Args:
        table: Tall frame with id columns, key_col and value_col.
        id_cols: Columns identifying an output row.
        key_col: Column whose values become output column names.
        value_col: Column holding the cell values.
        keys: Output key columns, in order; keys absent from the data are
            added as null. Defaults to the keys present, in sorted order.

    Raises:
        ValidationError: If an (id..., key) combination occurs twice.
    """
    ids = list(id_cols)
    dup = table.duplicated(ids + [key_col], keep=False)
    if dup.any():
        first = table.loc[dup, ids + [key_col]].iloc[0].tolist()
        raise ValidationError(
            f"pivot: {int(dup.sum())} rows share an identity with another "
            f"row, e.g. {first}"
        )

    order = table[ids].drop_duplicates()
    wide = table.set_index(ids + [key_col])[value_col].unstack(key_col)
    if len(ids) == 1:
        wide = wide.reindex(pd.Index(order[ids[0]], name=ids[0]))
    else:
        wide = wide.reindex(pd.MultiIndex.from_frame(order))
    if keys is not None:
        wide = wide.reindex(columns=list(keys))
    wide.columns.name = None
    return wide.reset_index()


def _std_errors(cm: ConditionalModes) -> np.ndarray:
    """sqrt of the diagonal of each level's conditional covariance."""
    name = f"cond_var[{cm.group!r}]"
    cond_var = check_array(cm.cond_var, name)
    check_ndim(cond_var, 3, name)
    n_levels, n_terms = cm.modes.shape
    if cond_var.shape != (n_levels, n_terms, n_terms):
        raise DimensionError(
            f"{name}: expected shape {(n_levels, n_terms, n_terms)} to match "
            f"{n_levels} levels × {n_terms} terms, got {cond_var.shape}"
        )
    variances = np.diagonal(cond_var, axis1=1, axis2=2)
    if np.any(variances < 0):
        raise NotPositiveDefiniteError(
            f"{name}: negative conditional variance ({variances.min():g})",
            matrix_name=name,
            min_eigenvalue=float(variances.min()),
        )
    return np.sqrt(variances)


def ran_vals_blocks(cm: ConditionalModes) -> pd.DataFrame:
    """Estimate block stacked on std.error block for one group.

    Columns: .group, .level, .type, then one column per term. The
    std.error block is omitted when the model has no conditional variances.
    """
    terms = [str(t) for t in cm.modes.columns]
    levels = [str(level) for level in cm.modes.index]

    def block(values: np.ndarray, kind: str) -> pd.DataFrame:
        out = pd.DataFrame(values, columns=terms)
        out.insert(0, _TYPE, kind)
        out.insert(0, _LEVEL, levels)
        out.insert(0, _GROUP, cm.group)
        return out

    blocks = [block(cm.modes.to_numpy(dtype=float), 'estimate')]
    if cm.cond_var is not None:
        blocks.append(block(_std_errors(cm), 'std.error'))
    return pd.concat(blocks, ignore_index=True)


def ran_vals_table(modes: list[ConditionalModes]) -> pd.DataFrame:
    """Tidy ran_vals rows: group, level, term, estimate, std.error.

    Each group is melted on its own so terms of one group never produce
    rows for another.
    """
    columns = ['group', 'level', 'term', *VALUE_TYPES]
    if not modes:
        return pd.DataFrame(columns=columns)

    tall = pd.concat(
        [
            melt(ran_vals_blocks(cm), (_GROUP, _LEVEL, _TYPE),
                 key_col='term', value_col=_VALUE)
            for cm in modes
        ],
        ignore_index=True,
    )
    wide = pivot(tall, (_GROUP, _LEVEL, 'term'),
                 key_col=_TYPE, value_col=_VALUE, keys=VALUE_TYPES)
    wide = wide.rename(columns={_GROUP: 'group', _LEVEL: 'level'})
    for col in VALUE_TYPES:
        wide[col] = wide[col].astype(float)
    return wide[columns]
