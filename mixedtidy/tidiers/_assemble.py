"""
Assembly of per-effect-type tables into one tidy table.
"""

from __future__ import annotations

from collections.abc import Mapping

import pandas as pd

from mixedtidy.core.capabilities import ALL_EFFECTS
from mixedtidy.core.exceptions import InvalidEffectTypeError
from mixedtidy.tidiers._columns import reorder_cols


def bind_effects(tables: Mapping[str, pd.DataFrame]) -> pd.DataFrame:
    """Stack effect tables, tagging each row with its effect type.

    Rows are ordered fixed, ran_pars, ran_vals regardless of mapping
    order. Columns are the union of the inputs, canonical ones first;
    cells a sub-table lacks are null.

    Raises:
        InvalidEffectTypeError: If a key is not a supported effect type.
    """
    unknown = tuple(name for name in tables if name not in ALL_EFFECTS)
    if unknown:
        raise InvalidEffectTypeError(
            f"unknown effect type(s) {', '.join(map(repr, unknown))}; "
            f"expected any of {list(ALL_EFFECTS)}",
            effects=unknown,
            valid=ALL_EFFECTS,
        )

    parts = []
    for name in ALL_EFFECTS:
        if name not in tables:
            continue
        part = tables[name].copy()
        part.insert(0, 'effect', name)
        parts.append(part)

    if not parts:
        return pd.DataFrame(columns=['effect', 'term', 'estimate'])

    combined = pd.concat(parts, ignore_index=True, sort=False)
    return reorder_cols(combined).reset_index(drop=True)
