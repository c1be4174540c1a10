"""
Tidier dispatch.

Public API:
    tidy(): one row per estimated quantity
    augment(): one row per observation
    glance(): one row per model
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from mixedtidy.adapters.registry import resolve_adapter
from mixedtidy.core.capabilities import (
    CAPABILITY_NEWDATA,
    CI_WALD,
    EFFECT_FIXED,
    EFFECT_RAN_PARS,
    EFFECT_RAN_VALS,
    GLANCE_COLUMNS,
)
from mixedtidy.core.exceptions import ValidationError
from mixedtidy.core.protocols import ModelAdapter
from mixedtidy.core.validation import check_consistent_length
from mixedtidy.tidiers._assemble import bind_effects
from mixedtidy.tidiers._ci import compose_ci, has_std_errors
from mixedtidy.tidiers._columns import rename_cols
from mixedtidy.tidiers._ran_pars import ran_pars_table, varcorr_entries
from mixedtidy.tidiers._reshape import ran_vals_table
from mixedtidy.tidiers.design import TidyDesign


def tidy(
    model: Any,
    effects: str | Sequence[str] = (EFFECT_FIXED, EFFECT_RAN_PARS),
    *,
    component: str | Sequence[str] = 'cond',
    scales: Sequence[str | None] | None = None,
    ran_prefix: Sequence[str] | bool | None = None,
    conf_int: bool = False,
    conf_level: float = 0.95,
    conf_method: str = CI_WALD,
) -> pd.DataFrame:
    """Tidy the coefficients of a fitted mixed model.

    Args:
        model: Fitted model with a registered adapter (e.g. a MixedFit or
            a statsmodels MixedLM result), or a ModelAdapter.
        effects: One or more of 'fixed' (fixed-effect parameters),
            'ran_pars' (standard deviations and correlations, or variances
            and covariances, of random effects) and 'ran_vals'
            (conditional modes / BLUPs).
        component: Model component; only 'cond' is supported.
        scales: None, or one entry per effect: 'sdcor' or 'varcov' for
            ran_pars (default 'sdcor'), None for no transformation.
        ran_prefix: (self, cross) prefixes for ran_pars terms. None uses
            ('sd', 'cor') or ('var', 'cov') to match the scale; False
            disables prefixing.
        conf_int: Whether to add conf.low and conf.high.
        conf_level: Confidence level of the intervals.
        conf_method: 'Wald', or 'profile' / 'HPDinterval' where the model
            family supports them. ran_vals intervals are Wald only.

    Returns:
        DataFrame with columns effect, group, level, term, estimate,
        std.error, statistic, p.value, conf.low, conf.high (those that
        apply to the requested effects), one row per estimated quantity.
        Effect types whose intervals cannot be computed get null
        conf.low / conf.high and a CIUnavailableWarning.

    Examples:
        >>> tidy(fit)
        >>> tidy(fit, effects='fixed', conf_int=True)
        >>> tidy(fit, effects=['ran_pars'], scales=['varcov'])
        >>> tidy(fit, effects=['fixed', 'ran_vals'], conf_int=True)
    """
    adapter = resolve_adapter(model)
    design = TidyDesign.validate(
        adapter,
        effects,
        component=component,
        scales=scales,
        ran_prefix=ran_prefix,
        conf_int=conf_int,
        conf_level=conf_level,
        conf_method=conf_method,
    )

    tables: dict[str, pd.DataFrame] = {}
    if EFFECT_FIXED in design.effects:
        tables[EFFECT_FIXED] = _tidy_fixed(adapter, design)
    if EFFECT_RAN_PARS in design.effects:
        tables[EFFECT_RAN_PARS] = _tidy_ran_pars(adapter, design)
    if EFFECT_RAN_VALS in design.effects:
        tables[EFFECT_RAN_VALS] = _tidy_ran_vals(adapter, design)

    return bind_effects(tables)


def _with_ci(
    table: pd.DataFrame,
    effect: str,
    adapter: ModelAdapter,
    design: TidyDesign,
) -> pd.DataFrame:
    if not design.conf_int:
        return table
    intervals = None
    if design.conf_method != CI_WALD or not has_std_errors(table):
        intervals = adapter.intervals(effect, design.conf_method, design.conf_level)
    return compose_ci(
        table, effect, design.conf_method, design.conf_level, intervals,
    )


def _tidy_fixed(adapter: ModelAdapter, design: TidyDesign) -> pd.DataFrame:
    table = rename_cols(adapter.extract_fixed())
    missing = [c for c in ('term', 'estimate') if c not in table.columns]
    if missing:
        raise ValidationError(
            f"{adapter.name}: fixed-effect table lacks {missing} after "
            f"renaming; columns are {list(table.columns)}"
        )
    return _with_ci(table, EFFECT_FIXED, adapter, design)


def _tidy_ran_pars(adapter: ModelAdapter, design: TidyDesign) -> pd.DataFrame:
    entries = varcorr_entries(adapter.extract_ran_pars())
    table = ran_pars_table(entries, design.ran_pars_scale, design.ran_prefix)
    return _with_ci(table, EFFECT_RAN_PARS, adapter, design)


def _tidy_ran_vals(adapter: ModelAdapter, design: TidyDesign) -> pd.DataFrame:
    table = ran_vals_table(adapter.extract_ran_vals())
    return _with_ci(table, EFFECT_RAN_VALS, adapter, design)


def augment(
    model: Any,
    data: pd.DataFrame | None = None,
    newdata: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """Add per-observation model columns to the data.

    Args:
        model: Fitted model with a registered adapter.
        data: Data the model was fitted on. Defaults to the model frame
            retained by the model.
        newdata: New data to predict on; when given, data is ignored.

    Returns:
        Copy of the data (or newdata) with a fresh index and added columns:
            .fitted: predicted values
            .resid: residuals (not for newdata)
            .fixed: predictions with random effects set to zero
        plus, where the model exposes them, the response-object columns
        .mu, .offset, .sqrtXwt, .sqrtrwt, .eta.

    Raises:
        ValidationError: If no data is available, or the model cannot
            predict on newdata.
        DimensionError: If data and fitted values differ in length.
    """
    adapter = resolve_adapter(model)

    if newdata is not None:
        if not adapter.supports(CAPABILITY_NEWDATA):
            raise ValidationError(
                f"newdata: {adapter.name} models cannot predict on new data"
            )
        out = pd.DataFrame(newdata).reset_index(drop=True)
        fitted = np.asarray(adapter.predict(newdata, include_random=True))
        check_consistent_length(out, fitted, names=('newdata', '.fitted'))
        out['.fitted'] = fitted
        fixed = np.asarray(adapter.predict(newdata, include_random=False))
        if len(fixed) == len(out):
            out['.fixed'] = fixed
        return out

    if data is None:
        data = adapter.model_frame()
        if data is None:
            raise ValidationError(
                f"data: {adapter.name} model does not retain its data; "
                f"pass data explicitly"
            )
    out = pd.DataFrame(data).reset_index(drop=True)

    cols = adapter.extract_augment_columns()
    for name, values in cols.items():
        values = np.asarray(values)
        if name in ('.fitted', '.resid'):
            check_consistent_length(out, values, names=('data', name))
        elif len(values) != len(out):
            # e.g. nonlinear fits with several predictions per observation
            continue
        out[name] = values
    return out


def glance(model: Any) -> pd.DataFrame:
    """One-row summary of a fitted mixed model.

    Returns:
        DataFrame with columns sigma, logLik, AIC, BIC, deviance; null
        where the model does not expose a quantity.
    """
    adapter = resolve_adapter(model)
    stats = adapter.extract_glance_columns()
    row = {
        name: np.nan if stats.get(name) is None else float(stats[name])
        for name in GLANCE_COLUMNS
    }
    return pd.DataFrame([row], columns=list(GLANCE_COLUMNS))
