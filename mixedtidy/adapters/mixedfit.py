"""
Library-neutral mixed model fit container and its adapter.

MixedFit holds the pieces of a fitted mixed model that the tidiers read,
in the shapes most fitting libraries can produce directly: a native
coefficient summary table, per-group covariance matrices, conditional
modes with conditional variances, and per-observation predictions.
Wrapping a fit from a library without a dedicated adapter amounts to
filling in a MixedFit.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from mixedtidy.adapters.registry import register_adapter, type_tag
from mixedtidy.core.capabilities import (
    CAPABILITY_NEWDATA,
    CI_WALD,
    RESP_COLUMNS,
)
from mixedtidy.core.exceptions import UnsupportedMethodError, ValidationError
from mixedtidy.tidiers._common import ConditionalModes, VarCorr


@dataclass(frozen=True)
class MixedFit:
    """
    Parameter payload of a fitted mixed model, as read by the tidiers.

    Only coef_table is required; every other piece is optional and the
    corresponding output is null or omitted when it is missing.

    Attributes:
        coef_table: Fixed-effect summary indexed by term, with the fitting
            library's own column names (e.g. 'Estimate', 'Std. Error',
            'z value', 'Pr(>|z|)').
        varcorr: Grouping factor → random-effect covariance matrix,
            labelled by term on both axes.
        sigma: Residual standard deviation (gaussian) or dispersion
            parameter; None if the family has neither.
        ranef: Grouping factor → levels × terms frame of conditional modes.
        cond_var: Grouping factor → conditional covariances, shape
            (levels, terms, terms).
        fitted_values: Conditional predictions (n,).
        residuals: Response residuals (n,).
        fixed_values: Population-level predictions, random effects at 0 (n,).
        resp: Response-object columns keyed by name ('mu', 'offset',
            'sqrtXwt', 'sqrtrwt', 'eta'), each (n,).
        data: Model frame the fit was computed on.
        log_likelihood, aic, bic, deviance: Fit statistics.
        family: Response family name.
        interval_fn: Callable (effect, method, level) → frame with term,
            conf.low, conf.high, or None when the method does not cover
            the effect type.
        ci_methods: Interval methods the fit supports.
        predict_fn: Callable (newdata, include_random) → predictions.
    """
    coef_table: pd.DataFrame
    varcorr: dict[str, pd.DataFrame] = field(default_factory=dict)
    sigma: float | None = None
    ranef: dict[str, pd.DataFrame] = field(default_factory=dict)
    cond_var: dict[str, NDArray] = field(default_factory=dict)
    fitted_values: NDArray | None = None
    residuals: NDArray | None = None
    fixed_values: NDArray | None = None
    resp: dict[str, NDArray] = field(default_factory=dict)
    data: pd.DataFrame | None = None
    log_likelihood: float | None = None
    aic: float | None = None
    bic: float | None = None
    deviance: float | None = None
    family: str = 'gaussian'
    interval_fn: Callable[[str, str, float], pd.DataFrame | None] | None = None
    ci_methods: tuple[str, ...] = (CI_WALD,)
    predict_fn: Callable[[pd.DataFrame, bool], NDArray] | None = None


@register_adapter(type_tag(MixedFit))
class MixedFitAdapter:
    """Adapter reading a MixedFit."""

    def __init__(self, fit: MixedFit):
        self._fit = fit

    @property
    def name(self) -> str:
        return 'mixedfit'

    def supports(self, capability: str) -> bool:
        if capability == CAPABILITY_NEWDATA:
            return self._fit.predict_fn is not None
        return capability in self._fit.ci_methods

    def extract_fixed(self) -> pd.DataFrame:
        table = self._fit.coef_table
        if 'term' in table.columns:
            out = table.reset_index(drop=True)
        else:
            # terms live in the index
            out = table.reset_index(drop=False)
            out = out.rename(columns={out.columns[0]: 'term'})
        out['term'] = out['term'].astype(str)
        return out

    def extract_ran_pars(self) -> VarCorr:
        # only gaussian fits report sigma as a residual standard deviation
        sigma = self._fit.sigma if self._fit.family == 'gaussian' else None
        return VarCorr(matrices=dict(self._fit.varcorr), sigma=sigma)

    def extract_ran_vals(self) -> list[ConditionalModes]:
        return [
            ConditionalModes(
                group=group,
                modes=modes,
                cond_var=self._fit.cond_var.get(group),
            )
            for group, modes in self._fit.ranef.items()
        ]

    def extract_augment_columns(self) -> dict[str, Any]:
        fit = self._fit
        cols: dict[str, Any] = {}
        if fit.fitted_values is not None:
            cols['.fitted'] = np.asarray(fit.fitted_values, dtype=float)
        if fit.residuals is not None:
            cols['.resid'] = np.asarray(fit.residuals, dtype=float)
        if fit.fixed_values is not None:
            cols['.fixed'] = np.asarray(fit.fixed_values, dtype=float)
        for key in RESP_COLUMNS:
            if key in fit.resp:
                cols[f'.{key}'] = np.asarray(fit.resp[key], dtype=float)
        return cols

    def extract_glance_columns(self) -> dict[str, float | None]:
        fit = self._fit
        return {
            'sigma': fit.sigma,
            'logLik': fit.log_likelihood,
            'AIC': fit.aic,
            'BIC': fit.bic,
            'deviance': fit.deviance,
        }

    def model_frame(self) -> pd.DataFrame | None:
        return self._fit.data

    def predict(self, newdata: pd.DataFrame, include_random: bool) -> NDArray:
        if self._fit.predict_fn is None:
            raise ValidationError(
                "newdata: this MixedFit has no predict_fn, "
                "so it cannot predict on new data"
            )
        return np.asarray(self._fit.predict_fn(newdata, include_random), dtype=float)

    def intervals(
        self, effect: str, method: str, level: float,
    ) -> pd.DataFrame | None:
        if method not in self._fit.ci_methods:
            raise UnsupportedMethodError(
                f"{method!r} intervals are not available for this fit",
                method=method,
                effect=effect,
            )
        if self._fit.interval_fn is None:
            return None
        return self._fit.interval_fn(effect, method, level)
