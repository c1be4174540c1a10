"""
Adapter for statsmodels linear mixed models (MixedLM).

statsmodels is an optional dependency: this module only reads attributes
of results objects and never imports statsmodels itself, so the adapter is
registered whether or not statsmodels is installed.

statsmodels does not record the name of the grouping variable, so random
effects are reported under GROUP_LABEL, which statsmodels also uses as the
label of the random intercept; that label is reported as '(Intercept)'.
Variance components declared via vc_formula are not reported.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from mixedtidy.adapters.registry import register_adapter
from mixedtidy.core.capabilities import CI_WALD
from mixedtidy.core.exceptions import ValidationError
from mixedtidy.tidiers._common import ConditionalModes, VarCorr

GROUP_LABEL = 'Group'
INTERCEPT_TERM = '(Intercept)'

# fixed-effect intercept label from the formula interface
_FE_INTERCEPT = 'Intercept'

_MODULE = 'statsmodels.regression.mixed_linear_model'


@register_adapter(f'{_MODULE}.MixedLMResults', f'{_MODULE}.MixedLMResultsWrapper')
class MixedLMAdapter:
    """Adapter reading a statsmodels MixedLMResults."""

    def __init__(self, results: Any):
        self._res = results

    @property
    def name(self) -> str:
        return 'statsmodels_mixedlm'

    def supports(self, capability: str) -> bool:
        return capability == CI_WALD

    @property
    def _k_fe(self) -> int:
        return int(self._res.model.k_fe)

    def _re_names(self) -> list[str]:
        cov_re = self._res.cov_re
        if isinstance(cov_re, pd.DataFrame):
            names = [str(c) for c in cov_re.columns]
        else:
            names = [str(c) for c in self._res.model.exog_re_names]
        return [INTERCEPT_TERM if n == GROUP_LABEL else n for n in names]

    def extract_fixed(self) -> pd.DataFrame:
        k = self._k_fe
        fe = self._res.fe_params
        if isinstance(fe, pd.Series):
            names = [str(n) for n in fe.index]
        else:
            names = [str(n) for n in self._res.model.exog_names[:k]]
        names = [INTERCEPT_TERM if n == _FE_INTERCEPT else n for n in names]
        # statsmodels summary() column names; renamed by the canonicalizer
        return pd.DataFrame({
            'term': names,
            'Coef.': np.asarray(fe, dtype=float),
            'Std.Err.': np.asarray(self._res.bse_fe, dtype=float),
            'z': np.asarray(self._res.tvalues, dtype=float)[:k],
            'P>|z|': np.asarray(self._res.pvalues, dtype=float)[:k],
        })

    def extract_ran_pars(self) -> VarCorr:
        names = self._re_names()
        cov = pd.DataFrame(
            np.asarray(self._res.cov_re, dtype=float), index=names, columns=names,
        )
        return VarCorr(
            matrices={GROUP_LABEL: cov},
            sigma=float(np.sqrt(self._res.scale)),
        )

    def extract_ran_vals(self) -> list[ConditionalModes]:
        names = self._re_names()
        k_re = len(names)
        ranef = self._res.random_effects
        # vc_formula components follow the k_re random effects; drop them
        modes = pd.DataFrame.from_dict(
            {level: np.asarray(v, dtype=float)[:k_re] for level, v in ranef.items()},
            orient='index',
            columns=names,
        )
        re_cov = self._res.random_effects_cov
        cond_var = np.stack([
            np.asarray(re_cov[level], dtype=float)[:k_re, :k_re] for level in ranef
        ])
        return [ConditionalModes(group=GROUP_LABEL, modes=modes, cond_var=cond_var)]

    def extract_augment_columns(self) -> dict[str, Any]:
        return {
            '.fitted': np.asarray(self._res.fittedvalues, dtype=float),
            '.resid': np.asarray(self._res.resid, dtype=float),
            # predict() without exog uses the fixed effects only
            '.fixed': np.asarray(self._res.predict(), dtype=float),
        }

    def extract_glance_columns(self) -> dict[str, float | None]:
        llf = float(self._res.llf)
        reml = bool(getattr(self._res.model, 'reml', True))
        return {
            'sigma': float(np.sqrt(self._res.scale)),
            'logLik': llf,
            'AIC': float(self._res.aic),
            'BIC': float(self._res.bic),
            'deviance': None if reml else -2.0 * llf,
        }

    def model_frame(self) -> pd.DataFrame | None:
        data = getattr(self._res.model, 'data', None)
        return getattr(data, 'frame', None)

    def predict(self, newdata: pd.DataFrame, include_random: bool) -> Any:
        raise ValidationError(
            "newdata: statsmodels MixedLM results cannot make conditional "
            "predictions on new data"
        )

    def intervals(
        self, effect: str, method: str, level: float,
    ) -> pd.DataFrame | None:
        return None
