"""
Tests for the statsmodels MixedLM adapter.

Skipped when statsmodels is not installed.
"""

import numpy as np
import pandas as pd
import pytest

smf = pytest.importorskip("statsmodels.formula.api")

from mixedtidy import augment, glance, tidy  # noqa: E402
from mixedtidy.adapters import MixedLMAdapter, resolve_adapter  # noqa: E402
from mixedtidy.core.exceptions import (  # noqa: E402
    UnsupportedMethodError,
    ValidationError,
)


N_GROUPS = 12
N_PER_GROUP = 8


@pytest.fixture(scope="module")
def frame():
    rng = np.random.default_rng(42)
    g = np.repeat(np.arange(N_GROUPS), N_PER_GROUP)
    x = rng.normal(size=g.size)
    u = rng.normal(scale=1.5, size=N_GROUPS)
    y = 2.0 + 0.5 * x + u[g] + rng.normal(scale=0.8, size=g.size)
    return pd.DataFrame({'y': y, 'x': x, 'g': g})


@pytest.fixture(scope="module")
def result(frame):
    model = smf.mixedlm("y ~ x", frame, groups=frame["g"])
    return model.fit(reml=False)


class TestResolve:

    def test_results_resolve_to_adapter(self, result):
        assert isinstance(resolve_adapter(result), MixedLMAdapter)

    def test_only_wald(self, result):
        adapter = resolve_adapter(result)
        assert adapter.supports('Wald')
        assert not adapter.supports('profile')
        assert not adapter.supports('newdata')


class TestTidy:

    def test_fixed(self, result):
        fixed = tidy(result, 'fixed')
        assert fixed['term'].tolist() == ['(Intercept)', 'x']
        np.testing.assert_allclose(fixed['estimate'], np.asarray(result.fe_params))
        np.testing.assert_allclose(fixed['std.error'], np.asarray(result.bse_fe))
        assert {'statistic', 'p.value'} <= set(fixed.columns)

    def test_ran_pars(self, result):
        rp = tidy(result, 'ran_pars')
        assert rp['group'].tolist() == ['Group', 'Residual']
        assert rp['term'].iloc[0] == 'sd_(Intercept).Group'
        assert rp['term'].iloc[1] == 'sd_Observation.Residual'
        np.testing.assert_allclose(
            rp['estimate'],
            [np.sqrt(np.asarray(result.cov_re)[0, 0]), np.sqrt(result.scale)],
        )

    def test_ran_vals(self, result):
        rv = tidy(result, 'ran_vals', conf_int=True)
        assert len(rv) == N_GROUPS
        assert rv['level'].tolist() == [str(i) for i in range(N_GROUPS)]
        assert rv['std.error'].notna().all()
        assert (rv['conf.low'] < rv['estimate']).all()

    def test_profile_rejected(self, result):
        with pytest.raises(UnsupportedMethodError):
            tidy(result, conf_int=True, conf_method='profile')


class TestAugmentGlance:

    def test_augment(self, result, frame):
        out = augment(result)
        assert len(out) == len(frame)
        np.testing.assert_allclose(out['.fitted'], np.asarray(result.fittedvalues))
        np.testing.assert_allclose(out['.fitted'] + out['.resid'], frame['y'])
        assert '.fixed' in out.columns

    def test_augment_newdata_rejected(self, result, frame):
        with pytest.raises(ValidationError):
            augment(result, newdata=frame)

    def test_glance(self, result):
        row = glance(result).iloc[0]
        assert row['logLik'] == pytest.approx(result.llf)
        assert row['deviance'] == pytest.approx(-2.0 * result.llf)
        assert row['sigma'] == pytest.approx(np.sqrt(result.scale))


# ═══════════════════════════════════════════════════════════════════════
# Random slopes with variance components
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture(scope="module")
def vc_frame():
    rng = np.random.default_rng(7)
    g = np.repeat(np.arange(N_GROUPS), N_PER_GROUP)
    c = np.tile([0, 1], g.size // 2)
    x = rng.normal(size=g.size)
    u0 = rng.normal(scale=1.5, size=N_GROUPS)
    u1 = rng.normal(scale=0.5, size=N_GROUPS)
    v = rng.normal(scale=0.7, size=(N_GROUPS, 2))
    y = (2.0 + 0.5 * x + u0[g] + u1[g] * x + v[g, c]
         + rng.normal(scale=0.5, size=g.size))
    return pd.DataFrame({'y': y, 'x': x, 'g': g, 'c': c})


@pytest.fixture(scope="module")
def vc_result(vc_frame):
    model = smf.mixedlm(
        "y ~ x", vc_frame, groups=vc_frame["g"], re_formula="~x",
        vc_formula={'c': '0 + C(c)'},
    )
    return model.fit(reml=False)


class TestVarianceComponents:

    def test_ran_vals_keep_only_random_effect_terms(self, vc_result):
        rv = tidy(vc_result, 'ran_vals')
        assert len(rv) == 2 * N_GROUPS
        assert rv['term'].unique().tolist() == ['(Intercept)', 'x']
        assert rv['std.error'].notna().all()

    def test_all_effects(self, vc_result):
        out = tidy(vc_result, ['fixed', 'ran_pars', 'ran_vals'])
        rp = out[out['effect'] == 'ran_pars']
        assert rp['term'].tolist() == [
            'sd_(Intercept).Group',
            'sd_x.Group',
            'cor_(Intercept).x.Group',
            'sd_Observation.Residual',
        ]
        assert (out['effect'] == 'ran_vals').sum() == 2 * N_GROUPS
