"""Tests for confidence interval composition."""

import numpy as np
import pandas as pd
import pytest

from mixedtidy.core.exceptions import CIUnavailableWarning, ValidationError
from mixedtidy.tidiers._ci import (
    add_null_ci,
    add_wald_ci,
    compose_ci,
    has_std_errors,
    merge_intervals,
    wald_multiplier,
)


class TestWald:

    def test_multiplier_95(self):
        np.testing.assert_allclose(wald_multiplier(0.95), 1.959964, atol=1e-6)

    def test_multiplier_90(self):
        np.testing.assert_allclose(wald_multiplier(0.90), 1.644854, atol=1e-6)

    def test_bounds(self):
        table = pd.DataFrame({'term': ['x'], 'estimate': [2.0], 'std.error': [0.5]})
        out = add_wald_ci(table, 0.95)
        np.testing.assert_allclose(out['conf.low'], [1.0199], atol=1e-3)
        np.testing.assert_allclose(out['conf.high'], [2.9801], atol=1e-3)
        assert 'conf.low' not in table.columns

    def test_null_std_error_gives_null_bounds(self):
        table = pd.DataFrame({'term': ['a', 'b'], 'estimate': [1.0, 2.0],
                              'std.error': [0.1, np.nan]})
        out = add_wald_ci(table, 0.95)
        assert out['conf.low'].notna().tolist() == [True, False]
        assert out['conf.high'].notna().tolist() == [True, False]

    def test_requires_std_error(self):
        with pytest.raises(ValidationError, match="std.error"):
            add_wald_ci(pd.DataFrame({'term': ['x'], 'estimate': [1.0]}), 0.95)


class TestMergeIntervals:

    def test_merge_by_term(self):
        table = pd.DataFrame({'term': ['a', 'b', 'c'], 'estimate': [1.0, 2.0, 3.0]})
        intervals = pd.DataFrame({
            'term': ['c', 'a'], 'conf.low': [2.5, 0.5], 'conf.high': [3.5, 1.5],
        })
        out = merge_intervals(table, intervals)
        assert out['term'].tolist() == ['a', 'b', 'c']
        np.testing.assert_allclose(out['conf.low'], [0.5, np.nan, 2.5])
        np.testing.assert_allclose(out['conf.high'], [1.5, np.nan, 3.5])

    def test_missing_columns(self):
        table = pd.DataFrame({'term': ['a'], 'estimate': [1.0]})
        with pytest.raises(ValidationError, match="missing columns"):
            merge_intervals(table, pd.DataFrame({'term': ['a'], 'lower': [0.0]}))

    def test_duplicate_terms(self):
        table = pd.DataFrame({'term': ['a'], 'estimate': [1.0]})
        intervals = pd.DataFrame({'term': ['a', 'a'], 'conf.low': [0, 0],
                                  'conf.high': [1, 1]})
        with pytest.raises(ValidationError, match="duplicate"):
            merge_intervals(table, intervals)


class TestCompose:

    def test_wald_used_when_std_error_present(self):
        table = pd.DataFrame({'term': ['x'], 'estimate': [2.0], 'std.error': [0.5]})
        out = compose_ci(table, 'fixed', 'Wald', 0.95)
        np.testing.assert_allclose(out['conf.low'], [1.0199], atol=1e-3)

    def test_external_intervals(self):
        table = pd.DataFrame({'term': ['x'], 'estimate': [2.0], 'std.error': [0.5]})
        intervals = pd.DataFrame({'term': ['x'], 'conf.low': [1.2], 'conf.high': [2.7]})
        out = compose_ci(table, 'fixed', 'profile', 0.95, intervals)
        assert out['conf.low'].tolist() == [1.2]
        assert out['conf.high'].tolist() == [2.7]

    def test_unavailable_gives_null_columns_and_warning(self):
        table = pd.DataFrame({'group': ['g'], 'term': ['sd_(Intercept).g'],
                              'estimate': [1.0]})
        with pytest.warns(CIUnavailableWarning, match="ran_pars"):
            out = compose_ci(table, 'ran_pars', 'Wald', 0.95)
        assert {'conf.low', 'conf.high'} <= set(out.columns)
        assert out['conf.low'].isna().all()
        assert out['conf.high'].isna().all()

    def test_all_null_std_error_falls_back_with_warning(self):
        table = pd.DataFrame({'term': ['a', 'b'], 'estimate': [1.0, 2.0],
                              'std.error': [np.nan, np.nan]})
        with pytest.warns(CIUnavailableWarning, match="ran_vals"):
            out = compose_ci(table, 'ran_vals', 'Wald', 0.95)
        assert out['conf.low'].isna().all()

    def test_all_null_std_error_uses_external_intervals(self):
        table = pd.DataFrame({'term': ['a'], 'estimate': [1.0],
                              'std.error': [np.nan]})
        intervals = pd.DataFrame({'term': ['a'], 'conf.low': [0.5], 'conf.high': [1.5]})
        out = compose_ci(table, 'fixed', 'Wald', 0.95, intervals)
        assert out['conf.low'].tolist() == [0.5]


class TestHasStdErrors:

    def test_missing_column(self):
        assert not has_std_errors(pd.DataFrame({'term': ['a']}))

    def test_all_null(self):
        assert not has_std_errors(pd.DataFrame({'std.error': [np.nan]}))

    def test_some_values(self):
        assert has_std_errors(pd.DataFrame({'std.error': [np.nan, 0.1]}))

    def test_empty_table(self):
        assert has_std_errors(pd.DataFrame({'std.error': []}))


def test_add_null_ci():
    out = add_null_ci(pd.DataFrame({'term': ['a', 'b']}))
    assert out[['conf.low', 'conf.high']].isna().all().all()
