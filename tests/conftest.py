"""
pytest configuration and shared fixtures.

Provides MixedFit objects with known contents, shaped like the lme4
sleepstudy fit Reaction ~ Days + (Days | Subject) and a binomial
random-intercept fit.
"""

import numpy as np
import pandas as pd
import pytest

from mixedtidy.adapters import MixedFit

TERMS = ['(Intercept)', 'Days']
SUBJECTS = ['308', '309', '310']


@pytest.fixture
def sleepstudy_frame():
    """Six observations: three subjects, days 0 and 1."""
    return pd.DataFrame({
        'Reaction': [249.6, 258.7, 222.7, 205.3, 199.1, 194.3],
        'Days': [0.0, 1.0, 0.0, 1.0, 0.0, 1.0],
        'Subject': ['308', '308', '309', '309', '310', '310'],
    }, index=[10, 11, 20, 21, 30, 31])


@pytest.fixture
def sleepstudy_fit(sleepstudy_frame):
    """Gaussian fit with a correlated random intercept and slope."""
    coef_table = pd.DataFrame(
        {
            'Estimate': [251.405, 10.467],
            'Std. Error': [6.632, 1.502],
            't value': [37.91, 6.97],
            'Pr(>|t|)': [1.0e-20, 3.3e-12],
        },
        index=TERMS,
    )
    varcorr = {
        'Subject': pd.DataFrame(
            [[612.10, 9.60], [9.60, 35.07]], index=TERMS, columns=TERMS,
        ),
    }
    ranef = {
        'Subject': pd.DataFrame(
            [[2.26, 9.20], [-40.40, -8.62], [-38.96, -5.45]],
            index=SUBJECTS, columns=TERMS,
        ),
    }
    cond_var = {
        'Subject': np.array([
            [[145.7, -21.9], [-21.9, 5.3]],
            [[144.1, -21.0], [-21.0, 5.0]],
            [[146.2, -22.4], [-22.4, 5.5]],
        ]),
    }
    fixed = np.array([251.405, 261.872] * 3)
    fitted = np.array([253.66, 273.33, 211.0, 212.85, 212.44, 218.46])
    return MixedFit(
        coef_table=coef_table,
        varcorr=varcorr,
        sigma=25.59,
        ranef=ranef,
        cond_var=cond_var,
        fitted_values=fitted,
        residuals=sleepstudy_frame['Reaction'].to_numpy() - fitted,
        fixed_values=fixed,
        resp={'mu': fitted, 'eta': fitted, 'offset': np.zeros(6)},
        data=sleepstudy_frame,
        log_likelihood=-871.81,
        aic=1755.63,
        bic=1774.79,
        deviance=1743.63,
    )


@pytest.fixture
def binomial_fit():
    """Binomial random-intercept fit: no residual sigma, no model frame."""
    coef_table = pd.DataFrame(
        {
            'Estimate': [-1.40, -0.99],
            'Std. Error': [0.23, 0.30],
            'z value': [-6.09, -3.30],
            'Pr(>|z|)': [1.1e-9, 9.7e-4],
        },
        index=['(Intercept)', 'period2'],
    )
    return MixedFit(
        coef_table=coef_table,
        varcorr={
            'herd': pd.DataFrame(
                [[0.412]], index=['(Intercept)'], columns=['(Intercept)'],
            ),
        },
        sigma=None,
        ranef={
            'herd': pd.DataFrame(
                [[0.58], [-0.31]], index=['1', '2'], columns=['(Intercept)'],
            ),
        },
        log_likelihood=-92.03,
        aic=194.05,
        bic=204.15,
        family='binomial',
    )
