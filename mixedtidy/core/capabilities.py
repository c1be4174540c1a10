"""
Vocabulary constants for mixedtidy.

This module is the SINGLE SOURCE OF TRUTH for effect, scale, component,
interval-method and adapter capability strings. Import from here, never
use raw strings.

Usage:
    from mixedtidy.core.capabilities import (
        EFFECT_FIXED,
        SCALE_SDCOR,
        CAPABILITY_NEWDATA,
    )

    if adapter.supports(CAPABILITY_NEWDATA):
        fitted = adapter.predict(newdata, include_random=True)
"""

# Effect types, in the order rows are stacked in a tidy table
EFFECT_FIXED = 'fixed'
EFFECT_RAN_PARS = 'ran_pars'
EFFECT_RAN_VALS = 'ran_vals'

ALL_EFFECTS = (EFFECT_FIXED, EFFECT_RAN_PARS, EFFECT_RAN_VALS)

# Random-effect parameter scales
SCALE_SDCOR = 'sdcor'      # standard deviations and correlations
SCALE_VARCOV = 'varcov'    # variances and covariances

ALL_SCALES = frozenset({SCALE_SDCOR, SCALE_VARCOV})

# Model components
COMPONENT_COND = 'cond'

# Confidence interval methods
CI_WALD = 'Wald'
CI_PROFILE = 'profile'
CI_HPD = 'HPDinterval'

ALL_CI_METHODS = frozenset({CI_WALD, CI_PROFILE, CI_HPD})

# Adapter capabilities (a CI method name is also a capability)

# Predictions can be made on new data
CAPABILITY_NEWDATA = 'newdata'

# Canonical column order of a tidy table
CANONICAL_COLUMNS = (
    'effect', 'group', 'level', 'term',
    'estimate', 'std.error', 'statistic', 'p.value',
    'conf.low', 'conf.high',
)

# Response-object columns copied by augment, without the leading '.'
RESP_COLUMNS = ('mu', 'offset', 'sqrtXwt', 'sqrtrwt', 'eta')

GLANCE_COLUMNS = ('sigma', 'logLik', 'AIC', 'BIC', 'deviance')

__all__ = [
    'EFFECT_FIXED',
    'EFFECT_RAN_PARS',
    'EFFECT_RAN_VALS',
    'ALL_EFFECTS',
    'SCALE_SDCOR',
    'SCALE_VARCOV',
    'ALL_SCALES',
    'COMPONENT_COND',
    'CI_WALD',
    'CI_PROFILE',
    'CI_HPD',
    'ALL_CI_METHODS',
    'CAPABILITY_NEWDATA',
    'CANONICAL_COLUMNS',
    'RESP_COLUMNS',
    'GLANCE_COLUMNS',
]
