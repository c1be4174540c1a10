"""
Term names for random-effect parameters.

A random-effect parameter is identified by its variable pair and grouping
factor: 'sd_(Intercept).Subject' is the standard deviation of the random
intercept of Subject; 'cor_(Intercept).Days.Subject' the correlation of
the intercept with the Days slope; 'sd_Observation.Residual' the residual
standard deviation.
"""

from __future__ import annotations

import pandas as pd

from mixedtidy.core.capabilities import SCALE_SDCOR, SCALE_VARCOV

RESIDUAL_TERM = 'Observation'

_DEFAULT_PREFIX = {
    SCALE_SDCOR: ('sd', 'cor'),
    SCALE_VARCOV: ('var', 'cov'),
}


def default_ran_prefix(scale: str) -> tuple[str, str]:
    """(self, cross) prefixes matching the reporting scale."""
    try:
        return _DEFAULT_PREFIX[scale]
    except KeyError:
        raise ValueError(f"No default prefix for scale {scale!r}") from None


def _is_null(value: object) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


def make_ran_term(
    var1: str | None,
    var2: str | None,
    group: str,
    prefix: tuple[str, str] | None,
) -> str:
    """Build the term name of one random-effect parameter.

    Args:
        var1: First variable, None (or NaN) for the residual.
        var2: Second variable for cross terms, else None (or NaN).
        group: Grouping factor label, appended last.
        prefix: (self, cross) prefixes, or None to disable prefixing.

    Returns:
        e.g. 'sd_(Intercept).Subject', 'cor_(Intercept).Days.Subject',
        '(Intercept).Subject' when prefixing is disabled.
    """
    names = [str(v) for v in (var1, var2) if not _is_null(v)]
    if not names:
        names = [RESIDUAL_TERM]
    base = '.'.join(names)
    if prefix is not None:
        base = f"{prefix[len(names) - 1]}_{base}"
    return f"{base}.{group}"
