"""
Random-effect parameter rows from per-group covariance matrices.

Covariance matrices are symmetric, so each group contributes its diagonal
(one variance / standard deviation per term) followed by its strict lower
triangle (one covariance / correlation per term pair). The residual
standard deviation, when the family has one, is appended as a final
'Residual' group.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from mixedtidy.core.exceptions import NotPositiveDefiniteError
from mixedtidy.core.validation import check_array, check_square
from mixedtidy.tidiers._common import RanParsEntry, VarCorr
from mixedtidy.tidiers._terms import make_ran_term

RESIDUAL_GROUP = 'Residual'


def cov_to_sdcor(cov: np.ndarray, name: str = 'cov') -> tuple[np.ndarray, np.ndarray]:
    """Standard deviations and correlation matrix of a covariance matrix.

    Correlations involving a zero standard deviation are NaN.

    Raises:
        NotPositiveDefiniteError: If any variance is negative.
    """
    variances = np.diag(cov)
    if np.any(variances < 0):
        raise NotPositiveDefiniteError(
            f"{name}: negative variance on diagonal ({variances.min():g})",
            matrix_name=name,
            min_eigenvalue=float(variances.min()),
        )
    sd = np.sqrt(variances)
    with np.errstate(divide='ignore', invalid='ignore'):
        cor = cov / np.outer(sd, sd)
    cor[~np.isfinite(cor)] = np.nan
    np.fill_diagonal(cor, 1.0)
    return sd, cor


def group_entries(group: str, cov: pd.DataFrame) -> list[RanParsEntry]:
    """Diagonal then strict lower-triangle entries of one group's matrix.

    The lower triangle is walked column by column, so for terms (a, b, c)
    the cross entries are (a, b), (a, c), (b, c).
    """
    values = check_array(cov.to_numpy(), f"varcorr[{group!r}]")
    check_square(values, f"varcorr[{group!r}]")
    terms = [str(t) for t in cov.index]
    sd, cor = cov_to_sdcor(values, f"varcorr[{group!r}]")

    entries = [
        RanParsEntry(group=group, var1=term, var2=None,
                     vcov=float(values[i, i]), sdcor=float(sd[i]))
        for i, term in enumerate(terms)
    ]
    q = len(terms)
    for col in range(q):
        for row in range(col + 1, q):
            c = cor[row, col]
            entries.append(RanParsEntry(
                group=group,
                var1=terms[col],
                var2=terms[row],
                vcov=float(values[row, col]),
                sdcor=None if np.isnan(c) else float(c),
            ))
    return entries


def varcorr_entries(varcorr: VarCorr) -> list[RanParsEntry]:
    """All random-effect parameter entries, in group order, residual last."""
    entries: list[RanParsEntry] = []
    for group, cov in varcorr.matrices.items():
        entries.extend(group_entries(group, cov))
    if varcorr.sigma is not None:
        sigma = float(varcorr.sigma)
        entries.append(RanParsEntry(
            group=RESIDUAL_GROUP, var1=None, var2=None,
            vcov=sigma ** 2, sdcor=sigma,
        ))
    return entries


def ran_pars_table(
    entries: list[RanParsEntry],
    scale: str,
    prefix: tuple[str, str] | None,
) -> pd.DataFrame:
    """Tidy ran_pars rows: group, term, estimate on the requested scale."""
    rows = [
        {
            'group': e.group,
            'term': make_ran_term(e.var1, e.var2, e.group, prefix),
            'estimate': e.value(scale),
        }
        for e in entries
    ]
    table = pd.DataFrame(rows, columns=['group', 'term', 'estimate'])
    table['estimate'] = table['estimate'].astype(float)
    return table
