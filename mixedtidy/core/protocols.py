"""
Core protocols for mixedtidy.

ModelAdapter is the single extraction interface that each supported model
family implements. We use Protocol (structural typing) rather than ABC
(nominal typing) so adapters for third-party result objects need not
inherit from anything in this package.

Design Principles:
    - Minimal contracts: raw extraction only, no tidying
    - Capability-driven: use supports() for optional features
    - One adapter per model family, selected by the model's type tag
"""

from __future__ import annotations

from typing import Any, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    import pandas as pd
    from mixedtidy.tidiers._common import ConditionalModes, VarCorr


@runtime_checkable
class ModelAdapter(Protocol):
    """
    Extraction interface wrapping one fitted model object.

    Extractors return raw data: native column names are allowed (the
    canonicalizer renames them), and no CI or effect columns are added.
    """

    @property
    def name(self) -> str:
        """
        Adapter identifier, used in error messages.

        Examples: 'mixedfit', 'statsmodels_mixedlm'
        """
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this adapter supports a given capability.

        Capability strings come from mixedtidy.core.capabilities; a CI
        method name ('Wald', 'profile', 'HPDinterval') is a capability.

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...

    def extract_fixed(self) -> 'pd.DataFrame':
        """Fixed-effect table with a 'term' column and native stat columns."""
        ...

    def extract_ran_pars(self) -> 'VarCorr':
        """Per-group random-effect covariance matrices and residual sigma."""
        ...

    def extract_ran_vals(self) -> list['ConditionalModes']:
        """Conditional modes and their conditional variances, per group."""
        ...

    def extract_augment_columns(self) -> dict[str, Any]:
        """Per-observation columns keyed by their final '.'-prefixed name."""
        ...

    def extract_glance_columns(self) -> dict[str, float | None]:
        """Model-level statistics keyed by glance column name."""
        ...

    def model_frame(self) -> 'pd.DataFrame | None':
        """Data the model was fitted on, if the model retains it."""
        ...

    def predict(self, newdata: 'pd.DataFrame', include_random: bool) -> Any:
        """Predictions for new data, with or without random effects."""
        ...

    def intervals(
        self, effect: str, method: str, level: float,
    ) -> 'pd.DataFrame | None':
        """
        Externally computed intervals for one effect type.

        Returns:
            Frame with columns term, conf.low, conf.high, or None if the
            method is not implemented for this effect type.
        """
        ...
