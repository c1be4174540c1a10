"""
Option validation for tidy().

TidyDesign validates and resolves every tidy() option before any table is
computed, so a bad option never yields a partial result.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mixedtidy.core.capabilities import (
    CI_WALD,
    EFFECT_RAN_PARS,
    EFFECT_RAN_VALS,
    SCALE_SDCOR,
)
from mixedtidy.core.exceptions import UnsupportedMethodError
from mixedtidy.core.protocols import ModelAdapter
from mixedtidy.core.validation import (
    check_component,
    check_conf_level,
    check_conf_method,
    check_effects,
    check_ran_prefix,
    check_scale,
    check_scales_length,
)
from mixedtidy.tidiers._terms import default_ran_prefix


@dataclass(frozen=True)
class TidyDesign:
    """Validated tidy() options.

    Attributes:
        effects: Requested effect types, duplicates removed.
        component: Model component (always 'cond').
        ran_pars_scale: Scale for ran_pars estimates ('sdcor' or 'varcov').
        ran_prefix: (self, cross) term prefixes, or None when disabled.
        conf_int: Whether to add conf.low / conf.high.
        conf_level: Confidence level in (0, 1).
        conf_method: Interval method supported by the model's adapter.
    """
    effects: tuple[str, ...]
    component: str
    ran_pars_scale: str
    ran_prefix: tuple[str, str] | None
    conf_int: bool
    conf_level: float
    conf_method: str

    @staticmethod
    def validate(
        adapter: ModelAdapter,
        effects: str | Sequence[str],
        component: str | Sequence[str] = 'cond',
        scales: Sequence[str | None] | None = None,
        ran_prefix: Sequence[str] | bool | None = None,
        conf_int: bool = False,
        conf_level: float = 0.95,
        conf_method: str = CI_WALD,
    ) -> 'TidyDesign':
        """Validate options and create a TidyDesign.

        Args:
            adapter: Adapter of the model being tidied; decides which
                interval methods are available.
            effects: Effect type name or names.
            component: Model component; only 'cond' is supported.
            scales: None, or one scale (or None) per entry of effects.
            ran_prefix: None for the scale's default prefixes, False to
                disable prefixing, or a (self, cross) pair.
            conf_int: Whether to compute confidence intervals.
            conf_level: Confidence level.
            conf_method: 'Wald', 'profile' or 'HPDinterval'.

        Returns:
            Validated TidyDesign.

        Raises:
            UnsupportedComponentError: component other than 'cond'.
            UnsupportedMethodError: unknown or unsupported conf_method, or
                a non-Wald method for ran_vals intervals.
            ScaleMismatchError: scales and effects differ in length.
            InvalidEffectTypeError: unknown effect name.
            UnrecognizedScaleError: scale outside {sdcor, varcov}.
            ValidationError: other invalid values.
        """
        component = check_component(component)

        check_conf_method(conf_method)
        if not adapter.supports(conf_method):
            raise UnsupportedMethodError(
                f"conf_method: {conf_method!r} intervals are not available "
                f"for {adapter.name} models",
                method=conf_method,
            )

        check_scales_length(scales, effects)
        raw_effects = (effects,) if isinstance(effects, str) else tuple(effects)
        requested = check_effects(raw_effects)

        rscale = SCALE_SDCOR
        if scales is not None:
            scale_list = (scales,) if isinstance(scales, str) else tuple(scales)
            for effect, scale in zip(raw_effects, scale_list):
                check_scale(scale, f"scales[{effect!r}]")
            if EFFECT_RAN_PARS in raw_effects:
                chosen = scale_list[raw_effects.index(EFFECT_RAN_PARS)]
                if chosen is not None:
                    rscale = chosen

        prefix = check_ran_prefix(ran_prefix)
        if prefix is None:
            prefix = default_ran_prefix(rscale)
        elif prefix is False:
            prefix = None

        conf_level = check_conf_level(conf_level)

        conf_int = bool(conf_int)
        if conf_int and conf_method != CI_WALD and EFFECT_RAN_VALS in requested:
            raise UnsupportedMethodError(
                f"only Wald intervals are available for conditional modes "
                f"(ran_vals), got conf_method={conf_method!r}",
                method=conf_method,
                effect=EFFECT_RAN_VALS,
            )

        return TidyDesign(
            effects=requested,
            component=component,
            ran_pars_scale=rscale,
            ran_prefix=prefix,
            conf_int=conf_int,
            conf_level=conf_level,
            conf_method=conf_method,
        )
