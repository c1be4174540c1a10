"""Tests for TidyDesign option validation."""

import dataclasses

import pytest

from mixedtidy.adapters import MixedFitAdapter
from mixedtidy.core.exceptions import (
    InvalidEffectTypeError,
    ScaleMismatchError,
    UnrecognizedScaleError,
    UnsupportedComponentError,
    UnsupportedMethodError,
    ValidationError,
)
from mixedtidy.tidiers import TidyDesign


@pytest.fixture
def adapter(sleepstudy_fit):
    return MixedFitAdapter(sleepstudy_fit)


@pytest.fixture
def profile_adapter(sleepstudy_fit):
    fit = dataclasses.replace(sleepstudy_fit, ci_methods=('Wald', 'profile'))
    return MixedFitAdapter(fit)


class TestDefaults:

    def test_defaults(self, adapter):
        design = TidyDesign.validate(adapter, ['fixed', 'ran_pars'])
        assert design.effects == ('fixed', 'ran_pars')
        assert design.component == 'cond'
        assert design.ran_pars_scale == 'sdcor'
        assert design.ran_prefix == ('sd', 'cor')
        assert design.conf_int is False
        assert design.conf_level == 0.95
        assert design.conf_method == 'Wald'

    def test_frozen(self, adapter):
        design = TidyDesign.validate(adapter, 'fixed')
        with pytest.raises(dataclasses.FrozenInstanceError):
            design.conf_level = 0.5


class TestScalesAndPrefix:

    def test_varcov_scale_switches_default_prefix(self, adapter):
        design = TidyDesign.validate(
            adapter, ['fixed', 'ran_pars'], scales=[None, 'varcov'],
        )
        assert design.ran_pars_scale == 'varcov'
        assert design.ran_prefix == ('var', 'cov')

    def test_none_scale_for_ran_pars_keeps_sdcor(self, adapter):
        design = TidyDesign.validate(adapter, ['ran_pars'], scales=[None])
        assert design.ran_pars_scale == 'sdcor'

    def test_prefix_disabled(self, adapter):
        design = TidyDesign.validate(adapter, 'ran_pars', ran_prefix=False)
        assert design.ran_prefix is None

    def test_custom_prefix(self, adapter):
        design = TidyDesign.validate(adapter, 'ran_pars', ran_prefix=['s', 'r'])
        assert design.ran_prefix == ('s', 'r')

    def test_unrecognized_scale(self, adapter):
        with pytest.raises(UnrecognizedScaleError, match="vcov"):
            TidyDesign.validate(adapter, ['ran_pars'], scales=['vcov'])


class TestRejections:

    def test_component(self, adapter):
        with pytest.raises(UnsupportedComponentError):
            TidyDesign.validate(adapter, 'fixed', component='zi')

    def test_unknown_method(self, adapter):
        with pytest.raises(UnsupportedMethodError, match="boot"):
            TidyDesign.validate(adapter, 'fixed', conf_method='boot')

    def test_method_not_supported_by_model(self, adapter):
        with pytest.raises(UnsupportedMethodError, match="mixedfit") as exc:
            TidyDesign.validate(adapter, 'fixed', conf_method='profile')
        assert exc.value.method == 'profile'

    def test_scale_mismatch(self, adapter):
        with pytest.raises(ScaleMismatchError):
            TidyDesign.validate(adapter, ['fixed', 'ran_pars'], scales=['sdcor'])

    def test_bogus_effect(self, adapter):
        with pytest.raises(InvalidEffectTypeError, match="bogus"):
            TidyDesign.validate(adapter, ['fixed', 'bogus'])

    def test_conf_level(self, adapter):
        with pytest.raises(ValidationError, match="conf_level"):
            TidyDesign.validate(adapter, 'fixed', conf_level=95)

    def test_non_wald_ran_vals_intervals(self, profile_adapter):
        with pytest.raises(UnsupportedMethodError) as exc:
            TidyDesign.validate(profile_adapter, ['fixed', 'ran_vals'],
                                conf_int=True, conf_method='profile')
        assert exc.value.effect == 'ran_vals'

    def test_non_wald_ran_vals_without_intervals_is_fine(self, profile_adapter):
        design = TidyDesign.validate(profile_adapter, 'ran_vals',
                                     conf_method='profile')
        assert design.conf_method == 'profile'


class TestCheckOrder:
    """The first failing check decides the error type."""

    def test_component_before_method(self, adapter):
        with pytest.raises(UnsupportedComponentError):
            TidyDesign.validate(adapter, 'fixed', component='zi',
                                conf_method='boot')

    def test_method_before_scales(self, adapter):
        with pytest.raises(UnsupportedMethodError):
            TidyDesign.validate(adapter, ['fixed', 'ran_pars'],
                                scales=['sdcor'], conf_method='boot')

    def test_scales_before_effects(self, adapter):
        with pytest.raises(ScaleMismatchError):
            TidyDesign.validate(adapter, ['fixed', 'bogus'], scales=['sdcor'])
