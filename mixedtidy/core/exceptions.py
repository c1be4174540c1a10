"""
Exception hierarchy for mixedtidy.

All exceptions inherit from MixedTidyError to allow catching any
library-specific error. Option errors inherit from ValidationError and are
raised before any table is computed.

Design principles:
    - Exceptions carry the offending values as attributes
    - Error messages name the offending value and the accepted ones
    - Never catch and re-raise with less information
"""


class MixedTidyError(Exception):
    """Base exception for all mixedtidy errors."""
    pass


class ValidationError(MixedTidyError):
    """
    Input validation failed.

    Raised when user-provided options or model contents fail validation.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when, e.g., a conditional variance array does not match the
    shape of its conditional modes, or augment data and fitted values
    differ in length.
    """
    pass


class UnsupportedComponentError(ValidationError):
    """
    Requested model component is not supported.

    Attributes:
        component: The component(s) that were requested
    """

    def __init__(self, message: str, component: object = None):
        super().__init__(message)
        self.component = component


class UnsupportedMethodError(ValidationError):
    """
    Confidence interval method is not available.

    Raised when the model family does not support the requested method, or
    when the method is not implemented for an effect type that cannot
    degrade to null intervals.

    Attributes:
        method: The requested interval method
        effect: Effect type the method was requested for, or None if the
            method is rejected for the whole model
    """

    def __init__(
        self,
        message: str,
        method: str | None = None,
        effect: str | None = None,
    ):
        super().__init__(message)
        self.method = method
        self.effect = effect


class InvalidEffectTypeError(ValidationError):
    """
    Unknown effect type name.

    Attributes:
        effects: The unrecognized effect names
        valid: The accepted effect names
    """

    def __init__(
        self,
        message: str,
        effects: tuple[str, ...] = (),
        valid: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.effects = effects
        self.valid = valid


class ScaleMismatchError(ValidationError):
    """
    Explicit scales do not line up with the requested effects.

    Attributes:
        n_scales: Number of scales given
        n_effects: Number of effects requested
    """

    def __init__(self, message: str, n_scales: int, n_effects: int):
        super().__init__(message)
        self.n_scales = n_scales
        self.n_effects = n_effects


class UnrecognizedScaleError(ValidationError):
    """
    Scale name outside the supported set.

    Attributes:
        scale: The unrecognized scale
    """

    def __init__(self, message: str, scale: object = None):
        super().__init__(message)
        self.scale = scale


class UnsupportedModelError(ValidationError):
    """
    No adapter is registered for the model's type.

    Attributes:
        model_type: Type tag of the model object
    """

    def __init__(self, message: str, model_type: str | None = None):
        super().__init__(message)
        self.model_type = model_type


class NumericalError(MixedTidyError):
    """
    Numerical content of a model is unusable.

    Base class for errors arising from invalid numbers in extracted results.
    """
    pass


class NotPositiveDefiniteError(NumericalError):
    """
    Covariance matrix is not positive (semi-)definite.

    Raised when a random-effect covariance matrix has a negative variance
    on its diagonal, so standard deviations cannot be derived.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        min_eigenvalue: Smallest diagonal entry or eigenvalue, if computed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        min_eigenvalue: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.min_eigenvalue = min_eigenvalue


class CIUnavailableWarning(UserWarning):
    """Confidence intervals could not be computed for an effect type."""
    pass
