"""
Core infrastructure for mixedtidy.

This module provides the shared abstractions used by the tidiers and the
per-family adapters.

Key components:
    protocols: ModelAdapter extraction protocol
    capabilities: Effect, scale, method and capability constants
    exceptions: Exception hierarchy
    validation: Input validators
"""

from mixedtidy.core.protocols import ModelAdapter
from mixedtidy.core.exceptions import (
    MixedTidyError,
    ValidationError,
    DimensionError,
    UnsupportedComponentError,
    UnsupportedMethodError,
    InvalidEffectTypeError,
    ScaleMismatchError,
    UnrecognizedScaleError,
    UnsupportedModelError,
    NumericalError,
    NotPositiveDefiniteError,
    CIUnavailableWarning,
)

__all__ = [
    # Protocols
    "ModelAdapter",
    # Exceptions
    "MixedTidyError",
    "ValidationError",
    "DimensionError",
    "UnsupportedComponentError",
    "UnsupportedMethodError",
    "InvalidEffectTypeError",
    "ScaleMismatchError",
    "UnrecognizedScaleError",
    "UnsupportedModelError",
    "NumericalError",
    "NotPositiveDefiniteError",
    # Warnings
    "CIUnavailableWarning",
]
