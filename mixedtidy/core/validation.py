"""
Input validation utilities for mixedtidy.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mixedtidy.core.capabilities import (
    ALL_CI_METHODS,
    ALL_EFFECTS,
    ALL_SCALES,
    COMPONENT_COND,
)
from mixedtidy.core.exceptions import (
    DimensionError,
    InvalidEffectTypeError,
    ScaleMismatchError,
    UnrecognizedScaleError,
    UnsupportedComponentError,
    UnsupportedMethodError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating point numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_square(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is a square 2D matrix.

    Raises:
        DimensionError: If array is not 2D or not square
    """
    check_ndim(array, 2, name)
    if array.shape[0] != array.shape[1]:
        raise DimensionError(
            f"{name}: expected square matrix, got shape {array.shape}"
        )


def check_consistent_length(
    *arrays: Any,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays (or frames) have the same length.

    Args:
        *arrays: Objects supporting len()
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_conf_level(conf_level: float, name: str = 'conf_level') -> float:
    """
    Verify a confidence level lies strictly between 0 and 1.

    Raises:
        ValidationError: If the level is not a number in (0, 1)
    """
    try:
        level = float(conf_level)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a number, got {conf_level!r}") from e
    if not 0.0 < level < 1.0:
        raise ValidationError(f"{name}: must be in (0, 1), got {level}")
    return level


def check_component(component: str | Sequence[str]) -> str:
    """
    Verify only the conditional component is requested.

    Raises:
        UnsupportedComponentError: If anything other than 'cond' is requested
    """
    if isinstance(component, str):
        requested = (component,)
    else:
        requested = tuple(component)
    if len(requested) != 1 or requested[0] != COMPONENT_COND:
        raise UnsupportedComponentError(
            f"component: only {COMPONENT_COND!r} is supported, got {requested!r}",
            component=requested,
        )
    return COMPONENT_COND


def check_conf_method(method: str) -> str:
    """
    Verify a confidence interval method name is known.

    Whether a model family supports the method is checked separately,
    against the adapter's capabilities.

    Raises:
        UnsupportedMethodError: If the method name is unknown
    """
    if method not in ALL_CI_METHODS:
        raise UnsupportedMethodError(
            f"conf_method: unknown method {method!r}, "
            f"expected one of {sorted(ALL_CI_METHODS)}",
            method=method,
        )
    return method


def check_effects(effects: str | Sequence[str]) -> tuple[str, ...]:
    """
    Normalize and verify requested effect names.

    Duplicates are dropped, keeping first occurrence.

    Raises:
        ValidationError: If no effect is requested
        InvalidEffectTypeError: If any name is outside the supported set
    """
    if isinstance(effects, str):
        effects = (effects,)
    requested = tuple(dict.fromkeys(effects))
    if not requested:
        raise ValidationError("effects: at least one effect type required")
    unknown = tuple(e for e in requested if e not in ALL_EFFECTS)
    if unknown:
        raise InvalidEffectTypeError(
            f"effects: unknown effect type(s) {', '.join(map(repr, unknown))}; "
            f"expected any of {list(ALL_EFFECTS)}",
            effects=unknown,
            valid=ALL_EFFECTS,
        )
    return requested


def check_scales_length(
    scales: Sequence[str | None] | None,
    effects: str | Sequence[str],
) -> None:
    """
    Verify explicit scales provide one entry per requested effect.

    Raises:
        ScaleMismatchError: If the lengths differ
    """
    if scales is None:
        return
    if isinstance(effects, str):
        effects = (effects,)
    if isinstance(scales, str):
        scales = (scales,)
    if len(scales) != len(effects):
        raise ScaleMismatchError(
            f"scales: if scales are specified, values (or None) must be "
            f"provided for each effect; got {len(scales)} scale(s) for "
            f"{len(effects)} effect(s)",
            n_scales=len(scales),
            n_effects=len(effects),
        )


def check_scale(scale: str | None, name: str = 'scale') -> str | None:
    """
    Verify a scale is None or a recognized scale name.

    Raises:
        UnrecognizedScaleError: If the scale is outside the supported set
    """
    if scale is not None and scale not in ALL_SCALES:
        raise UnrecognizedScaleError(
            f"{name}: unrecognized scale {scale!r}, "
            f"expected one of {sorted(ALL_SCALES)}",
            scale=scale,
        )
    return scale


def check_ran_prefix(
    ran_prefix: Sequence[str] | bool | None,
) -> tuple[str, str] | bool | None:
    """
    Verify a random-effect term prefix pair.

    None selects the scale's default and False disables prefixing.

    Raises:
        ValidationError: If the prefix is not a pair of strings
    """
    if ran_prefix is None or ran_prefix is False:
        return ran_prefix
    if isinstance(ran_prefix, str):
        raise ValidationError(
            f"ran_prefix: expected a pair of strings, got {ran_prefix!r}"
        )
    pair = tuple(ran_prefix)
    if len(pair) != 2 or not all(isinstance(p, str) for p in pair):
        raise ValidationError(
            f"ran_prefix: expected a pair of strings, got {ran_prefix!r}"
        )
    return pair
