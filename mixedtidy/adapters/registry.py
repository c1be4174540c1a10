"""
Adapter registry: maps a model object's type tag to its adapter class.

A type tag is the fully qualified name ('module.QualName') of a class.
Tags are matched against every class in the model's MRO, so an adapter
registered for a base results class also serves its subclasses, and
third-party classes can be registered without importing their library.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from mixedtidy.core.exceptions import UnsupportedModelError
from mixedtidy.core.protocols import ModelAdapter

A = TypeVar('A')

_REGISTRY: dict[str, Callable[[Any], ModelAdapter]] = {}


def type_tag(cls: type) -> str:
    """Fully qualified class name used as a registry key."""
    return f"{cls.__module__}.{cls.__qualname__}"


def register_adapter(*tags: str) -> Callable[[A], A]:
    """Class decorator registering an adapter for one or more type tags."""
    if not tags:
        raise ValueError("register_adapter requires at least one type tag")

    def decorator(adapter_cls: A) -> A:
        for tag in tags:
            _REGISTRY[tag] = adapter_cls
        return adapter_cls

    return decorator


def registered_tags() -> tuple[str, ...]:
    return tuple(sorted(_REGISTRY))


def resolve_adapter(model: Any) -> ModelAdapter:
    """Wrap a fitted model in the adapter registered for its type.

    An object that already implements ModelAdapter is returned as is.

    Raises:
        UnsupportedModelError: If no class in the model's MRO is registered.
    """
    if isinstance(model, ModelAdapter):
        return model
    for cls in type(model).__mro__:
        adapter_cls = _REGISTRY.get(type_tag(cls))
        if adapter_cls is not None:
            return adapter_cls(model)
    tag = type_tag(type(model))
    raise UnsupportedModelError(
        f"No tidier registered for model type {tag!r}; "
        f"registered types: {list(registered_tags())}",
        model_type=tag,
    )
