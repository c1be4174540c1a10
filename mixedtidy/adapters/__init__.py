"""
Per-family model adapters.

Public API:
    resolve_adapter():   wrap a fitted model in its registered adapter
    register_adapter():  class decorator registering an adapter by type tag
    MixedFit:            library-neutral fit container
    MixedFitAdapter:     adapter for MixedFit
    MixedLMAdapter:      adapter for statsmodels MixedLM results
"""

from mixedtidy.adapters.registry import (
    register_adapter,
    registered_tags,
    resolve_adapter,
    type_tag,
)
from mixedtidy.adapters.mixedfit import MixedFit, MixedFitAdapter
from mixedtidy.adapters.statsmodels_mixedlm import MixedLMAdapter

__all__ = [
    "register_adapter",
    "registered_tags",
    "resolve_adapter",
    "type_tag",
    "MixedFit",
    "MixedFitAdapter",
    "MixedLMAdapter",
]
