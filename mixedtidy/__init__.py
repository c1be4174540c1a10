"""
mixedtidy: tidy tables from fitted mixed-effects models.

Turns the nested output of mixed model fits into three regular pandas
shapes: one row per estimated quantity (tidy), per observation (augment)
or per model (glance).

Submodules:
    tidiers: tidy(), augment(), glance() and the reshaping engine
    adapters: per-family extraction (MixedFit, statsmodels MixedLM)
    core: protocols, constants, exceptions, validation
"""

__version__ = "0.1.0"

from mixedtidy import adapters
from mixedtidy.adapters import MixedFit, register_adapter
from mixedtidy.tidiers import tidy, augment, glance

__all__ = [
    "__version__",
    "adapters",
    "MixedFit",
    "register_adapter",
    "tidy",
    "augment",
    "glance",
]
