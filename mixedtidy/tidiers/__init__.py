"""
Tidiers for mixed-effects models.

Public API:
    tidy():       one row per estimated quantity
    augment():    one row per observation
    glance():     one row per model
    TidyDesign:   validated tidy() options
"""

from mixedtidy.tidiers.solvers import tidy, augment, glance
from mixedtidy.tidiers.design import TidyDesign

__all__ = [
    "tidy",
    "augment",
    "glance",
    "TidyDesign",
]
