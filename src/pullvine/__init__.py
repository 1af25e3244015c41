"""
Pullvine - lazy, composable async pipelines for Python.

Wrap an iterable, an async iterable, or a stepper object in a Pipeline, chain
map / filter / flat_map stages, and drive it with for_each, to_array or
reduce. Items are pulled one at a time and only when a terminal asks.
"""

from .pipeline import Pipeline, from_source
from .source import InvalidSourceKind, SourceKind, Step, classify, normalize

__version__ = "0.1.0"

__all__ = [
    "Pipeline",
    "from_source",
    "normalize",
    "classify",
    "SourceKind",
    "InvalidSourceKind",
    "Step",
]
