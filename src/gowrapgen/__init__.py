"""gowrapgen: render Go decorator boilerplate from interface method signatures."""

from __future__ import annotations

from . import errors
from .merge import merge_maps
from .signature import Interface, Method, Param

__all__ = [
    "Interface",
    "Method",
    "Param",
    "errors",
    "merge_maps",
]
