"""Domain-specific errors for gowrapgen."""

from __future__ import annotations


class GoWrapGenError(Exception):
    """Base error for gowrapgen."""


class DocumentError(GoWrapGenError):
    """Raised when a JSON/MessagePack document cannot be read or decoded."""


class DescriptionError(GoWrapGenError):
    """Raised when an interface description has an unusable top-level shape."""


class ConfigError(GoWrapGenError):
    """Raised when a configuration section holds values the generator cannot use."""


class GenerateError(GoWrapGenError):
    """Raised when a decorator cannot be generated for the requested options."""
