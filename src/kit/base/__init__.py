"""Base types shared across the toolkit."""

from .errors import (
    ConfigurationError,
    DuplicateOperationError,
    RegistryError,
    ReservedNameError,
    ToolkitError,
)

__all__ = [
    "ToolkitError",
    "RegistryError",
    "DuplicateOperationError",
    "ConfigurationError",
    "ReservedNameError",
]
