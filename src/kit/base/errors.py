"""Toolkit exception hierarchy.

Fatal problems raised while the command registry is being built. Recoverable
problems (bad shortcut lines, unsafe values, duplicates) are not exceptions;
they are reported as :class:`~kit.commands.types.Diagnostic` records instead.
"""


class ToolkitError(Exception):
    """Base exception for all toolkit-related errors.

    This is the root exception class for all custom exceptions within
    Kit. It provides a common base for toolkit-specific error handling.
    """

    pass


class RegistryError(ToolkitError):
    """Exception for registry-related errors.

    Raised when an operation module cannot be loaded, declares an operation it
    does not define, or when the registry is modified after it was frozen.
    """

    pass


class DuplicateOperationError(RegistryError):
    """Two operation modules declare the same operation name."""

    def __init__(self, name: str, first_module: str, second_module: str):
        super().__init__(
            f"Operation '{name}' is declared by both {first_module} and {second_module}"
        )
        self.name = name
        self.first_module = first_module
        self.second_module = second_module


class ConfigurationError(ToolkitError):
    """Exception for configuration-related errors.

    Raised when configuration files are invalid or contain values that prevent
    the toolkit from starting.
    """

    pass


class ReservedNameError(ConfigurationError):
    """A module operation or shortcut tries to reuse a meta-command name."""

    def __init__(self, name: str, source: str):
        super().__init__(
            f"'{name}' is a reserved command name and cannot be redefined (declared in {source})"
        )
        self.name = name
        self.source = source
