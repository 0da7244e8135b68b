"""Tests for the toolkit exception hierarchy."""

from kit.base.errors import (
    ConfigurationError,
    DuplicateOperationError,
    RegistryError,
    ReservedNameError,
    ToolkitError,
)


def test_hierarchy():
    assert issubclass(RegistryError, ToolkitError)
    assert issubclass(DuplicateOperationError, RegistryError)
    assert issubclass(ConfigurationError, ToolkitError)
    assert issubclass(ReservedNameError, ConfigurationError)


def test_duplicate_operation_message():
    error = DuplicateOperationError("deploy", "a.py", "b.py")
    assert str(error) == "Operation 'deploy' is declared by both a.py and b.py"
    assert (error.name, error.first_module, error.second_module) == ("deploy", "a.py", "b.py")


def test_reserved_name_message():
    error = ReservedNameError("help", "shortcuts.conf:3")
    assert "'help' is a reserved command name" in str(error)
    assert error.source == "shortcuts.conf:3"
