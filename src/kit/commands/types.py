"""
Type Definitions for the Command Registry

Foundational types shared by the scanner, the shortcut compiler, the registry,
the dispatcher and the help service.

Architecture:
    - ExitStatus: Process exit codes shared by every handler
    - CommandKind / ShortcutKind: Where a registered command came from
    - CommandModule: Metadata parsed from an operation module header
    - ShortcutRecord: One raw ``name|value|description`` config row
    - Diagnostic: A non-fatal registration decision worth reporting
    - Command: A registered, dispatchable command with its handler
    - CommandHandler: Protocol for handler callables
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Protocol

HELP_FLAGS = ("-h", "--help")


class ExitStatus(IntEnum):
    """Exit codes returned by handlers and by the ``kit`` process."""

    SUCCESS = 0
    RUNTIME_ERROR = 1
    USAGE_ERROR = 2
    NOT_FOUND = 127
    INTERRUPTED = 130


class CommandKind(Enum):
    """Source of a registered command.

    Kinds:
        META: Reserved built-ins (help, search, list-categories)
        OPERATION: Discovered from an operation module
        NAVIGATION: Generated from shortcuts.conf
        EDITOR: Generated from editor.conf
    """

    META = "meta"
    OPERATION = "operation"
    NAVIGATION = "navigation"
    EDITOR = "editor"

    @property
    def is_shortcut(self) -> bool:
        return self in (CommandKind.NAVIGATION, CommandKind.EDITOR)


class ShortcutKind(Enum):
    """The two declarative shortcut sources."""

    NAVIGATION = "navigation"
    EDITOR = "editor"

    @property
    def command_kind(self) -> CommandKind:
        return CommandKind(self.value)

    @property
    def label(self) -> str:
        """Human label used in diagnostics ("shortcut" / "editor")."""
        return "shortcut" if self is ShortcutKind.NAVIGATION else "editor"


class DiagnosticSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode(Enum):
    """Reasons a registration decision was reported."""

    MALFORMED_LINE = "malformed line"
    UNREADABLE_FILE = "unreadable file"
    INVALID_NAME = "invalid shortcut name"
    INVALID_TARGET = "invalid target"
    DUPLICATE_SHORTCUT = "duplicate shortcut"
    SHADOWED_COMMAND = "shadowed command"
    SKIPPED_MODULE = "skipped module"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal message describing a skipped or overridden registration.

    :param severity: ERROR for rejected records, WARNING for overrides and skipped modules
    :param code: Machine-readable reason
    :param message: Human-readable explanation
    :param source: Config file or module path the record came from
    :param line_number: 1-based line in ``source`` when known
    :param name: Command name involved, when known
    """

    severity: DiagnosticSeverity
    code: DiagnosticCode
    message: str
    source: str | None = None
    line_number: int | None = None
    name: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is DiagnosticSeverity.ERROR

    def __str__(self) -> str:
        location = ""
        if self.source:
            location = f"{Path(self.source).name}"
            if self.line_number is not None:
                location += f":{self.line_number}"
            location += ": "
        return f"{location}{self.message}"


@dataclass(frozen=True)
class CommandModule:
    """Metadata parsed from the header of one operation module.

    :param path: Module file path (identity)
    :param category: Display category, e.g. "System Utilities"
    :param description: One-line module description
    :param dependencies: Free-text external tool names (descriptive only)
    :param operation_names: Operation names in declaration order
    """

    path: Path
    category: str
    description: str = ""
    dependencies: tuple[str, ...] = ()
    operation_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ShortcutRecord:
    """One raw row from shortcuts.conf or editor.conf."""

    name: str
    value: str
    description: str
    source: str | None = None
    line_number: int | None = None


class CommandHandler(Protocol):
    """Handler contract: take the argument list, return an exit status."""

    def __call__(self, args: list[str]) -> int | None: ...


@dataclass
class Command:
    """A dispatchable command stored in the registry.

    Operations, compiled shortcuts and meta-commands all share this shape;
    ``kind`` records which layer produced it.

    :param name: Unique registry key
    :param kind: Source layer of the command
    :param description: Short description for listings
    :param handler: Callable invoked by the dispatcher
    :param help_text: Usage/description/examples text, for introspection only
    :param module: Owning module for operations
    :param value: Sanitized path or program string for shortcuts
    :param hidden: Excluded from listings and search (meta-commands)

    Examples:
        Operation discovered from a module::

            Command(
                name="mklink",
                kind=CommandKind.OPERATION,
                description="Create a symbolic link",
                handler=mklink,
                module=system_module,
            )
    """

    name: str
    kind: CommandKind
    description: str
    handler: CommandHandler
    help_text: str | None = None
    module: CommandModule | None = None
    value: str | None = None
    hidden: bool = False

    def __post_init__(self):
        if self.help_text is None:
            self.help_text = self.description

    @property
    def category(self) -> str | None:
        return self.module.category if self.module else None


@dataclass
class ShortcutCompileResult:
    """Outcome of compiling one shortcut source."""

    kind: ShortcutKind
    compiled: list[Command] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def conflict_count(self) -> int:
        """Number of rejected records (every error-level diagnostic)."""
        return sum(1 for d in self.diagnostics if d.is_error)


class CommandExecutionError(Exception):
    """Raised by a handler for a runtime failure the dispatcher should report."""

    def __init__(
        self,
        message: str,
        command_name: str,
        suggestion: str | None = None,
        status: int = ExitStatus.RUNTIME_ERROR,
    ):
        super().__init__(message)
        self.command_name = command_name
        self.suggestion = suggestion
        self.status = status
