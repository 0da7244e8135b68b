"""
Shortcut Compiler

Turns declarative ``name|value|description`` records into registry commands.
Two independent sources are compiled the same way:

- shortcuts.conf (navigation): ``build|~/work/build|Build dir``
- editor.conf (editor): ``code|code --reuse-window|VS Code``

Every record is validated before anything is generated for it, and handlers
are closures over the validated value. Nothing is ever assembled into a shell
string: editor programs are split with :mod:`shlex` and executed as an argv
list.

Rejected records (malformed line, invalid name, unsafe value, duplicate name
within the same source) become error diagnostics and are skipped. A shortcut
that takes over an operation or a shortcut of the other kind is compiled
anyway and reported as a warning.
"""

import os
import shlex
import subprocess
from collections.abc import Iterable
from pathlib import Path

from rich.columns import Columns
from rich.markup import escape
from rich.text import Text

from kit.base.errors import ReservedNameError
from kit.cli.styles import Styles, console, err_console
from kit.utils.logger import get_logger

from .registry import CommandRegistry
from .types import (
    HELP_FLAGS,
    Command,
    CommandKind,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSeverity,
    ExitStatus,
    ShortcutCompileResult,
    ShortcutKind,
    ShortcutRecord,
)
from .validation import is_safe_command_string, is_safe_path, is_valid_identifier

logger = get_logger("shortcuts")

FIELD_SEPARATOR = "|"
FIELD_COUNT = 3
HOME_PREFIX = "~/"
CURRENT_DIR = "."
REPLACEMENT_CHAR = "\ufffd"


# ============================================================================
# PARSING
# ============================================================================


def _error(
    code: DiagnosticCode, message: str, source: str | None, line_number: int | None, name=None
) -> Diagnostic:
    # Reported once by the caller; the log line is only for --debug traces
    logger.debug(escape(message))
    return Diagnostic(DiagnosticSeverity.ERROR, code, message, source, line_number, name)


def parse_shortcut_lines(
    lines: Iterable[str], source: str | None = None
) -> tuple[list[ShortcutRecord], list[Diagnostic]]:
    """Parse config lines into records.

    Blank lines and lines starting with ``#`` are ignored. Every other line must
    have exactly three ``|``-separated fields. Lines carrying the U+FFFD
    replacement character (bytes that did not decode) are rejected.
    """
    records: list[ShortcutRecord] = []
    diagnostics: list[Diagnostic] = []

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if REPLACEMENT_CHAR in line:
            diagnostics.append(
                _error(
                    DiagnosticCode.MALFORMED_LINE,
                    f"Malformed line {line_number}: not valid UTF-8",
                    source,
                    line_number,
                )
            )
            continue

        fields = line.split(FIELD_SEPARATOR)
        if len(fields) != FIELD_COUNT:
            diagnostics.append(
                _error(
                    DiagnosticCode.MALFORMED_LINE,
                    f"Malformed line {line_number}: expected 'name|value|description', "
                    f"got {len(fields)} field(s)",
                    source,
                    line_number,
                )
            )
            continue

        name, value, description = (field.strip() for field in fields)
        records.append(ShortcutRecord(name, value, description, source, line_number))

    return records, diagnostics


def load_shortcut_file(path: str | Path) -> tuple[list[ShortcutRecord], list[Diagnostic]]:
    """Read and parse a shortcut config file; a missing file yields no records.

    Undecodable bytes and read failures become error diagnostics, so one bad
    file never keeps the rest of the toolkit from loading.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        logger.debug(f"No shortcut file at {path}")
        return [], []

    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return parse_shortcut_lines(f, source=str(path))
    except OSError as e:
        return [], [_error(DiagnosticCode.UNREADABLE_FILE, f"Cannot read {path}: {e}", str(path), None)]


# ============================================================================
# HANDLER SYNTHESIS
# ============================================================================


def resolve_shortcut_path(value: str) -> Path:
    """Expand the ``~/`` home shorthand of a validated navigation value."""
    if value.startswith(HOME_PREFIX):
        return Path.home() / value[len(HOME_PREFIX):]
    return Path(value)


def list_directory(path: Path) -> None:
    """Print the entries of ``path`` in columns, directories marked with ``/``."""
    entries = sorted(path.iterdir(), key=lambda p: p.name.lower())
    if not entries:
        console.print("(empty)", style=Styles.DIM)
        return
    renderables = [
        Text(f"{entry.name}/", style=Styles.ACCENT) if entry.is_dir() else Text(entry.name)
        for entry in entries
    ]
    console.print(Columns(renderables, padding=(0, 2)))


def make_navigation_handler(name: str, value: str, description: str = ""):
    """Create the handler for a navigation shortcut.

    The handler changes the working directory to the resolved target and lists
    it. A missing target is a runtime error, not an exception.
    """

    def navigate(args: list[str]) -> int:
        if args and args[0] in HELP_FLAGS:
            console.print(f"Usage: kit {name}", markup=False)
            console.print(f"Description: Go to {value} and list its contents", markup=False)
            if description:
                console.print(f"Shortcut: {description}", markup=False)
            return ExitStatus.SUCCESS

        target = resolve_shortcut_path(value)
        if not target.is_dir():
            problem = "is not a directory" if target.exists() else "does not exist"
            err_console.print(f"Error: '{escape(str(target))}' {problem}", style=Styles.ERROR)
            return ExitStatus.RUNTIME_ERROR

        try:
            os.chdir(target)
            list_directory(target)
        except OSError as e:
            err_console.print(f"Error: cannot open '{escape(str(target))}': {escape(str(e))}", style=Styles.ERROR)
            return ExitStatus.RUNTIME_ERROR
        return ExitStatus.SUCCESS

    navigate.__name__ = name
    navigate.__doc__ = f"Usage: kit {name}\nDescription: {description or f'Go to {value}'}"
    return navigate


def make_editor_handler(name: str, program: list[str], description: str = ""):
    """Create the handler for an editor shortcut.

    ``program`` is the already tokenized invocation; the target is appended as
    one more argv element.
    """
    label = description or " ".join(program)

    def open_in_editor(args: list[str]) -> int:
        if args and args[0] in HELP_FLAGS:
            console.print(f"Usage: kit {name} <file|folder>", markup=False)
            console.print(f"Description: Open file or folder with {label}", markup=False)
            console.print("")
            console.print("Examples:")
            console.print(f"  kit {name} myfile.md", markup=False)
            console.print(f"  kit {name} .", markup=False)
            return ExitStatus.SUCCESS

        if not args or not args[0]:
            err_console.print("Error: Missing file or folder path", style=Styles.ERROR)
            err_console.print(f"Usage: kit {name} <file|folder>", markup=False)
            return ExitStatus.USAGE_ERROR

        target = args[0]
        if target != CURRENT_DIR and not os.path.exists(target):
            err_console.print(f"Error: '{escape(target)}' does not exist", style=Styles.ERROR)
            return ExitStatus.RUNTIME_ERROR

        try:
            completed = subprocess.run([*program, target], check=False)
        except OSError as e:
            err_console.print(
                f"Error: cannot run '{escape(program[0])}': {escape(str(e))}", style=Styles.ERROR
            )
            return ExitStatus.RUNTIME_ERROR
        return completed.returncode

    open_in_editor.__name__ = name
    open_in_editor.__doc__ = f"Usage: kit {name} <file|folder>\nDescription: Open file or folder with {label}"
    return open_in_editor


# ============================================================================
# COMPILATION
# ============================================================================


def _validate_value(record: ShortcutRecord, kind: ShortcutKind) -> list[str] | str | None:
    """Return the sanitized value (argv for editors), or None if unsafe."""
    if kind is ShortcutKind.NAVIGATION:
        return record.value if is_safe_path(record.value) else None

    if not is_safe_command_string(record.value):
        return None
    try:
        argv = shlex.split(record.value)
    except ValueError:
        return None
    return argv or None


def compile_shortcut(record: ShortcutRecord, kind: ShortcutKind, sanitized) -> Command:
    """Synthesize the command for one validated record."""
    if kind is ShortcutKind.NAVIGATION:
        handler = make_navigation_handler(record.name, sanitized, record.description)
    else:
        handler = make_editor_handler(record.name, sanitized, record.description)

    return Command(
        name=record.name,
        kind=kind.command_kind,
        description=record.description,
        handler=handler,
        help_text=handler.__doc__,
        value=record.value,
    )


def compile_shortcuts(
    records: Iterable[ShortcutRecord], kind: ShortcutKind, registry: CommandRegistry
) -> ShortcutCompileResult:
    """Validate ``records`` and register a command for each acceptable one.

    Records are processed in file order; the first record with a given name
    wins and later ones are rejected.

    :raises ReservedNameError: If a record uses a meta-command name
    """
    result = ShortcutCompileResult(kind=kind)
    seen: set[str] = set()

    for record in records:
        where = (record.source, record.line_number)

        if not is_valid_identifier(record.name):
            result.diagnostics.append(
                _error(
                    DiagnosticCode.INVALID_NAME,
                    f"Invalid {kind.label} name '{record.name}'. Must be letters, digits or "
                    "underscore, not starting with a digit.",
                    *where,
                    name=record.name,
                )
            )
            continue

        sanitized = _validate_value(record, kind)
        if sanitized is None:
            result.diagnostics.append(
                _error(
                    DiagnosticCode.INVALID_TARGET,
                    f"Invalid target '{record.value}' for {kind.label} '{record.name}'. "
                    "Value contains unsafe characters.",
                    *where,
                    name=record.name,
                )
            )
            continue

        if record.name in seen:
            result.diagnostics.append(
                _error(
                    DiagnosticCode.DUPLICATE_SHORTCUT,
                    f"Duplicate {kind.label} '{record.name}'",
                    *where,
                    name=record.name,
                )
            )
            continue

        existing = registry.get_command(record.name)
        if existing is not None and existing.kind is CommandKind.META:
            raise ReservedNameError(record.name, f"{record.source}:{record.line_number}")
        if existing is not None:
            message = (
                f"{kind.label.capitalize()} '{record.name}' conflicts with existing "
                f"{existing.kind.value} - prefer {kind.label} behavior"
            )
            logger.debug(escape(message))
            result.diagnostics.append(
                Diagnostic(
                    DiagnosticSeverity.WARNING,
                    DiagnosticCode.SHADOWED_COMMAND,
                    message,
                    *where,
                    name=record.name,
                )
            )

        command = compile_shortcut(record, kind, sanitized)
        registry.register_shortcut(command)
        seen.add(record.name)
        result.compiled.append(command)

    if result.compiled:
        logger.debug(f"Compiled {len(result.compiled)} {kind.value} shortcut(s)")
    return result
