"""
Operation Module Scanner

Discovers operation modules in a directory and turns their declared operations
into registry commands. An operation module is a Python file whose leading
comment block carries four fixed-prefix fields::

    # listing.py - Enhanced file listing utilities
    # Category: File Listing
    # Description: File listing utilities using lsd
    # Dependencies: lsd
    # Functions: list-files, list-all

Each listed operation must be defined in the module as a callable taking the
argument list; hyphens in the operation name map to underscores in the
function name (``list-files`` -> ``list_files``).

Module source is trusted, so operation names are not run through the shortcut
identifier grammar. Problems in trusted source fail loudly with
:class:`~kit.base.errors.RegistryError`; a module without a category or
operation list is merely skipped.
"""

import hashlib
import importlib.util
import inspect
import sys
from pathlib import Path

from kit.base.errors import RegistryError
from kit.utils.logger import get_logger

from .types import (
    Command,
    CommandKind,
    CommandModule,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSeverity,
)

logger = get_logger("scanner")

HEADER_FIELDS = {
    "category": "# Category:",
    "description": "# Description:",
    "dependencies": "# Dependencies:",
    "functions": "# Functions:",
}

# Import name prefix keeps discovered modules out of the kit namespace; the
# directory digest keeps same-named modules from different directories apart
_MODULE_PREFIX = "kit_operations_"


def read_module_header(path: Path) -> dict[str, str]:
    """Extract the header fields from the leading comment block of ``path``.

    Scanning stops at the first line that is neither blank nor a comment. The
    first occurrence of each field wins.
    """
    fields: dict[str, str] = {}
    with open(path, encoding="utf-8") as f:
        for raw_line in f:
            line = raw_line.strip()
            if not line:
                continue
            if not line.startswith("#"):
                break
            for key, prefix in HEADER_FIELDS.items():
                if key not in fields and line.startswith(prefix):
                    fields[key] = line[len(prefix):].strip()
    return fields


def _split_list(text: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in text.split(",") if item.strip())


def parse_dependencies(text: str) -> tuple[str, ...]:
    """Split a ``Dependencies:`` field, dropping ``none (...)`` placeholders."""
    return tuple(dep for dep in _split_list(text) if not dep.lower().startswith("none"))


def parse_module(path: Path) -> CommandModule | None:
    """Build a :class:`CommandModule` from a file header, or None if required fields are missing."""
    fields = read_module_header(path)
    category = fields.get("category", "")
    operation_names = _split_list(fields.get("functions", ""))

    if not category or not operation_names:
        return None

    return CommandModule(
        path=path,
        category=category,
        description=fields.get("description", ""),
        dependencies=parse_dependencies(fields.get("dependencies", "")),
        operation_names=operation_names,
    )


def handler_name(operation_name: str) -> str:
    """Map an operation name to the function that implements it."""
    return operation_name.replace("-", "_")


def short_description(help_text: str | None, limit: int = 60) -> str:
    """Pick a one-line description out of self-declared help text.

    Prefers a ``Description:`` line, falling back to the first non-usage line.
    """
    if not help_text:
        return ""
    lines = [line.strip() for line in help_text.splitlines() if line.strip()]
    for line in lines:
        if line.startswith("Description:"):
            text = line[len("Description:"):].strip()
            break
    else:
        text = next((line for line in lines if not line.startswith("Usage:")), lines[0])
    return text if len(text) <= limit else text[: limit - 1].rstrip() + "…"


def module_import_name(path: Path) -> str:
    """``sys.modules`` key for the operation module at ``path``."""
    digest = hashlib.sha1(str(path.resolve().parent).encode("utf-8")).hexdigest()[:8]
    return f"{_MODULE_PREFIX}{digest}_{path.stem.replace('-', '_')}"


def load_module(module: CommandModule):
    """Import an operation module from its file path."""
    import_name = module_import_name(module.path)
    try:
        spec = importlib.util.spec_from_file_location(import_name, module.path)
        if spec is None or spec.loader is None:
            raise RegistryError(f"Could not create module spec for {module.path}")
        py_module = importlib.util.module_from_spec(spec)
        sys.modules[import_name] = py_module
        spec.loader.exec_module(py_module)
    except RegistryError:
        raise
    except Exception as e:
        sys.modules.pop(import_name, None)
        raise RegistryError(f"Failed to load operation module {module.path}: {e}") from e

    logger.debug(f"Loaded operation module {module.path.name}")
    return py_module


def resolve_operations(module: CommandModule, py_module) -> list[Command]:
    """Resolve every declared operation of ``module`` to its handler."""
    operations = []
    for name in module.operation_names:
        handler = getattr(py_module, handler_name(name), None)
        if handler is None or not callable(handler):
            raise RegistryError(
                f"{module.path.name} declares operation '{name}' "
                f"but defines no callable '{handler_name(name)}'"
            )
        help_text = inspect.getdoc(handler) or ""
        operations.append(
            Command(
                name=name,
                kind=CommandKind.OPERATION,
                description=short_description(help_text) or module.description,
                handler=handler,
                help_text=help_text or None,
                module=module,
            )
        )
    return operations


def scan_modules(
    module_dir: str | Path,
) -> tuple[list[CommandModule], list[Command], list[Diagnostic]]:
    """Scan ``module_dir`` for operation modules.

    Files are visited in sorted order so discovery order is stable; files whose
    name starts with an underscore are private helpers and are ignored.

    :param module_dir: Directory containing ``*.py`` operation modules
    :return: (modules, operations, diagnostics) - operations in discovery order
    :raises RegistryError: If a module cannot be imported or lacks a declared handler
    """
    module_dir = Path(module_dir)
    modules: list[CommandModule] = []
    operations: list[Command] = []
    diagnostics: list[Diagnostic] = []

    if not module_dir.is_dir():
        logger.debug(f"Operation directory {module_dir} does not exist, nothing to scan")
        return modules, operations, diagnostics

    for path in sorted(module_dir.glob("*.py")):
        if path.name.startswith("_"):
            continue

        module = parse_module(path)
        if module is None:
            message = f"Skipping {path.name}: missing '# Category:' or '# Functions:' header"
            logger.debug(message)
            diagnostics.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    code=DiagnosticCode.SKIPPED_MODULE,
                    message=message,
                    source=str(path),
                )
            )
            continue

        py_module = load_module(module)
        modules.append(module)
        operations.extend(resolve_operations(module, py_module))

    logger.debug(f"Scanned {len(modules)} module(s), {len(operations)} operation(s) in {module_dir}")
    return modules, operations, diagnostics
