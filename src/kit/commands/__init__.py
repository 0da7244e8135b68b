"""Command Registry and Safe Shortcut Compiler.

Builds the single namespace that ``kit`` dispatches against, from three
independent sources:

Architecture:
    - Meta-commands: reserved help/search/list-categories
    - Operations: discovered from self-describing operation modules
    - Shortcuts: synthesized from shortcuts.conf and editor.conf after validation
    - Dispatcher: resolves one handler per invocation
    - HelpService: category listing and keyword search on demand

Usage:
    from kit.commands import Dispatcher, build_registry

    report = build_registry()
    status = Dispatcher(report.registry, report.help_service).dispatch("mklink", args)
"""

from .builder import RegistryBuildReport, RegistrySettings, build_registry, find_missing_targets
from .dispatcher import Dispatcher
from .introspection import CategorySummary, HelpService, SearchMatch, list_categories, search_commands
from .meta import RESERVED_NAMES, register_meta_commands
from .registry import CommandRegistry
from .scanner import scan_modules
from .shortcuts import compile_shortcuts, load_shortcut_file, parse_shortcut_lines
from .types import (
    Command,
    CommandExecutionError,
    CommandKind,
    CommandModule,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSeverity,
    ExitStatus,
    ShortcutCompileResult,
    ShortcutKind,
    ShortcutRecord,
)
from .validation import is_safe_command_string, is_safe_path, is_valid_identifier

__all__ = [
    # Construction
    "build_registry",
    "find_missing_targets",
    "RegistrySettings",
    "RegistryBuildReport",
    "CommandRegistry",
    "register_meta_commands",
    "RESERVED_NAMES",
    "scan_modules",
    "parse_shortcut_lines",
    "load_shortcut_file",
    "compile_shortcuts",
    # Dispatch and introspection
    "Dispatcher",
    "HelpService",
    "CategorySummary",
    "SearchMatch",
    "list_categories",
    "search_commands",
    # Validation
    "is_valid_identifier",
    "is_safe_path",
    "is_safe_command_string",
    # Types
    "Command",
    "CommandKind",
    "CommandModule",
    "CommandExecutionError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSeverity",
    "ExitStatus",
    "ShortcutCompileResult",
    "ShortcutKind",
    "ShortcutRecord",
]
