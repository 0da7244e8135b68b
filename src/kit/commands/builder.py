"""
Registry Construction

Builds the command registry once at startup from its three sources, in order:
meta-commands, scanned operations, then navigation and editor shortcuts.
Recoverable problems are collected as diagnostics in the returned
:class:`RegistryBuildReport`; fatal problems raise before any dispatch happens.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from kit import __version__
from kit.utils.config import as_bool, get_config_builder
from kit.utils.logger import get_logger

from .introspection import HelpService
from .meta import register_meta_commands
from .registry import CommandRegistry
from .scanner import scan_modules
from .shortcuts import compile_shortcuts, load_shortcut_file, resolve_shortcut_path
from .types import (
    Command,
    CommandKind,
    CommandModule,
    Diagnostic,
    ShortcutCompileResult,
    ShortcutKind,
)

logger = get_logger(name="REGISTRY", color="sky_blue2")

BUILTIN_FUNCTIONS_DIR = Path(__file__).resolve().parent.parent / "functions"


@dataclass
class RegistrySettings:
    """Where the registry's sources live and which shortcut sources are enabled."""

    functions_dirs: list[Path] = field(default_factory=lambda: [BUILTIN_FUNCTIONS_DIR])
    shortcuts_file: Path | None = None
    editors_file: Path | None = None
    navigation_enabled: bool = True
    editor_enabled: bool = True
    category_info: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config_path: str | Path | None = None) -> "RegistrySettings":
        """Create settings from the YAML configuration (built-in modules always come first)."""
        config = get_config_builder(config_path)
        extra_dirs = [Path(p).expanduser() for p in config.get("paths.functions_dirs", []) or []]
        functions_dirs = [BUILTIN_FUNCTIONS_DIR]
        functions_dirs += [d for d in extra_dirs if d.resolve() != BUILTIN_FUNCTIONS_DIR]

        def optional_path(key: str) -> Path | None:
            value = config.get(key)
            return Path(value).expanduser() if value else None

        return cls(
            functions_dirs=functions_dirs,
            shortcuts_file=optional_path("paths.shortcuts_file"),
            editors_file=optional_path("paths.editors_file"),
            navigation_enabled=as_bool(config.get("shortcuts.navigation.enabled", True)),
            editor_enabled=as_bool(config.get("shortcuts.editor.enabled", True)),
            category_info=config.get("categories", {}) or {},
        )


@dataclass
class RegistryBuildReport:
    """Everything produced while building the registry."""

    registry: CommandRegistry
    help_service: HelpService
    modules: list[CommandModule] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    shortcut_results: dict[ShortcutKind, ShortcutCompileResult] = field(default_factory=dict)
    shortcut_sources: dict[ShortcutKind, Path] = field(default_factory=dict)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]

    @property
    def has_problems(self) -> bool:
        return bool(self.diagnostics)

    def conflict_count(self, kind: ShortcutKind) -> int:
        result = self.shortcut_results.get(kind)
        return result.conflict_count if result else 0


def _compile_source(
    report: RegistryBuildReport, kind: ShortcutKind, path: Path | None, enabled: bool
) -> None:
    if not enabled or path is None:
        logger.debug(f"{kind.value.capitalize()} shortcuts disabled or not configured")
        return

    records, parse_diagnostics = load_shortcut_file(path)
    result = compile_shortcuts(records, kind, report.registry)
    # Parse problems are rejections of this source as well
    result.diagnostics[:0] = parse_diagnostics
    report.shortcut_results[kind] = result
    report.shortcut_sources[kind] = path
    report.diagnostics.extend(result.diagnostics)


def build_registry(
    settings: RegistrySettings | None = None, version: str = __version__
) -> RegistryBuildReport:
    """Build and freeze the registry.

    :param settings: Sources to load; defaults to :meth:`RegistrySettings.from_config`
    :param version: Version shown by the help screen
    :return: The frozen registry with its diagnostics
    :raises ReservedNameError: If a module or shortcut reuses a meta-command name
    :raises RegistryError: If operation modules are broken or declare duplicates
    """
    settings = settings or RegistrySettings.from_config()

    registry = CommandRegistry()
    help_service = HelpService(registry, version=version, category_info=settings.category_info)
    report = RegistryBuildReport(registry=registry, help_service=help_service)

    # 1. Reserved meta-commands
    register_meta_commands(registry, help_service)

    # 2. Operations, inserted as they are discovered
    for functions_dir in settings.functions_dirs:
        modules, operations, diagnostics = scan_modules(functions_dir)
        for operation in operations:
            registry.register_operation(operation)
        report.modules.extend(modules)
        report.diagnostics.extend(diagnostics)

    # 3-4. Shortcuts are the terminal layer
    _compile_source(report, ShortcutKind.NAVIGATION, settings.shortcuts_file, settings.navigation_enabled)
    _compile_source(report, ShortcutKind.EDITOR, settings.editors_file, settings.editor_enabled)

    registry.freeze()
    logger.debug(
        f"Registry ready: {len(registry)} command(s), {len(report.errors)} error(s), "
        f"{len(report.warnings)} warning(s)"
    )
    return report


def find_missing_targets(report: RegistryBuildReport) -> list[Command]:
    """Navigation shortcuts whose directory does not exist (yet)."""
    return [
        command
        for command in report.registry.get_commands_by_kind(CommandKind.NAVIGATION)
        if not resolve_shortcut_path(command.value).is_dir()
    ]
