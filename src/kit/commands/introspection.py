"""
Introspection and Help Service

Read-only queries over the built registry, computed on demand:

- list_categories(): operations grouped by module category, plus one group
  holding every shortcut
- search_commands(): case-sensitive substring match on command names

HelpService renders those queries (and the full help screen) with Rich.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from kit.cli.styles import Styles
from kit.cli.styles import console as themed_console
from kit.cli.styles import err_console as themed_err_console

from .registry import CommandRegistry
from .types import Command, CommandKind, ExitStatus

SHORTCUT_GROUP = "Shortcuts"
DEFAULT_ICON = "📦"
DESCRIPTION_WIDTH = 45


@dataclass
class CategorySummary:
    """One group in the category listing."""

    name: str
    count: int = 0
    commands: list[str] = field(default_factory=list)
    description: str = ""
    icon: str = DEFAULT_ICON
    is_shortcut_group: bool = False


@dataclass(frozen=True)
class SearchMatch:
    name: str
    kind: CommandKind
    category: str
    description: str


def _category_of(command: Command) -> str:
    return command.category if command.kind is CommandKind.OPERATION else SHORTCUT_GROUP


def list_categories(
    registry: CommandRegistry, category_info: dict[str, dict[str, Any]] | None = None
) -> list[CategorySummary]:
    """Group registered operations by category, in discovery order.

    Shortcuts are not categorized; all of them are counted in a single trailing
    ``Shortcuts`` group (omitted when there are none).

    :param category_info: Optional ``{category: {"icon": ..., "description": ...}}``
    """
    category_info = category_info or {}
    groups: dict[str, CategorySummary] = {}
    shortcuts = CategorySummary(name=SHORTCUT_GROUP, icon="🚀", is_shortcut_group=True)

    for command in registry.get_all_commands():
        if command.kind.is_shortcut:
            target = shortcuts
        elif command.kind is CommandKind.OPERATION:
            name = command.category
            if name not in groups:
                info = category_info.get(name) or {}
                groups[name] = CategorySummary(
                    name=name,
                    description=info.get("description") or command.module.description,
                    icon=info.get("icon") or DEFAULT_ICON,
                )
            target = groups[name]
        else:
            continue
        target.count += 1
        target.commands.append(command.name)

    summaries = list(groups.values())
    if shortcuts.count:
        summaries.append(shortcuts)
    return summaries


def search_commands(keyword: str, registry: CommandRegistry) -> list[SearchMatch]:
    """Find visible commands whose name contains ``keyword`` (case-sensitive)."""
    return [
        SearchMatch(
            name=command.name,
            kind=command.kind,
            category=_category_of(command),
            description=command.description,
        )
        for command in registry.get_all_commands()
        if keyword in command.name
    ]


def _truncate(text: str, width: int = DESCRIPTION_WIDTH) -> str:
    return text if len(text) <= width else text[: width - 1].rstrip() + "…"


class HelpService:
    """Renders help, category and search output for a registry.

    :param registry: The registry to describe
    :param version: Toolkit version shown in the help header
    :param category_info: Icons and descriptions per category (from config)
    :param console: Output console (defaults to the themed stdout console)
    """

    def __init__(
        self,
        registry: CommandRegistry,
        version: str = "",
        category_info: dict[str, dict[str, Any]] | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        self.registry = registry
        self.version = version
        self.category_info = category_info or {}
        self._console = console
        self._err_console = err_console

    @property
    def console(self) -> Console:
        return self._console or themed_console

    @property
    def err_console(self) -> Console:
        return self._err_console or themed_err_console

    def _command_table(self, commands: list[Command], describe: Callable[[Command], str]) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("Command", style=Styles.SUCCESS, no_wrap=True, min_width=22)
        table.add_column("Description", style=Styles.DIM)
        for command in commands:
            table.add_row(escape(command.name), escape(_truncate(describe(command))))
        return table

    def _section(self, title: str) -> None:
        self.console.print(f"[{Styles.ACCENT}]{title}[/{Styles.ACCENT}]")
        self.console.print(Rule(style=Styles.BORDER_DIM))

    def show_help(self) -> int:
        """Print the category-grouped command listing."""
        title = "🛠️  Kit - Shell Toolkit"
        if self.version:
            title += f"  [dim]v{escape(self.version)}[/dim]"
        self.console.print()
        self.console.print(Panel(title, border_style=Styles.BORDER_ACCENT, expand=False))
        self.console.print()

        categories = list_categories(self.registry, self.category_info)
        operations = self.registry.get_commands_by_kind(CommandKind.OPERATION)
        for summary in categories:
            if summary.is_shortcut_group:
                continue
            self._section(f"{summary.icon} {escape(summary.name)}")
            members = [cmd for cmd in operations if cmd.category == summary.name]
            self.console.print(self._command_table(members, lambda cmd: cmd.description))
            self.console.print()

        navigation = self.registry.get_commands_by_kind(CommandKind.NAVIGATION)
        if navigation:
            self._section("🚀 Quick Navigation")
            self.console.print(self._command_table(navigation, lambda cmd: cmd.description))
            self.console.print()

        editors = self.registry.get_commands_by_kind(CommandKind.EDITOR)
        if editors:
            self._section("✏️  Editor Shortcuts")
            self.console.print(self._command_table(editors, lambda cmd: cmd.description))
            self.console.print()

        self._section("💡 Getting Started")
        hints = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        hints.add_column(style=Styles.COMMAND, no_wrap=True)
        hints.add_column()
        hints.add_row("kit <command> \\[args]", "Run a command")
        hints.add_row("kit <command> -h", "Show detailed help")
        hints.add_row("kit --search <term>", "Search available commands")
        hints.add_row("kit --list-categories", "List all categories")
        self.console.print(hints)
        self.console.print()

        operation_categories = [s for s in categories if not s.is_shortcut_group]
        self.console.print(Rule(style=Styles.BORDER_DIM))
        self.console.print(
            f"  {len(operations)} functions across {len(operation_categories)} categories • "
            f"{len(navigation)} shortcuts • {len(editors)} editors",
            style=Styles.DIM,
        )
        self.console.print()
        return ExitStatus.SUCCESS

    def show_categories(self) -> int:
        """Print every category with its description and command count."""
        self.console.print()
        self._section("📂 Available Categories")
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("Category", style=Styles.SUCCESS, no_wrap=True)
        table.add_column("Description", style=Styles.DIM)
        for summary in list_categories(self.registry, self.category_info):
            noun = "shortcuts" if summary.is_shortcut_group else "functions"
            description = f"{summary.description} " if summary.description else ""
            table.add_row(
                f"{summary.icon} {escape(summary.name)}",
                f"{escape(description)}({summary.count} {noun})",
            )
        self.console.print(table)
        self.console.print()
        return ExitStatus.SUCCESS

    def show_search(self, keyword: str | None) -> int:
        """Print commands whose name contains ``keyword``."""
        if not keyword:
            self.err_console.print("Error: --search requires a keyword", style=Styles.ERROR)
            return ExitStatus.USAGE_ERROR

        self.console.print()
        self._section(f"🔍 Search results for '{escape(keyword)}'")
        matches = search_commands(keyword, self.registry)
        if not matches:
            self.console.print(f"  No commands found matching '{escape(keyword)}'", style=Styles.DIM)
            self.console.print()
            return ExitStatus.SUCCESS

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("Command", style=Styles.SUCCESS, no_wrap=True, min_width=22)
        table.add_column("Category", style=Styles.DIM)
        for match in matches:
            table.add_row(escape(match.name), escape(match.category))
        self.console.print(table)
        self.console.print()
        self.console.print(Rule(style=Styles.BORDER_DIM))
        self.console.print(f"  Found {len(matches)} command(s)", style=Styles.DIM)
        self.console.print()
        return ExitStatus.SUCCESS
