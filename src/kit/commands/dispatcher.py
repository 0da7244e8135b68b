"""
Command Dispatcher

Resolves a command name to exactly one handler in the frozen registry and runs
it. The dispatcher does no argument validation of its own; handlers own their
contracts and their exit statuses are returned unchanged.
"""

import difflib
from collections.abc import Sequence

from rich.markup import escape

from kit.cli.styles import Styles, err_console

from .introspection import HelpService
from .registry import CommandRegistry
from .types import HELP_FLAGS, CommandExecutionError, ExitStatus


class Dispatcher:
    """Dispatch command names against a registry.

    :param registry: Registry built by :func:`~kit.commands.builder.build_registry`
    :param help_service: Service used for the empty-name / help-flag case

    Examples:
        Dispatching a command::

            dispatcher = Dispatcher(report.registry, help_service)
            status = dispatcher.dispatch("mklink", ["target", "link"])
    """

    def __init__(self, registry: CommandRegistry, help_service: HelpService | None = None):
        self.registry = registry
        self.help_service = help_service or HelpService(registry)

    def suggest(self, command_name: str) -> str | None:
        """Closest visible command name, if any is reasonably similar."""
        names = [cmd.name for cmd in self.registry.get_all_commands()]
        matches = difflib.get_close_matches(command_name, names, n=1, cutoff=0.75)
        return matches[0] if matches else None

    def dispatch(self, command_name: str | None, args: Sequence[str] = ()) -> int:
        """Run ``command_name`` with ``args`` and return its exit status.

        An empty name or a help flag shows the help listing instead of a lookup.
        Unknown names return :attr:`ExitStatus.NOT_FOUND` without running anything.
        """
        if not command_name or command_name in HELP_FLAGS:
            return self.help_service.show_help()

        command = self.registry.get_command(command_name)
        if command is None:
            err_console.print(
                f"Error: Command '{escape(command_name)}' not found. "
                "Run 'kit -h' for list of available commands.",
                style=Styles.ERROR,
            )
            suggestion = self.suggest(command_name)
            if suggestion:
                err_console.print(f"💡 Did you mean '{escape(suggestion)}'?", style=Styles.DIM)
            return ExitStatus.NOT_FOUND

        try:
            status = command.handler(list(args))
        except CommandExecutionError as e:
            err_console.print(f"Error: {escape(str(e))}", style=Styles.ERROR)
            if e.suggestion:
                err_console.print(f"💡 {escape(e.suggestion)}", style=Styles.DIM)
            return int(e.status)

        return ExitStatus.SUCCESS if status is None else int(status)
