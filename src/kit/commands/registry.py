"""
Command Registry

The unified namespace of every dispatchable command name. It is built once at
startup, in a fixed order, and frozen before the first dispatch:

1. Meta-commands (help, search, list-categories) - reserved names
2. Operations discovered from operation modules
3. Navigation shortcuts compiled from shortcuts.conf
4. Editor shortcuts compiled from editor.conf

Collision policy:
    - Operation reusing a meta-command name: fatal ReservedNameError
    - Operation reusing another operation's name: fatal DuplicateOperationError
    - Shortcut reusing a meta-command name: fatal ReservedNameError
    - Shortcut over an operation or over the other shortcut kind: replaces it
      (the shortcut compiler reports the shadowing as a warning)

Because shortcuts are registered last they are the terminal layer: an
operation can never be added on top of a shortcut.
"""

from collections.abc import Iterator

from kit.base.errors import DuplicateOperationError, RegistryError, ReservedNameError
from kit.utils.logger import get_logger

from .types import Command, CommandKind

logger = get_logger(name="REGISTRY", color="sky_blue2")


class CommandRegistry:
    """Ordered mapping of command name to :class:`Command`.

    Iteration follows discovery order. A shortcut that replaces an earlier
    command takes the shortcut's position, so listings show it with the other
    shortcuts.

    Examples:
        Basic registry usage::

            registry = CommandRegistry()
            registry.register_meta(help_command)
            registry.register_operation(mklink_command)
            registry.freeze()

            if registry.has_command("mklink"):
                cmd = registry.get_command("mklink")
    """

    def __init__(self):
        self.commands: dict[str, Command] = {}
        self._frozen = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _check_writable(self) -> None:
        if self._frozen:
            raise RegistryError("Command registry is read-only after startup")

    def _source_of(self, command: Command) -> str:
        if command.module is not None:
            return str(command.module.path)
        return command.kind.value

    def register_meta(self, command: Command) -> None:
        """Register a reserved meta-command."""
        self._check_writable()
        if command.kind is not CommandKind.META:
            raise RegistryError(f"'{command.name}' is not a meta-command")
        if command.name in self.commands:
            raise RegistryError(f"Meta-command '{command.name}' already registered")
        self.commands[command.name] = command

    def register_operation(self, command: Command) -> None:
        """Register an operation discovered from a module.

        :raises ReservedNameError: If the name belongs to a meta-command
        :raises DuplicateOperationError: If another module already declared it
        :raises RegistryError: If any other command already holds the name
        """
        self._check_writable()
        if not command.name:
            raise RegistryError("Command name cannot be empty")

        existing = self.commands.get(command.name)
        if existing is not None:
            if existing.kind is CommandKind.META:
                raise ReservedNameError(command.name, self._source_of(command))
            if existing.kind is CommandKind.OPERATION:
                raise DuplicateOperationError(
                    command.name, self._source_of(existing), self._source_of(command)
                )
            raise RegistryError(
                f"Operation '{command.name}' cannot be registered after a shortcut of the same name"
            )

        self.commands[command.name] = command

    def register_shortcut(self, command: Command) -> Command | None:
        """Register a compiled shortcut, replacing any operation or other-kind shortcut.

        :return: The command that was replaced, if any
        :raises ReservedNameError: If the name belongs to a meta-command
        """
        self._check_writable()
        if not command.kind.is_shortcut:
            raise RegistryError(f"'{command.name}' is not a shortcut")

        existing = self.commands.get(command.name)
        if existing is not None and existing.kind is CommandKind.META:
            raise ReservedNameError(command.name, f"{command.kind.value} shortcuts")
        if existing is not None:
            # Re-insert so the shortcut takes its own discovery position
            del self.commands[command.name]
            logger.debug(
                f"Shortcut '{command.name}' replaces {existing.kind.value} '{existing.name}'"
            )

        self.commands[command.name] = command
        return existing

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_command(self, name: str) -> Command | None:
        """Get a command by name."""
        return self.commands.get(name)

    def has_command(self, name: str) -> bool:
        return name in self.commands

    def get_commands_by_kind(self, kind: CommandKind) -> list[Command]:
        """Get all commands of one kind, in discovery order."""
        return [cmd for cmd in self.commands.values() if cmd.kind is kind]

    def get_all_commands(self, include_hidden: bool = False) -> list[Command]:
        """Get all registered commands in discovery order."""
        commands = list(self.commands.values())
        if not include_hidden:
            commands = [cmd for cmd in commands if not cmd.hidden]
        return commands

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands.values())

    def __len__(self) -> int:
        return len(self.commands)
