"""
Meta-command Implementations

The reserved built-in commands registered before any module is scanned:

    help              Show the category-grouped command listing
    search <keyword>  Find commands by name
    list-categories   Show categories with command counts

No operation module and no shortcut may reuse these names; trying to is a
fatal configuration error.
"""

from .introspection import HelpService
from .registry import CommandRegistry
from .types import Command, CommandKind

HELP_COMMAND = "help"
SEARCH_COMMAND = "search"
LIST_CATEGORIES_COMMAND = "list-categories"

RESERVED_NAMES = frozenset({HELP_COMMAND, SEARCH_COMMAND, LIST_CATEGORIES_COMMAND})


def register_meta_commands(registry: CommandRegistry, help_service: HelpService) -> None:
    """Register the reserved meta-commands bound to ``help_service``.

    Examples:
        Command usage::

            kit help
            kit search png
            kit list-categories
    """

    def help_handler(args: list[str]) -> int:
        """Usage: kit help
        Description: Show all available commands grouped by category"""
        return help_service.show_help()

    def search_handler(args: list[str]) -> int:
        """Usage: kit search <keyword>
        Description: Search command names for a keyword"""
        return help_service.show_search(args[0] if args else None)

    def list_categories_handler(args: list[str]) -> int:
        """Usage: kit list-categories
        Description: List all categories with command counts"""
        return help_service.show_categories()

    for name, handler, description in (
        (HELP_COMMAND, help_handler, "Show available commands"),
        (SEARCH_COMMAND, search_handler, "Search commands by name"),
        (LIST_CATEGORIES_COMMAND, list_categories_handler, "List command categories"),
    ):
        registry.register_meta(
            Command(
                name=name,
                kind=CommandKind.META,
                description=description,
                handler=handler,
                help_text=handler.__doc__,
                hidden=True,
            )
        )
