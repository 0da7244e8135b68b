"""Helpers shared by the built-in operation modules."""

import inspect
import shutil

from rich.markup import escape

from kit.cli.styles import Styles, console, err_console
from kit.commands.types import HELP_FLAGS, ExitStatus


def wants_help(args: list[str]) -> bool:
    return bool(args) and args[0] in HELP_FLAGS


def print_help(handler, stderr: bool = False) -> None:
    """Print a handler's self-declared help text."""
    target = err_console if stderr else console
    target.print(inspect.getdoc(handler) or "", markup=False, highlight=False)


def fail(message: str, status: int = ExitStatus.RUNTIME_ERROR) -> int:
    err_console.print(f"Error: {escape(message)}", style=Styles.ERROR)
    return status


def require_tool(tool: str, install_hint: str = "") -> str | None:
    """Return the absolute path of ``tool``, or report it missing and return None."""
    path = shutil.which(tool)
    if path is None:
        hint = f". Install with: {install_hint}" if install_hint else ""
        fail(f"{tool} not installed{hint}")
    return path
