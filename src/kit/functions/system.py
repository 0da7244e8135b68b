# system.py - System administration utilities
# Category: System Utilities
# Description: Shell and filesystem utilities
# Dependencies: none (Zed editor for zed function)
# Functions: mklink, zed
"""Symlink creation and a cross-platform launcher for the Zed editor."""

import os
import platform
import shutil
import subprocess
from pathlib import Path

from rich.markup import escape

from kit.cli.styles import Messages, Styles, console, err_console
from kit.commands.types import ExitStatus
from kit.functions._common import fail, print_help, wants_help

ZED_APP = Path("/Applications/Zed.app")


def mklink(args: list[str]) -> int:
    """Usage: kit mklink <target> <link_name>
    Description: Create a symbolic link from target to link_name
    Examples:
      kit mklink /path/to/target mylink
      kit mklink ../relative/path shortcut
    """
    if wants_help(args):
        print_help(mklink)
        return ExitStatus.SUCCESS
    if len(args) != 2:
        err_console.print("Error: Exactly 2 arguments required: target and link_name", style=Styles.ERROR)
        print_help(mklink, stderr=True)
        return ExitStatus.USAGE_ERROR

    target, link_name = args
    if not os.path.lexists(target):
        return fail(f"Target '{target}' does not exist")
    if os.path.lexists(link_name):
        return fail(f"Link destination '{link_name}' already exists")

    try:
        os.symlink(target, link_name)
    except OSError as e:
        return fail(f"Failed to create symbolic link: {e}")

    console.print(Messages.success(escape(f"Created symbolic link: {link_name} -> {target}")))
    return ExitStatus.SUCCESS


def zed_command() -> list[str] | None:
    """Return the argv prefix that launches Zed on this platform, if installed."""
    if platform.system() == "Darwin" and ZED_APP.is_dir():
        return ["open", "-a", "Zed"]
    path = shutil.which("zed")
    return [path] if path else None


def zed(args: list[str]) -> int:
    """Usage: kit zed <filepath>
    Description: Open a file or directory with Zed editor
    Platform support:
      - macOS: Uses Zed.app from /Applications
      - Linux: Uses 'zed' command from PATH
    Examples:
      kit zed myfile.js
      kit zed .
      kit zed ~/projects/myproject
    """
    if not args or wants_help(args):
        print_help(zed)
        return ExitStatus.SUCCESS

    target = args[0]
    if target != "." and not os.path.exists(target):
        return fail(f"Target '{target}' does not exist")

    command = zed_command()
    if command is None:
        fail("Zed editor not found")
        err_console.print("Install from https://zed.dev", style=Styles.DIM)
        return ExitStatus.RUNTIME_ERROR

    console.print(f"Opening '{target}' in Zed editor...", markup=False)
    try:
        return subprocess.run([*command, target], check=False).returncode
    except OSError as e:
        return fail(f"Failed to launch Zed: {e}")
