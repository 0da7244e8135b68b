# listing.py - Enhanced file listing utilities using lsd
# Category: File Listing
# Description: File listing utilities with enhanced formatting using lsd
# Dependencies: lsd (brew install lsd)
# Functions: list-files, list-all, list-reverse, list-all-reverse, list-tree

import subprocess

from kit.commands.types import ExitStatus
from kit.functions._common import fail, print_help, require_tool, wants_help

LSD_INSTALL_HINT = "brew install lsd"


def _run_lsd(handler, flags: list[str], args: list[str]) -> int:
    if wants_help(args):
        print_help(handler)
        return ExitStatus.SUCCESS

    lsd = require_tool("lsd", LSD_INSTALL_HINT)
    if lsd is None:
        return ExitStatus.RUNTIME_ERROR

    directory = args[0] if args else "."
    try:
        return subprocess.run([lsd, *flags, directory], check=False).returncode
    except OSError as e:
        return fail(f"Failed to run lsd: {e}")


def list_files(args: list[str]) -> int:
    """Usage: kit list-files [directory]
    Description: List files in long format sorted by modification time (newest first)
    Example:
      kit list-files          # Current directory
      kit list-files ~/projects
    """
    return _run_lsd(list_files, ["-lt"], args)


def list_all(args: list[str]) -> int:
    """Usage: kit list-all [directory]
    Description: List all files including hidden (dot) files in long format, sorted by modification time
    Example:
      kit list-all          # Current directory
      kit list-all ~/.config
    """
    return _run_lsd(list_all, ["-lat"], args)


def list_reverse(args: list[str]) -> int:
    """Usage: kit list-reverse [directory]
    Description: List files in long format in reverse order (oldest first)
    Example:
      kit list-reverse          # Current directory
      kit list-reverse ~/downloads
    """
    return _run_lsd(list_reverse, ["-ltr"], args)


def list_all_reverse(args: list[str]) -> int:
    """Usage: kit list-all-reverse [directory]
    Description: List all files including hidden (dot) files in reverse order (oldest first)
    Example:
      kit list-all-reverse          # Current directory
      kit list-all-reverse ~/archive
    """
    return _run_lsd(list_all_reverse, ["-latr"], args)


def list_tree(args: list[str]) -> int:
    """Usage: kit list-tree [directory]
    Description: Display directory contents as a tree structure
    Example:
      kit list-tree          # Current directory
      kit list-tree ~/project
    """
    return _run_lsd(list_tree, ["--tree"], args)
