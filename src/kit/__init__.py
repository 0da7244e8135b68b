"""Kit - personal command-line toolkit.

A single ``kit`` entry point dispatching to:
- Operations discovered from self-describing modules
- Navigation shortcuts generated from ``shortcuts.conf``
- Editor shortcuts generated from ``editor.conf``
"""

# Version information
__version__ = "1.4.0"

__all__ = ["__version__"]

# Use specific imports like: from kit.commands import build_registry
