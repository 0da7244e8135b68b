"""Terminal styling for Kit.

All output goes through two themed Rich consoles: ``console`` (stdout) for
listings and command output, ``err_console`` (stderr) for errors and
diagnostics. Code refers to semantic style names (``Styles.ERROR``,
``Styles.ACCENT``) that the active :class:`ColorTheme` maps to colors, so the
palette can be switched from ``cli.theme`` in config.yml.
"""

import sys
from dataclasses import asdict, dataclass

from rich.console import Console
from rich.theme import Theme

from kit.utils.logger import get_logger

logger = get_logger("cli")


# ============================================================================
# THEMES
# ============================================================================


@dataclass(frozen=True)
class ColorTheme:
    """Hex colors for every semantic style.

    ``error`` and ``warning`` keep their conventional red/amber in the shipped
    themes; the rest define the look of listings and help screens.
    """

    error: str = "#ff5555"
    warning: str = "#ffaa00"
    success: str = "#5fd75f"  # Command names and check marks
    accent: str = "#5fd7d7"  # Category headings, directories in listings
    command: str = "#ffd75f"  # Invocation examples
    path: str = "#a2ae9d"
    info: str = "#5fd7d7"
    dim: str = "#7a7a7a"
    border: str = "#444444"

    def to_rich_theme(self) -> Theme:
        return Theme(
            {
                "success": f"bold {self.success}",
                "error": f"bold {self.error}",
                "warning": f"bold {self.warning}",
                "info": self.info,
                "accent": f"bold {self.accent}",
                "command": self.command,
                "path": self.path,
                "dim": self.dim,
                "border_accent": self.accent,
                "border_dim": self.border,
            }
        )


DEFAULT_THEME = ColorTheme()

# Darker palette for light terminal backgrounds
PAPER_THEME = ColorTheme(
    success="#008700",
    accent="#0087af",
    command="#af5f00",
    path="#5f5f5f",
    info="#0087af",
    dim="#8a8a8a",
    border="#bcbcbc",
)

THEME_REGISTRY = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}

_active_theme = DEFAULT_THEME


def get_active_theme() -> ColorTheme:
    return _active_theme


# ============================================================================
# CONSOLES
# ============================================================================

_console_options = {"legacy_windows": False} if sys.platform == "win32" else {}

console = Console(theme=DEFAULT_THEME.to_rich_theme(), **_console_options)
err_console = Console(theme=DEFAULT_THEME.to_rich_theme(), stderr=True, **_console_options)


def set_theme(theme: ColorTheme) -> None:
    """Activate ``theme`` on both consoles."""
    global _active_theme
    _active_theme = theme
    rich_theme = theme.to_rich_theme()
    console.push_theme(rich_theme)
    err_console.push_theme(rich_theme)


def load_theme_from_config(config_path: str | None = None) -> ColorTheme:
    """Resolve ``cli.theme``; ``custom`` builds a theme from ``cli.custom_theme``.

    Bad theme settings never stop the CLI: they are logged and the default
    theme is used.

    Examples:
        >>> theme = load_theme_from_config()
        >>> theme = load_theme_from_config("/path/to/config.yml")
    """
    from kit.utils.config import get_config_value

    theme_name = get_config_value("cli.theme", "default", config_path)
    if theme_name != "custom":
        theme = THEME_REGISTRY.get(theme_name)
        if theme is None:
            logger.warning(f"Unknown theme '{theme_name}', using default")
            return DEFAULT_THEME
        return theme

    overrides = get_config_value("cli.custom_theme", {}, config_path) or {}
    known = asdict(DEFAULT_THEME)
    for key, value in overrides.items():
        if key not in known:
            logger.warning(f"Unknown color '{key}' in cli.custom_theme, using default theme")
            return DEFAULT_THEME
        if not isinstance(value, str) or not value.startswith("#"):
            logger.warning(f"Invalid color format for {key}: {value}, using default theme")
            return DEFAULT_THEME
    return ColorTheme(**{**known, **overrides})


def initialize_theme_from_config(config_path: str | None = None) -> None:
    """Apply the configured theme (called once at CLI startup)."""
    set_theme(load_theme_from_config(config_path))
    logger.debug(f"Using theme {get_active_theme()}")


# ============================================================================
# STYLE NAMES AND MESSAGE HELPERS
# ============================================================================


class Styles:
    """Style names understood by the themed consoles."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    ACCENT = "accent"
    COMMAND = "command"
    PATH = "path"
    DIM = "dim"
    BOLD = "bold"
    BORDER_ACCENT = "border_accent"
    BORDER_DIM = "border_dim"


class Messages:
    """Markup for one-line status messages. Callers escape user text."""

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def info(text: str) -> str:
        return f"[info]{text}[/info]"


__all__ = [
    "ColorTheme",
    "DEFAULT_THEME",
    "PAPER_THEME",
    "THEME_REGISTRY",
    "get_active_theme",
    "set_theme",
    "load_theme_from_config",
    "initialize_theme_from_config",
    "console",
    "err_console",
    "Styles",
    "Messages",
]
