"""
Component Logger

Every toolkit module logs through a named :class:`ComponentLogger`, which
prefixes messages with the component name, colors them with Rich markup and
hands them to stdlib :mod:`logging`. One :class:`rich.logging.RichHandler`
on stderr renders them, so stdout stays reserved for command output.

Usage:
    logger = get_logger("shortcuts")
    logger.debug("Compiled 4 navigation shortcut(s)")
    logger.warning("Shortcut 'deploy' conflicts with existing operation")

    # Fixed name and color, bypassing config lookup
    logger = get_logger(name="REGISTRY", color="sky_blue2")

Colors per component come from ``logging.logging_colors.<component>`` in
config.yml; the root level comes from ``logging.level``.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from kit.utils.config import get_config_value

DEFAULT_LEVEL = logging.WARNING


class ComponentLogger:
    """Wraps a stdlib logger with component-prefixed, Rich-styled messages.

    Args:
        base_logger: Underlying Python logger
        component_name: Shown as a title-cased prefix ("Scanner: ...")
        color: Rich color for info/debug lines
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _markup(self, message: str, style: str, icon: str = "") -> str:
        text = f"{icon}{self.component_name.title()}: {message}"
        return f"[{style}]{text}[/{style}]" if style else text

    def debug(self, message: str) -> None:
        self.base_logger.debug(self._markup(message, f"dim {self.color}", "🔍 "))

    def info(self, message: str) -> None:
        self.base_logger.info(self._markup(message, self.color))

    def key_info(self, message: str) -> None:
        """Info that should stand out among regular info lines."""
        self.base_logger.info(self._markup(message, f"bold {self.color}"))

    def success(self, message: str) -> None:
        self.base_logger.info(self._markup(message, "bold green", "✅ "))

    def warning(self, message: str) -> None:
        self.base_logger.warning(self._markup(message, "bold yellow", "⚠️  "))

    def error(self, message: str, exc_info: bool = False) -> None:
        self.base_logger.error(self._markup(message, "bold red", "❌ "), exc_info=exc_info)

    def critical(self, message: str, *args, **kwargs) -> None:
        self.base_logger.critical(self._markup(message, "bold red", "❌ "), *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        self.base_logger.exception(self._markup(message, "bold red", "❌ "), *args, **kwargs)

    @property
    def name(self) -> str:
        return self.base_logger.name

    @property
    def level(self) -> int:
        return self.base_logger.level

    def setLevel(self, level: int) -> None:
        self.base_logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.base_logger.isEnabledFor(level)


def _configured(path: str, default):
    # Logging must come up even when config.yml is broken
    try:
        return get_config_value(path, default)
    except Exception:
        return default


def _setup_rich_logging(level: int | None = None) -> None:
    """Attach the shared RichHandler to the root logger once."""
    root_logger = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root_logger.handlers):
        return

    if level is None:
        level = logging.getLevelName(str(_configured("logging.level", "WARNING")).upper())
    root_logger.setLevel(level if isinstance(level, int) else DEFAULT_LEVEL)

    root_logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            markup=True,
            show_time=False,
            show_level=False,
            show_path=bool(_configured("logging.show_full_paths", False)),
            rich_tracebacks=bool(_configured("logging.rich_tracebacks", True)),
            # Locals may hold paths and arguments; keep them out by default
            tracebacks_show_locals=bool(_configured("logging.show_traceback_locals", False)),
        )
    )


def set_log_level(level: int) -> None:
    """Change the root logging level (``kit --debug``)."""
    _setup_rich_logging(level)
    logging.getLogger().setLevel(level)


def get_logger(
    component_name: str | None = None,
    *,
    name: str | None = None,
    color: str | None = None,
) -> ComponentLogger:
    """
    Get a component logger.

    Args:
        component_name: Component name (e.g., 'scanner', 'shortcuts'); its color
            is looked up in ``logging.logging_colors``
        name: Explicit logger name (keyword-only)
        color: Explicit color, used together with ``name``

    Returns:
        ComponentLogger instance

    Examples:
        logger = get_logger("scanner")
        logger = get_logger(name="REGISTRY", color="sky_blue2")
    """
    _setup_rich_logging()

    if name is not None:
        return ComponentLogger(logging.getLogger(name), name, color or "white")

    if component_name is None:
        raise ValueError(
            "Component name is required. Usage: get_logger('component_name') or "
            "get_logger(name='custom_name', color='blue')"
        )

    color = _configured(f"logging.logging_colors.{component_name}", None) or "white"
    return ComponentLogger(logging.getLogger(component_name), component_name, color)
