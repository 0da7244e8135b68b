"""Configuration and logging utilities.

Modules:
    config: Configuration builder and access functions
    logger: Rich component logging
"""

# Make the main modules available at package level
from . import config, logger

__all__ = ["config", "logger"]
