"""
Loguru sinks for the pathwise CLI and library callers.

The calculators log through loguru directly; this module only decides where
records go. Library users who never call ``setup_logging`` get loguru's
default stderr sink.
"""

import sys

from loguru import logger

from pathwise.core.config_schema import LoggingSettings

_CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def level_for_verbosity(verbose: int, base: str = "WARNING") -> str:
    """Map a repeated ``-v`` count onto a loguru level name."""
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return base.upper()


def setup_logging(
    settings: LoggingSettings | None = None,
    level: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Route log records to stderr and, when configured, a rotating file.

    Args:
        settings: Logging section of the validated config. Defaults apply if None.
        level: Overrides ``settings.level`` (e.g. from CLI verbosity flags).
        rotation: Size at which the log file rotates.
        retention: Age after which rotated files are deleted.
    """
    settings = settings or LoggingSettings()
    effective = (level or settings.level).upper()

    logger.remove()
    logger.add(sys.stderr, level=effective, format=_CONSOLE_FORMAT)

    if settings.file:
        logger.add(
            str(settings.file),
            level=effective,
            format=_FILE_FORMAT,
            rotation=rotation,
            retention=retention,
        )
