"""
Logging setup for the asset pipeline.

Modules log through the shared loguru `logger`, usually bound to a
component name with `logger.bind(component=...)`. The CLI calls
`configure_logging` once at startup to install the stderr sink.
"""

import sys

from loguru import logger

DEFAULT_COMPONENT = "asset_pipeline"

LOGGER_FORMAT = (
    "<green>{time:MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    # Records logged without a bound component still need the key.
    logger.configure(extra={"component": DEFAULT_COMPONENT})
    logger.add(sys.stderr, level=level.upper(), format=LOGGER_FORMAT)
