"""
Logging configuration for the application.

``setup_logging`` attaches a console handler to the root logger exactly
once. Modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger.

    Does nothing if the root logger already has handlers, which happens
    under pytest or when the app module is imported more than once.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
