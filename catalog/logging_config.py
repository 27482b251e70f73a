"""
Logging configuration for the catalog service.

``setup_logging`` attaches a single console handler to the root logger.
Request lines, handled errors and server startup messages all go
through it.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Calling it again (tests, repeated ``create_app``) leaves the existing
    handlers in place and only updates the level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)
