"""
Logging setup.

``setup_logging`` attaches a single console handler to the root logger.
It is a no-op when handlers already exist, so building several apps in
one process (tests) does not duplicate output.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.
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
