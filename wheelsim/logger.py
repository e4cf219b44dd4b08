# Logging utilities

import logging


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Setup console logging for the wheelsim package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger
    """
    logger = logging.getLogger("wheelsim")
    logger.setLevel(getattr(logging, level.upper()))

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_format = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(message)s",
            datefmt="%H:%M:%S",
        )
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(getattr(logging, level.upper()))

    return logger
