"""Logging setup for applications using the atlas packer.

The package itself only creates module level loggers and never configures
logging on import.
"""

import logging


def setup_logging(log_level: int = logging.INFO) -> None:
    """Setup basic logging configuration."""
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
