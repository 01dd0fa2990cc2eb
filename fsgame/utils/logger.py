"""
FSGAME Logger - Centralized Logging Utility
"""
import logging
import sys

def setup_logger():
    logger = logging.getLogger("fsgame")
    logger.setLevel(logging.DEBUG)

    c_handler = logging.StreamHandler(sys.stdout)
    c_handler.setLevel(logging.INFO)

    # Bare messages, the CLI owns the presentation
    c_format = logging.Formatter('%(message)s')
    c_handler.setFormatter(c_format)

    if not logger.handlers:
        logger.addHandler(c_handler)

    return logger

# Initialize singleton
logger = setup_logger()

__all__ = ["logger"]
