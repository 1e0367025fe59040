import sys
from typing import Optional
from loguru import logger
import os

def setup_logging(debug_mode: bool = False, log_dir: Optional[str] = None):
    """
    Configures Loguru logger.
    """
    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "WARNING"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        logger.add(os.path.join(log_dir, "bpgraph_{time}.log"), rotation="10 MB", retention="1 week", level="DEBUG")

    logger.debug("Logging initialized.")
