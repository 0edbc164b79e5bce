"""
Logging Configuration
Centralized logging setup
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def setup_logger(
    name: str = "sealed_otp",
    log_file: Optional[str] = "logs/sealed_otp.log",
    level: str = "INFO"
) -> logging.Logger:
    """
    Setup logger with console and optional file handlers

    Args:
        name: Logger name
        log_file: Log file path, empty or None for console only
        level: Logging level name

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (rotating)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
