"""
Logging utilities for the veccompress package.
"""

import logging
import sys
from typing import Dict, Any, Optional
from pathlib import Path


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Don't add handlers if they already exist
    if logger.handlers:
        return logger

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def setup_logging(config: Optional[Dict[str, Any]] = None) -> None:
    """
    Setup logging configuration for the entire application.

    Args:
        config: Logging configuration dictionary
    """
    if config is None:
        config = {}

    default_config = {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_to_file": False,
        "log_file": "veccompress.log",
        "max_file_size": 10 * 1024 * 1024,  # 10MB
        "backup_count": 5
    }

    config = {**default_config, **config}

    level = getattr(logging, config["level"].upper(), logging.INFO)

    formatter = logging.Formatter(
        config["format"],
        datefmt=config["date_format"]
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config["log_to_file"]:
        log_file = Path(config["log_file"])
        log_file.parent.mkdir(parents=True, exist_ok=True)

        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config["max_file_size"],
            backupCount=config["backup_count"]
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def log_performance(func_name: str, duration: float, **kwargs) -> None:
    """
    Log timing for a pipeline stage.

    Args:
        func_name: Name of the stage
        duration: Execution duration in seconds
        **kwargs: Additional metrics to log
    """
    logger = get_logger("veccompress.performance")

    metrics = {
        "function": func_name,
        "duration": duration,
        **kwargs
    }

    logger.info(f"Performance: {metrics}")


def log_vector_operation(operation: str, vector_count: int, vector_dim: int, **kwargs) -> None:
    """
    Log vector operation metrics.

    Args:
        operation: Name of the operation
        vector_count: Number of vectors processed
        vector_dim: Dimension of vectors
        **kwargs: Additional operation-specific metrics
    """
    logger = get_logger("veccompress.operations")

    metrics = {
        "operation": operation,
        "vector_count": vector_count,
        "vector_dim": vector_dim,
        **kwargs
    }

    logger.info(f"Vector operation: {metrics}")
