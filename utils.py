# utils.py
"""
Utility functions for the light reflection simulation.

This module provides helpers, such as logging setup and configuration
loading, that are used across the application but do not belong to a
specific domain like ray casting, placement or rendering.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing an optional "logging" key with
#       "level", "format", and "log_file" sub-keys. A null "log_file"
#       disables the rotating file handler.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates the log
#     directory if it doesn't exist. Sets up a console handler and, when
#     a log file is configured, a rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: The parsed JSON document as a dictionary.
#   - Errors: FileNotFoundError and json.JSONDecodeError are logged and
#     re-raised to the caller.

LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 5


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to the console and, optionally, to a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = str(log_config.get('level', 'INFO')).upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/simulation.log')

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # Rotates when the log reaches 1MB, keeps 5 backup logs.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path or 'disabled'}")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration error: {path} must contain a JSON object at the top level."
        logging.error(msg)
        raise ValueError(msg)

    logging.info(f"Configuration loaded successfully ({len(config)} sections).")
    return config
