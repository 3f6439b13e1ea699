"""
GCE Disk Claim - Logging Setup

This module sets up logging for disk claim runs.
Runs usually happen from a startup script, so everything goes to stdout
where the guest agent forwards it to the serial console.

Logging Strategy:
- INFO (default): High-level progress
- DEBUG (--verbosity=debug): API calls and responses
- WARNING: Unexpected but harmless state
- ERROR: Fatal errors, with the full traceback
- CRITICAL: Disk left in a partial state, manual intervention required
"""

import logging
import sys
from pathlib import Path
from typing import Any

LOGGER_NAME = 'gce_disk_claim'


class CleanFormatter(logging.Formatter):
    """
    Custom formatter for clean user-facing logs.

    - INFO: Just the message (clean)
    - WARNING/ERROR/CRITICAL: Show level prefix
    - Tracebacks are appended whenever the record carries exc_info
    """

    def format(self, record):
        """Format log record based on level."""

        if record.levelno == logging.INFO:
            message = record.getMessage()
        elif record.levelno == logging.WARNING:
            message = f"[!]  WARNING: {record.getMessage()}"
        elif record.levelno == logging.ERROR:
            message = f"[X] ERROR: {record.getMessage()}"
        elif record.levelno == logging.CRITICAL:
            message = f"[!!] CRITICAL: {record.getMessage()}"
        else:
            message = f"[DEBUG] {record.getMessage()}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging(level='INFO', log_file=None, debug=False):
    """
    Setup logging for GCE Disk Claim.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only logs to console.
        debug: If True, use DEBUG level and detailed format

    Returns:
        logging.Logger: Configured logger instance

    Example:
        logger = setup_logging('INFO')
        logger.info("Claiming disk...")
    """

    if debug:
        level = 'DEBUG'

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers (in case setup_logging called multiple times)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if debug:
        # [2025-11-02 10:30:45] DEBUG [wait:45]: API call: zoneOperations.get(...)
        console_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(funcName)s:%(lineno)d]: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        console_format = CleanFormatter(
            '%(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)

        file_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_file}")

    return logger


def get_logger():
    """
    Get the GCE Disk Claim logger instance.

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(LOGGER_NAME)


def log_api_call(logger, method_name: str, **params):
    """
    Log an API call (DEBUG level).

    Args:
        logger: Logger instance
        method_name: Name of the API method (e.g., 'instances.detachDisk')
        **params: API call parameters

    Example:
        log_api_call(logger, 'disks.get', project='my-project', zone='us-central1-a', disk='data-1')
        # Output: API call: disks.get(project=my-project, zone=us-central1-a, disk=data-1)
    """
    if logger is None:
        return
    param_str = ', '.join(f'{k}={v}' for k, v in params.items())
    logger.debug(f"API call: {method_name}({param_str})")


def log_api_response(logger, response: Any, truncate: int = 200):
    """
    Log an API response (DEBUG level), truncated to `truncate` characters.
    """
    if logger is None:
        return
    response_str = str(response)
    if len(response_str) > truncate:
        response_str = response_str[:truncate] + '...'
    logger.debug(f"API response: {response_str}")


def print_header(logger, title: str, char='=', length=60):
    """
    Print a formatted header (INFO level).

    Example:
        print_header(logger, 'GCE Disk Claim')
        # Output:
        # ============================================================
        # GCE Disk Claim
        # ============================================================
    """
    logger.info(char * length)
    logger.info(title)
    logger.info(char * length)
