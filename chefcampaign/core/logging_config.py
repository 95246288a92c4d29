"""
Logging configuration for the chefcampaign package.

This module provides logging configuration for the chefcampaign package:
- Configurable log levels
- Console and rotating file logging
- Redaction of credentials and truncation of embedded image data in request logs
"""

import os
import sys
import logging
import logging.handlers
from typing import Dict, Any, Optional, TextIO

SENSITIVE_KEYS = [
    "api_key", "key", "secret", "password", "token", "auth", "credential", "authorization"
]

# Longest string value written to the log before it is truncated
MAX_LOGGED_VALUE_LENGTH = 200


def configure_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    stream: Optional[TextIO] = None
) -> None:
    """
    Configure global logging settings.

    Unset arguments fall back to the ``logging`` section of the configuration.

    Args:
        level (str, optional): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file (str, optional): Path to log file
        log_format (str, optional): Log message format
        log_to_console (bool): Whether to log to console
        log_to_file (bool): Whether to log to file (only when a file is configured)
        max_bytes (int): Maximum log file size before rotation
        backup_count (int): Number of backup log files to keep
        stream (TextIO, optional): Console stream. Defaults to stdout.
    """
    from chefcampaign.core.config import get_config_value

    if level is None:
        level = get_config_value("logging.level", "INFO")

    if log_file is None:
        log_file = get_config_value("logging.file")

    if log_format is None:
        log_format = get_config_value(
            "logging.format",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)

    if log_to_console:
        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_to_file and log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name (str): Logger name

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)


def log_api_request(logger: logging.Logger, api_name: str, endpoint: str, params: Dict[str, Any]) -> None:
    """
    Log an outgoing API request with secrets redacted and image data truncated.

    Args:
        logger (logging.Logger): Logger instance
        api_name (str): API name
        endpoint (str): API endpoint
        params (Dict[str, Any]): Request payload
    """
    logger.info(f"API Request to {api_name} - {endpoint}")
    for key, value in redact_sensitive_data(params).items():
        logger.debug(f"  {key}: {value}")


def redact_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact sensitive information from data.

    Keys that look like credentials are masked; long strings (base64 images,
    long prompts) are cut to MAX_LOGGED_VALUE_LENGTH characters. Nested
    dictionaries and lists are handled recursively.

    Args:
        data (Dict[str, Any]): Data to redact

    Returns:
        Dict[str, Any]: Redacted copy of the data
    """
    redacted = {}

    for key, value in data.items():
        if any(sensitive_key in key.lower() for sensitive_key in SENSITIVE_KEYS):
            redacted[key] = "********"
        else:
            redacted[key] = _redact_value(value)

    return redacted


def _redact_value(value: Any) -> Any:
    if isinstance(value, dict):
        return redact_sensitive_data(value)
    if isinstance(value, list):
        return [_redact_value(item) for item in value]
    if isinstance(value, str) and len(value) > MAX_LOGGED_VALUE_LENGTH:
        return f"{value[:MAX_LOGGED_VALUE_LENGTH]}... [{len(value)} chars]"
    return value
