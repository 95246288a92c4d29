"""
Error handling module.

This module defines the exception taxonomy shared by the concept generator,
the image backends and the HTTP layer, and wraps outgoing ``requests`` calls
so that every transport or HTTP failure surfaces as an APIError.
"""

import json
import logging
from typing import Dict, Any, Optional, Callable, List

import requests

logger = logging.getLogger(__name__)


class APIError(Exception):
    """
    Exception raised for errors returned by, or while talking to, a backend API.

    Attributes:
        message: Error message.
        status_code: HTTP status code.
        response: API response body.
        endpoint: API endpoint.
        request_data: Request data.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
        endpoint: Optional[str] = None,
        request_data: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.response = response
        self.endpoint = endpoint
        self.request_data = request_data

        detailed_message = f"API Error: {message}"
        if status_code:
            detailed_message += f" (Status Code: {status_code})"
        if endpoint:
            detailed_message += f" (Endpoint: {endpoint})"

        super().__init__(detailed_message)


class ValidationError(Exception):
    """
    Exception raised for invalid caller input.

    Attributes:
        message: Error message.
        field: Field that failed validation.
        value: Value that failed validation.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None
    ):
        self.message = message
        self.field = field
        self.value = value

        detailed_message = f"Validation Error: {message}"
        if field:
            detailed_message += f" (Field: {field})"

        super().__init__(detailed_message)


class ConfigurationError(Exception):
    """
    Exception raised for configuration errors such as a missing API key.

    Attributes:
        message: Error message.
        component: Component that has a configuration error.
        missing_keys: Keys that are missing from the configuration.
    """

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        missing_keys: Optional[List[str]] = None
    ):
        self.message = message
        self.component = component
        self.missing_keys = missing_keys or []

        detailed_message = f"Configuration Error: {message}"
        if component:
            detailed_message += f" (Component: {component})"
        if missing_keys:
            detailed_message += f" (Missing Keys: {', '.join(missing_keys)})"

        super().__init__(detailed_message)


def handle_api_request(
    request_func: Callable,
    endpoint: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    error_message: str = "API request failed",
    timeout: Optional[float] = None
) -> Any:
    """
    Make an API request and return the decoded JSON body.

    Args:
        request_func: Function to make the API request (e.g. ``requests.post``).
        endpoint: API endpoint.
        payload: JSON request payload.
        headers: Request headers.
        error_message: Prefix for the APIError message.
        timeout: Transport timeout in seconds; None waits indefinitely.

    Returns:
        The decoded JSON response.

    Raises:
        APIError: On non-2xx status, transport failure or a non-JSON body.
    """
    try:
        response = request_func(
            endpoint,
            json=payload,
            headers=headers,
            timeout=timeout
        )
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error: {e}")
        raise APIError(
            message=f"{error_message}: Connection error",
            endpoint=endpoint,
            request_data=payload
        ) from e
    except requests.exceptions.Timeout as e:
        logger.error(f"Timeout error: {e}")
        raise APIError(
            message=f"{error_message}: Request timed out",
            endpoint=endpoint,
            request_data=payload
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error: {e}")
        raise APIError(
            message=f"{error_message}: {e}",
            endpoint=endpoint,
            request_data=payload
        ) from e

    logger.debug(f"API response received with status code {response.status_code}")

    if not response.ok:
        # Keep the backend's status and body for diagnostics
        raise APIError(
            message=f"{error_message}: {response.status_code} - {response.text}",
            status_code=response.status_code,
            response=response.text,
            endpoint=endpoint,
            request_data=payload
        )

    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        logger.error(f"Failed to parse API response: {e}")
        raise APIError(
            message=f"{error_message}: Failed to parse API response: {e}",
            status_code=response.status_code,
            response=response.text,
            endpoint=endpoint,
            request_data=payload
        ) from e


def validate_required_fields(
    data: Dict[str, Any],
    required_fields: List[str],
    message: Optional[str] = None
) -> None:
    """
    Validate that required fields are present and non-blank.

    Args:
        data: Data to validate.
        required_fields: List of required field names.
        message: Error message to raise with; defaults to listing the fields.

    Raises:
        ValidationError: If a required field is missing or blank.
    """
    missing_fields = []

    for field in required_fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing_fields.append(field)

    if missing_fields:
        raise ValidationError(
            message=message or f"Missing required fields: {', '.join(missing_fields)}",
            field=missing_fields[0]
        )


def log_api_error(error: APIError) -> None:
    """
    Log an API error with detailed information.

    Args:
        error: API error to log.
    """
    from chefcampaign.core.logging_config import redact_sensitive_data

    logger.error(f"API Error: {error.message}")

    if error.status_code:
        logger.error(f"Status Code: {error.status_code}")

    if error.endpoint:
        logger.error(f"Endpoint: {error.endpoint}")

    if error.response:
        logger.error(f"Response: {error.response}")

    if error.request_data:
        logger.error(f"Request Data: {redact_sensitive_data(error.request_data)}")
