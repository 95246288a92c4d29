"""
Tests for error handler.

This module tests the error handling functionality.
"""

import pytest
from unittest.mock import patch, MagicMock
import requests
import json

from chefcampaign.core.error_handler import (
    APIError,
    ValidationError,
    ConfigurationError,
    handle_api_request,
    validate_required_fields,
    log_api_error
)


class TestErrorHandler:
    """
    Tests for the error handler module.
    """

    def test_api_error(self):
        """
        Test APIError exception.
        """
        error = APIError("Test error")

        assert str(error) == "API Error: Test error"
        assert error.message == "Test error"
        assert error.status_code is None
        assert error.response is None
        assert error.endpoint is None
        assert error.request_data is None

        error = APIError(
            message="Test error",
            status_code=404,
            response="Not found",
            endpoint="https://api.example.com",
            request_data={"param": "value"}
        )

        assert "API Error: Test error (Status Code: 404) (Endpoint: https://api.example.com)" in str(error)
        assert error.status_code == 404
        assert error.response == "Not found"
        assert error.request_data == {"param": "value"}

    def test_validation_error(self):
        """
        Test ValidationError exception.
        """
        error = ValidationError("Test error")

        assert str(error) == "Validation Error: Test error"
        assert error.message == "Test error"
        assert error.field is None

        error = ValidationError(message="Test error", field="brandName", value="")

        assert str(error) == "Validation Error: Test error (Field: brandName)"
        assert error.value == ""

    def test_configuration_error(self):
        """
        Test ConfigurationError exception.
        """
        error = ConfigurationError(
            message="GEMINI_API_KEY not configured",
            component="gemini",
            missing_keys=["GEMINI_API_KEY"]
        )

        assert str(error) == (
            "Configuration Error: GEMINI_API_KEY not configured "
            "(Component: gemini) (Missing Keys: GEMINI_API_KEY)"
        )
        assert ConfigurationError("x").missing_keys == []

    def test_handle_api_request_success(self):
        """
        Test a successful request returns the decoded body.
        """
        mock_response = MagicMock()
        mock_response.ok = True
        mock_response.status_code = 200
        mock_response.json.return_value = {"result": "success"}
        mock_request = MagicMock(return_value=mock_response)

        result = handle_api_request(
            mock_request,
            "https://api.example.com",
            {"param": "value"},
            {"Content-Type": "application/json"},
            timeout=5
        )

        assert result == {"result": "success"}
        mock_request.assert_called_once_with(
            "https://api.example.com",
            json={"param": "value"},
            headers={"Content-Type": "application/json"},
            timeout=5
        )

    def test_handle_api_request_http_error(self):
        """
        Test a non-2xx response keeps the status and body.
        """
        mock_response = MagicMock()
        mock_response.ok = False
        mock_response.status_code = 429
        mock_response.text = "quota exceeded"
        mock_request = MagicMock(return_value=mock_response)

        with pytest.raises(APIError) as excinfo:
            handle_api_request(mock_request, "https://api.example.com", {}, {}, error_message="Recraft API error")

        assert excinfo.value.status_code == 429
        assert excinfo.value.response == "quota exceeded"
        assert excinfo.value.message == "Recraft API error: 429 - quota exceeded"

    @pytest.mark.parametrize("exception, fragment", [
        (requests.exceptions.ConnectionError("refused"), "Connection error"),
        (requests.exceptions.Timeout("slow"), "Request timed out"),
        (requests.exceptions.RequestException("boom"), "boom"),
    ])
    def test_handle_api_request_transport_errors(self, exception, fragment):
        mock_request = MagicMock(side_effect=exception)

        with pytest.raises(APIError) as excinfo:
            handle_api_request(mock_request, "https://api.example.com", {"a": 1}, {})

        assert fragment in excinfo.value.message
        assert excinfo.value.endpoint == "https://api.example.com"
        assert excinfo.value.request_data == {"a": 1}

    def test_handle_api_request_invalid_json(self):
        mock_response = MagicMock()
        mock_response.ok = True
        mock_response.status_code = 200
        mock_response.text = "<html>"
        mock_response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        mock_request = MagicMock(return_value=mock_response)

        with pytest.raises(APIError) as excinfo:
            handle_api_request(mock_request, "https://api.example.com", {}, {})

        assert "Failed to parse API response" in excinfo.value.message

    def test_validate_required_fields(self):
        """
        Test required field validation treats blank strings as missing.
        """
        validate_required_fields({"brandName": "Mama's", "cuisineType": "Italian"}, ["brandName", "cuisineType"])

        with pytest.raises(ValidationError) as excinfo:
            validate_required_fields({"brandName": "   ", "cuisineType": "Italian"}, ["brandName", "cuisineType"])
        assert excinfo.value.field == "brandName"
        assert "brandName" in excinfo.value.message

        with pytest.raises(ValidationError) as excinfo:
            validate_required_fields({}, ["brandName"], message="Brand name is required")
        assert excinfo.value.message == "Brand name is required"

    def test_log_api_error_redacts_request_data(self):
        error = APIError(
            message="Test error",
            status_code=500,
            response="Internal server error",
            endpoint="https://api.example.com",
            request_data={"api_key": "secret", "prompt": "lasagna"}
        )

        with patch("chefcampaign.core.error_handler.logger") as mock_logger:
            log_api_error(error)

        logged = " ".join(call.args[0] for call in mock_logger.error.call_args_list)
        assert "Test error" in logged
        assert "500" in logged
        assert "secret" not in logged
        assert "lasagna" in logged
