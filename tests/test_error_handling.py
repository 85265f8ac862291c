"""
Tests for error handling.
Tests custom exceptions, Appwrite error mapping and error response formatting.
"""

import pytest
from fastapi import HTTPException
from unittest.mock import Mock
import json

from restate.appwrite import AppwriteException
from restate.services.error_handler import ErrorHandlerService
from restate.utils.exceptions import (
    APIException,
    NotFoundError,
    UnauthorizedError,
    ServiceUnavailableError,
    PropertyNotFoundError,
    AgentNotFoundError,
    OAuthError
)


class TestExceptions:
    """Test custom exception classes."""

    def test_not_found_detail(self):
        assert NotFoundError("Property").detail == "Property not found"
        assert PropertyNotFoundError("p1").detail == "Property not found with ID: p1"
        assert AgentNotFoundError("a1").detail == "Agent not found with ID: a1"

    @pytest.mark.parametrize("exception,status_code,error_code", [
        (NotFoundError("Property"), 404, "NOT_FOUND"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (ServiceUnavailableError(), 503, "SERVICE_UNAVAILABLE"),
        (OAuthError(), 401, "UNAUTHORIZED"),
    ])
    def test_status_codes(self, exception, status_code, error_code):
        assert isinstance(exception, APIException)
        assert exception.status_code == status_code
        assert exception.error_code == error_code

    def test_package_exports(self):
        """Every exported exception is part of the APIException hierarchy."""
        import restate.utils as utils

        exported = [getattr(utils, name) for name in utils.__all__ if name != "RemoteResource"]
        assert all(issubclass(cls, APIException) for cls in exported)
        assert {cls.__name__ for cls in exported} == {
            "APIException",
            "NotFoundError",
            "UnauthorizedError",
            "ServiceUnavailableError",
            "PropertyNotFoundError",
            "AgentNotFoundError",
            "OAuthError",
        }

    def test_appwrite_exception_fields(self):
        error = AppwriteException("Invalid query", 400, "general_query_invalid", {"code": 400})

        assert str(error) == "Invalid query (400 general_query_invalid)"
        assert str(AppwriteException("Offline")) == "Offline"
        assert error.message == "Invalid query"
        assert error.code == 400
        assert error.type == "general_query_invalid"
        assert error.response == {"code": 400}


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        """Test error response formatting."""
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert len(response["error"]["details"]) == 1
        assert "timestamp" in response["error"]

    def test_format_error_response_minimal(self):
        response = ErrorHandlerService.format_error_response("TEST_ERROR", "Test")

        assert "details" not in response["error"]
        assert "request_id" not in response["error"]

    def test_handle_api_exception(self):
        """Test API exception handling."""
        response = ErrorHandlerService.handle_api_exception(PropertyNotFoundError("p1"))

        assert response.status_code == 404
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "NOT_FOUND"
        assert response_data["error"]["message"] == "Property not found with ID: p1"

    def test_handle_validation_error(self):
        """Test validation error handling."""
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("query", "filter"), "msg": "Invalid filter", "type": "value_error", "input": "Castle"},
            {"loc": ("query", "limit"), "msg": "Too large", "type": "less_than_equal", "input": 500},
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 422
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "VALIDATION_ERROR"
        assert response_data["error"]["details"][0]["field"] == "query -> filter"
        assert response_data["error"]["details"][1]["input"] == 500

    @pytest.mark.parametrize("code,status_code,error_code", [
        (404, 404, "NOT_FOUND"),
        (401, 401, "UNAUTHORIZED"),
        (0, 503, "SERVICE_UNAVAILABLE"),
        (400, 502, "APPWRITE_ERROR"),
        (500, 502, "APPWRITE_ERROR"),
    ])
    def test_handle_appwrite_error(self, code, status_code, error_code):
        """Test mapping of backend failures to API responses."""
        response = ErrorHandlerService.handle_appwrite_error(AppwriteException("Backend said no", code))

        assert response.status_code == status_code
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == error_code
        assert response_data["error"]["message"] == "Backend said no"

    def test_handle_http_exception(self):
        response = ErrorHandlerService.handle_http_exception(HTTPException(status_code=405, detail="Method Not Allowed"))

        assert response.status_code == 405
        assert json.loads(response.body)["error"]["code"] == "HTTP_405"

    def test_handle_unexpected_error(self):
        """Test unexpected error handling."""
        response = ErrorHandlerService.handle_unexpected_error(Exception("Unexpected error"))

        assert response.status_code == 500
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "unexpected error occurred" in response_data["error"]["message"].lower()


class TestAPIErrorResponses:
    """Test error responses through actual endpoints."""

    def test_not_found_error_response_format(self, client):
        response = client.get("/api/v1/properties/missing")

        assert response.status_code == 404
        response_data = response.json()
        assert response_data["error"]["code"] == "NOT_FOUND"
        assert "timestamp" in response_data["error"]

    def test_validation_error_response_format(self, client):
        response = client.get("/api/v1/properties", params={"filter": "Castle"})

        assert response.status_code == 422
        response_data = response.json()
        assert response_data["error"]["code"] == "VALIDATION_ERROR"
        assert response_data["error"]["details"]

    def test_authentication_error_response_format(self, client):
        response = client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"
