"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["limit"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be greater than or equal to 1"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["greater_than_equal"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error"
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["NOT_FOUND"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    details: Optional[List[ErrorDetail]] = None


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _example(description: str, code: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": code,
                        "message": message,
                        "timestamp": "2024-01-01T00:00:00Z",
                        "request_id": "abc12345"
                    }
                }
            }
        }
    }


# Common error response examples for documentation
COMMON_ERROR_RESPONSES = {
    400: _example("Bad Request - Invalid request parameters", "BAD_REQUEST", "Invalid request parameters"),
    401: _example("Unauthorized - Session required", "UNAUTHORIZED", "Authentication required"),
    404: _example("Not Found - Document does not exist", "NOT_FOUND", "Property not found with ID: 65f0c1"),
    422: _example("Unprocessable Entity - Validation failed", "VALIDATION_ERROR", "Request validation failed"),
    500: _example("Internal Server Error", "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
    502: _example("Bad Gateway - Appwrite rejected the request", "APPWRITE_ERROR", "Backend request failed"),
    503: _example("Service Unavailable - Appwrite unreachable", "SERVICE_UNAVAILABLE", "Service temporarily unavailable"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication error response schemas."""
    return get_error_responses(401, 502)


def get_read_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for document reads."""
    return get_error_responses(404, 422, 500)
