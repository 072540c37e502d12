"""API error definitions.

All API errors are defined here with their corresponding HTTP status codes.
"""

from enum import Enum


class ApiErrorCode(str, Enum):
    """Standardized error codes for the API.

    Format: E_CATEGORY_NAME
    """

    # Validation errors (400)
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_CONTENT_REQUIRED = "E_CONTENT_REQUIRED"
    E_WINNER_REQUIRED = "E_WINNER_REQUIRED"
    E_INVALID_WINNER = "E_INVALID_WINNER"
    E_CATEGORY_REQUIRED = "E_CATEGORY_REQUIRED"

    # Not found errors (404)
    E_NOT_FOUND = "E_NOT_FOUND"
    E_USER_NOT_FOUND = "E_USER_NOT_FOUND"
    E_CHAT_NOT_FOUND = "E_CHAT_NOT_FOUND"
    E_TURN_NOT_FOUND = "E_TURN_NOT_FOUND"
    E_CATEGORY_NOT_FOUND = "E_CATEGORY_NOT_FOUND"

    # Conflict errors (409)
    E_TURN_ALREADY_VOTED = "E_TURN_ALREADY_VOTED"
    E_TURN_NOT_ACCEPTING_MESSAGES = "E_TURN_NOT_ACCEPTING_MESSAGES"

    # Server errors
    E_INTERNAL = "E_INTERNAL"  # 500
    E_STREAM_TIMEOUT = "E_STREAM_TIMEOUT"  # 504, only ever sent in-band


# Error code to HTTP status mapping
ERROR_CODE_TO_STATUS: dict[ApiErrorCode, int] = {
    ApiErrorCode.E_INVALID_REQUEST: 400,
    ApiErrorCode.E_CONTENT_REQUIRED: 400,
    ApiErrorCode.E_WINNER_REQUIRED: 400,
    ApiErrorCode.E_INVALID_WINNER: 400,
    ApiErrorCode.E_CATEGORY_REQUIRED: 400,
    ApiErrorCode.E_NOT_FOUND: 404,
    ApiErrorCode.E_USER_NOT_FOUND: 404,
    ApiErrorCode.E_CHAT_NOT_FOUND: 404,
    ApiErrorCode.E_TURN_NOT_FOUND: 404,
    ApiErrorCode.E_CATEGORY_NOT_FOUND: 404,
    ApiErrorCode.E_TURN_ALREADY_VOTED: 409,
    ApiErrorCode.E_TURN_NOT_ACCEPTING_MESSAGES: 409,
    ApiErrorCode.E_INTERNAL: 500,
    ApiErrorCode.E_STREAM_TIMEOUT: 504,
}


class ApiError(Exception):
    """Base exception for API errors.

    Attributes:
        code: The error code enum value
        message: Human-readable error message
        status_code: HTTP status code (derived from code)
    """

    def __init__(self, code: ApiErrorCode, message: str):
        self.code = code
        self.message = message
        self.status_code = ERROR_CODE_TO_STATUS.get(code, 500)
        super().__init__(message)


class NotFoundError(ApiError):
    """Resource not found error."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_NOT_FOUND, message: str = "Not found"):
        super().__init__(code, message)


class InvalidRequestError(ApiError):
    """Invalid request error."""

    def __init__(
        self, code: ApiErrorCode = ApiErrorCode.E_INVALID_REQUEST, message: str = "Invalid request"
    ):
        super().__init__(code, message)


class ConflictError(ApiError):
    """Operation conflicts with the current state of a resource."""

    def __init__(self, code: ApiErrorCode, message: str = "Conflict"):
        super().__init__(code, message)


class StreamTimeoutError(ApiError):
    """A stream ran past its deadline."""

    def __init__(self, message: str = "Stream timed out"):
        super().__init__(ApiErrorCode.E_STREAM_TIMEOUT, message)
