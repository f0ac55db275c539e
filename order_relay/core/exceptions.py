from fastapi import status
from typing import Any, Dict, Optional, Union


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                "status_code": self.status_code,
                "context": self.context
            }
        }


class UpstreamUnavailableError(APIException):
    """
    Raised when the commerce API or the push provider cannot be reached
    or answers with an error status.

    The upstream response body is kept on the exception for logging and
    is never copied into the response context.
    """

    def __init__(
        self,
        detail: str = "Upstream service unavailable",
        code: str = "upstream_unavailable",
        upstream_status: Optional[int] = None,
        upstream_body: Any = None,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        merged_context = {}
        if upstream_status is not None:
            merged_context["upstream_status"] = upstream_status
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            code=code,
            context=merged_context
        )
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        self.original_exception = original_exception

    def with_detail(self, detail: str) -> "UpstreamUnavailableError":
        """Return a copy carrying a caller-facing message."""
        return UpstreamUnavailableError(
            detail=detail,
            code=self.code,
            upstream_status=self.upstream_status,
            upstream_body=self.upstream_body,
            context=dict(self.context),
            original_exception=self.original_exception or self
        )


class InvalidInputError(APIException):
    """Raised when a request carries nothing usable (e.g. no push token)."""

    def __init__(
        self,
        detail: str = "Invalid input",
        code: str = "invalid_input",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            context=merged_context
        )


class NotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Union[str, int],
        detail: Optional[str] = None,
        code: str = "not_found_error",
        context: Optional[Dict[str, Any]] = None
    ):
        if detail is None:
            detail = f"{resource_type} with id '{resource_id}' not found"

        merged_context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id)
        }
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            context=merged_context
        )


class PersistenceError(APIException):
    """Raised when the device token store cannot be read or written."""

    def __init__(
        self,
        detail: str = "Device store error",
        code: str = "persistence_error",
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=code
        )
        self.original_exception = original_exception


class AdaptorConfigError(APIException):
    """Raised when an adaptor or provider cannot be built from settings."""

    def __init__(self, detail: str = "Invalid adaptor configuration"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code="adaptor_config_error"
        )
