"""
Custom Exception Classes for the page CMS

This module defines the error taxonomy raised by the content lifecycle
engine. Every exception carries the HTTP status the transport layer should
answer with, so handlers stay a thin translation.
"""

from typing import Any

from fastapi import status


class CMSException(Exception):
    """Base exception class for all CMS-related exceptions"""

    error_code = "CMS_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(CMSException):
    """Base class for resource not found errors"""

    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": str(resource_id) if resource_id else None},
        )


class PageNotFoundError(ResourceNotFoundError):
    """Raised when a page is not found"""

    error_code = "PAGE_NOT_FOUND"

    def __init__(self, page_id: Any | None = None):
        super().__init__(resource_type="Page", resource_id=page_id)


class ContentNotFoundError(ResourceNotFoundError):
    """Raised when a content version is not found"""

    error_code = "CONTENT_NOT_FOUND"

    def __init__(self, content_id: Any | None = None):
        super().__init__(resource_type="Content", resource_id=content_id)


class RevisionNotFoundError(ResourceNotFoundError):
    """Raised when a revision is not found"""

    error_code = "REVISION_NOT_FOUND"

    def __init__(self, revision_id: Any | None = None):
        super().__init__(resource_type="Revision", resource_id=revision_id)


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(CMSException):
    """Raised when input validation fails"""

    error_code = "INVALID_INPUT"

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class MissingContentError(ValidationError):
    """Raised when a page is created without any content"""

    error_code = "MISSING_CONTENT"

    def __init__(self, message: str = "A page must be created with exactly one content"):
        super().__init__(message=message, field="contents")


class TooMuchContentError(ValidationError):
    """Raised when a page is created with more than one content"""

    error_code = "TOO_MUCH_CONTENT"

    def __init__(self, message: str = "A page can only be created with one content"):
        super().__init__(message=message, field="contents")


class InvalidEnumValueError(ValidationError):
    """Raised when a language, mode or status code is not recognised"""

    error_code = "INVALID_ENUM_VALUE"

    def __init__(self, field: str, value: Any, allowed: list[str]):
        super().__init__(
            message=f"Invalid {field} '{value}'",
            field=field,
            details={"value": value, "allowed": allowed},
        )


class NoRevisionFoundError(ValidationError):
    """Raised when an operation that records history receives no revision"""

    error_code = "NO_REVISION_FOUND"

    def __init__(self, message: str = "A revision is required for this operation"):
        super().__init__(message=message, field="revision")


class NoNewContentToDuplicateError(ValidationError):
    """Raised when a page has no active content to duplicate"""

    error_code = "NO_NEW_CONTENT_TO_DUPLICATE"

    def __init__(self, page_id: Any | None = None):
        super().__init__(
            message="Page has no content to duplicate",
            details={"page_id": str(page_id) if page_id else None},
        )


class DuplicateResourceError(CMSException):
    """Raised when attempting to create a duplicate resource"""

    error_code = "DUPLICATE_RESOURCE"

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value},
        )


class DuplicateURLError(DuplicateResourceError):
    """Raised when a URL is already used by another page"""

    error_code = "DUPLICATE_URL"

    def __init__(self, url: str):
        super().__init__(resource_type="Content", field="url", value=url)


class DuplicateUrlAliasError(DuplicateResourceError):
    """Raised when a URL alias is already used by another page"""

    error_code = "DUPLICATE_URL_ALIAS"

    def __init__(self, url_alias: str):
        super().__init__(resource_type="Content", field="url_alias", value=url_alias)


class ContentConflictError(CMSException):
    """Raised when a concurrent write already took the live or preview slot"""

    error_code = "CONTENT_CONFLICT"

    def __init__(self, page_kind: str):
        super().__init__(
            message=f"Another change to this {page_kind} page was saved first, reload and retry",
            status_code=status.HTTP_409_CONFLICT,
            details={"page_kind": page_kind},
        )


class InvalidOperationError(CMSException):
    """Raised when an operation is invalid in the current context"""

    error_code = "INVALID_OPERATION"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details or {})


# ============================================================================
# Database & Service Exceptions
# ============================================================================


class DatabaseError(CMSException):
    """Raised when a database operation fails"""

    error_code = "DATABASE_ERROR"

    def __init__(self, message: str = "A database error occurred", operation: str | None = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
