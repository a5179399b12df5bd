"""Custom exceptions for the Blog API.

Every handler raises one of these; `blog_api.core.error_handlers` turns them
into the `{"success": false, "message": ...}` envelope.
"""

from fastapi import HTTPException, status


class BlogAPIException(HTTPException):
    """Base exception for API errors."""
    pass


class BadRequestException(BlogAPIException):
    """Exception for requests that are well-formed but cannot be applied."""

    def __init__(self, detail: str = "Bad request"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class UnauthenticatedException(BlogAPIException):
    """Exception when the bearer token is missing, invalid, expired or revoked.

    The message is deliberately the same for every cause.
    """

    def __init__(self, detail: str = "Not authorized to access this route"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsException(UnauthenticatedException):
    """Exception when email or password is wrong at login."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail)


class ForbiddenException(BlogAPIException):
    """Exception when the principal is known but lacks the rights."""

    def __init__(self, detail: str = "Not authorized to perform this action"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundException(BlogAPIException):
    """
    Exception when a referenced entity does not exist.

    Usage:
        >>> raise NotFoundException("Post")
        >>> # {"success": false, "message": "Post not found"}
    """

    def __init__(self, resource: str = "Resource", detail: str = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} not found",
        )


class ConflictException(BlogAPIException):
    """Exception for uniqueness violations (duplicate email, category name)."""

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


__all__ = [
    "BlogAPIException",
    "BadRequestException",
    "UnauthenticatedException",
    "InvalidCredentialsException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
]
