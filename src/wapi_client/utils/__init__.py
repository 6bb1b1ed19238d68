"""Utility functions and exceptions."""

from .exceptions import (
    MatchClientValidationError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
    WAPIAPIError,
    WAPIAuthenticationError,
    WAPIClientError,
    WAPIRateLimitError,
)

__all__ = [
    "WAPIClientError",
    "ValidationError",
    "MatchClientValidationError",
    "ResourceNotFoundError",
    "WAPIAPIError",
    "ResourceAlreadyExistsError",
    "WAPIRateLimitError",
    "WAPIAuthenticationError",
]
