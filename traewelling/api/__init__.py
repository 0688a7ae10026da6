"""
API integration for the Traewelling desktop client.

This module handles communication with the Träwelling REST API,
including rate limiting, error handling, and response parsing.
"""

from .api_manager import (
    APIException,
    AuthenticationException,
    DataParsingException,
    NetworkException,
    NotFoundException,
    RateLimitException,
    TraewellingAPIManager,
)

__all__ = [
    "APIException",
    "AuthenticationException",
    "DataParsingException",
    "NetworkException",
    "NotFoundException",
    "RateLimitException",
    "TraewellingAPIManager",
]
