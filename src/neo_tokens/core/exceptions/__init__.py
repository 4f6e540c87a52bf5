"""Exceptions module for neo-tokens.

This module provides the complete exception hierarchy for neo-tokens,
organized by key management and token concerns.
"""

from .base import (
    NeoTokensError,
    ConfigurationError,
    get_http_status_code,
    create_error_response,
)

from .keys import (
    KeyManagementError,
    EntropyUnavailableError,
    InvalidKeyLengthError,
    KeyNotConfiguredError,
)

from .tokens import (
    TokenError,
    InvalidTokenError,
    DecodeError,
    Base64DecodeError,
    CiphertextTooShortError,
    DeserializeError,
    TokenExpiredError,
    TokenIssueError,
)

__all__ = [
    # Base
    "NeoTokensError",
    "ConfigurationError",
    "get_http_status_code",
    "create_error_response",
    
    # Key management
    "KeyManagementError",
    "EntropyUnavailableError",
    "InvalidKeyLengthError",
    "KeyNotConfiguredError",
    
    # Tokens
    "TokenError",
    "InvalidTokenError",
    "DecodeError",
    "Base64DecodeError",
    "CiphertextTooShortError",
    "DeserializeError",
    "TokenExpiredError",
    "TokenIssueError",
]
