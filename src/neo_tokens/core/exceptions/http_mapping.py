"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .base import ConfigurationError, NeoTokensError
from .keys import (
    EntropyUnavailableError,
    InvalidKeyLengthError,
    KeyManagementError,
    KeyNotConfiguredError,
)
from .tokens import InvalidTokenError, TokenError, TokenIssueError


# Most specific classes first; lookup walks the MRO.
HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 401 Unauthorized
    InvalidTokenError: 401,
    TokenError: 401,
    
    # 500 Internal Server Error
    InvalidKeyLengthError: 500,
    ConfigurationError: 500,
    KeyManagementError: 500,
    TokenIssueError: 500,
    NeoTokensError: 500,
    
    # 503 Service Unavailable
    EntropyUnavailableError: 503,
    KeyNotConfiguredError: 503,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception instance.
    
    Args:
        exception: The exception instance
        
    Returns:
        HTTP status code, 500 for anything unmapped
    """
    for exception_class in type(exception).__mro__:
        status_code = HTTP_STATUS_MAP.get(exception_class)
        if status_code is not None:
            return status_code
    return 500
