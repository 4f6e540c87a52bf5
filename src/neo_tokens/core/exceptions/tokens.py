"""Token exceptions for neo-tokens.

InvalidTokenError is the only failure business logic needs to handle. The
DecodeError subclasses keep the finer-grained cause for internal logging.
"""

from .base import NeoTokensError


class TokenError(NeoTokensError):
    """Base exception for token errors."""
    pass


class InvalidTokenError(TokenError):
    """Raised when a token cannot be accepted."""
    pass


class DecodeError(InvalidTokenError):
    """Raised when any decode stage rejects a token."""
    pass


class Base64DecodeError(DecodeError):
    """Raised when the token text is not valid standard base64."""
    pass


class CiphertextTooShortError(DecodeError):
    """Raised when the decoded token is shorter than one cipher block."""
    pass


class DeserializeError(DecodeError):
    """Raised when decrypted bytes are not a well-formed payload."""
    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when a token falls outside its validity window."""
    pass


class TokenIssueError(NeoTokensError):
    """Raised when a token cannot be issued from the given inputs.
    
    A server-side fault, so it sits outside the TokenError subtree.
    """
    pass
