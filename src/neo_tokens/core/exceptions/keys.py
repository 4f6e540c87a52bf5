"""Key management exceptions for neo-tokens."""

from .base import NeoTokensError


class KeyManagementError(NeoTokensError):
    """Base exception for symmetric key errors."""
    pass


class EntropyUnavailableError(KeyManagementError):
    """Raised when the secure random source cannot supply bytes."""
    pass


class InvalidKeyLengthError(KeyManagementError):
    """Raised when a key is not 16, 24 or 32 bytes long."""
    pass


class KeyNotConfiguredError(KeyManagementError):
    """Raised when no key is installed and implicit generation is disabled."""
    pass
