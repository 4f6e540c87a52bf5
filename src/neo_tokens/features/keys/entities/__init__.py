"""Key entities and protocols."""

from .key_entry import KeyEntry, validate_key, key_fingerprint
from .protocols import KeyProviderProtocol

__all__ = [
    "KeyEntry",
    "validate_key",
    "key_fingerprint",
    "KeyProviderProtocol",
]
