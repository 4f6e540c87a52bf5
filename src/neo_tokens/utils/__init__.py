"""Utilities module for neo-tokens.

This module provides utility functions and helpers used throughout
the neo-tokens library.
"""

from .timezone import *
from .entropy import RandomSource, secure_random_bytes
from .varint import encode_varint, decode_varint
from .locks import ReadWriteLock

__all__ = [
    # Timezone Utilities
    "utc_timestamp",
    "SystemClock",
    # Secure Randomness
    "RandomSource",
    "secure_random_bytes",
    # Varint Encoding
    "encode_varint",
    "decode_varint",
    # Locking
    "ReadWriteLock",
]
