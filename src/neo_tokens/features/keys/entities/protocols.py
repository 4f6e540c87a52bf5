"""Protocol interfaces for the keys feature."""

from abc import abstractmethod
from typing import Protocol, Sequence, runtime_checkable

from .key_entry import KeyEntry


@runtime_checkable
class KeyProviderProtocol(Protocol):
    """Supplies the active key and the keys still accepted for decoding."""
    
    @abstractmethod
    def get(self) -> bytes:
        """Return the active key bytes."""
        ...
    
    @abstractmethod
    def active_entry(self) -> KeyEntry:
        """Return the active key entry."""
        ...
    
    @abstractmethod
    def verification_entries(self) -> Sequence[KeyEntry]:
        """Return every known key entry, newest first."""
        ...
