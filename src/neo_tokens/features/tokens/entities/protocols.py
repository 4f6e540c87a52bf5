"""Protocol interfaces for the tokens feature."""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class CredentialEventSourceProtocol(Protocol):
    """Identity store view used to reject tokens issued before a credential change."""
    
    @abstractmethod
    def get_credentials_changed_at(self, subject_id: int) -> Optional[int]:
        """Unix time of the subject's latest log-out-everywhere event, if any."""
        ...
