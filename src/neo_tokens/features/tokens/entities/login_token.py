"""Login token payload entities."""

from dataclasses import dataclass
from typing import Any, Dict

from ....core.exceptions.tokens import DeserializeError, TokenIssueError
from ....utils.varint import INT64_MAX, INT64_MIN

ISSUED_AT_FIELD = "t"
SUBJECT_ID_FIELD = "u"


def _is_int64(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX


@dataclass(frozen=True)
class LoginTokenPayload:
    """Subject identity bound to an issue time."""
    
    issued_at: int
    subject_id: int
    
    def __post_init__(self):
        if not _is_int64(self.issued_at):
            raise TokenIssueError(
                "issued_at must be a signed 64-bit int",
                details={"field": "issued_at", "type": type(self.issued_at).__name__},
            )
        if not _is_int64(self.subject_id):
            raise TokenIssueError(
                "subject_id must be a signed 64-bit int",
                details={"field": "subject_id", "type": type(self.subject_id).__name__},
            )
    
    def to_wire(self) -> Dict[str, int]:
        """Record in wire field order: issue time, then subject."""
        return {ISSUED_AT_FIELD: self.issued_at, SUBJECT_ID_FIELD: self.subject_id}
    
    @classmethod
    def from_wire(cls, record: Any) -> "LoginTokenPayload":
        """Validate a decoded record.
        
        Raises:
            DeserializeError: Unless the record has exactly the `t` and `u` integer fields
        """
        if not isinstance(record, dict):
            raise DeserializeError(
                "Login token payload is not a record",
                details={"type": type(record).__name__},
            )
        if set(record) != {ISSUED_AT_FIELD, SUBJECT_ID_FIELD}:
            raise DeserializeError("Login token payload has unexpected fields")
        
        issued_at = record[ISSUED_AT_FIELD]
        subject_id = record[SUBJECT_ID_FIELD]
        if not _is_int64(issued_at) or not _is_int64(subject_id):
            raise DeserializeError("Login token payload fields must be 64-bit integers")
        return cls(issued_at=issued_at, subject_id=subject_id)


@dataclass(frozen=True)
class ResolvedLoginToken:
    """Result of resolving a login token."""
    
    subject_id: int
    issued_at: int
    key_id: str
    needs_reissue: bool = False
