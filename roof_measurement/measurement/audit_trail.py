"""
Session Audit Trail

Append-only log of operations in one measurement session. Each entry carries
a SHA-256 digest of its description for tamper evidence.
"""

import hashlib
import logging
import uuid
from typing import List, Tuple, Union

from ..data_models import AuditAction, AuditEntry, utc_now


def hash_description(description: str) -> str:
    """SHA-256 hex digest of an audit description."""
    return hashlib.sha256(description.encode('utf-8')).hexdigest()


class AuditTrail:
    """Append-only audit log; entries are never reordered or removed."""

    def __init__(self):
        self._entries: List[AuditEntry] = []
        self.logger = logging.getLogger(__name__)

    def record(self,
               action: Union[AuditAction, str],
               user_id: str,
               session_id: str,
               description: str) -> AuditEntry:
        """
        Append a new entry.

        Args:
            action: Audited operation
            user_id: User performing the operation
            session_id: Measurement session identifier
            description: Human-readable description

        Returns:
            The appended entry
        """
        entry = AuditEntry(
            id=f"audit_{uuid.uuid4().hex[:16]}",
            timestamp=utc_now(),
            action=AuditAction(action),
            user_id=user_id,
            session_id=session_id,
            description=description,
            data_hash=hash_description(description),
        )
        self._entries.append(entry)
        self.logger.debug(f"Audit [{entry.action.value}] {session_id}: {description}")
        return entry

    def snapshot(self) -> Tuple[AuditEntry, ...]:
        """Immutable copy of all entries in insertion order."""
        return tuple(self._entries)

    def verify(self) -> bool:
        """Check that every entry's hash still matches its description."""
        return all(e.data_hash == hash_description(e.description) for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))
