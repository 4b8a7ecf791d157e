from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ClosedReason
from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Session]:
        raise NotImplementedError

    def list_by_subject(self, subject_id: str) -> Sequence[Session]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Session]:
        raise NotImplementedError

    def create(self, session: Session) -> str:
        raise NotImplementedError

    def mark_superseded(self, session_id: str, *, superseded_by: str) -> bool:
        raise NotImplementedError

    def close(self, session_id: str, *, end_time: str, reason: ClosedReason) -> Optional[Session]:
        """Flip an active session to inactive.

        Returns the closed session, or None when it was not active (already
        closed or unknown). The check and the write happen in one store cycle.
        """

        raise NotImplementedError
