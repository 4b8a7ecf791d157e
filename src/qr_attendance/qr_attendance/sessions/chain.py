from __future__ import annotations

from typing import Optional, Sequence

from .model import Session
from .repository import SessionRepository


def session_chain(sessions: SessionRepository, session: Session) -> list[Session]:
    """Every session linked to `session` through supersession, oldest first.

    Regenerating a QR code starts a new session for the same meeting; all
    sessions in one chain describe that single meeting.
    """

    by_id = {s.session_id: s for s in sessions.list_by_subject(session.subject_id)}
    by_id.setdefault(session.session_id, session)

    linked = {session.session_id}
    changed = True
    while changed:
        changed = False
        for s in by_id.values():
            if s.session_id in linked:
                if s.superseded_by and s.superseded_by not in linked and s.superseded_by in by_id:
                    linked.add(s.superseded_by)
                    changed = True
            elif s.superseded_by in linked:
                linked.add(s.session_id)
                changed = True

    chain = [by_id[sid] for sid in linked]
    chain.sort(key=lambda s: s.expires_at)
    return chain


def chain_head(sessions: SessionRepository, session: Session) -> Optional[Session]:
    """The newest session that replaced `session`, or None if it was never replaced."""

    current = session
    seen = {session.session_id}
    while current.superseded_by:
        nxt = sessions.get_by_id(current.superseded_by)
        if nxt is None or nxt.session_id in seen:
            break
        seen.add(nxt.session_id)
        current = nxt
    return current if current is not session else None


def chain_ids(chain: Sequence[Session]) -> set[str]:
    return {s.session_id for s in chain}
