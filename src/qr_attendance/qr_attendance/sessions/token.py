"""Session token carried in the QR code.

Wire format: a JSON object
`{"sessionId", "subjectId", "classId", "teacherId", "timestamp"}` where
`timestamp` is epoch milliseconds at session creation.
"""

from __future__ import annotations

import json

from ..core.exceptions import MalformedTokenError
from .model import TokenPayload

_REQUIRED = ("sessionId", "subjectId", "classId")


def encode_token(payload: TokenPayload) -> str:
    return json.dumps(
        {
            "sessionId": payload.session_id,
            "subjectId": payload.subject_id,
            "classId": payload.class_id,
            "teacherId": payload.teacher_id,
            "timestamp": payload.timestamp,
        }
    )


def parse_token(raw: object) -> TokenPayload:
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedTokenError()
    try:
        data = json.loads(raw)
    except ValueError:
        raise MalformedTokenError()
    if not isinstance(data, dict):
        raise MalformedTokenError()

    for key in _REQUIRED:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise MalformedTokenError()

    teacher_id = data.get("teacherId") or ""
    timestamp = data.get("timestamp") or 0
    if not isinstance(teacher_id, str) or isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise MalformedTokenError()

    return TokenPayload(
        session_id=data["sessionId"],
        subject_id=data["subjectId"],
        class_id=data["classId"],
        teacher_id=teacher_id,
        timestamp=int(timestamp),
    )
