from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def _base36(value: int) -> str:
    out = ""
    while value:
        value, rem = divmod(value, 36)
        out = _ALPHABET[rem] + out
    return out or "0"


def generate_id() -> str:
    """Opaque id: random base36 prefix plus the current time in base36."""
    prefix = "".join(secrets.choice(_ALPHABET) for _ in range(11))
    return prefix + _base36(int(time.time() * 1000))
