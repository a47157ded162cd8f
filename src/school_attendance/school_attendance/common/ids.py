from __future__ import annotations

import secrets
import string
import time

from ..core.constants import ID_RANDOM_LENGTH

_ALPHABET = string.digits + string.ascii_lowercase


def new_id(prefix: str) -> str:
    """Generate ``<prefix>_<epoch-millis>_<random base36>`` identities."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(ID_RANDOM_LENGTH))
    return f"{prefix}_{millis}_{suffix}"
