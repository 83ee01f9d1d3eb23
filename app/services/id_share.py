"""
Share ID generation for leave requests.
Format: PREFIX-YYYYMMDD-HHMMSS-XXXXXX, e.g. ELR-20240115-093012-K7Q2ZD.
"""

import re
import secrets
import string
from datetime import datetime, timezone
from typing import Optional

from app.core.config import settings

SUFFIX_LENGTH = 6
PREFIX_PATTERN = re.compile(r"[A-Z0-9]+")
ID_SHARE_PATTERN = re.compile(r"^[A-Z0-9]+-\d{8}-\d{6}-[A-Z0-9]{6}$")

_ALPHABET = string.ascii_uppercase + string.digits


def generate_id_share(now: Optional[datetime] = None, prefix: Optional[str] = None) -> str:
    """
    Generate a human-shareable identifier for a new leave request.

    Rules:
    - Prefix from settings (ELR by default), upper-cased; letters and digits only.
    - UTC date and time of generation.
    - 6 random uppercase alphanumerics (36^6 combinations per second).

    Production-safe: uses secrets for the random part.
    """
    now = now or datetime.now(timezone.utc)
    prefix = (prefix or settings.id_share_prefix).strip().upper()
    if not PREFIX_PATTERN.fullmatch(prefix):
        raise ValueError(f"Share ID prefix must be letters and digits only, got {prefix!r}")
    random_part = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{now:%Y%m%d}-{now:%H%M%S}-{random_part}"
