"""Name generation for created clusters and VMs."""

import random
import string
from datetime import datetime
from typing import Optional

CHARSET = string.ascii_lowercase + string.digits
RANDOM_SUFFIX_LENGTH = 10

_random = random.SystemRandom()


def random_string(length: int) -> str:
    return "".join(_random.choice(CHARSET) for _ in range(length))


def generate_name(prefix: str, now: Optional[datetime] = None) -> str:
    """Return ``<prefix>-<MMDDYY>-<random suffix>``, e.g. ``gke-101926-a1b2c3d4e5``."""
    date = (now or datetime.now()).strftime("%m%d%y")
    return f"{prefix}-{date}-{random_string(RANDOM_SUFFIX_LENGTH)}"
