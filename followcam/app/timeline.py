"""Time lookups over ordered pointer samples."""

import bisect
from typing import Optional, Sequence

from .models import Sample


def find_last_index(samples: Sequence[Sample], t: float) -> Optional[int]:
    """Index of the last sample with ``timestamp <= t``.

    Returns ``None`` when *samples* is empty or every sample is after
    *t*.  Among equal timestamps the highest index wins.  O(log n).
    """
    idx = bisect.bisect_right(samples, t, key=lambda s: s.timestamp) - 1
    return idx if idx >= 0 else None
