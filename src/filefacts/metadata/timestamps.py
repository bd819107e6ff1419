"""Timestamp mutation for filefacts."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def _to_ns(when: datetime) -> int:
    return int(round(when.timestamp() * 1_000_000)) * 1000


def set_times(
    path: Path,
    created: Optional[datetime] = None,
    accessed: Optional[datetime] = None,
    modified: Optional[datetime] = None,
) -> bool:
    """Apply the supplied timestamps to ``path``.

    Only the values given are changed.  Naive datetimes are taken as local
    time.  Creation time can only be set on Windows; elsewhere supplying it
    makes the call fail.

    Returns:
        ``True`` if every supplied value was applied (vacuously so when none
        were given), ``False`` if the path is missing or the OS rejected a
        change.
    """
    path = Path(path)
    if not path.exists():
        return False
    try:
        if created is not None:
            if os.name != 'nt':
                logger.warning('Cannot set creation time of %s on this platform', path)
                return False
            from .. import _win32

            _win32.set_creation_time(str(path), created)
        if accessed is not None or modified is not None:
            st = path.stat()
            atime_ns = _to_ns(accessed) if accessed is not None else st.st_atime_ns
            mtime_ns = _to_ns(modified) if modified is not None else st.st_mtime_ns
            os.utime(path, ns=(atime_ns, mtime_ns))
    except (OSError, OverflowError, ValueError) as exc:
        logger.warning('Could not set timestamps of %s: %s', path, exc)
        return False
    return True
