"""Exclusive-lock probing for filefacts.

A file is considered locked when it cannot be opened for read/write access
with no sharing.  The probe never holds the handle past the check.

On POSIX systems there is no share mode, so the probe takes non-blocking
``flock`` and ``lockf`` exclusive locks on a read/write descriptor instead.
These only see advisory locks held by other processes (``lockf`` locks held
by the calling process are invisible to it).
"""

from __future__ import annotations

import enum
import errno
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

_CONTENTION_ERRNOS = {errno.EAGAIN, errno.EWOULDBLOCK, errno.EACCES}


class LockState(enum.Enum):
    UNLOCKED = 'unlocked'
    LOCKED = 'locked'
    ERROR = 'error'


def _probe_windows(path: Path) -> LockState:
    from .. import _win32

    try:
        _win32.try_exclusive_open(str(path))
    except OSError as exc:
        if getattr(exc, 'winerror', None) in (_win32.ERROR_SHARING_VIOLATION, _win32.ERROR_LOCK_VIOLATION):
            return LockState.LOCKED
        logger.debug('Lock probe failed on %s: %s', path, exc)
        return LockState.ERROR
    return LockState.UNLOCKED


def _probe_posix(path: Path) -> LockState:
    import fcntl

    try:
        fd = os.open(path, os.O_RDWR)
    except OSError as exc:
        logger.debug('Lock probe could not open %s: %s', path, exc)
        return LockState.ERROR
    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        fcntl.flock(fd, fcntl.LOCK_UN)
        fcntl.lockf(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        fcntl.lockf(fd, fcntl.LOCK_UN)
    except OSError as exc:
        if exc.errno in _CONTENTION_ERRNOS:
            return LockState.LOCKED
        logger.debug('Lock probe failed on %s: %s', path, exc)
        return LockState.ERROR
    finally:
        os.close(fd)
    return LockState.UNLOCKED


def probe_lock(path: Path) -> LockState:
    """Return the lock state of ``path``.

    ``ERROR`` covers every failure that is not a sharing conflict, such as a
    missing path, denied access or a directory.
    """
    if os.name == 'nt':
        state = _probe_windows(Path(path))
    else:
        state = _probe_posix(Path(path))
    logger.debug('Lock probe of %s: %s', path, state.value)
    return state


def is_locked(path: Path) -> bool:
    """Return ``True`` unless ``path`` could be opened exclusively.

    Errors count as locked; use ``probe_lock`` to tell them apart.
    """
    return probe_lock(path) is not LockState.UNLOCKED
