"""Thin ctypes wrappers around kernel32 used on Windows only."""

from __future__ import annotations

import ctypes
from ctypes import wintypes
from datetime import datetime

GENERIC_READ = 0x80000000
GENERIC_WRITE = 0x40000000
FILE_WRITE_ATTRIBUTES = 0x0100
OPEN_EXISTING = 3
FILE_FLAG_BACKUP_SEMANTICS = 0x02000000
INVALID_HANDLE_VALUE = wintypes.HANDLE(-1).value

ERROR_SHARING_VIOLATION = 32
ERROR_LOCK_VIOLATION = 33

# 100ns intervals between 1601-01-01 and 1970-01-01
_EPOCH_DIFF = 116444736000000000


def _kernel32():
    kernel32 = ctypes.WinDLL('kernel32', use_last_error=True)
    kernel32.CreateFileW.argtypes = [
        wintypes.LPCWSTR, wintypes.DWORD, wintypes.DWORD, wintypes.LPVOID,
        wintypes.DWORD, wintypes.DWORD, wintypes.HANDLE,
    ]
    kernel32.CreateFileW.restype = wintypes.HANDLE
    kernel32.CloseHandle.argtypes = [wintypes.HANDLE]
    kernel32.CloseHandle.restype = wintypes.BOOL
    kernel32.SetFileTime.argtypes = [
        wintypes.HANDLE, ctypes.POINTER(wintypes.FILETIME),
        ctypes.POINTER(wintypes.FILETIME), ctypes.POINTER(wintypes.FILETIME),
    ]
    kernel32.SetFileTime.restype = wintypes.BOOL
    return kernel32


def _open(kernel32, path: str, access: int, share: int, flags: int = 0):
    handle = kernel32.CreateFileW(path, access, share, None, OPEN_EXISTING, flags, None)
    if handle == INVALID_HANDLE_VALUE:
        raise ctypes.WinError(ctypes.get_last_error())
    return handle


def try_exclusive_open(path: str) -> None:
    """Open ``path`` for read/write with no sharing, then close it.

    Raises ``OSError`` (with ``winerror`` set) when the open fails.
    """
    kernel32 = _kernel32()
    handle = _open(kernel32, path, GENERIC_READ | GENERIC_WRITE, 0)
    kernel32.CloseHandle(handle)


def set_creation_time(path: str, when: datetime) -> None:
    kernel32 = _kernel32()
    ticks = int(when.timestamp() * 10_000_000) + _EPOCH_DIFF
    filetime = wintypes.FILETIME(ticks & 0xFFFFFFFF, ticks >> 32)
    handle = _open(kernel32, path, FILE_WRITE_ATTRIBUTES, 0x7, FILE_FLAG_BACKUP_SEMANTICS)
    try:
        if not kernel32.SetFileTime(handle, ctypes.byref(filetime), None, None):
            raise ctypes.WinError(ctypes.get_last_error())
    finally:
        kernel32.CloseHandle(handle)
