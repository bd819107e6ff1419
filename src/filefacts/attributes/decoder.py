"""Attribute decoding for filefacts.

Attributes are carried as a Windows-style bitmask.  On Windows the mask comes
straight from ``st_file_attributes``; on other platforms the same bits are
synthesized from ``lstat`` so the decoder sees one representation everywhere.
"""

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class FileAttribute(enum.IntFlag):
    READONLY = 0x0001
    HIDDEN = 0x0002
    SYSTEM = 0x0004
    DIRECTORY = 0x0010
    ARCHIVE = 0x0020
    NORMAL = 0x0080
    REPARSE_POINT = 0x0400


_KNOWN_MASK = sum(member.value for member in FileAttribute)


@dataclass(frozen=True)
class AttributeFlags:
    hidden: bool
    read_only: bool
    is_symlink: bool


def decode_attributes(mask: int) -> AttributeFlags:
    """Split an attribute bitmask into independent boolean flags.

    Each flag is tested on its own bit, so any combination may be set.
    Unknown bits are ignored.
    """
    mask = int(mask)
    return AttributeFlags(
        hidden=bool(mask & FileAttribute.HIDDEN),
        read_only=bool(mask & FileAttribute.READONLY),
        is_symlink=bool(mask & FileAttribute.REPARSE_POINT),
    )


def read_attributes(path: Path, st: Optional[os.stat_result] = None) -> FileAttribute:
    """Return the attribute bitmask of ``path`` without following links.

    Args:
        path: Entry to inspect.
        st: A result of ``os.lstat(path)`` if the caller already has one.

    Raises:
        OSError: if ``path`` cannot be stat'ed.
    """
    if st is None:
        st = os.lstat(path)
    win_attrs = getattr(st, 'st_file_attributes', None)
    if win_attrs is not None:
        return FileAttribute(win_attrs & _KNOWN_MASK)

    mask = FileAttribute(0)
    name = Path(path).name
    dotfile = name.startswith('.') and name not in ('.', '..')
    if dotfile or getattr(st, 'st_flags', 0) & getattr(stat, 'UF_HIDDEN', 0):
        mask |= FileAttribute.HIDDEN
    if not st.st_mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH):
        mask |= FileAttribute.READONLY
    if stat.S_ISLNK(st.st_mode):
        mask |= FileAttribute.REPARSE_POINT
    if stat.S_ISDIR(st.st_mode):
        mask |= FileAttribute.DIRECTORY
    if not mask:
        mask = FileAttribute.NORMAL
    return mask
