"""Metadata façade for filefacts.

``MetadataView`` collects what is known about one filesystem entry.  Two
kinds of accessor are exposed:

* frozen at construction: attribute flags (``is_hidden``, ``is_read_only``,
  ``is_symlink``) and version strings.  These are never re-read, so they can
  go stale if the file changes.
* fresh on every call: ``file_info``, sizes, digests and lock state.  Each
  opens and closes its own handle.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..attributes.decoder import FileAttribute, decode_attributes, read_attributes
from ..digest.engine import DEFAULT_CHUNK_SIZE, DigestResult, HashAlgorithm, compute_digest, compute_digests
from ..locking.probe import LockState, probe_lock
from ..size.formatter import format_size
from ..versioning.resource import VersionInfo, read_version_info
from .timestamps import set_times


@dataclass
class FileInfo:
    path: Path
    size_bytes: int
    created: Optional[datetime]
    accessed: datetime
    modified: datetime
    is_file: bool
    is_dir: bool
    is_symlink: bool


def _from_timestamp(ts: float) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone.utc)


def _created_time(st: os.stat_result) -> Optional[datetime]:
    # st_ctime is the inode change time on POSIX, creation time only on Windows
    birth = getattr(st, 'st_birthtime', None)
    if birth is not None:
        return _from_timestamp(birth)
    if os.name == 'nt':
        return _from_timestamp(st.st_ctime)
    return None


def stat_file_info(path: Path) -> FileInfo:
    """Stat ``path`` (following links) and return a ``FileInfo``."""
    path = Path(path)
    st = path.stat()
    return FileInfo(
        path=path,
        size_bytes=st.st_size,
        created=_created_time(st),
        accessed=_from_timestamp(st.st_atime),
        modified=_from_timestamp(st.st_mtime),
        is_file=stat.S_ISREG(st.st_mode),
        is_dir=stat.S_ISDIR(st.st_mode),
        is_symlink=path.is_symlink(),
    )


class MetadataView:
    """Facts about a single filesystem entry.

    Construction stats the entry, snapshots its attributes and reads its
    version resource.  A missing path or unreadable attributes raise
    ``OSError``; unreadable content only leaves the version strings empty.
    """

    def __init__(self, path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.path = Path(path)
        self.chunk_size = chunk_size
        self.attributes: FileAttribute = read_attributes(self.path)
        flags = decode_attributes(self.attributes)
        self.hidden = flags.hidden
        self.read_only = flags.read_only
        self.symlink = flags.is_symlink
        self.version_info: VersionInfo = read_version_info(self.path)

    def __repr__(self) -> str:
        return f'MetadataView({str(self.path)!r})'

    def get_path(self) -> Path:
        return self.path

    def file_info(self) -> FileInfo:
        return stat_file_info(self.path)

    def set_times(
        self,
        created: Optional[datetime] = None,
        accessed: Optional[datetime] = None,
        modified: Optional[datetime] = None,
    ) -> bool:
        return set_times(self.path, created=created, accessed=accessed, modified=modified)

    # Version resource

    def get_version_info(self) -> VersionInfo:
        return self.version_info

    def get_file_version(self) -> Optional[str]:
        return self.version_info.file_version

    def get_product_version(self) -> Optional[str]:
        return self.version_info.product_version

    # Digests

    def digest(self, algorithm: Union[str, HashAlgorithm]) -> DigestResult:
        return compute_digest(self.path, algorithm, self.chunk_size)

    def digests(self, algorithms: Iterable[Union[str, HashAlgorithm]]) -> Dict[HashAlgorithm, DigestResult]:
        return compute_digests(self.path, algorithms, self.chunk_size)

    def md5(self) -> DigestResult:
        return self.digest(HashAlgorithm.MD5)

    def sha1(self) -> DigestResult:
        return self.digest(HashAlgorithm.SHA1)

    def sha256(self) -> DigestResult:
        return self.digest(HashAlgorithm.SHA256)

    def sha512(self) -> DigestResult:
        return self.digest(HashAlgorithm.SHA512)

    # Size

    def size_in_bytes(self) -> int:
        return self.path.stat().st_size

    def size_formatted(self, decimals: int = 2) -> str:
        return format_size(self.size_in_bytes(), decimals)

    # Flags

    def is_hidden(self) -> bool:
        return self.hidden

    def is_read_only(self) -> bool:
        return self.read_only

    def is_symlink(self) -> bool:
        return self.symlink

    def lock_state(self) -> LockState:
        return probe_lock(self.path)

    def is_locked(self) -> bool:
        """Return ``True`` unless the file could be opened exclusively.

        Probe errors (missing file, denied access) also report ``True``;
        ``lock_state()`` distinguishes them.
        """
        return self.lock_state() is not LockState.UNLOCKED
