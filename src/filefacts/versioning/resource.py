"""Version-resource lookup for filefacts.

Reads ``FileVersion`` and ``ProductVersion`` from the version resource of
PE binaries (``.exe``, ``.dll`` and friends) using ``pefile``.  Any other
kind of file simply has no version information.
"""

from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import pefile

logger = logging.getLogger(__name__)

_PE_MAGIC = b'MZ'


@dataclass(frozen=True)
class VersionInfo:
    file_version: Optional[str] = None
    product_version: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.file_version is None and self.product_version is None


def _decode(value: bytes) -> Optional[str]:
    text = value.decode('utf-8', errors='replace').strip('\x00 ')
    return text or None


def _string_table_entries(pe: pefile.PE) -> Dict[bytes, bytes]:
    entries: Dict[bytes, bytes] = {}
    for file_info in getattr(pe, 'FileInfo', None) or []:
        for info in file_info:
            if getattr(info, 'Key', b'') != b'StringFileInfo':
                continue
            for table in getattr(info, 'StringTable', []):
                for key, value in table.entries.items():
                    entries.setdefault(key, value)
    return entries


def _fixed_version(pe: pefile.PE, prefix: str) -> Optional[str]:
    fixed = getattr(pe, 'VS_FIXEDFILEINFO', None)
    if not fixed:
        return None
    info = fixed[0]
    ms = getattr(info, f'{prefix}VersionMS', 0)
    ls = getattr(info, f'{prefix}VersionLS', 0)
    return f'{ms >> 16}.{ms & 0xFFFF}.{ls >> 16}.{ls & 0xFFFF}'


def read_version_info(path: Path) -> VersionInfo:
    """Return the version strings embedded in ``path``.

    Non-regular entries, non-PE files and PE files without a version
    resource yield an empty ``VersionInfo``.

    Content that cannot be read also yields an empty ``VersionInfo``;
    only a missing path is an error.

    Raises:
        FileNotFoundError: if ``path`` (or its link target) does not exist.
    """
    path = Path(path)
    if not stat.S_ISREG(path.stat().st_mode):
        return VersionInfo()
    try:
        with path.open('rb') as f:
            magic = f.read(len(_PE_MAGIC))
    except FileNotFoundError:
        raise
    except OSError as exc:
        logger.debug('Cannot read %s for version info: %s', path, exc)
        return VersionInfo()
    if magic != _PE_MAGIC:
        return VersionInfo()

    try:
        pe = pefile.PE(str(path), fast_load=True)
    except pefile.PEFormatError as exc:
        logger.debug('%s is not a valid PE image: %s', path, exc)
        return VersionInfo()
    try:
        pe.parse_data_directories(
            directories=[pefile.DIRECTORY_ENTRY['IMAGE_DIRECTORY_ENTRY_RESOURCE']]
        )
        entries = _string_table_entries(pe)
        file_version = entries.get(b'FileVersion')
        product_version = entries.get(b'ProductVersion')
        return VersionInfo(
            file_version=_decode(file_version) if file_version else _fixed_version(pe, 'File'),
            product_version=_decode(product_version) if product_version else _fixed_version(pe, 'Product'),
        )
    finally:
        pe.close()
