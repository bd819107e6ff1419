"""filefacts: typed facts about a single filesystem entry.

Timestamps, attribute flags, version-resource strings, content digests,
human-readable sizes and exclusive-lock status, collected behind
``MetadataView``.
"""

from .attributes.decoder import FileAttribute, decode_attributes
from .digest.engine import DigestFailure, DigestResult, HashAlgorithm
from .locking.probe import LockState
from .metadata.view import FileInfo, MetadataView
from .size.formatter import format_size
from .versioning.resource import VersionInfo

__version__ = '0.1.0'
__all__ = [
    'DigestFailure',
    'DigestResult',
    'FileAttribute',
    'FileInfo',
    'HashAlgorithm',
    'LockState',
    'MetadataView',
    'VersionInfo',
    'decode_attributes',
    'format_size',
]
