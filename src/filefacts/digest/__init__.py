from .engine import (
    DigestFailure,
    DigestResult,
    HashAlgorithm,
    compute_digest,
    compute_digests,
    md5,
    sha1,
    sha256,
    sha512,
)

__all__ = [
    'DigestFailure',
    'DigestResult',
    'HashAlgorithm',
    'compute_digest',
    'compute_digests',
    'md5',
    'sha1',
    'sha256',
    'sha512',
]
