"""Digest computation for filefacts.

Streams file content through one or more hash algorithms in fixed-size
chunks, so memory use does not grow with the file.  I/O failures are
returned as ``DigestResult`` values instead of being raised.
"""

from __future__ import annotations

import enum
import errno
import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Union

import xxhash

from ..errors import DigestUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


class HashAlgorithm(str, enum.Enum):
    MD5 = 'md5'
    SHA1 = 'sha1'
    SHA256 = 'sha256'
    SHA512 = 'sha512'
    XXH128 = 'xxh128'

    @classmethod
    def parse(cls, value: Union[str, 'HashAlgorithm']) -> 'HashAlgorithm':
        """Return the algorithm named by ``value`` (case and dashes ignored)."""
        if isinstance(value, cls):
            return value
        key = str(value).lower().replace('-', '').replace('_', '')
        for algo in cls:
            if algo.value == key:
                return algo
        raise ValueError(f'Unsupported checksum algorithm: {value}')

    @property
    def hex_length(self) -> int:
        return _new_hasher(self).digest_size * 2


class DigestFailure(enum.Enum):
    NOT_FOUND = 'not_found'
    PERMISSION_DENIED = 'permission_denied'
    IS_DIRECTORY = 'is_directory'
    IO_ERROR = 'io_error'


@dataclass(frozen=True)
class DigestResult:
    algorithm: HashAlgorithm
    hexdigest: Optional[str] = None
    failure: Optional[DigestFailure] = None
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.hexdigest is not None

    def unwrap(self) -> str:
        """Return the digest or raise ``DigestUnavailableError``."""
        if self.hexdigest is None:
            raise DigestUnavailableError(
                f'{self.algorithm.value} digest unavailable ({self.failure.value}): {self.message}'
            )
        return self.hexdigest


_FACTORIES: Dict[HashAlgorithm, Callable[[], object]] = {
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
    HashAlgorithm.XXH128: xxhash.xxh3_128,
}


def _new_hasher(algo: HashAlgorithm):
    return _FACTORIES[algo]()


def _classify(exc: OSError) -> DigestFailure:
    if isinstance(exc, FileNotFoundError):
        return DigestFailure.NOT_FOUND
    if isinstance(exc, PermissionError):
        return DigestFailure.PERMISSION_DENIED
    if isinstance(exc, IsADirectoryError) or exc.errno == errno.EISDIR:
        return DigestFailure.IS_DIRECTORY
    return DigestFailure.IO_ERROR


def compute_digests(
    path: Path,
    algorithms: Iterable[Union[str, HashAlgorithm]],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Dict[HashAlgorithm, DigestResult]:
    """Compute several digests of ``path`` in a single read pass.

    Args:
        path: File to hash.
        algorithms: Algorithms to compute; duplicates are collapsed.
        chunk_size: Number of bytes read per iteration.

    Returns:
        Mapping of algorithm to ``DigestResult``.  When the file cannot be
        read every result carries the same failure.
    """
    algos = list(dict.fromkeys(HashAlgorithm.parse(a) for a in algorithms))
    if chunk_size <= 0:
        raise ValueError(f'chunk_size must be positive, got {chunk_size}')
    if not algos:
        return {}
    hashers = {algo: _new_hasher(algo) for algo in algos}
    logger.debug('Hashing %s with %s', path, ', '.join(a.value for a in algos))
    try:
        with Path(path).open('rb') as f:
            for chunk in iter(lambda: f.read(chunk_size), b''):
                for h in hashers.values():
                    h.update(chunk)
    except OSError as exc:
        failure = _classify(exc)
        logger.warning('Could not hash %s: %s', path, exc)
        return {algo: DigestResult(algo, failure=failure, message=str(exc)) for algo in algos}
    return {algo: DigestResult(algo, hexdigest=h.hexdigest()) for algo, h in hashers.items()}


def compute_digest(
    path: Path,
    algorithm: Union[str, HashAlgorithm],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DigestResult:
    """Compute a single digest of ``path``.

    The digest is rendered as lowercase hex, two characters per byte.
    """
    algo = HashAlgorithm.parse(algorithm)
    return compute_digests(path, [algo], chunk_size)[algo]


def md5(path: Path) -> DigestResult:
    return compute_digest(path, HashAlgorithm.MD5)


def sha1(path: Path) -> DigestResult:
    return compute_digest(path, HashAlgorithm.SHA1)


def sha256(path: Path) -> DigestResult:
    return compute_digest(path, HashAlgorithm.SHA256)


def sha512(path: Path) -> DigestResult:
    return compute_digest(path, HashAlgorithm.SHA512)
