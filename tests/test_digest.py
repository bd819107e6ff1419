import pytest

from filefacts.digest.engine import (
    DigestFailure,
    HashAlgorithm,
    compute_digest,
    compute_digests,
    md5,
    sha1,
    sha256,
    sha512,
)
from filefacts.errors import DigestUnavailableError

EMPTY_DIGESTS = {
    HashAlgorithm.MD5: 'd41d8cd98f00b204e9800998ecf8427e',
    HashAlgorithm.SHA1: 'da39a3ee5e6b4b0d3255bfef95601890afd80709',
    HashAlgorithm.SHA256: 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855',
}


@pytest.mark.parametrize('algo, expected', EMPTY_DIGESTS.items())
def test_empty_file_digest(empty_file, algo, expected):
    result = compute_digest(empty_file, algo)
    assert result.ok
    assert result.hexdigest == expected


def test_known_digests(sample_file):
    assert md5(sample_file).hexdigest == '900150983cd24fb0d6963f7d28e17f72'
    assert sha1(sample_file).hexdigest == 'a9993e364706816aba3e25717850c26c9cd0d89d'
    assert sha256(sample_file).hexdigest == 'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    assert sha512(sample_file).hexdigest.startswith('ddaf35a193617aba')


@pytest.mark.parametrize(
    'algo, length',
    [
        (HashAlgorithm.MD5, 32),
        (HashAlgorithm.SHA1, 40),
        (HashAlgorithm.SHA256, 64),
        (HashAlgorithm.SHA512, 128),
        (HashAlgorithm.XXH128, 32),
    ],
)
def test_digest_lengths_and_case(sample_file, algo, length):
    digest = compute_digest(sample_file, algo).unwrap()
    assert len(digest) == length
    assert algo.hex_length == length
    assert digest == digest.lower()
    assert all(c in '0123456789abcdef' for c in digest)


def test_digest_is_deterministic(sample_file):
    assert sha256(sample_file) == sha256(sample_file)


def test_chunking_does_not_change_digest(tmp_path):
    path = tmp_path / 'big.bin'
    path.write_bytes(bytes(range(256)) * 1000)
    whole = compute_digest(path, 'sha256', chunk_size=1 << 20)
    small = compute_digest(path, 'sha256', chunk_size=7)
    assert whole.hexdigest == small.hexdigest


def test_missing_path_is_failure_not_empty_digest(tmp_path):
    result = md5(tmp_path / 'missing')
    assert not result.ok
    assert result.hexdigest is None
    assert result.failure is DigestFailure.NOT_FOUND
    with pytest.raises(DigestUnavailableError):
        result.unwrap()


def test_directory_is_failure(tmp_path):
    result = sha1(tmp_path)
    assert not result.ok
    assert result.failure in (DigestFailure.IS_DIRECTORY, DigestFailure.PERMISSION_DENIED)


def test_compute_digests_matches_single(sample_file):
    results = compute_digests(sample_file, ['md5', 'SHA-256', HashAlgorithm.MD5])
    assert list(results) == [HashAlgorithm.MD5, HashAlgorithm.SHA256]
    assert results[HashAlgorithm.MD5] == md5(sample_file)
    assert results[HashAlgorithm.SHA256] == sha256(sample_file)


def test_compute_digests_failure_applies_to_all(tmp_path):
    results = compute_digests(tmp_path / 'missing', ['md5', 'sha1'])
    assert all(r.failure is DigestFailure.NOT_FOUND for r in results.values())


@pytest.mark.parametrize('name', ['md5', 'MD5', 'sha-1', 'SHA_256', 'sha512', 'xxh128'])
def test_parse_algorithm(name):
    assert isinstance(HashAlgorithm.parse(name), HashAlgorithm)


def test_parse_unknown_algorithm():
    with pytest.raises(ValueError):
        HashAlgorithm.parse('crc32')


def test_invalid_chunk_size(sample_file):
    with pytest.raises(ValueError):
        compute_digest(sample_file, 'md5', chunk_size=0)


def test_no_algorithms_reads_nothing(tmp_path, caplog):
    with caplog.at_level('WARNING', logger='filefacts'):
        assert compute_digests(tmp_path / 'missing', []) == {}
    assert not caplog.records
