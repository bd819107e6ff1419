import os

import pytest

from filefacts.locking.probe import LockState, is_locked, probe_lock

fcntl = pytest.importorskip('fcntl')


def test_unlocked_file(sample_file):
    assert probe_lock(sample_file) is LockState.UNLOCKED
    assert not is_locked(sample_file)


def test_locked_then_released(sample_file):
    holder = open(sample_file, 'r+b')
    try:
        fcntl.flock(holder.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        assert probe_lock(sample_file) is LockState.LOCKED
        assert is_locked(sample_file)
    finally:
        holder.close()
    assert probe_lock(sample_file) is LockState.UNLOCKED


def test_shared_lock_also_blocks_exclusive_probe(sample_file):
    with open(sample_file, 'rb') as holder:
        fcntl.flock(holder.fileno(), fcntl.LOCK_SH | fcntl.LOCK_NB)
        assert probe_lock(sample_file) is LockState.LOCKED


def test_missing_path_is_error_but_reported_locked(tmp_path):
    missing = tmp_path / 'missing'
    assert probe_lock(missing) is LockState.ERROR
    assert is_locked(missing)


def test_directory_is_error(tmp_path):
    assert probe_lock(tmp_path) is LockState.ERROR


def test_probe_does_not_leak_descriptor(sample_file):
    before = len(os.listdir('/proc/self/fd')) if os.path.isdir('/proc/self/fd') else None
    for _ in range(20):
        probe_lock(sample_file)
    if before is not None:
        assert len(os.listdir('/proc/self/fd')) == before
