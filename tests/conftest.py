from pathlib import Path

import pytest


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / 'sample.bin'
    path.write_bytes(b'abc')
    return path


@pytest.fixture
def empty_file(tmp_path: Path) -> Path:
    path = tmp_path / 'empty.bin'
    path.write_bytes(b'')
    return path
