import os

import pytest

from filefacts.attributes.decoder import FileAttribute, decode_attributes, read_attributes

posix_only = pytest.mark.skipif(os.name == 'nt', reason='synthesized attributes are POSIX only')


def test_hidden_and_read_only_together():
    flags = decode_attributes(FileAttribute.HIDDEN | FileAttribute.READONLY)
    assert flags.hidden
    assert flags.read_only
    assert not flags.is_symlink


def test_no_flags():
    flags = decode_attributes(FileAttribute.NORMAL)
    assert not flags.hidden
    assert not flags.read_only
    assert not flags.is_symlink


def test_reparse_point_alone():
    flags = decode_attributes(FileAttribute.REPARSE_POINT)
    assert flags.is_symlink
    assert not flags.hidden
    assert not flags.read_only


def test_unknown_bits_ignored():
    flags = decode_attributes(0xFFFF0000 | FileAttribute.HIDDEN)
    assert flags.hidden
    assert not flags.read_only


def test_plain_int_accepted():
    assert decode_attributes(0x1).read_only
    assert decode_attributes(0).hidden is False


@posix_only
def test_read_attributes_plain_file(sample_file):
    assert read_attributes(sample_file) == FileAttribute.NORMAL


@posix_only
def test_read_attributes_dotfile_is_hidden(tmp_path):
    path = tmp_path / '.secret'
    path.write_text('x')
    assert FileAttribute.HIDDEN in read_attributes(path)


@posix_only
def test_read_attributes_read_only(sample_file):
    sample_file.chmod(0o444)
    try:
        assert FileAttribute.READONLY in read_attributes(sample_file)
    finally:
        sample_file.chmod(0o644)


@posix_only
def test_read_attributes_symlink_not_followed(sample_file, tmp_path):
    link = tmp_path / 'link'
    link.symlink_to(sample_file)
    mask = read_attributes(link)
    assert FileAttribute.REPARSE_POINT in mask
    assert FileAttribute.READONLY not in mask


@posix_only
def test_read_attributes_directory(tmp_path):
    assert FileAttribute.DIRECTORY in read_attributes(tmp_path)


def test_read_attributes_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_attributes(tmp_path / 'missing')


@posix_only
def test_parent_reference_is_not_hidden(tmp_path):
    child = tmp_path / 'child'
    child.mkdir()
    assert FileAttribute.HIDDEN not in read_attributes(child / '..')
