import pytest

from filefacts.config_loader import DEFAULT_CONFIG, load_config
from filefacts.errors import ConfigError


def test_defaults_without_file():
    cfg = load_config()
    assert cfg == DEFAULT_CONFIG
    cfg['size']['decimals'] = 5
    assert DEFAULT_CONFIG['size']['decimals'] == 2


def test_file_merged_over_defaults(tmp_path):
    path = tmp_path / 'filefacts.yml'
    path.write_text('digest:\n  algorithms: [SHA-256, xxh128]\nsize:\n  decimals: 1\n')
    cfg = load_config(path)
    assert cfg['digest']['algorithms'] == ['sha256', 'xxh128']
    assert cfg['digest']['chunk_size'] == DEFAULT_CONFIG['digest']['chunk_size']
    assert cfg['size']['decimals'] == 1
    assert cfg['logging']['level'] == 'INFO'


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / 'empty.yml'
    path.write_text('')
    assert load_config(path) == DEFAULT_CONFIG


@pytest.mark.parametrize(
    'text',
    [
        '- just\n- a list\n',
        'unknown: 1\n',
        'digest:\n  algorithms: [crc32]\n',
        'digest:\n  algorithms: md5\n',
        'digest:\n  chunk_size: 0\n',
        'size:\n  decimals: -1\n',
        'size: 3\n',
        'digest: [unclosed\n',
    ],
)
def test_invalid_config(tmp_path, text):
    path = tmp_path / 'bad.yml'
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / 'nope.yml')
