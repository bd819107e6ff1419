"""Configuration loading for filefacts.

Configuration is a YAML document merged over ``DEFAULT_CONFIG``.  Only the
sections present in the defaults are accepted.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .digest.engine import DEFAULT_CHUNK_SIZE, HashAlgorithm
from .errors import ConfigError

DEFAULT_CONFIG_NAME = 'filefacts.yml'

DEFAULT_CONFIG: Dict[str, Any] = {
    'digest': {
        'algorithms': ['md5', 'sha1', 'sha256', 'sha512'],
        'chunk_size': DEFAULT_CHUNK_SIZE,
    },
    'size': {
        'decimals': 2,
    },
    'logging': {
        'level': 'INFO',
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate(cfg: Dict[str, Any]) -> None:
    unknown = set(cfg) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConfigError(f'Unknown configuration sections: {", ".join(sorted(unknown))}')
    for section in DEFAULT_CONFIG:
        if not isinstance(cfg[section], dict):
            raise ConfigError(f'Section {section!r} must be a mapping')

    algorithms = cfg['digest']['algorithms']
    if isinstance(algorithms, str) or not isinstance(algorithms, list):
        raise ConfigError('digest.algorithms must be a list')
    try:
        cfg['digest']['algorithms'] = [HashAlgorithm.parse(a).value for a in algorithms]
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    chunk_size = cfg['digest']['chunk_size']
    if not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ConfigError('digest.chunk_size must be a positive integer')
    decimals = cfg['size']['decimals']
    if not isinstance(decimals, int) or decimals < 0:
        raise ConfigError('size.decimals must be a non-negative integer')


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from ``path`` merged over the defaults.

    Args:
        path: YAML file to read, or ``None`` for the defaults only.

    Raises:
        ConfigError: if the file is not a mapping or holds invalid values.
        OSError: if the file cannot be read.
    """
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    with Path(path).open('r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f'Invalid YAML in {path}: {exc}') from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f'{path} must contain a mapping at the top level')
    cfg = _merge(DEFAULT_CONFIG, data)
    _validate(cfg)
    return cfg
