"""Exceptions raised by filefacts.

Most operations report failures as values (``DigestResult``, ``LockState``,
boolean returns).  These exceptions cover the remaining cases.
"""

from __future__ import annotations


class FileFactsError(Exception):
    """Base class for filefacts errors."""


class DigestUnavailableError(FileFactsError):
    """Raised by ``DigestResult.unwrap()`` when no digest could be computed."""


class ConfigError(FileFactsError):
    """Raised when a configuration file is malformed."""
