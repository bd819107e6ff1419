from .resource import VersionInfo, read_version_info

__all__ = ['VersionInfo', 'read_version_info']
