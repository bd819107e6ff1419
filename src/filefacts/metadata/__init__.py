from .timestamps import set_times
from .view import FileInfo, MetadataView, stat_file_info

__all__ = ['FileInfo', 'MetadataView', 'set_times', 'stat_file_info']
