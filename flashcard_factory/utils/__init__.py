"""Utils module."""

from .helpers import ensure_dir, get_file_size_kb, pluralize
from .parsing import TextParser
from .logger import setup_logger

__all__ = [
    'ensure_dir',
    'get_file_size_kb',
    'pluralize',
    'TextParser',
    'setup_logger',
]
