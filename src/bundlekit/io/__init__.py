"""Shared file I/O helpers."""

from .files import file_mtime_ns, read_text, write_text_atomic
from .paths import ResourceResolver

__all__ = ["ResourceResolver", "file_mtime_ns", "read_text", "write_text_atomic"]
