"""Fingerprinting, keyed locking and the in-memory result cache."""

from .cache import CacheEntry, ResultCache
from .fingerprint import build_cache_key, md5_fingerprint, output_file_name
from .locks import AsyncKeyedMutex

__all__ = [
    "AsyncKeyedMutex",
    "CacheEntry",
    "ResultCache",
    "build_cache_key",
    "md5_fingerprint",
    "output_file_name",
]
