"""Recursive ``.bundle`` manifest expansion.

A manifest is a plain text file listing one file reference per line. Lines
starting with ``#`` are comments, blank lines are ignored, and a line may name
another manifest, which is expanded in place. References are resolved
relative to the manifest that contains them.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from bundlekit.caching import ResultCache
from bundlekit.constants.bundling import BUNDLE_COMMENT_PREFIX, DOT_BUNDLE
from bundlekit.exceptions import ImportCycleError, ResourceNotFoundError
from bundlekit.io import ResourceResolver, file_mtime_ns, read_text

if TYPE_CHECKING:
    from bundlekit.processors.session import BuildSession

logger = logging.getLogger(__name__)


def is_bundle_token(token: str) -> bool:
    return PurePath(token.strip()).suffix.lower() == DOT_BUNDLE


@dataclass(frozen=True)
class ExpandedFiles:
    """Flat, ordered file list plus every manifest read to produce it."""

    files: tuple[str, ...]
    manifests: tuple[Path, ...] = ()
    manifest_mtimes: tuple[int | None, ...] = ()

    @property
    def watched(self) -> dict[Path, int | None]:
        """Manifests mapped to their modification time when they were read."""
        return dict(zip(self.manifests, self.manifest_mtimes))


class BundleExpander:
    """Expands manifest tokens; other tokens pass through unchanged and in order."""

    def __init__(
        self,
        resolver: ResourceResolver,
        cache: ResultCache | None = None,
        *,
        region: str | None = None,
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.region = region

    def expand(
        self,
        tokens: Sequence[str],
        *,
        root_dir: Path | None = None,
        session: BuildSession | None = None,
    ) -> ExpandedFiles:
        files: list[str] = []
        manifests: dict[Path, int | None] = {}
        for token in tokens:
            if not is_bundle_token(token):
                files.append(token)
                continue
            manifest_path = self.resolver.resolve_local(token, root_dir)
            if manifest_path is None:
                raise ResourceNotFoundError(token)
            expanded = self._expand_cached(manifest_path, token)
            files.extend(expanded.files)
            for manifest, mtime_ns in expanded.watched.items():
                manifests.setdefault(manifest, mtime_ns)

        if session is not None:
            for manifest, mtime_ns in manifests.items():
                session.add_file_monitor(manifest, mtime_ns)
        return ExpandedFiles(files=tuple(files), manifests=tuple(manifests), manifest_mtimes=tuple(manifests.values()))

    def _expand_cached(self, manifest_path: Path, token: str) -> ExpandedFiles:
        key = "bundle:" + hashlib.md5(str(manifest_path).encode("utf-8"), usedforsecurity=False).hexdigest()
        if self.cache is not None:
            cached = self.cache.get(key)
            if isinstance(cached, ExpandedFiles):
                return cached

        expanded = self._read_manifest(manifest_path, token, referrer=None, ancestors=())
        if self.cache is not None:
            self.cache.put(key, expanded, expanded.watched, region=self.region)
        logger.debug("Expanded %s into %d files", manifest_path, len(expanded.files))
        return expanded

    def _read_manifest(
        self,
        path: Path,
        token: str,
        *,
        referrer: str | None,
        ancestors: tuple[Path, ...],
    ) -> ExpandedFiles:
        if path in ancestors:
            raise ImportCycleError(tuple(str(item) for item in (*ancestors, path)))
        if not path.is_file():
            raise ResourceNotFoundError(token, referrer)

        files: list[str] = []
        manifests: dict[Path, int | None] = {path: file_mtime_ns(path)}
        for line in read_text(path).splitlines():
            entry = line.strip()
            if not entry or entry.startswith(BUNDLE_COMMENT_PREFIX):
                continue

            resolved = self.resolver.resolve(entry, path.parent)
            if isinstance(resolved, str):
                # Remote references are kept for the caller to allow or skip.
                files.append(resolved)
                continue

            if is_bundle_token(entry):
                nested = self._read_manifest(
                    resolved,
                    entry,
                    referrer=str(path),
                    ancestors=(*ancestors, path),
                )
                files.extend(nested.files)
                for manifest, mtime_ns in nested.watched.items():
                    manifests.setdefault(manifest, mtime_ns)
                continue

            if not resolved.is_file():
                raise ResourceNotFoundError(entry, str(path))
            files.append(str(resolved))

        return ExpandedFiles(files=tuple(files), manifests=tuple(manifests), manifest_mtimes=tuple(manifests.values()))
