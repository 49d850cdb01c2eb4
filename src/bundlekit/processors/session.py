"""Per-build state shared by the preprocessors of one bundle."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from bundlekit.exceptions import ImportCycleError, ResourceNotFoundError
from bundlekit.io import ResourceResolver, file_mtime_ns, read_text
from bundlekit.preprocessors.chain import PreprocessorChain
from bundlekit.types import AssetKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BundleOptions:
    """Instructions for a single build."""

    minify: bool = False
    watch_files: bool = True
    watch_always: frozenset[Path] = frozenset()


class BuildSession:
    """Collects watch targets and drives the preprocessor chain for one build.

    A session is used by one build at a time; its methods are synchronous and
    run on a worker thread.
    """

    def __init__(
        self,
        kind: AssetKind,
        options: BundleOptions,
        resolver: ResourceResolver,
        chain: PreprocessorChain,
    ) -> None:
        self.kind = kind
        self.options = options
        self.resolver = resolver
        self.chain = chain
        self._file_monitors: dict[Path, int | None] = {}

    @property
    def file_monitors(self) -> tuple[Path, ...]:
        """Watch targets in the order they were first seen."""
        return tuple(self._file_monitors)

    @property
    def watched(self) -> dict[Path, int | None]:
        """Watch targets mapped to their modification time when first read."""
        return dict(self._file_monitors)

    def add_file_monitor(self, path: Path, mtime_ns: int | None = None) -> None:
        """Record ``path`` as a watch target when watching applies to it.

        ``mtime_ns`` should be taken before the file is read; when omitted the
        file is stat'ed now. The first snapshot of a path wins.
        """
        if path in self._file_monitors:
            return
        if self.options.watch_files or path in self.options.watch_always:
            self._file_monitors[path] = mtime_ns if mtime_ns is not None else file_mtime_ns(path)

    def load_file(self, path: Path, ancestors: tuple[Path, ...] = ()) -> str:
        """Read ``path`` and run it through the chain for its extension.

        ``ancestors`` is the chain of files importing this one; meeting the
        same file again is a cycle.
        """
        if path in ancestors:
            raise ImportCycleError(tuple(str(item) for item in (*ancestors, path)))
        if not path.is_file():
            referrer = str(ancestors[-1]) if ancestors else None
            raise ResourceNotFoundError(str(path), referrer)

        logger.debug("Preprocessing %s", path)
        mtime_ns = file_mtime_ns(path)
        text = read_text(path)
        result = self.chain.apply(text, path, self, (*ancestors, path))
        self.add_file_monitor(path, mtime_ns)
        return result
