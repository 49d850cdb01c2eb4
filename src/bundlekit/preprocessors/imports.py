"""Import discovery shared by the LESS and SASS preprocessors.

The compilers resolve imports themselves; this walk only finds which files
they will read so the build can watch them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from bundlekit.constants.bundling import SCHEME_DELIMITER
from bundlekit.io import file_mtime_ns, read_text

logger = logging.getLogger(__name__)

TargetFinder = Callable[[str], Iterable[str]]
CandidateBuilder = Callable[[Path, str], Iterable[Path]]


def collect_imports(
    text: str,
    directory: Path,
    *,
    find_targets: TargetFinder,
    candidates: CandidateBuilder,
) -> dict[Path, int | None]:
    """Return every local file reachable through import statements, depth first.

    Each file maps to its modification time taken just before it was read.
    """
    found: dict[Path, int | None] = {}
    pending: list[tuple[str, Path]] = [(text, directory)]
    while pending:
        source, base = pending.pop()
        for target in find_targets(source):
            if SCHEME_DELIMITER in target:
                continue
            resolved = next((path for path in candidates(base, target) if path.is_file()), None)
            if resolved is None:
                logger.debug("Import %s from %s did not resolve to a local file", target, base)
                continue
            if resolved in found:
                continue
            found[resolved] = file_mtime_ns(resolved)
            try:
                pending.append((read_text(resolved), resolved.parent))
            except OSError as exc:
                logger.warning("Cannot read imported file %s: %s", resolved, exc)
    return found
