"""Mapping of file tokens onto the physical site root."""

from __future__ import annotations

import posixpath
from pathlib import Path, PurePosixPath

from bundlekit.constants.bundling import SCHEME_DELIMITER, VIRTUAL_ROOT_PREFIX


class ResourceResolver:
    """Resolves file tokens (relative, ``~/`` virtual, root-absolute or URL) to physical paths.

    ``web_root`` plays the part of the hosting environment: ``~/css/site.css`` and
    ``/css/site.css`` both map to ``web_root / "css/site.css"``. URLs whose
    authority matches ``site_url`` are mapped the same way; any other URL is
    remote and returned unchanged. Absolute paths already under ``web_root``
    are taken as physical paths.
    """

    def __init__(self, web_root: Path, site_url: str | None = None) -> None:
        self.web_root = web_root.resolve()
        self.site_url = site_url.rstrip("/") if site_url else None

    @staticmethod
    def is_remote(token: str) -> bool:
        return SCHEME_DELIMITER in token

    def is_local_url(self, token: str) -> bool:
        """Whether an absolute URL points back at this site."""
        if not self.site_url:
            return False
        return token.strip().lower().startswith(self.site_url.lower())

    def resolve(self, token: str, root_dir: Path | None = None) -> Path | str:
        """Return the physical path for ``token``, or the token itself when it is remote."""
        token = token.strip()
        if self.is_remote(token):
            if not self.is_local_url(token):
                return token
            assert self.site_url is not None
            token = "/" + token[len(self.site_url) :].lstrip("/")
        physical = Path(token)
        if physical.is_absolute() and physical.is_relative_to(self.web_root):
            # Already mapped, e.g. a file listed by an expanded manifest.
            return physical.resolve()
        if token.startswith(VIRTUAL_ROOT_PREFIX):
            return self._map_virtual(token[len(VIRTUAL_ROOT_PREFIX) :])
        if token.startswith("/"):
            return self._map_virtual(token.lstrip("/"))
        base = root_dir if root_dir is not None else self.web_root
        return (base / token).resolve()

    def resolve_local(self, token: str, root_dir: Path | None = None) -> Path | None:
        """Like :meth:`resolve` but returns None for remote tokens."""
        resolved = self.resolve(token, root_dir)
        return resolved if isinstance(resolved, Path) else None

    def map_virtual_directory(self, virtual_path: str) -> Path:
        """Physical directory for a ``~/``-rooted virtual directory."""
        return self._map_virtual(virtual_path.removeprefix("~").lstrip("/"))

    def to_url(self, path: Path) -> str | None:
        """Root-relative URL for a path under ``web_root``, or None outside it."""
        try:
            relative = path.resolve().relative_to(self.web_root)
        except ValueError:
            return None
        if not relative.parts:
            return "/"
        return "/" + relative.as_posix()

    @staticmethod
    def virtual_to_url(virtual_path: str, file_name: str) -> str:
        """Root-relative URL for a file inside a ``~/`` virtual directory."""
        directory = virtual_path.removeprefix("~")
        if not directory.startswith("/"):
            directory = "/" + directory
        return posixpath.join(directory.rstrip("/") or "/", file_name)

    def _map_virtual(self, relative: str) -> Path:
        parts = PurePosixPath(relative).parts
        return self.web_root.joinpath(*parts).resolve()
