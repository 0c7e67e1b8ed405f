from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

DECLARED_URL_PATTERN = re.compile(r"<!-- url:(?P<url>.*)-->")


class DocumentStore(Protocol):
    def resolve_link(self, name: str) -> Optional[Path]: ...

    def read_first_line(self, path: Path) -> Optional[str]: ...


class KnowledgeBase:
    """Filesystem document store rooted at the knowledge directory."""

    def __init__(self, root: Path | str | None, extension: str = ".md") -> None:
        self.root = Path(root) if root else None
        self.extension = extension

    def resolve_link(self, name: str) -> Optional[Path]:
        if self.root is None:
            return None
        target = f"{name}{self.extension}"
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            if target in filenames:
                return Path(dirpath) / target
        return None

    def read_first_line(self, path: Path) -> Optional[str]:
        try:
            with open(path, encoding="utf-8") as handle:
                return handle.readline().rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s: %s", path, exc)
            return None


def extract_declared_url(line: str) -> str | None:
    """Return the value of a ``<!-- url: value -->`` comment, if any."""
    if not line.startswith("<!-- url: "):
        return None
    match = DECLARED_URL_PATTERN.fullmatch(line.strip())
    if match is None:
        return None
    return match.group("url").strip() or None


class LinkResolver:
    """Turns an internal link name into an href, or None when it cannot."""

    def __init__(self, store: DocumentStore, prefix: str = "article/") -> None:
        self.store = store
        self.prefix = prefix

    def resolve(self, name: str) -> str | None:
        path = self.store.resolve_link(name)
        if path is None:
            logger.debug("No document named %r", name)
            return None
        first_line = self.store.read_first_line(path)
        if first_line is None:
            return None
        declared = extract_declared_url(first_line)
        if declared is None:
            logger.debug("%s declares no url", path)
            return None
        return f"{self.prefix}{declared}"
