from __future__ import annotations

from pathlib import Path

from .block_lexer import tokenize
from .config import Settings
from .errors import ParseError
from .links import KnowledgeBase, LinkResolver
from .model import Document


def build_resolver(settings: Settings) -> LinkResolver | None:
    if settings.knowledge_root is None:
        return None
    store = KnowledgeBase(settings.knowledge_root, extension=settings.extension)
    return LinkResolver(store, prefix=settings.link_prefix)


def parse_markdown(
    text: str,
    settings: Settings | None = None,
    resolver: LinkResolver | None = None,
    source: Path | None = None,
) -> Document:
    """Lex ``text`` into a Document.

    An explicit ``resolver`` wins over the one built from ``settings``.
    Parse errors abort the whole document; ``source`` is attached to them
    for reporting.
    """
    settings = settings or Settings()
    if resolver is None:
        resolver = build_resolver(settings)
    try:
        blocks = tokenize(text, resolver, max_nesting=settings.max_nesting)
    except ParseError as exc:
        if source is not None and exc.source_file is None:
            raise type(exc)(exc.message, exc.lineno, exc.col_offset, str(source)) from exc
        raise
    metadata = {"source": str(source)} if source is not None else None
    return Document(blocks=blocks, metadata=metadata)
