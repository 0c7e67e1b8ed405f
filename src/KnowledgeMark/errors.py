"""Exception classes for KnowledgeMark.

Only unrecoverable conditions are raised. Unmatched delimiters and failed
internal-link lookups degrade to literal text and never reach the caller.
"""

from __future__ import annotations


class KnowledgeMarkError(Exception):
    """Base exception for all KnowledgeMark errors."""


class ParseError(KnowledgeMarkError):
    """Error during Markdown lexing; aborts the whole conversion."""

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        # "file:line:col message", with whichever parts are known
        parts = [str(part) for part in (source_file or None, lineno) if part is not None]
        if lineno is not None and col_offset is not None:
            parts.append(str(col_offset))
        prefix = ":".join(parts)
        super().__init__(f"{prefix} {message}" if prefix else message)


class FootnoteIdentifierError(ParseError):
    """A footnote reference ``[^]`` has an empty identifier."""


class NestingDepthError(ParseError):
    """Nested decorators exceed the configured depth."""


class ConfigError(KnowledgeMarkError):
    """Missing or invalid configuration."""
