from __future__ import annotations

import logging
from typing import List

from .errors import FootnoteIdentifierError, NestingDepthError
from .links import LinkResolver
from .model import (
    Bold,
    FootNoteRef,
    InlineCode,
    InlineElement,
    InlineEquation,
    InlineLink,
    InlineText,
    Picture,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_NESTING = 32


class InlineLexer:
    """Left-to-right scanner turning one line of text into inline elements.

    Characters that are not part of a recognized construct collect in
    ``pending`` and are flushed as a single InlineText whenever a construct
    starts and at end of input. Unmatched delimiters are kept as literal text.
    ``offset`` is the position of ``text`` inside the enclosing line, so
    nested lexers report columns relative to the enclosing line.
    """

    def __init__(
        self,
        text: str,
        resolver: LinkResolver | None = None,
        *,
        lineno: int | None = None,
        offset: int = 0,
        depth: int = 0,
        max_nesting: int = DEFAULT_MAX_NESTING,
    ) -> None:
        self.text = text
        self.resolver = resolver
        self.lineno = lineno
        self.offset = offset
        self.depth = depth
        self.max_nesting = max_nesting
        self.index = 0
        self.pending: List[str] = []
        self.tokens: List[InlineElement] = []

    def tokenize(self) -> List[InlineElement]:
        if self.depth > self.max_nesting:
            raise NestingDepthError(
                f"Inline nesting deeper than {self.max_nesting} levels",
                lineno=self.lineno,
                col_offset=self.offset + 1,
            )
        while self.index < len(self.text):
            char = self.text[self.index]
            if char == "*":
                self._consume_asterisk()
            elif char == "`":
                self._consume_backtick()
            elif char == "\\":
                self._consume_escape()
            elif char == "[":
                self._consume_bracket()
            elif char == "$":
                self._consume_latex()
            elif char == "!":
                self._consume_bang()
            else:
                self._consume_char()
        self._flush()
        return self.tokens

    def _consume_char(self) -> None:
        self.pending.append(self.text[self.index])
        self.index += 1

    def _flush(self) -> None:
        if not self.pending:
            return
        self.tokens.append(InlineText("".join(self.pending)))
        self.pending.clear()

    def _column(self, index: int) -> int:
        return self.offset + index + 1

    def _consume_asterisk(self) -> None:
        if not self.text.startswith("**", self.index):
            self._consume_char()
            return
        close = self.text.find("**", self.index + 2)
        if close == -1:
            self._consume_char()
            return
        self._flush()
        start = self.index + 2
        children = InlineLexer(
            self.text[start:close],
            self.resolver,
            lineno=self.lineno,
            offset=self.offset + start,
            depth=self.depth + 1,
            max_nesting=self.max_nesting,
        ).tokenize()
        self.tokens.append(Bold(children=children))
        self.index = close + 2

    def _consume_backtick(self) -> None:
        close = self.text.find("`", self.index + 1)
        if close == -1:
            self._consume_char()
            return
        self._flush()
        # code spans are opaque
        self.tokens.append(InlineCode(self.text[self.index + 1 : close]))
        self.index = close + 1

    def _consume_escape(self) -> None:
        # a trailing backslash is dropped
        self.index += 1
        if self.index < len(self.text):
            self._consume_char()

    def _consume_latex(self) -> None:
        self._flush()
        close = self.text.find("$", self.index + 1)
        if close == -1:
            logger.debug("Unterminated math span at column %d; dropping rest of line", self._column(self.index))
            self.index = len(self.text)
            return
        if close > self.index + 1:
            self.tokens.append(InlineEquation(self.text[self.index + 1 : close]))
        self.index = close + 1

    def _consume_bang(self) -> None:
        if not self.text.startswith("[[", self.index + 1):
            self._consume_char()
            return
        close = self.text.find("]]", self.index + 3)
        if close == -1:
            self._consume_char()
            return
        self._flush()
        self.tokens.append(Picture(self.text[self.index + 3 : close]))
        self.index = close + 2

    def _consume_bracket(self) -> None:
        self._flush()
        following = self.text[self.index + 1 : self.index + 2]
        if following == "^" and self._consume_footnote_ref():
            return
        if following == "[" and self._consume_internal_link():
            return
        self._consume_external_link()

    def _consume_footnote_ref(self) -> bool:
        close = self.text.find("]", self.index + 2)
        if close == -1:
            return False
        identifier = self.text[self.index + 2 : close]
        if not identifier:
            raise FootnoteIdentifierError(
                "Footnote reference has an empty identifier",
                lineno=self.lineno,
                col_offset=self._column(self.index),
            )
        self.tokens.append(FootNoteRef(identifier))
        self.index = close + 1
        return True

    def _consume_internal_link(self) -> bool:
        close = self.text.find("]]", self.index + 2)
        if close == -1:
            return False
        name = self.text[self.index + 2 : close]
        target = self.resolver.resolve(name) if self.resolver is not None else None
        if target is None:
            self.pending.extend(name)
        else:
            self.tokens.append(InlineLink(text=name, children=[InlineText(target)]))
        self.index = close + 2
        return True

    def _consume_external_link(self) -> None:
        close = self.text.find("]", self.index + 1)
        if close == -1:
            self._consume_char()
            return
        if close == self.index + 1:
            self.pending.extend("[]")
            self.index = close + 1
            return
        label = self.text[self.index + 1 : close]
        self.index = close + 1
        url = ""
        if self.text.startswith("(", self.index):
            end = self.text.find(")", self.index + 1)
            if end != -1:
                url = self.text[self.index + 1 : end]
                self.index = end + 1
        self.tokens.append(InlineLink(text=label, children=[InlineText(url)]))


def lex_inline(text: str, resolver: LinkResolver | None = None, **kwargs) -> List[InlineElement]:
    """Convenience wrapper: run a fresh InlineLexer over ``text``."""
    return InlineLexer(text, resolver, **kwargs).tokenize()
