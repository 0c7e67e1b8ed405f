from __future__ import annotations

import logging
from typing import List, Sequence

from .inline_lexer import DEFAULT_MAX_NESTING, InlineLexer
from .links import LinkResolver
from .model import (
    Block,
    CodeBlock,
    EmptyLine,
    EquationBlock,
    FootNote,
    Heading,
    HorizontalRule,
    InlineElement,
    Paragraph,
    Quote,
)

logger = logging.getLogger(__name__)

HEADING_PREFIXES = (("# ", 1), ("## ", 2), ("### ", 3))


class BlockLexer:
    """Line scanner that groups a document into blocks.

    Each line is classified by its prefix in a fixed priority order. Text
    that belongs to paragraphs, headings, quotes and footnote bodies is
    passed through a fresh InlineLexer; code, math and footnote identifiers
    are stored as literal text.
    """

    def __init__(
        self,
        lines: Sequence[str],
        resolver: LinkResolver | None = None,
        max_nesting: int = DEFAULT_MAX_NESTING,
    ) -> None:
        self.lines = list(lines)
        self.resolver = resolver
        self.max_nesting = max_nesting
        self.index = 0
        self.tokens: List[Block] = []
        self._paragraph_closed = False

    def tokenize(self) -> List[Block]:
        while self.index < len(self.lines):
            self._consume_line()
        return self.tokens

    def _lex(self, text: str, offset: int = 0, lineno: int | None = None) -> List[InlineElement]:
        return InlineLexer(
            text,
            self.resolver,
            lineno=lineno if lineno is not None else self.index + 1,
            offset=offset,
            max_nesting=self.max_nesting,
        ).tokenize()

    def _consume_line(self) -> None:
        line = self.lines[self.index]
        for prefix, level in HEADING_PREFIXES:
            if line.startswith(prefix):
                self._process_heading(level, len(prefix))
                return
        if line == "":
            self._process_empty()
            return
        if line.startswith("---"):
            self._push(HorizontalRule())
            self.index += 1
            return
        if line.startswith("```") and self._process_codeblock():
            return
        if line.startswith(">"):
            self._process_quote()
            return
        if self._is_footnote(line):
            self._process_footnote()
            return
        if line.startswith("$$") and self._process_latex():
            return
        stripped = line.strip()
        if stripped.startswith("<!--") and stripped.endswith("-->"):
            self.index += 1
            return
        self._process_plain()

    def _push(self, block: Block) -> None:
        self.tokens.append(block)
        self._paragraph_closed = False

    def _process_heading(self, level: int, strip: int) -> None:
        token = Heading(level=level)
        token.append_inline(self._lex(self.lines[self.index][strip:], offset=strip))
        self._push(token)
        self.index += 1

    def _process_empty(self) -> None:
        if self.index + 1 < len(self.lines) and self.lines[self.index + 1] == "":
            self._push(EmptyLine())
            self.index += 2
            return
        self._paragraph_closed = True
        self.index += 1

    def _process_codeblock(self) -> bool:
        for end in range(self.index + 1, len(self.lines)):
            if self.lines[end].lstrip().startswith("```"):
                break
        else:
            logger.debug("Unclosed code fence on line %d; treating as text", self.index + 1)
            return False
        language = self.lines[self.index][3:].strip() or None
        token = CodeBlock(language=language)
        token.append_literal("\n".join(self.lines[self.index + 1 : end]))
        self._push(token)
        self.index = end + 1
        return True

    def _process_quote(self) -> None:
        entries: List[tuple[int, str, int]] = []
        previous_marked = False
        end = len(self.lines)
        for i in range(self.index, len(self.lines)):
            line = self.lines[i]
            if line == "":
                end = i + 1
                break
            if line.startswith(">"):
                body = line[1:]
                entries.append((i, body.strip(), 1 + len(body) - len(body.lstrip())))
                previous_marked = True
            elif previous_marked:
                entries.append((i, line, 0))
                previous_marked = False
            else:
                end = i
                break
        token = Quote()
        for i, text, offset in entries:
            token.append_inline(self._lex(text, offset=offset, lineno=i + 1))
        self._push(token)
        self.index = end

    @staticmethod
    def _is_footnote(line: str) -> bool:
        if not line.startswith("[^"):
            return False
        head, sep, _ = line.partition("]:")
        return bool(sep) and len(head) > 2

    def _process_footnote(self) -> None:
        head, _, body = self.lines[self.index].partition("]:")
        token = FootNote()
        token.append_literal(head[2:])
        token.append_inline(self._lex(body, offset=len(head) + 2))
        self._push(token)
        self.index += 1

    def _process_latex(self) -> bool:
        for end in range(self.index + 1, len(self.lines)):
            if self.lines[end].strip().endswith("$$"):
                break
        else:
            logger.debug("Unclosed $$ block on line %d; treating as text", self.index + 1)
            return False
        token = EquationBlock()
        token.append_literal("\n".join(self.lines[self.index + 1 : end]))
        self._push(token)
        self.index = end + 1
        return True

    def _process_plain(self) -> None:
        elements = self._lex(self.lines[self.index])
        last = self.tokens[-1] if self.tokens else None
        if isinstance(last, Paragraph) and not self._paragraph_closed:
            last.append_inline(elements)
        else:
            token = Paragraph()
            token.append_inline(elements)
            self._push(token)
        self._paragraph_closed = False
        self.index += 1


def split_lines(text: str) -> List[str]:
    """Split on LF only; a CR before the LF is dropped, as is a final empty line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def tokenize(text: str, resolver: LinkResolver | None = None, max_nesting: int = DEFAULT_MAX_NESTING) -> List[Block]:
    return BlockLexer(split_lines(text), resolver, max_nesting=max_nesting).tokenize()
