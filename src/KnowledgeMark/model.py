from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List


@dataclass
class InlineElement:
    """Base class for inline nodes."""


@dataclass
class InlineText(InlineElement):
    text: str


@dataclass
class Bold(InlineElement):
    children: List[InlineElement] = field(default_factory=list)


@dataclass
class InlineCode(InlineElement):
    text: str


@dataclass
class LineBreak(InlineElement):
    """Separator between lines merged into one block."""


@dataclass
class InlineLink(InlineElement):
    text: str
    children: List[InlineElement]

    def __post_init__(self) -> None:
        if len(self.children) != 1 or not isinstance(self.children[0], InlineText):
            raise ValueError("InlineLink needs exactly one InlineText child holding the target.")

    @property
    def url(self) -> str:
        return self.children[0].text


@dataclass
class FootNoteRef(InlineElement):
    identifier: str


@dataclass
class InlineEquation(InlineElement):
    latex: str


@dataclass
class Picture(InlineElement):
    path: str


@dataclass
class Block:
    """Base class for block-level nodes.

    Content starts empty; lines are added with ``append_inline`` (lexed
    content, separated by ``LineBreak``) or ``append_literal`` (raw text).
    """

    content: List[InlineElement] = field(default_factory=list)

    def append_inline(self, elements: Iterable[InlineElement]) -> None:
        if self.content:
            self.content.append(LineBreak())
        self.content.extend(elements)

    def append_literal(self, text: str) -> None:
        self.content.append(InlineText(text))


@dataclass
class Heading(Block):
    level: int = 1


@dataclass
class Paragraph(Block):
    pass


@dataclass
class EmptyLine(Block):
    """Paragraph break produced by two consecutive empty lines."""


@dataclass
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""


@dataclass
class CodeBlock(Block):
    language: str | None = None

    @property
    def code(self) -> str:
        return "".join(el.text for el in self.content if isinstance(el, InlineText))


@dataclass
class Quote(Block):
    pass


@dataclass
class FootNote(Block):
    """Footnote definition: content[0] is the identifier, then a LineBreak, then the body."""

    @property
    def identifier(self) -> str:
        first = self.content[0] if self.content else None
        return first.text if isinstance(first, InlineText) else ""

    @property
    def body(self) -> List[InlineElement]:
        return self.content[2:]


@dataclass
class EquationBlock(Block):
    @property
    def latex(self) -> str:
        return "".join(el.text for el in self.content if isinstance(el, InlineText))


@dataclass
class Document:
    blocks: List[Block]
    metadata: dict[str, Any] | None = None
