from __future__ import annotations

from typing import Iterable

from .model import (
    Block,
    Bold,
    CodeBlock,
    Document,
    EmptyLine,
    EquationBlock,
    FootNote,
    FootNoteRef,
    Heading,
    HorizontalRule,
    InlineCode,
    InlineElement,
    InlineEquation,
    InlineLink,
    InlineText,
    LineBreak,
    Paragraph,
    Picture,
    Quote,
)

# Content is emitted as-is; escaping is left to the document author.


def render_document(doc: Document) -> str:
    return "\n".join(render_block(block) for block in doc.blocks)


def render_block(block: Block) -> str:
    if isinstance(block, Heading):
        # headings render one level down: "#" becomes <h2>
        tag = f"h{block.level + 1}"
        return f"<{tag}>{render_inline(block.content)}</{tag}>"
    if isinstance(block, Paragraph):
        return f"<p>{render_inline(block.content)}</p>"
    if isinstance(block, EmptyLine):
        return "<br>"
    if isinstance(block, HorizontalRule):
        return "<hr>"
    if isinstance(block, CodeBlock):
        return f'<pre><code class="codeblock">{block.code}</code></pre>'
    if isinstance(block, Quote):
        return f"<blockquote>{render_inline(block.content)}</blockquote>"
    if isinstance(block, FootNote):
        return f'<foot-note for="{block.identifier}">{render_inline(block.body)}</foot-note>'
    if isinstance(block, EquationBlock):
        return f"\\[{block.latex}\\]"
    raise TypeError(f"Unsupported block: {type(block).__name__}")


def render_inline(elements: Iterable[InlineElement]) -> str:
    return "".join(_render_element(el) for el in elements)


def _render_element(element: InlineElement) -> str:
    if isinstance(element, InlineText):
        return element.text
    if isinstance(element, Bold):
        return f"<strong>{render_inline(element.children)}</strong>"
    if isinstance(element, InlineCode):
        return f"<code>{element.text}</code>"
    if isinstance(element, LineBreak):
        return "<br>"
    if isinstance(element, InlineLink):
        return f'<a href="{element.url}">{element.text}</a>'
    if isinstance(element, FootNoteRef):
        return f'<span id="{element.identifier}"></span>'
    if isinstance(element, InlineEquation):
        return f"\\({element.latex}\\)"
    if isinstance(element, Picture):
        return f'<img src="{element.path}" alt="{element.path}">'
    raise TypeError(f"Unsupported inline element: {type(element).__name__}")
