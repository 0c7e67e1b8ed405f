from KnowledgeMark import markdown_parser
from KnowledgeMark.model import (
    Bold,
    CodeBlock,
    Document,
    FootNote,
    Heading,
    InlineText,
    Paragraph,
    Picture,
)
from KnowledgeMark.renderer_html import render_block, render_document, render_inline


def _html(text: str) -> str:
    return render_document(markdown_parser.parse_markdown(text))


def test_bold_renders_strong():
    assert _html("**x**") == "<p><strong>x</strong></p>"


def test_external_links():
    assert _html("[label](http://x)") == '<p><a href="http://x">label</a></p>'
    assert _html("[label]") == '<p><a href="">label</a></p>'


def test_headings_render_one_level_down():
    assert _html("# A\n## B\n### C") == "<h2>A</h2>\n<h3>B</h3>\n<h4>C</h4>"


def test_inline_elements():
    html = _html("`c` $x$ [^n] ![[p.png]]")
    assert html == (
        '<p><code>c</code> \\(x\\) <span id="n"></span> '
        '<img src="p.png" alt="p.png"></p>'
    )


def test_paragraph_lines_join_with_br():
    assert _html("a\nb") == "<p>a<br>b</p>"


def test_block_kinds():
    text = "one\n\n\n---\n```sh\nls -la\n```\n> quote\n\n$$\nE=mc^2\n$$\n[^1]: note"
    assert _html(text).split("\n") == [
        "<p>one</p>",
        "<br>",
        "<hr>",
        '<pre><code class="codeblock">ls -la</code></pre>',
        "<blockquote>quote</blockquote>",
        "\\[E=mc^2\\]",
        '<foot-note for="1"> note</foot-note>',
    ]


def test_content_is_not_escaped():
    assert _html("a <b> & c") == "<p>a <b> & c</p>"


def test_render_hand_built_document():
    footnote = FootNote()
    footnote.append_literal("x")
    footnote.append_inline([Bold(children=[InlineText("body")])])
    code = CodeBlock(language="py")
    code.append_literal("pass")
    doc = Document(
        blocks=[
            Heading(level=2, content=[InlineText("Title")]),
            Paragraph(content=[Picture("a.png")]),
            code,
            footnote,
        ]
    )
    assert render_document(doc).split("\n") == [
        "<h3>Title</h3>",
        '<p><img src="a.png" alt="a.png"></p>',
        '<pre><code class="codeblock">pass</code></pre>',
        '<foot-note for="x"><strong>body</strong></foot-note>',
    ]


def test_render_inline_empty():
    assert render_inline([]) == ""
    assert render_block(Paragraph()) == "<p></p>"


def test_rendering_is_repeatable():
    doc = markdown_parser.parse_markdown("# T\n**a** [b](c)\n\n\n> q")
    assert render_document(doc) == render_document(doc)
