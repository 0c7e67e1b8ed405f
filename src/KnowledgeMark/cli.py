from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import markdown_parser, renderer_html
from .config import load_settings, require_knowledge_root
from .errors import KnowledgeMarkError
from .utils import configure_logging, read_markdown, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knowledgemark",
        description="Convert a knowledge-base Markdown note into HTML.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output HTML path (default: stdout)")
    parser.add_argument("--config", type=str, help="YAML settings file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()

    try:
        settings = load_settings(args.config)
        require_knowledge_root(settings)

        logging.debug("Reading %s", input_path)
        markdown_text = read_markdown(input_path)
        logging.debug("Markdown length: %d chars", len(markdown_text))

        document = markdown_parser.parse_markdown(markdown_text, settings=settings, source=input_path)
        html = renderer_html.render_document(document)

        output_path = resolve_output_path(input_path, args.output)
        if output_path is None:
            sys.stdout.write(html + "\n")
        else:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html + "\n", encoding="utf-8")
            logging.info("Done. Saved to %s", output_path)
    except OSError as exc:
        logging.error("%s: %s", exc.filename or input_path, exc.strerror or exc)
        return 1
    except (KnowledgeMarkError, UnicodeDecodeError) as exc:
        logging.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
