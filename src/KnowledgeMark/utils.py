from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout carries only the HTML."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Optional[Path]:
    """Where to write the HTML; None means standard output."""
    if not output:
        return None
    out_path = Path(output)
    if out_path.is_dir():
        out_path = out_path / f"{input_path.stem}.html"
    return out_path


def read_markdown(path: Path) -> str:
    # newline="" keeps line endings untouched; the block lexer splits on LF only
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()
