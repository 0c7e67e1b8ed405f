from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import yaml

from .errors import ConfigError
from .inline_lexer import DEFAULT_MAX_NESTING

ENV_KNOWLEDGE_ROOT = "KNOWLEDGES"


@dataclass
class Settings:
    knowledge_root: Path | None = None
    extension: str = ".md"
    link_prefix: str = "article/"
    max_nesting: int = DEFAULT_MAX_NESTING


def parse_settings(text: str) -> Settings:
    """Parse a YAML settings mapping; unknown keys are ignored."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping with defined fields.")

    settings = Settings()
    for key, value in data.items():
        if key in {"knowledge_root", "knowledges"}:
            if value:
                settings.knowledge_root = Path(str(value)).expanduser()
        elif key == "extension":
            if value:
                ext = str(value)
                settings.extension = ext if ext.startswith(".") else f".{ext}"
        elif key == "link_prefix":
            settings.link_prefix = "" if value is None else str(value)
        elif key == "max_nesting":
            settings.max_nesting = _positive_int(key, value)
    return settings


def load_settings(config_path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from an optional YAML file, then apply the environment.

    ``KNOWLEDGES`` overrides the knowledge root from the file.
    """
    if config_path is not None:
        path = Path(config_path).expanduser()
        try:
            settings = parse_settings(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    else:
        settings = Settings()

    environ = os.environ if environ is None else environ
    root = environ.get(ENV_KNOWLEDGE_ROOT)
    if root:
        settings.knowledge_root = Path(root).expanduser()
    return settings


def require_knowledge_root(settings: Settings) -> Path:
    """Return the knowledge root or fail at startup when it is unusable."""
    if settings.knowledge_root is None:
        raise ConfigError(f"Environment variable {ENV_KNOWLEDGE_ROOT} is not set.")
    if not settings.knowledge_root.is_dir():
        raise ConfigError(f"Knowledge root is not a directory: {settings.knowledge_root}")
    return settings.knowledge_root


def _positive_int(key: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc
    if number < 1:
        raise ConfigError(f"{key} must be positive, got {number}")
    return number
