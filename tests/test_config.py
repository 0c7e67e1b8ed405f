import textwrap
from pathlib import Path

import pytest

from KnowledgeMark.config import (
    ENV_KNOWLEDGE_ROOT,
    Settings,
    load_settings,
    parse_settings,
    require_knowledge_root,
)
from KnowledgeMark.errors import ConfigError


def test_parse_settings_fields():
    settings = parse_settings(
        textwrap.dedent(
            """
            knowledge_root: /srv/notes
            extension: markdown
            link_prefix: /wiki/
            max_nesting: 4
            unknown: ignored
            """
        )
    )
    assert settings.knowledge_root == Path("/srv/notes")
    assert settings.extension == ".markdown"
    assert settings.link_prefix == "/wiki/"
    assert settings.max_nesting == 4


def test_parse_settings_empty_document():
    assert parse_settings("") == Settings()


def test_parse_settings_rejects_non_mapping():
    with pytest.raises(ConfigError):
        parse_settings("- a\n- b\n")


def test_parse_settings_rejects_bad_nesting():
    with pytest.raises(ConfigError):
        parse_settings("max_nesting: zero")
    with pytest.raises(ConfigError):
        parse_settings("max_nesting: 0")


def test_environment_overrides_file(tmp_path: Path):
    config = tmp_path / "settings.yaml"
    config.write_text("knowledge_root: /from/file\nlink_prefix: x/\n", encoding="utf-8")
    settings = load_settings(config, environ={ENV_KNOWLEDGE_ROOT: str(tmp_path)})
    assert settings.knowledge_root == tmp_path
    assert settings.link_prefix == "x/"


def test_load_settings_without_file_reads_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv(ENV_KNOWLEDGE_ROOT, str(tmp_path))
    assert load_settings().knowledge_root == tmp_path


def test_load_settings_missing_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.yaml", environ={})


def test_load_settings_invalid_yaml(tmp_path: Path):
    config = tmp_path / "bad.yaml"
    config.write_text("knowledge_root: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(config, environ={})


def test_require_knowledge_root(tmp_path: Path):
    assert require_knowledge_root(Settings(knowledge_root=tmp_path)) == tmp_path
    with pytest.raises(ConfigError, match=ENV_KNOWLEDGE_ROOT):
        require_knowledge_root(Settings())
    with pytest.raises(ConfigError):
        require_knowledge_root(Settings(knowledge_root=tmp_path / "missing"))
