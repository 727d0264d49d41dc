import pytest
from pydantic import ValidationError

from docsgen.config import DocsConfig, OutputFormat


def test_defaults():
    c = DocsConfig()
    assert c.pattern == "*.py"
    assert c.output is OutputFormat.JSON
    assert c.filename == "docs.gen"


def test_empty_values_fall_back_to_defaults():
    c = DocsConfig(pattern="", filename="", output="")
    assert c.pattern == "*.py"
    assert c.filename == "docs.gen"
    assert c.output is OutputFormat.JSON


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DOCSGEN_OUTPUT", "YAML")
    monkeypatch.setenv("DOCSGEN_FILENAME", "api")
    monkeypatch.setenv("DOCSGEN_LOG_LEVEL", "debug")

    c = DocsConfig()
    assert c.output is OutputFormat.YAML
    assert c.filename == "api"
    assert c.log_level == "DEBUG"


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValidationError):
        DocsConfig(log_level="foo")


def test_log_level_from_environment_is_validated(monkeypatch):
    monkeypatch.setenv("DOCSGEN_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        DocsConfig()
