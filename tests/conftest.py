"""Pytest configuration and fixtures for the test suite."""

import os

import pytest

from code_cloze.cloze.toolkit import LanguageToolkit
from code_cloze.config import reset_config
from tests.fixtures import MockAnkiClient


@pytest.fixture
def mock_anki_client():
    """Provide a mock Anki client for testing."""
    return MockAnkiClient()


@pytest.fixture(scope="session")
def toolkit():
    """TypeScript parser and lexer, shared across tests."""
    return LanguageToolkit("typescript", "monokai")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep tests independent of the developer's config and environment."""
    for name in list(os.environ):
        if name.startswith("CODE_CLOZE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def class_source():
    """A class with a method, a function and a top-level statement."""
    return (
        "class Greeter {\n"
        "  greet(name: string) {\n"
        "    return name;\n"
        "  }\n"
        "}\n"
        "function helper() {\n"
        "  return 1;\n"
        "}\n"
        "const top = 2;"
    )
