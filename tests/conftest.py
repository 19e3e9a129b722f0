"""Shared pytest fixtures for tokenweave tests."""

from pathlib import Path

import pytest

from tokenweave.core.ir import Token, TokenCategory, TokenLayer, TokenRef
from tokenweave.core.store import TokenStore

EXAMPLE_DECLARATIONS = """\
tokens:
  - name: colorBlue500
    category: color
    layer: global
    value: "#3b82f6"
  - name: colorPrimary
    category: color
    layer: semantic
    value: {ref: colorBlue500}
    description: Primary brand color
  - name: buttonBg
    category: color
    layer: component
    value: {ref: colorPrimary}
  - name: spacing4
    category: spacing
    layer: global
    value: 16px
themes:
  dark:
    colorPrimary: "#60a5fa"
"""


@pytest.fixture
def example_store() -> TokenStore:
    """Return the blue/primary/button store with a dark override."""
    store = TokenStore()
    store.add_token(
        Token(
            name="colorBlue500",
            category=TokenCategory.COLOR,
            layer=TokenLayer.GLOBAL,
            value="#3b82f6",
        )
    )
    store.add_token(
        Token(
            name="colorPrimary",
            category=TokenCategory.COLOR,
            layer=TokenLayer.SEMANTIC,
            value=TokenRef(ref="colorBlue500"),
            description="Primary brand color",
        )
    )
    store.add_token(
        Token(
            name="buttonBg",
            category=TokenCategory.COLOR,
            layer=TokenLayer.COMPONENT,
            value=TokenRef(ref="colorPrimary"),
        )
    )
    store.add_token(
        Token(
            name="spacing4",
            category=TokenCategory.SPACING,
            layer=TokenLayer.GLOBAL,
            value="16px",
        )
    )
    store.add_override("dark", "colorPrimary", "#60a5fa")
    return store


@pytest.fixture
def declarations_file(tmp_path: Path) -> Path:
    """Write the example declarations to a YAML file."""
    path = tmp_path / "tokens.yaml"
    path.write_text(EXAMPLE_DECLARATIONS, encoding="utf-8")
    return path


@pytest.fixture
def test_project(tmp_path: Path, declarations_file: Path) -> Path:
    """Create a project directory with tokenweave.toml and one source."""
    (tmp_path / "tokenweave.toml").write_text(
        """
[project]
name = "acme"

[tokens]
sources = ["tokens.yaml"]

[output]
dir = "build"
"""
    )
    return tmp_path

