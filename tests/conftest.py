"""Pytest configuration and shared fixtures for the inkreflow test suite."""

import os
from pathlib import Path
from typing import Generator

import pytest

from inkreflow import RenderOptions, StyleDescriptor

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, fuzzing tests will be skipped by import
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Provide a temporary working directory for config discovery tests."""
    previous = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(previous)


@pytest.fixture
def narrow_options() -> RenderOptions:
    """Options with a 20 column width."""
    return RenderOptions(max_width=20)


@pytest.fixture
def class_styles() -> dict:
    """A small class-style lookup as produced by a stylesheet resolver."""
    return {
        "chapter-title": StyleDescriptor(bold=True, is_title=True),
        "emph": StyleDescriptor(italic=True),
        "callout": {"underline": True, "custom_style_id": "InkColor3"},
    }


@pytest.fixture
def chapter_markup() -> str:
    """A chapter exercising most structural elements."""
    return """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head>
  <title>Chapter One</title>
  <link rel="stylesheet" href="style.css" />
  <style>p { margin: 0 }</style>
</head>
<body>
  <h1 id="ch1">The Beginning</h1>
  <p>It was a bright cold day in April, and the clocks were striking thirteen.
  Winston Smith, his chin nuzzled into his breast in an effort to escape the
  vile wind, slipped quickly through the glass doors of Victory Mansions.</p>
  <blockquote><p>Quoted words of wisdom.</p></blockquote>
  <ul><li>first</li><li>second <a href="#n1">note</a></li></ul>
  <pre>
def f():
	return 1 &lt; 2
</pre>
  <img src="images/map.png" alt="Map" />
  <hr />
  <table>
    <tr><th>Name</th><th>Value</th></tr>
    <tr><td>alpha</td><td>1</td></tr>
  </table>
  <p id="end">The end.</p>
</body>
</html>
"""
