"""Shared pytest configuration for staticweb examples.

Each example directory has an ``app.py`` exposing ``app``. The
``example_app`` fixture executes it in a fresh module namespace per
test, so every test gets an unbuilt builder and a new App.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """Load the App defined in the app.py next to the requesting test."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"staticweb_example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app
