"""Test configuration for ZeroApp Builder."""

import tempfile
from pathlib import Path

import pytest
import structlog

from zeroapp.core.config import Config, SigningConfig, StorageConfig


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration done by CLI/API tests.

    setup_logging() binds structlog to the sys.stderr captured for that
    test; later tests would otherwise log to a closed stream.
    """
    yield
    structlog.reset_defaults()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests.

    Yields:
        Path: A Path object pointing to the temporary directory.
            The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    """Create a configuration rooted in the temporary directory.

    keytool points at a path that cannot exist, so keystores generated with
    this configuration are always simulated.
    """
    return Config(
        storage=StorageConfig(base_path=temp_dir),
        signing=SigningConfig(keytool_path=str(temp_dir / "missing-jdk" / "keytool")),
    )


@pytest.fixture
def storage(temp_dir):
    """Create a local storage backend on the temporary directory."""
    from zeroapp.storage import LocalStorageBackend
    return LocalStorageBackend(temp_dir)


@pytest.fixture
def sample_project_data():
    """Raw project description as the front-end sends it.

    Returns:
        dict: A project with a populated main screen and an empty About screen.
    """
    return {
        "name": "My Shop",
        "package": "com.example.myshop",
        "version": "1.2.0",
        "screens": {
            "mainScreen": {
                "name": "Home",
                "components": [
                    {"type": "text", "properties": {"content": "Welcome", "fontSize": "24sp", "fontWeight": "bold"}},
                    {
                        "type": "container",
                        "properties": {"layout": "horizontal", "padding": "8dp"},
                        "children": [
                            {"type": "input", "properties": {"placeholder": "Email", "inputType": "email"}},
                            {"type": "button", "properties": {"content": "Sign up", "backgroundColor": "#4285F4"}},
                        ],
                    },
                    {"type": "navigation"},
                ],
            },
            "about": {"name": "About", "components": []},
        },
    }


@pytest.fixture
def sample_project(sample_project_data):
    """Validated sample project."""
    from zeroapp.models import Project
    return Project.model_validate(sample_project_data)
