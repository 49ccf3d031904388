"""Pytest configuration for harview tests."""

import sys
from pathlib import Path

import pytest
import structlog
from structlog._config import BoundLoggerLazyProxy

# Add src directory to sys.path for test imports
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate each test from the developer's environment.

    This fixture:
    - Removes any HARVIEW_* environment variables
    - Runs the test from a temp directory so no stray .env file is read
    - Resets the global settings instance before each test
    """
    import os

    for key in list(os.environ):
        if key.startswith("HARVIEW_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    from harview.config import reset_settings

    reset_settings()

    return tmp_path


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Reset structlog after each test to prevent closed file handle errors.

    CliRunner captures stderr with a temporary file. When configure_logging()
    runs inside CliRunner, structlog binds loggers to that temp file. After
    the test, CliRunner closes the file, so structlog is reset here.
    """
    yield
    structlog.reset_defaults()
    for module in list(sys.modules.values()):
        for attr in getattr(module, "__dict__", {}).values():
            if isinstance(attr, BoundLoggerLazyProxy):
                attr.__dict__.pop("bind", None)
