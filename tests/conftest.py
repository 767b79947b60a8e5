import logging
import sys
from pathlib import Path

import pytest

# Ensure `src` is on sys.path for tests run from the repository root
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

EXAMPLES = ROOT / "examples"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the user's real ~/.config/schemaform."""
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / 'xdg'))
    monkeypatch.delenv('SCHEMAFORM_DEBOUNCE_MS', raising=False)
    monkeypatch.delenv('SCHEMAFORM_LINE_CHARS', raising=False)
    return tmp_path / 'xdg'


@pytest.fixture
def sample_schema_path():
    return EXAMPLES / 'sample_schema.json'


@pytest.fixture
def sample_value_path():
    return EXAMPLES / 'sample_value.json'


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger('schemaform')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
