# FILE: tests/conftest.py
import logging

import pytest

from volley_core.config import sample_document
from volley_core.io import save_document


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "4-2.json"
    save_document(path, sample_document())
    return path


@pytest.fixture
def reset_logging():
    yield
    # configure_logging points the root handler at whatever stderr was current
    logging.basicConfig(force=True, level=logging.WARNING)
