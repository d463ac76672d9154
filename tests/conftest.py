import logging
import os

import pytest

os.environ["METASCAN_ENV"] = "test"


@pytest.fixture(autouse=True)
def _fresh_settings():
    from metascan.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    # cli.main and create_app() install their own root handler
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
