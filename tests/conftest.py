import os
from pathlib import Path

import pytest
from lxml import etree

from opensearchgeo.config import flush_config
from opensearchgeo.config.load import OPENSEARCHGEO_CONFIG

from .data import TEST_DATA_ROOT, get_test_data_file

_TEST_CONFIG_PATH = Path(__file__).parent / "opensearchgeo_config.py"


@pytest.hookimpl(trylast=True)
def pytest_configure(config):
    """Pytest configuration hook"""
    # Load test config by default
    os.environ[OPENSEARCHGEO_CONFIG] = str(_TEST_CONFIG_PATH)


@pytest.fixture(autouse=True)
def _flush_config():
    flush_config()
    yield
    flush_config()


@pytest.fixture
def test_data_root() -> Path:
    return TEST_DATA_ROOT


@pytest.fixture
def load_xml():
    """Parse test data file to lxml document element."""

    def load(path: str) -> etree._Element:
        return etree.parse(str(get_test_data_file(path))).getroot()

    return load
