"""The answer engine is pure; its tests need no database."""

import pytest


@pytest.fixture(autouse=True)
def setup_db():
    yield
