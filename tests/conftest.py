# tests/conftest.py
import pytest

from leversguard.dom.engine import ScanEngine
from leversguard.policy import DEFAULT_POLICY


@pytest.fixture
def engine():
    """Een engine met de standaard regels en tabellen."""
    return ScanEngine()


@pytest.fixture
def make_doc(engine):
    """Bouwt een ScanDocument zodat losse regels direct getest kunnen worden."""
    def _make(text, file_name="index.html", policy=DEFAULT_POLICY):
        return engine.prepare(text, file_name, policy)
    return _make

