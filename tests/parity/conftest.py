"""Test fixtures for parity tests."""
import json
from pathlib import Path
import pytest


@pytest.fixture
def fixtures_dir():
    """Return path to parity test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def order_cases(fixtures_dir):
    """Load the hand-built order payloads with their expected figures."""
    filepath = fixtures_dir / "orders.json"
    with open(filepath, encoding="utf-8") as f:
        return {case["name"]: case for case in json.load(f)}
