"""Pytest configuration shared by the natspec-guard test suite.

Run pytest from the project root; pythonpath in pyproject.toml puts src/ and
the root on sys.path so `tests.builders` imports like any other module.
"""

import pytest

from natspec_guard.infrastructure.gateways.keccak_gateway import Keccak256Hasher


@pytest.fixture
def hasher() -> Keccak256Hasher:
    return Keccak256Hasher()
