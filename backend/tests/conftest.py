import pytest

# 2026-01-01T00:00:00Z; every time-travel test is anchored here
NOW = 1767225600


@pytest.fixture
def key() -> str:
    return "session-signing-secret-for-tests-0001"


@pytest.fixture
def other_key() -> str:
    return "a-completely-different-secret-for-tests"
