"""Pytest configuration and fixtures for pullvine tests."""

import pytest
from typing import Any, AsyncIterator


class CountingStepper:
    """Stepper handing out {value, done} dicts and counting next() calls."""

    def __init__(self, values: list[Any], is_async: bool = False) -> None:
        self.values = list(values)
        self.calls = 0
        self.is_async = is_async

    def _step(self) -> dict[str, Any]:
        self.calls += 1
        if self.values:
            return {"value": self.values.pop(0), "done": False}
        return {"value": None, "done": True}

    def next(self) -> Any:
        if self.is_async:
            async def _later() -> dict[str, Any]:
                return self._step()
            return _later()
        return self._step()


async def async_source(values: list[Any]) -> AsyncIterator[Any]:
    for value in values:
        yield value


@pytest.fixture
def sample_data() -> list[int]:
    """Provide sample data for testing."""
    return [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


@pytest.fixture
def sample_dict_data() -> list[dict[str, str | int]]:
    """Provide sample dictionary data for testing."""
    return [
        {"id": 1, "value": 10, "category": "A"},
        {"id": 2, "value": 20, "category": "B"},
        {"id": 3, "value": 15, "category": "A"},
        {"id": 4, "value": 25, "category": "C"},
    ]


# Pytest markers for organizing tests
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
