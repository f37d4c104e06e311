"""
Shared test fixtures for QueryLens test suite.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

import pytest

from querylens.core.models import (
    InstrumentationConfig,
    PlaceholderBinding,
    StatementCall,
    StatementKind,
    Thresholds,
)
from querylens.instrumentation.gate import InstrumentationGate


@dataclass
class Address:
    city: str
    zip_code: str | None = None


@dataclass
class UserQuery:
    name: str
    age: int
    created_at: datetime
    address: Address | None = None


class FakeClock:
    """Monotonic clock whose readings are scripted in seconds."""

    def __init__(self, *readings: float):
        self.readings = list(readings)

    def __call__(self) -> float:
        return self.readings.pop(0)


@pytest.fixture
def sample_user_query() -> UserQuery:
    """A structured parameter payload with nested and date fields."""
    return UserQuery(
        name="alice",
        age=30,
        created_at=datetime(2024, 1, 2, 3, 4, 5),
        address=Address(city="Berlin"),
    )


@pytest.fixture
def select_call() -> StatementCall:
    """A two-placeholder read bound to a plain mapping."""
    return StatementCall(
        statement="SELECT *\n  FROM t\n WHERE a=?   AND b=?",
        kind=StatementKind.READ,
        bindings=[PlaceholderBinding(property_name="a"), PlaceholderBinding(property_name="b")],
        parameter={"a": 5, "b": "x"},
    )


@pytest.fixture
def update_call() -> StatementCall:
    """A single-placeholder mutation bound to an atomic payload."""
    return StatementCall(
        statement="UPDATE t SET flag = 1 WHERE id = ?",
        kind=StatementKind.MUTATE,
        bindings=[PlaceholderBinding(property_name="id")],
        parameter=7,
    )


@pytest.fixture
def default_config() -> InstrumentationConfig:
    """Default thresholds: 1000 rows, 5000 ms, no result dump."""
    return InstrumentationConfig(thresholds=Thresholds(row_count=1000, duration_ms=5000))


@pytest.fixture
def gate_logger() -> logging.Logger:
    """Dedicated logger so caplog records can be filtered by name."""
    log = logging.getLogger("tests.querylens.gate")
    log.setLevel(logging.DEBUG)
    return log


@pytest.fixture
def make_gate(default_config, gate_logger):
    """Factory for gates with a scripted clock (elapsed given in milliseconds)."""

    def _make(elapsed_ms: float = 10.0, config: InstrumentationConfig | None = None, **kwargs):
        clock = FakeClock(0.0, elapsed_ms / 1000.0)
        return InstrumentationGate(config or default_config, log=gate_logger, clock=clock, **kwargs)

    return _make
