"""Pytest configuration and shared fixtures for quote and harness tests.

This module provides:
- Pytest markers for test categorization
- Reference pool fixtures
- Stub execution boundaries and samplers for driving the fuzz runner
"""

from typing import Callable, Optional

import pytest

from amm_fuzz.core.trade import ReservePair
from amm_fuzz.harness.boundary import ExecutionBoundary, ExecutionVerdict
from amm_fuzz.harness.config import ENV_FIELDS
from amm_fuzz.harness.sampling import TradeSample


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "property: Randomized property tests driven by hypothesis"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case tests with extreme or degenerate inputs"
    )
    config.addinivalue_line(
        "markers", "harness: Fuzz runner and execution boundary tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location and name."""
    for item in items:
        if "properties" in item.nodeid:
            item.add_marker(pytest.mark.property)

        if "edge_case" in item.nodeid or "edge_case" in item.name:
            item.add_marker(pytest.mark.edge_case)

        if any(keyword in item.nodeid for keyword in ["runner", "boundary", "cli"]):
            item.add_marker(pytest.mark.harness)


# ============================================================================
# Test doubles
# ============================================================================


class ScriptedBoundary(ExecutionBoundary):
    """Boundary whose verdict is decided by a callable of the call number."""

    def __init__(self, verdict_for_call: Callable[[int], ExecutionVerdict]):
        self.verdict_for_call = verdict_for_call
        self.calls: list[tuple[int, int, int]] = []

    def submit_swap(
        self,
        trade_in: int,
        min_out: int,
        expected_out: int,
        *,
        reserves: Optional[ReservePair] = None,
    ) -> ExecutionVerdict:
        self.calls.append((trade_in, min_out, expected_out))
        return self.verdict_for_call(len(self.calls))


class FixedSampler:
    """Sampler that replays the same pool and trade every iteration."""

    def __init__(self, reserve_in: int, reserve_out: int, trade_in: int):
        self._sample = TradeSample(
            reserves=ReservePair(reserve_in=reserve_in, reserve_out=reserve_out),
            trade_in=trade_in,
        )

    def sample(self) -> TradeSample:
        return self._sample


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def reference_pool() -> ReservePair:
    """Baseline pool: 50 units vs 5,000 units at 6 decimals."""
    return ReservePair(reserve_in=50_000_000, reserve_out=5_000_000_000)


@pytest.fixture
def always_failing_boundary() -> ScriptedBoundary:
    """Boundary that rejects every submission with exit code 1."""
    return ScriptedBoundary(lambda call: ExecutionVerdict(exit_code=1, diagnostic="assertion failed"))


@pytest.fixture
def always_accepting_boundary() -> ScriptedBoundary:
    """Boundary that accepts every submission."""
    return ScriptedBoundary(lambda call: ExecutionVerdict(exit_code=0))


@pytest.fixture
def fail_on_call() -> Callable[[int], ScriptedBoundary]:
    """Factory for a boundary that rejects only its Nth call."""
    def make(n: int) -> ScriptedBoundary:
        return ScriptedBoundary(
            lambda call: ExecutionVerdict(exit_code=1 if call == n else 0, diagnostic="")
        )
    return make


@pytest.fixture
def fixed_sampler() -> Callable[[int, int, int], FixedSampler]:
    """Factory for a sampler pinned to one pool and trade size."""
    return FixedSampler


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every FUZZ_* variable the settings resolver reads."""
    for var in ENV_FIELDS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
