"""Fuzz harness for the swap quote engine.

This module provides:
- FuzzRunner: Samples pools and trades, quotes them, submits to a boundary
- TradeSampler: Seedable reserve and trade-size randomization
- ExecutionBoundary: Accept/reject contract for swap execution
- LeoExecutionBoundary / SimulatedPoolBoundary: concrete boundaries
"""

from amm_fuzz.harness.boundary import (
    ExecutionBoundary,
    ExecutionVerdict,
    LeoExecutionBoundary,
    SimulatedPoolBoundary,
)
from amm_fuzz.harness.config import DEFAULT_SETTINGS, FuzzSettings, InvalidSettings, resolve_settings
from amm_fuzz.harness.runner import FuzzReport, FuzzRunner, RunRecord, RunStatus, RunSummary, SkipReason
from amm_fuzz.harness.sampling import TradeSampler

__all__ = [
    "DEFAULT_SETTINGS",
    "ExecutionBoundary",
    "ExecutionVerdict",
    "FuzzReport",
    "FuzzRunner",
    "FuzzSettings",
    "InvalidSettings",
    "LeoExecutionBoundary",
    "RunRecord",
    "RunStatus",
    "RunSummary",
    "SimulatedPoolBoundary",
    "SkipReason",
    "TradeSampler",
    "resolve_settings",
]
