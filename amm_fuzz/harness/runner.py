"""Fuzz runner: sample, quote, submit, report."""

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Optional

from amm_fuzz.core.quote import amount_out, min_out
from amm_fuzz.core.trade import ReservePair
from amm_fuzz.harness.boundary import ExecutionBoundary, ExecutionVerdict
from amm_fuzz.harness.config import DEFAULT_SETTINGS, FuzzSettings
from amm_fuzz.harness.sampling import TradeSampler

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    """Outcome of a single fuzz iteration."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    SKIPPED = "skipped"


class SkipReason(Enum):
    """Why an iteration never reached the execution boundary."""
    ZERO_EXPECTED_OUT = "zero-expected-out"
    ZERO_MIN_OUT = "zero-min-out"


@dataclass(frozen=True)
class RunRecord:
    """One iteration's inputs, derived quote and boundary verdict."""
    iteration: int
    status: RunStatus
    reserves: ReservePair
    trade_in: int
    expected_out: int
    min_out: int = 0
    skip_reason: Optional[SkipReason] = None
    exit_code: Optional[int] = None
    diagnostic: str = ""

    @property
    def failed(self) -> bool:
        return self.status is RunStatus.REJECTED

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view; amounts are strings so u128 values stay exact."""
        record: dict[str, Any] = {
            "iteration": self.iteration,
            "status": self.status.value,
            "reserves": {
                "in": str(self.reserves.reserve_in),
                "out": str(self.reserves.reserve_out),
            },
            "tradeIn": str(self.trade_in),
            "expectedOut": str(self.expected_out),
        }
        if self.skip_reason is not None:
            record["reason"] = self.skip_reason.value
            return record
        record["minOut"] = str(self.min_out)
        record["exitCode"] = self.exit_code
        record["diagnostic"] = self.diagnostic
        return record


@dataclass(frozen=True)
class RunSummary:
    """Headline counts of a fuzz run."""
    iterations_requested: int
    iterations_run: int
    skipped: int
    failures: int

    @property
    def halted_early(self) -> bool:
        return self.failures > 0 and self.iterations_run < self.iterations_requested

    @property
    def clean(self) -> bool:
        return self.failures == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "iterationsRequested": self.iterations_requested,
            "iterationsRun": self.iterations_run,
            "skipped": self.skipped,
            "failures": self.failures,
            "haltedEarly": self.halted_early,
        }


@dataclass
class FuzzReport:
    """Ordered run records plus their summary."""
    boundary: str
    iterations_requested: int
    records: list[RunRecord] = field(default_factory=list)

    @property
    def summary(self) -> RunSummary:
        return RunSummary(
            iterations_requested=self.iterations_requested,
            iterations_run=len(self.records),
            skipped=sum(1 for r in self.records if r.status is RunStatus.SKIPPED),
            failures=sum(1 for r in self.records if r.failed),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "boundary": self.boundary,
            "summary": self.summary.to_dict(),
            "results": [r.to_dict() for r in self.records],
        }


class FuzzRunner:
    """Drives the quote engine through randomized pools.

    Iterations run strictly in order and block on the boundary. The first
    rejection stops the run: a single failure under in-tolerance parameters
    needs investigating, not averaging away.
    """

    def __init__(
        self,
        boundary: ExecutionBoundary,
        settings: FuzzSettings = DEFAULT_SETTINGS,
        sampler: Optional[TradeSampler] = None,
    ):
        self.boundary = boundary
        self.settings = settings
        self.sampler = sampler or TradeSampler(
            base_reserve_in=settings.base_reserve_in,
            base_reserve_out=settings.base_reserve_out,
            perturb_percent=settings.perturb_percent,
            trade_divisor=settings.trade_divisor,
            seed=settings.seed,
        )

    def _run_iteration(self, iteration: int) -> RunRecord:
        sample = self.sampler.sample()
        reserves = sample.reserves
        trade_in = sample.trade_in

        expected = amount_out(
            trade_in, reserves.reserve_in, reserves.reserve_out, self.settings.fee_bps
        )
        if expected == 0:
            logger.info("Iteration %d skipped: zero expected output", iteration)
            return RunRecord(
                iteration=iteration,
                status=RunStatus.SKIPPED,
                reserves=reserves,
                trade_in=trade_in,
                expected_out=0,
                skip_reason=SkipReason.ZERO_EXPECTED_OUT,
            )

        minimum = min_out(expected, self.settings.slippage_bps)
        if minimum == 0:
            logger.info("Iteration %d skipped: zero minimum output", iteration)
            return RunRecord(
                iteration=iteration,
                status=RunStatus.SKIPPED,
                reserves=reserves,
                trade_in=trade_in,
                expected_out=expected,
                skip_reason=SkipReason.ZERO_MIN_OUT,
            )

        logger.debug(
            "Iteration %d: in=%d reserves=(%d, %d) expected=%d min=%d",
            iteration, trade_in, reserves.reserve_in, reserves.reserve_out, expected, minimum,
        )
        verdict: ExecutionVerdict = self.boundary.submit_swap(
            trade_in, minimum, expected, reserves=reserves
        )
        return RunRecord(
            iteration=iteration,
            status=RunStatus.ACCEPTED if verdict.accepted else RunStatus.REJECTED,
            reserves=reserves,
            trade_in=trade_in,
            expected_out=expected,
            min_out=minimum,
            exit_code=verdict.exit_code,
            diagnostic=verdict.diagnostic,
        )

    def run(self) -> FuzzReport:
        """Run up to ``settings.iterations`` iterations, halting on the first rejection."""
        report = FuzzReport(
            boundary=self.boundary.get_name(),
            iterations_requested=self.settings.iterations,
        )

        for iteration in range(1, self.settings.iterations + 1):
            record = self._run_iteration(iteration)
            report.records.append(record)

            if record.failed:
                logger.error(
                    "Iteration %d failed (exit %s): %s",
                    iteration, record.exit_code, record.diagnostic.strip(),
                )
                break

        summary = report.summary
        logger.info(
            "Fuzz run finished: %d/%d iterations, %d skipped, %d failures",
            summary.iterations_run, summary.iterations_requested,
            summary.skipped, summary.failures,
        )
        return report
