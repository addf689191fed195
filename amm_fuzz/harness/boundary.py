"""Execution boundaries that accept or reject a quoted swap."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import subprocess
from typing import Optional, Sequence

from amm_fuzz.core.quote import amount_after_fee, amount_out
from amm_fuzz.core.trade import ReservePair

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
EXIT_COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class ExecutionVerdict:
    """Outcome of submitting a swap to an execution boundary."""
    exit_code: int
    diagnostic: str = ""

    @property
    def accepted(self) -> bool:
        return self.exit_code == 0


class ExecutionBoundary(ABC):
    """Anything that can execute a swap and report accept/reject.

    Implementations may be a program invocation, an RPC client, or an
    in-process simulator. Calls block until a verdict is available.
    """

    @abstractmethod
    def submit_swap(
        self,
        trade_in: int,
        min_out: int,
        expected_out: int,
        *,
        reserves: Optional[ReservePair] = None,
    ) -> ExecutionVerdict:
        """Submit one swap.

        Args:
            trade_in: Input amount
            min_out: Slippage-adjusted minimum output
            expected_out: Quoted output
            reserves: Pool state the quote was computed against. Boundaries
                that read live state may ignore it.

        Returns:
            ExecutionVerdict; non-zero exit code means rejected
        """
        pass

    def get_name(self) -> str:
        """Return the boundary name for reporting."""
        return self.__class__.__name__


def format_u128(value: int) -> str:
    """Render an integer as a Leo u128 literal."""
    return f"{value}u128"


class LeoExecutionBoundary(ExecutionBoundary):
    """Executes the swap transition through the ``leo`` CLI.

    Runs ``leo execute <function> <token_id> <in>u128 <min>u128 <expected>u128 --yes``
    inside the program directory and reports the process exit code with its
    stderr as diagnostic.
    """

    DEFAULT_FUNCTION = "swap_aleo_for_token"

    def __init__(
        self,
        program_dir: Path,
        token_id: str,
        function: str = DEFAULT_FUNCTION,
        executable: str = "leo",
    ):
        self.program_dir = Path(program_dir)
        self.token_id = token_id
        self.function = function
        self.executable = executable

    def build_command(self, trade_in: int, min_out: int, expected_out: int) -> list[str]:
        return [
            self.executable,
            "execute",
            self.function,
            self.token_id,
            format_u128(trade_in),
            format_u128(min_out),
            format_u128(expected_out),
            "--yes",
        ]

    def _run(self, command: Sequence[str]) -> subprocess.CompletedProcess:
        env = {**os.environ, "LEO_SKIP_PROMPTS": "1"}
        return subprocess.run(
            list(command),
            cwd=self.program_dir,
            env=env,
            capture_output=True,
            text=True,
        )

    def submit_swap(
        self,
        trade_in: int,
        min_out: int,
        expected_out: int,
        *,
        reserves: Optional[ReservePair] = None,
    ) -> ExecutionVerdict:
        command = self.build_command(trade_in, min_out, expected_out)
        logger.debug("Running %s", " ".join(command))
        try:
            result = self._run(command)
        except OSError as e:
            # Missing executable or program dir is a rejection, not a crash
            logger.error("Could not run %s: %s", self.executable, e)
            return ExecutionVerdict(exit_code=EXIT_COMMAND_NOT_FOUND, diagnostic=str(e))
        return ExecutionVerdict(exit_code=result.returncode, diagnostic=result.stderr or "")


class SimulatedPoolBoundary(ExecutionBoundary):
    """In-process stand-in for the on-chain swap.

    Recomputes the swap on the supplied reserves with its own fee rate and
    rejects when the program's assertions would fail: output below
    ``min_out``, a quote that disagrees with the recomputed output, or a
    shrinking constant product.
    """

    def __init__(self, fee_bps: int = 30, require_exact_quote: bool = True):
        self.fee_bps = fee_bps
        self.require_exact_quote = require_exact_quote
        self.submissions = 0

    def submit_swap(
        self,
        trade_in: int,
        min_out: int,
        expected_out: int,
        *,
        reserves: Optional[ReservePair] = None,
    ) -> ExecutionVerdict:
        if reserves is None:
            raise ValueError("SimulatedPoolBoundary needs the pool reserves")
        self.submissions += 1

        actual_out = amount_out(trade_in, reserves.reserve_in, reserves.reserve_out, self.fee_bps)
        if actual_out < min_out:
            return ExecutionVerdict(
                exit_code=1,
                diagnostic=f"slippage exceeded: output {actual_out} < minimum {min_out}",
            )
        if self.require_exact_quote and actual_out != expected_out:
            return ExecutionVerdict(
                exit_code=1,
                diagnostic=f"quote mismatch: output {actual_out} != expected {expected_out}",
            )

        after_fee = amount_after_fee(trade_in, self.fee_bps)
        settled = reserves.after_swap(after_fee, actual_out)
        if settled.k < reserves.k:
            return ExecutionVerdict(
                exit_code=1,
                diagnostic=f"invariant decreased: {settled.k} < {reserves.k}",
            )
        return ExecutionVerdict(exit_code=0)
