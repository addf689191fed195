"""Randomized pool state and trade sizes for fuzz iterations."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from amm_fuzz.core.trade import ReservePair

# Largest span numpy's int64 ``integers`` can draw from directly
_INT64_SPAN = 2**63 - 1


def uniform_int(rng: np.random.Generator, low: int, high: int) -> int:
    """Draw uniformly from the closed range ``[low, high]``.

    Stays exact for arbitrarily wide Python ints: spans beyond int64 fall
    back to rejection sampling over random bytes.
    """
    if high < low:
        raise ValueError(f"empty range [{low}, {high}]")
    span = high - low + 1
    if span <= _INT64_SPAN:
        return low + int(rng.integers(0, span))

    n_bytes = (span.bit_length() + 7) // 8
    # Largest multiple of span that fits, so every residue is equally likely
    limit = (256**n_bytes // span) * span
    while True:
        value = int.from_bytes(rng.bytes(n_bytes), "big")
        if value < limit:
            return low + value % span


def perturb(rng: np.random.Generator, base: int, percent: int) -> int:
    """Jitter ``base`` uniformly by up to ``percent`` either way, never below 1."""
    low = base * (100 - percent) // 100
    high = base * (100 + percent) // 100
    return max(1, uniform_int(rng, low, high))


@dataclass(frozen=True)
class TradeSample:
    """One iteration's sampled pool and trade size."""
    reserves: ReservePair
    trade_in: int


class TradeSampler:
    """Samples pool reserves around a baseline and a bounded trade size.

    Trades are capped at ``reserve_in // trade_divisor`` so a single draw
    never drains most of the pool.
    """

    def __init__(
        self,
        base_reserve_in: int,
        base_reserve_out: int,
        perturb_percent: int = 30,
        trade_divisor: int = 3,
        seed: Optional[int] = None,
    ):
        self.base_reserve_in = base_reserve_in
        self.base_reserve_out = base_reserve_out
        self.perturb_percent = perturb_percent
        self.trade_divisor = trade_divisor
        self._rng = np.random.default_rng(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset the random state."""
        if seed is not None:
            self._rng = np.random.default_rng(seed)

    def sample_reserves(self) -> ReservePair:
        return ReservePair(
            reserve_in=perturb(self._rng, self.base_reserve_in, self.perturb_percent),
            reserve_out=perturb(self._rng, self.base_reserve_out, self.perturb_percent),
        )

    def sample_trade(self, reserve_in: int) -> int:
        max_trade = max(1, reserve_in // self.trade_divisor)
        return uniform_int(self._rng, 1, max_trade)

    def sample(self) -> TradeSample:
        reserves = self.sample_reserves()
        return TradeSample(reserves=reserves, trade_in=self.sample_trade(reserves.reserve_in))
