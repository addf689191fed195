"""Quote data classes."""

from dataclasses import dataclass

from amm_fuzz.core.validation import check_amount


@dataclass(frozen=True)
class ReservePair:
    """Pool holdings of the input and output asset, in smallest units."""
    reserve_in: int
    reserve_out: int

    def __post_init__(self) -> None:
        check_amount("reserve_in", self.reserve_in)
        check_amount("reserve_out", self.reserve_out)

    @property
    def is_empty(self) -> bool:
        """An uninitialized pool: either side holds nothing."""
        return self.reserve_in == 0 or self.reserve_out == 0

    @property
    def k(self) -> int:
        """The constant product invariant."""
        return self.reserve_in * self.reserve_out

    def after_swap(self, amount_in_after_fee: int, amount_out: int) -> "ReservePair":
        """Reserves once a swap has settled (fee kept out of the pool)."""
        return ReservePair(
            reserve_in=self.reserve_in + amount_in_after_fee,
            reserve_out=self.reserve_out - amount_out,
        )


@dataclass(frozen=True)
class SwapQuote:
    """A swap preview for a single input amount.

    ``min_out`` is the slippage-adjusted floor a trader submits alongside
    ``expected_out``; it never exceeds it.
    """
    amount_in: int
    expected_out: int
    min_out: int
    fee_amount: int
    fee_bps: int
    slippage_bps: int

    @property
    def is_zero(self) -> bool:
        return self.expected_out == 0
