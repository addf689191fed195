"""Constant product swap quotes over integer reserves.

Every reserve and amount is a Python ``int`` in the asset's smallest unit and
every division truncates toward zero, so results match an on-chain program
computing the same formula with u128 arithmetic:

    amount_in_after_fee = amount_in * (10000 - fee_bps) // 10000
    amount_out = amount_in_after_fee * reserve_out // (reserve_in + amount_in_after_fee)

Fees are taken from the input leg before the invariant is applied, and
truncation always rounds against the trader, so the post-trade product never
drops below ``reserve_in * reserve_out``.

Degenerate trades (zero input or an empty side of the pool) quote to 0.
Malformed parameters raise ``InvalidQuoteParameters`` instead.
"""

from decimal import Decimal

from amm_fuzz.core.errors import InvalidQuoteParameters
from amm_fuzz.core.trade import SwapQuote
from amm_fuzz.core.validation import BPS_DENOMINATOR, check_amount, check_bps

DEFAULT_FEE_BPS = 30
DEFAULT_PROTOCOL_FEE_BPS = 5


def amount_after_fee(amount_in: int, fee_bps: int = DEFAULT_FEE_BPS) -> int:
    """Input that reaches the pool once the fee is withheld, floored."""
    check_amount("amount_in", amount_in)
    check_bps("fee_bps", fee_bps, allow_full=False)
    return _after_fee(amount_in, fee_bps)


def _after_fee(amount: int, fee_bps: int) -> int:
    return amount * (BPS_DENOMINATOR - fee_bps) // BPS_DENOMINATOR


def amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> int:
    """Exact output of swapping ``amount_in`` against the pool.

    Args:
        amount_in: Input amount, smallest units
        reserve_in: Pool reserve of the input asset
        reserve_out: Pool reserve of the output asset
        fee_bps: Fee rate in basis points, strictly below 10000

    Returns:
        Output amount, floored. 0 for empty pools, zero trades, or trades
        the fee rounds away entirely.

    Raises:
        InvalidQuoteParameters: negative or non-integer amounts, fee >= 100%
    """
    check_amount("amount_in", amount_in)
    check_amount("reserve_in", reserve_in)
    check_amount("reserve_out", reserve_out)
    check_bps("fee_bps", fee_bps, allow_full=False)

    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return 0

    amount_in_after_fee = _after_fee(amount_in, fee_bps)
    if amount_in_after_fee == 0:
        return 0

    numerator = amount_in_after_fee * reserve_out
    denominator = reserve_in + amount_in_after_fee
    return numerator // denominator


def min_out(expected_out: int, slippage_bps: int) -> int:
    """Slippage-adjusted minimum acceptable output.

    Always within ``[0, expected_out]``.
    """
    check_amount("expected_out", expected_out)
    check_bps("slippage_bps", slippage_bps, allow_full=True)

    if expected_out == 0:
        return 0
    return expected_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def required_amount_in(
    desired_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> int:
    """Smallest input whose ``amount_out`` reaches ``desired_out``.

    Inverse of ``amount_out``; both divisions round up so the returned input
    is always sufficient.

    Raises:
        InvalidQuoteParameters: empty pool, or ``desired_out`` not strictly
            below ``reserve_out``
    """
    check_amount("desired_out", desired_out)
    check_amount("reserve_in", reserve_in)
    check_amount("reserve_out", reserve_out)
    check_bps("fee_bps", fee_bps, allow_full=False)

    if reserve_in == 0 or reserve_out == 0:
        raise InvalidQuoteParameters("reserves must be greater than 0")
    if desired_out >= reserve_out:
        raise InvalidQuoteParameters(
            f"desired output {desired_out} exceeds available reserve {reserve_out}"
        )
    if desired_out == 0:
        return 0

    # ceil(desired_out * reserve_in / (reserve_out - desired_out))
    needed_after_fee = -(-desired_out * reserve_in // (reserve_out - desired_out))
    # ceil(needed_after_fee * 10000 / (10000 - fee_bps))
    return -(-needed_after_fee * BPS_DENOMINATOR // (BPS_DENOMINATOR - fee_bps))


def swap_fee(amount_in: int, fee_bps: int = DEFAULT_FEE_BPS) -> int:
    """Nominal swap fee on ``amount_in``, floored.

    Because both this and ``amount_after_fee`` floor, the two can sum to one
    less than ``amount_in``; that dust stays with the pool.
    """
    check_amount("amount_in", amount_in)
    check_bps("fee_bps", fee_bps, allow_full=False)
    return amount_in * fee_bps // BPS_DENOMINATOR


def protocol_fee(swap_fee_amount: int, protocol_fee_bps: int = DEFAULT_PROTOCOL_FEE_BPS) -> int:
    """Protocol's cut of a swap fee."""
    check_amount("swap_fee_amount", swap_fee_amount)
    check_bps("protocol_fee_bps", protocol_fee_bps, allow_full=True)
    return swap_fee_amount * protocol_fee_bps // BPS_DENOMINATOR


def price_impact(amount_in: int, reserve_in: int, reserve_out: int) -> Decimal:
    """Percentage move in spot price caused by a fee-less swap.

    For display only: the result is a ``Decimal`` and must never be fed back
    into reserve math.
    """
    out = amount_out(amount_in, reserve_in, reserve_out, fee_bps=0)
    # Guard on the inputs, not on out: a trade whose output floors to 0
    # still moves the spot price.
    if amount_in == 0 or reserve_in == 0 or reserve_out == 0:
        return Decimal("0")

    price_before = Decimal(reserve_out) / Decimal(reserve_in)
    price_after = Decimal(reserve_out - out) / Decimal(reserve_in + amount_in)
    return abs((price_after - price_before) / price_before) * Decimal("100")


def quote(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
    slippage_bps: int = 0,
) -> SwapQuote:
    """Bundle expected output, minimum output and fee for a swap preview."""
    expected = amount_out(amount_in, reserve_in, reserve_out, fee_bps)
    return SwapQuote(
        amount_in=amount_in,
        expected_out=expected,
        min_out=min_out(expected, slippage_bps),
        fee_amount=swap_fee(amount_in, fee_bps),
        fee_bps=fee_bps,
        slippage_bps=slippage_bps,
    )
