"""Integer helpers for adding liquidity to a constant product pool."""

import math

from amm_fuzz.core.validation import check_amount

DEFAULT_MAX_POOL_RATIO = 100_000


def optimal_liquidity(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of asset B that keeps the pool ratio when adding ``amount_a``."""
    check_amount("amount_a", amount_a)
    check_amount("reserve_a", reserve_a)
    check_amount("reserve_b", reserve_b)
    if amount_a == 0 or reserve_a == 0 or reserve_b == 0:
        return 0
    return amount_a * reserve_b // reserve_a


def lp_tokens_to_mint(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    lp_total_supply: int,
) -> int:
    """LP tokens owed for a deposit.

    The first deposit mints the geometric mean of both amounts. Later
    deposits mint the smaller of the two proportional shares so a lopsided
    deposit cannot dilute existing providers.
    """
    for name, value in (
        ("amount_a", amount_a),
        ("amount_b", amount_b),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("lp_total_supply", lp_total_supply),
    ):
        check_amount(name, value)

    if amount_a == 0 or amount_b == 0:
        return 0
    if lp_total_supply == 0:
        return math.isqrt(amount_a * amount_b)
    if reserve_a == 0 or reserve_b == 0:
        return 0

    from_a = amount_a * lp_total_supply // reserve_a
    from_b = amount_b * lp_total_supply // reserve_b
    return min(from_a, from_b)


def validate_pool_ratio(
    amount_a: int,
    amount_b: int,
    max_ratio: int = DEFAULT_MAX_POOL_RATIO,
) -> bool:
    """Whether an initial deposit's larger side is within ``max_ratio`` of the smaller."""
    check_amount("amount_a", amount_a)
    check_amount("amount_b", amount_b)
    if amount_a == 0 or amount_b == 0:
        return False
    larger, smaller = max(amount_a, amount_b), min(amount_a, amount_b)
    return larger <= smaller * max_ratio
