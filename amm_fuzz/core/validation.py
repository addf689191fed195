"""Argument checks shared by the quote and liquidity helpers."""

from amm_fuzz.core.errors import InvalidQuoteParameters

BPS_DENOMINATOR = 10_000


def check_amount(name: str, value: int) -> int:
    """Reject anything that is not a non-negative integer."""
    # bool is an int subclass; True is not an amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuoteParameters(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 0:
        raise InvalidQuoteParameters(f"{name} must be >= 0, got {value}")
    return value


def check_bps(name: str, value: int, *, allow_full: bool) -> int:
    """Validate a basis-point rate.

    Fees must stay strictly below 100% (``allow_full=False``); slippage may
    reach it.
    """
    check_amount(name, value)
    if allow_full:
        if value > BPS_DENOMINATOR:
            raise InvalidQuoteParameters(
                f"{name} must be <= {BPS_DENOMINATOR}, got {value}"
            )
    elif value >= BPS_DENOMINATOR:
        raise InvalidQuoteParameters(
            f"{name} must be < {BPS_DENOMINATOR}, got {value}"
        )
    return value
