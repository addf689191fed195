"""Core quote components."""

from amm_fuzz.core.errors import InvalidQuoteParameters
from amm_fuzz.core.liquidity import lp_tokens_to_mint, optimal_liquidity, validate_pool_ratio
from amm_fuzz.core.quote import (
    BPS_DENOMINATOR,
    amount_after_fee,
    amount_out,
    min_out,
    price_impact,
    protocol_fee,
    quote,
    required_amount_in,
    swap_fee,
)
from amm_fuzz.core.trade import ReservePair, SwapQuote

__all__ = [
    "BPS_DENOMINATOR",
    "InvalidQuoteParameters",
    "ReservePair",
    "SwapQuote",
    "amount_after_fee",
    "amount_out",
    "lp_tokens_to_mint",
    "min_out",
    "optimal_liquidity",
    "price_impact",
    "protocol_fee",
    "quote",
    "required_amount_in",
    "swap_fee",
    "validate_pool_ratio",
]
