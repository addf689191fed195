"""Constant-product swap quote engine and fuzz harness."""

from amm_fuzz.core.errors import InvalidQuoteParameters
from amm_fuzz.core.quote import amount_out, min_out, quote, required_amount_in
from amm_fuzz.core.trade import SwapQuote

__all__ = [
    "InvalidQuoteParameters",
    "SwapQuote",
    "amount_out",
    "min_out",
    "quote",
    "required_amount_in",
]
