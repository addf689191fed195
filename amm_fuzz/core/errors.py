"""Quote engine exceptions."""


class InvalidQuoteParameters(ValueError):
    """Raised when quote inputs are malformed.

    Distinct from a valid zero-output quote: an empty pool or a zero trade
    returns 0, while a fee of 100% or a negative amount raises this.
    """
