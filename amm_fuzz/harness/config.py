"""Shared configuration for fuzz runs, with environment overrides."""

from dataclasses import dataclass, replace
import os
from typing import Mapping, Optional

from amm_fuzz.core.validation import BPS_DENOMINATOR


class InvalidSettings(ValueError):
    """Raised for harness settings that cannot produce a valid run."""


_INT_FIELDS = (
    "iterations",
    "slippage_bps",
    "fee_bps",
    "base_reserve_in",
    "base_reserve_out",
    "perturb_percent",
    "trade_divisor",
)


def _check_int(name: str, value) -> None:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSettings(f"{name} must be an integer, got {type(value).__name__}")


@dataclass(frozen=True)
class FuzzSettings:
    iterations: int = 25
    slippage_bps: int = 10
    fee_bps: int = 30
    base_reserve_in: int = 50 * 1_000_000
    base_reserve_out: int = 5_000 * 1_000_000
    perturb_percent: int = 30
    trade_divisor: int = 3
    token_id: str = "42field"
    program_dir: str = "program"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in _INT_FIELDS:
            _check_int(name, getattr(self, name))
        if self.seed is not None:
            _check_int("seed", self.seed)
        for name in ("token_id", "program_dir"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidSettings(f"{name} must be a string, got {type(value).__name__}")

        if self.iterations < 0:
            raise InvalidSettings(f"iterations must be >= 0, got {self.iterations}")
        if not 0 <= self.slippage_bps <= BPS_DENOMINATOR:
            raise InvalidSettings(
                f"slippage_bps must be within [0, {BPS_DENOMINATOR}], got {self.slippage_bps}"
            )
        if not 0 <= self.fee_bps < BPS_DENOMINATOR:
            raise InvalidSettings(
                f"fee_bps must be within [0, {BPS_DENOMINATOR}), got {self.fee_bps}"
            )
        if self.base_reserve_in < 1 or self.base_reserve_out < 1:
            raise InvalidSettings(
                "base reserves must be >= 1, got "
                f"({self.base_reserve_in}, {self.base_reserve_out})"
            )
        if not 0 <= self.perturb_percent <= 100:
            raise InvalidSettings(
                f"perturb_percent must be within [0, 100], got {self.perturb_percent}"
            )
        if self.trade_divisor < 1:
            raise InvalidSettings(f"trade_divisor must be >= 1, got {self.trade_divisor}")
        if not self.token_id:
            raise InvalidSettings("token_id cannot be empty")

    def with_overrides(self, **overrides) -> "FuzzSettings":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


DEFAULT_SETTINGS = FuzzSettings()


# Environment variable -> (field, parser)
ENV_FIELDS = {
    "FUZZ_ITERATIONS": ("iterations", int),
    "FUZZ_SLIPPAGE_BPS": ("slippage_bps", int),
    "FUZZ_FEE_BPS": ("fee_bps", int),
    "FUZZ_BASE_ALEO": ("base_reserve_in", int),
    "FUZZ_BASE_TOKEN": ("base_reserve_out", int),
    "FUZZ_PERTURB_PERCENT": ("perturb_percent", int),
    "FUZZ_TRADE_DIVISOR": ("trade_divisor", int),
    "FUZZ_TOKEN_ID": ("token_id", str),
    "FUZZ_PROGRAM_DIR": ("program_dir", str),
    "FUZZ_SEED": ("seed", int),
}


def resolve_settings(environ: Optional[Mapping[str, str]] = None) -> FuzzSettings:
    """Resolve settings from environment variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    overrides = {}
    for var, (field_name, parse) in ENV_FIELDS.items():
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = parse(raw)
        except ValueError as e:
            raise InvalidSettings(f"{var}={raw!r} is not a valid {parse.__name__}") from e
    return DEFAULT_SETTINGS.with_overrides(**overrides)
