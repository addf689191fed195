"""Randomization utilities: bounds, wide ranges and reproducibility."""

import numpy as np
import pytest

from amm_fuzz.harness.sampling import TradeSampler, perturb, uniform_int


class TestUniformInt:

    def test_stays_in_closed_range(self):
        rng = np.random.default_rng(0)
        draws = [uniform_int(rng, 5, 8) for _ in range(500)]
        assert min(draws) >= 5
        assert max(draws) <= 8
        # Both endpoints are reachable
        assert set(draws) == {5, 6, 7, 8}

    def test_single_value_range(self):
        rng = np.random.default_rng(0)
        assert uniform_int(rng, 42, 42) == 42

    def test_empty_range_rejected(self):
        rng = np.random.default_rng(0)
        with pytest.raises(ValueError, match="empty range"):
            uniform_int(rng, 10, 9)

    def test_edge_case_range_wider_than_int64(self):
        rng = np.random.default_rng(1)
        low, high = 10**30, 10**30 + 2**70
        for _ in range(200):
            value = uniform_int(rng, low, high)
            assert isinstance(value, int)
            assert low <= value <= high

    def test_returns_python_int(self):
        rng = np.random.default_rng(0)
        assert type(uniform_int(rng, 0, 10)) is int

    def test_seeded_draws_repeat(self):
        a = [uniform_int(np.random.default_rng(9), 0, 10**25) for _ in range(3)]
        b = [uniform_int(np.random.default_rng(9), 0, 10**25) for _ in range(3)]
        assert a == b


class TestPerturb:

    def test_within_percent_band(self):
        rng = np.random.default_rng(3)
        base = 50_000_000
        for _ in range(300):
            value = perturb(rng, base, 30)
            assert base * 70 // 100 <= value <= base * 130 // 100

    def test_zero_percent_is_identity(self):
        rng = np.random.default_rng(3)
        assert perturb(rng, 1_234_567, 0) == 1_234_567

    def test_edge_case_never_below_one(self):
        rng = np.random.default_rng(3)
        assert all(perturb(rng, 1, 100) >= 1 for _ in range(100))


class TestTradeSampler:

    def test_trade_capped_at_third_of_input_reserve(self):
        sampler = TradeSampler(50_000_000, 5_000_000_000, seed=11)
        for _ in range(200):
            sample = sampler.sample()
            assert 1 <= sample.trade_in <= sample.reserves.reserve_in // 3

    def test_reserves_within_perturbation(self):
        sampler = TradeSampler(1_000_000, 2_000_000, perturb_percent=10, seed=5)
        for _ in range(100):
            reserves = sampler.sample_reserves()
            assert 900_000 <= reserves.reserve_in <= 1_100_000
            assert 1_800_000 <= reserves.reserve_out <= 2_200_000

    def test_edge_case_tiny_reserve_still_trades_one(self):
        sampler = TradeSampler(1, 1, seed=0)
        assert sampler.sample_trade(2) == 1

    def test_custom_divisor(self):
        sampler = TradeSampler(1_000, 1_000, seed=0)
        sampler.trade_divisor = 10
        assert all(1 <= sampler.sample_trade(1_000) <= 100 for _ in range(100))

    def test_same_seed_same_samples(self):
        a = TradeSampler(50_000_000, 5_000_000_000, seed=21)
        b = TradeSampler(50_000_000, 5_000_000_000, seed=21)
        assert [a.sample() for _ in range(10)] == [b.sample() for _ in range(10)]

    def test_reset_replays_sequence(self):
        sampler = TradeSampler(50_000_000, 5_000_000_000, seed=4)
        first = [sampler.sample() for _ in range(5)]
        sampler.reset(seed=4)
        assert [sampler.sample() for _ in range(5)] == first
