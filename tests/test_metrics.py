"""Tests for statistics, block analysis and risk of ruin."""

import numpy as np
import pytest

from betroll.metrics.blocks import block_bounds, block_statistics, partition_outcomes
from betroll.metrics.risk import risk_of_ruin
from betroll.metrics.stats import (
    GlobalStatistics,
    aggregate_statistics,
    drawdown_units,
    longest_streaks,
)
from betroll.sim.config import StakeMode
from betroll.sim.outcomes import generate_outcomes


class TestLongestStreaks:
    """Tests for longest_streaks function."""

    def test_mixed_sequence(self) -> None:
        """Test streak lengths on a mixed sequence."""
        outcomes = np.array([True, True, False, True, False, False, False, True])
        assert longest_streaks(outcomes) == (2, 3)

    def test_all_wins(self) -> None:
        """Test a sequence with no losses."""
        assert longest_streaks(np.ones(7, dtype=bool)) == (7, 0)

    def test_all_losses(self) -> None:
        """Test a sequence with no wins."""
        assert longest_streaks(np.zeros(4, dtype=bool)) == (0, 4)

    def test_empty(self) -> None:
        """Test with empty input."""
        assert longest_streaks(np.array([], dtype=bool)) == (0, 0)

    def test_streaks_bounded_by_trial_count(self) -> None:
        """Longest win and loss streaks never exceed the trial count together."""
        for seed in range(5):
            outcomes = generate_outcomes(0.5, 300, np.random.default_rng(seed))
            max_win, max_loss = longest_streaks(outcomes)
            assert max_win + max_loss <= len(outcomes)


class TestAggregateStatistics:
    """Tests for aggregate_statistics function."""

    def test_fixed_all_losses(self) -> None:
        """All losses at 1% fixed stake lose exactly one unit per trial."""
        outcomes = np.zeros(40, dtype=bool)
        stats = aggregate_statistics(outcomes, 1.7, 1.0, StakeMode.FIXED)

        assert stats.final_result_units == pytest.approx(-40.0)
        assert stats.max_drawdown_units == pytest.approx(40.0)
        assert stats.win_rate_pct == 0.0
        assert stats.max_loss_streak == 40
        assert stats.max_win_streak == 0
        assert stats.total_wagered == pytest.approx(400.0)
        assert stats.realized_return_pct == pytest.approx(-100.0)

    def test_known_sequence(self) -> None:
        """Test figures on a short hand-checked sequence."""
        # 1000 -> 1010 -> 1020 -> 1010 -> 1000 -> 1010
        outcomes = np.array([True, True, False, False, True])
        stats = aggregate_statistics(outcomes, 2.0, 1.0, StakeMode.FIXED)

        assert stats.final_bankroll == pytest.approx(1010.0)
        assert stats.final_result_units == pytest.approx(1.0)
        assert stats.max_drawdown_units == pytest.approx(2.0)
        assert stats.win_rate_pct == pytest.approx(60.0)
        assert stats.realized_return_pct == pytest.approx(10.0 / 50.0 * 100)
        assert stats.wins == 3
        assert stats.trial_count == 5

    def test_empty_sequence(self) -> None:
        """No trials gives zeroed statistics instead of division errors."""
        empty = np.array([], dtype=bool)
        stats = aggregate_statistics(empty, 2.0, 1.0, StakeMode.FIXED)

        assert stats.win_rate_pct == 0.0
        assert stats.realized_return_pct == 0.0
        assert stats.max_drawdown_units == 0.0
        assert stats.max_win_streak == 0
        assert stats.max_loss_streak == 0
        assert stats.final_bankroll == 1000.0
        assert stats.total_wagered == 0.0

    def test_compounding_units_use_initial_stake(self) -> None:
        """Compounding results are normalized by the initial unit."""
        outcomes = np.array([True, True])
        stats = aggregate_statistics(outcomes, 2.0, 10.0, StakeMode.COMPOUNDING)

        # 1000 -> 1100 -> 1210, one unit = 100
        assert stats.final_bankroll == pytest.approx(1210.0)
        assert stats.final_result_units == pytest.approx(2.1)
        assert stats.total_wagered == pytest.approx(210.0)
        assert stats.realized_return_pct == pytest.approx(100.0)

    def test_frozen_compounding_wagers_nothing(self) -> None:
        """Stakes after the floor freeze do not count as wagered."""
        outcomes = np.zeros(40, dtype=bool)
        stats = aggregate_statistics(outcomes, 2.0, 50.0, StakeMode.COMPOUNDING)

        assert stats.final_bankroll > 0
        assert stats.total_wagered == pytest.approx(1000.0 - stats.final_bankroll)

    def test_max_drawdown_non_decreasing_over_prefixes(self) -> None:
        """Folding in more trials never lowers the recorded max drawdown."""
        outcomes = generate_outcomes(0.55, 400, np.random.default_rng(11))
        previous = 0.0
        for n in range(0, 401, 20):
            stats = aggregate_statistics(outcomes[:n], 1.8, 2.0, StakeMode.FIXED)
            assert stats.max_drawdown_units >= 0.0
            assert stats.max_drawdown_units >= previous
            previous = stats.max_drawdown_units

    def test_idempotent(self) -> None:
        """Aggregating the same sequence twice gives identical statistics."""
        outcomes = generate_outcomes(0.6, 2000, np.random.default_rng(9))
        first = aggregate_statistics(outcomes, 1.7, 1.0, StakeMode.COMPOUNDING)
        second = aggregate_statistics(outcomes, 1.7, 1.0, StakeMode.COMPOUNDING)
        assert first == second

    def test_drawdown_units(self) -> None:
        """Drawdown is peak minus current, divided by the unit."""
        bankrolls = np.array([1000.0, 1050.0, 1020.0, 1080.0, 1000.0])
        drawdowns = drawdown_units(bankrolls, 10.0)
        np.testing.assert_allclose(drawdowns, [0.0, 3.0, 0.0, 8.0])


class TestGlobalStatistics:
    """Tests for GlobalStatistics."""

    def test_from_run_and_bankroll_percentages(self) -> None:
        """Unit figures scale to bankroll percentages by the stake fraction."""
        outcomes = np.array([False, False, True])
        run = aggregate_statistics(outcomes, 2.0, 2.0, StakeMode.FIXED)
        stats = GlobalStatistics.from_run(
            run, risk_of_ruin_pct=12.5, stake_fraction_pct=2.0
        )

        assert stats.final_result_units == pytest.approx(-1.0)
        assert stats.profit_pct_on_bankroll == pytest.approx(-2.0)
        assert stats.max_drawdown_pct_on_bankroll == pytest.approx(4.0)
        assert stats.risk_of_ruin_pct == 12.5


class TestPartitionOutcomes:
    """Tests for block partitioning."""

    def test_partition_is_exhaustive(self) -> None:
        """Block lengths sum to the trial count and rebuild the sequence."""
        outcomes = generate_outcomes(0.5, 1003, np.random.default_rng(2))
        blocks = partition_outcomes(outcomes, 5)

        assert len(blocks) == 5
        assert [len(b) for b in blocks] == [200, 200, 200, 200, 203]
        np.testing.assert_array_equal(np.concatenate(blocks), outcomes)

    def test_fewer_trials_than_blocks(self) -> None:
        """Leading blocks are empty and the last takes every trial."""
        outcomes = np.array([True, False, True])
        blocks = partition_outcomes(outcomes, 5)

        assert [len(b) for b in blocks] == [0, 0, 0, 0, 3]
        np.testing.assert_array_equal(np.concatenate(blocks), outcomes)

    def test_invalid_block_count(self) -> None:
        """Test that a block count below 1 raises ValueError."""
        with pytest.raises(ValueError, match="block_count must be at least 1"):
            block_bounds(10, 0)

    def test_block_statistics_reset_bankroll(self) -> None:
        """Each block is aggregated as its own mini-run."""
        outcomes = np.array([False] * 10 + [True] * 10)
        blocks = block_statistics(outcomes, 2, 2.0, 1.0, StakeMode.FIXED)

        assert [b.block_id for b in blocks] == [1, 2]
        assert (blocks[0].start_trial, blocks[0].end_trial) == (1, 10)
        assert (blocks[1].start_trial, blocks[1].end_trial) == (11, 20)
        assert blocks[0].result_units == pytest.approx(-10.0)
        assert blocks[1].result_units == pytest.approx(10.0)
        assert blocks[1].max_drawdown_units == 0.0
        assert blocks[1].win_rate_pct == 100.0
        assert blocks[1].stats.final_bankroll == pytest.approx(1100.0)

    def test_block_statistics_match_direct_aggregation(self) -> None:
        """Block figures equal aggregating the slice directly."""
        outcomes = generate_outcomes(0.58, 997, np.random.default_rng(4))
        blocks = block_statistics(outcomes, 5, 1.75, 1.5, StakeMode.COMPOUNDING)
        slices = partition_outcomes(outcomes, 5)

        for block, chunk in zip(blocks, slices):
            expected = aggregate_statistics(chunk, 1.75, 1.5, StakeMode.COMPOUNDING)
            assert block.stats == expected


class TestRiskOfRuin:
    """Tests for risk_of_ruin function."""

    def test_negative_edge_is_certain_ruin(self) -> None:
        """Zero or negative mean profit means 100% ruin."""
        assert risk_of_ruin(1000.0, 1.0, 2.0, 0.5) == 100.0
        assert risk_of_ruin(1000.0, 1.0, 1.7, 0.5) == 100.0

    def test_no_variance_is_no_ruin(self) -> None:
        """Certain wins have positive drift and zero variance."""
        assert risk_of_ruin(1000.0, 1.0, 2.0, 1.0) == 0.0

    def test_closed_form_value(self) -> None:
        """Test the Brownian approximation against a hand computation."""
        stake = 10.0
        p = 1.03 / 1.7
        mu = stake * (p * 0.7 - (1 - p))
        var = p * (stake * 0.7) ** 2 + (1 - p) * stake**2 - mu**2
        expected = np.exp(-2 * 1000.0 * mu / var) * 100

        assert risk_of_ruin(1000.0, 1.0, 1.7, p) == pytest.approx(expected)

    def test_larger_stake_increases_risk(self) -> None:
        """Risking more per trial raises the ruin estimate."""
        p = 1.05 / 2.0
        low = risk_of_ruin(1000.0, 1.0, 2.0, p)
        high = risk_of_ruin(1000.0, 10.0, 2.0, p)
        assert low < high

    def test_output_clamped(self) -> None:
        """Estimates always lie in [0, 100]."""
        for odds in (1.2, 1.7, 2.5, 5.0):
            for p in np.linspace(0.0, 1.2, 13):
                for stake_pct in (0.5, 2.0, 25.0):
                    value = risk_of_ruin(1000.0, stake_pct, odds, float(p))
                    assert 0.0 <= value <= 100.0

    def test_infeasible_probability_is_certain_ruin(self) -> None:
        """A win probability above 1 has negative variance and reports 100%."""
        assert risk_of_ruin(1000.0, 1.0, 1.7, 1.8 / 1.7) == 100.0
        assert risk_of_ruin(1000.0, 25.0, 1.5, 1.6 / 1.5) == 100.0
