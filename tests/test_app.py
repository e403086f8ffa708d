"""Tests for the Streamlit app's input helpers."""

from betroll.ui.app import parse_stake_list


class TestParseStakeList:
    """Tests for parse_stake_list function."""

    def test_basic_list(self) -> None:
        """Test a plain comma-separated list with stray whitespace."""
        assert parse_stake_list(" 0.5, 1,2.0 ,") == [0.5, 1.0, 2.0]

    def test_non_positive_dropped(self) -> None:
        """Zero and negative stakes are skipped."""
        assert parse_stake_list("0, -1, 3") == [3.0]

    def test_non_finite_dropped(self) -> None:
        """Infinite and NaN stakes never reach the comparison."""
        assert parse_stake_list("inf, 1.5, nan, Infinity") == [1.5]
