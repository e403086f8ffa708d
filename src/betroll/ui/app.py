"""Streamlit application for interactive wager simulation.

This module provides a web-based interface for running a single-sequence
bankroll simulation with adjustable odds, target return and stake sizing,
and for inspecting its statistics, risk of ruin and block analysis.
"""

import logging
import math

import plotly.graph_objects as go  # type: ignore[import-untyped]
import streamlit as st

from betroll.engine import (
    SimulationResult,
    StakeComparison,
    compare_stakes,
    run_simulation,
)
from betroll.metrics.blocks import BlockStatistics
from betroll.sim.config import SimulationParameters, StakeMode
from betroll.sim.history import trajectory_arrays

COLORS = {
    "green": "#1B5E20",
    "green_light": "#2E7D32",
    "green_bright": "#4CAF50",
    "red": "#C62828",
    "red_light": "#EF5350",
    "slate": "#2D2D2D",
    "gold": "#D4AF37",
    "cream": "#F5F5DC",
}

CUSTOM_CSS = """
<style>
    [data-testid="stMetric"] {
        background: rgba(27, 94, 32, 0.15);
        border: 1px solid #2E7D32;
        border-radius: 8px;
        padding: 0.75rem;
    }

    .block-card {
        border-radius: 10px;
        padding: 0.75rem 1rem;
        border: 1px solid rgba(255, 255, 255, 0.1);
    }
</style>
"""


def create_ruin_gauge(ruin_pct: float) -> go.Figure:
    """Create a gauge chart for risk of ruin.

    Args:
        ruin_pct: Risk of ruin in percent (0-100).

    Returns:
        Plotly Figure with gauge chart.
    """
    if ruin_pct < 1:
        color = COLORS["green"]
        risk_level = "Very Low Risk"
    elif ruin_pct < 5:
        color = COLORS["green_light"]
        risk_level = "Low Risk"
    elif ruin_pct < 10:
        color = COLORS["gold"]
        risk_level = "Moderate Risk"
    elif ruin_pct < 25:
        color = COLORS["red_light"]
        risk_level = "High Risk"
    else:
        color = COLORS["red"]
        risk_level = "Very High Risk"

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=ruin_pct,
            number={"suffix": "%", "font": {"size": 28, "color": COLORS["gold"]}},
            title={
                "text": f"Risk of Ruin<br><span style='font-size:14px;color:{COLORS['cream']}'>{risk_level}</span>",
                "font": {"color": COLORS["gold"]},
            },
            gauge={
                "axis": {"range": [0, 100], "tickcolor": COLORS["cream"]},
                "bar": {"color": color},
                "bgcolor": COLORS["slate"],
                "steps": [
                    {"range": [0, 1], "color": "rgba(27, 94, 32, 0.4)"},
                    {"range": [1, 5], "color": "rgba(46, 125, 50, 0.3)"},
                    {"range": [5, 10], "color": "rgba(212, 175, 55, 0.3)"},
                    {"range": [10, 25], "color": "rgba(239, 83, 80, 0.3)"},
                    {"range": [25, 100], "color": "rgba(198, 40, 40, 0.3)"},
                ],
            },
        )
    )

    fig.update_layout(
        height=250,
        margin={"t": 80, "b": 20, "l": 30, "r": 30},
        paper_bgcolor="rgba(0,0,0,0)",
    )

    return fig


def create_return_chart(
    result: SimulationResult,
    comparisons: list[StakeComparison] | None = None,
) -> go.Figure:
    """Create a Plotly chart of the return curve, with optional comparisons.

    Plotly's own box-zoom and pan replace a custom zoom window.
    """
    params = result.parameters
    mode_label = "Comp." if params.stake_mode is StakeMode.COMPOUNDING else "Fixed"

    fig = go.Figure()

    for comparison in comparisons or []:
        x_values, y_values = trajectory_arrays(comparison.trajectory)
        fig.add_trace(
            go.Scatter(
                x=x_values,
                y=y_values,
                mode="lines",
                line={"width": 1},
                opacity=0.6,
                name=f"Stake {comparison.stake_fraction_pct:g}%",
            )
        )

    x_values, y_values = trajectory_arrays(result.trajectory)
    fig.add_trace(
        go.Scatter(
            x=x_values,
            y=y_values,
            mode="lines",
            line={"color": COLORS["gold"], "width": 2.5},
            name=f"Stake {params.stake_fraction_pct:g}% ({mode_label})",
        )
    )

    fig.add_hline(y=0, line_dash="dash", line_color=COLORS["red"])

    fig.update_layout(
        title={"text": "Bankroll Evolution", "x": 0.5, "xanchor": "center"},
        xaxis_title="Number of Bets",
        yaxis_title="Profit (% of initial bankroll)",
        yaxis={"ticksuffix": "%"},
        hovermode="x unified",
        paper_bgcolor="rgba(0,0,0,0)",
        height=450,
    )

    return fig


def render_summary(result: SimulationResult) -> None:
    """Render the summary statistics and the risk of ruin gauge."""
    stats = result.statistics

    col_gauge, col_metrics = st.columns([1, 1])

    with col_gauge:
        gauge_fig = create_ruin_gauge(stats.risk_of_ruin_pct)
        st.plotly_chart(gauge_fig, use_container_width=True)
        st.caption(
            "Analytic infinite-horizon estimate assuming a fixed stake. "
            "Shown as a reference figure in compounding mode."
        )

    with col_metrics:
        st.metric(
            label="Final Result",
            value=f"{stats.final_result_units:+.2f}u",
            delta=f"{stats.profit_pct_on_bankroll:+.2f}% of bankroll",
        )
        st.metric(
            label="Max Drawdown",
            value=f"-{stats.max_drawdown_units:.2f}u",
            delta=f"-{stats.max_drawdown_pct_on_bankroll:.2f}% of bankroll",
            delta_color="off",
        )

    row = st.columns(4)
    row[0].metric("Realized Return", f"{stats.realized_return_pct:.2f}%")
    row[1].metric("Win Rate", f"{stats.win_rate_pct:.2f}%")
    row[2].metric("Longest Win Streak", f"{stats.max_win_streak}")
    row[3].metric("Longest Loss Streak", f"{stats.max_loss_streak}")

    with st.expander("Simulation Details"):
        detail_col1, detail_col2 = st.columns(2)
        theoretical = result.theoretical_moments

        with detail_col1:
            st.write(f"**Final Bankroll:** {stats.final_bankroll:,.2f}")
            st.write(f"**Total Wagered:** {stats.total_wagered:,.2f}")
            st.write(f"**Required Win Rate:** {result.required_win_rate_pct:.2f}%")

        with detail_col2:
            st.write(f"**Expected Profit per Bet:** {theoretical.drift_units:+.4f}u")
            st.write(f"**Std Dev per Bet:** {theoretical.diffusion_units:.4f}u")
            realized = result.realized_moments
            if realized is not None:
                st.write(f"**Realized Profit per Bet:** {realized.drift_units:+.4f}u")


def render_block_card(block: BlockStatistics) -> None:
    """Render one block of the block analysis."""
    positive = block.result_units >= 0
    background = "rgba(27, 94, 32, 0.15)" if positive else "rgba(198, 40, 40, 0.15)"
    result_color = COLORS["green_bright"] if positive else COLORS["red_light"]

    st.markdown(
        f"""
        <div class="block-card" style="background: {background};">
            <strong>Block {block.block_id}</strong>
            <span style="float: right; opacity: 0.6;">{block.start_trial}-{block.end_trial}</span>
            <h3 style="color: {result_color}; margin: 0.5rem 0;">{block.result_units:+.2f}u</h3>
            <div>Win Rate: {block.win_rate_pct:.1f}%</div>
            <div>Return: {block.realized_return_pct:.2f}%</div>
            <div>Max Drawdown: -{block.max_drawdown_units:.2f}u</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_block_analysis(blocks: list[BlockStatistics]) -> None:
    """Render the block analysis row."""
    st.subheader(f"Block Analysis (1/{len(blocks)} of the bets each)")
    for column, block in zip(st.columns(len(blocks)), blocks):
        with column:
            render_block_card(block)


def render_stake_comparison(comparisons: list[StakeComparison]) -> None:
    """Render a table comparing stake fractions over the same outcomes."""
    st.subheader("Stake Comparison (same outcome sequence)")
    rows = [
        {
            "Stake (%)": c.stake_fraction_pct,
            "Result (u)": round(c.statistics.final_result_units, 2),
            "Profit (%)": round(c.statistics.profit_pct_on_bankroll, 2),
            "Max DD (u)": round(c.statistics.max_drawdown_units, 2),
            "Final Bankroll": round(c.statistics.final_bankroll, 2),
            "Risk of Ruin (%)": round(c.statistics.risk_of_ruin_pct, 2),
        }
        for c in comparisons
    ]
    st.dataframe(rows, use_container_width=True, hide_index=True)


def parse_stake_list(text: str) -> list[float]:
    """Parse a comma-separated list of positive, finite stake percentages."""
    stakes: list[float] = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        value = float(chunk)
        if value > 0 and math.isfinite(value):
            stakes.append(value)
    return stakes


def render_sidebar() -> tuple[SimulationParameters, list[float]]:
    """Render sidebar inputs and return the parameters and comparison stakes."""
    st.sidebar.header("Simulation Parameters")

    mode_label = st.sidebar.radio(
        "Stake Management",
        options=["Fixed", "Compounding"],
        horizontal=True,
        help="Fixed: % of the initial bankroll. Compounding: % of the current one.",
    )

    avg_odds = st.sidebar.number_input(
        "Average Odds", min_value=0.0, value=1.70, step=0.01, format="%.2f"
    )
    target_return_pct = st.sidebar.number_input(
        "Target Return (%)", value=3.0, step=0.5, format="%.2f"
    )
    stake_fraction_pct = st.sidebar.number_input(
        "Stake (% of bankroll)", min_value=0.01, value=1.0, step=0.25, format="%.2f"
    )
    trial_count = st.sidebar.number_input(
        "Number of Bets", min_value=0, max_value=1_000_000, value=1000, step=100
    )

    st.sidebar.subheader("Simulation Settings")
    use_seed = st.sidebar.checkbox("Use fixed seed (reproducible)", value=False)
    seed = None
    if use_seed:
        seed = int(st.sidebar.number_input("Seed", min_value=0, value=42, step=1))

    comparison_text = st.sidebar.text_input(
        "Compare stakes (%)",
        value="",
        help="Comma-separated stake fractions evaluated on the same outcomes.",
    )
    try:
        comparison_stakes = parse_stake_list(comparison_text)
    except ValueError:
        st.sidebar.error("Could not parse the stake list")
        comparison_stakes = []

    params = SimulationParameters(
        avg_odds=float(avg_odds),
        target_return_pct=float(target_return_pct),
        stake_fraction_pct=float(stake_fraction_pct),
        trial_count=int(trial_count),
        stake_mode=(
            StakeMode.COMPOUNDING if mode_label == "Compounding" else StakeMode.FIXED
        ),
        seed=seed,
    )

    st.sidebar.metric("Required Win Rate", f"{params.required_win_rate_pct:.2f}%")
    if not params.is_feasible:
        st.sidebar.warning(
            "The required win probability is outside 0-100%: this odds/return "
            "combination cannot be reached."
        )

    return params, comparison_stakes


def init_session_state() -> None:
    """Initialize session state variables."""
    if "result" not in st.session_state:
        st.session_state.result = None
    if "comparisons" not in st.session_state:
        st.session_state.comparisons = None


def run_simulation_cached(
    params: SimulationParameters,
    comparison_stakes: list[float],
) -> None:
    """Run the simulation and cache results in session state."""
    st.session_state.result = run_simulation(params)
    st.session_state.comparisons = (
        compare_stakes(params, comparison_stakes) if comparison_stakes else None
    )


def main() -> None:
    """Main entry point for the Streamlit application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    st.set_page_config(
        page_title="Betroll - Variance Simulator",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

    init_session_state()

    st.title("Betroll: Monte Carlo Variance Simulator")
    st.markdown(
        """
        Simulate one long sequence of bets at fixed odds and see how variance
        shapes the bankroll. Adjust parameters in the sidebar and run.
        """
    )

    params, comparison_stakes = render_sidebar()

    if st.button("Run Simulation", type="primary", use_container_width=True):
        with st.spinner("Running simulation..."):
            run_simulation_cached(params, comparison_stakes)

    result = st.session_state.result
    if result is None:
        st.info("Adjust parameters in the sidebar and click 'Run Simulation'")
        return

    st.plotly_chart(
        create_return_chart(result, st.session_state.comparisons),
        use_container_width=True,
    )
    render_summary(result)
    render_block_analysis(result.blocks)

    if st.session_state.comparisons:
        render_stake_comparison(st.session_state.comparisons)

    st.markdown("---")
    st.markdown(
        "*Built with [Streamlit](https://streamlit.io) and "
        "[Plotly](https://plotly.com) | Betroll v0.1.0*"
    )


if __name__ == "__main__":
    main()
