"""
Streamlit web interface for the zero-probability toolkit.

Interactive UI with tabs for:
- Relevance of a point event
- Black swan (market crash) estimation
- Exact-value betting expected value
"""

import numpy as np
import pandas as pd
import streamlit as st

from zeroprob.core.distributions import normal, student_t, uniform
from zeroprob.core.events import BettingEdgeCase, ContinuousZeroProbEvent
from zeroprob.core.measures import (
    density_ratio,
    epsilon_neighborhood,
    hausdorff_measure,
    probability,
    relevance_score,
)
from zeroprob.estimators.betting import break_even_payout, expected_value
from zeroprob.estimators.black_swan import (
    expected_impact,
    market_crash_event,
    tail_conditional_impact,
)
from zeroprob.utils.errors import ZeroProbError

st.set_page_config(page_title="Zero-Probability Toolkit", layout="wide")

st.title("Zero-Probability Toolkit")
st.markdown("Relevance of events that have probability zero but still happen")

# Sidebar parameters
st.sidebar.header("Outcome Distribution")
dist_name = st.sidebar.selectbox("Distribution", ["normal", "uniform", "t"])
loc = st.sidebar.number_input("Location", value=0.0)
scale = st.sidebar.number_input("Scale", value=1.0, min_value=0.001)
df = st.sidebar.slider("Degrees of freedom (t)", 1.0, 30.0, 3.0)

if dist_name == "normal":
    dist = normal(loc, scale)
elif dist_name == "uniform":
    dist = uniform(loc, loc + scale)
else:
    dist = student_t(df, loc, scale)

# Main tabs
tab1, tab2, tab3 = st.tabs(["Relevance", "Black Swan", "Betting"])

with tab1:
    st.header("Point Event Relevance")

    point = st.number_input("Point", value=loc)
    event = ContinuousZeroProbEvent(dist, point)

    col1, col2 = st.columns(2)

    with col1:
        st.metric(label="P(X = point)", value=f"{probability(event):.1f}")
        st.metric(label="Density", value=f"{density_ratio(event):.6f}")
        st.metric(label="Hausdorff (dim 0)", value=f"{hausdorff_measure(event, 0):.1f}")

    with col2:
        scores_df = pd.DataFrame({
            "Application": ["black_swan", "betting", "decision_theory"],
            "Score": [f"{relevance_score(event, a):.6f}"
                      for a in ["black_swan", "betting", "decision_theory"]],
        })
        st.subheader("Application Scores")
        st.table(scores_df)

    st.subheader("Near-Miss Probability")
    eps_grid = np.geomspace(1e-3, 10.0 * scale, 12)
    st.table(pd.DataFrame({
        "epsilon": [f"{e:.4g}" for e in eps_grid],
        "P(|X - point| < epsilon)": [f"{epsilon_neighborhood(event, e):.6f}" for e in eps_grid],
    }))

with tab2:
    st.header("Market Crash Black Swan")

    loss = st.number_input("Loss if crash occurs", value=1_000_000.0, min_value=0.0)
    severity = st.selectbox("Severity", ["catastrophic", "high", "moderate"], index=1)
    mean_return = st.slider("Mean daily return (%)", -1.0, 1.0, 0.1) / 100
    volatility = st.slider("Daily volatility (%)", 0.5, 20.0, 2.0) / 100
    samples = st.number_input("Monte Carlo samples", value=10_000, min_value=1, step=1000)

    crash = market_crash_event(loss, mean_return, volatility, severity)

    col1, col2, col3 = st.columns(3)
    col1.metric("Threshold", f"{crash.threshold:.0%}")
    col2.metric("P(crash)", f"{probability(crash):.3e}")
    col3.metric("Expected impact", f"{expected_impact(crash, int(samples)):,.2f}")

    st.info(f"Impact given crash: {tail_conditional_impact(crash, int(samples)):,.2f}")

with tab3:
    st.header("Exact-Value Bet")

    bet_value = st.number_input("Bet value", value=loc)
    payout = st.number_input("Payout on exact hit", value=1000.0, min_value=0.0)
    cost = st.number_input("Cost", value=1.0, min_value=0.0)
    method = st.selectbox("Method", ["epsilon", "density"])
    epsilon = st.number_input("Epsilon", value=0.01, min_value=1e-6, format="%.6f")

    if st.button("Compute Expected Value"):
        try:
            wager = BettingEdgeCase(dist, bet_value, payout, cost)
            ev = expected_value(wager, method=method, epsilon=epsilon)
            st.success(f"Expected value: {ev:.4f}")
            st.info(f"Break-even payout: {break_even_payout(wager, method, epsilon):,.2f}")
        except ZeroProbError as e:
            st.error(f"Error: {e}")
