"""
conftest.py
-----------
Shared fixtures: a small polarity dictionary, per-year MD&A excerpts and
yearly metrics. Uses the non-interactive matplotlib backend so chart tests
run headless.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import matplotlib
matplotlib.use("Agg")

import pandas as pd
import pytest


@pytest.fixture
def lm_table():
    """Miniature Loughran-McDonald layout, including ignored columns."""
    return pd.DataFrame({
        "Word":        ["GROWTH", "Strong", "loss", "DECLINE", "revenue", "Uncertain", "ACHIEVE"],
        "Seq_num":     [1, 2, 3, 4, 5, 6, 7],
        "Negative":    [0, 0, 2009, 2009, 0, 0, 0],
        "Positive":    [2009, 2009, 0, 0, 0, 0, 2009],
        "Uncertainty": [0, 0, 0, 0, 0, 2009, 0],
    })


@pytest.fixture
def lexicon(lm_table):
    from mdna_sentiment.models.lexicon import load_lexicon
    return load_lexicon(lm_table)


@pytest.fixture
def period_texts():
    """Raw MD&A excerpts keyed by year labels, deliberately out of order."""
    return {
        "2023": "Net sales grew 12% in 2023, driven by strong growth in AWS.",
        "2021": "Revenue growth was STRONG; we achieved record results.",
        "2022": "We recorded a net loss of $2.7 billion amid a decline in demand, and the loss widened.",
    }


@pytest.fixture
def metrics_frame():
    return pd.DataFrame({
        "Year":       [2021, 2022, 2023],
        "Revenue":    [469.82, 513.98, 574.79],
        "Net_Income": [33.36, -2.72, 30.43],
        "EPS":        [64.81, -0.27, 2.96],
    })
