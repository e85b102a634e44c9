"""
Charts for the yearly MD&A sentiment series.

Figures generated:
    sentiment_score.png          - Net tone score by year
    sentiment_vs_<metric>.png    - Score against one financial metric

Author: Jose Orlando Bobadilla Fuentes, CQF
"""
import os
from typing import Dict, Optional

import matplotlib.pyplot as plt
import pandas as pd

SCORE_COLOR = "steelblue"
POINT_COLOR = "darkred"
METRIC_COLOR = "darkgreen"

plt.rcParams.update({
    "figure.facecolor": "white", "axes.facecolor": "white",
    "axes.grid": True, "grid.alpha": 0.3, "grid.linestyle": "--",
    "axes.spines.top": False, "savefig.facecolor": "white",
})

# Reference metric columns and their axis labels
METRIC_LABELS = {
    "Revenue": "Revenue (Billion USD)",
    "Net_Income": "Net Income (Billion USD)",
    "EPS": "EPS (USD)",
    "ROA": "ROA (%)",
    "Stock_Return": "Stock Return (%)",
}


def _save(fig: plt.Figure, save_path: Optional[str]) -> None:
    if save_path:
        folder = os.path.dirname(save_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        fig.savefig(save_path, dpi=150, bbox_inches="tight")


def plot_sentiment_series(
    frame: pd.DataFrame,
    title: str = "MD&A Sentiment Score",
    period_column: str = "Year",
    score_column: str = "score",
    figsize: tuple = (10, 6),
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Line plot of the sentiment score over the periods in `frame`."""
    data = frame.sort_values(period_column)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(data[period_column], data[score_column], color=SCORE_COLOR, linewidth=2)
    ax.scatter(data[period_column], data[score_column], color=POINT_COLOR, s=50, zorder=3)
    ax.axhline(0, color="gray", linewidth=0.8, linestyle=":")
    ax.set_xticks(data[period_column].tolist())
    ax.set_title(title, fontweight="bold")
    ax.set_xlabel(period_column)
    ax.set_ylabel("Sentiment Score")
    fig.tight_layout()

    _save(fig, save_path)
    return fig


def plot_metric_comparison(
    frame: pd.DataFrame,
    metric_column: str,
    metric_label: Optional[str] = None,
    period_column: str = "Year",
    score_column: str = "score",
    figsize: tuple = (10, 6),
    save_path: Optional[str] = None,
) -> plt.Figure:
    """
    Sentiment score and one financial metric over time.

    The score and the metric sit on separate y-axes because their scales
    differ by orders of magnitude; one legend names both lines.
    """
    if metric_column not in frame.columns:
        raise KeyError(f"metric column '{metric_column}' not in frame")
    label = metric_label or METRIC_LABELS.get(metric_column, metric_column)
    data = frame.sort_values(period_column)

    fig, ax1 = plt.subplots(figsize=figsize)
    line1 = ax1.plot(data[period_column], data[score_column], color=SCORE_COLOR,
                     linewidth=2, marker="o", label="Sentiment Score")
    ax1.set_xlabel(period_column)
    ax1.set_ylabel("Sentiment Score", color=SCORE_COLOR)
    ax1.set_xticks(data[period_column].tolist())

    ax2 = ax1.twinx()
    line2 = ax2.plot(data[period_column], data[metric_column], color=METRIC_COLOR,
                     linewidth=2, marker="s", label=label)
    ax2.set_ylabel(label, color=METRIC_COLOR)
    ax2.grid(False)

    lines = line1 + line2
    ax1.legend(lines, [l.get_label() for l in lines], loc="center left",
               bbox_to_anchor=(1.08, 0.5), title="Metric")
    ax1.set_title(f"Sentiment Score vs. {label} Over Time", fontweight="bold")
    fig.tight_layout()

    _save(fig, save_path)
    return fig


def plot_all_comparisons(
    frame: pd.DataFrame,
    output_dir: Optional[str] = None,
    labels: Optional[Dict[str, str]] = None,
    period_column: str = "Year",
) -> Dict[str, plt.Figure]:
    """One comparison chart per known metric column present in `frame`."""
    labels = labels or METRIC_LABELS
    figures = {}
    for column, label in labels.items():
        if column not in frame.columns:
            continue
        path = os.path.join(output_dir, f"sentiment_vs_{column.lower()}.png") if output_dir else None
        figures[column] = plot_metric_comparison(
            frame, column, label, period_column=period_column, save_path=path
        )
    return figures
