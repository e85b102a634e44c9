"""Matplotlib charts for the sentiment and metric series."""

from mdna_sentiment.visualization.sentiment_plots import (
    plot_sentiment_series,
    plot_metric_comparison,
    plot_all_comparisons,
)

__all__ = ["plot_sentiment_series", "plot_metric_comparison", "plot_all_comparisons"]
