"""
MD&A Sentiment vs Financial Performance - Main Entry Point
===========================================================
Scores the MD&A section of each annual 10-K with the Loughran-McDonald
dictionary and compares the yearly tone with the company's financial
results and stock return.

Inputs (all passed explicitly):
    - a folder of pre-extracted MD&A texts named <TICKER>_<YEAR>_10K.txt
    - the Loughran-McDonald Master Dictionary CSV
    - optionally a CSV of yearly metrics (defaults to Amazon 2021-2025)

Author: Jose Orlando Bobadilla Fuentes, CQF
"""

import argparse
import os
import warnings

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mdna_sentiment.config import CONFIG
from mdna_sentiment.data_acquisition import (
    MarketDataLoader,
    load_financial_metrics,
    load_period_texts,
    read_lexicon_csv,
)
from mdna_sentiment.pipeline import SentimentPipeline
from mdna_sentiment.utils import get_logger
from mdna_sentiment.visualization import plot_all_comparisons, plot_sentiment_series

# Amazon reference figures: Revenue and Net Income in billions USD,
# diluted EPS in USD, ROA in percent.
REFERENCE_METRICS = {
    "Year":       [2021, 2022, 2023, 2024, 2025],
    "Revenue":    [469.82, 513.98, 574.79, 637.96, 650.31],
    "Net_Income": [33.36, -2.72, 30.43, 59.25, 65.94],
    "EPS":        [64.81, -0.27, 2.96, 4.78, 6.37],
    "ROA":        [7.93, -0.59, 5.76, 9.48, 10.96],
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="MD&A sentiment vs financial performance")
    parser.add_argument("--texts-dir", required=True, help="Folder with <TICKER>_<YEAR>_10K.txt files")
    parser.add_argument("--lexicon", required=True, help="Loughran-McDonald Master Dictionary CSV")
    parser.add_argument("--metrics", default=None, help="CSV of yearly metrics with a Year column")
    parser.add_argument("--ticker", default=CONFIG.ticker)
    parser.add_argument("--output-dir", default=CONFIG.output_dir)
    parser.add_argument("--log-dir", default=CONFIG.log_dir, help="Also write a daily log file here")
    parser.add_argument("--no-market-data", action="store_true", help="Skip the yfinance stock return download")
    parser.add_argument("--allow-partial", action="store_true", help="Keep common years when series differ")
    return parser.parse_args(argv)


def main(argv=None):
    """Run the complete text-to-comparison pipeline."""
    args = parse_args(argv)
    if args.log_dir:
        get_logger("mdna_sentiment", log_dir=args.log_dir, level=CONFIG.log_level, console=False)

    print("=" * 70)
    print("MD&A SENTIMENT VS FINANCIAL PERFORMANCE")
    print("=" * 70)
    print(f"\n  Ticker: {args.ticker}")

    # --- Step 1: Inputs ---
    print("\n[1/5] Loading texts and dictionary...")
    texts = load_period_texts(args.texts_dir, args.ticker)
    lexicon = read_lexicon_csv(args.lexicon, CONFIG.lexicon)
    print(f"  Documents: {sorted(texts)}")
    print(f"  Lexicon:   {len(lexicon.positive)} positive | {len(lexicon.negative)} negative")

    # --- Step 2: Financial metrics ---
    print("\n[2/5] Assembling financial metrics...")
    metrics = load_financial_metrics(args.metrics or REFERENCE_METRICS)
    if not args.no_market_data:
        metrics = MarketDataLoader().add_stock_returns(metrics, args.ticker)
    print(f"  Metric columns: {[c for c in metrics.columns if c != 'Year']}")

    # --- Step 3: Scoring and join ---
    print("\n[3/5] Scoring documents...")
    pipeline = SentimentPipeline(lexicon, config=CONFIG)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = pipeline.run(texts, metrics, allow_partial=args.allow_partial or None)
    for w in caught:
        print(f"  WARNING: {w.message}")
    combined = result.to_frame()
    print(combined.to_string(index=False))

    # --- Step 4: Correlation ---
    print("\n[4/5] Correlation of sentiment score with metrics...")
    print(result.correlations().round(3).to_string())

    # --- Step 5: Charts ---
    print("\n[5/5] Rendering charts...")
    fig_dir = os.path.join(args.output_dir, "figures")
    plot_sentiment_series(
        combined,
        title=f"{args.ticker} MD&A Sentiment Score",
        save_path=os.path.join(fig_dir, "sentiment_score.png"),
    )
    figures = plot_all_comparisons(combined, output_dir=fig_dir)
    print(f"  Saved {len(figures) + 1} charts to {fig_dir}")
    plt.close("all")

    print("\n" + "=" * 70)
    print("PIPELINE COMPLETE")
    print("=" * 70)
    return result


if __name__ == "__main__":
    main()
