"""
================================================================================
INTEGRATION TESTS -- PIPELINE, ADAPTERS AND CHARTS
================================================================================
Tests cover:
    1. End-to-end scoring and join over several periods
    2. Empty-document handling (skip with warning vs abort)
    3. File, CSV and market-data adapters (yfinance mocked)
    4. Chart rendering on the Agg backend
    5. Logger file output and level defaults
    6. Command-line entry point

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

import logging
from unittest.mock import patch

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest


# ============================================================================
# TEST: PIPELINE
# ============================================================================

class TestSentimentPipeline:
    """Tests for the normalize -> score -> join flow."""

    @pytest.fixture
    def pipeline(self, lexicon):
        from mdna_sentiment.pipeline import SentimentPipeline
        return SentimentPipeline(lexicon)

    def test_scores_every_period(self, pipeline, period_texts, metrics_frame):
        result = pipeline.run(period_texts, metrics_frame)
        frame = result.to_frame()
        assert frame["Year"].tolist() == [2021, 2022, 2023]
        assert frame["total_tokens"].tolist() == [6, 9, 7]
        assert frame["positive_count"].tolist() == [2, 0, 2]
        assert frame["negative_count"].tolist() == [0, 3, 0]
        assert frame["score"].tolist() == pytest.approx([2 / 6, -3 / 9, 2 / 7])
        assert result.skipped == ()

    def test_sentiment_series_ordered(self, pipeline, period_texts, metrics_frame):
        result = pipeline.run(period_texts, metrics_frame)
        assert [r.period for r in result.sentiment] == [2021, 2022, 2023]

    def test_empty_document_skipped_with_warning(self, pipeline, period_texts, metrics_frame):
        texts = dict(period_texts, **{"2024": "2024 -- 100%"})
        with pytest.warns(UserWarning, match="2024"):
            result = pipeline.run(texts, metrics_frame)
        assert result.skipped == (2024,)
        assert result.joined.periods == [2021, 2022, 2023]

    def test_skipped_period_still_reported_as_gap(self, pipeline, period_texts, metrics_frame):
        from mdna_sentiment.exceptions import JoinGapError
        texts = dict(period_texts, **{"2024": "the and of"})
        metrics = pd.concat(
            [metrics_frame, pd.DataFrame({"Year": [2024], "Revenue": [637.96],
                                          "Net_Income": [59.25], "EPS": [4.78]})],
            ignore_index=True,
        )
        with pytest.warns(UserWarning):
            with pytest.raises(JoinGapError) as info:
                pipeline.run(texts, metrics)
        assert info.value.metric_only == (2024,)

    def test_empty_document_aborts_when_configured(self, lexicon, period_texts, metrics_frame):
        from mdna_sentiment.config import PipelineConfig
        from mdna_sentiment.exceptions import EmptyDocumentError
        from mdna_sentiment.pipeline import SentimentPipeline
        pipeline = SentimentPipeline(lexicon, config=PipelineConfig(skip_empty_documents=False))
        texts = dict(period_texts, **{"2024": ""})
        with pytest.raises(EmptyDocumentError) as info:
            pipeline.run(texts, metrics_frame)
        assert info.value.period == 2024

    def test_partial_join(self, pipeline, period_texts, metrics_frame):
        texts = {k: v for k, v in period_texts.items() if k != "2023"}
        result = pipeline.run(texts, metrics_frame, allow_partial=True)
        assert result.joined.periods == [2021, 2022]
        assert result.joined.metric_only == (2023,)

    def test_duplicate_document_period_raises(self, pipeline):
        with pytest.raises(ValueError, match="duplicate"):
            pipeline.score_documents({"2021": "growth", 2021: "loss"})

    def test_from_table(self, lm_table, period_texts, metrics_frame):
        from mdna_sentiment.pipeline import SentimentPipeline
        pipeline = SentimentPipeline.from_table(lm_table)
        result = pipeline.run(period_texts, metrics_frame)
        assert len(result.joined) == 3

    def test_from_table_bad_lexicon(self):
        from mdna_sentiment.exceptions import LexiconLoadError
        from mdna_sentiment.pipeline import SentimentPipeline
        with pytest.raises(LexiconLoadError):
            SentimentPipeline.from_table(pd.DataFrame({"Word": ["gain"]}))

    def test_correlations(self, pipeline, period_texts, metrics_frame):
        corr = pipeline.run(period_texts, metrics_frame).correlations()
        assert set(corr.index) == {"Revenue", "Net_Income", "EPS"}
        assert corr["pearson"].between(-1, 1).all()
        # 2022 is the only negative-tone, negative-income year
        assert corr.loc["Net_Income", "pearson"] > 0.9

    def test_custom_normalizer(self, lexicon, metrics_frame):
        from mdna_sentiment.models.normalizer import TextNormalizer
        from mdna_sentiment.pipeline import SentimentPipeline
        pipeline = SentimentPipeline(lexicon, normalizer=TextNormalizer(extra_stopwords=["aws"]))
        texts = {2021: "AWS growth", 2022: "AWS loss", 2023: "AWS sales"}
        frame = pipeline.run(texts, metrics_frame).to_frame()
        assert frame["total_tokens"].tolist() == [1, 1, 1]
        assert frame["score"].tolist() == [1.0, -1.0, 0.0]


# ============================================================================
# TEST: DATA ADAPTERS
# ============================================================================

class TestDataAdapters:
    """Tests for file, CSV and market-data adapters."""

    def test_load_period_texts_discovers_files(self, tmp_path):
        from mdna_sentiment.data_acquisition import load_period_texts
        (tmp_path / "AMZN_2022_10K.txt").write_text("loss", encoding="utf-8")
        (tmp_path / "AMZN_2021_10K.txt").write_text("growth", encoding="utf-8")
        (tmp_path / "MSFT_2021_10K.txt").write_text("other", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
        texts = load_period_texts(tmp_path, "AMZN")
        assert texts == {2021: "growth", 2022: "loss"}

    def test_load_period_texts_explicit_periods(self, tmp_path):
        from mdna_sentiment.data_acquisition import load_period_texts
        (tmp_path / "AMZN_2021_10K.txt").write_text("déficit", encoding="utf-8")
        assert load_period_texts(tmp_path, "AMZN", periods=["2021"]) == {2021: "déficit"}
        with pytest.raises(FileNotFoundError, match="2022"):
            load_period_texts(tmp_path, "AMZN", periods=[2021, 2022])

    def test_load_period_texts_missing_dir(self, tmp_path):
        from mdna_sentiment.data_acquisition import load_period_texts
        with pytest.raises(FileNotFoundError):
            load_period_texts(tmp_path / "nope", "AMZN")

    def test_read_lexicon_csv(self, tmp_path, lm_table):
        from mdna_sentiment.data_acquisition import read_lexicon_csv
        path = tmp_path / "lm.csv"
        lm_table.to_csv(path, index=False)
        lex = read_lexicon_csv(path)
        assert lex.positive == {"growth", "strong", "achieve"}

    def test_read_empty_lexicon_csv(self, tmp_path):
        from mdna_sentiment.data_acquisition import read_lexicon_csv
        from mdna_sentiment.exceptions import LexiconLoadError
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(LexiconLoadError):
            read_lexicon_csv(path)
        path.write_text("Word,Positive,Negative\n", encoding="utf-8")
        with pytest.raises(LexiconLoadError, match="empty"):
            read_lexicon_csv(path)

    def test_load_financial_metrics(self, tmp_path):
        from mdna_sentiment.data_acquisition import load_financial_metrics
        frame = load_financial_metrics({"Year": ["2022", "2021"], "EPS": [-0.27, 64.81]})
        assert frame["Year"].tolist() == [2021, 2022]
        path = tmp_path / "metrics.csv"
        frame.to_csv(path, index=False)
        assert load_financial_metrics(path)["EPS"].tolist() == [64.81, -0.27]
        with pytest.raises(KeyError):
            load_financial_metrics({"EPS": [1.0]})

    def test_annual_return_from_prices(self):
        from mdna_sentiment.data_acquisition import annual_return_from_prices
        idx = pd.to_datetime(["2021-01-04", "2021-06-01", "2021-12-31", "2022-01-03", "2022-12-30"])
        close = pd.Series([100.0, 90.0, 125.0, 200.0, 150.0], index=idx)
        assert annual_return_from_prices(close, [2021, 2022, 2023]) == {2021: 25.0, 2022: -25.0}

    def test_annual_returns_via_yfinance(self):
        from mdna_sentiment.data_acquisition import MarketDataLoader
        idx = pd.to_datetime(["2021-01-04", "2021-12-31", "2022-01-03", "2022-12-30"])
        data = pd.DataFrame({"Close": [163.5, 166.72, 170.4, 84.0]}, index=idx)
        with patch("mdna_sentiment.data_acquisition.yf.download", return_value=data) as dl:
            returns = MarketDataLoader().annual_returns("AMZN", ["2022", 2021])
        assert dl.call_args.kwargs["start"] == "2021-01-01"
        assert dl.call_args.kwargs["end"] == "2023-01-01"
        assert returns == {2021: 1.97, 2022: -50.7}

    def test_multiindex_close_columns(self):
        from mdna_sentiment.data_acquisition import MarketDataLoader
        idx = pd.to_datetime(["2021-01-04", "2021-12-31"])
        cols = pd.MultiIndex.from_tuples([("Close", "AMZN"), ("Open", "AMZN")])
        data = pd.DataFrame([[100.0, 99.0], [110.0, 109.0]], index=idx, columns=cols)
        with patch("mdna_sentiment.data_acquisition.yf.download", return_value=data):
            close = MarketDataLoader().fetch_close("AMZN", "2021-01-01", "2022-01-01")
        assert close.tolist() == [100.0, 110.0]

    def test_add_stock_returns_no_data(self, metrics_frame):
        from mdna_sentiment.data_acquisition import MarketDataLoader
        with patch("mdna_sentiment.data_acquisition.yf.download", return_value=pd.DataFrame()):
            out = MarketDataLoader().add_stock_returns(metrics_frame, "AMZN")
        assert "Stock_Return" in out.columns
        assert out["Stock_Return"].isna().all()
        assert "Stock_Return" not in metrics_frame.columns


# ============================================================================
# TEST: CHARTS
# ============================================================================

class TestCharts:
    """Tests for matplotlib rendering."""

    @pytest.fixture
    def combined(self):
        return pd.DataFrame({
            "Year": [2023, 2021, 2022],
            "score": [0.01, 0.02, -0.01],
            "Revenue": [574.79, 469.82, 513.98],
            "ROA": [5.76, 7.93, -0.59],
        })

    def teardown_method(self):
        plt.close("all")

    def test_sentiment_series(self, combined, tmp_path):
        from mdna_sentiment.visualization import plot_sentiment_series
        path = tmp_path / "figs" / "score.png"
        fig = plot_sentiment_series(combined, save_path=str(path))
        assert isinstance(fig, plt.Figure)
        assert path.exists()
        xs = fig.axes[0].lines[0].get_xdata()
        assert list(xs) == [2021, 2022, 2023]

    def test_metric_comparison(self, combined):
        from mdna_sentiment.visualization import plot_metric_comparison
        fig = plot_metric_comparison(combined, "Revenue")
        assert len(fig.axes) == 2
        legend = fig.axes[0].get_legend()
        labels = [t.get_text() for t in legend.get_texts()]
        assert labels == ["Sentiment Score", "Revenue (Billion USD)"]
        assert "Revenue" in fig.axes[0].get_title()

    def test_metric_comparison_missing_column(self, combined):
        from mdna_sentiment.visualization import plot_metric_comparison
        with pytest.raises(KeyError):
            plot_metric_comparison(combined, "EPS")

    def test_all_comparisons(self, combined, tmp_path):
        from mdna_sentiment.visualization import plot_all_comparisons
        figures = plot_all_comparisons(combined, output_dir=str(tmp_path))
        assert set(figures) == {"Revenue", "ROA"}
        assert (tmp_path / "sentiment_vs_roa.png").exists()


# ============================================================================
# TEST: LOGGING
# ============================================================================

def _drop_handlers(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestLogging:
    """Tests for get_logger's file output and level default."""

    def test_file_handler_writes_under_log_dir(self, tmp_path):
        from mdna_sentiment.utils import get_logger
        log_dir = tmp_path / "logs"
        logger = get_logger("mdna_sentiment.tests.file", log_dir=str(log_dir), console=False)
        try:
            logger.warning("lexicon refreshed")
            files = list(log_dir.glob("mdna_sentiment_*.log"))
            assert len(files) == 1
            assert "lexicon refreshed" in files[0].read_text()
            assert not [h for h in logger.handlers if type(h) is logging.StreamHandler]
        finally:
            _drop_handlers(logger)

    def test_level_defaults_to_config(self):
        from mdna_sentiment.config import CONFIG
        from mdna_sentiment.utils import get_logger
        with patch.object(CONFIG, "log_level", "WARNING"):
            logger = get_logger("mdna_sentiment.tests.level")
        try:
            assert logger.level == logging.WARNING
        finally:
            _drop_handlers(logger)

    def test_explicit_level_wins(self):
        from mdna_sentiment.utils import get_logger
        logger = get_logger("mdna_sentiment.tests.explicit", level="debug")
        try:
            assert logger.level == logging.DEBUG
        finally:
            _drop_handlers(logger)


# ============================================================================
# TEST: ENTRY POINT
# ============================================================================

class TestMain:
    """Runs main.py end to end on temporary files."""

    @pytest.fixture
    def argv(self, tmp_path, lm_table, period_texts, metrics_frame):
        texts_dir = tmp_path / "texts"
        texts_dir.mkdir()
        for year, text in period_texts.items():
            (texts_dir / f"AMZN_{year}_10K.txt").write_text(text, encoding="utf-8")
        lm_path = tmp_path / "lm.csv"
        lm_table.to_csv(lm_path, index=False)
        metrics_path = tmp_path / "metrics.csv"
        metrics_frame.to_csv(metrics_path, index=False)
        return [
            "--texts-dir", str(texts_dir),
            "--lexicon", str(lm_path),
            "--metrics", str(metrics_path),
            "--ticker", "AMZN",
            "--output-dir", str(tmp_path / "out"),
            "--no-market-data",
        ]

    def test_main_without_market_data(self, tmp_path, argv):
        import main
        result = main.main(argv)

        out_dir = tmp_path / "out"
        assert result.joined.periods == [2021, 2022, 2023]
        assert (out_dir / "figures" / "sentiment_score.png").exists()
        assert (out_dir / "figures" / "sentiment_vs_revenue.png").exists()
        assert np.isclose(result.to_frame()["score"].iloc[0], 2 / 6)

    def test_main_closes_figures(self, argv):
        import main
        main.main(argv)
        assert plt.get_fignums() == []

    def test_log_dir_receives_package_log(self, tmp_path, argv):
        import main
        package_logger = logging.getLogger("mdna_sentiment")
        _drop_handlers(package_logger)
        try:
            main.main(argv + ["--log-dir", str(tmp_path / "logs")])
            files = list((tmp_path / "logs").glob("mdna_sentiment_*.log"))
            assert len(files) == 1
            text = files[0].read_text()
            assert "mdna_sentiment.pipeline" in text
            assert "Combined series covers periods [2021, 2022, 2023]" in text
        finally:
            _drop_handlers(package_logger)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
