"""
================================================================================
SERIES AGGREGATION & METRIC JOIN
================================================================================
Assembles per-period sentiment records into a chronological series and
lines it up against externally supplied financial metrics.

Pipeline:
    {period: SentimentRecord} -> numeric sort by period key
    -> exact-key join with {period: metrics}
    -> ordered CombinedRecords / DataFrame -> correlation summary

Period labels may arrive as strings ("2023") in any order; they are coerced
to integers and sorted numerically, never by insertion or lexical order.
A period present on only one side is never dropped silently: strict mode
raises JoinGapError naming the gaps, partial mode keeps the common periods
and reports the rest on the JoinResult.

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd
from scipy import stats

from mdna_sentiment.config import AggregationConfig
from mdna_sentiment.exceptions import JoinGapError
from mdna_sentiment.models.scorer import SentimentRecord
from mdna_sentiment.utils import get_logger, to_period_key

log = get_logger(__name__)

SENTIMENT_FIELDS = ("positive_count", "negative_count", "total_tokens", "score")

MetricTable = Union[pd.DataFrame, Mapping[Any, Mapping[str, Any]]]


@dataclass(frozen=True)
class CombinedRecord:
    """One period's sentiment measurement paired with its financial metrics."""
    period:    int
    sentiment: SentimentRecord
    metrics:   Dict[str, Any] = field(default_factory=dict)

    def to_dict(self, period_column: str = "Year") -> Dict[str, Any]:
        row = {period_column: self.period}
        for name in SENTIMENT_FIELDS:
            row[name] = getattr(self.sentiment, name)
        row.update(self.metrics)
        return row


@dataclass(frozen=True)
class JoinResult:
    """
    Output of SeriesAggregator.join.

    `sentiment_only` and `metric_only` are empty unless the join ran in
    partial mode and found periods covered by one side only.
    """
    records:        Tuple[CombinedRecord, ...]
    sentiment_only: Tuple[int, ...] = ()
    metric_only:    Tuple[int, ...] = ()
    period_column:  str = "Year"

    @property
    def is_partial(self) -> bool:
        return bool(self.sentiment_only or self.metric_only)

    @property
    def periods(self) -> List[int]:
        return [r.period for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def to_frame(self) -> pd.DataFrame:
        """Combined series as a DataFrame ordered by period."""
        rows = [r.to_dict(self.period_column) for r in self.records]
        if not rows:
            return pd.DataFrame(columns=[self.period_column, *SENTIMENT_FIELDS])
        return pd.DataFrame(rows).reset_index(drop=True)


class SeriesAggregator:
    """
    Orders sentiment records by period and joins them with metric records.

    Parameters
    ----------
    config : AggregationConfig, optional
        Period column name and default join mode.
    """

    def __init__(self, config: Optional[AggregationConfig] = None):
        self.config = config or AggregationConfig()

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    @staticmethod
    def _keyed(mapping: Mapping[Any, Any], what: str) -> Dict[int, Any]:
        """Re-key a mapping by integer period, rejecting collisions."""
        keyed: Dict[int, Any] = {}
        for label, value in mapping.items():
            key = to_period_key(label)
            if key in keyed:
                raise ValueError(f"duplicate {what} period {key} (label {label!r})")
            keyed[key] = value
        return keyed

    def order(self, sentiment: Mapping[Any, SentimentRecord]) -> List[SentimentRecord]:
        """
        Return sentiment records sorted ascending by numeric period key.

        Each returned record carries its integer period.
        """
        keyed = self._keyed(sentiment, "sentiment")
        return [
            dataclasses.replace(keyed[key], period=key)
            for key in sorted(keyed)
        ]

    def to_frame(self, sentiment: Mapping[Any, SentimentRecord]) -> pd.DataFrame:
        """Ordered sentiment series as a DataFrame (period column first)."""
        rows = [
            {self.config.period_column: r.period, **{f: getattr(r, f) for f in SENTIMENT_FIELDS}}
            for r in self.order(sentiment)
        ]
        return pd.DataFrame(rows, columns=[self.config.period_column, *SENTIMENT_FIELDS])

    # ------------------------------------------------------------------
    # Join
    # ------------------------------------------------------------------

    def metrics_by_period(self, metrics: MetricTable) -> Dict[int, Dict[str, Any]]:
        """
        Normalize a metric table to {period: {metric: value}}.

        A DataFrame is keyed by its period column when present (matched
        case-insensitively), otherwise by its index.
        """
        if isinstance(metrics, pd.DataFrame):
            lookup = {str(c).lower(): c for c in metrics.columns}
            period_col = lookup.get(self.config.period_column.lower())
            if period_col is not None:
                frame = metrics.set_index(period_col)
            else:
                frame = metrics
            mapping = {
                label: {str(k): v for k, v in row.items()}
                for label, row in zip(frame.index, frame.to_dict(orient="records"))
            }
            if len(mapping) != len(frame):
                raise ValueError("duplicate metric periods in table")
        else:
            mapping = {label: dict(values) for label, values in metrics.items()}

        keyed = self._keyed(mapping, "metric")
        for period, values in keyed.items():
            clash = set(values) & {self.config.period_column, *SENTIMENT_FIELDS}
            if clash:
                raise ValueError(
                    f"metric names for period {period} clash with sentiment columns: {sorted(clash)}"
                )
        return keyed

    def join(
        self,
        sentiment: Mapping[Any, SentimentRecord],
        metrics: MetricTable,
        allow_partial: Optional[bool] = None,
    ) -> JoinResult:
        """
        Join the sentiment series with metric records on exact period key.

        Parameters
        ----------
        sentiment : mapping period -> SentimentRecord
        metrics : DataFrame or mapping period -> {metric: value}
        allow_partial : bool, optional
            Overrides the configured mode. When True, periods found on one
            side only are reported on the result instead of raising.

        Returns
        -------
        JoinResult ordered ascending by period.

        Raises
        ------
        JoinGapError
            In strict mode, when the two sides cover different periods.
        """
        partial = self.config.allow_partial if allow_partial is None else allow_partial
        ordered = self.order(sentiment)
        metric_map = self.metrics_by_period(metrics)

        sentiment_keys = {r.period for r in ordered}
        metric_keys = set(metric_map)
        sentiment_only = tuple(sorted(sentiment_keys - metric_keys))
        metric_only = tuple(sorted(metric_keys - sentiment_keys))

        if sentiment_only or metric_only:
            if not partial:
                raise JoinGapError(sentiment_only, metric_only)
            log.warning(
                "Partial join: dropped sentiment-only periods %s and metric-only periods %s",
                list(sentiment_only), list(metric_only),
            )

        records = tuple(
            CombinedRecord(period=r.period, sentiment=r, metrics=dict(metric_map[r.period]))
            for r in ordered
            if r.period in metric_map
        )
        return JoinResult(
            records=records,
            sentiment_only=sentiment_only,
            metric_only=metric_only,
            period_column=self.config.period_column,
        )


def _coefficient(method, x: np.ndarray, y: np.ndarray) -> float:
    if len(x) < 3 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return float("nan")
    r, _ = method(x, y)
    return float(r)


def correlate_with_metrics(
    frame: pd.DataFrame,
    score_column: str = "score",
    period_column: str = "Year",
) -> pd.DataFrame:
    """
    Pearson and Spearman correlation of the sentiment score with each metric.

    Only coefficients are reported. Metrics with fewer than three joint
    observations, or with no variation, get NaN.

    Parameters
    ----------
    frame : pd.DataFrame
        Output of JoinResult.to_frame().

    Returns
    -------
    pd.DataFrame indexed by metric with columns [pearson, spearman, n_periods].
    """
    skip = {period_column, *SENTIMENT_FIELDS}
    metric_cols = [
        c for c in frame.columns
        if c not in skip and pd.api.types.is_numeric_dtype(frame[c])
    ]

    rows = {}
    for col in metric_cols:
        pair = frame[[score_column, col]].dropna()
        x = pair[score_column].to_numpy(dtype=float)
        y = pair[col].to_numpy(dtype=float)
        rows[col] = {
            "pearson": _coefficient(stats.pearsonr, x, y),
            "spearman": _coefficient(stats.spearmanr, x, y),
            "n_periods": len(pair),
        }
    result = pd.DataFrame.from_dict(rows, orient="index", columns=["pearson", "spearman", "n_periods"])
    result.index.name = "metric"
    return result
