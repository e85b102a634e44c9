"""
================================================================================
SENTIMENT PIPELINE
================================================================================
Runs the full batch for one company:

    raw text per period -> TextNormalizer -> LexiconSentimentScorer
    -> SeriesAggregator (sort + join with metrics) -> PipelineResult

Every input arrives as an in-memory value; nothing is resolved against the
working directory. Periods are scored independently, so an empty document
only affects its own period: by default it is skipped with a warning and
listed on the result, and the remaining periods are still scored.

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from mdna_sentiment.aggregation import (
    JoinResult,
    MetricTable,
    SeriesAggregator,
    correlate_with_metrics,
)
from mdna_sentiment.config import PipelineConfig
from mdna_sentiment.exceptions import EmptyDocumentError
from mdna_sentiment.models.lexicon import LexiconTable, PolarityLexicon, load_lexicon
from mdna_sentiment.models.normalizer import TextNormalizer
from mdna_sentiment.models.scorer import LexiconSentimentScorer, SentimentRecord
from mdna_sentiment.utils import get_logger, timeit, to_period_key

log = get_logger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Scored series, joined series, and the periods that could not be scored."""
    sentiment: Tuple[SentimentRecord, ...]
    joined:    JoinResult
    skipped:   Tuple[int, ...] = field(default_factory=tuple)

    def to_frame(self) -> pd.DataFrame:
        return self.joined.to_frame()

    def correlations(self) -> pd.DataFrame:
        return correlate_with_metrics(
            self.to_frame(), period_column=self.joined.period_column
        )


class SentimentPipeline:
    """
    End-to-end lexicon sentiment scoring over a set of period documents.

    Parameters
    ----------
    lexicon : PolarityLexicon
        Positive and negative word sets.
    normalizer : TextNormalizer, optional
        Defaults to one built from `config.normalizer`.
    config : PipelineConfig, optional
    """

    def __init__(
        self,
        lexicon: PolarityLexicon,
        normalizer: Optional[TextNormalizer] = None,
        config: Optional[PipelineConfig] = None,
    ):
        self.config = config or PipelineConfig()
        self.lexicon = lexicon
        self.normalizer = normalizer or TextNormalizer.from_config(self.config.normalizer)
        self.scorer = LexiconSentimentScorer(lexicon)
        self.aggregator = SeriesAggregator(self.config.aggregation)

    @classmethod
    def from_table(
        cls,
        table: LexiconTable,
        config: Optional[PipelineConfig] = None,
    ) -> "SentimentPipeline":
        """Build the lexicon from a polarity dictionary table, then the pipeline."""
        cfg = config or PipelineConfig()
        return cls(load_lexicon(table, cfg.lexicon), config=cfg)

    def score_documents(
        self,
        documents: Mapping[Any, str],
    ) -> Tuple[Dict[int, SentimentRecord], Tuple[int, ...]]:
        """
        Normalize and score each period's raw text.

        Returns
        -------
        (records, skipped) -- records keyed by integer period, plus the
        periods whose text normalized to nothing (only when
        `skip_empty_documents` is set; otherwise EmptyDocumentError
        propagates).
        """
        keyed: Dict[int, str] = {}
        for label, text in documents.items():
            key = to_period_key(label)
            if key in keyed:
                raise ValueError(f"duplicate document period {key} (label {label!r})")
            keyed[key] = text

        records: Dict[int, SentimentRecord] = {}
        skipped: List[int] = []
        periods = tqdm(sorted(keyed), desc="Scoring", disable=not self.config.show_progress)
        for period in periods:
            cleaned = self.normalizer.normalize(keyed[period])
            try:
                record = self.scorer.score(cleaned, period=period)
            except EmptyDocumentError as exc:
                if not self.config.skip_empty_documents:
                    raise
                msg = f"Skipping period {period}: {exc}"
                log.warning(msg)
                warnings.warn(msg, UserWarning, stacklevel=2)
                skipped.append(period)
                continue
            log.debug(
                "Period %d: %d tokens, %d positive, %d negative, score %.5f",
                period, record.total_tokens, record.positive_count,
                record.negative_count, record.score,
            )
            records[period] = record
        return records, tuple(skipped)

    @timeit
    def run(
        self,
        documents: Mapping[Any, str],
        metrics: MetricTable,
        allow_partial: Optional[bool] = None,
    ) -> PipelineResult:
        """
        Score every document and join the series with the metric records.

        Parameters
        ----------
        documents : mapping period -> raw text
        metrics : DataFrame or mapping period -> {metric: value}
        allow_partial : bool, optional
            Overrides `config.aggregation.allow_partial`.

        Raises
        ------
        JoinGapError
            Strict mode only, when documents and metrics cover different
            periods (including periods skipped as empty).
        """
        log.info("Scoring %d documents against %r", len(documents), self.lexicon)
        records, skipped = self.score_documents(documents)
        joined = self.aggregator.join(records, metrics, allow_partial=allow_partial)
        log.info("Combined series covers periods %s", joined.periods)
        return PipelineResult(
            sentiment=tuple(self.aggregator.order(records)),
            joined=joined,
            skipped=skipped,
        )
