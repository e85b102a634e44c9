"""
MD&A Sentiment vs Financial Performance
=======================================
Lexicon-based tone measurement of annual MD&A disclosures, lined up
year by year against the company's financial performance.

Modules:
    models.lexicon      - Loughran-McDonald polarity word sets
    models.normalizer   - Canonical text cleaning before counting
    models.scorer       - Positive/negative hit counts and net tone score
    aggregation         - Period ordering, metric join, correlation summary
    pipeline            - One-call scoring of every period
    data_acquisition    - Text, lexicon, metric and market-data adapters
    visualization       - Sentiment and metric comparison charts

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
"""

from mdna_sentiment.exceptions import (
    SentimentPipelineError,
    LexiconLoadError,
    EmptyDocumentError,
    JoinGapError,
)
from mdna_sentiment.models.lexicon import PolarityLexicon, load_lexicon
from mdna_sentiment.models.normalizer import TextNormalizer, normalize_text
from mdna_sentiment.models.scorer import SentimentRecord, LexiconSentimentScorer
from mdna_sentiment.aggregation import CombinedRecord, JoinResult, SeriesAggregator
from mdna_sentiment.pipeline import SentimentPipeline, PipelineResult

__version__ = "1.0.0"
__author__ = "Jose Orlando Bobadilla Fuentes"

__all__ = [
    "SentimentPipelineError",
    "LexiconLoadError",
    "EmptyDocumentError",
    "JoinGapError",
    "PolarityLexicon",
    "load_lexicon",
    "TextNormalizer",
    "normalize_text",
    "SentimentRecord",
    "LexiconSentimentScorer",
    "CombinedRecord",
    "JoinResult",
    "SeriesAggregator",
    "SentimentPipeline",
    "PipelineResult",
]
