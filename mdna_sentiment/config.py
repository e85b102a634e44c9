"""
config.py
---------
Centralised configuration for the MD&A sentiment pipeline.
Parameters are read from environment variables with sensible defaults,
so the same code runs against any company's filings and dictionary layout.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == "true"


@dataclass
class LexiconConfig:
    """Column layout of the polarity dictionary (Loughran-McDonald by default)."""
    word_column:     str = os.getenv("LM_WORD_COLUMN",     "Word")
    positive_column: str = os.getenv("LM_POSITIVE_COLUMN", "Positive")
    negative_column: str = os.getenv("LM_NEGATIVE_COLUMN", "Negative")


@dataclass
class NormalizerConfig:
    """Text cleaning parameters."""
    language:        str             = "english"
    extra_stopwords: Tuple[str, ...] = ()


@dataclass
class AggregationConfig:
    """Period ordering and metric join parameters."""
    period_column: str  = "Year"
    allow_partial: bool = _env_flag("ALLOW_PARTIAL_JOIN", "false")


@dataclass
class PipelineConfig:
    """Master configuration aggregating all sub-configs."""
    lexicon:     LexiconConfig     = field(default_factory=LexiconConfig)
    normalizer:  NormalizerConfig  = field(default_factory=NormalizerConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)

    ticker:               str  = os.getenv("TICKER", "AMZN")
    skip_empty_documents: bool = _env_flag("SKIP_EMPTY_DOCUMENTS", "true")
    show_progress:        bool = _env_flag("SHOW_PROGRESS", "false")

    # Paths
    output_dir: str = os.getenv("OUTPUT_DIR", "outputs")
    log_level:  str = os.getenv("LOG_LEVEL", "INFO")
    log_dir:    Optional[str] = os.getenv("LOG_DIR") or None


# Default instance used by the entry point
CONFIG = PipelineConfig()
