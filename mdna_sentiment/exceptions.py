"""
exceptions.py
-------------
Error taxonomy for the sentiment pipeline. Every failure in the core is a
data-validity failure: nothing here is transient or worth retrying.
"""

from typing import Iterable, Optional, Tuple


class SentimentPipelineError(Exception):
    """Base class for all pipeline errors."""


class LexiconLoadError(SentimentPipelineError, ValueError):
    """The polarity dictionary is empty or lacks a required column."""


class EmptyDocumentError(SentimentPipelineError, ValueError):
    """A document contains zero tokens after normalization."""

    def __init__(self, period: Optional[int] = None, message: Optional[str] = None):
        self.period = period
        if message is None:
            if period is None:
                message = "document has no tokens after normalization"
            else:
                message = f"document for period {period} has no tokens after normalization"
        super().__init__(message)


class JoinGapError(SentimentPipelineError, KeyError):
    """Sentiment and metric series do not cover the same periods."""

    def __init__(self, sentiment_only: Iterable[int] = (), metric_only: Iterable[int] = ()):
        self.sentiment_only: Tuple[int, ...] = tuple(sorted(sentiment_only))
        self.metric_only: Tuple[int, ...] = tuple(sorted(metric_only))
        super().__init__(self.message)

    @property
    def message(self) -> str:
        parts = []
        if self.sentiment_only:
            parts.append(f"sentiment only: {list(self.sentiment_only)}")
        if self.metric_only:
            parts.append(f"metrics only: {list(self.metric_only)}")
        return "period mismatch between series (" + "; ".join(parts) + ")"

    # KeyError.__str__ would repr() the message
    def __str__(self) -> str:
        return self.message
