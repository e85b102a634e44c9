"""
Sentiment Models
================
Lexicon loading, text normalization, and dictionary-based tone scoring.
"""

from mdna_sentiment.models.lexicon import PolarityLexicon, load_lexicon
from mdna_sentiment.models.normalizer import TextNormalizer, normalize_text
from mdna_sentiment.models.scorer import SentimentRecord, LexiconSentimentScorer

__all__ = [
    "PolarityLexicon",
    "load_lexicon",
    "TextNormalizer",
    "normalize_text",
    "SentimentRecord",
    "LexiconSentimentScorer",
]
