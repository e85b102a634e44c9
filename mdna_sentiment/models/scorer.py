"""
================================================================================
DICTIONARY SENTIMENT SCORER
================================================================================
Counts lexicon hits in a normalized document and converts them into a
length-scaled net tone score:

    S(d) = (N_pos - N_neg) / N_total

where N_pos and N_neg count every token occurrence found in the positive
and negative word sets, and N_total is the number of whitespace-separated
tokens. Repeated words count on each occurrence.

Unlike the (N_pos - N_neg) / (N_pos + N_neg + 1) headline score, the
denominator here is document length, so two filings with identical hit
counts but different lengths get different scores. S(d) always lies in
[-1, 1]. A document with no tokens has no defined score and raises
EmptyDocumentError instead of returning 0 or NaN.

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Optional

from mdna_sentiment.exceptions import EmptyDocumentError
from mdna_sentiment.models.lexicon import PolarityLexicon


@dataclass(frozen=True)
class SentimentRecord:
    """Tone measurement for one period's document."""
    positive_count: int
    negative_count: int
    total_tokens:   int
    score:          float
    period:         Optional[int] = None

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class LexiconSentimentScorer:
    """
    Bag-of-words tone scorer over a fixed polarity lexicon.

    Parameters
    ----------
    lexicon : PolarityLexicon
        Positive and negative word sets (lower-case).
    """

    def __init__(self, lexicon: PolarityLexicon):
        self.lexicon = lexicon

    def score(self, normalized_text: str, period: Optional[int] = None) -> SentimentRecord:
        """
        Score a single normalized document.

        Parameters
        ----------
        normalized_text : str
            Output of TextNormalizer.normalize.
        period : int, optional
            Period key carried onto the record and into error messages.

        Returns
        -------
        SentimentRecord

        Raises
        ------
        EmptyDocumentError
            If the text splits into zero tokens.
        """
        tokens = normalized_text.split()
        total = len(tokens)
        if total == 0:
            raise EmptyDocumentError(period)

        positive = self.lexicon.positive
        negative = self.lexicon.negative
        n_pos = sum(1 for tok in tokens if tok in positive)
        n_neg = sum(1 for tok in tokens if tok in negative)

        return SentimentRecord(
            positive_count=n_pos,
            negative_count=n_neg,
            total_tokens=total,
            score=(n_pos - n_neg) / total,
            period=period,
        )

    def score_batch(self, texts: Mapping[int, str]) -> Dict[int, SentimentRecord]:
        """Score several period documents; the first empty one raises."""
        return {period: self.score(text, period=period) for period, text in texts.items()}

    def __repr__(self) -> str:
        return f"LexiconSentimentScorer({self.lexicon!r})"
