"""
================================================================================
LOUGHRAN-MCDONALD POLARITY LEXICON
================================================================================
Builds the positive and negative word sets used for bag-of-words tone
scoring from a polarity-annotated dictionary table.

The Loughran & McDonald (2011) Master Dictionary is distributed as a CSV
with one row per word and one column per tone category. A non-zero value
in a category column (the year the word was added) marks membership:

    Word        ... Negative  Positive  Uncertainty ...
    ABANDON     ...     2009         0            0 ...
    ACHIEVE     ...        0      2009            0 ...

Only the Positive and Negative columns are used here; every other column
is ignored. Membership is all that matters downstream, so the weights are
reduced to presence (weight > 0) and the words are lower-cased:

    positive = { w.lower() : Positive(w) > 0 }
    negative = { w.lower() : Negative(w) > 0 }

Words with zero weight in both columns are neutral and belong to neither set.

Reference:
    Loughran, T. & McDonald, B. (2011). When Is a Liability Not a Liability?
    Textual Analysis, Dictionaries, and 10-Ks. Journal of Finance, 66(1).

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

import pandas as pd

from mdna_sentiment.config import LexiconConfig
from mdna_sentiment.exceptions import LexiconLoadError
from mdna_sentiment.utils import get_logger

log = get_logger(__name__)

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"

LexiconTable = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]


@dataclass(frozen=True)
class PolarityLexicon:
    """
    Immutable positive / negative word sets.

    Lookups are case-insensitive; the stored words are already lower-case.
    """
    positive: FrozenSet[str]
    negative: FrozenSet[str]

    def polarity(self, word: str) -> str:
        """Classify a single word as 'positive', 'negative' or 'neutral'."""
        w = word.lower()
        if w in self.positive:
            return POSITIVE
        if w in self.negative:
            return NEGATIVE
        return NEUTRAL

    def is_positive(self, word: str) -> bool:
        return word.lower() in self.positive

    def is_negative(self, word: str) -> bool:
        return word.lower() in self.negative

    @classmethod
    def from_words(cls, positive: Iterable[str], negative: Iterable[str]) -> "PolarityLexicon":
        """Build a lexicon directly from two word lists."""
        return cls(
            positive=frozenset(w.lower() for w in positive),
            negative=frozenset(w.lower() for w in negative),
        )

    def __repr__(self) -> str:
        return (
            f"PolarityLexicon(positive={len(self.positive)}, "
            f"negative={len(self.negative)})"
        )


def _resolve_column(columns: Iterable[str], wanted: str) -> str:
    """Find `wanted` among `columns`, ignoring case and surrounding blanks."""
    lookup = {str(c).strip().lower(): c for c in columns}
    key = wanted.strip().lower()
    if key not in lookup:
        raise LexiconLoadError(f"polarity dictionary is missing required column '{wanted}'")
    return lookup[key]


def _weights(frame: pd.DataFrame, column: str) -> pd.Series:
    """Numeric weights for one category column; blanks count as zero."""
    raw = frame[column]
    values = pd.to_numeric(raw, errors="coerce")
    blank = raw.isna() | (raw.astype(str).str.strip() == "")
    bad = values.isna() & ~blank
    if bad.any():
        sample = raw[bad].astype(str).head(3).tolist()
        raise LexiconLoadError(
            f"column '{column}' holds non-numeric weights, e.g. {sample}"
        )
    return values.fillna(0.0)


def load_lexicon(
    table: LexiconTable,
    config: Optional[LexiconConfig] = None,
) -> PolarityLexicon:
    """
    Build positive and negative word sets from a polarity dictionary.

    A word with a positive weight in both polarity columns goes into both
    sets, so every occurrence counts once as positive and once as negative
    and nets to zero in the score. The overlap is logged as a warning.

    Parameters
    ----------
    table : pd.DataFrame or iterable of mappings
        Rows of (word, positive weight, negative weight, ...). Extra
        columns are ignored.
    config : LexiconConfig, optional
        Column names to read. Defaults to the Loughran-McDonald layout
        ("Word", "Positive", "Negative"), matched case-insensitively.

    Returns
    -------
    PolarityLexicon

    Raises
    ------
    LexiconLoadError
        If the table is empty, lacks a required column, or holds
        non-numeric weights.
    """
    cfg = config or LexiconConfig()

    if isinstance(table, pd.DataFrame):
        frame = table
    else:
        try:
            frame = pd.DataFrame(list(table))
        except (TypeError, ValueError) as exc:
            raise LexiconLoadError(f"polarity dictionary is not tabular: {exc}") from exc

    if frame.empty:
        raise LexiconLoadError("polarity dictionary is empty")

    word_col = _resolve_column(frame.columns, cfg.word_column)
    pos_col = _resolve_column(frame.columns, cfg.positive_column)
    neg_col = _resolve_column(frame.columns, cfg.negative_column)

    words = frame[word_col].where(frame[word_col].notna(), "").astype(str).str.strip().str.lower()
    has_word = words != ""
    pos_weight = _weights(frame, pos_col)
    neg_weight = _weights(frame, neg_col)

    positive = frozenset(words[has_word & (pos_weight > 0)])
    negative = frozenset(words[has_word & (neg_weight > 0)])

    overlap = positive & negative
    if overlap:
        log.warning("%d words are tagged both positive and negative, e.g. %s",
                    len(overlap), sorted(overlap)[:5])

    lexicon = PolarityLexicon(positive=positive, negative=negative)
    log.info("Loaded lexicon: %d positive, %d negative words from %d rows",
             len(positive), len(negative), len(frame))
    return lexicon
