"""
================================================================================
TEXT NORMALIZATION
================================================================================
Turns the raw text extracted from one MD&A section into a canonical,
whitespace-delimited string ready for dictionary counting.

Steps, always in this order (each assumes the output of the previous one):
    1. Lowercase every character
    2. Strip digit sequences         "Q3 2024 revenue" -> "q  revenue"
    3. Strip punctuation and symbols "long-term, $"    -> "longterm "
    4. Drop English stopwords        "the growth of"   -> "growth"
    5. Collapse runs of whitespace to one space and trim the ends

Punctuation is deleted rather than replaced by a space, so hyphenated and
possessive forms fuse into one token ("year-over-year" -> "yearoveryear").
Stopwords are matched against whole tokens after punctuation is gone; the
apostrophe forms in the list ("don't", "isn't") therefore never fire, which
keeps real words such as "well" and "shell" intact.

"Digits" means decimal digits (Unicode category Nd, what `\d` matches), in
any script: "2024" and full-width "２０２４" go. Superscripts, fractions,
Roman numerals and circled numbers ("²", "½", "Ⅻ", "①") are not decimal
digits. They count as word characters, so they survive step 3 too and stay
in the output as their own tokens or glued to a word.

The result is a string, not a token list: callers decide how to split it.
The transformation is idempotent, normalize(normalize(x)) == normalize(x).

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

import re
from typing import FrozenSet, Iterable, Optional, Union

from mdna_sentiment.config import NormalizerConfig


_DIGITS = re.compile(r"\d+")
# Anything that is neither a word character nor whitespace, plus underscore
_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """
    Deterministic text cleaner for dictionary-based sentiment scoring.

    Parameters
    ----------
    language : str
        Stopword language. Only 'english' ('en') ships with the package.
    extra_stopwords : iterable of str, optional
        Additional words to drop, e.g. the company name.
    """

    # -------------------------------------------------------------------------
    # Standard English stopword list (174 terms, Snowball "english")
    # -------------------------------------------------------------------------
    ENGLISH_STOPWORDS = frozenset({
        "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you",
        "your", "yours", "yourself", "yourselves", "he", "him", "his",
        "himself", "she", "her", "hers", "herself", "it", "its", "itself",
        "they", "them", "their", "theirs", "themselves", "what", "which",
        "who", "whom", "this", "that", "these", "those", "am", "is", "are",
        "was", "were", "be", "been", "being", "have", "has", "had", "having",
        "do", "does", "did", "doing", "would", "should", "could", "ought",
        "i'm", "you're", "he's", "she's", "it's", "we're", "they're", "i've",
        "you've", "we've", "they've", "i'd", "you'd", "he'd", "she'd", "we'd",
        "they'd", "i'll", "you'll", "he'll", "she'll", "we'll", "they'll",
        "isn't", "aren't", "wasn't", "weren't", "hasn't", "haven't", "hadn't",
        "doesn't", "don't", "didn't", "won't", "wouldn't", "shan't",
        "shouldn't", "can't", "cannot", "couldn't", "mustn't", "let's",
        "that's", "who's", "what's", "here's", "there's", "when's", "where's",
        "why's", "how's", "a", "an", "the", "and", "but", "if", "or",
        "because", "as", "until", "while", "of", "at", "by", "for", "with",
        "about", "against", "between", "into", "through", "during", "before",
        "after", "above", "below", "to", "from", "up", "down", "in", "out",
        "on", "off", "over", "under", "again", "further", "then", "once",
        "here", "there", "when", "where", "why", "how", "all", "any", "both",
        "each", "few", "more", "most", "other", "some", "such", "no", "nor",
        "not", "only", "own", "same", "so", "than", "too", "very",
    })

    _LANGUAGES = {"english": ENGLISH_STOPWORDS, "en": ENGLISH_STOPWORDS}

    def __init__(
        self,
        language: str = "english",
        extra_stopwords: Optional[Iterable[str]] = None,
    ):
        key = language.strip().lower()
        if key not in self._LANGUAGES:
            raise ValueError(
                f"no stopword list for language '{language}'; "
                f"available: {sorted(self._LANGUAGES)}"
            )
        self.language = key
        self.stopwords: FrozenSet[str] = self._LANGUAGES[key] | frozenset(
            w.lower() for w in (extra_stopwords or ())
        )

    @classmethod
    def from_config(cls, config: NormalizerConfig) -> "TextNormalizer":
        return cls(language=config.language, extra_stopwords=config.extra_stopwords)

    # ------------------------------------------------------------------
    # Individual steps
    # ------------------------------------------------------------------

    @staticmethod
    def lowercase(text: str) -> str:
        return text.lower()

    @staticmethod
    def remove_numbers(text: str) -> str:
        return _DIGITS.sub("", text)

    @staticmethod
    def remove_punctuation(text: str) -> str:
        return _PUNCTUATION.sub("", text)

    def remove_stopwords(self, text: str) -> str:
        return " ".join(tok for tok in text.split() if tok not in self.stopwords)

    @staticmethod
    def strip_whitespace(text: str) -> str:
        return _WHITESPACE.sub(" ", text).strip()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, text: Union[str, bytes]) -> str:
        """
        Apply all five cleaning steps to one document.

        Parameters
        ----------
        text : str or bytes
            Raw extracted text; bytes are decoded as UTF-8.

        Returns
        -------
        str -- cleaned text, possibly empty.
        """
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")

        text = self.lowercase(text)
        text = self.remove_numbers(text)
        text = self.remove_punctuation(text)
        text = self.remove_stopwords(text)
        return self.strip_whitespace(text)

    __call__ = normalize

    def __repr__(self) -> str:
        return f"TextNormalizer(language='{self.language}', stopwords={len(self.stopwords)})"


_DEFAULT = TextNormalizer()


def normalize_text(text: Union[str, bytes]) -> str:
    """Normalize with the default English configuration."""
    return _DEFAULT.normalize(text)
