"""
================================================================================
EXTERNAL DATA ADAPTERS
================================================================================
Thin adapters that turn files and market data into the in-memory values the
sentiment core consumes:
    1. Period texts   -- pre-extracted MD&A text, one UTF-8 file per year
    2. Lexicon CSV    -- Loughran-McDonald Master Dictionary
    3. Metrics        -- yearly financial figures from CSV or DataFrame
    4. Market data    -- calendar-year stock returns via yfinance

All paths are explicit arguments; nothing depends on the working directory.
PDF extraction stays outside the package: convert each filing to text first.

Author: Jose Orlando Bobadilla Fuentes, CQF | MSc AI
================================================================================
"""

import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

import numpy as np
import pandas as pd
import yfinance as yf

from mdna_sentiment.config import LexiconConfig
from mdna_sentiment.exceptions import LexiconLoadError
from mdna_sentiment.models.lexicon import PolarityLexicon, load_lexicon
from mdna_sentiment.utils import get_logger, to_period_key

log = get_logger(__name__)

PathLike = Union[str, Path]

DEFAULT_TEXT_PATTERN = "{ticker}_{period}_10K.txt"


def load_period_texts(
    directory: PathLike,
    ticker: str,
    periods: Optional[Iterable[int]] = None,
    pattern: str = DEFAULT_TEXT_PATTERN,
    encoding: str = "utf-8",
) -> Dict[int, str]:
    """
    Read one pre-extracted text file per period.

    Parameters
    ----------
    directory : str or Path
        Folder holding the text files.
    ticker : str
        Substituted for {ticker} in `pattern`.
    periods : iterable of int, optional
        Periods to load. When omitted, every file matching the pattern
        (with a four-digit year in place of {period}) is loaded.
    pattern : str
        File name template with {ticker} and {period} placeholders.

    Returns
    -------
    dict {period: raw text}

    Raises
    ------
    FileNotFoundError
        If a requested period has no file, or the directory does not exist.
    """
    folder = Path(directory)
    if not folder.is_dir():
        raise FileNotFoundError(f"text directory not found: {folder}")

    if periods is None:
        regex = re.compile(
            "^" + re.escape(pattern)
            .replace(re.escape("{ticker}"), re.escape(ticker))
            .replace(re.escape("{period}"), r"(\d{4})") + "$"
        )
        found = {}
        for path in folder.iterdir():
            m = regex.match(path.name)
            if m and path.is_file():
                found[int(m.group(1))] = path
    else:
        found = {
            to_period_key(p): folder / pattern.format(ticker=ticker, period=to_period_key(p))
            for p in periods
        }

    texts = {}
    for period in sorted(found):
        path = found[period]
        if not path.is_file():
            raise FileNotFoundError(f"no text for period {period}: {path}")
        texts[period] = path.read_text(encoding=encoding)
        log.debug("Read %s (%d chars)", path.name, len(texts[period]))

    log.info("Loaded %d period texts for %s", len(texts), ticker)
    return texts


def read_lexicon_csv(path: PathLike, config: Optional[LexiconConfig] = None) -> PolarityLexicon:
    """Read the Loughran-McDonald Master Dictionary CSV into a lexicon."""
    try:
        # "NA", "NULL" and similar are real dictionary words, not missing values
        table = pd.read_csv(path, keep_default_na=False)
    except pd.errors.EmptyDataError as exc:
        raise LexiconLoadError(f"polarity dictionary file is empty: {path}") from exc
    return load_lexicon(table, config)


def load_financial_metrics(
    source: Union[PathLike, pd.DataFrame, Dict],
    period_column: str = "Year",
) -> pd.DataFrame:
    """
    Load yearly financial metrics into a DataFrame with a period column.

    Accepts a CSV path, a DataFrame, or a column-oriented dict such as
    {"Year": [...], "Revenue": [...], ...}.
    """
    if isinstance(source, pd.DataFrame):
        frame = source.copy()
    elif isinstance(source, dict):
        frame = pd.DataFrame(source)
    else:
        frame = pd.read_csv(source)

    if period_column not in frame.columns:
        raise KeyError(f"metrics table has no '{period_column}' column")
    frame[period_column] = [to_period_key(v) for v in frame[period_column]]
    return frame.sort_values(period_column).reset_index(drop=True)


def annual_return_from_prices(
    close: pd.Series,
    periods: Iterable[int],
) -> Dict[int, float]:
    """
    Calendar-year return in percent from daily closing prices.

    For each year: round((last close - first close) / first close * 100, 2).
    Years without any price are left out.
    """
    close = close.dropna().sort_index()
    index = pd.DatetimeIndex(close.index)
    returns = {}
    for period in periods:
        year = to_period_key(period)
        yearly = close[index.year == year]
        if yearly.empty:
            log.warning("No prices for %d; stock return unavailable", year)
            continue
        start_price = float(yearly.iloc[0])
        end_price = float(yearly.iloc[-1])
        returns[year] = round((end_price - start_price) / start_price * 100, 2)
    return returns


class MarketDataLoader:
    """
    Download daily closing prices from Yahoo Finance.

    Parameters
    ----------
    auto_adjust : bool
        Use split/dividend-adjusted closes. Defaults to raw closes.
    """

    def __init__(self, auto_adjust: bool = False):
        self.auto_adjust = auto_adjust

    def fetch_close(self, ticker: str, start: str, end: str) -> pd.Series:
        """Daily close series for one ticker; `end` is exclusive."""
        data = yf.download(
            ticker,
            start=start,
            end=end,
            auto_adjust=self.auto_adjust,
            progress=False,
        )
        if data is None or data.empty:
            log.warning("No market data returned for %s", ticker)
            return pd.Series(dtype=float, name=ticker)
        close = data["Close"]
        if isinstance(close, pd.DataFrame):
            close = close.iloc[:, 0]
        return close.rename(ticker).dropna()

    def annual_returns(self, ticker: str, periods: Iterable[int]) -> Dict[int, float]:
        """
        Calendar-year stock return (%) for each requested year.

        Returns for the current year reflect prices up to the download date.
        """
        years = sorted({to_period_key(p) for p in periods})
        if not years:
            return {}
        close = self.fetch_close(ticker, f"{years[0]}-01-01", f"{years[-1] + 1}-01-01")
        if close.empty:
            return {}
        return annual_return_from_prices(close, years)

    def add_stock_returns(
        self,
        metrics: pd.DataFrame,
        ticker: str,
        period_column: str = "Year",
        column: str = "Stock_Return",
    ) -> pd.DataFrame:
        """Append a stock return column (NaN where no prices exist)."""
        out = metrics.copy()
        returns = self.annual_returns(ticker, out[period_column].tolist())
        out[column] = [returns.get(to_period_key(p), np.nan) for p in out[period_column]]
        return out
