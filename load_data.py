# load_data.py
#
# Reads the life expectancy / income / population CSV. Every column stays a
# string: callers parse numbers with pd.to_numeric where they use them.

import logging

import pandas as pd

from scrolly_config import REQUIRED_COLS

logger = logging.getLogger(__name__)

# checked for at least one parseable value; still handed out as strings
NUMERIC_COLS = ['year', 'income_per_person', 'life_expectancy', 'population']


class LoadFailure(RuntimeError):
    """The source CSV could not be fetched or does not look like the dataset."""


def load(source) -> pd.DataFrame:
    """
    Fetch and parse the dataset.

    `source` is anything pd.read_csv accepts: an http(s) URL, a local path or
    an open text buffer. Columns are read as strings (dtype=str) and the
    row order of the file is kept.

    Raises LoadFailure on network errors, unreadable/empty CSV, rows wider
    than the header, a missing required column, a numeric column with no
    parseable value, or a file with no rows. Nothing is retried.
    """
    try:
        df = pd.read_csv(source, dtype=str)
    except OSError as exc:  # URLError and HTTPError included
        raise LoadFailure(f"could not read {source!r}: {exc}") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise LoadFailure(f"malformed CSV at {source!r}: {exc}") from exc

    # rows one field longer than the header make pandas use the first field
    # as the index and shift every column left
    if not isinstance(df.index, pd.RangeIndex):
        raise LoadFailure(f"malformed CSV at {source!r}: rows have more fields than the header")

    df.columns = df.columns.str.strip()
    missing = [c for c in REQUIRED_COLS if c not in df.columns]
    if missing:
        raise LoadFailure(f"missing columns {missing} in {source!r}")
    if df.empty:
        raise LoadFailure(f"no rows in {source!r}")

    unparsed = [c for c in NUMERIC_COLS if pd.to_numeric(df[c], errors='coerce').isna().all()]
    if unparsed:
        raise LoadFailure(f"no numeric values in columns {unparsed} in {source!r}")

    logger.debug("loaded %d rows, %d countries", len(df), df['country'].nunique())
    return df


def year_extent(df: pd.DataFrame) -> tuple[int, int]:
    """(min year, max year) over the rows with a parseable year."""
    years = pd.to_numeric(df['year'], errors='coerce').dropna()
    if years.empty:
        raise LoadFailure("no parseable year in dataset")
    return int(years.min()), int(years.max())
