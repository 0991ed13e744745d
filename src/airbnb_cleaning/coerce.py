import logging

import pandas as pd

logger = logging.getLogger(__name__)

TRUE_FLAGS = {"t", "true", "yes", "y", "1"}
FALSE_FLAGS = {"f", "false", "no", "n", "0"}


def parse_currency(series: pd.Series) -> pd.Series:
    # "$1,200.00" -> 1200.0; anything unparseable becomes NaN
    cleaned = series.astype(str).str.replace(r"[$,\s]", "", regex=True)
    return pd.to_numeric(cleaned, errors="coerce").astype(float)


def parse_percent(series: pd.Series) -> pd.Series:
    # "95%" -> 0.95
    cleaned = series.astype(str).str.replace(r"[%\s]", "", regex=True)
    return pd.to_numeric(cleaned, errors="coerce").astype(float) / 100.0


def parse_flag(series: pd.Series) -> pd.Series:
    def _flag(value):
        text = str(value).strip().lower()
        if text in TRUE_FLAGS:
            return True
        if text in FALSE_FLAGS:
            return False
        return pd.NA

    return series.map(_flag).astype("boolean")


def _present(df, columns, kind):
    columns = list(columns or [])
    missing = [c for c in columns if c not in df.columns]
    if missing:
        logger.warning(f"Skipping {kind} conversion for missing columns: {missing}")
    return [c for c in columns if c in df.columns]


def fix_types(df: pd.DataFrame, currency=None, percent=None, flags=None,
              dates=None, categories=None) -> pd.DataFrame:
    """Convert the listed columns to their intended kinds.

    Conversion never raises on bad values: unparseable numbers and dates
    become missing, unknown flag spellings become ``<NA>``.
    """
    out = df.copy()

    for col in _present(out, currency, "currency"):
        out[col] = parse_currency(out[col])
    for col in _present(out, percent, "percent"):
        out[col] = parse_percent(out[col])
    for col in _present(out, flags, "flag"):
        out[col] = parse_flag(out[col])
    for col in _present(out, dates, "date"):
        out[col] = pd.to_datetime(out[col], errors="coerce")
    for col in _present(out, categories, "category"):
        out[col] = out[col].astype("category")

    return out
