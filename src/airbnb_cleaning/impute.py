import logging

import numpy as np
import pandas as pd
from sklearn.impute import SimpleImputer

logger = logging.getLogger(__name__)


def _mode_fill(series: pd.Series) -> pd.Series:
    mode = series.mode(dropna=True)
    if mode.empty:
        return series
    return series.fillna(mode.iloc[0])


def impute_missing(df: pd.DataFrame, median=None, mode=None, skip=()) -> pd.DataFrame:
    """Fill missing values: median for numeric columns, most frequent value otherwise.

    When neither ``median`` nor ``mode`` is given, numeric columns are median
    imputed and every other column is mode imputed. Columns in ``skip`` are
    left alone either way.
    """
    out = df.copy()
    skip = set(skip or ())

    if median is None and mode is None:
        numeric = out.select_dtypes(include=[np.number]).columns
        median = [c for c in numeric if c not in skip]
        mode = [c for c in out.columns if c not in skip and c not in set(numeric)]
    else:
        median = [c for c in (median or []) if c in out.columns and c not in skip]
        mode = [c for c in (mode or []) if c in out.columns and c not in skip]

    n_missing = int(out[median + mode].isna().sum().sum())

    if median and len(out):
        imputer = SimpleImputer(strategy="median", keep_empty_features=True)
        filled = imputer.fit_transform(out[median].astype(float))
        for i, col in enumerate(median):
            out[col] = filled[:, i]

    for col in mode:
        out[col] = _mode_fill(out[col])

    logger.info(f"Imputed {n_missing} missing values "
                f"({len(median)} median columns, {len(mode)} mode columns)")
    return out
