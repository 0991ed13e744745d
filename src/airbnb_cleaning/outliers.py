import logging

import pandas as pd

logger = logging.getLogger(__name__)


def outlier_mask(df: pd.DataFrame, thresholds) -> pd.Series:
    """True for rows where any designated column falls outside its bounds.

    ``thresholds`` maps a column name to ``{"min": ..., "max": ...}``; either
    bound may be omitted. Missing values are never flagged.
    """
    mask = pd.Series(False, index=df.index)
    for col, bounds in (thresholds or {}).items():
        if col not in df.columns:
            logger.warning(f"Outlier threshold given for missing column '{col}', skipping")
            continue

        values = pd.to_numeric(df[col], errors="coerce")
        lo = bounds.get("min")
        hi = bounds.get("max")
        if lo is not None:
            mask |= values.lt(lo).fillna(False).astype(bool)
        if hi is not None:
            mask |= values.gt(hi).fillna(False).astype(bool)
    return mask


def remove_outliers(df: pd.DataFrame, thresholds) -> pd.DataFrame:
    mask = outlier_mask(df, thresholds)
    logger.info(f"Removing {int(mask.sum())} outlier rows out of {len(df)}")
    return df[~mask]
