import logging

import pandas as pd

logger = logging.getLogger(__name__)


def drop_columns(df: pd.DataFrame, columns) -> pd.DataFrame:
    # Only drop what is actually there
    present = [col for col in (columns or []) if col in df.columns]
    if present:
        logger.info(f"Dropping {len(present)} columns: {present}")
    return df.drop(columns=present)


def high_cardinality_columns(df: pd.DataFrame, max_levels: int, exclude=()) -> list:
    """Text and category columns with more than ``max_levels`` distinct values."""
    exclude = set(exclude)
    wide = []
    for col in df.columns:
        dtype = df[col].dtype
        is_text = (pd.api.types.is_object_dtype(dtype)
                   or pd.api.types.is_string_dtype(dtype)
                   or isinstance(dtype, pd.CategoricalDtype))
        if is_text and col not in exclude and df[col].nunique(dropna=True) > max_levels:
            wide.append(col)
    return wide


def collapse_rare_levels(df: pd.DataFrame, column: str, min_count: int, other: str = "Other") -> pd.DataFrame:
    """Replace levels of ``column`` seen fewer than ``min_count`` times with ``other``."""
    out = df.copy()
    values = out[column]
    counts = values.value_counts(dropna=True)
    rare = [level for level, n in counts.items() if n < min_count]
    if not rare:
        return out

    is_category = isinstance(values.dtype, pd.CategoricalDtype)
    collapsed = values.astype(object).where(~values.isin(rare), other)
    collapsed = collapsed.where(values.notna(), None)
    if is_category:
        collapsed = collapsed.astype("category")
    out[column] = collapsed

    logger.info(f"Collapsed {len(rare)} rare levels of '{column}' into '{other}'")
    return out
