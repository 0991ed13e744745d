import logging
import os

import pandas as pd

logger = logging.getLogger(__name__)


def read_listings(path) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Listings CSV not found: {path}")
    df = pd.read_csv(path, low_memory=False)
    logger.info(f"Read {len(df)} rows x {df.shape[1]} columns from {path}")
    return df


def write_snapshot(df: pd.DataFrame, path) -> str:
    """Pickle ``df`` to ``path`` so column names, dtypes and values round-trip."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    df.to_pickle(path)
    logger.info(f"Wrote snapshot ({len(df)} rows x {df.shape[1]} columns) to {path}")
    return path


def read_snapshot(path) -> pd.DataFrame:
    return pd.read_pickle(path)
