"""Run every cleaning step over one listings table.

``clean_listings`` is driven by the same mapping that ``config.yaml``
holds (a ``DictConfig`` or a plain dict both work). Each step reads its
own section:

    types     -> coerce.fix_types
    impute    -> impute.impute_missing
    explode   -> explode.explode_column, once per entry
    drop      -> reduce.drop_columns / reduce.high_cardinality_columns
    collapse  -> reduce.collapse_rare_levels
    outliers  -> outliers.outlier_mask
"""
import logging
from collections import namedtuple

import pandas as pd

from airbnb_cleaning.coerce import fix_types
from airbnb_cleaning.explode import explode_column, get_rules
from airbnb_cleaning.impute import impute_missing
from airbnb_cleaning.outliers import outlier_mask
from airbnb_cleaning.reduce import collapse_rare_levels, drop_columns, high_cardinality_columns

logger = logging.getLogger(__name__)

STEPS = [
    "fix_types",
    "impute",
    "explode",
    "drop_columns",
    "collapse_levels",
    "outliers",
]

CleaningResult = namedtuple("CleaningResult", ["full", "trimmed", "stats"])


def _section(config, name):
    section = config.get(name) if config is not None else None
    return section if section is not None else {}


def resolve_steps(steps):
    """Turn ``"all"``, a comma separated string or a list into ordered step names."""
    if steps is None or steps == "all":
        return list(STEPS)
    if isinstance(steps, str):
        steps = steps.split(",")
    requested = [s.strip() for s in steps if s.strip()]
    unknown = [s for s in requested if s not in STEPS]
    if unknown:
        raise ValueError(f"Unknown cleaning steps {unknown}; expected some of {STEPS}")
    return [s for s in STEPS if s in requested]


def clean_listings(df: pd.DataFrame, config, steps=None) -> CleaningResult:
    active_steps = resolve_steps(steps)
    stats = {"rows_raw": len(df), "columns_raw": df.shape[1]}
    logger.info(f"Cleaning {len(df)} listings with steps: {active_steps}")

    if "fix_types" in active_steps:
        types = _section(config, "types")
        df = fix_types(
            df,
            currency=types.get("currency"),
            percent=types.get("percent"),
            flags=types.get("flags"),
            dates=types.get("dates"),
            categories=types.get("categories"),
        )

    if "impute" in active_steps:
        imp = _section(config, "impute")
        df = impute_missing(df, median=imp.get("median"), mode=imp.get("mode"), skip=imp.get("skip"))

    if "explode" in active_steps:
        for entry in _section(config, "explode") or []:
            df, vocabulary = explode_column(
                df,
                entry["column"],
                get_rules(entry["rules"]),
                entry["prefix"],
            )
            stats[f"vocabulary_{entry['column']}"] = len(vocabulary)

    if "drop_columns" in active_steps:
        drop = _section(config, "drop")
        df = drop_columns(df, drop.get("columns"))
        max_levels = drop.get("max_levels")
        if max_levels is not None:
            wide = high_cardinality_columns(df, max_levels, exclude=drop.get("keep") or ())
            df = drop_columns(df, wide)

    if "collapse_levels" in active_steps:
        collapse = _section(config, "collapse")
        for col in collapse.get("columns") or []:
            if col not in df.columns:
                logger.warning(f"Cannot collapse levels of missing column '{col}'")
                continue
            df = collapse_rare_levels(df, col, collapse.get("min_count", 1), other=collapse.get("other", "Other"))

    full = df
    if "outliers" in active_steps:
        mask = outlier_mask(full, _section(config, "outliers"))
        trimmed = full[~mask]
    else:
        trimmed = full.copy()

    stats.update({
        "rows_full": len(full),
        "rows_trimmed": len(trimmed),
        "outliers_removed": len(full) - len(trimmed),
        "columns_clean": full.shape[1],
    })
    logger.info(f"Cleaning done: {stats}")
    return CleaningResult(full=full, trimmed=trimmed, stats=stats)
