"""Explode multi-valued text columns into boolean indicator columns.

A multi-valued column holds one delimited string per row, e.g. the
``amenities`` column::

    {TV,"Wireless Internet",Kitchen}

``explode_column`` normalizes that text, collects every distinct token in
the column and appends one boolean column per token.
"""
import logging
from collections import namedtuple

import pandas as pd

logger = logging.getLogger(__name__)

Rule = namedtuple("Rule", ["pattern", "repl"])

STRIP_PUNCTUATION = Rule(r"""[{}"()'\[\]]""", "")
TRIM_DELIMITER = Rule(r"\s*,\s*", ",")
JOIN_WORDS = Rule(r"[\s/]+", "_")

AMENITY_RULES = (
    STRIP_PUNCTUATION,
    TRIM_DELIMITER,
    JOIN_WORDS,
    # "24-hour check-in" must not read as a number downstream
    Rule(r"\b24\b", "x24"),
    Rule(r"translation_missing:_?en\.hosting_amenity_\d+", "other"),
)

VERIFICATION_RULES = (
    STRIP_PUNCTUATION,
    TRIM_DELIMITER,
    JOIN_WORDS,
)

RULE_SETS = {
    "amenities": AMENITY_RULES,
    "verifications": VERIFICATION_RULES,
}


def get_rules(name):
    try:
        return RULE_SETS[name]
    except KeyError:
        raise KeyError(f"Unknown normalization rule set '{name}'. "
                       f"Expected one of: {sorted(RULE_SETS)}") from None


def normalize_text(values: pd.Series, rules) -> pd.Series:
    """Apply ``rules`` in order; missing values come back as empty strings."""
    out = values.astype(object).where(values.notna(), "").astype(str)
    for rule in rules:
        out = out.str.replace(rule.pattern, rule.repl, regex=True)
    return out


def extract_vocabulary(normalized: pd.Series, delimiter: str = ",", keep_empty: bool = False) -> list:
    """Distinct tokens across all rows, in first-seen order."""
    vocabulary = {}
    for value in normalized:
        for token in value.split(delimiter):
            if token or keep_empty:
                vocabulary.setdefault(token, None)
    return list(vocabulary)


def materialize_indicators(df: pd.DataFrame, normalized: pd.Series, vocabulary, prefix: str) -> pd.DataFrame:
    """Append ``prefix + token`` boolean columns to ``df``.

    A row is flagged when the token occurs anywhere in its normalized
    string, so ``HDTV`` also sets the ``TV`` indicator.
    """
    indicators = {}
    for token in vocabulary:
        indicators[prefix + token] = normalized.str.contains(token, regex=False).astype(bool)

    if not indicators:
        return df.copy()

    new_cols = pd.DataFrame(indicators, index=df.index)
    kept = df.drop(columns=new_cols.columns.intersection(df.columns))
    return pd.concat([kept, new_cols], axis=1)


def explode_column(df: pd.DataFrame, column: str, rules, prefix: str, delimiter: str = ","):
    """Normalize ``column`` and add one indicator column per distinct token.

    Returns the widened frame and the vocabulary that was used. The source
    column is kept; callers drop it when they no longer need it.
    """
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found; cannot explode it")

    normalized = normalize_text(df[column], rules)
    vocabulary = extract_vocabulary(normalized, delimiter=delimiter)
    out = materialize_indicators(df, normalized, vocabulary, prefix)

    logger.info(f"Exploded '{column}' into {len(vocabulary)} '{prefix}*' indicator columns")
    return out, vocabulary
