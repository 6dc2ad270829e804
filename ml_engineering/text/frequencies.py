#!/usr/bin/env python3
"""
Vocabulary Frequency Counting

Counts, per word, how many records contain it at least once. A word repeated
inside one description still counts once for that record.

Usage:
    from ml_engineering.text.frequencies import build_word_frequencies

    frequencies, total_acceptance, total_rejection = build_word_frequencies(
        tokens, labels
    )
"""

from collections import Counter
from typing import Iterable, Optional, Tuple

import pandas as pd

from .errors import InvalidLabelError

VALID_LABELS = (0, 1)


def count_word_presence(token_lists: Iterable, candidate_words: Optional[Iterable[str]] = None) -> pd.Series:
    """
    Count the number of records each word appears in

    Args:
        token_lists: Iterable of token sequences (one per record)
        candidate_words: Optional vocabulary restriction

    Returns:
        Integer Series indexed by word, sorted by word
    """
    candidates = None
    if candidate_words is not None:
        candidates = {word.lower() for word in candidate_words}

    counts = Counter()
    for tokens in token_lists:
        present = set(tokens)
        if candidates is not None:
            present &= candidates
        counts.update(present)

    series = pd.Series(dict(counts), dtype='int64')
    series.index.name = 'word'
    return series.sort_index()


def merge_frequencies(accept_counts: pd.Series, reject_counts: pd.Series) -> pd.DataFrame:
    """
    Outer-join approved and rejected counts on word

    Words missing from one side get 0, never NaN.

    Returns:
        DataFrame indexed by word with accept_freq, reject_freq, total_freq
    """
    merged = pd.concat(
        [accept_counts.rename('accept_freq'), reject_counts.rename('reject_freq')],
        axis=1,
        join='outer'
    )
    merged = merged.fillna(0).astype('int64')
    merged['total_freq'] = merged['accept_freq'] + merged['reject_freq']
    merged.index.name = 'word'
    return merged.sort_index()


def validate_labels(labels: pd.Series) -> pd.Series:
    """Raise InvalidLabelError if any label is outside {0, 1}"""
    invalid = labels[~labels.isin(VALID_LABELS)]
    if len(invalid) > 0:
        raise InvalidLabelError(invalid.tolist())
    return labels.astype('int64')


def build_word_frequencies(
    token_lists,
    labels,
    candidate_words: Optional[Iterable[str]] = None
) -> Tuple[pd.DataFrame, int, int]:
    """
    Partition records by label and count word presence on each side

    Args:
        token_lists: Normalized tokens per record
        labels: 0 (approved) / 1 (rejected) per record, same length
        candidate_words: Optional vocabulary restriction

    Returns:
        Tuple of (frequencies_df, total_acceptance, total_rejection) where the
        totals count records, not words
    """
    token_lists = pd.Series(list(token_lists), dtype=object)
    labels = validate_labels(pd.Series(list(labels)))

    if len(token_lists) != len(labels):
        raise ValueError(
            f'Got {len(token_lists)} token lists but {len(labels)} labels'
        )

    accepted = token_lists[labels.values == 0]
    rejected = token_lists[labels.values == 1]

    frequencies = merge_frequencies(
        count_word_presence(accepted, candidate_words),
        count_word_presence(rejected, candidate_words)
    )

    return frequencies, len(accepted), len(rejected)
