#!/usr/bin/env python3
"""
Word Rejection Significance

For each vocabulary word, compares the rejection rate of applications that
mention it against the corpus-wide baseline:

- reject_ratio:    share of records containing the word that were rejected
- rejection_index: reject_ratio / baseline - 1 (0 = no different from baseline)
- p_value:         two-sided Fisher's exact test on
                   [[reject_freq, accept_freq], [total_rejection, total_acceptance]]

Word counts are often small, so the exact hypergeometric test is used rather
than a chi-squared approximation.

Usage:
    from ml_engineering.text.significance import compute_word_statistics

    word_stats = compute_word_statistics(
        frequencies, total_acceptance=9000, total_rejection=1000, n_jobs=-1
    )
"""

from typing import NamedTuple, Optional

import pandas as pd
from joblib import Parallel, delayed
from scipy.stats import fisher_exact

from .errors import DegenerateCorpusError

WORD_STATS_COLUMNS = [
    'accept_freq',
    'reject_freq',
    'total_freq',
    'reject_ratio',
    'rejection_index',
    'p_value',
]


class WordSignificance(NamedTuple):
    reject_ratio: float
    rejection_index: float
    p_value: float


def baseline_rejection_rate(total_acceptance: int, total_rejection: int) -> float:
    """Corpus-wide rejection rate; undefined unless both classes are present"""
    if total_acceptance <= 0 or total_rejection <= 0:
        raise DegenerateCorpusError(total_acceptance, total_rejection)
    return total_rejection / (total_rejection + total_acceptance)


def word_significance(
    accept_freq: int,
    reject_freq: int,
    total_acceptance: int,
    total_rejection: int,
    word: Optional[str] = None
) -> WordSignificance:
    """
    Rejection statistics for one word

    Args:
        accept_freq: Approved records containing the word
        reject_freq: Rejected records containing the word
        total_acceptance: Approved records in the corpus
        total_rejection: Rejected records in the corpus
        word: Word being scored (only used in error messages)

    Returns:
        WordSignificance(reject_ratio, rejection_index, p_value)

    Raises:
        DegenerateCorpusError: If either corpus total is zero
        ValueError: If the word was never observed
    """
    baseline = baseline_rejection_rate(total_acceptance, total_rejection)

    total_freq = accept_freq + reject_freq
    if total_freq <= 0:
        raise ValueError(
            f'Word {word!r} has no observations '
            f'(accept_freq={accept_freq}, reject_freq={reject_freq}); '
            f'only observed words can be scored'
        )

    reject_ratio = reject_freq / total_freq
    rejection_index = reject_ratio / baseline - 1

    _, p_value = fisher_exact(
        [[reject_freq, accept_freq], [total_rejection, total_acceptance]],
        alternative='two-sided'
    )

    return WordSignificance(
        reject_ratio=float(reject_ratio),
        rejection_index=float(rejection_index),
        p_value=float(min(max(p_value, 0.0), 1.0))
    )


def compute_word_statistics(
    frequencies: pd.DataFrame,
    total_acceptance: int,
    total_rejection: int,
    n_jobs: int = 1
) -> pd.DataFrame:
    """
    Score every word in a frequency table

    Each word depends only on its own counts and the corpus totals, so words
    are scored independently (in parallel when n_jobs != 1). Results are
    gathered in input order.

    Args:
        frequencies: DataFrame indexed by word with accept_freq, reject_freq
        total_acceptance: Approved records in the corpus
        total_rejection: Rejected records in the corpus
        n_jobs: joblib worker count (-1 = all cores)

    Returns:
        New DataFrame indexed by word with WORD_STATS_COLUMNS
    """
    # Fail on a degenerate corpus even when there are no words to score
    baseline_rejection_rate(total_acceptance, total_rejection)

    words = list(frequencies.index)
    accept = frequencies['accept_freq'].astype('int64').tolist()
    reject = frequencies['reject_freq'].astype('int64').tolist()

    results = Parallel(n_jobs=n_jobs)(
        delayed(word_significance)(a, r, total_acceptance, total_rejection, word)
        for word, a, r in zip(words, accept, reject)
    )

    word_stats = pd.DataFrame(
        {
            'accept_freq': pd.Series(accept, index=words, dtype='int64'),
            'reject_freq': pd.Series(reject, index=words, dtype='int64'),
        },
        index=pd.Index(words, name='word')
    )
    word_stats['total_freq'] = word_stats['accept_freq'] + word_stats['reject_freq']
    word_stats['reject_ratio'] = [result.reject_ratio for result in results]
    word_stats['rejection_index'] = [result.rejection_index for result in results]
    word_stats['p_value'] = [result.p_value for result in results]

    # Empty frames still need float columns for downstream filtering
    return word_stats[WORD_STATS_COLUMNS].astype({
        'reject_ratio': 'float64',
        'rejection_index': 'float64',
        'p_value': 'float64',
    })
