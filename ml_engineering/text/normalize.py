#!/usr/bin/env python3
"""
Description Text Normalization

Turns a planning application's free-text description into a tuple of
lowercase tokens with punctuation and English stop-words removed.

Usage:
    from ml_engineering.text.normalize import normalize_description

    normalize_description('Erection of a two-storey rear extension.')
    # ('erection', 'storey', 'rear', 'extension')
"""

import re
from typing import Iterable, Optional, Tuple

import pandas as pd
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

# Any run of punctuation or whitespace collapses to one separator
SEPARATOR_PATTERN = re.compile(r'[\W_]+')

STOP_WORDS = {
    'en': frozenset(ENGLISH_STOP_WORDS),
}


def get_stop_words(locale: str = 'en') -> frozenset:
    """Return the stop-word set for a locale (only 'en' is available)"""
    if locale not in STOP_WORDS:
        raise ValueError(
            f'Unsupported stop-word locale: {locale!r}. '
            f'Available: {sorted(STOP_WORDS)}'
        )
    return STOP_WORDS[locale]


def normalize_description(text: Optional[str], stop_words: frozenset = STOP_WORDS['en']) -> Tuple[str, ...]:
    """
    Normalize a single description

    Args:
        text: Raw description (None / NaN / pd.NA / empty are allowed)
        stop_words: Words to drop after lowercasing

    Returns:
        Tuple of tokens in their original order (repeats kept)
    """
    if text is None or (pd.api.types.is_scalar(text) and pd.isna(text)):
        return ()

    cleaned = SEPARATOR_PATTERN.sub(' ', str(text)).lower()
    return tuple(
        token for token in cleaned.split(' ')
        if token and token not in stop_words
    )


def normalize_descriptions(texts: Iterable, locale: str = 'en') -> pd.Series:
    """
    Normalize a column of descriptions

    Args:
        texts: pandas Series or any iterable of raw descriptions
        locale: Stop-word locale

    Returns:
        Series of token tuples, aligned with the input index when given a Series
    """
    stop_words = get_stop_words(locale)
    if not isinstance(texts, pd.Series):
        texts = pd.Series(list(texts), dtype=object)

    return texts.map(lambda text: normalize_description(text, stop_words))
