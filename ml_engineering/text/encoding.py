#!/usr/bin/env python3
"""
Binary Word Feature Encoding

Encodes normalized descriptions as one 0/1 indicator per FeatureSet word.
Matching is exact token membership: 'tree' never matches inside 'street'.

Usage:
    from ml_engineering.text.encoding import make_encoder, WordPresenceTransformer

    encode = make_encoder(feature_set)
    encode(('tree', 'removal'))
    # {'tree': True, 'wall': False}

    # Inside a sklearn ColumnTransformer (raw description column in, indicators out)
    ('words', WordPresenceTransformer(feature_set), 'description')
"""

from typing import Callable, Dict, Iterable

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from .normalize import get_stop_words, normalize_description
from .selection import FeatureSet

FEATURE_PREFIX = 'has_'


def feature_column_names(feature_set: FeatureSet):
    return [f'{FEATURE_PREFIX}{word}' for word in feature_set.words]


def encode_tokens(feature_set: FeatureSet, tokens: Iterable[str]) -> Dict[str, bool]:
    """One boolean per feature word, True iff the word is one of the tokens"""
    token_set = set(tokens)
    return {word: word in token_set for word in feature_set.words}


def make_encoder(feature_set: FeatureSet) -> Callable[[Iterable[str]], Dict[str, bool]]:
    """Encoder closed over a frozen FeatureSet"""
    def encode(tokens):
        return encode_tokens(feature_set, tokens)

    return encode


def encode_records(feature_set: FeatureSet, token_lists) -> pd.DataFrame:
    """
    Encode many records at once

    Args:
        feature_set: Frozen FeatureSet from training
        token_lists: Series (index is kept) or iterable of token sequences

    Returns:
        DataFrame of has_<word> int columns, one row per record
    """
    if not isinstance(token_lists, pd.Series):
        token_lists = pd.Series(list(token_lists), dtype=object)

    words = feature_set.words
    matrix = np.zeros((len(token_lists), len(words)), dtype=np.int64)
    for i, tokens in enumerate(token_lists):
        token_set = set(tokens)
        for j, word in enumerate(words):
            if word in token_set:
                matrix[i, j] = 1

    return pd.DataFrame(matrix, index=token_lists.index, columns=feature_column_names(feature_set))


class WordPresenceTransformer(BaseEstimator, TransformerMixin):
    """
    sklearn transformer from raw descriptions to word indicators

    The FeatureSet is fixed at construction; fit() never changes it, so a
    pipeline saved after training encodes inference records with exactly the
    training vocabulary.
    """

    def __init__(self, feature_set: FeatureSet = None, stop_word_locale: str = 'en'):
        self.feature_set = feature_set
        self.stop_word_locale = stop_word_locale

    def fit(self, X, y=None):
        if self.feature_set is None:
            raise ValueError('WordPresenceTransformer requires a FeatureSet')
        get_stop_words(self.stop_word_locale)
        return self

    def transform(self, X):
        if self.feature_set is None:
            raise ValueError('WordPresenceTransformer requires a FeatureSet')

        stop_words = get_stop_words(self.stop_word_locale)
        descriptions = _description_column(X)
        tokens = [normalize_description(text, stop_words) for text in descriptions]
        return encode_records(self.feature_set, tokens).to_numpy()

    def get_feature_names_out(self, input_features=None):
        return np.asarray(feature_column_names(self.feature_set), dtype=object)


def _description_column(X):
    if isinstance(X, pd.DataFrame):
        return X.iloc[:, 0].tolist()
    if isinstance(X, pd.Series):
        return X.tolist()

    array = np.asarray(X, dtype=object)
    if array.ndim == 2:
        return array[:, 0].tolist()
    return array.tolist()
