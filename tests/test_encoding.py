"""Tests for binary word feature encoding."""

import numpy as np
import pandas as pd
import pytest

from ml_engineering.text.encoding import (
    WordPresenceTransformer,
    encode_records,
    encode_tokens,
    make_encoder
)
from ml_engineering.text.normalize import normalize_description
from ml_engineering.text.selection import FeatureSet, SelectedWord


@pytest.fixture
def feature_set():
    return FeatureSet(entries=(
        SelectedWord('tree', 1.2, 1e-6, 150),
        SelectedWord('wall', -0.3, 1e-5, 400),
    ))


class TestEncodeTokens:
    def test_no_substring_match(self, feature_set):
        encoded = encode_tokens(feature_set, normalize_description('street lamp'))
        assert encoded == {'tree': False, 'wall': False}

    def test_whole_word_match(self, feature_set):
        encoded = encode_tokens(feature_set, normalize_description('a tree fell'))
        assert encoded['tree'] is True

    def test_make_encoder(self, feature_set):
        encode = make_encoder(feature_set)
        assert encode(('garden', 'wall', 'walls')) == {'tree': False, 'wall': True}

    def test_empty_feature_set(self):
        assert encode_tokens(FeatureSet(), ('tree',)) == {}


class TestEncodeRecords:
    def test_columns_and_values(self, feature_set):
        tokens = pd.Series([('tree', 'tree'), ('streets',), ('wall', 'tree')], index=[5, 6, 7])
        encoded = encode_records(feature_set, tokens)

        assert list(encoded.columns) == ['has_tree', 'has_wall']
        assert list(encoded.index) == [5, 6, 7]
        assert encoded.to_numpy().tolist() == [[1, 0], [0, 0], [1, 1]]


class TestWordPresenceTransformer:
    def test_transform_series(self, feature_set):
        transformer = WordPresenceTransformer(feature_set)
        X = pd.Series(['Tree removal', 'Street wall', None])
        result = transformer.fit(X).transform(X)
        assert result.tolist() == [[1, 0], [0, 1], [0, 0]]

    def test_transform_dataframe(self, feature_set):
        transformer = WordPresenceTransformer(feature_set)
        X = pd.DataFrame({'description': ['garden wall']})
        assert transformer.fit_transform(X).tolist() == [[0, 1]]

    def test_fit_keeps_vocabulary(self, feature_set):
        transformer = WordPresenceTransformer(feature_set)
        transformer.fit(pd.Series(['conservatory', 'dormer window']))
        assert transformer.feature_set is feature_set
        assert list(transformer.get_feature_names_out()) == ['has_tree', 'has_wall']

    def test_requires_feature_set(self):
        with pytest.raises(ValueError, match='FeatureSet'):
            WordPresenceTransformer().fit(pd.Series(['tree']))

    def test_ndarray_input(self, feature_set):
        X = np.array([['tree'], ['lamp']], dtype=object)
        assert WordPresenceTransformer(feature_set).fit_transform(X).tolist() == [[1, 0], [0, 0]]

    def test_missing_nullable_description_has_no_words(self):
        feature_set = FeatureSet(entries=(SelectedWord('na', 0.5, 1e-6, 200),))
        X = pd.DataFrame({'description': pd.Series(['na drainage', None], dtype='string')})
        assert WordPresenceTransformer(feature_set).fit_transform(X).tolist() == [[1], [0]]
