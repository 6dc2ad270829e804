"""Tests for description normalization."""

import numpy as np
import pandas as pd
import pytest

from ml_engineering.text.normalize import (
    get_stop_words,
    normalize_description,
    normalize_descriptions
)


class TestNormalizeDescription:
    def test_strips_punctuation_case_and_stop_words(self):
        result = normalize_description('Erection of a two-storey REAR extension!!')
        assert result == ('erection', 'storey', 'rear', 'extension')

    def test_keeps_repeats(self):
        assert normalize_description('Tree,tree; TREE') == ('tree', 'tree', 'tree')

    def test_underscore_is_a_separator(self):
        assert normalize_description('rear_extension') == ('rear', 'extension')

    def test_empty_inputs(self):
        assert normalize_description(None) == ()
        assert normalize_description(np.nan) == ()
        assert normalize_description('') == ()
        assert normalize_description(' ...,, ') == ()
        assert normalize_description(pd.NA) == ()

    def test_only_stop_words(self):
        assert normalize_description('the and of') == ()


class TestNormalizeDescriptions:
    def test_keeps_index(self):
        texts = pd.Series(['garden wall', None], index=[10, 20])
        result = normalize_descriptions(texts)
        assert list(result.index) == [10, 20]
        assert result[10] == ('garden', 'wall')
        assert result[20] == ()

    def test_nullable_string_missing_values(self):
        texts = pd.Series(['garden wall', None], dtype='string')
        result = normalize_descriptions(texts)
        assert result.tolist() == [('garden', 'wall'), ()]

    def test_accepts_lists(self):
        result = normalize_descriptions(['tree removal'])
        assert result.tolist() == [('tree', 'removal')]

    def test_unknown_locale(self):
        with pytest.raises(ValueError, match='locale'):
            normalize_descriptions(['tree'], locale='pl')


def test_english_stop_words():
    stop_words = get_stop_words('en')
    assert 'the' in stop_words
    assert 'tree' not in stop_words
