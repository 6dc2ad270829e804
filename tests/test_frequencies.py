"""Tests for vocabulary presence counting."""

import pandas as pd
import pytest

from ml_engineering.text.errors import InvalidLabelError
from ml_engineering.text.frequencies import (
    build_word_frequencies,
    count_word_presence,
    merge_frequencies
)
from ml_engineering.text.normalize import normalize_descriptions


class TestPresenceCounting:
    def test_repeats_count_once(self):
        tokens = normalize_descriptions(['tree near a tree'])
        counts = count_word_presence(tokens, candidate_words={'tree'})
        assert counts.to_dict() == {'tree': 1}

    def test_counts_records(self):
        counts = count_word_presence([('tree', 'wall'), ('tree',), ('wall', 'wall')])
        assert counts['tree'] == 2
        assert counts['wall'] == 2

    def test_candidate_restriction(self):
        counts = count_word_presence([('tree', 'wall'), ('garden',)], candidate_words=['Tree'])
        assert list(counts.index) == ['tree']

    def test_empty(self):
        assert len(count_word_presence([])) == 0


class TestMerge:
    def test_missing_side_defaults_to_zero(self):
        accept = pd.Series({'wall': 2, 'garden': 1})
        reject = pd.Series({'wall': 1, 'tree': 2})
        merged = merge_frequencies(accept, reject)

        assert not merged.isnull().any().any()
        assert merged.loc['garden'].tolist() == [1, 0, 1]
        assert merged.loc['tree'].tolist() == [0, 2, 2]
        assert merged.loc['wall', 'total_freq'] == 3
        assert merged['accept_freq'].dtype == 'int64'


class TestBuildWordFrequencies:
    def test_small_corpus(self, small_corpus):
        tokens = normalize_descriptions(small_corpus['description'])
        frequencies, total_acceptance, total_rejection = build_word_frequencies(
            tokens, small_corpus['rejected']
        )

        assert (total_acceptance, total_rejection) == (2, 2)
        assert frequencies.loc['wall', 'accept_freq'] == 2
        assert frequencies.loc['wall', 'reject_freq'] == 1
        assert frequencies.loc['wall', 'total_freq'] == 3
        assert frequencies.loc['tree', 'accept_freq'] == 0
        assert (frequencies['total_freq'] >= 1).all()

    def test_invalid_label(self):
        with pytest.raises(InvalidLabelError) as exc_info:
            build_word_frequencies([('tree',), ('wall',)], [0, 2])
        assert exc_info.value.invalid_labels == [2]

    def test_missing_label(self):
        with pytest.raises(InvalidLabelError):
            build_word_frequencies([('tree',)], [float('nan')])

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match='labels'):
            build_word_frequencies([('tree',), ('wall',)], [0])
