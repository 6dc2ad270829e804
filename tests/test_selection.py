"""Tests for word feature selection."""

import pandas as pd
import pytest

from ml_engineering.text.selection import FeatureSet, SelectedWord, select_features


def make_word_stats(rows):
    df = pd.DataFrame(rows, columns=['word', 'total_freq', 'rejection_index', 'p_value'])
    return df.set_index('word')


@pytest.fixture
def word_stats():
    return make_word_stats([
        ('demolition', 400, 1.4, 1e-9),
        ('flats', 300, 2.0, 1e-12),
        ('dwelling', 300, 2.0, 1e-8),
        ('extension', 900, -0.7, 1e-20),
        ('garage', 80, 0.9, 1e-6),      # too rare
        ('porch', 500, 0.1, 0.2),       # not significant
        ('window', 101, 0.3, 0.0004),
        ('roof', 100, 0.5, 1e-6),       # total_freq must be strictly above
    ])


class TestSelectFeatures:
    def test_filters_and_ranks(self, word_stats):
        feature_set = select_features(word_stats, p_value_max=0.0005, min_total_freq=100)
        assert feature_set.words == ('dwelling', 'flats', 'demolition', 'window', 'extension')

    def test_sorted_descending(self, word_stats):
        feature_set = select_features(word_stats)
        indices = [entry.rejection_index for entry in feature_set]
        assert indices == sorted(indices, reverse=True)

    def test_deterministic(self, word_stats):
        first = select_features(word_stats)
        second = select_features(word_stats.sample(frac=1, random_state=7))
        assert first == second

    def test_entry_fields(self, word_stats):
        entry = select_features(word_stats).entries[0]
        assert entry == SelectedWord('dwelling', 2.0, 1e-8, 300)

    def test_records_thresholds(self, word_stats):
        feature_set = select_features(word_stats, p_value_max=0.01, min_total_freq=50)
        assert feature_set.p_value_max == 0.01
        assert feature_set.min_total_freq == 50
        assert 'garage' in feature_set.words

    def test_empty_selection_is_valid(self, word_stats, capsys):
        feature_set = select_features(word_stats, p_value_max=1e-30)
        assert len(feature_set) == 0
        assert feature_set.words == ()
        assert 'feature set is empty' in capsys.readouterr().out

    def test_does_not_mutate_stats(self, word_stats):
        before = word_stats.copy()
        select_features(word_stats)
        pd.testing.assert_frame_equal(word_stats, before)


class TestFeatureSet:
    def test_dict_round_trip(self, word_stats):
        feature_set = select_features(word_stats)
        assert FeatureSet.from_dict(feature_set.to_dict()) == feature_set

    def test_from_words_keeps_order(self, word_stats):
        feature_set = FeatureSet.from_words(['Porch', 'flats'], word_stats)
        assert feature_set.words == ('porch', 'flats')
        assert feature_set.entries[1].total_freq == 300

    def test_from_words_unknown_word(self, word_stats):
        with pytest.raises(KeyError, match='conservatory'):
            FeatureSet.from_words(['conservatory'], word_stats)

    def test_is_frozen(self, word_stats):
        feature_set = select_features(word_stats)
        with pytest.raises(AttributeError):
            feature_set.entries = ()

    def test_from_words_drops_repeats(self, word_stats):
        feature_set = FeatureSet.from_words(['flats', 'Porch', 'FLATS', 'porch'], word_stats)
        assert feature_set.words == ('flats', 'porch')


def test_ranks_by_index_when_word_column_present(word_stats):
    stats = word_stats.copy()
    stats['word'] = 'unrelated'
    feature_set = select_features(stats)
    assert feature_set.words == ('dwelling', 'flats', 'demolition', 'window', 'extension')
    assert (stats['word'] == 'unrelated').all()
