#!/usr/bin/env python3
"""
Word Feature Selection

Filters the word statistics by significance and frequency, ranks the
survivors by rejection index and freezes them into a FeatureSet. The same
FeatureSet must be used to encode training, validation and inference records.

Usage:
    from ml_engineering.text.selection import select_features

    feature_set = select_features(word_stats, p_value_max=0.0005, min_total_freq=100)
    feature_set.words
    # ('demolition', 'dwelling', ...)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, NamedTuple, Optional, Tuple

import pandas as pd

DEFAULT_P_VALUE_MAX = 0.0005
DEFAULT_MIN_TOTAL_FREQ = 100


class SelectedWord(NamedTuple):
    word: str
    rejection_index: float
    p_value: float
    total_freq: int


@dataclass(frozen=True)
class FeatureSet:
    """Ordered, immutable list of words promoted to binary model features"""

    entries: Tuple[SelectedWord, ...] = ()
    p_value_max: Optional[float] = None
    min_total_freq: Optional[int] = None

    @property
    def words(self) -> Tuple[str, ...]:
        return tuple(entry.word for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (stored in model metadata)"""
        return {
            'p_value_max': self.p_value_max,
            'min_total_freq': self.min_total_freq,
            'entries': [entry._asdict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeatureSet':
        entries = tuple(
            SelectedWord(
                word=str(entry['word']),
                rejection_index=float(entry['rejection_index']),
                p_value=float(entry['p_value']),
                total_freq=int(entry['total_freq'])
            )
            for entry in data.get('entries', [])
        )
        return cls(
            entries=entries,
            p_value_max=data.get('p_value_max'),
            min_total_freq=data.get('min_total_freq')
        )

    @classmethod
    def from_words(cls, words: Iterable[str], word_stats: pd.DataFrame) -> 'FeatureSet':
        """
        Build a FeatureSet from a hand-picked word list, keeping its order

        Raises:
            KeyError: If a word has no statistics (never observed)
        """
        # Repeats (in any case) collapse to their first occurrence
        words = list(dict.fromkeys(word.lower() for word in words))
        missing = [word for word in words if word not in word_stats.index]
        if missing:
            raise KeyError(f'No statistics for words: {missing}')

        return cls(entries=tuple(
            _selected_word(word, word_stats.loc[word]) for word in words
        ))


def _selected_word(word, row) -> SelectedWord:
    return SelectedWord(
        word=str(word),
        rejection_index=float(row['rejection_index']),
        p_value=float(row['p_value']),
        total_freq=int(row['total_freq'])
    )


def select_features(
    word_stats: pd.DataFrame,
    p_value_max: float = DEFAULT_P_VALUE_MAX,
    min_total_freq: int = DEFAULT_MIN_TOTAL_FREQ
) -> FeatureSet:
    """
    Select significant, frequent words ranked by rejection index

    Args:
        word_stats: Output of compute_word_statistics
        p_value_max: Keep words with p_value strictly below this
        min_total_freq: Keep words with total_freq strictly above this

    Returns:
        FeatureSet sorted by rejection_index descending (ties by word)
    """
    mask = (word_stats['p_value'] < p_value_max) & (word_stats['total_freq'] > min_total_freq)
    # Stable sort by index first so equal rejection indices stay alphabetical
    selected = word_stats[mask].sort_index(kind='mergesort').sort_values(
        'rejection_index', ascending=False, kind='mergesort'
    )

    if len(selected) == 0:
        print(
            f'  ⚠️  No words passed p_value < {p_value_max} and '
            f'total_freq > {min_total_freq}; feature set is empty'
        )

    return FeatureSet(
        entries=tuple(_selected_word(word, row) for word, row in selected.iterrows()),
        p_value_max=p_value_max,
        min_total_freq=min_total_freq
    )
