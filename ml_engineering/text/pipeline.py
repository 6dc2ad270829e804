#!/usr/bin/env python3
"""
Word Feature Pipeline

Chains normalization, presence counting, significance testing and selection.
Each stage returns a new value; nothing is mutated in place.

Usage:
    from ml_engineering.text.pipeline import WordFeatureConfig, build_feature_set

    config = WordFeatureConfig(p_value_max=0.0005, min_total_freq=100, n_jobs=-1)
    feature_set, word_stats = build_feature_set(
        train['description'], train['rejected'], config
    )
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

from .frequencies import build_word_frequencies
from .normalize import normalize_descriptions
from .selection import (
    DEFAULT_MIN_TOTAL_FREQ,
    DEFAULT_P_VALUE_MAX,
    FeatureSet,
    select_features
)
from .significance import compute_word_statistics


@dataclass(frozen=True)
class WordFeatureConfig:
    stop_word_locale: str = 'en'
    p_value_max: float = DEFAULT_P_VALUE_MAX
    min_total_freq: int = DEFAULT_MIN_TOTAL_FREQ
    candidate_words: Optional[Tuple[str, ...]] = None
    n_jobs: int = 1


def build_word_stats(descriptions, labels, config: WordFeatureConfig = WordFeatureConfig()) -> pd.DataFrame:
    """Normalize, count and score the vocabulary of a labelled corpus"""
    tokens = normalize_descriptions(descriptions, locale=config.stop_word_locale)
    frequencies, total_acceptance, total_rejection = build_word_frequencies(
        tokens, labels, candidate_words=config.candidate_words
    )
    return compute_word_statistics(
        frequencies, total_acceptance, total_rejection, n_jobs=config.n_jobs
    )


def build_feature_set(
    descriptions,
    labels,
    config: WordFeatureConfig = WordFeatureConfig()
) -> Tuple[FeatureSet, pd.DataFrame]:
    """
    Build the frozen FeatureSet for a training run

    Args:
        descriptions: Raw description per record
        labels: 0 (approved) / 1 (rejected) per record
        config: Thresholds, locale and optional vocabulary restriction

    Returns:
        Tuple of (feature_set, word_stats)
    """
    word_stats = build_word_stats(descriptions, labels, config)
    feature_set = select_features(
        word_stats,
        p_value_max=config.p_value_max,
        min_total_freq=config.min_total_freq
    )
    return feature_set, word_stats
