"""
Word Feature Module

Significance-tested word indicators built from application descriptions
"""

from .errors import (
    WordFeatureError,
    DegenerateCorpusError,
    InvalidLabelError
)

from .normalize import (
    normalize_description,
    normalize_descriptions,
    get_stop_words
)

from .frequencies import (
    count_word_presence,
    merge_frequencies,
    build_word_frequencies
)

from .significance import (
    WordSignificance,
    baseline_rejection_rate,
    word_significance,
    compute_word_statistics
)

from .selection import (
    FeatureSet,
    SelectedWord,
    select_features
)

from .encoding import (
    encode_tokens,
    make_encoder,
    encode_records,
    WordPresenceTransformer
)

from .pipeline import (
    WordFeatureConfig,
    build_word_stats,
    build_feature_set
)

__all__ = [
    'WordFeatureError',
    'DegenerateCorpusError',
    'InvalidLabelError',
    'normalize_description',
    'normalize_descriptions',
    'get_stop_words',
    'count_word_presence',
    'merge_frequencies',
    'build_word_frequencies',
    'WordSignificance',
    'baseline_rejection_rate',
    'word_significance',
    'compute_word_statistics',
    'FeatureSet',
    'SelectedWord',
    'select_features',
    'encode_tokens',
    'make_encoder',
    'encode_records',
    'WordPresenceTransformer',
    'WordFeatureConfig',
    'build_word_stats',
    'build_feature_set',
]
