#!/usr/bin/env python3
"""
Feature Schema Definitions

Documents expected features for the planning application dataset.
Used by pipelines to ensure consistency across train/val/test.

These lists should be updated whenever the dataset builder changes.
"""

# ============================================================================
# APPLICATION-LEVEL FEATURES (one row per planning application)
# ============================================================================

APPLICATION_NUMERIC_FEATURES = [
    'description_token_count',  # normalized tokens in the description
    'received_year',
    'received_month',
]

APPLICATION_CATEGORICAL_FEATURES = [
    'application_type',  # householder, full, outline, listed building, ...
    'ward',
]

# Free text column turned into significance-selected word indicators
APPLICATION_TEXT_FEATURE = 'description'

APPLICATION_TARGET = 'rejected'  # Binary: 1 = refused, 0 = approved

# Features that should NEVER be used (data leakage)
APPLICATION_FORBIDDEN_FEATURES = [
    'decision',       # Raw outcome text the target is derived from
    'decision_date',  # Only known after the outcome
]

# ============================================================================
# WORD FEATURE DEFAULTS
# ============================================================================

WORD_P_VALUE_MAX = 0.0005
WORD_MIN_TOTAL_FREQ = 100
WORD_STOP_WORD_LOCALE = 'en'


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def validate_features(df, feature_list, dataset_type='application'):
    """
    Validate that expected features exist in DataFrame

    Args:
        df: pandas DataFrame
        feature_list: List of expected feature names
        dataset_type: Label used in the printed report

    Returns:
        Tuple of (available_features, missing_features)
    """
    available = [f for f in feature_list if f in df.columns]
    missing = [f for f in feature_list if f not in df.columns]

    print(f'\n{dataset_type.upper()} Features Validation:')
    print(f'  Available: {len(available)}/{len(feature_list)}')
    if missing:
        print(f'  Missing: {missing}')

    return available, missing


def check_for_leakage(df, dataset_type='application'):
    """
    Check if DataFrame contains forbidden features

    Raises:
        ValueError if leakage features detected
    """
    leakage = set(APPLICATION_FORBIDDEN_FEATURES) & set(df.columns)

    if leakage:
        raise ValueError(
            f'DATA LEAKAGE DETECTED in {dataset_type} dataset: {leakage}\n'
            f'These features must be removed before training.'
        )

    print(f'  ✓ No data leakage detected in {dataset_type} dataset')
