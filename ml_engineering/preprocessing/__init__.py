"""
ML Preprocessing Module

Provides sklearn Pipelines and feature schema definitions for reproducible
preprocessing across train/val/test splits.
"""

from .pipelines import (
    create_application_preprocessor,
    create_application_classifier_pipeline,
    get_feature_names
)

from .feature_lists import (
    APPLICATION_NUMERIC_FEATURES,
    APPLICATION_CATEGORICAL_FEATURES,
    APPLICATION_TEXT_FEATURE,
    APPLICATION_TARGET,
    APPLICATION_FORBIDDEN_FEATURES,
    WORD_P_VALUE_MAX,
    WORD_MIN_TOTAL_FREQ,
    WORD_STOP_WORD_LOCALE,
    validate_features,
    check_for_leakage
)

__all__ = [
    'create_application_preprocessor',
    'create_application_classifier_pipeline',
    'get_feature_names',
    'APPLICATION_NUMERIC_FEATURES',
    'APPLICATION_CATEGORICAL_FEATURES',
    'APPLICATION_TEXT_FEATURE',
    'APPLICATION_TARGET',
    'APPLICATION_FORBIDDEN_FEATURES',
    'WORD_P_VALUE_MAX',
    'WORD_MIN_TOTAL_FREQ',
    'WORD_STOP_WORD_LOCALE',
    'validate_features',
    'check_for_leakage',
]
