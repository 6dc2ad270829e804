"""
ML Utilities Module

Model persistence and MLflow tracking
"""

from .persistence import (
    save_model_artifact,
    load_model_artifact,
    find_latest_artifact
)

from .tracking import (
    start_experiment,
    log_model_run,
    log_word_statistics
)

__all__ = [
    'save_model_artifact',
    'load_model_artifact',
    'find_latest_artifact',
    'start_experiment',
    'log_model_run',
    'log_word_statistics',
]
