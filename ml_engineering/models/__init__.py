"""
ML Models Module

Model implementations for planning application rejection prediction
"""

from .neural_net import (
    train_mlp_classifier
)

from .boosting import (
    train_xgboost_classifier
)

__all__ = [
    'train_mlp_classifier',
    'train_xgboost_classifier',
]
