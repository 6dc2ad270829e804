"""
Model Evaluation Module

Imbalance-aware metrics and decision threshold selection
"""

from .metrics import (
    evaluate_classifier,
    find_optimal_threshold
)

__all__ = [
    'evaluate_classifier',
    'find_optimal_threshold',
]
