#!/usr/bin/env python3
"""
Gradient Boosting Model

XGBoost classifier for rejection prediction with automatic class imbalance
handling and early stopping.

Usage:
    from ml_engineering.models.boosting import train_xgboost_classifier

    model, metrics = train_xgboost_classifier(
        X_train, y_train,
        X_val, y_val,
        n_estimators=500,
        early_stopping_rounds=50
    )
"""

import numpy as np
import xgboost as xgb
from typing import Tuple, Dict

from ml_engineering.models.neural_net import summarize_fit


def train_xgboost_classifier(
    X_train, y_train,
    X_val, y_val,
    n_estimators: int = 500,
    max_depth: int = 6,
    learning_rate: float = 0.05,
    early_stopping_rounds: int = 50,
    verbose: bool = True,
    **kwargs
) -> Tuple[xgb.XGBClassifier, Dict[str, float]]:
    """
    Train XGBoost classifier with early stopping

    Args:
        X_train: Training features
        y_train: Training labels
        X_val: Validation features
        y_val: Validation labels
        n_estimators: Maximum number of boosting rounds
        max_depth: Maximum tree depth
        learning_rate: Learning rate
        early_stopping_rounds: Stop if no improvement for N rounds
        verbose: Print progress
        **kwargs: Additional XGBoost parameters

    Returns:
        Tuple of (trained_model, metrics_dict)
    """
    print(f'\n{"="*70}')
    print('TRAINING: XGBoost Classifier')
    print(f'{"="*70}')

    # Refusals are the minority class
    y_train = np.asarray(y_train)
    positives = (y_train == 1).sum()
    scale_pos_weight = (y_train == 0).sum() / positives if positives else 1.0

    print(f'  Class imbalance ratio: {scale_pos_weight:.2f}')
    print(f'  Max boosting rounds: {n_estimators}')
    print(f'  Early stopping: {early_stopping_rounds} rounds\n')

    params = {
        'n_estimators': n_estimators,
        'max_depth': max_depth,
        'learning_rate': learning_rate,
        'subsample': 0.8,
        'colsample_bytree': 0.8,
        'scale_pos_weight': scale_pos_weight,
        'eval_metric': 'aucpr',
        'random_state': 42,
        'n_jobs': -1,
        'early_stopping_rounds': early_stopping_rounds,  # Set in constructor for XGBoost 2.0+
        **kwargs
    }

    model = xgb.XGBClassifier(**params)

    print('Training...')
    model.fit(
        X_train, y_train,
        eval_set=[(X_val, y_val)],
        verbose=verbose
    )

    best_iteration = getattr(model, 'best_iteration', None)
    if best_iteration is None:
        best_iteration = n_estimators

    print(f'\n✓ Training stopped at iteration {best_iteration}')

    metrics = summarize_fit(model, X_train, y_train, X_val, y_val)
    metrics['best_iteration'] = best_iteration

    return model, metrics
