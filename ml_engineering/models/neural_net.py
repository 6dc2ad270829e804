#!/usr/bin/env python3
"""
Neural Network Model

Multi-layer perceptron for rejection prediction. Inputs must already be
scaled (the application preprocessor standardizes numerics and the word and
one-hot indicators are 0/1).

Usage:
    from ml_engineering.models.neural_net import train_mlp_classifier

    model, metrics = train_mlp_classifier(
        X_train, y_train,
        X_val, y_val,
        hidden_layer_sizes=(64, 32)
    )
"""

import numpy as np
from sklearn.neural_network import MLPClassifier
from sklearn.metrics import (
    accuracy_score, precision_score, recall_score, f1_score, roc_auc_score,
    average_precision_score
)
from typing import Tuple, Dict


def train_mlp_classifier(
    X_train, y_train,
    X_val, y_val,
    hidden_layer_sizes: Tuple[int, ...] = (64, 32),
    alpha: float = 1e-4,
    learning_rate_init: float = 1e-3,
    max_iter: int = 300,
    early_stopping: bool = True,
    **kwargs
) -> Tuple[MLPClassifier, Dict[str, float]]:
    """
    Train an MLP classifier

    Args:
        X_train: Training features (preprocessed)
        y_train: Training labels
        X_val: Validation features (preprocessed)
        y_val: Validation labels
        hidden_layer_sizes: Neurons per hidden layer
        alpha: L2 penalty
        learning_rate_init: Initial Adam learning rate
        max_iter: Maximum epochs
        early_stopping: Hold out 10% of training data to stop early
        **kwargs: Additional MLPClassifier parameters

    Returns:
        Tuple of (trained_model, metrics_dict)
    """
    print(f'\n{"="*70}')
    print('TRAINING: MLP Classifier')
    print(f'{"="*70}')

    print(f'  Hidden layers: {hidden_layer_sizes}')
    print(f'  Alpha: {alpha}')
    print(f'  Max epochs: {max_iter}\n')

    params = {
        'hidden_layer_sizes': hidden_layer_sizes,
        'alpha': alpha,
        'learning_rate_init': learning_rate_init,
        'max_iter': max_iter,
        'early_stopping': early_stopping,
        'random_state': 42,
        **kwargs
    }

    model = MLPClassifier(**params)

    print('Training...')
    model.fit(X_train, y_train)

    print(f'\n✓ Training stopped after {model.n_iter_} epochs')

    metrics = summarize_fit(model, X_train, y_train, X_val, y_val)
    metrics['n_epochs'] = model.n_iter_

    return model, metrics


def summarize_fit(model, X_train, y_train, X_val, y_val) -> Dict[str, float]:
    """Train/validation metrics printed after each model fit"""
    train_pred = model.predict(X_train)
    val_pred = model.predict(X_val)

    train_proba = model.predict_proba(X_train)[:, 1]
    val_proba = model.predict_proba(X_val)[:, 1]

    metrics = {
        'train_accuracy': accuracy_score(y_train, train_pred),
        'train_auc': _safe_auc(y_train, train_proba),
        'val_accuracy': accuracy_score(y_val, val_pred),
        'val_auc': _safe_auc(y_val, val_proba),
        'val_average_precision': average_precision_score(y_val, val_proba),
        'val_precision': precision_score(y_val, val_pred, zero_division=0),
        'val_recall': recall_score(y_val, val_pred, zero_division=0),
        'val_f1': f1_score(y_val, val_pred, zero_division=0),
    }

    print('\nPerformance:')
    print(f'  Train Accuracy: {metrics["train_accuracy"]:.4f}')
    print(f'  Train AUC:      {metrics["train_auc"]:.4f}')
    print(f'  Val Accuracy:   {metrics["val_accuracy"]:.4f}')
    print(f'  Val AUC:        {metrics["val_auc"]:.4f}')
    print(f'  Val AP:         {metrics["val_average_precision"]:.4f}')
    print(f'  Val Precision:  {metrics["val_precision"]:.4f}')
    print(f'  Val Recall:     {metrics["val_recall"]:.4f}')
    print(f'  Val F1:         {metrics["val_f1"]:.4f}')

    return metrics


def _safe_auc(y_true, y_proba) -> float:
    # AUC is undefined for single-class splits
    if len(np.unique(y_true)) < 2:
        return float('nan')
    return roc_auc_score(y_true, y_proba)
