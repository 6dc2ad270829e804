#!/usr/bin/env python3
"""
Model Evaluation

Imbalance-aware evaluation of rejection classifiers. Refusals are the
minority class, so precision/recall, average precision and balanced accuracy
are reported next to accuracy and ROC-AUC.

Usage:
    from ml_engineering.evaluation.metrics import evaluate_classifier, find_optimal_threshold

    metrics = evaluate_classifier(model, X_test, y_test, name='Test Set')
    threshold, score = find_optimal_threshold(y_val, model.predict_proba(X_val)[:, 1])
"""

import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score, precision_score, recall_score, f1_score, roc_auc_score,
    average_precision_score, balanced_accuracy_score, brier_score_loss,
    confusion_matrix
)
from typing import Dict, Tuple

THRESHOLD_METRICS = {
    'f1': lambda y, p: f1_score(y, p, zero_division=0),
    'precision': lambda y, p: precision_score(y, p, zero_division=0),
    'recall': lambda y, p: recall_score(y, p, zero_division=0),
    'accuracy': accuracy_score,
    'balanced_accuracy': balanced_accuracy_score,
}


def evaluate_classifier(
    model,
    X,
    y,
    name: str = 'Dataset',
    threshold: float = 0.5
) -> Dict[str, float]:
    """
    Comprehensive evaluation of binary classifier

    Args:
        model: Trained classifier with predict_proba
        X: Features
        y: True labels
        name: Dataset name for logging
        threshold: Decision threshold (default: 0.5)

    Returns:
        Dict of metrics
    """
    print(f'\n{"="*70}')
    print(f'EVALUATION: {name}')
    print(f'{"="*70}')

    y = np.asarray(y)
    y_proba = model.predict_proba(X)[:, 1]
    y_pred = (y_proba >= threshold).astype(int)
    both_classes = len(np.unique(y)) == 2

    metrics = {
        'accuracy': accuracy_score(y, y_pred),
        'balanced_accuracy': balanced_accuracy_score(y, y_pred),
        'precision': precision_score(y, y_pred, zero_division=0),
        'recall': recall_score(y, y_pred, zero_division=0),
        'f1': f1_score(y, y_pred, zero_division=0),
        'auc': roc_auc_score(y, y_proba) if both_classes else float('nan'),
        'average_precision': average_precision_score(y, y_proba) if both_classes else float('nan'),
        'brier_score': brier_score_loss(y, y_proba),
        'threshold': threshold
    }

    print(f'\nMetrics:')
    print(f'  Accuracy:          {metrics["accuracy"]:.4f}')
    print(f'  Balanced Accuracy: {metrics["balanced_accuracy"]:.4f}')
    print(f'  Precision:         {metrics["precision"]:.4f}')
    print(f'  Recall:            {metrics["recall"]:.4f}')
    print(f'  F1 Score:          {metrics["f1"]:.4f}')
    print(f'  AUC-ROC:           {metrics["auc"]:.4f}')
    print(f'  Average Precision: {metrics["average_precision"]:.4f}')
    print(f'  Brier Score:       {metrics["brier_score"]:.4f} (lower is better)')

    cm = confusion_matrix(y, y_pred, labels=[0, 1])
    print(f'\nConfusion Matrix:')
    print(f'  TN: {cm[0,0]:,}  FP: {cm[0,1]:,}')
    print(f'  FN: {cm[1,0]:,}  TP: {cm[1,1]:,}')

    pred_dist = pd.Series(y_pred).value_counts()
    true_dist = pd.Series(y).value_counts()
    print(f'\nClass Distribution:')
    print(f'  True:      {true_dist.get(0, 0):,} approved, {true_dist.get(1, 0):,} refused ({true_dist.get(1, 0)/len(y)*100:.1f}% refused)')
    print(f'  Predicted: {pred_dist.get(0, 0):,} approved, {pred_dist.get(1, 0):,} refused ({pred_dist.get(1, 0)/len(y_pred)*100:.1f}% refused)')

    return metrics


def find_optimal_threshold(
    y_true,
    y_proba,
    metric: str = 'f1'
) -> Tuple[float, float]:
    """
    Find optimal classification threshold for a given metric

    Args:
        y_true: True labels
        y_proba: Predicted probabilities
        metric: One of THRESHOLD_METRICS

    Returns:
        Tuple of (optimal_threshold, metric_value)
    """
    if metric not in THRESHOLD_METRICS:
        raise ValueError(f'Unknown metric: {metric}')
    score_fn = THRESHOLD_METRICS[metric]

    print(f'\n{"="*70}')
    print(f'FINDING OPTIMAL THRESHOLD (maximizing {metric})')
    print(f'{"="*70}')

    y_proba = np.asarray(y_proba)
    thresholds = np.round(np.arange(0.05, 0.95, 0.05), 2)
    best_threshold = 0.5
    best_score = -1.0

    for threshold in thresholds:
        score = score_fn(y_true, (y_proba >= threshold).astype(int))
        if score > best_score:
            best_score = score
            best_threshold = float(threshold)

    default_score = score_fn(y_true, (y_proba >= 0.5).astype(int))

    print(f'  Optimal threshold: {best_threshold:.2f}')
    print(f'  {metric.capitalize()}: {best_score:.4f}')
    print(f'  Default (0.5) {metric}: {default_score:.4f}')

    return best_threshold, best_score
