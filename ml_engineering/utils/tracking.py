#!/usr/bin/env python3
"""
MLflow Experiment Tracking Utilities

Provides wrapper functions for logging experiments, parameters, metrics,
and artifacts to MLflow.

Usage:
    from ml_engineering.utils.tracking import start_experiment, log_model_run

    experiment_id = start_experiment('planning_rejection_prediction')

    log_model_run(
        experiment_name='planning_rejection_prediction',
        run_name='mlp_word_features',
        params={'hidden_layer_sizes': '(64, 32)', 'n_word_features': 12},
        metrics={'auc': 0.81, 'f1': 0.42},
        tags={'model_type': 'MLP'}
    )
"""

import math
import tempfile

import mlflow
import mlflow.sklearn
from typing import Dict, Any, Optional
from pathlib import Path


def start_experiment(experiment_name: str, tracking_uri: Optional[str] = None) -> str:
    """
    Initialize or get existing MLflow experiment

    Args:
        experiment_name: Name of the experiment
        tracking_uri: MLflow tracking server URI (default: local ./mlruns)

    Returns:
        Experiment ID
    """
    if tracking_uri:
        mlflow.set_tracking_uri(tracking_uri)
    else:
        mlruns_dir = Path('mlruns').absolute()
        mlruns_dir.mkdir(exist_ok=True)
        mlflow.set_tracking_uri(mlruns_dir.as_uri())

    experiment = mlflow.get_experiment_by_name(experiment_name)
    if experiment is None:
        experiment_id = mlflow.create_experiment(experiment_name)
        print(f'✓ Created new MLflow experiment: {experiment_name} (ID: {experiment_id})')
    else:
        experiment_id = experiment.experiment_id
        print(f'✓ Using existing MLflow experiment: {experiment_name} (ID: {experiment_id})')

    mlflow.set_experiment(experiment_name)

    return experiment_id


def log_model_run(
    experiment_name: str,
    run_name: str,
    params: Dict[str, Any],
    metrics: Dict[str, float],
    model: Optional[Any] = None,
    artifacts: Optional[Dict[str, str]] = None,
    tags: Optional[Dict[str, str]] = None,
    tracking_uri: Optional[str] = None
) -> str:
    """
    Log a complete model training run to MLflow

    Args:
        experiment_name: Name of the experiment
        run_name: Name for this specific run
        params: Model hyperparameters and word feature thresholds
        metrics: Performance metrics (NaN values are skipped)
        model: Trained pipeline to log (optional)
        artifacts: Dict of {artifact_dir: file_path} to log (optional)
        tags: Additional tags
        tracking_uri: MLflow tracking server URI (default: local ./mlruns)

    Returns:
        Run ID
    """
    start_experiment(experiment_name, tracking_uri)

    with mlflow.start_run(run_name=run_name) as run:
        mlflow.log_params(params)

        for metric_name, metric_value in metrics.items():
            if metric_value is None or math.isnan(metric_value):
                continue
            mlflow.log_metric(metric_name, metric_value)

        if tags:
            mlflow.set_tags(tags)

        if model is not None:
            mlflow.sklearn.log_model(model, 'model')

        if artifacts:
            for artifact_dir, artifact_path in artifacts.items():
                mlflow.log_artifact(artifact_path, artifact_dir)

        run_id = run.info.run_id

        print(f'\n✓ Logged run to MLflow:')
        print(f'  Experiment: {experiment_name}')
        print(f'  Run: {run_name}')
        print(f'  Run ID: {run_id}')
        print(f'  Params: {len(params)}')
        print(f'  Metrics: {len(metrics)}')

        return run_id


def log_word_statistics(word_stats, top_n: int = 20):
    """
    Log the word statistics table to the active MLflow run

    Args:
        word_stats: Output of compute_word_statistics
        top_n: Number of most rejection-associated words logged as params
    """
    ranked = word_stats.sort_values('rejection_index', ascending=False)

    for i, (word, row) in enumerate(ranked.head(top_n).iterrows()):
        mlflow.log_param(f'top_word_{i+1}', word)
        mlflow.log_metric(f'rejection_index_{i+1}', float(row['rejection_index']))

    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / 'word_stats.csv'
        ranked.to_csv(path)
        mlflow.log_artifact(str(path), 'word_statistics')

    print(f'  ✓ Logged statistics for {len(word_stats):,} words')
