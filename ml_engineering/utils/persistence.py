#!/usr/bin/env python3
"""
Model Persistence and Artifact Management

Saves trained pipelines together with the FeatureSet they were trained with,
so inference always encodes descriptions with the training vocabulary.

Usage:
    from ml_engineering.utils.persistence import save_model_artifact, load_model_artifact

    # After training
    artifact_path = save_model_artifact(
        pipeline=trained_pipeline,
        feature_set=feature_set,
        feature_cols=['application_type', 'ward', 'description'],
        metrics={'auc': 0.81, 'f1': 0.42},
        model_name='xgboost_rejection'
    )

    # For inference
    pipeline, metadata, feature_set = load_model_artifact(artifact_path)
    predictions = pipeline.predict(X_new)
"""

import joblib
import json
import mlflow
import mlflow.sklearn
import sklearn
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional, Tuple, List

import pandas as pd

from ml_engineering.text.selection import FeatureSet


def save_model_artifact(
    pipeline,
    feature_set: FeatureSet,
    feature_cols: List[str],
    metrics: Dict[str, float],
    model_name: str,
    word_stats: Optional[pd.DataFrame] = None,
    run_id: Optional[str] = None,
    output_dir: str = 'models/artifacts',
    log_to_mlflow: bool = True
) -> Path:
    """
    Save model pipeline, FeatureSet and metadata together

    Args:
        pipeline: Fitted sklearn Pipeline
        feature_set: FeatureSet frozen for this training run
        feature_cols: Input column names the pipeline expects
        metrics: Dict of metric names and values (e.g., {'auc': 0.81})
        model_name: Human-readable model name (e.g., 'mlp_rejection')
        word_stats: Full word statistics table (saved as CSV if given)
        run_id: MLflow run ID (if using MLflow tracking)
        output_dir: Directory to save artifacts
        log_to_mlflow: Whether to log artifact to MLflow

    Returns:
        Path to saved model artifact directory
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    artifact_dir = output_dir / f'{model_name}_{timestamp}'
    artifact_dir.mkdir(parents=True, exist_ok=True)

    # Save pipeline (includes preprocessor, word encoder and model)
    pipeline_path = artifact_dir / 'pipeline.pkl'
    joblib.dump(pipeline, pipeline_path)

    model_obj = pipeline
    if hasattr(pipeline, 'named_steps') and 'classifier' in pipeline.named_steps:
        model_obj = pipeline.named_steps['classifier']
    model_type = type(model_obj).__name__

    metadata = {
        'timestamp': timestamp,
        'model_name': model_name,
        'model_type': model_type,
        'feature_cols': list(feature_cols),
        'n_word_features': len(feature_set),
        'feature_set': feature_set.to_dict(),
        'metrics': {k: float(v) for k, v in metrics.items()},
        'run_id': run_id,
        'sklearn_version': sklearn.__version__,
    }

    metadata_path = artifact_dir / 'metadata.json'
    with open(metadata_path, 'w') as f:
        json.dump(metadata, f, indent=2)

    if word_stats is not None:
        word_stats.to_csv(artifact_dir / 'word_stats.csv')

    readme_path = artifact_dir / 'README.md'
    with open(readme_path, 'w') as f:
        f.write(f"# {model_name}\n\n")
        f.write(f"**Created**: {timestamp}\n\n")
        f.write(f"**Model**: {model_type}\n\n")
        f.write(f"**Word features**: {', '.join(feature_set.words) or 'none'}\n\n")
        f.write("## Metrics\n\n")
        for metric_name, metric_value in metrics.items():
            f.write(f"- {metric_name}: {metric_value:.4f}\n")
        f.write("\n## Usage\n\n")
        f.write("```python\n")
        f.write("from ml_engineering.utils.persistence import load_model_artifact\n\n")
        f.write(f"pipeline, metadata, feature_set = load_model_artifact('{artifact_dir}')\n")
        f.write("predictions = pipeline.predict(X_new)\n")
        f.write("```\n")

    print(f'\n✓ Saved model artifact to {artifact_dir}/')
    print(f'  - pipeline.pkl ({pipeline_path.stat().st_size / 1024:.1f} KB)')
    print(f'  - metadata.json ({len(feature_set)} word features)')
    if word_stats is not None:
        print(f'  - word_stats.csv ({len(word_stats):,} words)')
    print(f'  - README.md')

    if log_to_mlflow and mlflow.active_run():
        mlflow.log_artifact(str(metadata_path))
        print(f'  ✓ Logged to MLflow run: {mlflow.active_run().info.run_id}')

    return artifact_dir


def load_model_artifact(artifact_path: Path) -> Tuple[Any, Dict, FeatureSet]:
    """
    Load a saved model artifact

    Args:
        artifact_path: Path to artifact directory

    Returns:
        Tuple of (pipeline, metadata_dict, feature_set)
    """
    artifact_path = Path(artifact_path)

    if not artifact_path.exists():
        raise FileNotFoundError(f"Artifact not found: {artifact_path}")

    pipeline_path = artifact_path / 'pipeline.pkl'
    if not pipeline_path.exists():
        raise FileNotFoundError(f"Pipeline not found: {pipeline_path}")

    pipeline = joblib.load(pipeline_path)

    metadata_path = artifact_path / 'metadata.json'
    if metadata_path.exists():
        with open(metadata_path, 'r') as f:
            metadata = json.load(f)
    else:
        metadata = {}

    feature_set = FeatureSet.from_dict(metadata.get('feature_set', {}))

    print(f'✓ Loaded model artifact from {artifact_path}')
    if metadata:
        print(f'  Model: {metadata.get("model_type", "unknown")}')
        print(f'  Word features: {len(feature_set)}')
        print(f'  Created: {metadata.get("timestamp", "unknown")}')

    return pipeline, metadata, feature_set


def find_latest_artifact(model_name: str, artifacts_dir: str = 'models/artifacts') -> Optional[Path]:
    """
    Find the most recent artifact for a given model name

    Returns:
        Path to latest artifact, or None if not found
    """
    artifacts_dir = Path(artifacts_dir)

    if not artifacts_dir.exists():
        return None

    matching = sorted(artifacts_dir.glob(f'{model_name}_*'), reverse=True)

    return matching[0] if matching else None
