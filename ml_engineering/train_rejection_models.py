#!/usr/bin/env python3
"""
Rejection Model Training Script with MLflow Tracking

Full training run for planning application rejection prediction:
- Data loading and leakage checks
- Word feature selection (Fisher's exact test) on the training split only
- Pipeline preprocessing (numeric, one-hot, word indicators)
- Model training (MLP neural network, XGBoost)
- Threshold selection on validation, evaluation on test
- Model persistence with the frozen FeatureSet
- MLflow tracking

Usage:
    python -m ml_engineering.train_rejection_models
    python -m ml_engineering.train_rejection_models --model xgboost --min-total-freq 50
    python -m ml_engineering.train_rejection_models --words demolition dwelling flats
"""

import argparse
import sys
from pathlib import Path

import mlflow
import pandas as pd

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))
from config.paths import APPLICATION_LEVEL_ML, MODEL_ARTIFACTS, ensure_directories

from ml_engineering.preprocessing import (
    create_application_classifier_pipeline,
    get_feature_names,
    APPLICATION_NUMERIC_FEATURES,
    APPLICATION_CATEGORICAL_FEATURES,
    APPLICATION_TEXT_FEATURE,
    APPLICATION_TARGET,
    WORD_P_VALUE_MAX,
    WORD_MIN_TOTAL_FREQ,
    WORD_STOP_WORD_LOCALE,
    validate_features,
    check_for_leakage
)
from ml_engineering.text import (
    FeatureSet,
    WordFeatureConfig,
    build_feature_set
)
from ml_engineering.models import (
    train_mlp_classifier,
    train_xgboost_classifier
)
from ml_engineering.evaluation import (
    evaluate_classifier,
    find_optimal_threshold
)
from ml_engineering.utils import (
    save_model_artifact,
    start_experiment,
    log_model_run,
    log_word_statistics
)

EXPERIMENT_NAME = 'planning_rejection_prediction'


def load_and_validate_data(data_dir=APPLICATION_LEVEL_ML):
    """Load train/val/test splits and check them for leakage"""
    print(f'\n{"#"*70}')
    print(f'# LOADING AND VALIDATING DATA')
    print(f'{"#"*70}\n')

    data_dir = Path(data_dir)

    print('Loading datasets...')
    splits = {}
    for name in ('train', 'val', 'test'):
        df = pd.read_csv(data_dir / f'{name}_latest.csv', low_memory=False)
        df[APPLICATION_TEXT_FEATURE] = df[APPLICATION_TEXT_FEATURE].fillna('').astype(str)
        splits[name] = df
        print(f'  {name.capitalize() + ":":6s} {len(df):,} samples')

    print('\nChecking for data leakage...')
    for df in splits.values():
        check_for_leakage(df)

    return splits['train'], splits['val'], splits['test']


def prepare_features(train, val, test):
    """Split features and target; keep only the features present in train"""
    print('\nValidating features...')
    numeric_features, _ = validate_features(train, APPLICATION_NUMERIC_FEATURES, 'numeric')
    categorical_features, _ = validate_features(train, APPLICATION_CATEGORICAL_FEATURES, 'categorical')

    for col in categorical_features:
        for df in (train, val, test):
            df[col] = df[col].fillna('missing').astype(str)

    feature_cols = numeric_features + categorical_features + [APPLICATION_TEXT_FEATURE]

    X_train, y_train = train[feature_cols].copy(), train[APPLICATION_TARGET].astype(int)
    X_val, y_val = val[feature_cols].copy(), val[APPLICATION_TARGET].astype(int)
    X_test, y_test = test[feature_cols].copy(), test[APPLICATION_TARGET].astype(int)

    print(f'\n✓ Data prepared')
    print(f'  Features: {len(numeric_features)} numeric + {len(categorical_features)} categorical + description')
    print(f'  Target class distribution:')
    print(f'    Train: {y_train.mean()*100:.1f}% refused')
    print(f'    Val:   {y_val.mean()*100:.1f}% refused')
    print(f'    Test:  {y_test.mean()*100:.1f}% refused')

    return (X_train, y_train, X_val, y_val, X_test, y_test,
            numeric_features, categorical_features)


def select_word_features(X_train, y_train, config: WordFeatureConfig, manual_words=None):
    """Build the FeatureSet from the training split only"""
    print(f'\n{"#"*70}')
    print(f'# SELECTING WORD FEATURES')
    print(f'{"#"*70}\n')

    feature_set, word_stats = build_feature_set(
        X_train[APPLICATION_TEXT_FEATURE], y_train, config
    )

    if manual_words:
        print(f'  Using hand-picked words instead of the ranked selection')
        feature_set = FeatureSet.from_words(manual_words, word_stats)

    print(f'  Vocabulary: {len(word_stats):,} words')
    print(f'  Thresholds: p < {config.p_value_max}, total_freq > {config.min_total_freq}')
    print(f'  Selected:   {len(feature_set)} words\n')
    for entry in feature_set:
        print(f'    {entry.word:20s} index={entry.rejection_index:+.3f}  '
              f'p={entry.p_value:.2e}  n={entry.total_freq:,}')

    return feature_set, word_stats


def fit_and_evaluate(name, train_fn, train_kwargs, data, numeric_features,
                     categorical_features, feature_set, word_stats, config,
                     output_dir=MODEL_ARTIFACTS, use_mlflow=True):
    """Preprocess, train one model, tune its threshold, evaluate and save it"""
    X_train, y_train, X_val, y_val, X_test, y_test = data

    print(f'\n{"#"*70}')
    print(f'# TRAINING {name.upper()}')
    print(f'{"#"*70}\n')

    pipeline = create_application_classifier_pipeline(
        numeric_features=numeric_features,
        categorical_features=categorical_features,
        feature_set=feature_set
    )

    print('Preprocessing data...')
    pipeline.set_params(classifier='passthrough')
    X_train_processed = pipeline.fit_transform(X_train, y_train)
    X_val_processed = pipeline.transform(X_val)
    print(f'  ✓ {X_train_processed.shape[1]} model inputs '
          f'({len(feature_set)} word indicators)')

    model, train_metrics = train_fn(
        X_train_processed, y_train,
        X_val_processed, y_val,
        **train_kwargs
    )
    pipeline.set_params(classifier=model)

    val_proba = pipeline.predict_proba(X_val)[:, 1]
    threshold, _ = find_optimal_threshold(y_val, val_proba, metric='f1')

    test_metrics = evaluate_classifier(pipeline, X_test, y_test, name=f'{name} Test Set',
                                       threshold=threshold)

    artifact_path = save_model_artifact(
        pipeline=pipeline,
        feature_set=feature_set,
        feature_cols=list(X_train.columns),
        metrics=test_metrics,
        model_name=f'{name}_rejection',
        word_stats=word_stats,
        output_dir=str(output_dir),
        log_to_mlflow=False
    )

    if use_mlflow:
        log_model_run(
            experiment_name=EXPERIMENT_NAME,
            run_name=f'{name}_word_features',
            params={
                'model': name,
                **{k: str(v) for k, v in train_kwargs.items()},
                'p_value_max': config.p_value_max,
                'min_total_freq': config.min_total_freq,
                'n_word_features': len(feature_set),
                'word_features': ','.join(feature_set.words)[:500],
                'n_model_inputs': len(get_feature_names(pipeline)),
            },
            metrics={**{f'test_{k}': v for k, v in test_metrics.items()},
                     **{k: v for k, v in train_metrics.items() if k.startswith('val_')}},
            model=pipeline,
            artifacts={'model_artifact': str(artifact_path / 'metadata.json')},
            tags={'type': name, 'target': APPLICATION_TARGET}
        )

    print(f'\n{"="*70}')
    print(f'✓ {name.upper()} COMPLETE')
    print(f'{"="*70}')

    return pipeline, test_metrics


def main():
    parser = argparse.ArgumentParser(description='Train planning rejection models with MLflow')
    parser.add_argument('--data-dir', type=Path, default=APPLICATION_LEVEL_ML,
                        help='Directory with train/val/test_latest.csv')
    parser.add_argument('--output-dir', type=Path, default=MODEL_ARTIFACTS,
                        help='Directory for saved model artifacts')
    parser.add_argument('--model', choices=['mlp', 'xgboost', 'all'], default='all',
                        help='Which models to train')
    parser.add_argument('--p-value-max', type=float, default=WORD_P_VALUE_MAX,
                        help='Keep words with Fisher p-value below this')
    parser.add_argument('--min-total-freq', type=int, default=WORD_MIN_TOTAL_FREQ,
                        help='Keep words found in more than this many applications')
    parser.add_argument('--candidate-words', nargs='+', default=None,
                        help='Restrict the vocabulary to these words')
    parser.add_argument('--words', nargs='+', default=None,
                        help='Use these words as features instead of the ranked selection')
    parser.add_argument('--n-jobs', type=int, default=1,
                        help='Parallel workers for word significance tests')
    parser.add_argument('--no-mlflow', action='store_true',
                        help='Skip MLflow logging')

    args = parser.parse_args()
    ensure_directories()

    config = WordFeatureConfig(
        stop_word_locale=WORD_STOP_WORD_LOCALE,
        p_value_max=args.p_value_max,
        min_total_freq=args.min_total_freq,
        candidate_words=tuple(args.candidate_words) if args.candidate_words else None,
        n_jobs=args.n_jobs
    )

    train, val, test = load_and_validate_data(args.data_dir)
    (X_train, y_train, X_val, y_val, X_test, y_test,
     numeric_features, categorical_features) = prepare_features(train, val, test)

    feature_set, word_stats = select_word_features(X_train, y_train, config, args.words)

    use_mlflow = not args.no_mlflow
    if use_mlflow:
        start_experiment(EXPERIMENT_NAME)
        with mlflow.start_run(run_name='word_statistics'):
            mlflow.log_params({'p_value_max': config.p_value_max,
                               'min_total_freq': config.min_total_freq,
                               'n_word_features': len(feature_set)})
            mlflow.log_metric('vocabulary_size', len(word_stats))
            log_word_statistics(word_stats)

    data = (X_train, y_train, X_val, y_val, X_test, y_test)
    models = {
        'mlp': (train_mlp_classifier, {'hidden_layer_sizes': (64, 32), 'alpha': 1e-4}),
        'xgboost': (train_xgboost_classifier, {'n_estimators': 500, 'max_depth': 6,
                                               'learning_rate': 0.05, 'verbose': False}),
    }
    selected = list(models) if args.model == 'all' else [args.model]

    results = {}
    for name in selected:
        train_fn, train_kwargs = models[name]
        _, results[name] = fit_and_evaluate(
            name, train_fn, train_kwargs, data,
            numeric_features, categorical_features,
            feature_set, word_stats, config,
            output_dir=args.output_dir, use_mlflow=use_mlflow
        )

    print(f'\n{"#"*70}')
    print('# TRAINING COMPLETE!')
    print(f'{"#"*70}\n')
    for name, metrics in results.items():
        print(f'  {name:8s} AUC={metrics["auc"]:.4f}  AP={metrics["average_precision"]:.4f}  '
              f'F1={metrics["f1"]:.4f}  (threshold {metrics["threshold"]:.2f})')
    if use_mlflow:
        print('\nView results in MLflow:')
        print('  mlflow ui')
        print('  Open http://localhost:5000 in your browser')
    print(f'\nSaved model artifacts in: {args.output_dir}/')


if __name__ == '__main__':
    main()
