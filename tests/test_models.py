"""Smoke tests for pipelines, model trainers, evaluation and persistence."""

import numpy as np
import pytest
from sklearn.neural_network import MLPClassifier

from ml_engineering.evaluation import evaluate_classifier, find_optimal_threshold
from ml_engineering.models import train_mlp_classifier, train_xgboost_classifier
from ml_engineering.preprocessing import (
    create_application_classifier_pipeline,
    get_feature_names
)
from ml_engineering.text import WordFeatureConfig, build_feature_set
from ml_engineering.utils.persistence import (
    find_latest_artifact,
    load_model_artifact,
    save_model_artifact
)

FEATURES = ['description_token_count', 'application_type', 'description']


@pytest.fixture
def prepared(application_corpus):
    df = application_corpus.sample(frac=1, random_state=0).reset_index(drop=True)
    train, val = df.iloc[:220], df.iloc[220:]
    feature_set, word_stats = build_feature_set(
        train['description'], train['rejected'], WordFeatureConfig(min_total_freq=30)
    )
    return train, val, feature_set, word_stats


def make_pipeline(feature_set):
    return create_application_classifier_pipeline(
        numeric_features=['description_token_count'],
        categorical_features=['application_type'],
        feature_set=feature_set
    )


class TestPipeline:
    def test_feature_names(self, prepared):
        train, _, feature_set, _ = prepared
        pipeline = make_pipeline(feature_set)
        pipeline.set_params(classifier='passthrough')
        X = pipeline.fit_transform(train[FEATURES], train['rejected'])

        names = get_feature_names(pipeline)
        assert len(names) == X.shape[1]
        assert 'has_demolition' in names
        assert 'description_token_count' in names

    def test_requires_some_features(self):
        with pytest.raises(ValueError):
            create_application_classifier_pipeline([], [], feature_set=None)


class TestTrainers:
    def test_mlp(self, prepared):
        train, val, feature_set, _ = prepared
        pipeline = make_pipeline(feature_set)
        pipeline.set_params(classifier='passthrough')
        X_train = pipeline.fit_transform(train[FEATURES], train['rejected'])
        X_val = pipeline.transform(val[FEATURES])

        model, metrics = train_mlp_classifier(
            X_train, train['rejected'], X_val, val['rejected'],
            hidden_layer_sizes=(8,), max_iter=500,
            learning_rate_init=0.01, early_stopping=False
        )
        assert isinstance(model, MLPClassifier)
        assert metrics['val_accuracy'] > 0.8

    def test_xgboost(self, prepared):
        train, val, feature_set, _ = prepared
        pipeline = make_pipeline(feature_set)
        pipeline.set_params(classifier='passthrough')
        X_train = pipeline.fit_transform(train[FEATURES], train['rejected'])
        X_val = pipeline.transform(val[FEATURES])

        model, metrics = train_xgboost_classifier(
            X_train, train['rejected'], X_val, val['rejected'],
            n_estimators=30, early_stopping_rounds=5, verbose=False
        )
        assert metrics['val_auc'] > 0.8
        assert metrics['best_iteration'] >= 0

        pipeline.set_params(classifier=model)
        scores = evaluate_classifier(pipeline, val[FEATURES], val['rejected'], name='Val')
        assert 0.0 <= scores['brier_score'] <= 1.0
        assert scores['threshold'] == 0.5


class TestEvaluation:
    def test_optimal_threshold(self):
        y_true = np.array([0, 0, 0, 1, 1])
        y_proba = np.array([0.1, 0.2, 0.3, 0.35, 0.4])
        threshold, score = find_optimal_threshold(y_true, y_proba, metric='f1')
        assert score == pytest.approx(1.0)
        assert 0.3 < threshold <= 0.35

    def test_unknown_metric(self):
        with pytest.raises(ValueError):
            find_optimal_threshold([0, 1], [0.2, 0.8], metric='lift')


class TestPersistence:
    def test_round_trip_keeps_feature_set(self, prepared, tmp_path):
        train, val, feature_set, word_stats = prepared
        pipeline = make_pipeline(feature_set)
        pipeline.set_params(classifier=MLPClassifier(hidden_layer_sizes=(4,), max_iter=50, random_state=0))
        pipeline.fit(train[FEATURES], train['rejected'])

        artifact_dir = save_model_artifact(
            pipeline=pipeline,
            feature_set=feature_set,
            feature_cols=FEATURES,
            metrics={'auc': 0.9},
            model_name='mlp_rejection',
            word_stats=word_stats,
            output_dir=str(tmp_path),
            log_to_mlflow=False
        )

        assert (artifact_dir / 'word_stats.csv').exists()
        assert find_latest_artifact('mlp_rejection', str(tmp_path)) == artifact_dir

        loaded, metadata, loaded_feature_set = load_model_artifact(artifact_dir)
        assert loaded_feature_set == feature_set
        assert metadata['model_type'] == 'MLPClassifier'
        np.testing.assert_allclose(
            loaded.predict_proba(val[FEATURES]),
            pipeline.predict_proba(val[FEATURES])
        )

    def test_missing_artifact(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_model_artifact(tmp_path / 'nope')
