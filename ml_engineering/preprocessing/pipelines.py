#!/usr/bin/env python3
"""
ML Pipelines for Rejection Prediction

Provides reproducible sklearn Pipelines that combine preprocessing, word
indicators and a classifier. The FeatureSet is passed in explicitly, so the
saved pipeline encodes inference records with the training vocabulary.

Usage:
    from ml_engineering.preprocessing.pipelines import create_application_classifier_pipeline

    pipeline = create_application_classifier_pipeline(
        numeric_features=['description_token_count'],
        categorical_features=['application_type'],
        feature_set=feature_set
    )
    pipeline.set_params(classifier=MLPClassifier())
    pipeline.fit(X_train, y_train)
"""

from sklearn.pipeline import Pipeline
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import StandardScaler, OneHotEncoder
from sklearn.impute import SimpleImputer

from ml_engineering.text.encoding import WordPresenceTransformer
from .feature_lists import APPLICATION_TEXT_FEATURE


def create_application_preprocessor(numeric_features, categorical_features, feature_set=None,
                                    text_feature=APPLICATION_TEXT_FEATURE):
    """
    Create the ColumnTransformer shared by every classifier

    Args:
        numeric_features: List of numeric column names
        categorical_features: List of categorical column names
        feature_set: Frozen FeatureSet (None or empty = no word indicators)
        text_feature: Raw description column

    Returns:
        Unfitted ColumnTransformer
    """
    # Numeric transformer: median imputation + standard scaling
    numeric_transformer = Pipeline([
        ('imputer', SimpleImputer(strategy='median')),
        ('scaler', StandardScaler())
    ])

    # Categorical transformer: constant imputation + one-hot encoding
    categorical_transformer = Pipeline([
        ('imputer', SimpleImputer(strategy='constant', fill_value='unknown')),
        ('onehot', OneHotEncoder(handle_unknown='ignore', sparse_output=False))
    ])

    transformers = []
    if numeric_features:
        transformers.append(('num', numeric_transformer, list(numeric_features)))
    if categorical_features:
        transformers.append(('cat', categorical_transformer, list(categorical_features)))
    if feature_set is not None and len(feature_set) > 0:
        # A scalar column name hands the transformer a 1-D description column
        transformers.append(('words', WordPresenceTransformer(feature_set), text_feature))

    if not transformers:
        raise ValueError('Pipeline needs at least one numeric, categorical or word feature')

    return ColumnTransformer(transformers=transformers, remainder='drop')


def create_application_classifier_pipeline(numeric_features, categorical_features,
                                           feature_set=None, model=None):
    """
    Create full preprocessing + classification pipeline

    Args:
        numeric_features: List of numeric column names
        categorical_features: List of categorical column names
        feature_set: Frozen FeatureSet used for the description column
        model: sklearn classifier (default: None, must be set later with set_params)

    Returns:
        sklearn Pipeline with 'preprocessor' and 'classifier' steps
    """
    preprocessor = create_application_preprocessor(
        numeric_features, categorical_features, feature_set
    )

    return Pipeline([
        ('preprocessor', preprocessor),
        ('classifier', model)  # Can be None initially, set with set_params()
    ])


def get_feature_names(pipeline):
    """
    Extract feature names from a fitted pipeline

    Returns:
        List of feature names after transformation
    """
    preprocessor = pipeline.named_steps['preprocessor']

    feature_names = []
    for name, transformer, columns in preprocessor.transformers_:
        if name == 'remainder':
            continue
        elif name == 'num':
            feature_names.extend(columns)
        elif name == 'cat':
            onehot = transformer.named_steps['onehot']
            feature_names.extend(onehot.get_feature_names_out(columns))
        elif name == 'words':
            feature_names.extend(transformer.get_feature_names_out())

    return [str(name) for name in feature_names]
