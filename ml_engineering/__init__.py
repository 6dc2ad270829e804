"""
ML Engineering Module

Machine learning model development and evaluation for planning application
rejection prediction.

Modules:
- text: Description normalization, word significance tests, word feature selection
- preprocessing: sklearn Pipelines and feature schema definitions
- models: Model implementations (MLP neural network, XGBoost)
- evaluation: Imbalance-aware metrics and threshold selection
- utils: Model persistence and MLflow tracking
"""

__version__ = "1.0.0"
