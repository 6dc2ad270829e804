"""
Data Engineering Module for Planning Application Rejection Prediction

This module contains the data engineering code organized by pipeline stage:
1. datasets/ - Labelled application dataset creation and splitting
2. utils/ - Schema validation and data quality checks

Usage:
    from data_engineering.datasets.build_application_dataset import load_applications
    from data_engineering.utils.validation import validate_application_dataset
"""

__version__ = "1.0.0"
