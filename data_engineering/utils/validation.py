#!/usr/bin/env python3
"""
Data Quality and Schema Validation

Uses pandera to validate the application dataset for:
- Schema compliance (binary target, unique ids, text description)
- Data leakage detection (forbidden columns)
- Data quality checks (missing values, duplicates, class balance)

Usage:
    from data_engineering.utils.validation import validate_application_dataset

    # Validate before saving
    validate_application_dataset(train_df, 'train')
    validate_application_dataset(val_df, 'val')
    validate_application_dataset(test_df, 'test')
"""

import pandera as pa
from pandera import Column, Check
import pandas as pd


# Forbidden columns that indicate data leakage
APPLICATION_FORBIDDEN_COLS = [
    'decision',       # Outcome text the target is derived from
    'decision_date',  # Only known once decided
]

application_schema = pa.DataFrameSchema(
    {
        # Target
        'rejected': Column(
            int,
            Check.isin([0, 1]),
            nullable=False,
            description='Binary target: 1 if the application was refused'
        ),

        'id': Column(str, nullable=False, unique=True),
        'description': Column(str, nullable=False),

        # Optional attributes (depend on the source export)
        'application_type': Column(str, nullable=False, required=False),
        'ward': Column(str, nullable=False, required=False),
        'description_token_count': Column(
            int, Check.greater_than_or_equal_to(0), nullable=False, required=False
        ),
        'received_month': Column(float, Check.in_range(1, 12), nullable=True, required=False),
    },
    strict=False,  # Allow extra columns not defined here
    coerce=True,   # Coerce types when possible
    description='Planning application ML dataset schema'
)


def validate_application_dataset(df: pd.DataFrame, split_name: str = 'dataset') -> bool:
    """
    Validate application-level dataset

    Args:
        df: DataFrame to validate
        split_name: Name of split (train/val/test) for logging

    Returns:
        True if validation passes

    Raises:
        ValueError: If data leakage detected
        pandera.errors.SchemaErrors: If schema validation fails
    """
    print(f'\n{"="*70}')
    print(f'Validating {split_name} dataset (application-level)')
    print(f'{"="*70}')

    leakage = set(APPLICATION_FORBIDDEN_COLS) & set(df.columns)
    if leakage:
        raise ValueError(
            f'❌ DATA LEAKAGE DETECTED in {split_name}: {leakage}\n'
            f'   These columns must be removed before training.'
        )
    print(f'  ✓ No data leakage detected')

    try:
        application_schema.validate(df, lazy=True)
        print(f'  ✓ Schema validation passed')
    except pa.errors.SchemaErrors as err:
        print(f'  ❌ Schema validation failed for {split_name}:')
        print(err.failure_cases)
        raise

    check_data_quality(df, split_name)

    print(f'  ✓ All validations passed for {split_name}\n')
    return True


def check_data_quality(df: pd.DataFrame, split_name: str):
    """
    Perform data quality checks beyond schema validation

    Checks:
    - Missing value percentages
    - Duplicate ids
    - Empty descriptions
    - Target distribution
    """
    missing_pct = (df.isnull().sum() / max(len(df), 1) * 100).sort_values(ascending=False)
    high_missing = missing_pct[missing_pct > 50]
    if len(high_missing) > 0:
        print(f'  ⚠️  High missing values (>50%):')
        for col, pct in high_missing.items():
            print(f'     - {col}: {pct:.1f}%')

    if 'id' in df.columns:
        dup_count = df['id'].duplicated().sum()
        if dup_count > 0:
            print(f'  ⚠️  WARNING: {dup_count} duplicate ids found')

    if 'description' in df.columns:
        empty = (df['description'].fillna('').str.strip() == '').sum()
        if empty > 0:
            print(f'  ⚠️  {empty:,} applications have an empty description')

    if 'rejected' in df.columns:
        target_dist = df['rejected'].value_counts(normalize=True) * 100
        print(f'  Target distribution:')
        print(f'    - Approved (0): {target_dist.get(0, 0):.1f}%')
        print(f'    - Refused (1):  {target_dist.get(1, 0):.1f}%')
        if target_dist.get(1, 0) < 5 or target_dist.get(1, 0) > 95:
            print(f'  ⚠️  Severe class imbalance detected!')
