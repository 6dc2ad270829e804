#!/usr/bin/env python3
"""
Build ML Dataset for Planning Application Rejection Prediction

This script creates a training dataset by:
1. Loading the raw planning application export
2. Deriving the binary rejection target (withdrawn/pending dropped)
3. Engineering simple numeric features
4. Validating the schema
5. Creating stratified train/val/test splits

Usage:
    python -m data_engineering.datasets.build_application_dataset
    python -m data_engineering.datasets.build_application_dataset --input data/bronze/applications/export.csv --sample 20000
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
from sklearn.model_selection import train_test_split

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from config.paths import APPLICATION_LEVEL_ML, DEFAULT_APPLICATIONS_FILE, ensure_directories
from data_engineering.utils.validation import validate_application_dataset
from ml_engineering.text.normalize import normalize_descriptions

# Source export column -> dataset column
DEFAULT_COLUMN_MAP = {
    'reference': 'id',
    'proposal': 'description',
    'decision': 'decision',
    'decision_date': 'decision_date',
    'application_type': 'application_type',
    'ward': 'ward',
    'received_date': 'received_date',
}

# Checked in this order: indeterminate first, then refusal, then approval
INDETERMINATE_DECISIONS = ('withdrawn', 'pending', 'appeal', 'invalid', 'not required', 'split')
REFUSED_DECISIONS = ('refus', 'reject', 'declin')
APPROVED_DECISIONS = ('grant', 'approv', 'permit', 'consent', 'no objection')


def derive_rejection_label(decision) -> Optional[int]:
    """
    Map free-text decision to 1 (refused), 0 (approved) or None (indeterminate)

    Examples:
        'Application Refused'         -> 1
        'Grant Permission'            -> 0
        'Withdrawn by applicant'      -> None
    """
    if decision is None or (isinstance(decision, float) and pd.isna(decision)):
        return None

    text = str(decision).strip().lower()
    if not text or any(term in text for term in INDETERMINATE_DECISIONS):
        return None
    if any(term in text for term in REFUSED_DECISIONS):
        return 1
    if any(term in text for term in APPROVED_DECISIONS):
        return 0
    return None


def load_applications(csv_file, column_map: Optional[Dict[str, str]] = None,
                      sample_size: Optional[int] = None) -> pd.DataFrame:
    """Load the raw export and standardize column names"""
    print(f'\n{"="*80}')
    print('STEP 1: LOADING PLANNING APPLICATIONS')
    print(f'{"="*80}')

    column_map = column_map or DEFAULT_COLUMN_MAP

    print(f'\nReading {csv_file}...')
    df = pd.read_csv(csv_file, low_memory=False)
    print(f'  Total applications in file: {len(df):,}')

    df = df.rename(columns={src: dst for src, dst in column_map.items() if src in df.columns})

    missing = [col for col in ('id', 'description', 'decision') if col not in df.columns]
    if missing:
        raise ValueError(
            f'Required columns missing after renaming: {missing}. '
            f'Available: {list(df.columns)}'
        )

    if sample_size and sample_size < len(df):
        df = df.sample(sample_size, random_state=42)
        print(f'  After sampling: {len(df):,}')

    return standardize_columns(df)


def standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Fill text and categorical gaps so schema coercion is lossless"""
    df = df.copy()
    df['id'] = df['id'].astype(str)
    df['description'] = df['description'].fillna('').astype(str)
    for col in ('application_type', 'ward'):
        if col in df.columns:
            df[col] = df[col].fillna('unknown').astype(str).str.strip().str.lower()
    return df


def add_rejection_label(df: pd.DataFrame) -> pd.DataFrame:
    """Add the binary target and drop indeterminate outcomes and leaky columns"""
    print(f'\n{"="*80}')
    print('STEP 2: DERIVING REJECTION TARGET')
    print(f'{"="*80}')

    labels = df['decision'].map(derive_rejection_label)
    determinate = labels.notna()

    print(f'\n  Decided:       {determinate.sum():,}')
    print(f'  Indeterminate: {(~determinate).sum():,} (withdrawn, pending, unrecognised)')

    labelled = df[determinate].copy()
    labelled['rejected'] = labels[determinate].astype(int)
    labelled = labelled.drop(columns=[c for c in ('decision', 'decision_date') if c in labelled.columns])

    print(f'  Refusal rate:  {labelled["rejected"].mean()*100:.1f}%')

    return labelled


def engineer_features(df: pd.DataFrame) -> pd.DataFrame:
    """Description length and received date features"""
    print(f'\n{"="*80}')
    print('STEP 3: ENGINEERING FEATURES')
    print(f'{"="*80}')

    df = df.copy()
    df['description_token_count'] = normalize_descriptions(df['description']).map(len).astype(int)
    print('  ✓ Text: description_token_count')

    if 'received_date' in df.columns:
        received = pd.to_datetime(df['received_date'], errors='coerce', dayfirst=True)
        df['received_year'] = received.dt.year.astype(float)
        df['received_month'] = received.dt.month.astype(float)
        print('  ✓ Temporal: received_year, received_month')

    return df


def create_train_val_test_split(df: pd.DataFrame, val_size: float = 0.15,
                                test_size: float = 0.15, random_state: int = 42):
    """Stratified split that keeps the refusal rate equal across splits"""
    print(f'\n{"="*80}')
    print('STEP 4: CREATING TRAIN/VAL/TEST SPLITS')
    print(f'{"="*80}')

    train_val, test = train_test_split(
        df, test_size=test_size, stratify=df['rejected'], random_state=random_state
    )
    train, val = train_test_split(
        train_val,
        test_size=val_size / (1 - test_size),
        stratify=train_val['rejected'],
        random_state=random_state
    )

    print(f'\nTrain: {len(train):,} samples ({len(train)/len(df)*100:.1f}%)')
    print(f'Val:   {len(val):,} samples ({len(val)/len(df)*100:.1f}%)')
    print(f'Test:  {len(test):,} samples ({len(test)/len(df)*100:.1f}%)')

    print('\nClass distribution (rejected):')
    for name, split in [('Train', train), ('Val', val), ('Test', test)]:
        print(f'  {name + ":":6s} {split["rejected"].sum():,} / {len(split):,} ({split["rejected"].mean()*100:.1f}%)')

    return train.copy(), val.copy(), test.copy()


def save_datasets(train, val, test, output_dir):
    """Save train/val/test datasets"""
    print(f'\n{"="*80}')
    print('STEP 5: SAVING DATASETS')
    print(f'{"="*80}')

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    paths = {}
    for name, split in [('train', train), ('val', val), ('test', test)]:
        path = output_dir / f'{name}_{timestamp}.csv'
        split.to_csv(path, index=False)
        print(f'  ✓ {name.capitalize():5s}: {path} ({path.stat().st_size / 1024 / 1024:.1f} MB)')

        latest_link = output_dir / f'{name}_latest.csv'
        if latest_link.exists() or latest_link.is_symlink():
            latest_link.unlink()
        latest_link.symlink_to(path.name)
        paths[name] = path

    print(f'\n  ✓ Created symlinks: train_latest.csv, val_latest.csv, test_latest.csv')

    return paths['train'], paths['val'], paths['test']


def build_application_dataset(csv_file, output_dir=APPLICATION_LEVEL_ML,
                              sample_size: Optional[int] = None, save: bool = True):
    """Run every step and return (train, val, test)"""
    df = load_applications(csv_file, sample_size=sample_size)
    df = add_rejection_label(df)
    df = engineer_features(df)

    train, val, test = create_train_val_test_split(df)

    for split_name, split in [('train', train), ('val', val), ('test', test)]:
        validate_application_dataset(split, split_name)

    if save:
        save_datasets(train, val, test, output_dir)

    print('\n' + '='*80)
    print('✅ DATASET CREATION COMPLETE!')
    print('='*80)

    return train, val, test


def main():
    parser = argparse.ArgumentParser(
        description='Build the planning application rejection dataset',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--input', type=Path, default=DEFAULT_APPLICATIONS_FILE,
                        help='Raw planning application CSV export')
    parser.add_argument('--output-dir', type=Path, default=APPLICATION_LEVEL_ML,
                        help='Directory for train/val/test CSVs')
    parser.add_argument('--sample', type=int, default=None,
                        help='Randomly sample N applications')

    args = parser.parse_args()
    ensure_directories()

    build_application_dataset(args.input, args.output_dir, sample_size=args.sample)


if __name__ == '__main__':
    main()
