"""Shared fixtures for the test suite."""

import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def small_corpus():
    """Two approved and two refused applications"""
    return pd.DataFrame({
        'id': ['A1', 'A2', 'R1', 'R2'],
        'description': ['new wall', 'garden wall', 'tree removal', 'tree wall dispute'],
        'rejected': [0, 0, 1, 1],
    })


@pytest.fixture
def application_corpus():
    """300 applications, one third refused, with clearly separated vocabularies"""
    rows = []
    rows += [('single storey rear extension', 'householder', 0)] * 180
    rows += [('demolition of garage', 'householder', 0)] * 20
    rows += [('demolition of building and erection of flats', 'full', 1)] * 80
    rows += [('rear extension', 'householder', 1)] * 20

    df = pd.DataFrame(rows, columns=['description', 'application_type', 'rejected'])
    df['id'] = [f'APP{i:04d}' for i in range(len(df))]
    df['description_token_count'] = df['description'].str.split().map(len)
    return df
