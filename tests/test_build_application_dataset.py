"""Tests for the application dataset builder and validation."""

import pandas as pd
import pytest

from data_engineering.datasets.build_application_dataset import (
    add_rejection_label,
    create_train_val_test_split,
    derive_rejection_label,
    engineer_features,
    load_applications
)
from data_engineering.utils.validation import validate_application_dataset


class TestDeriveRejectionLabel:
    @pytest.mark.parametrize('decision', ['Application Refused', 'REFUSE PERMISSION', 'Rejected'])
    def test_refused(self, decision):
        assert derive_rejection_label(decision) == 1

    @pytest.mark.parametrize('decision', ['Grant Permission', 'Approved with conditions', 'Consent'])
    def test_approved(self, decision):
        assert derive_rejection_label(decision) == 0

    @pytest.mark.parametrize('decision', ['Withdrawn', 'Pending consideration', 'Prior approval not required',
                                          '', None, float('nan'), 'Something else'])
    def test_indeterminate(self, decision):
        assert derive_rejection_label(decision) is None


@pytest.fixture
def raw_export(tmp_path):
    rows = []
    for i in range(120):
        rows.append({
            'reference': f'21/{i:05d}',
            'proposal': 'Demolition and erection of flats' if i % 4 == 0 else 'Rear extension',
            'decision': 'Refused' if i % 4 == 0 else 'Granted',
            'decision_date': '01/02/2021',
            'application_type': 'Full' if i % 2 else None,
            'ward': 'Central',
            'received_date': f'{(i % 28) + 1:02d}/0{(i % 9) + 1}/2020',
        })
    rows.append({'reference': 'W1', 'proposal': 'Porch', 'decision': 'Withdrawn',
                 'decision_date': None, 'application_type': 'Householder',
                 'ward': 'North', 'received_date': '01/01/2020'})
    path = tmp_path / 'export.csv'
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


class TestBuildDataset:
    def test_load_renames_and_fills(self, raw_export):
        df = load_applications(raw_export)
        assert {'id', 'description', 'decision'} <= set(df.columns)
        assert (df['application_type'] != '').all()
        assert 'unknown' in set(df['application_type'])

    def test_load_requires_core_columns(self, tmp_path):
        path = tmp_path / 'bad.csv'
        pd.DataFrame({'reference': ['1']}).to_csv(path, index=False)
        with pytest.raises(ValueError, match='Required columns'):
            load_applications(path)

    def test_label_drops_withdrawn_and_leaky_columns(self, raw_export):
        labelled = add_rejection_label(load_applications(raw_export))
        assert 'W1' not in set(labelled['id'])
        assert 'decision' not in labelled.columns
        assert 'decision_date' not in labelled.columns
        assert labelled['rejected'].sum() == 30

    def test_features_and_split(self, raw_export):
        df = engineer_features(add_rejection_label(load_applications(raw_export)))
        assert df.loc[df['description'] == 'Rear extension', 'description_token_count'].iloc[0] == 2
        assert df['received_month'].between(1, 12).all()

        train, val, test = create_train_val_test_split(df)
        assert len(train) + len(val) + len(test) == len(df)
        assert set(train['id']).isdisjoint(test['id'])
        for split in (train, val, test):
            assert split['rejected'].mean() == pytest.approx(0.25, abs=0.05)
            assert validate_application_dataset(split, 'split')

    def test_validation_rejects_leakage(self, raw_export):
        df = load_applications(raw_export)
        with pytest.raises(ValueError, match='LEAKAGE'):
            validate_application_dataset(df)


def test_ensure_directories_creates_layout(tmp_path, monkeypatch):
    from config import paths

    monkeypatch.setattr(paths, 'BRONZE', tmp_path / 'bronze')
    monkeypatch.setattr(paths, 'BRONZE_APPLICATIONS', tmp_path / 'bronze' / 'applications')
    monkeypatch.setattr(paths, 'GOLD', tmp_path / 'gold')
    monkeypatch.setattr(paths, 'GOLD_ML_DATASETS', tmp_path / 'gold' / 'ml_datasets')
    monkeypatch.setattr(paths, 'APPLICATION_LEVEL_ML', tmp_path / 'gold' / 'ml_datasets' / 'application_level')
    monkeypatch.setattr(paths, 'OUTPUTS_ROOT', tmp_path / 'outputs')
    monkeypatch.setattr(paths, 'MODELS', tmp_path / 'outputs' / 'models')
    monkeypatch.setattr(paths, 'MODEL_ARTIFACTS', tmp_path / 'outputs' / 'models' / 'artifacts')

    paths.ensure_directories()
    paths.ensure_directories()

    assert (tmp_path / 'bronze' / 'applications').is_dir()
    assert (tmp_path / 'gold' / 'ml_datasets' / 'application_level').is_dir()
    assert (tmp_path / 'outputs' / 'models' / 'artifacts').is_dir()
