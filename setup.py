#!/usr/bin/env python3
"""
Setup script for Planning Application Rejection Prediction project

Install in development mode:
    pip install -e .

This allows importing from anywhere:
    from config.paths import APPLICATION_LEVEL_ML
    from ml_engineering.text import build_feature_set
"""

from setuptools import setup, find_packages
from pathlib import Path

ROOT = Path(__file__).parent


def read_requirements(filename, seen):
    """Requirement lines from a file, skipping comments and duplicate packages"""
    requirements = []
    path = ROOT / filename
    if not path.exists():
        return requirements

    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#'):
                # Extract package name (before ==, >=, etc.)
                pkg_name = line.split('==')[0].split('>=')[0].split('<=')[0].split('<')[0].split('>')[0].strip()
                if pkg_name not in seen:
                    requirements.append(line)
                    seen.add(pkg_name)
    return requirements


seen = set()
requirements = read_requirements('requirements.txt', seen)
requirements += read_requirements('requirements_ml.txt', seen)

# Read README for long description
with open(ROOT / 'README.md', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="planning-rejection-prediction",
    version="1.0.0",
    description="Predicting planning application refusals with significance-tested word features",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.10',
    install_requires=requirements,
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'planning-build-dataset=data_engineering.datasets.build_application_dataset:main',
            'planning-train=ml_engineering.train_rejection_models:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Artificial Intelligence',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
