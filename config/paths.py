"""
Project Path Configuration

Centralized path definitions for data, models, and outputs
Using Medallion Architecture: Bronze (raw) → Gold (ML-ready)
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# ==============================================================================
# MEDALLION ARCHITECTURE (Bronze / Gold)
# ==============================================================================

DATA_ROOT = PROJECT_ROOT / "data"

# Bronze Layer: Raw, immutable data (as exported from the planning portal)
BRONZE = DATA_ROOT / "bronze"
BRONZE_APPLICATIONS = BRONZE / "applications"

# Gold Layer: ML-ready datasets with train/val/test splits
GOLD = DATA_ROOT / "gold"
GOLD_ML_DATASETS = GOLD / "ml_datasets"
APPLICATION_LEVEL_ML = GOLD_ML_DATASETS / "application_level"

# ==============================================================================
# DEFAULT FILES
# ==============================================================================

DEFAULT_APPLICATIONS_FILE = BRONZE_APPLICATIONS / "planning_applications.csv"

# ==============================================================================
# OUTPUTS
# ==============================================================================

OUTPUTS_ROOT = PROJECT_ROOT / "outputs"
MODELS = OUTPUTS_ROOT / "models"
MODEL_ARTIFACTS = MODELS / "artifacts"

# ==============================================================================
# DIRECTORY INITIALIZATION
# ==============================================================================

def ensure_directories():
    """Create all necessary directories if they don't exist"""
    all_dirs = [
        BRONZE, BRONZE_APPLICATIONS,
        GOLD, GOLD_ML_DATASETS, APPLICATION_LEVEL_ML,
        OUTPUTS_ROOT, MODELS, MODEL_ARTIFACTS,
    ]
    for directory in all_dirs:
        directory.mkdir(parents=True, exist_ok=True)
