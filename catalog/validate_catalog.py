"""
catalog/validate_catalog.py
---------------------------
Ensures the product dataset is well-formed and schema-consistent.
"""

import argparse
from pathlib import Path

from agent_core.config import get_config
from catalog.dataset import REQUIRED_COLUMNS
from catalog.loader import load_dataset

def validate_catalog(path: Path | None = None):
    path = path or get_config().dataset_path
    dataset = load_dataset(path)  # raises DatasetError on header problems

    width = len(dataset.header)
    for idx, row in enumerate(dataset.rows):
        if len(row) != width:
            raise ValueError(f"Row {idx} has {len(row)} fields, header has {width}")

    categories = dataset.categories()
    print(f"✅ Dataset validated successfully: {len(dataset)} rows, {len(categories)} categories")
    print(f"   Required columns present: {', '.join(REQUIRED_COLUMNS)}")
    return dataset

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Validate the product dataset")
    parser.add_argument("path", nargs="?", type=Path, help="Dataset file (.tsv or .gz)")
    args = parser.parse_args()
    validate_catalog(args.path)
