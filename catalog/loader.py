"""
catalog/loader.py
-----------------
Loads the product dataset (tab-separated, optionally gzip-compressed) and
exposes helpers for reading it as text or as a ProductDataset.
"""

import gzip
from pathlib import Path

from catalog.dataset import ProductDataset

def read_dataset_text(path: Path) -> str:
    """Return the decompressed dataset as text."""
    path = Path(path)
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return f.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def load_dataset(path: Path) -> ProductDataset:
    """Return the parsed dataset."""
    return ProductDataset.from_text(read_dataset_text(path))

def list_rows(path: Path, limit: int | None = None):
    """Return all rows as column→value records, optionally limited to N."""
    dataset = load_dataset(path)
    rows = dataset.rows if limit is None else dataset.rows[:limit]
    return [dataset.to_record(row) for row in rows]
