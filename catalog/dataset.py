"""
catalog/dataset.py
------------------
Tab-separated product table: header → column index map, raw string rows,
and conversion between rows and column→value records.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Sequence

from agent_core.errors import DatasetError

CATEGORY_COLUMN = "main_category"
RATING_COLUMN = "ratings"
REVIEWS_COLUMN = "no_of_ratings"
TEXT_FIELDS = 3
REQUIRED_COLUMNS = (CATEGORY_COLUMN, RATING_COLUMN, REVIEWS_COLUMN)

# only CR, LF and CRLF end a row; other Unicode separators stay inside fields
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class ProductDataset:
    """Immutable once built; shared read-only across requests."""

    def __init__(self, header: Sequence[str], rows: Sequence[Sequence[str]]):
        self.header = tuple(header)
        self.columns: Dict[str, int] = {}
        for i, name in enumerate(self.header):
            if name in self.columns:
                raise DatasetError(f"Duplicate column '{name}' in header")
            self.columns[name] = i
        self.rows = tuple(tuple(row) for row in rows)
        self.validate()

    @classmethod
    def from_text(cls, text: str) -> "ProductDataset":
        lines = _LINE_BREAK.split(text)
        if lines and lines[-1] == "":
            lines.pop()
        if not lines or not lines[0]:
            raise DatasetError("Dataset is empty (missing header)")
        header = lines[0].split("\t")
        rows = [line.split("\t") for line in lines[1:] if line]
        return cls(header, rows)

    def validate(self) -> None:
        missing = [c for c in REQUIRED_COLUMNS if c not in self.columns]
        if missing:
            raise DatasetError(f"Missing required column(s): {', '.join(missing)}")
        if len(self.header) < TEXT_FIELDS:
            raise DatasetError(f"Expected at least {TEXT_FIELDS} text columns, got {len(self.header)}")

    def field(self, row: Sequence[str], column: str) -> str:
        i = self.columns[column]
        return row[i] if i < len(row) else ""

    def category(self, row: Sequence[str]) -> str:
        return self.field(row, CATEGORY_COLUMN)

    def categories(self) -> List[str]:
        return list(dict.fromkeys(self.category(row) for row in self.rows))

    # ── records ──────────────────────────────────────────────
    def to_record(self, row: Sequence[str]) -> Dict[str, str]:
        return {column: value for column, value in zip(self.header, row)}

    def from_record(self, record: Mapping[str, str]) -> List[str]:
        return [record[column] for column in self.header if column in record]

    def record(self, index: int) -> Dict[str, str]:
        return self.to_record(self.rows[index])

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Sequence[str]:
        return self.rows[index]
