"""
tests/test_dataset.py
---------------------
Dataset parsing, header validation, record conversion and file loading.
"""

import pytest

from agent_core.errors import DatasetError
from catalog.dataset import ProductDataset
from catalog.loader import list_rows, load_dataset, read_dataset_text
from catalog.validate_catalog import validate_catalog
from conftest import HEADER, ROWS, dataset_text


def test_from_text_parses_header_and_rows(dataset):
    assert dataset.header == tuple(HEADER)
    assert dataset.columns["main_category"] == 3
    assert len(dataset) == len(ROWS)
    assert dataset[4][0] == "Phone Charger"


def test_categories_in_first_appearance_order(dataset):
    assert dataset.categories() == ["ArtsCrafts", "Electronics", "Toys", "Kitchen"]


def test_record_round_trip(dataset):
    record = dataset.record(6)
    assert record["name"] == "Puzzle Box"
    assert record["main_category"] == "Toys"
    assert dataset.from_record(record) == ROWS[6]


def test_short_row_reads_missing_fields_as_empty():
    ds = ProductDataset(HEADER, [["Lonely", "no category"]])
    assert ds.category(ds[0]) == ""
    assert ds.to_record(ds[0]) == {"name": "Lonely", "description": "no category"}


def test_blank_lines_are_skipped():
    ds = ProductDataset.from_text(dataset_text().replace("\n", "\n\n", 2))
    assert len(ds) == len(ROWS)


def test_duplicate_column_is_rejected():
    with pytest.raises(DatasetError):
        ProductDataset(HEADER + ["ratings"], [])


def test_missing_required_column_is_rejected():
    header = [c for c in HEADER if c != "no_of_ratings"]
    with pytest.raises(DatasetError, match="no_of_ratings"):
        ProductDataset(header, [])


def test_empty_text_is_rejected():
    with pytest.raises(DatasetError):
        ProductDataset.from_text("")


def test_gzip_loading(dataset_gz):
    assert read_dataset_text(dataset_gz) == dataset_text()
    assert load_dataset(dataset_gz).categories()[-1] == "Kitchen"


def test_plain_file_loading_and_limit(tmp_path):
    path = tmp_path / "products.tsv"
    path.write_text(dataset_text(), encoding="utf-8")
    rows = list_rows(path, limit=2)
    assert [r["name"] for r in rows] == ["Acrylic Paint Set", "Canvas Panels"]
    assert len(list_rows(path)) == len(ROWS)


def test_validate_catalog(dataset_gz, capsys):
    validate_catalog(dataset_gz)
    assert "10 rows, 4 categories" in capsys.readouterr().out


def test_validate_catalog_rejects_ragged_rows(tmp_path):
    path = tmp_path / "ragged.tsv"
    path.write_text(dataset_text() + "Broken\trow\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 10"):
        validate_catalog(path)


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x0c", "\x0b", "\x85", "\x1e"])
def test_unicode_separators_stay_inside_fields(separator):
    row = ["Poster", f"wall art{separator}limited print", "decor", "Home", "4.0", "10", "5.00"]
    ds = ProductDataset.from_text("\t".join(HEADER) + "\n" + "\t".join(row) + "\n")
    assert len(ds) == 1
    assert ds.categories() == ["Home"]
    assert ds.from_record(ds.record(0)) == row


def test_crlf_and_cr_line_endings():
    rows = ["\t".join(r) for r in ROWS[:2]]
    for newline in ("\r\n", "\r"):
        ds = ProductDataset.from_text(newline.join(["\t".join(HEADER)] + rows) + newline)
        assert [list(r) for r in ds.rows] == ROWS[:2]
