import csv
import json

import pytest

from jobcost.engine import DashboardEngine
from jobcost.errors import ValidationError
from jobcost.exporter import SUMMARY_FIELDS, export_report, summary_rows
from jobcost.seed import demo_store


@pytest.fixture
def rows():
    return summary_rows(DashboardEngine(demo_store()).compute_all_summaries())


def test_export_csv(tmp_path, rows):
    path = export_report(rows, tmp_path / "out" / "summary.csv")

    with path.open(newline="", encoding="utf-8") as handle:
        records = list(csv.DictReader(handle))

    assert [record["project_id"] for record in records] == ["p1", "p2"]
    assert records[0]["total_cost"] == "1742.5"
    assert records[1]["is_positive"] == "True"


def test_export_csv_with_no_rows_still_has_header(tmp_path):
    path = export_report([], tmp_path / "empty.csv")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == [",".join(SUMMARY_FIELDS)]
    assert lines[0].startswith("project_id,name,address,status_label,price,")


def test_export_json(tmp_path, rows):
    path = export_report(rows, tmp_path / "summary.JSON")

    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload[1]["profit"] == "8100"
    assert payload[1]["status_label"] == "Pending"
    assert payload[0]["is_positive"] is True


def test_export_pdf(tmp_path, rows):
    path = export_report(rows, tmp_path / "summary.pdf", title="December jobs")

    assert path.read_bytes().startswith(b"%PDF")


def test_export_pdf_without_rows(tmp_path):
    path = export_report([], tmp_path / "empty.pdf")

    assert path.stat().st_size > 0


def test_unsupported_format(tmp_path, rows):
    with pytest.raises(ValidationError, match="Unsupported export format '.xlsx'"):
        export_report(rows, tmp_path / "summary.xlsx")
    assert not (tmp_path / "summary.xlsx").exists()
