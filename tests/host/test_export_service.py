# tests/host/test_export_service.py
import json

import pandas as pd
import pytest

from leversguard.services.export_service import EXPORT_COLUMNS, ExportService

ROWS = [
    {"File": "a.html", "Line": 1, "Column": 1, "Category": "SEO", "Code": "SEO_CANONICAL_MISSING",
     "Severity": "WARNING", "Message": "Missing canonical link."},
    {"File": "b.html", "Line": 1, "Column": 1, "Category": "SEO", "Code": "SEO_CANONICAL_MISSING",
     "Severity": "WARNING", "Message": "Missing canonical link."},
    {"File": "b.html", "Line": 3, "Column": 5, "Category": "PERF", "Code": "PERF_SCRIPT_BLOCKING",
     "Severity": "WARNING", "Message": "Script tag without `async` or `defer`."},
]


def test_export_csv(tmp_path):
    output = ExportService.export(ROWS, tmp_path / "out" / "report.csv")
    df = pd.read_csv(output)
    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 3


def test_export_json(tmp_path):
    output = ExportService.export(ROWS, tmp_path / "report.json")
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data[2]["Code"] == "PERF_SCRIPT_BLOCKING"
    assert data[2]["Column"] == 5


def test_export_xlsx(tmp_path):
    output = ExportService.export(ROWS, tmp_path / "report.xlsx")
    df = pd.read_excel(output, engine="openpyxl")
    assert len(df) == 3


def test_export_empty_keeps_header(tmp_path):
    output = ExportService.export([], tmp_path / "empty.csv")
    assert output.read_text().strip() == ",".join(EXPORT_COLUMNS)


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError, match="Unsupported export format"):
        ExportService.export(ROWS, tmp_path / "report.txt")


def test_summarize():
    summary = ExportService.summarize(ROWS)
    assert summary.iloc[0]["Code"] == "SEO_CANONICAL_MISSING"
    assert summary.iloc[0]["Count"] == 2
    assert ExportService.summarize([]).empty
