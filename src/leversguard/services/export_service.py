# src/leversguard/services/export_service.py
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["File", "Line", "Column", "Category", "Code", "Severity", "Message"]
SUPPORTED_SUFFIXES = (".csv", ".json", ".xlsx")


class ExportService:
    """
    Writes flat diagnostic rows to disk through a pandas DataFrame.
    The format follows the file suffix: .csv, .json or .xlsx.
    """

    @staticmethod
    def to_dataframe(rows: List[Dict[str, Any]]) -> pd.DataFrame:
        return pd.DataFrame(rows, columns=EXPORT_COLUMNS)

    @staticmethod
    def summarize(rows: List[Dict[str, Any]]) -> pd.DataFrame:
        """Issue counts per code and severity, most frequent first."""
        df = ExportService.to_dataframe(rows)
        if df.empty:
            return pd.DataFrame(columns=["Code", "Severity", "Count"])
        return (
            df.groupby(["Code", "Severity"]).size()
            .reset_index(name="Count")
            .sort_values(["Count", "Code"], ascending=[False, True])
            .reset_index(drop=True)
        )

    @staticmethod
    def export(rows: List[Dict[str, Any]], output_file: Path) -> Path:
        """
        Raises ValueError for an unsupported suffix. I/O errors propagate to the caller.
        """
        output_file = Path(output_file)
        suffix = output_file.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ValueError(f"Unsupported export format '{suffix}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}")

        output_file.parent.mkdir(parents=True, exist_ok=True)
        df = ExportService.to_dataframe(rows)

        logger.info("Exporting %d rows to %s", len(df), output_file)
        if suffix == ".csv":
            df.to_csv(output_file, index=False)
        elif suffix == ".json":
            df.to_json(output_file, orient="records", indent=2, force_ascii=False)
        else:
            df.to_excel(output_file, index=False, engine="openpyxl")
        return output_file
