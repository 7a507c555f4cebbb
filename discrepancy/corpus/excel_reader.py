"""
Spreadsheet text reader using pandas.

Renders every row as "header: value" lines so that figures in a sheet
read like prose ("Fleet size: 12 vehicles") to the fact extractor.
"""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)


def read_excel_text(file_path: str | Path) -> str:
    """
    Extract the cell text of every sheet of an Excel workbook.

    Args:
        file_path: Path to the .xlsx/.xls file

    Returns:
        One block per sheet, headed by the sheet name
    """
    file_path = Path(file_path)
    file_type = file_path.suffix.lower().lstrip(".")

    blocks = []
    with pd.ExcelFile(file_path, engine="openpyxl" if file_type == "xlsx" else None) as excel_file:
        for sheet_name in excel_file.sheet_names:
            df = pd.read_excel(excel_file, sheet_name=sheet_name, header=0)
            df = _clean_dataframe(df)

            if df.empty:
                logger.debug(f"Skipping empty sheet: {sheet_name}")
                continue

            blocks.append(_dataframe_to_text(str(sheet_name), df))

    return "\n\n".join(blocks)


def _clean_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """Drop empty rows/columns and turn every cell into a clean string."""
    df = df.dropna(how="all")
    df = df.dropna(axis=1, how="all")

    if df.empty:
        return df

    df = df.astype(object).fillna("").map(_clean_cell_value)
    # Cleaned headers may repeat (several unnamed columns), so rename last
    df.columns = [_clean_column_name(col) for col in df.columns]

    return df[~(df == "").all(axis=1)]


def _clean_column_name(name) -> str:
    if pd.isna(name):
        return ""

    name_str = " ".join(str(name).split())
    if name_str.startswith("Unnamed:"):
        return ""
    return name_str


def _clean_cell_value(value) -> str:
    if value == "":
        return ""

    # Floats that are actually integers
    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    return " ".join(str(value).split())


def _dataframe_to_text(sheet_name: str, df: pd.DataFrame) -> str:
    lines = [sheet_name]

    for _, row in df.iterrows():
        cells = []
        for header, cell in zip(df.columns, row.values):
            if not cell:
                continue
            cells.append(f"{header}: {cell}" if header else cell)
        lines.append("; ".join(cells))

    return "\n".join(lines)
