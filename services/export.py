"""
History Export Service
Flattens day groups into a table for CSV or spreadsheet download

One row per day. Each lift gets `slots` groups of three columns
(<Lift><n>_kg, <Lift><n>_rep, <Lift><n>_PV) filled from the already
ranked sets, followed by one free-text column for assistance work.
"""

import io
from typing import Dict, List, Sequence

import pandas as pd
from openpyxl.utils import get_column_letter

from .errors import NoDataForRange
from .models import DayGroup, Lift, OtherSet

SHEET_NAME = "History"

# Column width hints for the spreadsheet export (in characters)
DATE_WIDTH = 12
SLOT_WIDTH = 8
OTHERS_WIDTH = 50


def _format_number(value):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def export_columns(slots: int) -> List[str]:
    """Header row for an export with `slots` sets per lift"""
    columns = ["Date"]
    for lift in Lift:
        label = lift.value.capitalize()
        for n in range(1, slots + 1):
            columns.extend([f"{label}{n}_kg", f"{label}{n}_rep", f"{label}{n}_PV"])
    columns.append("Others")
    return columns


def format_other(item: OtherSet) -> str:
    return f"{item.name} {_format_number(item.weight)}kg x {item.reps}"


def build_export_rows(groups: Sequence[DayGroup], slots: int) -> List[Dict]:
    """
    Project day groups into flat row dicts keyed by export_columns(slots).

    Sets are taken in the order they already have; nothing is re-ranked.
    Empty slots are None so they export as blank cells.
    """
    rows = []
    for group in groups:
        row = {"Date": group.date}
        for lift in Lift:
            label = lift.value.capitalize()
            sets = group.sets_for(lift)
            for n in range(1, slots + 1):
                if n <= len(sets):
                    s = sets[n - 1]
                    row[f"{label}{n}_kg"] = _format_number(s.weight)
                    row[f"{label}{n}_rep"] = s.reps
                    row[f"{label}{n}_PV"] = _format_number(s.strength_index)
                else:
                    row[f"{label}{n}_kg"] = None
                    row[f"{label}{n}_rep"] = None
                    row[f"{label}{n}_PV"] = None
        row["Others"] = ", ".join(format_other(o) for o in group.others)
        rows.append(row)
    return rows


def to_dataframe(groups: Sequence[DayGroup], slots: int) -> pd.DataFrame:
    """Export rows as a DataFrame. Raises NoDataForRange for an empty input."""
    if not groups:
        raise NoDataForRange()
    return pd.DataFrame(build_export_rows(groups, slots), columns=export_columns(slots))


def export_csv(groups: Sequence[DayGroup], slots: int) -> bytes:
    """CSV bytes, UTF-8 with a byte-order mark so spreadsheets detect the encoding"""
    df = to_dataframe(groups, slots)
    return df.to_csv(index=False).encode("utf-8-sig")


def export_xlsx(groups: Sequence[DayGroup], slots: int) -> bytes:
    """Spreadsheet (.xlsx) bytes with column width hints"""
    df = to_dataframe(groups, slots)
    buffer = io.BytesIO()

    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        sheet = writer.sheets[SHEET_NAME]
        # to_excel writes missing values as na_rep (""); leave those cells blank
        for row in sheet.iter_rows(min_row=2):
            for cell in row:
                if cell.value == "":
                    cell.value = None
        for idx, column in enumerate(df.columns, start=1):
            if column == "Date":
                width = DATE_WIDTH
            elif column == "Others":
                width = OTHERS_WIDTH
            else:
                width = SLOT_WIDTH
            sheet.column_dimensions[get_column_letter(idx)].width = width

    return buffer.getvalue()
