"""
Tabular file codecs for bulk import and export.

Readers hand back every row as a list of strings and writers accept rows of
strings, so CSV and XLSX files are interchangeable for the import and export
services. The file extension decides the format.
"""

import csv
import os
import logging
from typing import Iterable, List, Optional, Sequence
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from services.common.errors import DataImportError, DataExportError
from services.enums import TabularFormat

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(fill_type='solid', start_color='CCCCCC', end_color='CCCCCC')
DEFAULT_COLUMN_WIDTH = 20
SHEET_TITLE = 'Sheet1'


def detect_format(path: str) -> Optional[TabularFormat]:
    """
    Pick the tabular format from the file extension (case-insensitive).

    Returns:
        TabularFormat, or None for unsupported extensions
    """
    _, ext = os.path.splitext(path.lower())
    for file_format in TabularFormat:
        if ext == file_format.extension:
            return file_format
    return None


# --- Readers ---

def read_rows(path: str, file_format: TabularFormat) -> List[List[str]]:
    """
    Read every row of a tabular source, header included.

    The whole file is parsed before returning so that a broken file is
    reported before any database work starts.

    Raises:
        DataImportError: If the file cannot be opened or parsed
    """
    if file_format == TabularFormat.CSV:
        return _read_csv_rows(path)
    return _read_xlsx_rows(path)


def _read_csv_rows(path: str) -> List[List[str]]:
    try:
        # utf-8-sig so files saved by Excel (with BOM) read cleanly
        with open(path, mode='r', newline='', encoding='utf-8-sig') as csvfile:
            return [row for row in csv.reader(csvfile)]
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        logger.error(f"Failed to read CSV file {path}: {e}")
        raise DataImportError(f"Could not read CSV file {path}: {e}") from e


def _read_xlsx_rows(path: str) -> List[List[str]]:
    try:
        workbook = load_workbook(path, data_only=True)
    except (OSError, InvalidFileException, BadZipFile, KeyError, ValueError) as e:
        logger.error(f"Failed to open spreadsheet {path}: {e}")
        raise DataImportError(f"Could not open spreadsheet {path}: {e}") from e

    try:
        # First sheet only, regardless of which one was active when saved
        sheet = workbook.worksheets[0]
        rows = []
        for values in sheet.iter_rows(values_only=True):
            cells = [_cell_text(value) for value in values]
            # Trailing blank cells are not columns: a row holding only an ID
            # is short (and skipped), a blank line has no columns at all
            while cells and not cells[-1]:
                cells.pop()
            rows.append(cells)
        return rows
    finally:
        workbook.close()


def _cell_text(value) -> str:
    """Render a spreadsheet cell as the string a CSV file would hold."""
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        # Numeric IDs typed into Excel come back as 101.0
        return str(int(value))
    return str(value)


# --- Writers ---

def write_rows(path: str,
               file_format: TabularFormat,
               header: Sequence[str],
               rows: Iterable[Sequence[str]],
               column_width: int = DEFAULT_COLUMN_WIDTH) -> int:
    """
    Write a header row followed by data rows.

    The file is built beside the destination and moved into place only once
    complete, so a failure part way through leaves any existing file alone.

    Args:
        path: Destination file
        file_format: Output format
        header: Column labels
        rows: Data rows (consumed lazily)
        column_width: Spreadsheet column width, ignored for CSV

    Returns:
        Number of data rows written

    Raises:
        DataExportError: If the destination cannot be created or written, or
            a value cannot be stored in a spreadsheet cell
    """
    temp_path = _temp_path_for(path)
    try:
        if file_format == TabularFormat.CSV:
            written = _write_csv_rows(temp_path, path, header, rows)
        else:
            written = _write_xlsx_rows(temp_path, path, header, rows, column_width)
        os.replace(temp_path, path)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise DataExportError(f"Could not write {path}: {e}") from e
    finally:
        # Only left behind when something above failed
        if os.path.exists(temp_path):
            os.remove(temp_path)
    return written


def _temp_path_for(path: str) -> str:
    directory, name = os.path.split(path)
    return os.path.join(directory, f'.{name}.tmp')


def _write_csv_rows(temp_path: str, path: str, header: Sequence[str],
                    rows: Iterable[Sequence[str]]) -> int:
    written = 0
    try:
        with open(temp_path, mode='w', newline='', encoding='utf-8') as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(header)
            for row in rows:
                writer.writerow(row)
                written += 1
    except csv.Error as e:
        logger.error(f"Failed to write CSV file {path}: {e}")
        raise DataExportError(f"Could not write CSV file {path}: {e}") from e
    return written


def _write_xlsx_rows(temp_path: str, path: str, header: Sequence[str],
                     rows: Iterable[Sequence[str]], column_width: int) -> int:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    for col, label in enumerate(header, start=1):
        cell = sheet.cell(row=1, column=col, value=label)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    written = 0
    try:
        for row_index, row in enumerate(rows, start=2):
            for col, value in enumerate(row, start=1):
                cell = sheet.cell(row=row_index, column=col, value=value)
                if isinstance(value, str) and value.startswith('='):
                    # Keep it as text, openpyxl would store it as a formula
                    cell.data_type = 's'
            written += 1
    except IllegalCharacterError as e:
        # Control characters have no representation in the sheet XML
        logger.error(f"Cannot store row {row_index} in spreadsheet {path}: {e}")
        raise DataExportError(
            f"Could not write spreadsheet {path}: row {row_index} contains a "
            f"control character that spreadsheets cannot store"
        ) from e

    for col in range(1, len(header) + 1):
        sheet.column_dimensions[get_column_letter(col)].width = column_width

    try:
        workbook.save(temp_path)
    except ValueError as e:
        logger.error(f"Failed to write spreadsheet {path}: {e}")
        raise DataExportError(f"Could not write spreadsheet {path}: {e}") from e
    return written
