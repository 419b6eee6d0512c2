"""Read the first worksheet of an IOLP workbook as header-keyed rows."""

import logging
from pathlib import Path
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .exceptions import SpreadsheetError

logger = logging.getLogger(__name__)


def _is_empty_row(values: tuple[Any, ...]) -> bool:
    return all(v is None for v in values)


def _unique_labels(header: tuple[Any, ...]) -> list[str | None]:
    """Header labels with repeats renamed ``Label_1``, ``Label_2``, ..."""
    labels: list[str | None] = []
    seen: dict[str, int] = {}
    for h in header:
        if h is None:
            labels.append(None)
            continue
        label = str(h)
        if label in seen:
            counter = seen[label]
            seen[label] += 1
            renamed = f"{label}_{counter}"
            while renamed in seen:
                counter += 1
                renamed = f"{label}_{counter}"
            seen[renamed] = 1
            label = renamed
        else:
            seen[label] = 1
        labels.append(label)
    return labels


def read_spreadsheet(path: str | Path) -> list[dict[str, Any]]:
    """Load the first worksheet, keyed by the exact header labels in row 1.

    Rows keep their sheet order. Empty cells are left out of the row dict
    and fully blank rows are skipped. A repeated label keeps its first
    column; later ones become ``Label_1``, ``Label_2`` and so on.
    """
    path = Path(path)
    if not path.is_file():
        raise SpreadsheetError(path, "file not found")

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise SpreadsheetError(path, str(e) or type(e).__name__) from e

    try:
        sheet = workbook.worksheets[0]
        values = sheet.iter_rows(values_only=True)

        header = next(values, None)
        if header is None:
            logger.warning("Worksheet %r in %s is empty", sheet.title, path)
            return []
        labels = _unique_labels(header)
        renamed = [
            label for h, label in zip(header, labels) if h is not None and label != str(h)
        ]
        if renamed:
            logger.warning(
                "Duplicate header labels in %s renamed to %s", path.name, ", ".join(renamed)
            )

        rows: list[dict[str, Any]] = []
        for row_values in values:
            if _is_empty_row(row_values):
                continue
            rows.append({
                label: value
                for label, value in zip(labels, row_values)
                if label is not None and value is not None
            })
    finally:
        workbook.close()

    logger.info("Read %d rows from %s (sheet %r)", len(rows), path.name, sheet.title)
    return rows
