"""
Reads the registrar's schedule export into rows.

Layout of the export:
    row 0      semester label in the first field, e.g. "Spring 2026"
    rows 1-2   report metadata and column headers
    rows 3..   one data row per section meeting entry
"""

import csv
import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

HEADER_ROWS = 3


class SeedError(Exception):
    """Seeding could not run at all"""


def read_csv_file(path: Union[str, Path]) -> Optional[str]:
    """Return the export's text, or None when the file can't be read"""
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read schedule export {path}: {e}")
        return None


def read_schedule(csv_text: Optional[str]) -> Tuple[str, List[List[str]]]:
    """
    Split the export into its semester label and data rows.

    Raises:
        SeedError: the text is missing, malformed, or has no data rows
    """
    if not csv_text or not csv_text.strip():
        raise SeedError("schedule export is empty")

    try:
        records = list(csv.reader(io.StringIO(csv_text)))
    except csv.Error as e:
        raise SeedError(f"failed to parse CSV: {e}") from e

    if len(records) <= HEADER_ROWS:
        raise SeedError("CSV file too short")

    first = records[0]
    semester = first[0].strip() if first else ""
    return semester, records[HEADER_ROWS:]
