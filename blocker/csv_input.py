"""
Input batch reader.

The input is a CSV export of offending addresses with a header row:

    "ip","service","seen"
    "203.0.113.25","ssh","2025-01-30 10:15:23"
    "198.51.100.50","http","2025-01-30 10:16:02"

Only the first column is used. Values are returned as-is (minus quotes and
whitespace); validating addresses is the normalizer's job, so one bad
row is skipped later instead of failing the whole file here. Rows the csv
module itself cannot parse are skipped with a warning.
"""

import csv
from pathlib import Path
from typing import List

from . import logger
from .errors import InputError


def read_addresses(path: Path) -> List[str]:
    """
    Return first-column values of every row after the header.

    Blank rows are skipped, and so are rows the csv module cannot parse
    (e.g. a field over csv.field_size_limit()), with a warning. Raises
    InputError if the file cannot be opened or read.
    """
    path = Path(path)
    addresses = []
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            reader = csv.reader(f)
            header_seen = False
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    logger.log_warn("Skipping unreadable CSV row", path=str(path), line=reader.line_num, error=str(e))
                    header_seen = True
                    continue
                if not header_seen:
                    header_seen = True
                    continue
                if not row:
                    continue
                value = row[0].strip().strip('"').strip()
                if value:
                    addresses.append(value)
    except OSError as e:
        raise InputError(f"Cannot read input CSV {path}: {e}") from e
    return addresses
