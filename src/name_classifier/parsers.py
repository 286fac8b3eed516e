"""Reading labeled names from ``name,class`` text.

One record per line. Lines are split with ``str.splitlines`` so LF, CRLF
and CR endings are all accepted. Both fields are stripped and lowercased.
Blank lines and malformed lines (not exactly two fields, or an empty
field) are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import Record

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ","


def parse_line(line: str) -> Record | None:
    """Parse one line into a record, or return None if it is blank or malformed."""
    if not line.strip():
        return None

    parts = line.split(FIELD_SEPARATOR)
    if len(parts) != 2:
        return None

    record = Record.create(parts[0], parts[1])
    if not record.name or not record.label:
        return None
    return record


def parse_records(text: str) -> list[Record]:
    """Parse ``name,class`` lines into records.

    Duplicates are kept here; removing them is part of dataset preparation.

    Args:
        text: Raw file contents.

    Returns:
        Records in input order.
    """
    records: list[Record] = []
    for lineno, line in enumerate(text.splitlines(), 1):
        record = parse_line(line)
        if record is None:
            if line.strip():
                logger.debug("Skipping malformed line %d: %r", lineno, line)
            continue
        records.append(record)
    return records


def read_records(path: str | Path, encoding: str = "utf-8") -> list[Record]:
    """Read and parse a record file.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid in ``encoding``.
    """
    path = Path(path)
    text = path.read_text(encoding=encoding)
    records = parse_records(text)
    logger.info("Read %d records from %s", len(records), path)
    return records
