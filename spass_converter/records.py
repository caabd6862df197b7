"""
Parsing of decrypted SPASS documents into Chrome password records.

A decrypted export starts with a couple of metadata lines followed by the
``next_table`` marker. Each table then has a header row and ``;``-separated
data rows whose cells are base64 encoded. The first table holds the logins.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, astuple
from typing import Iterable, List, Sequence

from . import config
from .errors import FormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpassRecord:
    """Represents a single login taken from a SPASS export."""
    name: str = ""
    url: str = ""
    username: str = ""
    password: str = ""
    note: str = ""

    def to_row(self) -> List[str]:
        """Field values in Chrome CSV column order."""
        return list(astuple(self))

    def is_blank(self) -> bool:
        return all(not value.strip() for value in astuple(self))


def decode_field(value: str) -> str:
    """
    Decode a base64 cell to text, falling back to the raw value.

    Cells that are not valid base64, or whose bytes are not UTF-8, are kept
    exactly as they appear in the document.
    """
    if not value:
        return ""
    try:
        padded = value + "=" * (-len(value) % 4)
        return base64.b64decode(padded, validate=True).decode('utf-8')
    except (binascii.Error, ValueError):
        return value


class RecordExtractor:
    """Extracts login records from a decrypted SPASS document."""

    COLUMN_MAP = config.SPASS_COLUMN_MAP
    MIN_COLUMNS = config.SPASS_MIN_COLUMNS
    SENTINEL = config.SPASS_SENTINEL

    def __init__(self, include_empty_fields: bool = False):
        self.include_empty_fields = include_empty_fields

    def validate(self, text: str) -> None:
        """
        Check the marker line that tells a good password from a bad one.

        Raises:
            FormatError: If the sentinel is not on its expected line
        """
        lines = text.split("\n")
        index = config.SPASS_SENTINEL_LINE_INDEX
        if len(lines) <= index or lines[index].strip() != self.SENTINEL:
            raise FormatError("Invalid password or corrupted SPASS file")

    def _login_table(self, text: str) -> str:
        parts = text.split(self.SENTINEL)
        if len(parts) < 2:
            raise FormatError("Invalid SPASS format: missing data section")
        # parts[1] runs up to the next table marker, so later tables are ignored
        return parts[1]

    def _parse_row(self, line: str):
        fields = line.split(config.SPASS_FIELD_DELIMITER)
        if len(fields) < self.MIN_COLUMNS:
            return None

        values = {}
        for name, index in self.COLUMN_MAP.items():
            raw = fields[index] if index < len(fields) else ""
            values[name] = decode_field(raw)
        return SpassRecord(**values)

    def extract(self, text: str) -> List[SpassRecord]:
        """
        Parse the login table of a decrypted document.

        Args:
            text: Decrypted document as text

        Returns:
            Records in the order their rows appear in the file

        Raises:
            FormatError: If the document structure is not recognised
        """
        self.validate(text)
        table = self._login_table(text).strip()

        # First line is the column header row
        data_lines = table.split("\n")[1:]

        records = []
        skipped = 0
        for line in data_lines:
            if not line.strip():
                continue

            record = self._parse_row(line)
            if record is None:
                skipped += 1
                continue

            if self.include_empty_fields or not record.is_blank():
                records.append(record)

        if skipped:
            logger.warning(f"Skipped {skipped} rows with fewer than {self.MIN_COLUMNS} columns")
        logger.info(f"Extracted {len(records)} records from {len(data_lines)} data lines")
        return records


def extract(text: str, include_empty_fields: bool = False) -> List[SpassRecord]:
    """Shortcut for ``RecordExtractor(include_empty_fields).extract(text)``."""
    return RecordExtractor(include_empty_fields).extract(text)


def escape_csv_field(field: str) -> str:
    """Quote a field if it holds the delimiter, a quote or a line break."""
    if any(c in field for c in (config.CSV_DELIMITER, '"', '\n', '\r')):
        return '"' + field.replace('"', '""') + '"'
    return field


def _format_row(values: Sequence[str]) -> str:
    return config.CSV_DELIMITER.join(escape_csv_field(value or "") for value in values)


def to_csv(records: Iterable[SpassRecord]) -> str:
    """
    Render records as Chrome password CSV.

    The header row always comes first; rows are separated by a single newline
    and there is no trailing newline.
    """
    rows = [_format_row(config.CHROME_CSV_HEADERS)]
    rows.extend(_format_row(record.to_row()) for record in records)
    return config.CSV_LINE_SEPARATOR.join(rows)
