"""
Ingestion Parser

Turns raw uploaded or pasted content into row-oriented datasets.
Handles delimited text, spreadsheet workbooks, JSON documents and free text.
"""

from typing import Dict, List, Any, Optional, Union
from datetime import date, datetime
from enum import Enum
import csv
import io
import json
import logging
import os

import numpy as np
import pandas as pd

from ..exceptions import ParseError, UnsupportedFormatError
from .dataset import Dataset, Record, Workbook
from .values import (
    MISSING, Boolean, Numeric, Scalar, Temporal, Text,
    coerce_scalar, normalize_datetime,
)

logger = logging.getLogger(__name__)

# Candidate delimiters in tie-break priority order.
DELIMITER_CANDIDATES = [",", ";", "\t", "|"]

TEXT_ENCODINGS = ("utf-8-sig", "cp1252", "latin1")

# Cells are bounded by the upload size limit, not by the csv module default.
csv.field_size_limit(2**31 - 1)


class InputFormat(str, Enum):
    """Supported input formats."""
    DELIMITED = "delimited"
    SPREADSHEET = "spreadsheet"
    JSON = "json"
    TEXT = "text"
    AUTO = "auto"


EXTENSION_FORMATS = {
    ".csv": InputFormat.DELIMITED,
    ".tsv": InputFormat.DELIMITED,
    ".json": InputFormat.JSON,
    ".xlsx": InputFormat.SPREADSHEET,
    ".xls": InputFormat.SPREADSHEET,
    ".txt": InputFormat.AUTO,
}


def format_from_filename(filename: str) -> InputFormat:
    """Map a file name to its input format by extension."""
    extension = os.path.splitext(filename or "")[1].lower()
    if extension not in EXTENSION_FORMATS:
        raise UnsupportedFormatError(extension)
    return EXTENSION_FORMATS[extension]


def detect_delimiter(first_line: str) -> str:
    """
    Pick the delimiter that splits the first line into the most fields.

    Ties go to the earlier candidate in DELIMITER_CANDIDATES.
    """
    best, best_count = DELIMITER_CANDIDATES[0], 0
    for candidate in DELIMITER_CANDIDATES:
        count = len(first_line.split(candidate))
        if count > best_count:
            best, best_count = candidate, count
    return best


def detect_format(text: str) -> InputFormat:
    """Guess the format of pasted text."""
    stripped = text.strip()
    if stripped.startswith(("[", "{")):
        return InputFormat.JSON
    lines = [line for line in stripped.splitlines() if line.strip()]
    if len(lines) >= 2:
        delimiter = detect_delimiter(lines[0])
        if len(lines[0].split(delimiter)) >= 2:
            return InputFormat.DELIMITED
    return InputFormat.TEXT


def decode_bytes(content: bytes) -> str:
    """Decode bytes trying common encodings in turn."""
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ParseError("Unable to decode input with common encodings")


def _unique_headers(raw_headers: List[str]) -> List[str]:
    headers: List[str] = []
    seen: Dict[str, int] = {}
    for index, raw in enumerate(raw_headers):
        name = raw.strip() or f"column_{index + 1}"
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 1
        headers.append(name)
    return headers


def parse_delimited(text: str) -> Dataset:
    """Parse delimited text whose first non-blank line is the header row."""
    _require_content(text, InputFormat.DELIMITED)
    lines = text.strip("\r\n").splitlines()
    first_line = next(line for line in lines if line.strip())
    delimiter = detect_delimiter(first_line)

    reader = csv.reader(io.StringIO(text.strip("\r\n")), delimiter=delimiter)
    try:
        rows = [row for row in reader if not _is_blank_row(row)]
    except csv.Error as e:
        raise ParseError(f"Invalid delimited text: {e}", InputFormat.DELIMITED.value) from e
    if not rows:
        raise ParseError("No data provided", InputFormat.DELIMITED.value)
    headers = _unique_headers(rows[0])

    records: List[Record] = []
    for row in rows[1:]:
        record: Record = {}
        for index, header in enumerate(headers):
            record[header] = coerce_scalar(row[index]) if index < len(row) else MISSING
        records.append(record)

    logger.info(f"Parsed delimited text: {len(records)} rows, {len(headers)} columns, delimiter={delimiter!r}")
    return Dataset(records=records)


def _is_blank_row(row: List[str]) -> bool:
    return len(row) <= 1 and not "".join(row).strip()


def _json_scalar(value: Any) -> Scalar:
    if value is None:
        return MISSING
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, (int, float)):
        return Numeric(float(value))
    if isinstance(value, str):
        return Text(value)
    return Text(json.dumps(value, separators=(",", ":")))


def _json_record(item: Any) -> Record:
    if isinstance(item, dict):
        return {str(key): _json_scalar(value) for key, value in item.items()}
    return {"value": _json_scalar(item)}


def parse_json(text: str) -> Dataset:
    """Parse a JSON array (one record per element) or a single object."""
    _require_content(text, InputFormat.JSON)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})", InputFormat.JSON.value) from e

    if isinstance(document, list):
        records = [_json_record(item) for item in document]
    elif isinstance(document, dict):
        records = [_json_record(document)]
    else:
        raise ParseError("JSON input must be an array or an object", InputFormat.JSON.value)

    logger.info(f"Parsed JSON document: {len(records)} records")
    return Dataset(records=records)


def parse_free_text(text: str) -> Dataset:
    """Each non-blank line becomes a one-field record."""
    _require_content(text, InputFormat.TEXT)
    records: List[Record] = [
        {"content": Text(line.strip())}
        for line in text.splitlines()
        if line.strip()
    ]
    return Dataset(records=records)


def _spreadsheet_scalar(value: Any) -> Scalar:
    if value is None:
        return MISSING
    if isinstance(value, (bool, np.bool_)):
        return Boolean(bool(value))
    if isinstance(value, (pd.Timestamp, datetime)):
        if pd.isna(value):
            return MISSING
        return Temporal(normalize_datetime(pd.Timestamp(value).to_pydatetime()))
    if isinstance(value, date):
        return Temporal(datetime(value.year, value.month, value.day))
    if isinstance(value, (int, float, np.integer, np.floating)):
        if pd.isna(value):
            return MISSING
        return Numeric(float(value))
    if isinstance(value, str):
        return coerce_scalar(value)
    return Text(str(value))


def parse_spreadsheet(content: bytes) -> Workbook:
    """Read every sheet of a workbook into its own dataset."""
    if not content:
        raise ParseError("No data provided", InputFormat.SPREADSHEET.value)
    try:
        frames = pd.read_excel(io.BytesIO(content), sheet_name=None)
    except Exception as e:
        logger.warning(f"Failed to open spreadsheet: {e}")
        raise ParseError(f"Failed to open spreadsheet: {e}", InputFormat.SPREADSHEET.value) from e

    sheets: Dict[str, Dataset] = {}
    for sheet_name, frame in frames.items():
        headers = _unique_headers([str(column) for column in frame.columns])
        records: List[Record] = []
        for row in frame.itertuples(index=False, name=None):
            records.append({
                header: _spreadsheet_scalar(cell)
                for header, cell in zip(headers, row)
            })
        sheets[str(sheet_name)] = Dataset(records=records, name=str(sheet_name))

    logger.info(f"Parsed workbook with sheets: {list(sheets)}")
    return Workbook(sheets=sheets)


def parse_content(
    content: Union[str, bytes],
    input_format: InputFormat = InputFormat.AUTO,
    sheet: Optional[str] = None,
) -> Dataset:
    """
    Parse raw content into a single dataset.

    Args:
        content: Raw text or bytes
        input_format: Format hint; AUTO sniffs pasted text
        sheet: Sheet to use for workbooks, defaults to the first sheet

    Returns:
        Parsed Dataset

    Raises:
        ParseError: If the content is empty or malformed
    """
    if input_format == InputFormat.SPREADSHEET:
        raw = content.encode("utf-8") if isinstance(content, str) else content
        workbook = parse_spreadsheet(raw)
        try:
            return workbook.sheet(sheet)
        except KeyError as e:
            raise ParseError(str(e.args[0]), input_format.value) from e

    text = decode_bytes(content) if isinstance(content, bytes) else (content or "")
    _require_content(text, input_format)

    if input_format == InputFormat.AUTO:
        input_format = detect_format(text)

    if input_format == InputFormat.DELIMITED:
        return parse_delimited(text)
    if input_format == InputFormat.JSON:
        return parse_json(text)
    return parse_free_text(text)


def parse_file(path: str, filename: str, sheet: Optional[str] = None) -> Dataset:
    """Parse a staged upload, choosing the format from the original file name."""
    input_format = format_from_filename(filename)
    with open(path, "rb") as handle:
        content = handle.read()
    if not content:
        raise ParseError("Uploaded file is empty", input_format.value)
    return parse_content(content, input_format, sheet=sheet)


def _require_content(text: Optional[str], input_format: InputFormat) -> None:
    if text is None or not text.strip():
        raise ParseError("No data provided", input_format.value)
