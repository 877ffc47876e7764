"""
Ingestion Package - Raw input to row-oriented datasets

Core Components:
- values: tagged cell union (Numeric, Temporal, Text, Boolean, Missing) and coercion
- Dataset / Workbook: row-oriented containers
- parser: delimited text, spreadsheet, JSON and free-text parsers
"""

from .values import (
    Numeric, Temporal, Text, Boolean, Missing, MISSING, Scalar,
    coerce_scalar, as_number, as_datetime, is_missing,
)
from .dataset import Dataset, Record, Workbook
from .parser import (
    InputFormat,
    detect_delimiter,
    detect_format,
    format_from_filename,
    parse_content,
    parse_delimited,
    parse_file,
    parse_free_text,
    parse_json,
    parse_spreadsheet,
)

__all__ = [
    'Numeric', 'Temporal', 'Text', 'Boolean', 'Missing', 'MISSING', 'Scalar',
    'coerce_scalar', 'as_number', 'as_datetime', 'is_missing',
    'Dataset', 'Record', 'Workbook',
    'InputFormat',
    'detect_delimiter',
    'detect_format',
    'format_from_filename',
    'parse_content',
    'parse_delimited',
    'parse_file',
    'parse_free_text',
    'parse_json',
    'parse_spreadsheet',
]
