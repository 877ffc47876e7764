"""
Dataset Models

Row-oriented datasets produced by the ingestion parser.
"""

from typing import Dict, List, Any, Optional, Iterator
from dataclasses import dataclass, field

from .values import Scalar, MISSING, to_json_value

Record = Dict[str, Scalar]


@dataclass
class Dataset:
    """Ordered sequence of records. Absent keys read as missing."""
    records: List[Record] = field(default_factory=list)
    name: Optional[str] = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    @property
    def fields(self) -> List[str]:
        """Union of all record keys, in first-seen order."""
        seen: Dict[str, None] = {}
        for record in self.records:
            for key in record:
                seen.setdefault(key, None)
        return list(seen)

    @staticmethod
    def value(record: Record, field_name: str) -> Scalar:
        return record.get(field_name, MISSING)

    def column(self, field_name: str) -> List[Scalar]:
        return [self.value(record, field_name) for record in self.records]

    def head(self, limit: int) -> "Dataset":
        return Dataset(records=self.records[:limit], name=self.name)

    def to_json_rows(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Render records as JSON-friendly dictionaries."""
        records = self.records if limit is None else self.records[:limit]
        return [
            {key: to_json_value(value) for key, value in record.items()}
            for record in records
        ]


@dataclass
class Workbook:
    """One dataset per sheet, in file order."""
    sheets: Dict[str, Dataset] = field(default_factory=dict)

    @property
    def sheet_names(self) -> List[str]:
        return list(self.sheets)

    @property
    def primary(self) -> Dataset:
        """First sheet in file order."""
        if not self.sheets:
            return Dataset()
        return next(iter(self.sheets.values()))

    def sheet(self, name: Optional[str] = None) -> Dataset:
        if name is None:
            return self.primary
        if name not in self.sheets:
            raise KeyError(f"Sheet '{name}' not found")
        return self.sheets[name]
