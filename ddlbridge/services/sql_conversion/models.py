"""Dialect-neutral table model produced by the parser and consumed by the emitter."""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class ColumnDefinition:
    field: str
    type: str
    length: str = ""
    key: bool = False
    nullable: bool = True
    default: Optional[str] = None
    auto_increment: bool = False
    enum_values: Optional[List[str]] = None
    comment: Optional[str] = None


@dataclass
class TableDefinition:
    table_name: str
    columns: List[ColumnDefinition] = field(default_factory=list)
    primary_key: Optional[str] = None

    @property
    def bare_name(self) -> str:
        """Table name without any ``schema.`` qualifier."""
        return self.table_name.rsplit('.', 1)[-1]

    def column(self, name: str) -> Optional[ColumnDefinition]:
        for col in self.columns:
            if col.field == name:
                return col
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SkippedStatement:
    """A statement the translator could not turn into a table."""
    index: int
    reason: str
    snippet: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
