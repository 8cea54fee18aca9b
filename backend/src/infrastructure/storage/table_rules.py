"""Column defaults and integrity constraints read from SQLAlchemy table metadata.

The in-memory store enforces exactly the constraints the SQL schema declares,
so both backends accept and reject the same writes.
"""

from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import Table, UniqueConstraint


class ForeignKeyRule:
    __slots__ = ("column", "target_table", "target_column")

    def __init__(self, column: str, target_table: str, target_column: str):
        self.column = column
        self.target_table = target_table
        self.target_column = target_column


class TableRules:
    """Integrity rules of one table."""

    def __init__(self, table: Table):
        self.table_name = table.name
        self.columns = {column.name: column for column in table.columns}

        primary_keys = [column.name for column in table.primary_key.columns]
        self.primary_key = primary_keys[0]

        self.required = [
            column.name
            for column in table.columns
            if not column.nullable and not column.primary_key
        ]

        unique_sets: List[Tuple[str, ...]] = []
        for column in table.columns:
            if column.unique:
                unique_sets.append((column.name,))
        for constraint in table.constraints:
            if isinstance(constraint, UniqueConstraint):
                unique_sets.append(tuple(column.name for column in constraint.columns))
        for index in table.indexes:
            if index.unique:
                unique_sets.append(tuple(column.name for column in index.columns))
        # Preserve declaration order, drop duplicates
        self.unique_sets = list(dict.fromkeys(unique_sets))

        self.foreign_keys = [
            ForeignKeyRule(fk.parent.name, fk.column.table.name, fk.column.name)
            for fk in table.foreign_keys
        ]

    def default_for(self, name: str) -> Any:
        """Python-side column default, or None."""
        default = self.columns[name].default
        if default is None:
            return None
        if default.is_callable:
            return default.arg(None)
        if default.is_scalar:
            return deepcopy(default.arg)
        return None

    def unknown_columns(self, names) -> List[str]:
        return [name for name in names if name not in self.columns]

    def is_nullable(self, name: str) -> bool:
        return bool(self.columns[name].nullable)


class SchemaRules:
    """Rules for every table of a metadata, plus the reverse foreign key index."""

    def __init__(self, metadata):
        self.tables: Dict[str, TableRules] = {
            name: TableRules(table) for name, table in metadata.tables.items()
        }
        # referenced table -> [(referencing table, referencing column, referenced column)]
        self.referenced_by: Dict[str, List[Tuple[str, str, str]]] = {}
        for rules in self.tables.values():
            for fk in rules.foreign_keys:
                self.referenced_by.setdefault(fk.target_table, []).append(
                    (rules.table_name, fk.column, fk.target_column)
                )

    def for_table(self, name: str) -> Optional[TableRules]:
        return self.tables.get(name)
