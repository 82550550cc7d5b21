"""
Schema Model Definitions

In-memory tables, columns, indexes and relations as read from a physical
database. Indexes and relations reference columns and tables by name, so a
schema can be mutated freely without cyclic ownership (the column -> table
back reference is the only object link and it is never serialized).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import json
import yaml

from ..utils.errors import SchemaModelError


def _same(left: Optional[str], right: Optional[str]) -> bool:
    """Case-insensitive name comparison; None only equals None"""
    if left is None or right is None:
        return left is right
    return left.lower() == right.lower()


@dataclass
class DataColumn:
    """A column of a reverse-engineered table"""
    name: str
    data_type: str = ""
    alias: Optional[str] = None
    description: Optional[str] = None
    display_name: Optional[str] = None

    primary_key: bool = False
    identity: bool = False  # auto-increment
    nullable: bool = True

    table: Optional["DataTable"] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "alias": self.alias,
            "data_type": self.data_type,
            "description": self.description,
            "display_name": self.display_name,
            "primary_key": self.primary_key,
            "identity": self.identity,
            "nullable": self.nullable,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], table_name: Optional[str] = None) -> "DataColumn":
        if not isinstance(data, dict) or not data.get("name"):
            raise SchemaModelError("Column definition without a name", table_name=table_name)

        return cls(
            name=data["name"],
            data_type=data.get("data_type", ""),
            alias=data.get("alias"),
            description=data.get("description"),
            display_name=data.get("display_name"),
            primary_key=data.get("primary_key", False),
            identity=data.get("identity", False),
            nullable=data.get("nullable", True),
        )


@dataclass
class DataIndex:
    """An index over one or more columns, by column name"""
    name: Optional[str] = None
    columns: List[str] = field(default_factory=list)
    unique: bool = False
    primary_key: bool = False
    computed: bool = False  # derived by the resolver, not read from the source

    def covers(self, names: Iterable[str]) -> bool:
        """True if this index covers exactly the given column names"""
        wanted = sorted(n.lower() for n in names)
        return sorted(c.lower() for c in self.columns) == wanted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": list(self.columns),
            "unique": self.unique,
            "primary_key": self.primary_key,
            "computed": self.computed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataIndex":
        return cls(
            name=data.get("name"),
            columns=list(data.get("columns") or []),
            unique=data.get("unique", False),
            primary_key=data.get("primary_key", False),
            computed=data.get("computed", False),
        )


@dataclass
class DataRelation:
    """
    One direction of a relationship: ``column`` of the owning table points
    at ``relation_table.relation_column``. A foreign key is a pair of
    mirrored relations, one on each table.
    """
    column: Optional[str] = None
    relation_table: Optional[str] = None
    relation_column: Optional[str] = None
    unique: bool = False
    computed: bool = False

    def matches(
        self,
        column: str,
        relation_table: Optional[str] = None,
        relation_column: Optional[str] = None,
    ) -> bool:
        if not _same(self.column, column):
            return False
        if relation_table is not None and not _same(self.relation_table, relation_table):
            return False
        if relation_column is not None and not _same(self.relation_column, relation_column):
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "relation_table": self.relation_table,
            "relation_column": self.relation_column,
            "unique": self.unique,
            "computed": self.computed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataRelation":
        return cls(
            column=data.get("column"),
            relation_table=data.get("relation_table"),
            relation_column=data.get("relation_column"),
            unique=data.get("unique", False),
            computed=data.get("computed", False),
        )


@dataclass
class DataTable:
    """A table with its columns, indexes and relations"""
    name: str
    alias: Optional[str] = None
    description: Optional[str] = None
    display_name: Optional[str] = None
    columns: List[DataColumn] = field(default_factory=list)
    indexes: List[DataIndex] = field(default_factory=list)
    relations: List[DataRelation] = field(default_factory=list)

    def __post_init__(self) -> None:
        for column in self.columns:
            column.table = self

    @property
    def primary_keys(self) -> List[DataColumn]:
        return [c for c in self.columns if c.primary_key]

    def add_column(self, column: DataColumn) -> DataColumn:
        column.table = self
        self.columns.append(column)
        return column

    def get_column(self, name: Optional[str]) -> Optional[DataColumn]:
        """Get column by name, falling back to alias (case-insensitive)"""
        if not name:
            return None
        for column in self.columns:
            if _same(column.name, name):
                return column
        for column in self.columns:
            if column.alias and _same(column.alias, name):
                return column
        return None

    def get_columns(self, names: Optional[Iterable[str]]) -> List[DataColumn]:
        """Get the named columns in order, skipping unknown names"""
        found = []
        for name in names or []:
            column = self.get_column(name)
            if column is not None:
                found.append(column)
        return found

    def get_index(self, *names: str) -> Optional[DataIndex]:
        """Get the index covering exactly the given columns"""
        if not names:
            return None
        for index in self.indexes:
            if index.columns and index.covers(names):
                return index
        return None

    def get_relation(
        self,
        column: Optional[str],
        relation_table: Optional[str] = None,
        relation_column: Optional[str] = None,
    ) -> Optional[DataRelation]:
        """Get a relation by source column, or by the full column/table/column triple"""
        if not column:
            return None
        for relation in self.relations:
            if relation.matches(column, relation_table, relation_column):
                return relation
        return None

    def create_index(self) -> DataIndex:
        return DataIndex()

    def create_relation(self) -> DataRelation:
        return DataRelation()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "alias": self.alias,
            "description": self.description,
            "display_name": self.display_name,
            "columns": [c.to_dict() for c in self.columns],
            "indexes": [i.to_dict() for i in self.indexes],
            "relations": [r.to_dict() for r in self.relations],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataTable":
        if not isinstance(data, dict) or not data.get("name"):
            raise SchemaModelError("Table definition without a name")

        name = data["name"]
        columns = data.get("columns") or []
        if not isinstance(columns, list):
            raise SchemaModelError("Table columns must be a list", table_name=name)

        return cls(
            name=name,
            alias=data.get("alias"),
            description=data.get("description"),
            display_name=data.get("display_name"),
            columns=[DataColumn.from_dict(c, table_name=name) for c in columns],
            indexes=[DataIndex.from_dict(i) for i in data.get("indexes") or []],
            relations=[DataRelation.from_dict(r) for r in data.get("relations") or []],
        )


@dataclass
class DataSchema:
    """A schema snapshot: the tables of one database"""
    name: str = "default"
    tables: List[DataTable] = field(default_factory=list)

    def get_table(self, name: str) -> Optional[DataTable]:
        """Get table by name or alias (case-insensitive)"""
        for table in self.tables:
            if _same(table.name, name):
                return table
        for table in self.tables:
            if table.alias and _same(table.alias, name):
                return table
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "tables": [t.to_dict() for t in self.tables],
        }

    def to_json(self, indent: int = 2) -> str:
        """Export as JSON"""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_yaml(self) -> str:
        """Export as YAML"""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)

    def save(self, path: str) -> None:
        """Save schema to file (JSON or YAML based on extension)"""
        if path.endswith('.yaml') or path.endswith('.yml'):
            content = self.to_yaml()
        elif path.endswith('.json'):
            content = self.to_json()
        else:
            raise SchemaModelError(f"Unsupported schema file type: {path}", source_path=path)

        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)

    @classmethod
    def load(cls, path: str) -> "DataSchema":
        """Load schema from a YAML or JSON file"""
        with open(path, 'r', encoding='utf-8') as f:
            try:
                if path.endswith('.yaml') or path.endswith('.yml'):
                    data = yaml.safe_load(f)
                elif path.endswith('.json'):
                    data = json.load(f)
                else:
                    raise SchemaModelError(f"Unsupported schema file type: {path}", source_path=path)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise SchemaModelError(
                    f"Could not parse schema file: {path}", source_path=path, original_error=e
                ) from e

        return cls.from_dict({} if data is None else data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataSchema":
        """Create schema from dictionary"""
        if not isinstance(data, dict):
            raise SchemaModelError("Schema snapshot must be a mapping")

        tables = data.get("tables") or []
        if not isinstance(tables, list):
            raise SchemaModelError("Schema tables must be a list")

        return cls(
            name=data.get("name", "default"),
            tables=[DataTable.from_dict(t) for t in tables],
        )
