"""
Table Repair

Makes one table internally consistent once relations have been proposed.
The steps run in a fixed order because each relies on the previous ones:
1. Single-column indexes decide the uniqueness of their relations
2. Every relation source column gets an index
3. A primary key is derived when none is declared
4. Identity columns get a unique index
5. Index unique/primary flags follow their columns
6. Column aliases are made unique and non-reserved
"""
from __future__ import annotations

from typing import List, Optional

from .names import NameResolver
from ..schema.models import DataColumn, DataTable
from ..utils import ResolverMetrics, get_logger

logger = get_logger(__name__)


class TableFixer:
    """Whole-table consistency repair"""

    def __init__(self, name_resolver: Optional[NameResolver] = None):
        self.name_resolver = name_resolver or NameResolver()

    def fix(self, table: DataTable) -> DataTable:
        self._sync_relations_with_indexes(table)
        self._index_relation_columns(table)
        self._derive_primary_key(table)
        self._index_identity_columns(table)
        self._sync_index_flags(table)

        for column in table.columns:
            self.fix_column(column)
        self._resolve_alias_collisions(table)

        return table

    def fix_column(self, column: DataColumn) -> DataColumn:
        """Per-column repair; fills in a missing alias"""
        if not column.alias:
            column.alias = self.name_resolver.resolve_column_alias(column)
        return column

    def _sync_relations_with_indexes(self, table: DataTable) -> None:
        for index in table.indexes:
            if len(index.columns) != 1:
                continue

            relation = table.get_relation(index.columns[0])
            if relation is None:
                continue

            relation.unique = index.unique
            relation.computed = index.computed

    def _index_relation_columns(self, table: DataTable) -> None:
        for relation in table.relations:
            column = table.get_column(relation.column)
            if column is None or column.primary_key:
                continue

            if table.get_index(relation.column) is None:
                index = table.create_index()
                index.columns = [relation.column]
                index.unique = relation.unique
                index.computed = True
                table.indexes.append(index)
                ResolverMetrics.record_index_created("relation")
                logger.debug(f"Created index on {table.name}.{relation.column} (unique={index.unique})")

    def _derive_primary_key(self, table: DataTable) -> None:
        if table.primary_keys:
            return

        tiers = (
            ("primary_index", [i for i in table.indexes if i.primary_key and i.columns]),
            ("unique_index", [i for i in table.indexes if i.unique and i.columns]),
            ("first_index", [i for i in table.indexes if i.columns][:1]),
        )
        for tier, indexes in tiers:
            for index in indexes:
                self._promote(table, table.get_columns(index.columns), tier)
            if table.primary_keys:
                return

        # last resort: the first auto-increment column
        for column in table.columns:
            if column.identity:
                self._promote(table, [column], "identity")
                return

    def _promote(self, table: DataTable, columns: List[DataColumn], tier: str) -> None:
        for column in columns:
            column.primary_key = True
        if columns:
            ResolverMetrics.record_primary_key_derived(tier)
            logger.debug(
                f"Derived primary key for {table.name} from {tier}: "
                f"{', '.join(c.name for c in columns)}"
            )

    def _index_identity_columns(self, table: DataTable) -> None:
        for column in table.columns:
            if not column.identity or column.primary_key:
                continue

            index = table.get_index(column.name)
            if index is None:
                index = table.create_index()
                index.columns = [column.name]
                index.computed = True
                table.indexes.append(index)
                ResolverMetrics.record_index_created("identity")
            # existing or not, it has to be unique
            index.unique = True

    def _sync_index_flags(self, table: DataTable) -> None:
        for index in table.indexes:
            columns = table.get_columns(index.columns)
            if not columns:
                continue

            if not index.unique:
                index.unique = all(c.identity for c in columns)
            if not index.primary_key:
                index.primary_key = all(c.primary_key for c in columns)

    def _resolve_alias_collisions(self, table: DataTable) -> None:
        seen = set()
        if table.alias:
            seen.add(table.alias.lower())

        resolver = self.name_resolver
        for column in table.columns:
            alias = column.alias
            if not alias:
                continue

            if alias.lower() in seen or resolver.is_reserved_identifier(alias):
                for i in range(2, len(table.columns) + 3):
                    candidate = f"{alias}{i}"
                    if candidate.lower() not in seen and not resolver.is_reserved_identifier(candidate):
                        logger.debug(f"Renamed alias {table.name}.{column.name}: {alias} -> {candidate}")
                        column.alias = candidate
                        ResolverMetrics.record_alias_renamed()
                        break

            seen.add(column.alias.lower())
