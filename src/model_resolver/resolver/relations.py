"""
Relationship Inference

Guesses relations between tables from column naming: a column called
``<RelatedTable><RelatedColumn>`` (for example ``RoleID`` next to table
``Role`` with column ``ID``) points at that table, provided both columns
share the same data type. Every accepted guess produces a pair of mirrored
relations, one on each table.
"""
from __future__ import annotations

from typing import Optional

from ..schema.models import DataColumn, DataRelation, DataTable
from ..utils import ResolverMetrics, get_logger

logger = get_logger(__name__)


def _differs(name: Optional[str], alias: Optional[str]) -> bool:
    """True if an alias is set and is not just the raw name in another case"""
    return bool(alias) and alias.lower() != (name or "").lower()


class RelationshipInference:
    """
    Naming-convention relation guesser

    Usage:
        inference = RelationshipInference()
        for table in tables:
            for rtable in tables:
                if table is not rtable:
                    inference.connect(table, rtable)
    """

    def connect(self, table: DataTable, rtable: DataTable) -> DataTable:
        """Try every non-key column of ``table`` against ``rtable``"""
        for column in table.columns:
            if column.primary_key or column.identity:
                continue

            if self.guess_relation(table, rtable, rtable.name, column, column.name):
                continue
            if _differs(column.name, column.alias):
                if self.guess_relation(table, rtable, rtable.name, column, column.alias):
                    continue

            # the table alias only adds probes when it is not the raw name
            if not _differs(rtable.name, rtable.alias):
                continue

            if self.guess_relation(table, rtable, rtable.alias, column, column.name):
                continue
            if _differs(column.name, column.alias):
                self.guess_relation(table, rtable, rtable.alias, column, column.alias)

        return table

    def guess_relation(
        self,
        table: DataTable,
        rtable: DataTable,
        rname: Optional[str],
        column: DataColumn,
        name: Optional[str],
    ) -> bool:
        """
        Relate ``column`` (probed as ``name``) to ``rtable`` (probed as ``rname``)

        Succeeds when ``name`` is ``rname`` followed by the name of a column
        of ``rtable`` with the same data type. Returns False without touching
        either table otherwise.
        """
        if not rname or not name:
            return False
        if len(name) <= len(rname) or not name.lower().startswith(rname.lower()):
            return False

        key = name[len(rname):]
        target = rtable.get_column(key)
        # both ends of a guessed relation must share a type
        if target is None or target.data_type != column.data_type:
            return False

        relation = table.get_relation(column.name, rtable.name, target.name)
        if relation is None:
            relation = table.create_relation()
            relation.column = column.name
            relation.relation_table = rtable.name
            relation.relation_column = target.name
            # many-to-one unless the source column is itself unique (one-to-one)
            relation.unique = False
            if column.primary_key or column.identity:
                relation.unique = True
            else:
                index = table.get_index(column.name)
                if index is not None and index.unique:
                    relation.unique = True

            relation.computed = True
            table.relations.append(relation)
            ResolverMetrics.record_relation_inferred(mirrored=False)
            logger.debug(
                f"Inferred relation {table.name}.{column.name} -> {rtable.name}.{target.name} "
                f"(unique={relation.unique})"
            )

        if rtable.get_relation(target.name, table.name, column.name) is not None:
            return True

        mirror = self._create_mirror(table, rtable, column, target)
        rtable.relations.append(mirror)
        ResolverMetrics.record_relation_inferred(mirrored=True)
        logger.debug(
            f"Inferred relation {rtable.name}.{target.name} -> {table.name}.{column.name} "
            f"(unique={mirror.unique})"
        )

        return True

    def _create_mirror(
        self,
        table: DataTable,
        rtable: DataTable,
        column: DataColumn,
        target: DataColumn,
    ) -> DataRelation:
        mirror = rtable.create_relation()
        mirror.column = target.name
        mirror.relation_table = table.name
        mirror.relation_column = column.name
        mirror.unique = True
        # a target that is neither a key nor uniquely indexed is the "many" side
        if not target.primary_key and not target.identity:
            index = rtable.get_index(target.name)
            if index is None or not index.unique:
                mirror.unique = False

        mirror.computed = True
        return mirror
