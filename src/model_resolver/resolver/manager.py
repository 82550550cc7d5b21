"""
Model Resolver

The main entry point: resolves names and infers structure for a whole
schema snapshot, in the order the individual steps depend on:

1. Aliases for every table and column (relation probes also match aliases)
2. Relation inference for every ordered pair of distinct tables
3. Table repair, once all relations across the schema are known
4. Display names from descriptions

Usage:
    resolver = ModelResolver()
    report = resolver.resolve_schema(DataSchema.load("legacy.yaml"))
    for name in report.tables_without_primary_key:
        print(f"{name} has no primary key")

Every step is also exposed on its own (``resolve_alias``, ``connect``,
``fix``...) for callers that drive the sequence themselves.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from .fixer import TableFixer
from .identifiers import create_identifier_policy
from .names import NameResolver
from .relations import RelationshipInference
from ..config import ResolverConfig, SystemConfig, get_config
from ..schema.models import DataColumn, DataSchema, DataTable
from ..utils import ResolverMetrics, get_logger, get_metrics_collector, log_context, log_operation

logger = get_logger(__name__)


@dataclass
class ResolutionReport:
    """What one ``resolve_schema`` run derived"""
    schema_name: str
    tables: int = 0
    aliases_assigned: int = 0
    relations_created: int = 0
    indexes_created: int = 0
    primary_keys_derived: int = 0
    tables_without_primary_key: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_name": self.schema_name,
            "tables": self.tables,
            "aliases_assigned": self.aliases_assigned,
            "relations_created": self.relations_created,
            "indexes_created": self.indexes_created,
            "primary_keys_derived": self.primary_keys_derived,
            "tables_without_primary_key": self.tables_without_primary_key,
            "duration_ms": self.duration_ms,
        }


class ModelResolver:
    """
    Name resolution and structural inference over a schema model

    The name resolver is injected rather than looked up globally; pass a
    ``NameResolver`` built with another identifier policy to target a
    different code-generation language.
    """

    def __init__(
        self,
        name_resolver: Optional[NameResolver] = None,
        config: Optional[ResolverConfig] = None,
    ):
        self.config = config or (name_resolver.config if name_resolver else ResolverConfig())
        self.names = name_resolver or NameResolver(config=self.config)
        self.inference = RelationshipInference()
        self.fixer = TableFixer(self.names)

    # Name handling

    def resolve_column_alias(self, column: DataColumn) -> Optional[str]:
        return self.names.resolve_column_alias(column)

    def resolve_alias(self, name: Optional[str]) -> Optional[str]:
        return self.names.resolve_alias(name)

    def strip_prefix(self, name: Optional[str]) -> Optional[str]:
        return self.names.strip_prefix(name)

    def normalize_case(self, name: Optional[str]) -> Optional[str]:
        return self.names.normalize_case(name)

    def is_reserved_identifier(self, name: Optional[str]) -> bool:
        return self.names.is_reserved_identifier(name)

    def get_display_name(self, name: Optional[str], description: Optional[str]) -> Optional[str]:
        return self.names.get_display_name(name, description)

    # Model handling

    def connect(self, table: DataTable, rtable: DataTable) -> DataTable:
        return self.inference.connect(table, rtable)

    def guess_relation(
        self,
        table: DataTable,
        rtable: DataTable,
        rname: Optional[str],
        column: DataColumn,
        name: Optional[str],
    ) -> bool:
        return self.inference.guess_relation(table, rtable, rname, column, name)

    def fix(self, table: DataTable) -> DataTable:
        return self.fixer.fix(table)

    def fix_column(self, column: DataColumn) -> DataColumn:
        return self.fixer.fix_column(column)

    def resolve_schema(self, schema: Union[DataSchema, Iterable[DataTable]]) -> ResolutionReport:
        """Run alias resolution, relation inference and repair over all tables"""
        if isinstance(schema, DataSchema):
            schema_name, tables = schema.name, schema.tables
        else:
            schema_name, tables = "default", list(schema)

        report = ResolutionReport(schema_name=schema_name, tables=len(tables))
        relations_before = sum(len(t.relations) for t in tables)
        indexes_before = sum(len(t.indexes) for t in tables)
        keyless_before = {id(t) for t in tables if not t.primary_keys}

        start = time.time()
        with log_context(schema_name=schema_name), \
                log_operation(logger, "resolve_schema", tables=len(tables)) as ctx:
            report.aliases_assigned = self._assign_aliases(tables)

            for table in tables:
                for rtable in tables:
                    if table is not rtable:
                        self.connect(table, rtable)

            for table in tables:
                with log_context(table_name=table.name):
                    self.fix(table)

            if self.config.fill_display_names:
                self._assign_display_names(tables)

            report.relations_created = sum(len(t.relations) for t in tables) - relations_before
            report.indexes_created = sum(len(t.indexes) for t in tables) - indexes_before
            report.primary_keys_derived = sum(
                1 for t in tables if id(t) in keyless_before and t.primary_keys
            )
            report.tables_without_primary_key = [t.name for t in tables if not t.primary_keys]
            ctx["relations_created"] = report.relations_created

        duration = time.time() - start
        report.duration_ms = round(duration * 1000, 2)

        for name in report.tables_without_primary_key:
            logger.warning(f"Table {name} has no primary key and none could be derived")

        ResolverMetrics.record_schema_resolution(
            duration, report.tables, len(report.tables_without_primary_key)
        )
        return report

    def _assign_aliases(self, tables: List[DataTable]) -> int:
        overwrite = self.config.overwrite_aliases
        assigned = 0
        for table in tables:
            if overwrite or not table.alias:
                table.alias = self.resolve_alias(table.name)
                assigned += 1
            if overwrite:
                # collisions are checked against aliases already reassigned
                for column in table.columns:
                    column.alias = None
            for column in table.columns:
                if not column.alias:
                    column.alias = self.resolve_column_alias(column)
                    assigned += 1
        return assigned

    def _assign_display_names(self, tables: List[DataTable]) -> None:
        for table in tables:
            if not table.display_name:
                table.display_name = self.get_display_name(table.alias or table.name, table.description)
            for column in table.columns:
                if not column.display_name:
                    column.display_name = self.get_display_name(
                        column.alias or column.name, column.description
                    )


def create_resolver(config: Optional[SystemConfig] = None) -> ModelResolver:
    """
    Factory function to build a resolver from system configuration

    Args:
        config: System configuration; the global configuration when omitted

    Returns:
        Resolver using the identifier policy of the configured target language

    Raises:
        ConfigurationError: If no policy is registered for the target language
    """
    config = config or get_config()
    collector = get_metrics_collector()
    if config.metrics_enabled:
        collector.enable()
    else:
        collector.disable()

    policy = create_identifier_policy(config.resolver.target_language)
    return ModelResolver(NameResolver(policy=policy, config=config.resolver))
