"""
Model Resolver
==============

Name resolution and structural inference for relational schema models
reverse-engineered from a physical database.

Features:
- Clean, code-safe aliases from raw table/column names (prefix stripping,
  case normalization, keyword collision avoidance)
- Relation inference from ``<Table><Column>`` column naming, type checked
- Index, primary key and alias repair per table
- YAML/JSON schema snapshots

Quick Start:
------------

    from model_resolver import DataSchema, create_resolver

    schema = DataSchema.load("legacy_schema.yaml")
    report = create_resolver().resolve_schema(schema)

    print(report.relations_created)
    schema.save("resolved_schema.yaml")
"""

__version__ = "1.0.0"

from .config import (
    TargetLanguage,
    LogLevel,
    ResolverConfig,
    SystemConfig,
    get_config,
    set_config,
    reset_config,
)

from .schema import (
    DataColumn,
    DataIndex,
    DataRelation,
    DataTable,
    DataSchema,
)

from .resolver import (
    IdentifierPolicy,
    CSharpIdentifierPolicy,
    PythonIdentifierPolicy,
    IdentifierPolicyRegistry,
    register_identifier_policy,
    create_identifier_policy,
    NameResolver,
    RelationshipInference,
    TableFixer,
    ModelResolver,
    ResolutionReport,
    create_resolver,
)

from .utils import (
    setup_logging,
    get_logger,
    ResolverError,
    SchemaModelError,
    ConfigurationError,
    get_metrics_collector,
)

__all__ = [
    "__version__",
    # Configuration
    "TargetLanguage",
    "LogLevel",
    "ResolverConfig",
    "SystemConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Schema model
    "DataColumn",
    "DataIndex",
    "DataRelation",
    "DataTable",
    "DataSchema",
    # Resolver
    "IdentifierPolicy",
    "CSharpIdentifierPolicy",
    "PythonIdentifierPolicy",
    "IdentifierPolicyRegistry",
    "register_identifier_policy",
    "create_identifier_policy",
    "NameResolver",
    "RelationshipInference",
    "TableFixer",
    "ModelResolver",
    "ResolutionReport",
    "create_resolver",
    # Utilities
    "setup_logging",
    "get_logger",
    "ResolverError",
    "SchemaModelError",
    "ConfigurationError",
    "get_metrics_collector",
]
