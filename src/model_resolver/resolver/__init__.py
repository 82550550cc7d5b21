"""
Resolver Module

Name resolution and structural inference for reverse-engineered schemas:
- Derive code-safe aliases from raw table/column names
- Guess relations between tables from column naming
- Repair indexes, primary keys and alias collisions per table

Quick helpers:
    resolver = create_resolver()
    report = resolver.resolve_schema(schema)
"""

from .identifiers import (
    IdentifierPolicy,
    CSharpIdentifierPolicy,
    PythonIdentifierPolicy,
    IdentifierPolicyRegistry,
    register_identifier_policy,
    create_identifier_policy,
)

from .names import NameResolver

from .relations import RelationshipInference

from .fixer import TableFixer

from .manager import (
    ModelResolver,
    ResolutionReport,
    create_resolver,
)

__all__ = [
    # Identifier policies
    "IdentifierPolicy",
    "CSharpIdentifierPolicy",
    "PythonIdentifierPolicy",
    "IdentifierPolicyRegistry",
    "register_identifier_policy",
    "create_identifier_policy",

    # Engine
    "NameResolver",
    "RelationshipInference",
    "TableFixer",

    # Entry point
    "ModelResolver",
    "ResolutionReport",
    "create_resolver",
]
