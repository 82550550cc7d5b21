"""
Schema Model Package
Tables, columns, indexes and relations the resolver reads and repairs
"""
from .models import (
    DataColumn,
    DataIndex,
    DataRelation,
    DataTable,
    DataSchema,
)

__all__ = [
    "DataColumn",
    "DataIndex",
    "DataRelation",
    "DataTable",
    "DataSchema",
]
