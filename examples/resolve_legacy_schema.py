"""
Legacy Schema Resolution Example

Loads a snapshot of a database without foreign keys, derives aliases,
relations, indexes and primary keys, and writes the resolved snapshot.

Run this example:
    python examples/resolve_legacy_schema.py
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from model_resolver import DataSchema, create_resolver, get_config, get_metrics_collector, setup_logging


def main():
    config = get_config()
    setup_logging(level=config.log_level, json_format=config.json_logs)

    source = Path(__file__).parent / "legacy_schema.yaml"
    schema = DataSchema.load(str(source))

    resolver = create_resolver(config)
    report = resolver.resolve_schema(schema)

    print("=" * 60)
    print(f"Schema: {report.schema_name} ({report.tables} tables)")
    print("=" * 60)
    print(f"Aliases assigned:     {report.aliases_assigned}")
    print(f"Relations inferred:   {report.relations_created}")
    print(f"Indexes created:      {report.indexes_created}")
    print(f"Primary keys derived: {report.primary_keys_derived}")

    for table in schema.tables:
        print(f"\n{table.name} -> {table.alias} ({table.display_name})")
        for column in table.columns:
            flags = []
            if column.primary_key:
                flags.append("PK")
            if column.identity:
                flags.append("identity")
            print(f"  {column.name:14s} -> {column.alias:14s} {' '.join(flags)}")
        for relation in table.relations:
            kind = "1:1" if relation.unique else "N:1"
            print(f"  {relation.column} -> {relation.relation_table}.{relation.relation_column} [{kind}]")

    target = "/tmp/resolved_schema.yaml"
    schema.save(target)
    print(f"\nResolved snapshot written to {target}")

    if config.metrics_enabled:
        print("\nMetrics:")
        print(get_metrics_collector().export_json())


if __name__ == "__main__":
    main()
