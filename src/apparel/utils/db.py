"""Relational schema management for SQLAlchemy-backed providers.

The in-memory provider needs no schema; only ``sqlite`` and ``postgresql``
providers are touched here.
"""

from protean.domain import Domain
from sqlalchemy import create_engine, inspect

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield name, provider


def setup_db(domain: Domain) -> list[str]:
    """Create tables for every aggregate and entity and return the table names."""
    tables = []
    with domain.domain_context():
        for name, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # DAOs register their tables on the provider's metadata when first built
            for record in [*domain.registry.aggregates.values(), *domain.registry.entities.values()]:
                if record.cls.meta_.provider == name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            tables.extend(inspect(engine).get_table_names())
    return tables


def drop_db(domain: Domain) -> None:
    """Drop every table known to the SQL providers."""
    with domain.domain_context():
        for _, provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
