"""Schema management for relational persistence providers.

The default configuration keeps everything in memory, where both functions
are no-ops. Once `[databases.default]` in domain.toml points at a sqlite or
postgresql provider, they create or drop the tables behind the storefront
aggregates.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in RELATIONAL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider) -> None:
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            # Building the DAO registers the model's table on the provider metadata
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create tables for the domain's relational providers. Returns the provider names touched."""
    touched = []
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            touched.append(provider.name)
    return touched


def drop_db(domain: Domain) -> list[str]:
    """Drop the tables `setup_db` created."""
    touched = []
    with domain.domain_context():
        for provider in _relational_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            touched.append(provider.name)
    return touched
