"""Shared fixtures: everything runs against the in-memory row store."""

import pytest

from comcraft.catalog.service_catalog import ServiceCatalog
from comcraft.orders.order_provisioner import OrderProvisioner
from comcraft.permissions.access_gate import CommandAccessGate
from comcraft.persistence import (
    CommandPermissionRepository,
    CustomerRepository,
    InMemoryRowStore,
    OrderRepository,
)
from comcraft.pricing.quote_engine import QuoteEngine


@pytest.fixture
def catalog():
    return ServiceCatalog()


@pytest.fixture
def engine(catalog):
    return QuoteEngine(catalog)


@pytest.fixture
def store():
    return InMemoryRowStore()


@pytest.fixture
def provisioner(catalog, engine, store):
    return OrderProvisioner(
        catalog, engine, CustomerRepository(store), OrderRepository(store)
    )


@pytest.fixture
def permission_repo(store):
    return CommandPermissionRepository(store)


@pytest.fixture
def gate(permission_repo):
    return CommandAccessGate(permission_repo)
