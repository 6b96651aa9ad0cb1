"""Shared pytest fixtures for sailsgen tests."""

import pytest

from sailsgen.database import ModelBuilder, PassthroughTypeMapper
from sailsgen.database.models import KeyRole
from tests.fixtures import FakeCatalogReader, make_row
from tests.fixtures.fake_catalog import active_users_rows, users_rows


@pytest.fixture
def type_mapper():
    return PassthroughTypeMapper()


@pytest.fixture
def builder():
    return ModelBuilder()


@pytest.fixture
def users_table_rows():
    """Catalog rows for the users table."""
    return users_rows()


@pytest.fixture
def active_users_view_rows():
    """Catalog rows for the active_users view."""
    return active_users_rows()


@pytest.fixture
def shop_catalog():
    """A schema with two good tables, one view and one table with an unknown type."""
    return {
        "shop": {
            "users": users_rows(),
            "roles": [
                make_row("roles", "id", "int", column_type="int(11)", extra="auto_increment",
                         column_key=KeyRole.PRIMARY, nullable=False),
                make_row("roles", "name", "varchar", column_type="varchar(64)", nullable=False),
            ],
            "active_users": active_users_rows(),
            "shapes": [
                make_row("shapes", "id", "int", column_key=KeyRole.PRIMARY, nullable=False),
                make_row("shapes", "outline", "geometry"),
            ],
        },
        "audit": {
            "events": [
                make_row("events", "id", "bigint", column_type="bigint(20)",
                         column_key=KeyRole.PRIMARY, nullable=False),
                make_row("events", "payload", "json"),
            ],
        },
    }


@pytest.fixture
def fake_reader(shop_catalog):
    return FakeCatalogReader(shop_catalog)
