"""Test fixtures package."""

from .fake_catalog import FakeCatalogReader, make_row

__all__ = [
    "FakeCatalogReader",
    "make_row",
]
