"""Catalog reading and model building for sailsgen.

This module turns MySQL catalog rows into normalized, framework-neutral
model descriptions.
"""

from .models import CatalogColumnRow, KeyRole, TableType, NormalizedColumn, Relationship, Model
from .base import CatalogReader
from .type_mappers import TypeMapper, PassthroughTypeMapper, LegacyTypeMapper, get_type_mapper
from .naming import normalize_identity, model_file_name
from .enum_parser import parse_enum_values
from .normalizer import ColumnNormalizer, merge_columns
from .relationship import RelationshipResolver
from .builder import ModelBuilder
from .batch import BatchResult, ModelService

__all__ = [
    # Data models
    "CatalogColumnRow",
    "KeyRole",
    "TableType",
    "NormalizedColumn",
    "Relationship",
    "Model",
    # Base classes
    "CatalogReader",
    # Type mappers
    "TypeMapper",
    "PassthroughTypeMapper",
    "LegacyTypeMapper",
    "get_type_mapper",
    # Normalization
    "normalize_identity",
    "model_file_name",
    "parse_enum_values",
    "ColumnNormalizer",
    "merge_columns",
    "RelationshipResolver",
    "ModelBuilder",
    # Orchestration
    "BatchResult",
    "ModelService",
]
