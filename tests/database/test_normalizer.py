"""Tests for column normalization."""

import pytest

from sailsgen.database.models import KeyRole, NormalizedColumn
from sailsgen.database.normalizer import ColumnNormalizer, merge_columns
from sailsgen.database.type_mappers import LegacyTypeMapper
from sailsgen.errors import MalformedEnumDefinitionError, UnrecognizedTypeError
from tests.fixtures import make_row


@pytest.fixture
def normalizer():
    return ColumnNormalizer()


class TestNormalize:
    """Test single-row normalization rules."""

    def test_required_from_nullability(self, normalizer):
        assert normalizer.normalize(make_row(nullable=False)).required is True
        column = normalizer.normalize(make_row(nullable=True))
        assert column.required is False
        assert column.allow_null is True

    def test_auto_increment(self, normalizer):
        assert normalizer.normalize(make_row(extra="auto_increment")).auto_increment is True
        assert normalizer.normalize(make_row(extra="AUTO_INCREMENT")).auto_increment is True
        assert normalizer.normalize(make_row(extra="")).auto_increment is False

    def test_key_roles(self, normalizer):
        indexed = normalizer.normalize(make_row(column_key=KeyRole.INDEX))
        assert indexed.index is True
        assert indexed.unique is False

        unique = normalizer.normalize(make_row(column_key=KeyRole.UNIQUE))
        assert unique.unique is True

        primary = normalizer.normalize(make_row(column_key=KeyRole.PRIMARY))
        assert primary.is_primary_key_candidate is True
        assert primary.unique is False

    def test_size_for_sized_types(self, normalizer):
        assert normalizer.normalize(make_row(data_type="varchar", column_type="varchar(32)")).size == 32
        assert normalizer.normalize(make_row(data_type="int", column_type="int(11) unsigned")).size == 11

    def test_no_size_when_absent_or_unsized(self, normalizer):
        assert normalizer.normalize(make_row(data_type="int", column_type="int")).size is None
        assert normalizer.normalize(make_row(data_type="decimal", column_type="decimal(10)")).size is None
        assert normalizer.normalize(make_row(data_type="text", column_type="text")).size is None

    def test_required_without_default_has_no_default(self, normalizer):
        column = normalizer.normalize(make_row(nullable=False, column_default=None))
        assert column.has_default is False
        assert column.default is None

    def test_required_with_empty_default(self, normalizer):
        column = normalizer.normalize(make_row(data_type="varchar", nullable=False, column_default=""))
        assert column.has_default is True
        assert column.default == ""

    def test_nullable_without_default_defaults_to_null(self, normalizer):
        column = normalizer.normalize(make_row(nullable=True, column_default=None))
        assert column.has_default is True
        assert column.default is None

    def test_enum_values(self, normalizer):
        column = normalizer.normalize(make_row(
            column_name="status",
            data_type="enum",
            column_type="enum('active','inactive')",
            nullable=True,
            column_default="active",
        ))
        assert column.type == "string"
        assert column.required is False
        assert column.default == "active"
        assert column.enum_values == ["active", "inactive"]
        assert column.size is None

    def test_malformed_enum(self, normalizer):
        with pytest.raises(MalformedEnumDefinitionError):
            normalizer.normalize(make_row(data_type="enum", column_type="enum(active)"))

    def test_reference_target(self, normalizer):
        column = normalizer.normalize(make_row(column_name="role_id", referenced_table_name="roles"))
        assert column.references == "roles"
        assert normalizer.normalize(make_row()).references is None

    def test_unknown_type(self, normalizer):
        with pytest.raises(UnrecognizedTypeError) as exc_info:
            normalizer.normalize(make_row("maps", "outline", "geometry"))
        assert exc_info.value.details["table"] == "maps"
        assert exc_info.value.details["column"] == "outline"

    def test_legacy_policy(self):
        column = ColumnNormalizer(LegacyTypeMapper()).normalize(make_row(column_type="int(11)"))
        assert column.type == "number"
        assert column.size == 11


class TestDuplicateRows:
    """Test collapsing of rows produced once per key usage."""

    def test_one_column_per_name_in_order(self, normalizer):
        rows = [
            make_row(column_name="id", column_key=KeyRole.PRIMARY, nullable=False),
            make_row(column_name="owner_id", column_key=KeyRole.UNIQUE),
            make_row(column_name="owner_id", column_key=KeyRole.UNIQUE, referenced_table_name="owners"),
            make_row(column_name="name", data_type="varchar"),
        ]
        columns = normalizer.normalize_rows(rows)

        assert [c.name for c in columns] == ["id", "owner_id", "name"]
        owner = columns[1]
        assert owner.references == "owners"
        assert owner.unique is True

    def test_later_rows_do_not_clobber(self, normalizer):
        rows = [
            make_row(column_name="owner_id", referenced_table_name="owners", column_default="1"),
            make_row(column_name="owner_id", referenced_table_name="people", column_default="2"),
        ]
        (column,) = normalizer.normalize_rows(rows)
        assert column.references == "owners"
        assert column.default == "1"


class TestMergeColumns:
    """Test the explicit merge function."""

    def test_fills_missing_reference(self):
        existing = NormalizedColumn(name="a_id", type="integer", key_role=KeyRole.UNIQUE)
        incoming = NormalizedColumn(name="a_id", type="integer", references="a")
        merged = merge_columns(existing, incoming)

        assert merged is existing
        assert merged.references == "a"
        assert merged.key_role == KeyRole.UNIQUE

    def test_keeps_existing_attributes(self):
        existing = NormalizedColumn(
            name="a_id", type="integer", key_role=KeyRole.UNIQUE,
            has_default=True, default="0", references="a",
        )
        incoming = NormalizedColumn(
            name="a_id", type="integer", key_role=KeyRole.NONE,
            has_default=True, default="9", references="b",
        )
        merged = merge_columns(existing, incoming)

        assert merged.references == "a"
        assert merged.unique is True
        assert merged.default == "0"
