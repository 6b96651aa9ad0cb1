"""Tests for relationship resolution."""

from typing import Iterator

from sailsgen.database.models import NormalizedColumn, Relationship
from sailsgen.database.relationship import RelationshipResolver


def _column(name, references=None):
    return NormalizedColumn(name=name, type="integer", references=references)


class TestRelationshipResolver:
    """Test deduplication of foreign-key references."""

    def test_many_columns_one_target(self):
        columns = [
            _column("created_by", "users"),
            _column("updated_by", "users"),
            _column("owner_id", "USERS"),
        ]
        relationships = RelationshipResolver().resolve(columns)

        assert len(relationships) == 1
        assert Relationship(target="users") in relationships

    def test_distinct_targets(self):
        columns = [
            _column("role_id", "roles"),
            _column("team_id", "team_members"),
            _column("name"),
        ]
        relationships = RelationshipResolver().resolve(columns)

        assert {r.target for r in relationships} == {"roles", "teamMembers"}
        table_names = {r.target_table for r in relationships}
        assert table_names == {"roles", "team_members"}

    def test_no_references(self):
        assert RelationshipResolver().resolve([_column("id"), _column("name")]) == frozenset()

    def test_referencing_columns_is_lazy(self):
        resolver = RelationshipResolver()
        columns = [_column("id"), _column("role_id", "roles")]
        referencing = resolver.referencing_columns(columns)

        assert isinstance(referencing, Iterator)
        assert [c.name for c in referencing] == ["role_id"]

    def test_identity_equality_ignores_physical_name(self):
        assert Relationship(target="roles", target_table="roles") == Relationship(target="roles", target_table="ROLES")
