"""Tests for DefaultCacheKeyBuilder."""

import pytest

from guardql.infrastructure.key_builders.default import DefaultCacheKeyBuilder
from guardql.utils.hashing import digest_permissions


class TestDefaultCacheKeyBuilder:
    """Tests for DefaultCacheKeyBuilder."""

    @pytest.fixture
    def key_builder(self) -> DefaultCacheKeyBuilder:
        """Create a key builder for testing."""
        return DefaultCacheKeyBuilder(prefix="test")

    def test_key_format(self, key_builder: DefaultCacheKeyBuilder) -> None:
        key = key_builder.build_permissions_key("hasPermissions", ["x", "y"])

        assert key == f"test:hasPermissions:{digest_permissions(['x', 'y'])}"

    def test_deterministic(self, key_builder: DefaultCacheKeyBuilder) -> None:
        """Same requirement, same key, whatever the sequence type."""
        assert key_builder.build_permissions_key(
            "hasPermissions", ["x", "y"]
        ) == key_builder.build_permissions_key("hasPermissions", ("x", "y"))

    def test_order_sensitive(self, key_builder: DefaultCacheKeyBuilder) -> None:
        assert key_builder.build_permissions_key(
            "hasPermissions", ["x", "y"]
        ) != key_builder.build_permissions_key("hasPermissions", ["y", "x"])

    def test_directive_name_in_key(self, key_builder: DefaultCacheKeyBuilder) -> None:
        assert key_builder.build_permissions_key(
            "hasPermissions", ["x"]
        ) != key_builder.build_permissions_key("requires", ["x"])

    def test_default_prefix(self) -> None:
        key = DefaultCacheKeyBuilder().build_permissions_key("hasPermissions", [])

        assert key.startswith("guardql:hasPermissions:")


class TestDigestPermissions:
    """Tests for digest_permissions."""

    def test_length(self) -> None:
        assert len(digest_permissions(["x"])) == 16

    def test_duplicates_significant(self) -> None:
        assert digest_permissions(["x"]) != digest_permissions(["x", "x"])

    def test_empty(self) -> None:
        assert digest_permissions([]) == digest_permissions(())
