"""Unit tests for IdentifierRegistry.

Tests cover:
- Sequential id assignment in discovery order
- Bidirectional lookup
- Duplicate, unknown-name and invalid-id errors
"""

import pytest

from orderguard.errors import DuplicateNameError, InvalidIdError, RegistryError, UnknownNameError
from orderguard.graph.registry import FileIdentity, IdentifierRegistry


class TestRegistration:
    """Test id assignment."""

    def test_ids_assigned_in_discovery_order(self):
        """Test that ids start at zero and follow registration order."""
        registry = IdentifierRegistry()

        assert registry.register("b.h") == 0
        assert registry.register("a.h") == 1
        assert registry.register("c.h") == 2
        assert len(registry) == 3

    def test_from_names(self):
        """Test bulk construction keeps iteration order."""
        registry = IdentifierRegistry.from_names(["x.h", "y.h"])

        assert registry.names == ("x.h", "y.h")
        assert list(registry.identities()) == [
            FileIdentity(name="x.h", id=0),
            FileIdentity(name="y.h", id=1),
        ]

    def test_duplicate_name_rejected(self):
        """Test that registering a name twice fails and names the file."""
        registry = IdentifierRegistry()
        registry.register("a.h")

        with pytest.raises(DuplicateNameError, match="a.h") as exc_info:
            registry.register("a.h")

        assert exc_info.value.name == "a.h"
        assert len(registry) == 1

    def test_duplicate_in_from_names(self):
        """Test bulk construction rejects duplicates too."""
        with pytest.raises(DuplicateNameError):
            IdentifierRegistry.from_names(["a.h", "b.h", "a.h"])

    def test_empty_registry(self):
        """Test a registry with no files."""
        registry = IdentifierRegistry()

        assert len(registry) == 0
        assert registry.names == ()
        assert "a.h" not in registry


class TestLookup:
    """Test name <-> id lookup."""

    @pytest.fixture
    def registry(self) -> IdentifierRegistry:
        return IdentifierRegistry.from_names(["a.h", "b.h", "c.h"])

    def test_round_trip(self, registry):
        """Test that every registered name maps back to itself."""
        for name in registry.names:
            assert registry.name_of(registry.id_of(name)) == name

    def test_contains(self, registry):
        assert "b.h" in registry
        assert "d.h" not in registry

    def test_unknown_name(self, registry):
        """Test that unknown names raise instead of defaulting."""
        with pytest.raises(UnknownNameError, match="d.h") as exc_info:
            registry.id_of("d.h")

        assert exc_info.value.name == "d.h"
        assert isinstance(exc_info.value, RegistryError)

    @pytest.mark.parametrize("file_id", [-1, 3, 100])
    def test_invalid_id(self, registry, file_id):
        """Test that out-of-range ids raise InvalidIdError."""
        with pytest.raises(InvalidIdError) as exc_info:
            registry.name_of(file_id)

        assert exc_info.value.file_id == file_id
        assert exc_info.value.size == 3
