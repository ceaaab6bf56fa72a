"""Tests for tile records and the tile registry."""

import pytest

from tileweaver.core.errors import FormatError
from tileweaver.core.tiles import TileRecord, TileRegistry


@pytest.fixture
def registry():
    registry = TileRegistry()
    registry.load([("A", "3,0"), ("B", "7,2"), ("C", "oops")])
    return registry


class TestTileRecord:
    """Test TileRecord."""

    def test_primary(self):
        """Primary weight comes from the weight string."""
        assert TileRecord("A", "3,2").primary == 3

    def test_unparsable_primary_raises(self):
        """An unparsable weight raises FormatError when read."""
        with pytest.raises(FormatError):
            TileRecord("A", "x").primary

    def test_unbound_by_default(self):
        """Fresh records carry no view binding."""
        assert not TileRecord("A", "1,0").is_bound


class TestTileRegistry:
    """Test TileRegistry."""

    def test_load_keeps_order(self, registry):
        """Records keep the order they were loaded in."""
        assert registry.names == ["A", "B", "C"]
        assert len(registry) == 3

    def test_load_replaces_wholesale(self, registry):
        """A second load discards every previous record."""
        registry.load([("Z", "1,0")])
        assert registry.names == ["Z"]

    def test_get_out_of_range(self, registry):
        """Out-of-range indexes raise IndexError."""
        with pytest.raises(IndexError):
            registry.get(3)
        with pytest.raises(IndexError):
            registry.get(-1)

    def test_index_of(self, registry):
        """Names map to positions; unknown names raise KeyError."""
        assert registry.index_of("B") == 1
        with pytest.raises(KeyError):
            registry.index_of("missing")

    def test_find(self, registry):
        assert registry.find("C").weight == "oops"
        assert registry.find("missing") is None

    def test_set_weight_primary(self, registry):
        """Setting the primary writes "v,0" and returns it."""
        assert registry.set_weight_primary(1, 12) == "12,0"
        assert registry.get(1).weight == "12,0"

    def test_set_weight_accepts_integral_float(self, registry):
        """Whole-number floats are accepted."""
        assert registry.set_weight_primary(0, 4.0) == "4,0"

    def test_set_weight_replaces_unparsable(self, registry):
        """An edit fixes a record whose stored weight was unparsable."""
        registry.set_weight_primary(2, 2)
        assert registry.get(2).primary == 2

    @pytest.mark.parametrize("value", [-1, 2.5, "3", None, True])
    def test_set_weight_rejects_invalid(self, registry, value):
        """Negative, fractional and non-numeric values raise FormatError."""
        with pytest.raises(FormatError):
            registry.set_weight_primary(0, value)
        assert registry.get(0).weight == "3,0"

    def test_records_is_a_copy(self, registry):
        """Mutating the returned list does not touch the registry."""
        registry.records.clear()
        assert len(registry) == 3
