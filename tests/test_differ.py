"""Tests for loadenv.differ."""

from loadenv.differ import Added, Changed, Removed, diff


class TestDiff:
    """Tests for diff()."""

    def test_changed_and_added(self):
        """Test a changed value plus a new key, with no event for A."""
        events = diff({"A": "1", "B": "2"}, {"A": "1", "B": "3", "C": "4"})
        assert events == [Changed("B", "2", "3"), Added("C", "4")]

    def test_removed(self):
        """Test a key that disappeared."""
        assert diff({"A": "1", "B": "2"}, {"A": "1"}) == [Removed("B")]

    def test_identical_maps(self):
        """Test that equal maps produce nothing."""
        assert diff({"A": "1"}, {"A": "1"}) == []

    def test_from_empty(self):
        """Test first-load style diff where everything is new."""
        assert diff({}, {"B": "2", "A": "1"}) == [Added("A", "1"), Added("B", "2")]

    def test_to_empty(self):
        """Test that clearing the file removes every key."""
        assert diff({"A": "1", "B": "2"}, {}) == [Removed("A"), Removed("B")]

    def test_sorted_by_key_across_kinds(self):
        """Test deterministic ordering across event kinds."""
        events = diff({"B": "1", "D": "1"}, {"A": "1", "B": "2", "C": "1"})
        assert [e.key for e in events] == ["A", "B", "C", "D"]
        assert isinstance(events[0], Added)
        assert isinstance(events[1], Changed)
        assert isinstance(events[3], Removed)

    def test_empty_value_change(self):
        """Test that a change to an empty value is reported."""
        assert diff({"A": "x"}, {"A": ""}) == [Changed("A", "x", "")]

    def test_inputs_not_mutated(self):
        """Test that diff is pure."""
        old = {"A": "1"}
        new = {"A": "2"}
        diff(old, new)
        assert old == {"A": "1"}
        assert new == {"A": "2"}


class TestDescribe:
    """Tests for the log lines of each event."""

    def test_added(self):
        assert Added("PORT", "8080").describe() == "New environment variable: PORT = 8080"

    def test_changed(self):
        assert (
            Changed("PORT", "8080", "9090").describe()
            == "Environment variable changed: PORT = 9090 (old value: 8080)"
        )

    def test_removed(self):
        assert Removed("PORT").describe() == "Environment variable removed: PORT"
