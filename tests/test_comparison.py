"""
Tests for the ordering composer and per-field comparators.
"""

from datetime import timedelta
from decimal import Decimal

from feedext.comparison import (
    compare_enum,
    compare_fields,
    compare_ordinal,
    compare_sequence,
    compare_text,
    compare_uri,
    compare_values,
    compare_version,
    compose,
)
from feedext.vocabularies.syndication import SiteSummaryUpdatePeriod


class TestCompose:
    """Tests for lexicographic composition."""

    def test_all_equal(self):
        """Zero only when every field compares equal."""
        assert compose(0, 0, 0) == 0
        assert compose() == 0

    def test_first_difference_wins(self):
        """A later difference cannot override an earlier one."""
        assert compose(0, -1, 1) == -1
        assert compose(0, 1, -1) == 1

    def test_results_normalized(self):
        """Magnitudes are reduced to -1 or 1."""
        assert compose(0, 42) == 1
        assert compose(-7) == -1

    def test_antisymmetric(self):
        """Swapping operands flips a composed result."""
        first = [compare_text("a", "a"), compare_text("b", "c")]
        second = [compare_text("a", "a"), compare_text("c", "b")]
        assert compare_fields(first) == -compare_fields(second)

    def test_short_circuit(self):
        """Generators stop at the first difference."""
        seen = []

        def comparisons():
            for value in (0, 1, -1):
                seen.append(value)
                yield value

        assert compare_fields(comparisons()) == 1
        assert seen == [0, 1]


class TestFieldComparators:
    """Tests for per-field comparators."""

    def test_text_case_insensitive(self):
        """Human-readable text ignores case."""
        assert compare_text("Hello", "HELLO") == 0
        assert compare_text("alpha", "Beta") == -1
        assert compare_text(None, "") == 0

    def test_ordinal_case_sensitive(self):
        """Identifiers compare exactly."""
        assert compare_ordinal("dc", "dc") == 0
        assert compare_ordinal("DC", "dc") != 0

    def test_uri_unset_first(self):
        """An unset URI sorts before any set URI."""
        assert compare_uri(None, "http://example.com") == -1
        assert compare_uri("http://example.com", None) == 1
        assert compare_uri("http://EXAMPLE.com", "http://example.com") == 0

    def test_values(self):
        """Natural ordering with unset first."""
        assert compare_values(Decimal("1.50"), Decimal("1.5")) == 0
        assert compare_values(timedelta(seconds=1), timedelta(seconds=2)) == -1
        assert compare_values(None, 0) == -1
        assert compare_values(None, None) == 0
        assert compare_values(False, True) == -1

    def test_enum_declaration_order(self):
        """Enumerations compare by declaration order."""
        assert compare_enum(SiteSummaryUpdatePeriod.DAILY, SiteSummaryUpdatePeriod.HOURLY) == -1
        assert compare_enum(SiteSummaryUpdatePeriod.NONE, SiteSummaryUpdatePeriod.YEARLY) == -1
        assert compare_enum(SiteSummaryUpdatePeriod.WEEKLY, SiteSummaryUpdatePeriod.WEEKLY) == 0

    def test_version(self):
        """Versions compare component by component."""
        assert compare_version("1.0", "1.1") == -1
        assert compare_version("1.10", "1.9") == 1
        assert compare_version("2.0", "2.0") == 0

    def test_sequence_length_first(self):
        """The shorter sequence sorts first regardless of contents."""
        assert compare_sequence(["z"], ["a", "b"]) == -1
        assert compare_sequence(["a", "b"], ["z"]) == 1

    def test_sequence_elementwise(self):
        """Equal-length sequences compare element by element."""
        assert compare_sequence(["a", "b"], ["a", "c"]) == -1
        assert compare_sequence(["A", "b"], ["a", "B"], compare_text) == 0
        assert compare_sequence([], None) == 0
