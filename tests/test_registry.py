"""Tests for formatter registry, entries and handles."""

import pytest

from mapper_formatting.formatters import (
    ByExpression,
    ByInstance,
    ByType,
    FormatterRegistry,
    to_ref,
)


class UpperFormatter:
    def format_value(self, context):
        return str(context.source_value).upper()


class SuffixFormatter:
    def __init__(self, suffix=" sfx"):
        self.suffix = suffix

    def format_value(self, context):
        return f"{context.source_value}{self.suffix}"


class TestToRef:
    """Test classification of formatter references."""

    def test_class_is_by_type(self):
        """A class becomes a ByType reference."""
        assert to_ref(UpperFormatter) == ByType(UpperFormatter)

    def test_instance_is_by_instance(self):
        """A ValueFormatter instance is kept as-is."""
        formatter = UpperFormatter()

        ref = to_ref(formatter)

        assert isinstance(ref, ByInstance)
        assert ref.formatter is formatter

    def test_callable_is_expression(self):
        """A plain callable becomes an expression."""
        ref = to_ref(lambda ctx: "x")

        assert isinstance(ref, ByExpression)

    def test_rejects_non_formatter(self):
        """Objects that cannot format raise TypeError."""
        with pytest.raises(TypeError):
            to_ref(42)


class TestFormatterRegistry:
    """Test formatter registry operations."""

    def test_global_chain_preserves_registration_order(self):
        """Global entries come back in registration order."""
        registry = FormatterRegistry()
        registry.add_global_formatter(UpperFormatter)
        registry.add_global_formatter(SuffixFormatter())
        registry.add_format_expression(lambda ctx: "x")

        entries = registry.global_entries()

        assert [type(e.ref) for e in entries] == [ByType, ByInstance, ByExpression]
        assert [e.sequence for e in entries] == sorted(e.sequence for e in entries)

    def test_source_type_chain_is_separate(self):
        """Source-type formatters do not appear in the global chain."""
        registry = FormatterRegistry()
        registry.add_formatter_for_source_type(int, UpperFormatter)

        assert registry.global_entries() == []
        assert len(registry.entries_for(int)) == 1
        assert registry.entries_for(str) == []

    def test_skip_for_source_type(self):
        """Skipped formatter classes are recorded per source type."""
        registry = FormatterRegistry()
        registry.skip_formatter_for_source_type(int, UpperFormatter)

        assert registry.skipped_for(int) == frozenset({UpperFormatter})
        assert registry.skipped_for(str) == frozenset()

    def test_skip_requires_class(self):
        """Skipping an instance is a registration error."""
        registry = FormatterRegistry()

        with pytest.raises(TypeError):
            registry.skip_formatter_for_source_type(int, UpperFormatter())

    def test_expression_must_be_callable(self):
        """Non-callable expressions are rejected."""
        registry = FormatterRegistry()

        with pytest.raises(TypeError):
            registry.add_format_expression("not callable")

    def test_reset_clears_everything(self):
        """Reset empties chains and skip sets."""
        registry = FormatterRegistry()
        registry.add_global_formatter(UpperFormatter)
        registry.add_formatter_for_source_type(int, UpperFormatter)
        registry.skip_formatter_for_source_type(int, SuffixFormatter)

        registry.reset()

        assert registry.global_entries() == []
        assert registry.entries_for(int) == []
        assert registry.skipped_for(int) == frozenset()
        assert registry.source_types() == []

    def test_reset_keeps_sequence_running(self):
        """Entries added after reset still sort after earlier registrations."""
        registry = FormatterRegistry()
        first = registry.add_global_formatter(UpperFormatter).entry

        registry.reset()
        second = registry.add_global_formatter(SuffixFormatter).entry

        assert second.sequence > first.sequence
        assert registry.global_entries() == [second]


class TestFormatterHandle:
    """Test per-registration construction overrides."""

    def test_constructed_by_sets_override(self):
        """constructed_by attaches a factory to the ByType entry."""
        registry = FormatterRegistry()

        def factory():
            return SuffixFormatter("!")

        owner = registry.add_global_formatter(SuffixFormatter).constructed_by(factory)

        assert owner is registry
        ref = registry.global_entries()[0].ref
        assert ref.formatter_type is SuffixFormatter
        assert ref.construct is factory

    def test_constructed_by_keeps_type_identity(self):
        """An overridden entry still reports its declared class."""
        registry = FormatterRegistry()
        handle = registry.add_global_formatter(SuffixFormatter)
        handle.constructed_by(lambda: SuffixFormatter("!"))

        assert handle.entry.formatter_type is SuffixFormatter
        assert handle.entry.is_skipped_by({SuffixFormatter})

    def test_constructed_by_rejected_for_instance(self):
        """Instances cannot take a construction override."""
        registry = FormatterRegistry()
        handle = registry.add_global_formatter(UpperFormatter())

        with pytest.raises(TypeError):
            handle.constructed_by(UpperFormatter)

    def test_constructed_by_rejected_for_expression(self):
        """Expressions cannot take a construction override."""
        registry = FormatterRegistry()
        handle = registry.add_format_expression(lambda ctx: "x")

        with pytest.raises(TypeError):
            handle.constructed_by(UpperFormatter)

    def test_instance_and_expression_are_never_skipped(self):
        """Only class registrations carry a skippable type."""
        registry = FormatterRegistry()
        instance_entry = registry.add_global_formatter(UpperFormatter()).entry
        expression_entry = registry.add_format_expression(lambda ctx: "x").entry

        assert instance_entry.formatter_type is None
        assert not instance_entry.is_skipped_by({UpperFormatter})
        assert not expression_entry.is_skipped_by({UpperFormatter})
