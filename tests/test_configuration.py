"""Tests for configuration objects, process-wide state and settings."""

import pytest
from structlog.testing import capture_logs

import mapper_formatting as fmt
from mapper_formatting import FormattingConfiguration, MemberId
from mapper_formatting.config import FormattingSettings, load_settings


class Source:
    pass


class Dest:
    pass


class Tag:
    def format_value(self, context):
        return f"<{context.source_value}>"


class TestFormattingConfiguration:
    """Test an explicitly owned configuration."""

    def test_independent_of_process_wide_state(self, configuration):
        """Registrations on an owned configuration stay local."""
        configuration.add_global_formatter(Tag)

        assert configuration.resolve_and_apply(1, "Value") == "<1>"
        assert fmt.resolve_and_apply(1, "Value") == "1"

    def test_for_member_returns_same_config(self, configuration):
        """Repeated lookups return the same member overrides."""
        member = MemberId(Source, Dest, "Value")

        first = configuration.for_member(member)
        second = configuration.for_type_map(Source, Dest).member("Value")

        assert first is second
        assert configuration.member_configs() == {member: first}

    def test_for_member_requires_member_id(self, configuration):
        """Member lookups take a MemberId."""
        with pytest.raises(TypeError):
            configuration.for_member("Value")

    def test_resolve_exposes_chain(self, configuration):
        """resolve() returns the materialized chain."""
        member = MemberId(Source, Dest, "Value")
        configuration.add_global_formatter(Tag)
        configuration.for_member(member).add_formatter(Tag)

        chain = configuration.resolve(int, member)

        assert [e.formatter_type for e in chain] == [Tag, Tag]

    def test_registration_order_spans_scopes(self, configuration):
        """Sequence numbers increase across global, type and member registrations."""
        a = configuration.add_global_formatter(Tag).entry
        b = configuration.for_source_type(int).add_formatter(Tag).entry
        c = configuration.for_member(MemberId(Source, Dest, "Value")).add_formatter(Tag).entry

        assert a.sequence < b.sequence < c.sequence

    def test_null_text_setting(self):
        """null_text renders an unformatted None."""
        configuration = FormattingConfiguration(FormattingSettings(null_text="-"))

        assert configuration.resolve_and_apply(None, "Value", str) == "-"


class TestProcessWideConfiguration:
    """Test reset and initialize."""

    def test_reset_publishes_new_object(self):
        """Readers holding the old configuration keep their view."""
        old = fmt.get_configuration()
        old.add_global_formatter(Tag)

        fresh = fmt.reset()

        assert fmt.get_configuration() is fresh
        assert fresh is not old
        assert old.resolve_and_apply(1, "Value") == "<1>"
        assert fresh.resolve_and_apply(1, "Value") == "1"

    def test_reset_clears_member_overrides(self):
        """Member overrides do not survive reset."""
        member = MemberId(Source, Dest, "Value")
        fmt.for_member(member).format_null_value_as("none")

        fmt.reset()

        assert fmt.resolve_and_apply(None, "Value", str, member) is None

    def test_registry_reset_leaves_member_overrides(self, configuration):
        """Clearing only the registry keeps member overrides."""
        member = MemberId(Source, Dest, "Value")
        configuration.for_member(member).format_null_value_as("none")

        configuration.registry.reset()

        assert configuration.resolve_and_apply(None, "Value", str, member) == "none"

    def test_failed_initialize_keeps_previous(self):
        """A configure callback that raises publishes nothing."""
        current = fmt.get_configuration()

        def configure(cfg):
            cfg.add_global_formatter(Tag)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fmt.initialize(configure)

        assert fmt.get_configuration() is current


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Unset variables fall back to defaults."""
        for key in ("LOG_LEVEL", "LOG_FORMAT", "NULL_TEXT"):
            monkeypatch.delenv(f"MAPPER_FORMATTING_{key}", raising=False)

        loaded = load_settings()

        assert loaded == FormattingSettings()
        assert loaded.null_text is None

    def test_environment_overrides(self, monkeypatch):
        """MAPPER_FORMATTING_* variables are read."""
        monkeypatch.setenv("MAPPER_FORMATTING_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MAPPER_FORMATTING_LOG_FORMAT", "JSON")
        monkeypatch.setenv("MAPPER_FORMATTING_NULL_TEXT", "")

        loaded = load_settings()

        assert loaded.log_level == "DEBUG"
        assert loaded.log_format == "json"
        assert loaded.null_text == ""

    def test_invalid_log_format(self):
        """Unknown log formats are rejected."""
        with pytest.raises(ValueError):
            FormattingSettings(log_format="xml")

    def test_reset_is_logged(self):
        """Reset emits a configuration_reset event."""
        fmt.configure_logging(log_level="INFO")

        with capture_logs() as logs:
            fmt.reset()

        assert {"event": "configuration_reset", "log_level": "info"} in logs

    def test_invalid_env_log_format_falls_back(self, monkeypatch):
        """An unknown env log format falls back to console with a warning."""
        monkeypatch.setenv("MAPPER_FORMATTING_LOG_FORMAT", "xml")

        with capture_logs() as logs:
            loaded = load_settings()

        assert loaded.log_format == "console"
        assert {
            "event": "invalid_log_format",
            "log_level": "warning",
            "value": "xml",
            "fallback": "console",
        } in logs
