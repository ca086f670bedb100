"""
Unit tests for configuration validation functionality.
"""

import pytest

from rwstat.config.validators import (
    validate_connection_config,
    validate_logging_config,
    validate_probe_config,
    validate_rules_config,
)
from rwstat.validation import ValidationError


@pytest.mark.unit
class TestProbeConfigValidation:
    """Test cases for the [probe] table."""

    def test_success(self, sample_config_data):
        config = validate_probe_config(sample_config_data["probe"])

        assert config.interval_seconds == 10
        assert config.iterations == 3
        assert config.debug is False

    def test_defaults(self):
        config = validate_probe_config({})

        assert config.interval_seconds == 300
        assert config.iterations == 0
        assert config.debug is False

    @pytest.mark.parametrize("interval", [0, -5, "ten", 2.5, True])
    def test_invalid_interval(self, interval):
        with pytest.raises(ValidationError) as exc_info:
            validate_probe_config({"interval_seconds": interval})

        assert exc_info.value.field_name == "probe.interval_seconds"

    def test_interval_upper_bound(self):
        assert validate_probe_config({"interval_seconds": 86400}).interval_seconds == 86400

        with pytest.raises(ValidationError) as exc_info:
            validate_probe_config({"interval_seconds": 86401})

        assert exc_info.value.field_name == "probe.interval_seconds"

    @pytest.mark.parametrize(
        "validator, table",
        [
            (validate_probe_config, "probe"),
            (validate_connection_config, "connection"),
            (validate_logging_config, "logging"),
        ],
    )
    def test_non_table_section(self, validator, table):
        with pytest.raises(ValidationError) as exc_info:
            validator(5)

        assert exc_info.value.field_name == table

    def test_whole_float_interval_is_accepted(self):
        assert validate_probe_config({"interval_seconds": 60.0}).interval_seconds == 60

    def test_negative_iterations(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_probe_config({"iterations": -1})

        assert "iterations" in str(exc_info.value)

    def test_debug_must_be_boolean(self):
        with pytest.raises(ValidationError):
            validate_probe_config({"debug": "yes"})


@pytest.mark.unit
class TestConnectionConfigValidation:
    """Test cases for the [connection] table."""

    def test_success(self, sample_config_data):
        config = validate_connection_config(sample_config_data["connection"])

        assert config.host == "db.example.com"
        assert config.port == 3307
        assert config.user == "monitor"
        assert config.password == "secret"
        assert config.connect_timeout == 5

    def test_defaults(self):
        config = validate_connection_config({})

        assert config.host == "localhost"
        assert config.port == 3306
        assert config.status_pattern == "Com_%"

    @pytest.mark.parametrize("port", [0, 70000, "abc"])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError) as exc_info:
            validate_connection_config({"port": port})

        assert exc_info.value.field_name == "connection.port"

    def test_empty_host_requires_socket(self):
        with pytest.raises(ValidationError):
            validate_connection_config({"host": ""})

        config = validate_connection_config({"host": "", "unix_socket": "/tmp/mysql.sock"})
        assert config.unix_socket == "/tmp/mysql.sock"

    def test_password_is_not_stripped(self):
        config = validate_connection_config({"password": " pw "})
        assert config.password == " pw "

    def test_empty_status_pattern(self):
        with pytest.raises(ValidationError):
            validate_connection_config({"status_pattern": "  "})


@pytest.mark.unit
class TestLoggingConfigValidation:
    """Test cases for the [logging] table."""

    def test_level_is_normalized(self):
        assert validate_logging_config({"level": "debug"}).level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            validate_logging_config({"level": "verbose"})


@pytest.mark.unit
class TestRulesConfigValidation:
    """Test cases for rules.toml validation."""

    def test_success(self, sample_rules_config):
        rules = validate_rules_config(sample_rules_config)

        assert [r.category for r in rules] == ["write", "read"]
        assert rules[0].compiled is None
        assert len(rules[1].compiled) == 2
        assert rules[1].comment == "selects only"

    def test_singular_pattern_field(self):
        rules = validate_rules_config(
            [{"category": "read", "match_type": "contains", "pattern": "_select"}]
        )
        assert rules[0].patterns == ["_select"]

    def test_match_type_defaults_to_contains(self):
        rules = validate_rules_config([{"category": "write", "patterns": ["_insert"]}])
        assert rules[0].match_type == "contains"

    def test_missing_patterns(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_rules_config([{"category": "read"}])

        assert "rules[0]" in str(exc_info.value)

    def test_invalid_category(self):
        with pytest.raises(ValidationError):
            validate_rules_config([{"category": "other", "patterns": ["x"]}])

    def test_invalid_regex(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_rules_config(
                [{"category": "read", "match_type": "regex", "patterns": ["(unclosed"]}]
            )

        assert "rules[0].patterns[0]" in str(exc_info.value)

    def test_empty_pattern_list(self):
        with pytest.raises(ValidationError):
            validate_rules_config([{"category": "read", "patterns": []}])

    def test_empty_rules(self):
        assert validate_rules_config([]) == []

    def test_non_table_rule(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_rules_config(["_select"])

        assert exc_info.value.field_name == "rules[0]"

    def test_rules_must_be_array(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_rules_config({"category": "read"})

        assert exc_info.value.field_name == "rules"
