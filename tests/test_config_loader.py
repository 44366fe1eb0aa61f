"""Tests for configuration loading and validation."""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

import pytest

from tsydesk.config_loader import (
    AppConfig,
    ConfigLoader,
    interpolate_env_vars,
    load_config,
    load_config_with_overrides,
    process_config_dict,
)
from tsydesk.constants import ListenerErrorPolicy, LogLevel, Market


class TestEnvVarInterpolation:
    """Tests for environment variable interpolation."""

    def test_no_interpolation_needed(self) -> None:
        """Test that plain strings pass through unchanged."""
        assert interpolate_env_vars("hello") == "hello"
        assert interpolate_env_vars(123) == 123
        assert interpolate_env_vars(None) is None

    def test_simple_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test simple ${VAR} interpolation."""
        monkeypatch.setenv("TEST_VAR", "test_value")
        assert interpolate_env_vars("${TEST_VAR}") == "test_value"

    def test_env_var_with_default(self) -> None:
        """Test ${VAR:default} interpolation with missing var."""
        os.environ.pop("MISSING_VAR", None)
        assert interpolate_env_vars("${MISSING_VAR:default_value}") == "default_value"

    def test_env_var_with_default_when_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test ${VAR:default} uses actual value when set."""
        monkeypatch.setenv("SET_VAR", "actual_value")
        assert interpolate_env_vars("${SET_VAR:default_value}") == "actual_value"

    def test_missing_var_no_default(self) -> None:
        """Test ${VAR} with missing var returns empty string."""
        os.environ.pop("TOTALLY_MISSING", None)
        assert interpolate_env_vars("${TOTALLY_MISSING}") == ""

    def test_mixed_text_and_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test interpolation in mixed text."""
        monkeypatch.setenv("DESK_ROOT", "/srv/desk")
        assert interpolate_env_vars("${DESK_ROOT}/output") == "/srv/desk/output"


class TestProcessConfigDict:
    """Tests for recursive config dict processing."""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NESTED_VAR", "nested_value")
        data = {"level1": {"level2": {"value": "${NESTED_VAR}"}}}
        result = process_config_dict(data)
        assert result["level1"]["level2"]["value"] == "nested_value"

    def test_list_processing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOOK_VAR", "TRSY9")
        data = {"books": ["TRSY1", "${BOOK_VAR}"]}
        result = process_config_dict(data)
        assert result["books"] == ["TRSY1", "TRSY9"]


class TestConfigLoader:
    """Tests for ConfigLoader class."""

    def test_load_valid_config(self, tmp_path: Path) -> None:
        """Test loading a valid configuration file."""
        config_content = """
environment:
  log_level: DEBUG
  output_dir: ./out

execution:
  venue: BROKERTEC

booking:
  books: [A, B]
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(config_content)

        config = ConfigLoader(config_file).load()

        assert config.environment.log_level == LogLevel.DEBUG
        assert config.output_path == Path("./out")
        assert config.execution.venue == Market.BROKERTEC
        assert config.booking.books == ["A", "B"]

    def test_file_not_found(self) -> None:
        loader = ConfigLoader(Path("/nonexistent/path/config.yaml"))
        with pytest.raises(FileNotFoundError):
            loader.load()

    def test_empty_config_uses_defaults(self, tmp_path: Path) -> None:
        """Test that empty config file uses defaults."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        config = load_config(config_file)

        assert config.execution.venue == Market.CME
        assert config.booking.books == ["TRSY1", "TRSY2", "TRSY3"]
        assert config.algo_execution.aggressiveness_threshold == Decimal(1) / Decimal(128)
        assert config.inquiry.quote_price == Decimal("100")
        assert config.gui.throttle_ms == 300
        assert config.gui.max_updates == 100
        assert config.history.inquiries == "allinquiries.txt"
        assert config.framework.listener_errors == ListenerErrorPolicy.PROPAGATE

    def test_fraction_threshold(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text('algo_execution:\n  aggressiveness_threshold: "1/64"')

        config = load_config(config_file)
        assert config.algo_execution.aggressiveness_threshold == Decimal("0.015625")

    def test_env_interpolated_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FEED_DIR", "/feeds")
        monkeypatch.delenv("OUT_DIR", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("environment:\n  data_dir: ${FEED_DIR}\n  output_dir: ${OUT_DIR:./o}")

        config = load_config(config_file)
        assert config.environment.data_dir == "/feeds"
        assert config.environment.output_dir == "./o"

    def test_reload_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("execution:\n  venue: CME")

        loader = ConfigLoader(config_file)
        assert loader.load().execution.venue == Market.CME

        config_file.write_text("execution:\n  venue: ESPEED")
        assert loader.reload().execution.venue == Market.ESPEED


class TestConfigWithOverrides:
    """Tests for CLI override functionality."""

    def test_no_config_file_gives_defaults(self) -> None:
        config = load_config_with_overrides(None)
        assert config == AppConfig()

    def test_dir_overrides(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("environment:\n  data_dir: ./a\n  output_dir: ./b")

        config = load_config_with_overrides(config_file, data_dir="/x", output_dir="/y")
        assert config.data_path == Path("/x")
        assert config.output_path == Path("/y")

    def test_log_level_override_is_case_insensitive(self) -> None:
        config = load_config_with_overrides(None, log_level="debug")
        assert config.environment.log_level == LogLevel.DEBUG

    def test_listener_errors_override(self) -> None:
        config = load_config_with_overrides(None, listener_errors="ISOLATE")
        assert config.framework.listener_errors == ListenerErrorPolicy.ISOLATE


class TestConfigValidation:
    """Tests for configuration validation."""

    def test_empty_books_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("booking:\n  books: []")

        with pytest.raises(ValueError, match="At least one book"):
            load_config(config_file)

    def test_non_positive_visible_unit_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("streaming:\n  visible_quantity_unit: 0")

        with pytest.raises(ValueError, match="positive"):
            load_config(config_file)

    def test_negative_tolerance_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("algo_execution:\n  spread_tolerance: -0.001")

        with pytest.raises(ValueError, match="non-negative"):
            load_config(config_file)

    def test_unknown_listener_policy_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("framework:\n  listener_errors: retry")

        with pytest.raises(ValueError):
            load_config(config_file)
