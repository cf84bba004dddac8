"""Unit tests for settings loading and secret checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_ingest.core.config import Settings
from recipe_ingest.core.config.yaml_source import (
    CONFIG_DIR_ENV,
    deep_merge,
    load_yaml_dir,
)


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_override(self) -> None:
        """Should merge nested dicts key by key."""
        base = {"llm": {"anthropic": {"model": "a", "timeout": 60}}, "x": 1}
        override = {"llm": {"anthropic": {"model": "b"}}}

        assert deep_merge(base, override) == {
            "llm": {"anthropic": {"model": "b", "timeout": 60}},
            "x": 1,
        }

    def test_does_not_mutate_base(self) -> None:
        """Should return a new dict."""
        base = {"a": {"b": 1}}

        deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}

    def test_non_dict_replaces(self) -> None:
        """Should replace a dict with a scalar and vice versa."""
        assert deep_merge({"a": {"b": 1}}, {"a": 5}) == {"a": 5}


class TestYamlLoading:
    """Tests for YAML config files."""

    def test_load_yaml_dir_merges_in_name_order(self, tmp_path: Path) -> None:
        """Should merge files alphabetically, later files winning."""
        (tmp_path / "a.yaml").write_text("server:\n  port: 1\n  host: h\n")
        (tmp_path / "b.yaml").write_text("server:\n  port: 2\n")
        (tmp_path / "empty.yaml").write_text("")

        assert load_yaml_dir(tmp_path) == {"server": {"port": 2, "host": "h"}}

    def test_missing_dir(self, tmp_path: Path) -> None:
        """Should treat a missing directory as empty."""
        assert load_yaml_dir(tmp_path / "nope") == {}

    def test_environment_overrides_base(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should apply environment YAML over base YAML."""
        (tmp_path / "base").mkdir()
        (tmp_path / "environments" / "test").mkdir(parents=True)
        (tmp_path / "base" / "app.yaml").write_text(
            "recipe_list:\n  url: https://base.test\n  timeout: 9\n"
        )
        (tmp_path / "environments" / "test" / "app.yaml").write_text(
            "recipe_list:\n  url: https://env.test\n"
        )
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))

        settings = Settings()

        assert settings.recipe_list.url == "https://env.test"
        assert settings.recipe_list.timeout == 9

    def test_env_var_overrides_yaml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should let nested environment variables win over YAML."""
        monkeypatch.setenv("LLM__ANTHROPIC__MODEL", "claude-test-model")

        assert Settings().llm.anthropic.model == "claude-test-model"

    def test_shipped_test_environment(self) -> None:
        """Should load the repository's test environment config."""
        settings = Settings()

        assert settings.is_testing
        assert settings.notifications.ntfy.enabled is False


class TestSecrets:
    """Tests for required secret checks."""

    def test_all_present(self, settings: Settings) -> None:
        """Should report nothing missing."""
        assert settings.missing_secrets() == []

    def test_missing_listed(self, settings: Settings) -> None:
        """Should name each unset secret."""
        partial = settings.model_copy(update={"APIFY_TOKEN": "", "NTFY_TOPIC": ""})

        assert partial.missing_secrets() == ["APIFY_TOKEN", "NTFY_TOPIC"]

    def test_ensure_raises_outside_tests(self, settings: Settings) -> None:
        """Should refuse to start in production without secrets."""
        production = settings.model_copy(
            update={"APP_ENV": "production", "ANTHROPIC_API_KEY": ""}
        )

        with pytest.raises(RuntimeError, match="ANTHROPIC_API_KEY"):
            production.ensure_secrets()

    def test_ensure_tolerates_tests(self, settings: Settings) -> None:
        """Should not require secrets in the test environment."""
        settings.model_copy(update={"ANTHROPIC_API_KEY": ""}).ensure_secrets()

    def test_environment_flags(self, settings: Settings) -> None:
        """Should derive environment helpers from APP_ENV."""
        production = settings.model_copy(update={"APP_ENV": "production"})

        assert production.is_production
        assert not production.is_development
        assert not production.is_testing
