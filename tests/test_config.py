"""
Tests for settings loading and validation.
"""

import pytest
from pydantic import ValidationError

from fuzzyedit.core.config import EditSettings, load_settings
from fuzzyedit.core.errors import EditSettingsError


class TestEditSettings:
    def test_defaults(self):
        settings = EditSettings()
        assert settings.single_candidate_threshold == 0.0
        assert settings.multiple_candidates_threshold == 0.3
        assert settings.mode == "auto"
        assert settings.max_document_bytes == 10 * 1024 * 1024
        assert settings.pending_dir == ".fuzzyedit/pending"

    def test_threshold_bounds(self):
        EditSettings(multiple_candidates_threshold=0)
        EditSettings(multiple_candidates_threshold=1)
        with pytest.raises(ValidationError):
            EditSettings(multiple_candidates_threshold=1.5)
        with pytest.raises(ValidationError):
            EditSettings(single_candidate_threshold=-0.1)

    def test_invalid_mode(self):
        with pytest.raises(ValidationError):
            EditSettings(mode="fuzzy")


class TestLoadSettings:
    def test_no_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_settings() == EditSettings()

    def test_project_file_is_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "fuzzyedit.yaml").write_text("mode: exact\n")
        assert load_settings().mode == "exact"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "multiple_candidates_threshold: 0.5\n"
            "max_document_bytes: 1024\n"
            "pending_dir: /tmp/reviews\n"
        )
        settings = load_settings(path)
        assert settings.multiple_candidates_threshold == 0.5
        assert settings.max_document_bytes == 1024
        assert settings.pending_dir == "/tmp/reviews"

    def test_env_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("mode: exact\n")
        monkeypatch.setenv("FUZZYEDIT_CONFIG", str(path))
        assert load_settings().mode == "exact"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("mode: exact\npending_dir: from-file\n")
        monkeypatch.setenv("FUZZYEDIT_MODE", "auto")
        monkeypatch.setenv("FUZZYEDIT_PENDING_DIR", "from-env")
        settings = load_settings(path)
        assert settings.mode == "auto"
        assert settings.pending_dir == "from-env"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == EditSettings()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(EditSettingsError, match="file not found"):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mode: [unclosed\n")
        with pytest.raises(EditSettingsError, match="invalid YAML"):
            load_settings(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- mode\n- exact\n")
        with pytest.raises(EditSettingsError, match="mapping"):
            load_settings(path)

    def test_unknown_setting(self, tmp_path):
        path = tmp_path / "unknown.yaml"
        path.write_text("similarity: 0.9\n")
        with pytest.raises(EditSettingsError) as exc_info:
            load_settings(path)
        assert exc_info.value.issues == ["similarity: unknown setting"]

    def test_friendly_validation_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("multiple_candidates_threshold: 2\nmode: fuzzy\n")
        with pytest.raises(EditSettingsError) as exc_info:
            load_settings(path)
        issues = exc_info.value.issues
        assert any(issue.startswith("multiple_candidates_threshold") for issue in issues)
        assert any(issue.startswith("mode: must be one of") for issue in issues)
        assert "invalid.yaml" in str(exc_info.value)

    def test_invalid_env_override(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FUZZYEDIT_MODE", "sometimes")
        with pytest.raises(EditSettingsError, match="FUZZYEDIT_MODE"):
            load_settings()
