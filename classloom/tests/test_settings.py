"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from classloom.setting import Settings, load_settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.database_url == "sqlite:///classloom.db"
        assert s.inference.synthesize_supertypes is True
        assert s.generator.default_import_namespace == "java.util"
        assert s.extraction.source_suffixes == [".java"]
        assert s.layout.max_row_width == 800.0

    def test_yaml_then_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for var in ("DATABASE_URL", "CLASSLOOM_LOG_LEVEL", "CLASSLOOM_SYNTHESIZE_SUPERTYPES"):
            monkeypatch.delenv(var, raising=False)
        config = tmp_path / "classloom.yaml"
        config.write_text(
            "log_level: DEBUG\n"
            "inference:\n"
            "  namespace_search_order: [com.core]\n"
            "generator:\n"
            "  default_import_namespace: org.util\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("CLASSLOOM_DEFAULT_IMPORT_NAMESPACE", "net.util")
        monkeypatch.setenv("CLASSLOOM_SYNTHESIZE_SUPERTYPES", "false")

        s = load_settings(str(config))
        assert s.log_level == "DEBUG"
        assert s.inference.namespace_search_order == ["com.core"]
        assert s.inference.synthesize_supertypes is False
        assert s.generator.default_import_namespace == "net.util"
        assert s.generator.indent == "\t"

    def test_missing_config_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("CLASSLOOM_DEFAULT_IMPORT_NAMESPACE", raising=False)
        s = load_settings(str(tmp_path / "absent.yaml"))
        assert s.database_url == "sqlite:///classloom.db"

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="loud")
