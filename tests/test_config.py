"""
Tests for gimps.config module.

Coverage targets:
- Config.from_dict: defaults, all keys, type validation
- load_config: explicit files, autodetected files, errors
"""
from __future__ import annotations

import textwrap

import pytest

from gimps.config import DEFAULT_EXCLUDES, Config, load_config
from gimps.errors import ConfigurationError
from gimps.imports.classifier import Set


# =============================================================================
# Config.from_dict Tests
# =============================================================================

class TestFromDict:
    """Tests for building a Config from parsed YAML."""

    def test_defaults(self):
        config = Config.from_dict(None)

        assert config.project_name == ""
        assert config.import_order == ["std", "project", "external"]
        assert config.sets == []
        assert config.alias_rules == []
        assert config.remove_unused_imports is False
        assert config.set_version_alias is False
        assert config.exclude == list(DEFAULT_EXCLUDES)
        assert config.detect_generated_files is True

    def test_all_keys(self):
        config = Config.from_dict({
            "projectName": "go.example.com/project",
            "importOrder": ["std", "kubernetes", "external", "project"],
            "sets": [{"name": "kubernetes", "patterns": ["k8s.io/**"]}],
            "aliasRules": [{"name": "k8s", "expr": "^k8s.io/api/([a-z]+)/(v[0-9]+)$", "alias": "$1$2"}],
            "removeUnusedImports": True,
            "setVersionAlias": True,
            "exclude": ["hack/**"],
            "detectGeneratedFiles": False,
        })

        assert config.project_name == "go.example.com/project"
        assert config.import_order == ["std", "kubernetes", "external", "project"]
        assert config.sets == [Set("kubernetes", ("k8s.io/**",))]
        assert config.alias_rules[0].name == "k8s"
        assert config.alias_rules[0].alias == "$1$2"
        assert config.remove_unused_imports is True
        assert config.set_version_alias is True
        assert config.exclude == ["hack/**"]
        assert config.detect_generated_files is False

    def test_empty_import_order_uses_default(self):
        assert Config.from_dict({"importOrder": []}).import_order == ["std", "project", "external"]

    def test_empty_exclude_disables_defaults(self):
        assert Config.from_dict({"exclude": []}).exclude == []

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="unknown configuration key"):
            Config.from_dict({"projectname": "x"})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            Config.from_dict(["projectName"])

    def test_wrong_type(self):
        with pytest.raises(ConfigurationError, match="removeUnusedImports must be of type bool"):
            Config.from_dict({"removeUnusedImports": "yes"})

    def test_set_without_name(self):
        with pytest.raises(ConfigurationError, match="invalid set"):
            Config.from_dict({"sets": [{"patterns": ["k8s.io/**"]}]})

    def test_rule_without_alias(self):
        with pytest.raises(ConfigurationError, match="invalid alias rule 1: alias must be a non-empty string"):
            Config.from_dict({"aliasRules": [{"name": "k8s", "expr": "^k8s"}]})


# =============================================================================
# load_config Tests
# =============================================================================

class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "gimps.yaml"
        path.write_text(textwrap.dedent('''
            projectName: example.com/proj
            aliasRules:
              - name: k8s-api
                expr: '^k8s\\.io/api/([a-z0-9]+)/(v[a-z0-9]+)$'
                alias: '$1$2'
        '''))

        config = load_config(path)

        assert config.project_name == "example.com/proj"
        assert config.alias_rules[0].expression == r"^k8s\.io/api/([a-z0-9]+)/(v[a-z0-9]+)$"

    def test_default_file_in_module_root(self, tmp_path):
        (tmp_path / ".gimps.yaml").write_text("removeUnusedImports: true\n")

        assert load_config(module_root=tmp_path).remove_unused_imports is True

    def test_missing_default_file_uses_defaults(self, tmp_path):
        assert load_config(module_root=tmp_path) == Config()

    def test_no_file_and_no_module_root(self):
        with pytest.raises(ConfigurationError, match="could not automatically find go module root"):
            load_config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="failed to read"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "gimps.yaml"
        path.write_text("projectName: [unclosed\n")

        with pytest.raises(ConfigurationError, match="failed to parse"):
            load_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "gimps.yaml"
        path.write_text("")

        assert load_config(path) == Config()
