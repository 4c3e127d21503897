"""Configuration loading.

gimps is configured with a YAML file, ``.gimps.yaml`` in the Go module root
by default:

.. code-block:: yaml

    projectName: go.example.com/project
    importOrder: [std, external, project]
    sets:
      - name: kubernetes
        patterns: ["k8s.io/**", "*.k8s.io/**"]
    aliasRules:
      - name: k8s-api
        expr: '^k8s\\.io/api/([a-z0-9]+)/(v[a-z0-9]+)$'
        alias: '$1$2'
    exclude: ["vendor/**"]
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gimps.errors import ConfigurationError
from gimps.imports.aliaser import AliasRule
from gimps.imports.classifier import DEFAULT_IMPORT_ORDER, Set

DEFAULT_CONFIG_FILE = ".gimps.yaml"

DEFAULT_EXCLUDES = (
    # third party code
    "vendor/**",
    # generated files
    "**/zz_generated.**",
    "**/zz_generated_**",
    "**/generated.pb.go",
    "**/generated.proto",
    "**/*_generated.go",
    # performance
    ".git/**",
    "_build/**",
    "node_modules/**",
)


@dataclass
class Config:
    """Settings for a gimps run.

    Attributes
    ----------
    project_name : str
        Go module path of the project. Imports below it form the ``project``
        set. Detected from ``go.mod`` by the CLI when empty.
    import_order : list[str]
        Set names in the order their groups appear in the import block.
    sets : list[Set]
        User-defined sets, evaluated in order.
    alias_rules : list[AliasRule]
        Rules for aliasing imports, evaluated in order.
    remove_unused_imports : bool
        Drop imports that are not referenced in the file.
    set_version_alias : bool
        Alias imports whose package name differs from their last path element.
    exclude : list[str]
        Glob patterns of files to skip, relative to the module root.
    detect_generated_files : bool
        Skip files marked as generated.
    """

    project_name: str = ""
    import_order: list[str] = field(default_factory=lambda: list(DEFAULT_IMPORT_ORDER))
    sets: list[Set] = field(default_factory=list)
    alias_rules: list[AliasRule] = field(default_factory=list)
    remove_unused_imports: bool = False
    set_version_alias: bool = False
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    detect_generated_files: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Build a config from parsed YAML, applying defaults for missing keys."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("configuration must be a mapping")

        unknown = sorted(set(data) - _KEYS)
        if unknown:
            raise ConfigurationError(f"unknown configuration key(s): {', '.join(unknown)}")

        config = cls()
        config.project_name = _get(data, "projectName", str, "")
        config.import_order = _get(data, "importOrder", list, []) or list(DEFAULT_IMPORT_ORDER)
        config.sets = [_parse_set(item) for item in _get(data, "sets", list, [])]
        config.alias_rules = [_parse_rule(i, item) for i, item in enumerate(_get(data, "aliasRules", list, []))]
        config.remove_unused_imports = _get(data, "removeUnusedImports", bool, False)
        config.set_version_alias = _get(data, "setVersionAlias", bool, False)
        if data.get("exclude") is not None:
            config.exclude = _get(data, "exclude", list, [])
        config.detect_generated_files = _get(data, "detectGeneratedFiles", bool, True)

        for name in config.import_order:
            if not isinstance(name, str):
                raise ConfigurationError(f"importOrder must contain strings, got {name!r}")

        return config


_KEYS = {
    "projectName",
    "importOrder",
    "sets",
    "aliasRules",
    "removeUnusedImports",
    "setVersionAlias",
    "exclude",
    "detectGeneratedFiles",
}


def _get(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise ConfigurationError(f"{key} must be of type {kind.__name__}, got {type(value).__name__}")
    return value


def _parse_set(item: Any) -> Set:
    if not isinstance(item, dict) or not isinstance(item.get("name"), str):
        raise ConfigurationError(f"invalid set {item!r}: a set needs a name and patterns")

    patterns = item.get("patterns") or []
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise ConfigurationError(f"invalid set {item['name']!r}: patterns must be a list of strings")

    return Set(name=item["name"], patterns=tuple(patterns))


def _parse_rule(index: int, item: Any) -> AliasRule:
    if not isinstance(item, dict):
        raise ConfigurationError(f"invalid alias rule {index + 1}: expected a mapping")

    values = {}
    for key in ("name", "expr", "alias"):
        value = item.get(key)
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"invalid alias rule {index + 1}: {key} must be a non-empty string")
        values[key] = value

    return AliasRule(name=values["name"], expression=values["expr"], alias=values["alias"])


def load_config(path: Path | None = None, module_root: Path | None = None) -> Config:
    """Load the configuration file.

    Parameters
    ----------
    path : Path | None
        Explicit configuration file. When omitted, ``.gimps.yaml`` in the
        module root is used if it exists, otherwise the defaults apply.
    module_root : Path | None
        Root directory of the Go module.

    Raises
    ------
    ConfigurationError
        If no file was given and the module root is unknown, or the file is
        not valid.
    """
    if path is None:
        if module_root is None:
            raise ConfigurationError("no config file specified and could not automatically find go module root")

        path = module_root / DEFAULT_CONFIG_FILE
        if not path.exists():
            return Config()

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"failed to read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"failed to parse {path}: {e}") from e

    return Config.from_dict(data)
