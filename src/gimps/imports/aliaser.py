"""Rule-based aliasing of imports.

An alias rule pairs a regular expression with an alias template. For every
import whose path matches a rule, the template is expanded against the path
and the result becomes the import's alias. All references to the package
in the file are renamed accordingly, so

.. code-block:: go

    import "k8s.io/api/core/v1"

    var pod v1.Pod

becomes, with the rule ``^k8s\\.io/api/([a-z]+)/(v[0-9a-z]+)$`` => ``$1$2``,

.. code-block:: go

    import corev1 "k8s.io/api/core/v1"

    var pod corev1.Pod
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from gimps.errors import (
    AliasCollisionError,
    ConfigurationError,
    InvalidAliasError,
    ResolutionError,
    UnsafeRewriteError,
)
from gimps.golang.source import GoFile
from gimps.imports.deps import DependencyCache
from gimps.imports.extractor import ImportKind, ImportMap, ImportRecord
from gimps.imports.usage import CGO_PACKAGE
from gimps.transformers.rename_qualifiers import RenameQualifiers

logger = logging.getLogger(__name__)

_VALID_ALIAS = re.compile(r"^[a-z_][a-z0-9_]*$")

# $$, ${name} and $name, as understood by Go's regexp.Expand
_TEMPLATE_REF = re.compile(r"\$\$|\$\{(\w+)\}|\$(\w+)")


@dataclass
class AliasRule:
    """A rule computing the alias of matching imports.

    Attributes
    ----------
    name : str
        Name used in error messages.
    expression : str
        Regular expression matched against the import path.
    alias : str
        Replacement template; ``$1``, ``${1}`` and ``${name}`` refer to
        capture groups, ``$$`` is a literal dollar sign.
    """

    name: str
    expression: str
    alias: str
    pattern: re.Pattern[str] | None = field(default=None, repr=False, compare=False)

    def compile(self) -> None:
        self.pattern = re.compile(self.expression)

    def matches(self, package: str) -> bool:
        return self.pattern.search(package) is not None

    def apply(self, package: str) -> str:
        """Replace every match of the expression in ``package`` with the expanded template."""
        return self.pattern.sub(lambda match: expand_template(self.alias, match), package)


def expand_template(template: str, match: re.Match[str]) -> str:
    """Expand Go-style group references in ``template``.

    References to groups that do not exist or did not participate in the
    match expand to the empty string.
    """

    def replace(ref: re.Match[str]) -> str:
        if ref.group(0) == "$$":
            return "$"

        name = ref.group(1) or ref.group(2)
        try:
            value = match.group(int(name) if name.isdigit() else name)
        except (IndexError, re.error):
            return ""
        return value or ""

    return _TEMPLATE_REF.sub(replace, template)


@dataclass
class _Rename:
    record: ImportRecord
    old: str
    new: str


class Aliaser:
    """Apply alias rules to the imports of Go files.

    One instance is meant to be used for a whole run: the dependency cache
    it owns keeps package names across files.

    Parameters
    ----------
    project_name : str
        The Go module path of the project.
    rules : list[AliasRule]
        Rules in evaluation order; the first matching rule wins.
    deps : DependencyCache | None
        Resolver for the package names of unaliased imports. A fresh cache
        backed by ``go list`` is created when omitted.

    Raises
    ------
    ConfigurationError
        If a rule's expression is not a valid regular expression.
    """

    def __init__(
        self,
        project_name: str,
        rules: list[AliasRule] | None = None,
        deps: DependencyCache | None = None,
    ) -> None:
        self.project_name = project_name
        self.rules = list(rules or [])
        self.deps = deps or DependencyCache()

        for i, rule in enumerate(self.rules):
            try:
                rule.compile()
            except re.error as e:
                raise ConfigurationError(f"invalid expression in rule {i + 1}: {e}") from e

    def _find_rule(self, package: str) -> AliasRule | None:
        for rule in self.rules:
            if rule.matches(package):
                return rule
        return None

    def _package_name(self, go_file: GoFile, build_tags: str, package: str) -> str:
        # cgo pseudo-package, go list never reports it
        if package == CGO_PACKAGE:
            return CGO_PACKAGE
        try:
            return self.deps.get_package_name(go_file.path, build_tags, package)
        except ResolutionError as e:
            raise ResolutionError(f"invalid state: file imports {package!r}, but: {e}") from e

    def rewrite_file(self, go_file: GoFile, imports: ImportMap) -> dict[str, str]:
        """Alias the imports of ``go_file`` and rename all their usages.

        ``imports`` is updated in place: renamed records get their new alias
        and the map is re-keyed to match. Nothing is modified when an error
        is raised.

        Returns
        -------
        dict[str, str]
            The applied renames, old effective name to new alias.

        Raises
        ------
        UnsafeRewriteError
            If a rule matches a dot-import.
        ResolutionError
            If the package name of an unaliased import cannot be determined.
        InvalidAliasError
            If a rule produces an empty or invalid alias.
        AliasCollisionError
            If two imports would end up with the same name.
        """
        # do not waste time loading package dependencies
        if not self.rules:
            return {}

        build_tags = go_file.build_tags()
        renames: list[_Rename] = []

        for key in sorted(imports):
            record = imports[key]

            rule = self._find_rule(record.package)
            if rule is None:
                continue

            # usages of dot-imported identifiers cannot be found without type information
            if record.kind is ImportKind.DOT:
                raise UnsafeRewriteError(rule.name, record.package)

            # blank imports are never referenced
            if record.kind is ImportKind.BLANK:
                continue

            if record.kind is ImportKind.NAMED:
                old = record.alias
            else:
                old = self._package_name(go_file, build_tags, record.package)

            new = rule.apply(record.package)
            if new == "" or not _VALID_ALIAS.match(new):
                raise InvalidAliasError(rule.name, record.package, new)

            if old != new:
                renames.append(_Rename(record, old, new))

        if not renames:
            return {}

        self._check_conflicts(go_file, build_tags, imports, renames)

        for rename in renames:
            logger.debug("Renaming %s to %s (%s)", rename.old, rename.new, rename.record.package)
            rename.record.set_alias(rename.new)

        rekeyed = {record.statement(): record for record in imports.values()}
        imports.clear()
        imports.update(rekeyed)

        rename_map = {rename.old: rename.new for rename in renames}
        transformer = RenameQualifiers(rename_map)
        transformer.transform(go_file)
        logger.debug("Renamed %d references in %s", transformer.replaced_count, go_file.path)

        return rename_map

    def _check_conflicts(
        self,
        go_file: GoFile,
        build_tags: str,
        imports: ImportMap,
        renames: list[_Rename],
    ) -> None:
        """Make sure every import keeps a unique name after renaming."""
        targets: dict[str, str] = {}
        for rename in renames:
            other = targets.get(rename.new)
            if other is not None:
                raise AliasCollisionError(other, rename.record.package, rename.new)
            targets[rename.new] = rename.record.package

        new_names = {id(rename.record): rename.new for rename in renames}
        names: dict[str, str] = {}

        for key in sorted(imports):
            record = imports[key]
            if record.kind in (ImportKind.DOT, ImportKind.BLANK):
                continue

            name = new_names.get(id(record))
            if name is None:
                name = record.alias or self._package_name(go_file, build_tags, record.package)

            other = names.get(name)
            if other is not None:
                raise AliasCollisionError(other, record.package, name)
            names[name] = record.package
