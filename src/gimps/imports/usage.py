"""Optional import clean-ups that need the real package names.

Both helpers resolve package names through a :class:`DependencyCache` and
are therefore only run when enabled in the configuration.
"""
from __future__ import annotations

import logging
import posixpath

from gimps.golang.source import GoFile
from gimps.imports.deps import DependencyCache
from gimps.imports.extractor import ImportKind, ImportMap
from gimps.transformers.rename_qualifiers import used_qualifiers

logger = logging.getLogger(__name__)

# pseudo-package of cgo, unknown to go list
CGO_PACKAGE = "C"


def set_version_aliases(go_file: GoFile, imports: ImportMap, deps: DependencyCache) -> None:
    """Make package names explicit where they differ from the import path.

    ``import "github.com/bmatcuk/doublestar/v4"`` is referred to as
    ``doublestar``, which is not obvious from the path; such imports become
    ``import doublestar "github.com/bmatcuk/doublestar/v4"``. References in
    the file stay the same.
    """
    build_tags = go_file.build_tags()
    changed = False

    for record in imports.values():
        if record.kind is not ImportKind.PLAIN or record.package == CGO_PACKAGE:
            continue

        name = deps.get_package_name(go_file.path, build_tags, record.package)
        if name != posixpath.basename(record.package):
            record.set_alias(name)
            changed = True

    if changed:
        rekeyed = {record.statement(): record for record in imports.values()}
        imports.clear()
        imports.update(rekeyed)


def remove_unused_imports(go_file: GoFile, imports: ImportMap, deps: DependencyCache) -> list[str]:
    """Drop imports whose name is never used as a qualifier in ``go_file``.

    Dot and blank imports are always kept. Returns the removed keys.
    """
    used = used_qualifiers(go_file)
    build_tags = go_file.build_tags()
    removed = []

    for key, record in list(imports.items()):
        if record.kind in (ImportKind.DOT, ImportKind.BLANK) or record.package == CGO_PACKAGE:
            continue

        name = record.alias or deps.get_package_name(go_file.path, build_tags, record.package)
        if name not in used:
            logger.debug("Removing unused import %s from %s", key, go_file.path)
            del imports[key]
            removed.append(key)

    return removed
