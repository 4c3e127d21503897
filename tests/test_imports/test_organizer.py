"""
Tests for gimps.imports.organizer module.

Coverage targets:
- ImportOrganizer construction: import order validation
- group / render: set order, sorting, separators, comments
- rebuild: merging, removal of empty declarations, idempotence
"""
from __future__ import annotations

from pathlib import Path

import pytest

from conftest import PROJECT, go
from gimps.errors import ConfigurationError
from gimps.golang.source import GoFile
from gimps.imports.classifier import Classifier, Set
from gimps.imports.extractor import ImportKind, ImportRecord, extract_imports
from gimps.imports.organizer import ImportOrganizer


def _organize(source: bytes, organizer: ImportOrganizer | None = None) -> bytes:
    organizer = organizer or ImportOrganizer(Classifier(PROJECT))
    go_file = GoFile(source, Path("main.go"))
    organizer.rebuild(go_file, extract_imports(go_file))
    return go_file.source


# =============================================================================
# Import Order Tests
# =============================================================================

class TestImportOrder:
    """Tests for validating the configured import order."""

    def test_default_order(self):
        organizer = ImportOrganizer(Classifier(PROJECT))

        assert organizer.import_order == ["std", "project", "external"]

    def test_missing_builtin_set(self):
        with pytest.raises(ConfigurationError, match="missing the set"):
            ImportOrganizer(Classifier(PROJECT), ["std", "external"])

    def test_missing_user_set(self):
        classifier = Classifier(PROJECT, [Set("kubernetes", ("k8s.io/**",))])

        with pytest.raises(ConfigurationError, match="kubernetes"):
            ImportOrganizer(classifier, ["std", "project", "external"])

    def test_duplicate_set(self):
        with pytest.raises(ConfigurationError, match="more than once"):
            ImportOrganizer(Classifier(PROJECT), ["std", "project", "external", "std"])


# =============================================================================
# Render Tests
# =============================================================================

class TestRender:
    """Tests for ImportOrganizer.group and ImportOrganizer.render."""

    def _imports(self, *records):
        return {record.statement(): record for record in records}

    def test_groups_follow_import_order(self):
        classifier = Classifier(PROJECT, [Set("kubernetes", ("k8s.io/**",))])
        organizer = ImportOrganizer(classifier, ["std", "kubernetes", "external", "project"])
        imports = self._imports(
            ImportRecord(PROJECT + "/sub"),
            ImportRecord("k8s.io/api/core/v1", ImportKind.NAMED, "corev1"),
            ImportRecord("github.com/x/y"),
            ImportRecord("os"),
            ImportRecord("fmt"),
        )

        assert organizer.group(imports) == [
            ['"fmt"', '"os"'],
            ['corev1 "k8s.io/api/core/v1"'],
            ['"github.com/x/y"'],
            ['"example.com/proj/sub"'],
        ]

    def test_empty_groups_are_omitted(self):
        organizer = ImportOrganizer(Classifier(PROJECT))
        imports = self._imports(ImportRecord("fmt"), ImportRecord("github.com/x/y"))

        assert organizer.render(imports) == 'import (\n\t"fmt"\n\n\t"github.com/x/y"\n)'

    def test_no_imports(self):
        assert ImportOrganizer(Classifier(PROJECT)).render({}) == ""

    def test_single_import_without_parentheses(self):
        organizer = ImportOrganizer(Classifier(PROJECT))

        assert organizer.render(self._imports(ImportRecord("fmt")), parenthesize=False) == 'import "fmt"'

    def test_trailing_comment_is_kept(self):
        organizer = ImportOrganizer(Classifier(PROJECT))
        imports = self._imports(ImportRecord("fmt", comment="printing"))

        assert organizer.render(imports) == 'import (\n\t"fmt" // printing\n)'

    def test_multiline_comment_is_flattened(self):
        organizer = ImportOrganizer(Classifier(PROJECT))
        imports = self._imports(ImportRecord("fmt", comment="print\ning"))

        assert organizer.render(imports, parenthesize=False) == 'import "fmt" // printing'


# =============================================================================
# Rebuild Tests
# =============================================================================

class TestRebuild:
    """Tests for ImportOrganizer.rebuild."""

    def test_groups_and_sorts(self, sample_unsorted):
        result = _organize(sample_unsorted)

        assert result == go('''
            package main

            import (
            \t"fmt"

            \t"example.com/proj/sub"

            \t"github.com/x/y"
            )

            func main() {
            \tfmt.Println(y.Value, sub.Value)
            }
        ''')

    def test_declarations_are_merged(self):
        source = go('''
            package main

            import "os"

            import "fmt"

            func main() {}
        ''')

        assert _organize(source) == b'package main\n\nimport (\n\t"fmt"\n\t"os"\n)\n\nfunc main() {}\n'

    def test_single_import_keeps_its_form(self):
        source = b'package main\n\nimport "fmt"\n\nfunc main() {}\n'

        assert _organize(source) == source

    def test_parentheses_are_kept(self):
        source = b'package main\n\nimport (\n\t"fmt"\n)\n\nfunc main() {}\n'

        assert _organize(source) == source

    def test_empty_declaration_is_removed(self):
        source = b"package main\n\nimport ()\n\nfunc main() {}\n"

        assert _organize(source) == b"package main\n\nfunc main() {}\n"

    def test_file_without_imports_is_untouched(self):
        source = b"package main\n\nfunc main() {}\n"

        assert _organize(source) == source

    def test_trailing_comments_survive(self):
        source = go('''
            package main

            import (
            \t"os" // files
            \t"fmt" // printing
            )
        ''')

        assert _organize(source) == b'package main\n\nimport (\n\t"fmt" // printing\n\t"os" // files\n)\n'

    def test_duplicates_are_removed(self):
        source = go('''
            package main

            import "fmt"

            import (
            \t"fmt"
            )
        ''')

        assert _organize(source) == b'package main\n\nimport "fmt"\n'

    def test_idempotent(self, sample_unsorted):
        """Organizing an organized file changes nothing."""
        once = _organize(sample_unsorted)

        assert _organize(once) == once
