"""
Tests for the tslint.json and .gitignore patches.
"""

import json
import logging

import pytest

from prettier_setup.adapters.tree import ProjectTree
from prettier_setup.core.errors import InvalidDocumentError
from prettier_setup.core.services.gitignore import update_gitignore
from prettier_setup.core.services.lint_config import (
    TSLINT_CONFIG_PACKAGE,
    normalize_extends,
    patch_lint_extends,
)


def _tslint(tree: ProjectTree) -> dict:
    return json.loads(tree.read_text("tslint.json"))


# ═══════════════════════════════════════════════════════════════════
#  tslint.json extends
# ═══════════════════════════════════════════════════════════════════


class TestNormalizeExtends:
    def test_absent(self):
        assert normalize_extends(None) == TSLINT_CONFIG_PACKAGE

    def test_string(self):
        assert normalize_extends("foo") == ["foo", TSLINT_CONFIG_PACKAGE]

    def test_list_keeps_only_preset(self):
        # Other presets are dropped: only entries equal to the preset survive
        assert normalize_extends(["foo", TSLINT_CONFIG_PACKAGE]) == [TSLINT_CONFIG_PACKAGE]

    def test_list_without_preset(self):
        assert normalize_extends(["tslint:recommended", "foo"]) == [TSLINT_CONFIG_PACKAGE]

    def test_duplicate_preset_collapsed(self):
        extends = [TSLINT_CONFIG_PACKAGE, "foo", TSLINT_CONFIG_PACKAGE]
        assert normalize_extends(extends) == [TSLINT_CONFIG_PACKAGE]

    def test_empty_list(self):
        assert normalize_extends([]) == [TSLINT_CONFIG_PACKAGE]


class TestPatchLintExtends:
    def test_absent_extends_becomes_string(self):
        tree = ProjectTree.from_files({"tslint.json": '{"rules": {}}'})
        patch_lint_extends(tree)
        assert _tslint(tree) == {"rules": {}, "extends": TSLINT_CONFIG_PACKAGE}

    def test_empty_object_is_patched(self):
        tree = ProjectTree.from_files({"tslint.json": "{}"})
        patch_lint_extends(tree)
        assert _tslint(tree) == {"extends": TSLINT_CONFIG_PACKAGE}

    def test_string_extends(self):
        tree = ProjectTree.from_files({"tslint.json": '{"extends": "foo"}'})
        patch_lint_extends(tree)
        assert _tslint(tree)["extends"] == ["foo", TSLINT_CONFIG_PACKAGE]

    def test_list_extends_literal_output(self):
        tree = ProjectTree.from_files(
            {"tslint.json": json.dumps({"extends": ["foo", TSLINT_CONFIG_PACKAGE]})}
        )
        patch_lint_extends(tree)
        assert _tslint(tree)["extends"] == [TSLINT_CONFIG_PACKAGE]

    def test_second_run_drops_earlier_preset(self):
        tree = ProjectTree.from_files({"tslint.json": '{"extends": "foo"}'})
        patch_lint_extends(tree)
        assert _tslint(tree)["extends"] == ["foo", TSLINT_CONFIG_PACKAGE]
        # Second pass sees a list, so "foo" is filtered out
        patch_lint_extends(tree)
        assert _tslint(tree)["extends"] == [TSLINT_CONFIG_PACKAGE]
        patch_lint_extends(tree)
        assert _tslint(tree)["extends"] == [TSLINT_CONFIG_PACKAGE]

    def test_missing_file_is_a_notice(self, caplog):
        tree = ProjectTree.from_files({"package.json": "{}"})
        with caplog.at_level(logging.INFO):
            patch_lint_extends(tree)
        assert tree.changes == []
        assert not tree.exists("tslint.json")
        assert "unable to locate tslint file" in caplog.text

    @pytest.mark.parametrize("content", ["", "   \n", "null", "[]", '"x"'])
    def test_empty_or_non_object_skipped(self, content):
        tree = ProjectTree.from_files({"tslint.json": content})
        patch_lint_extends(tree)
        assert tree.changes == []

    def test_invalid_json_is_fatal(self):
        tree = ProjectTree.from_files({"tslint.json": "{ extends: oops"})
        with pytest.raises(InvalidDocumentError):
            patch_lint_extends(tree)


# ═══════════════════════════════════════════════════════════════════
#  .gitignore
# ═══════════════════════════════════════════════════════════════════


class TestUpdateGitignore:
    def test_appends_comment_and_entry(self):
        tree = ProjectTree.from_files({".gitignore": "node_modules\n"})
        update_gitignore(tree)
        assert tree.read_text(".gitignore") == "node_modules\n\n# Husky hooks\n/.husky"

    def test_no_trailing_newline(self):
        tree = ProjectTree.from_files({".gitignore": "node_modules\ndist"})
        update_gitignore(tree)
        assert tree.read_text(".gitignore") == "node_modules\ndist\n# Husky hooks\n/.husky"

    def test_idempotent(self):
        tree = ProjectTree.from_files({".gitignore": "node_modules\n"})
        update_gitignore(tree)
        update_gitignore(tree)
        lines = tree.read_text(".gitignore").split("\n")
        assert lines.count("/.husky") == 1
        assert lines.count("# Husky hooks") == 1

    def test_entry_already_present(self):
        tree = ProjectTree.from_files({".gitignore": "/.husky\nnode_modules\n"})
        update_gitignore(tree)
        assert tree.changes == []

    def test_missing_file_not_created(self):
        tree = ProjectTree()
        update_gitignore(tree)
        assert not tree.exists(".gitignore")
        assert tree.changes == []

    def test_unreadable_file_is_a_notice(self, caplog):
        tree = ProjectTree.from_files({".gitignore": b"\xff\xfe bad"})
        with caplog.at_level(logging.INFO):
            update_gitignore(tree)
        assert tree.changes == []
        assert "Please add a new entry for /.husky" in caplog.text
