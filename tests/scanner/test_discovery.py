"""Tests for file discovery and the scan context."""

import pytest

from clawscan.core.exceptions import NotReadableError
from clawscan.scanner.context import ScanContext
from clawscan.scanner.discovery import DEFAULT_EXCLUDES, discover_files


@pytest.fixture
def tree(make_tree):
    return make_tree(
        {
            "app.py": "x = 1\n",
            "src/lib/util.py": "y = 2\n",
            "node_modules/pkg/index.js": "z\n",
            ".git/config": "[core]\n",
            "Cargo.lock": "lock\n",
            "web/bun.lockb": b"\x00",
            "docs/private/notes.md": "n\n",
            "docs/public.md": "p\n",
        }
    )


def test_default_excludes(tree):
    files = discover_files(tree)

    assert files == [
        "app.py",
        "docs/private/notes.md",
        "docs/public.md",
        "src/lib/util.py",
    ]


def test_explicit_excludes_replace_defaults(tree):
    files = discover_files(tree, ["docs/private"])

    assert "node_modules/pkg/index.js" in files
    assert ".git/config" in files
    assert "Cargo.lock" in files
    assert "docs/public.md" in files
    assert "docs/private/notes.md" not in files


def test_wildcard_matches_bare_name_only(tree):
    files = discover_files(tree, ["*.md", "lib"])

    assert not any(f.endswith(".md") for f in files)
    assert "src/lib/util.py" not in files
    assert "app.py" in files


def test_wildcard_escapes_dots(make_tree):
    root = make_tree({"a.lock": "", "alock": ""})
    assert discover_files(root, ["*.lock"]) == ["alock"]


def test_default_exclude_list_contents():
    assert "node_modules" in DEFAULT_EXCLUDES
    assert "*.lock" in DEFAULT_EXCLUDES


class TestScanContext:
    def test_files_are_immutable(self, tree):
        ctx = ScanContext(tree, ["app.py"])
        assert ctx.files == ("app.py",)

    def test_read_file(self, tree):
        ctx = ScanContext(tree, discover_files(tree))
        assert ctx.read_file("src/lib/util.py") == "y = 2\n"

    def test_read_failures_raise_not_readable(self, tree):
        ctx = ScanContext(tree, [])

        with pytest.raises(NotReadableError):
            ctx.read_file("missing.txt")
        with pytest.raises(NotReadableError):
            ctx.read_file("web/bun.lockb")
        with pytest.raises(NotReadableError):
            ctx.read_file("src")

    def test_file_exists(self, tree):
        ctx = ScanContext(tree, [])

        assert ctx.file_exists(".git")
        assert ctx.file_exists("docs/")
        assert not ctx.file_exists("nope")
