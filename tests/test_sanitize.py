"""Tests for perch.static.sanitize — traversal stripping and default document."""

import pytest

from perch.static.sanitize import sanitize, strip_traversal


class TestStripTraversal:
    @pytest.mark.parametrize(
        "raw",
        [
            "/../etc/passwd",
            "/../../secret",
            "/a/..",
            "/...",
            "/....//....//etc/passwd",
            "/.../...",
            "..",
            "/a..b",
            "/.%2e/",
        ],
    )
    def test_result_never_contains_parent_sequence(self, raw: str) -> None:
        assert ".." not in strip_traversal(raw)

    def test_removes_sequence(self) -> None:
        assert strip_traversal("/../etc/passwd") == "//etc/passwd"

    def test_leaves_clean_path_alone(self) -> None:
        assert strip_traversal("/css/site.css") == "/css/site.css"

    def test_single_dots_are_kept(self) -> None:
        assert strip_traversal("/./a.b") == "/./a.b"


class TestSanitize:
    def test_root_becomes_default_document(self) -> None:
        assert sanitize("/") == "/index.html"

    def test_custom_default_document(self) -> None:
        assert sanitize("/", "/home.html") == "/home.html"

    def test_root_after_stripping(self) -> None:
        assert sanitize("/..") == "/index.html"

    def test_non_root_untouched(self) -> None:
        assert sanitize("/about.html") == "/about.html"

    def test_trailing_slash_is_not_root(self) -> None:
        assert sanitize("/docs/") == "/docs/"

    def test_idempotent(self) -> None:
        once = sanitize("/../a/../b.html")
        assert sanitize(once) == once
