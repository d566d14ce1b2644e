from docsnippets.core.models import TestCase
from docsnippets.core.naming import base_name, derive_name, sanitize, strip_extension


def test_sanitize_collapses_runs_and_trims() -> None:
    assert sanitize("  Getting Started!! (v2) ") == "getting_started_v2"
    assert sanitize("Usage") == "usage"
    assert sanitize("---") == ""


def test_sanitize_is_idempotent() -> None:
    for text in ("Hello, World", "a__b", "_x_", "Ünïcode Héading", "docs/guide"):
        once = sanitize(text)
        assert sanitize(once) == once


def test_base_name_strips_markdown_extension() -> None:
    assert strip_extension("README.md") == "README"
    assert base_name("docs/Getting-Started.md") == "docs_getting_started"
    assert base_name("./book/intro.md") == "book_intro"


def test_base_name_keeps_longer_extensions() -> None:
    assert base_name("notes.markdown") == "notes_markdown"


def test_derive_name_with_and_without_section() -> None:
    assert derive_name("docs/guide.md", None, 4) == "docs_guide_line_4"
    assert derive_name("docs/guide.md", "Quick Start", 12) == "docs_guide_sect_quick_start_line_12"


def test_derive_name_is_stable() -> None:
    first = derive_name("README.md", "usage", 3)
    assert derive_name("README.md", "usage", 3) == first


def test_names_differ_by_start_line_within_a_section() -> None:
    a = TestCase(text=(), origin_path="README.md", start_line=3, section="usage")
    b = TestCase(text=(), origin_path="README.md", start_line=9, section="usage")
    assert a.name != b.name


def test_known_collision_between_headings_that_sanitize_alike() -> None:
    assert derive_name("a.md", "Foo Bar", 1) == derive_name("a.md", "foo-bar", 1)
