from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from docsnippets.core.extractor import (
    clean_code_line,
    extract_cases,
    extract_cases_from_events,
    extract_cases_from_file,
    split_lines,
)
from docsnippets.core.scanner import CodeBlockEnd, CodeBlockStart, HeadingEnd, HeadingStart, Text
from docsnippets.errors import ExtractionError

GUIDE = textwrap.dedent(
    """\
    # Guide

    Intro text.

    ```rust
    fn main() {
        println!("hi");
    }
    ```

    ## Usage

    ```rust,should_panic
    # fn helper() {}
    #
    fn main() { panic!("boom"); }
    ```

    ### Details

    ```rust,no_run
    fn main() {}
    ```

    ```python
    print("not rust")
    ```

    ```rust,ignore
    this does not compile
    ```
    """
)


def test_extracts_runnable_blocks_in_document_order() -> None:
    cases = extract_cases(GUIDE, "docs/guide.md")
    assert [case.name for case in cases] == [
        "docs_guide_sect_guide_line_5",
        "docs_guide_sect_usage_line_13",
        "docs_guide_sect_usage_line_21",
        "docs_guide_sect_usage_line_29",
    ]


def test_case_bodies_and_flags() -> None:
    first, second, third, fourth = extract_cases(GUIDE, "docs/guide.md")
    assert first.text == ("fn main() {", '    println!("hi");', "}")
    assert not (first.skip or first.check_only or first.expect_panic)
    assert second.text == ("fn helper() {}", 'fn main() { panic!("boom"); }')
    assert second.expect_panic
    assert third.check_only and third.section == "usage"
    assert fourth.skip


def test_document_without_rust_blocks_yields_nothing() -> None:
    source = "# Title\n\n```python\nprint(1)\n```\n\n```\nplain\n```\n"
    assert extract_cases(source, "README.md") == []


def test_case_without_heading_has_no_section() -> None:
    (case,) = extract_cases('```rust\nfn main() { println!("hi"); }\n```\n', "README.md")
    assert case.section is None
    assert case.start_line == 1
    assert case.name == "readme_line_1"


def test_level_two_heading_names_the_section() -> None:
    (case,) = extract_cases("## Usage\n\n```rust\nfn main() {}\n```\n", "README.md")
    assert "_sect_usage_" in case.name


def test_latest_heading_replaces_section() -> None:
    source = "# One\n\n## Two\n\n```rust\nfn main() {}\n```\n"
    (case,) = extract_cases(source, "a.md")
    assert case.section == "two"


def test_unclosed_block_yields_no_case() -> None:
    assert extract_cases("```rust\nfn main() {}\n", "a.md") == []


def test_unicode_line_separators_stay_inside_code_lines() -> None:
    body = 'fn main() { let s = "a\u2028\x0c"; assert_eq!(s.len(), 5); }'
    (case,) = extract_cases(f"```rust\n{body}\n```\n", "a.md")
    assert case.text == (body,)


def test_split_lines_only_breaks_on_line_feeds() -> None:
    assert split_lines("a\r\nb\x85c\n\nd\n") == ["a", "b\x85c", "", "d"]
    assert split_lines("") == []


def test_empty_block_is_still_a_case() -> None:
    (case,) = extract_cases("```rust\n```\n", "a.md")
    assert case.text == ()
    assert case.start_line == 1


@pytest.mark.parametrize(
    "line, expected",
    [
        ("# use std::io;", "use std::io;"),
        ("    # let x = 1;", "let x = 1;"),
        ("#", None),
        ("   ", None),
        ("", None),
        ("#[derive(Debug)]", "#[derive(Debug)]"),
        ("    let y = 2;", "    let y = 2;"),
    ],
)
def test_clean_code_line(line, expected) -> None:
    assert clean_code_line(line) == expected


def test_block_replaced_by_new_heading_is_discarded() -> None:
    events = [
        CodeBlockStart(info="rust", line=0),
        Text(text="fn main() {}\n", line=1),
        HeadingStart(level=1, line=2),
        Text(text="Next", line=2),
        HeadingEnd(level=1, line=2),
        CodeBlockEnd(line=3),
    ]
    assert extract_cases_from_events(events, "a.md") == []


def test_non_runnable_block_end_is_ignored() -> None:
    events = [
        CodeBlockStart(info="text", line=0),
        Text(text="hello\n", line=1),
        CodeBlockEnd(line=2),
    ]
    assert extract_cases_from_events(events, "a.md") == []


def test_deep_headings_do_not_capture_text() -> None:
    events = [
        HeadingStart(level=3, line=0),
        Text(text="Deep", line=0),
        HeadingEnd(level=3, line=0),
        CodeBlockStart(info="rust", line=2),
        Text(text="fn main() {}\n", line=3),
        CodeBlockEnd(line=4),
    ]
    (case,) = extract_cases_from_events(events, "a.md")
    assert case.section is None


def test_extract_from_file(tmp_path: Path) -> None:
    doc = tmp_path / "Guide.md"
    doc.write_text("```rust\nfn main() {}\n```\n", encoding="utf-8")
    (case,) = extract_cases_from_file(doc)
    assert case.origin_path == str(doc)
    assert case.name.endswith("_guide_line_1")


def test_unreadable_file_raises_extraction_error(tmp_path: Path) -> None:
    missing = tmp_path / "missing.md"
    with pytest.raises(ExtractionError) as info:
        extract_cases_from_file(missing)
    assert info.value.path == str(missing)


def test_non_utf8_file_raises_extraction_error(tmp_path: Path) -> None:
    doc = tmp_path / "latin.md"
    doc.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(ExtractionError):
        extract_cases_from_file(doc)
