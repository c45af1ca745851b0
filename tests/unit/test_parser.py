from __future__ import annotations

import pytest

from room_tracker.importer.parser import (
    CATEGORY_NAME_MAP,
    normalize_category_name,
    parse_checklist,
    read_checklist,
    strip_title_prefix,
)
from room_tracker.utils.exceptions import SourceReadError

EXAMPLE = """\
## Intro Rooms
- [ ] [TryHackMe | Intro](http://example.com/a)
- [ ] [Second](http://example.com/b)
## Recon
- [ ] [Nmap](http://example.com/c)
"""


def test_example_document_yields_two_categories():
    categories = parse_checklist(EXAMPLE)

    assert [c.model_dump() for c in categories] == [
        {
            "name": "Introductory Rooms",
            "display_order": 1,
            "rooms": [
                {"title": "Intro", "url": "http://example.com/a", "display_order": 1},
                {"title": "Second", "url": "http://example.com/b", "display_order": 2},
            ],
        },
        {
            "name": "Reconnaissance",
            "display_order": 2,
            "rooms": [{"title": "Nmap", "url": "http://example.com/c", "display_order": 1}],
        },
    ]
    assert [c.total_rooms for c in categories] == [2, 1]


def test_document_without_headings_is_empty():
    content = "# TryHackMe rooms\n\nSome prose.\n- [ ] [Orphan](http://example.com/x)\n"
    assert parse_checklist(content) == []
    assert parse_checklist("") == []


def test_category_order_is_one_to_n_even_for_empty_sections():
    content = "## A\n## B\n- [ ] [r](u)\n## C\n"
    categories = parse_checklist(content)
    assert [c.display_order for c in categories] == [1, 2, 3]
    assert [c.total_rooms for c in categories] == [0, 1, 0]


def test_room_order_restarts_per_category():
    content = "## A\n- [ ] [a1](u1)\n- [ ] [a2](u2)\n- [ ] [a3](u3)\n## B\n- [ ] [b1](u4)\n- [ ] [b2](u5)\n"
    a, b = parse_checklist(content)
    assert [r.display_order for r in a.rooms] == [1, 2, 3]
    assert [r.display_order for r in b.rooms] == [1, 2]


def test_ignored_lines_do_not_move_counters():
    content = "\n".join(
        [
            "## Web",
            "Intro paragraph about web rooms.",
            "",
            "- [x] [Done already](http://example.com/done)",
            "- [X] [Also done](http://example.com/done2)",
            "- [ ] [First](http://example.com/1)",
            "### Sub heading",
            "* [ ] [Wrong bullet](http://example.com/bullet)",
            "- [ ] Missing link",
            "- [ ] [Second](http://example.com/2)",
        ]
    )
    (web,) = parse_checklist(content)
    assert [(r.title, r.display_order) for r in web.rooms] == [("First", 1), ("Second", 2)]


def test_checkbox_needs_exactly_one_space():
    content = "## A\n- [] [none](u1)\n- [  ] [two](u2)\n- [ ] [one](u3)\n"
    (a,) = parse_checklist(content)
    assert [r.title for r in a.rooms] == ["one"]


def test_surrounding_whitespace_is_ignored():
    content = "   ## Recon   \n\t- [ ] [Nmap](http://example.com/c)  trailing text\n"
    (recon,) = parse_checklist(content)
    assert recon.name == "Reconnaissance"
    assert recon.rooms[0].url == "http://example.com/c"


def test_windows_line_endings():
    content = "## Recon\r\n- [ ] [Nmap](http://example.com/c)\r\n"
    (recon,) = parse_checklist(content)
    assert recon.name == "Reconnaissance"
    assert recon.rooms[0].title == "Nmap"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("TryHackMe | Intro", "Intro"),
        ("Intro", "Intro"),
        ("TryHackMe | TryHackMe | Twice", "TryHackMe | Twice"),
        ("tryhackme | lower", "tryhackme | lower"),
        ("Room TryHackMe | middle", "Room TryHackMe | middle"),
    ],
)
def test_strip_title_prefix(raw, expected):
    assert strip_title_prefix(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Intro Rooms", "Introductory Rooms"),
        ("Recon", "Reconnaissance"),
        ("PrivEsc", "Privilege Escalation"),
        ("Wi-Fi Hacking", "Wifi Hacking"),
        ("BufferOverflow", "Buffer Overflow"),
        ("Networking", "Networking"),
        ("recon", "recon"),
        ("Cloud Security", "Cloud Security"),
    ],
)
def test_normalize_category_name(raw, expected):
    assert normalize_category_name(raw) == expected


def test_name_map_is_read_only_and_keeps_identity_entries():
    assert len(CATEGORY_NAME_MAP) == 26
    assert CATEGORY_NAME_MAP["Misc"] == "Misc"
    with pytest.raises(TypeError):
        CATEGORY_NAME_MAP["New"] = "New"  # type: ignore[index]


def test_read_checklist_returns_text(tmp_path):
    source = tmp_path / "README.md"
    source.write_text(EXAMPLE, encoding="utf-8")
    assert read_checklist(source) == EXAMPLE


def test_read_checklist_missing_file_raises_source_read_error(tmp_path):
    with pytest.raises(SourceReadError) as excinfo:
        read_checklist(tmp_path / "missing.md")
    assert excinfo.value.details["path"].endswith("missing.md")


def test_read_checklist_undecodable_file_raises_source_read_error(tmp_path):
    source = tmp_path / "README.md"
    source.write_bytes(b"## Web\n\xff\xfe\xfa")
    with pytest.raises(SourceReadError):
        read_checklist(source)
