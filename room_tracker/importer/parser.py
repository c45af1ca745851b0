"""Parse a checklist-style Markdown document into categories and rooms.

Recognized lines (after stripping surrounding whitespace)::

    ## Intro Rooms
    - [ ] [TryHackMe | Tutorial](https://tryhackme.com/room/tutorial)

Everything else (prose, blank lines, checked ``- [x]`` entries, deeper
headings, rooms listed before the first heading) is ignored.
"""

from __future__ import annotations

import re
from pathlib import Path
from types import MappingProxyType

from room_tracker.constants import ROOM_TITLE_PREFIX
from room_tracker.models.catalog import ParsedCategory, ParsedRoom
from room_tracker.utils.exceptions import SourceReadError
from room_tracker.utils.logging import get_logger

logger = get_logger(__name__)

HEADING_PATTERN = re.compile(r"^##\s+(.+)$")
ROOM_PATTERN = re.compile(r"^-\s+\[ \]\s+\[([^\]]+)\]\(([^)]+)\)")

# Headings as written in the source README -> names shown in the tracker.
# Identity entries are kept so the table lists every known section.
CATEGORY_NAME_MAP = MappingProxyType(
    {
        "Intro Rooms": "Introductory Rooms",
        "Linux Fundamentals": "Linux Fundamentals",
        "Windows Fundamentals": "Windows Fundamentals",
        "Basics Rooms": "Basic Rooms",
        "Recon": "Reconnaissance",
        "Scripting": "Scripting",
        "Networking": "Networking",
        "Tooling": "Tooling",
        "Crypto & Hashes": "Crypto & Hashes",
        "Steganography": "Steganography",
        "Web": "Web",
        "Android": "Android",
        "Forensics": "Forensics",
        "Wi-Fi Hacking": "Wifi Hacking",
        "Reverse Engineering": "Reverse Engineering",
        "Malware Analysis": "Malware Analysis",
        "PrivEsc": "Privilege Escalation",
        "Windows": "Windows",
        "Active Directory": "Active Directory",
        "PCAP Analysis": "PCAP Analysis",
        "BufferOverflow": "Buffer Overflow",
        "Easy CTF": "Easy CTF",
        "Medium CTF": "Medium CTF",
        "Hard CTF": "Hard CTF",
        "Misc": "Misc",
        "Special Events": "Special Events",
    }
)


def normalize_category_name(raw_name: str) -> str:
    """Map a heading to its display name; unknown headings pass through."""
    return CATEGORY_NAME_MAP.get(raw_name, raw_name)


def strip_title_prefix(title: str) -> str:
    """Remove one leading ``"TryHackMe | "`` from a room title."""
    return title.removeprefix(ROOM_TITLE_PREFIX)


def parse_checklist(content: str) -> list[ParsedCategory]:
    categories: list[ParsedCategory] = []
    current: ParsedCategory | None = None
    category_order = 0
    room_order = 0

    for raw_line in content.splitlines():
        line = raw_line.strip()

        heading = HEADING_PATTERN.match(line)
        if heading:
            if current is not None:
                categories.append(current)
            category_order += 1
            room_order = 0
            current = ParsedCategory(
                name=normalize_category_name(heading.group(1)),
                display_order=category_order,
            )
            continue

        room = ROOM_PATTERN.match(line)
        if room and current is not None:
            room_order += 1
            current.rooms.append(
                ParsedRoom(
                    title=strip_title_prefix(room.group(1)),
                    url=room.group(2),
                    display_order=room_order,
                )
            )

    if current is not None:
        categories.append(current)

    return categories


def read_checklist(path: str | Path) -> str:
    """Read the checklist document as UTF-8 text."""
    source = Path(path)
    try:
        content = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read checklist", path=str(source), error=str(exc))
        raise SourceReadError(
            f"Cannot read checklist document {source}: {exc}",
            details={"path": str(source)},
        ) from exc
    logger.info("Checklist read", path=str(source), size=len(content))
    return content
