"""
Best-effort parser for semi-structured summary text.

Sections are located by heading lines ("Action Items:", "**Decisions Made:**",
"## Participants:" ...). Each section runs until its declared successor
heading, or any other known heading that comes first, or the end of the
text. Nothing here raises: unrecognised input yields empty lists and a
default title.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Pattern

TITLE_RE = re.compile(r"^\s*(?:Meeting Title|Title):\s*(.*)", re.IGNORECASE | re.MULTILINE)
LIST_MARKER_RE = re.compile(r"\n\s*[-*]\s*")
LEADING_MARKER_RE = re.compile(r"^[-*]")

# Heading texts, keyed by section; "follow_up" only ever ends a section.
HEADINGS: Dict[str, str] = {
    "summary": r"Summary",
    "participants": r"Participants",
    "key_points": r"Key Discussion Points",
    "decisions": r"Decisions Made",
    "action_items": r"Action Items",
    "follow_up": r"Follow-up(?:[ \t]+[A-Za-z]+)*",
}


def _heading_pattern(heading: str) -> Pattern[str]:
    return re.compile(
        rf"^[ \t]*(?:#+[ \t]*)?(?:\*\*)?{heading}(?:\*\*)?:(?:\*\*)?[ \t]*\n?",
        re.IGNORECASE | re.MULTILINE,
    )


@dataclass(frozen=True)
class SectionRule:
    start: Pattern[str]
    next_section: Optional[Pattern[str]]
    # any other heading also closes the section if it comes first
    others: List[Pattern[str]] = field(default_factory=list)


def _rule(name: str, next_name: Optional[str]) -> SectionRule:
    return SectionRule(
        start=_heading_pattern(HEADINGS[name]),
        next_section=_heading_pattern(HEADINGS[next_name]) if next_name else None,
        others=[_heading_pattern(h) for key, h in HEADINGS.items() if key not in (name, next_name)],
    )


SECTIONS: Dict[str, SectionRule] = {
    "participants": _rule("participants", "key_points"),
    "key_points": _rule("key_points", "decisions"),
    "decisions": _rule("decisions", "action_items"),
    "action_items": _rule("action_items", "follow_up"),
}


@dataclass
class ParsedSummary:
    title: str
    participants: List[str] = field(default_factory=list)
    key_points: List[str] = field(default_factory=list)
    decisions: List[str] = field(default_factory=list)
    action_items: List[str] = field(default_factory=list)


def default_title(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"Meeting Summary - {today.month}/{today.day}/{today.year}"


def extract_title(text: str, today: Optional[date] = None) -> str:
    match = TITLE_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return default_title(today)


def extract_section(text: str, rule: SectionRule) -> List[str]:
    start = rule.start.search(text)
    if not start:
        return []
    content = text[start.end():]

    end = len(content)
    boundaries = ([rule.next_section] if rule.next_section else []) + rule.others
    for pattern in boundaries:
        match = pattern.search(content)
        if match and match.start() < end:
            end = match.start()
    content = content[:end]

    items = LIST_MARKER_RE.split(content.strip())
    cleaned = (LEADING_MARKER_RE.sub("", item).strip() for item in items)
    return [item for item in cleaned if item]


def parse_summary_text(text: str, today: Optional[date] = None) -> ParsedSummary:
    return ParsedSummary(
        title=extract_title(text, today),
        participants=extract_section(text, SECTIONS["participants"]),
        key_points=extract_section(text, SECTIONS["key_points"]),
        decisions=extract_section(text, SECTIONS["decisions"]),
        action_items=extract_section(text, SECTIONS["action_items"]),
    )
