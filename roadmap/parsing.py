from __future__ import annotations

import re
from typing import Dict, List, Optional


RawRow = Dict[str, Optional[str]]

HOURS_PER_WEEK = 40
HOURS_PER_DAY = 8
DEFAULT_EFFORT_HOURS = 4

DURATION_UNITS = (
    ("week", re.compile(r"(\d+)\s*week", re.ASCII), HOURS_PER_WEEK),
    ("day", re.compile(r"(\d+)\s*day", re.ASCII), HOURS_PER_DAY),
    ("hour", re.compile(r"(\d+)\s*hour", re.ASCII), 1),
)

MONTH_INDEX = {
    "ene": 0,
    "feb": 1,
    "mar": 2,
    "abr": 3,
    "may": 4,
    "jun": 5,
    "jul": 6,
    "ago": 7,
    "sep": 8,
    "oct": 9,
    "nov": 10,
    "dic": 11,
}
DEFAULT_MONTH_INDEX = 9
DEFAULT_QUARTER = "Q4"


def duration_unit_hours(text: Optional[str]) -> int:
    """Sum of week/day/hour counts found in text, without the effort fallback."""
    if not text:
        return 0
    lower = text.lower()
    hours = 0
    for keyword, pattern, weight in DURATION_UNITS:
        if keyword not in lower:
            continue
        match = pattern.search(lower)
        hours += int(match.group(1)) * weight if match else 0
    return hours


def parse_duration(text: Optional[str]) -> int:
    """Convert free-text effort ("2 weeks", "1 week 2 days") into hours.

    Empty input is 0. Text that mentions no unit, or only zero counts, is
    treated as some effort and returns DEFAULT_EFFORT_HOURS.
    """
    if not text:
        return 0
    return duration_unit_hours(text) or DEFAULT_EFFORT_HOURS


def parse_month(date_text: str) -> Optional[int]:
    """Zero-based month from a 'dd/mmm/yyyy' string with Spanish month abbreviations.

    Returns DEFAULT_MONTH_INDEX when there is no second token and None when the
    abbreviation is not recognized.
    """
    parts = date_text.lower().split("/")
    if len(parts) < 2:
        return DEFAULT_MONTH_INDEX
    return MONTH_INDEX.get(parts[1])


def get_quarter(date_text: Optional[str]) -> str:
    if not date_text:
        return DEFAULT_QUARTER
    month = parse_month(date_text)
    # Unknown month abbreviations fall through every boundary to Q4.
    if month is None:
        return DEFAULT_QUARTER
    if month < 3:
        return "Q1"
    if month < 6:
        return "Q2"
    if month < 9:
        return "Q3"
    return "Q4"


def split_line(line: str) -> List[str]:
    """Split one data line on commas, honouring double-quoted fields.

    Quotes only toggle the quoted state and are not kept. Doubled quotes are
    not an escape sequence.
    """
    fields: List[str] = []
    current = ""
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(current.strip())
            current = ""
        else:
            current += char
    fields.append(current.strip())
    return fields


def _unquote(value: Optional[str]) -> Optional[str]:
    if value and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse_headers(header_line: str) -> List[str]:
    return [h.strip().lower() for h in header_line.strip().split(",")]


def parse_csv(text: str) -> List[RawRow]:
    """Parse delimited text into rows keyed by lowercase header name.

    Blank lines are skipped; rows shorter than the header get None for the
    missing trailing fields.
    """
    stripped = (text or "").strip()
    if not stripped:
        return []
    lines = stripped.split("\n")
    headers = parse_headers(lines[0])

    rows: List[RawRow] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = split_line(line)
        row: RawRow = {}
        for idx, header in enumerate(headers):
            row[header] = _unquote(values[idx]) if idx < len(values) else None
        rows.append(row)
    return rows
