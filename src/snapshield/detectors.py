"""Regex candidate detectors for structured PII.

These are deliberately greedy and independent of each other: they report
every plausible span per type and leave overlap resolution to the
Deduplicator.  A bare "17" inside "Jan 17, 2026" is reported as a quantity
here and discarded later because the date outranks it.
"""

from __future__ import annotations
import re
from typing import Iterable

from .types import DetectedEntity, EntityType

_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|"
    r"Aug(?:ust)?|Sept?(?:ember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_NUM = r"\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?"

# Each pattern: (entity_type, compiled_regex, confidence)
_PATTERNS: list[tuple[EntityType, re.Pattern, float]] = [
    # Dates: ISO, numeric with separators, textual month
    (EntityType.DATE, re.compile(r"\b\d{4}-\d{1,2}-\d{1,2}\b"), 0.95),
    (EntityType.DATE, re.compile(r"\b\d{1,2}([/\-.])\d{1,2}\1\d{4}\b"), 0.9),
    (EntityType.DATE, re.compile(
        rf"\b{_MONTHS}\.?\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b"
    ), 0.95),

    # Email: high confidence
    (EntityType.EMAIL, re.compile(
        r"\b[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}\b"
    ), 1.0),

    # Phone: international and domestic formats
    (EntityType.PHONE, re.compile(
        r"(?<![\d.])"
        r"(?:\+\d{1,3}[\s\-.]?)?"
        r"(?:\(\d{3}\)\s?|\d{3}[\s\-.])"
        r"\d{3}[\s\-.]\d{4}"
        r"(?![\d.])"
    ), 0.85),

    # Credit card: Visa, MC, Amex, Discover (with optional separators)
    (EntityType.CREDIT_CARD, re.compile(
        r"\b(?:4\d{3}|5[1-5]\d{2}|3[47]\d{2}|6(?:011|5\d{2}))"
        r"[\s\-]?\d{4}[\s\-]?\d{4}[\s\-]?\d{1,4}\b"
    ), 0.95),

    # SSN (US)
    (EntityType.SSN, re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), 0.9),

    # IPv4 and (full-form) IPv6
    (EntityType.IP, re.compile(
        r"\b(?:(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\.){3}"
        r"(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\b"
    ), 0.9),
    (EntityType.IP, re.compile(r"\b(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}\b"), 0.9),

    # URLs: with scheme, or bare www. hosts
    (EntityType.URL, re.compile(
        r"\bhttps?://[^\s<>\"']+[^\s<>\"'.,;:!?)]"
        r"|\bwww\.[a-zA-Z0-9\-]+(?:\.[a-zA-Z0-9\-]+)+(?:/[^\s<>\"']*[^\s<>\"'.,;:!?)])?"
    ), 0.9),

    # US street addresses (basic)
    (EntityType.ADDRESS, re.compile(
        r"\b\d{1,5}\s+(?:[A-Z][a-z]+\s+){1,3}"
        r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr|Court|Ct|Way|Place|Pl)\b\.?"
    ), 0.85),

    # Money: symbol first, or trailing currency code
    (EntityType.MONEY, re.compile(
        rf"[$€£¥₹]\s?(?:{_NUM})(?:\s?(?:million|billion|thousand|[kKMB])\b)?"
    ), 0.95),
    (EntityType.MONEY, re.compile(
        rf"\b(?:{_NUM})\s?(?:USD|EUR|GBP|JPY|INR|CAD|AUD)\b"
    ), 0.9),

    # Quantities: number with unit, then any bare number
    (EntityType.QUANTITY, re.compile(
        rf"\b(?:{_NUM})\s?(?:items|units|pieces|kg|lbs|oz|g|ml|l|meters|feet|inches|cm|mm|km|miles)\b",
        re.IGNORECASE,
    ), 0.8),
    (EntityType.QUANTITY, re.compile(rf"(?<![\w.,$€£¥₹])(?:{_NUM})(?![\w]|[.,]\d)"), 0.5),
]


def scan_regex(text: str, types: Iterable[EntityType] | None = None) -> list[DetectedEntity]:
    """Run all regex patterns against text.  Returns raw, possibly overlapping, candidates."""
    wanted = set(types) if types is not None else None
    matches: list[DetectedEntity] = []
    for entity_type, pattern, score in _PATTERNS:
        if wanted is not None and entity_type not in wanted:
            continue
        for m in pattern.finditer(text):
            if m.end() <= m.start():
                continue
            matches.append(DetectedEntity(
                type=entity_type,
                original=m.group(),
                start=m.start(),
                end=m.end(),
                confidence=score,
                source="regex",
            ))
    return sorted(matches, key=lambda e: (e.start, e.end))


def scan_by_type(text: str) -> dict[EntityType, list[DetectedEntity]]:
    """Same candidates as ``scan_regex``, grouped per type."""
    grouped: dict[EntityType, list[DetectedEntity]] = {}
    for entity in scan_regex(text):
        grouped.setdefault(entity.type, []).append(entity)
    return grouped
